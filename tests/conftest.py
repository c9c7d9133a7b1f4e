"""Pytest configuration and fixtures."""

import os

# Settings are read at import time, so the environment must be set first.
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test-users.db")

from typing import List, Optional, Tuple
from uuid import UUID

import httpx
import pytest

from src.infrastructure.database import (
    close_database,
    create_tables,
    get_session_context,
    init_database,
)
from src.main import app
from src.users.application import IUserRepository
from src.users.domain import User, UserAlreadyExistsException


class InMemoryUserRepository(IUserRepository):
    """IUserRepository backed by a dict, soft-delete aware."""

    def __init__(self):
        self.rows: dict[UUID, User] = {}

    def _active(self) -> List[User]:
        return [u for u in self.rows.values() if not u.is_deleted]

    async def create(self, user: User) -> User:
        if any(u.email == user.email for u in self._active()):
            raise UserAlreadyExistsException(user.email)
        self.rows[user.id] = user
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        try:
            user = self.rows.get(UUID(str(user_id)))
        except ValueError:
            return None
        return user if user and not user.is_deleted else None

    async def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._active() if u.email == email), None)

    async def list(self, page: int, per_page: int) -> Tuple[List[User], int]:
        users = sorted(self._active(), key=lambda u: (u.created_at, str(u.id)))
        start = (page - 1) * per_page
        return users[start:start + per_page], len(users)

    async def update(self, user: User) -> User:
        self.rows[user.id] = user
        return user

    async def delete(self, user_id: str) -> bool:
        user = await self.get_by_id(user_id)
        if user is None:
            return False
        user.mark_deleted()
        return True


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
async def database(tmp_path):
    """Fresh SQLite database wired into the application's engine."""
    init_database(f"sqlite+aiosqlite:///{tmp_path / 'users.db'}")
    await create_tables()
    yield
    await close_database()


@pytest.fixture
async def session(database):
    async with get_session_context() as session:
        yield session


@pytest.fixture
async def client(database):
    """HTTP client talking to the ASGI app in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def api_url() -> str:
    return "/api/v1"
