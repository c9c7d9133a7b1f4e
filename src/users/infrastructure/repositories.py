"""
User Infrastructure Repositories
================================

Concrete implementation of the user repository interface using SQLAlchemy.

This layer contains the data access logic - how we store and retrieve
entities from the database. Every read filters out soft-deleted rows.
"""

from typing import List, Optional, Tuple
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core import RepositoryException
from src.users.application import IUserRepository
from src.users.domain import User, UserAlreadyExistsException
from src.users.infrastructure.models import UserModel


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_entity(model: UserModel) -> User:
    return User(
        id=model.id,
        name=model.name,
        email=model.email,
        created_at=_as_utc(model.created_at),
        updated_at=_as_utc(model.updated_at),
        deleted_at=_as_utc(model.deleted_at)
    )


class SQLAlchemyUserRepository(IUserRepository):
    """
    SQLAlchemy implementation of user repository.

    Handles persistence of User entities using async SQLAlchemy.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _get_model(self, user_id: str) -> Optional[UserModel]:
        try:
            user_uuid = UUID(user_id)
        except ValueError:
            return None

        stmt = select(UserModel).where(
            UserModel.id == user_uuid,
            UserModel.deleted_at.is_(None)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _flush(self, email: str) -> None:
        try:
            await self._session.flush()
        except IntegrityError as e:
            # Partial unique index on active emails
            raise UserAlreadyExistsException(email) from e

    async def create(self, user: User) -> User:
        """Create new user."""
        model = UserModel(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
            deleted_at=user.deleted_at
        )

        self._session.add(model)
        await self._flush(user.email)

        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get active user by ID."""
        model = await self._get_model(user_id)
        return _to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get active user by email."""
        stmt = select(UserModel).where(
            UserModel.email == email,
            UserModel.deleted_at.is_(None)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def list(self, page: int, per_page: int) -> Tuple[List[User], int]:
        """List active users, oldest first."""
        count_stmt = (
            select(func.count())
            .select_from(UserModel)
            .where(UserModel.deleted_at.is_(None))
        )
        total = (await self._session.execute(count_stmt)).scalar_one()

        offset = (page - 1) * per_page
        if offset >= total:
            # Past the last page; also keeps huge offsets out of the SQL
            return [], total

        stmt = (
            select(UserModel)
            .where(UserModel.deleted_at.is_(None))
            .order_by(UserModel.created_at.asc(), UserModel.id.asc())
            .offset(offset)
            .limit(per_page)
        )
        result = await self._session.execute(stmt)
        return [_to_entity(model) for model in result.scalars().all()], total

    async def update(self, user: User) -> User:
        """Update existing user."""
        model = await self._get_model(str(user.id))
        if not model:
            raise RepositoryException(f"User {user.id} not found")

        model.name = user.name
        model.email = user.email
        model.updated_at = user.updated_at

        await self._flush(user.email)

        return user

    async def delete(self, user_id: str) -> bool:
        """Soft-delete user by setting deleted_at."""
        model = await self._get_model(user_id)
        if not model:
            return False

        model.deleted_at = datetime.now(timezone.utc)
        await self._session.flush()

        return True
