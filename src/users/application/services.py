"""
User Application Services
=========================

Application services orchestrate business logic and coordinate between
domain entities and repositories.

Following SOLID principles:
- Single Responsibility: Each service has one clear purpose
- Dependency Inversion: Depend on abstractions (repositories), not concrete implementations
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from src.config import settings
from src.users.domain import (
    User,
    UserAlreadyExistsException,
    UserNotFoundException,
    normalize_email,
)
from src.shared.infrastructure.logging import get_logger, log_latency

logger = get_logger(__name__)


# ========== Repository Interfaces (Dependency Inversion) ==========

class IUserRepository(ABC):
    """Interface for user data access. Only active (not soft-deleted) users are visible."""

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a new user."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get active user by ID."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get active user by email."""

    @abstractmethod
    async def list(self, page: int, per_page: int) -> Tuple[List[User], int]:
        """Return one page of active users and the total active count."""

    @abstractmethod
    async def update(self, user: User) -> User:
        """Persist changes to an existing user."""

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        """Soft-delete a user. Returns False if no active user matched."""


# ========== Service Interface ==========

@dataclass
class UserPage:
    """One page of users plus pagination metadata."""
    users: List[User] = field(default_factory=list)
    total: int = 0
    page: int = 1
    per_page: int = 10
    total_pages: int = 0


def total_pages_for(total: int, per_page: int) -> int:
    return math.ceil(total / per_page) if total > 0 else 0


class IUserService(ABC):
    """Interface for user business rules."""

    @abstractmethod
    async def create(self, name: str, email: str) -> User:
        """Create a user."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> User:
        """Get a user or raise UserNotFoundException."""

    @abstractmethod
    async def list(self, page: Optional[int] = None, per_page: Optional[int] = None) -> UserPage:
        """List users page by page."""

    @abstractmethod
    async def update(
        self,
        user_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None
    ) -> User:
        """Apply a partial update."""

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """Soft-delete a user."""


# ========== Application Services ==========

class UserService(IUserService):
    """
    Service for user lifecycle operations.

    Coordinates between domain logic and data access.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        default_page_size: Optional[int] = None,
        max_page_size: Optional[int] = None
    ):
        self._user_repo = user_repository
        self._default_page_size = default_page_size or settings.default_page_size
        self._max_page_size = max_page_size or settings.max_page_size

    async def create(self, name: str, email: str) -> User:
        """
        Create a new user.

        Raises:
            ValidationException: name or email is empty or malformed
            UserAlreadyExistsException: an active user already has the email
        """
        user = User.new(name=name, email=email)

        if await self._user_repo.get_by_email(user.email) is not None:
            raise UserAlreadyExistsException(user.email)

        created = await self._user_repo.create(user)
        logger.info("User created", extra={"user_id": str(created.id)})
        return created

    async def get_by_id(self, user_id: str) -> User:
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundException(user_id)
        return user

    async def list(self, page: Optional[int] = None, per_page: Optional[int] = None) -> UserPage:
        """
        List active users ordered by creation time.

        Args:
            page: 1-based page number, defaults to 1 when absent or < 1
            per_page: Page size, defaults when absent or < 1, capped at the max

        Returns:
            UserPage; a page past the end has no users but keeps the totals
        """
        page, per_page = self.normalize_pagination(page, per_page)

        with log_latency(logger, "list_users", page=page, per_page=per_page):
            users, total = await self._user_repo.list(page, per_page)

        return UserPage(
            users=list(users),
            total=total,
            page=page,
            per_page=per_page,
            total_pages=total_pages_for(total, per_page)
        )

    async def update(
        self,
        user_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None
    ) -> User:
        """
        Apply the supplied fields to a user and refresh updated_at.

        Raises:
            UserNotFoundException: no active user with this id
            ValidationException: a supplied field is empty or malformed
            UserAlreadyExistsException: the new email belongs to another active user
        """
        user = await self.get_by_id(user_id)

        if name is not None:
            user.rename(name)

        if email is not None:
            new_email = normalize_email(email)
            if new_email != user.email:
                owner = await self._user_repo.get_by_email(new_email)
                if owner is not None and owner.id != user.id:
                    raise UserAlreadyExistsException(new_email)
                user.change_email(new_email)

        user.touch()
        updated = await self._user_repo.update(user)
        logger.info("User updated", extra={"user_id": str(updated.id)})
        return updated

    async def delete(self, user_id: str) -> None:
        if not await self._user_repo.delete(user_id):
            raise UserNotFoundException(user_id)
        logger.info("User deleted", extra={"user_id": user_id})

    def normalize_pagination(
        self,
        page: Optional[int],
        per_page: Optional[int]
    ) -> Tuple[int, int]:
        if page is None or page < 1:
            page = 1
        if per_page is None or per_page < 1:
            per_page = self._default_page_size
        return page, min(per_page, self._max_page_size)
