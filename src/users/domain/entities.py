"""
User Domain Entities
====================

Pure Python domain entity for the user resource.

Following Domain-Driven Design principles, the entity contains the field
rules and lifecycle transitions and is free of infrastructure concerns.
"""

from dataclasses import dataclass
from datetime import datetime, timezone, timedelta
from typing import Optional
from uuid import UUID, uuid4

from email_validator import EmailNotValidError, validate_email

from src.core import ValidationException

NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_name(name: Optional[str]) -> str:
    """Strip a name and reject empty or oversized values."""
    value = (name or "").strip()
    if not value:
        raise ValidationException("Invalid user data", details="name is required")
    if len(value) > NAME_MAX_LENGTH:
        raise ValidationException(
            "Invalid user data",
            details=f"name must be at most {NAME_MAX_LENGTH} characters"
        )
    return value


def normalize_email(email: Optional[str]) -> str:
    """Check email syntax (no DNS lookup) and return its normalized form."""
    value = (email or "").strip()
    if not value:
        raise ValidationException("Invalid user data", details="email is required")
    if len(value) > EMAIL_MAX_LENGTH:
        raise ValidationException(
            "Invalid user data",
            details=f"email must be at most {EMAIL_MAX_LENGTH} characters"
        )
    try:
        result = validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationException("Invalid user data", details=f"email: {e}") from e
    return result.normalized


@dataclass
class User:
    """
    User entity.

    ``deleted_at`` set means the user is soft-deleted: the row is kept in
    storage but is never returned by reads.
    """

    id: UUID
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate user on initialization."""
        self.name = normalize_name(self.name)
        self.email = normalize_email(self.email)

        if self.updated_at < self.created_at:
            raise ValueError("updated_at cannot be before created_at")

    @classmethod
    def new(cls, name: str, email: str) -> "User":
        """Create a fresh user with a server-generated id."""
        now = _utc_now()
        return cls(id=uuid4(), name=name, email=email, created_at=now, updated_at=now)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def rename(self, name: str) -> None:
        self.name = normalize_name(name)

    def change_email(self, email: str) -> bool:
        """Set a new email. Returns True if the value actually changed."""
        normalized = normalize_email(email)
        changed = normalized != self.email
        self.email = normalized
        return changed

    def touch(self, timestamp: Optional[datetime] = None) -> None:
        """Refresh updated_at, always moving it forward."""
        now = timestamp or _utc_now()
        if now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now

    def mark_deleted(self, timestamp: Optional[datetime] = None) -> None:
        """Soft-delete the user."""
        if self.deleted_at is not None:
            return  # Already deleted
        self.deleted_at = timestamp or _utc_now()
