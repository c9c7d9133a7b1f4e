"""
User Domain Layer
=================

Domain layer for the users module.

Contains:
- Entities: Core business objects with identity (User)
- Exceptions: User-specific errors (not found, already exists)

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from src.users.domain.entities import User, normalize_email, normalize_name
from src.users.domain.exceptions import (
    UserNotFoundException,
    UserAlreadyExistsException,
)

__all__ = [
    # Entities
    "User",
    "normalize_email",
    "normalize_name",
    # Exceptions
    "UserNotFoundException",
    "UserAlreadyExistsException",
]
