"""
User Domain Exceptions
======================
"""

from typing import Optional

from src.core import ConflictException, ResourceNotFoundException


class UserNotFoundException(ResourceNotFoundException):
    """Raised when no active user matches the requested id."""

    def __init__(self, user_id: Optional[str] = None):
        super().__init__("User")
        self.resource_id = user_id


class UserAlreadyExistsException(ConflictException):
    """Raised when an active user already owns the email."""

    def __init__(self, email: Optional[str] = None):
        super().__init__(
            "User with this email already exists",
            error_code="user_exists"
        )
        self.email = email
