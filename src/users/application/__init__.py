"""
User Application Layer
======================

Application layer for the users module.

Contains:
- Services: Orchestrate business logic and coordinate with repositories
- DTOs: Data transfer objects for API serialization

This layer depends on the domain layer and repository interfaces,
but not on concrete infrastructure implementations.
"""

from src.users.application.dto import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
    UserDataResponse,
    UserMessageResponse,
    UserListResponse,
    MessageResponse,
    ErrorResponse,
)
from src.users.application.services import (
    IUserRepository,
    IUserService,
    UserService,
    UserPage,
    total_pages_for,
)

__all__ = [
    # DTOs
    "CreateUserRequest",
    "UpdateUserRequest",
    "UserResponse",
    "UserDataResponse",
    "UserMessageResponse",
    "UserListResponse",
    "MessageResponse",
    "ErrorResponse",
    # Services
    "IUserService",
    "UserService",
    "UserPage",
    "total_pages_for",
    # Repository Interfaces
    "IUserRepository",
]
