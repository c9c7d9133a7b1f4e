"""
User Infrastructure Layer
=========================

Infrastructure implementations for the users module:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
"""

from src.users.infrastructure.models import UserModel
from src.users.infrastructure.repositories import SQLAlchemyUserRepository

__all__ = [
    "UserModel",
    "SQLAlchemyUserRepository",
]
