"""
User Interfaces Layer
=====================

Interface adapters (controllers) for the users module.

Contains:
- Controllers: FastAPI route handlers

This is the outermost layer - handles HTTP requests/responses and
delegates to application services.
"""

from src.users.interfaces.controllers import users_router, get_user_service

__all__ = ["users_router", "get_user_service"]
