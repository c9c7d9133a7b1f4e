"""
Users Module
============

Bounded context for the user resource.

Responsibilities:
- Create, read, update and soft-delete users
- Enforce email uniqueness among active users
- Paginated listing ordered by creation time

Layers:
- domain: User entity and user errors
- application: UserService, repository port, DTOs
- infrastructure: SQLAlchemy model and repository
- interfaces: FastAPI routes under /users
"""

__version__ = "1.0.0"
