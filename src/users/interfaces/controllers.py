"""
User Controllers (API Routes)
=============================

FastAPI routes for the user CRUD endpoints.

Controllers are thin - they decode and validate the request, delegate to the
application service, and wrap the outcome in the response envelope.
Failures are raised as ApplicationException subclasses and rendered by the
shared exception handlers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database import get_session
from src.users.application import (
    IUserService,
    UserService,
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
    UserDataResponse,
    UserMessageResponse,
    UserListResponse,
    MessageResponse,
    ErrorResponse,
)
from src.users.infrastructure import SQLAlchemyUserRepository

router = APIRouter(prefix="/users", tags=["Users"])


# ========== Example payloads for Swagger ==========

USER_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "name": "John Doe",
    "email": "john@example.com",
    "created_at": "2024-01-15T10:00:00Z",
    "updated_at": "2024-01-15T10:00:00Z"
}

NOT_FOUND_EXAMPLE = {"error": "user_not_found", "message": "User not found"}

CONFLICT_EXAMPLE = {"error": "user_exists", "message": "User with this email already exists"}

VALIDATION_EXAMPLE = {
    "error": "validation_error",
    "message": "Invalid request body",
    "details": "email: value is not a valid email address"
}

CREATED = "User created successfully"
UPDATED = "User updated successfully"
DELETED = "User deleted successfully"


# ========== Dependencies ==========

async def get_user_service(
    session: AsyncSession = Depends(get_session)
) -> IUserService:
    """Get user service instance."""
    return UserService(SQLAlchemyUserRepository(session))


def _parse_positive_int(value: Optional[str]) -> Optional[int]:
    """Lenient query parsing: anything that is not a positive integer means 'use the default'."""
    if value is None:
        return None
    try:
        number = int(value.strip())
    except ValueError:
        return None
    return number if number > 0 else None


# ========== Route Handlers ==========

@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserMessageResponse,
    summary="Create a user",
    responses={
        201: {"content": {"application/json": {"example": {"message": CREATED, "data": USER_EXAMPLE}}}},
        400: {"model": ErrorResponse, "content": {"application/json": {"example": VALIDATION_EXAMPLE}}},
        409: {"model": ErrorResponse, "content": {"application/json": {"example": CONFLICT_EXAMPLE}}},
    }
)
async def create_user(
    request: CreateUserRequest,
    user_service: IUserService = Depends(get_user_service)
):
    user = await user_service.create(request.name, request.email)
    return UserMessageResponse(message=CREATED, data=UserResponse.model_validate(user))


@router.get(
    "",
    response_model=UserListResponse,
    summary="List users",
    description="""
    Paginated list of active users, oldest first.

    **Query Parameters:**
    - `page`: 1-based page number (default: 1)
    - `per_page`: Results per page (default: 10, max: 100)

    Invalid values fall back to the defaults. A page past the end returns an
    empty `data` list.
    """
)
async def list_users(
    page: Optional[str] = Query(None, description="Page number"),
    per_page: Optional[str] = Query(None, description="Results per page"),
    user_service: IUserService = Depends(get_user_service)
):
    result = await user_service.list(_parse_positive_int(page), _parse_positive_int(per_page))
    return UserListResponse(
        data=[UserResponse.model_validate(user) for user in result.users],
        total=result.total,
        page=result.page,
        per_page=result.per_page,
        total_pages=result.total_pages
    )


@router.get(
    "/{user_id}",
    response_model=UserDataResponse,
    summary="Get a user",
    responses={
        200: {"content": {"application/json": {"example": {"data": USER_EXAMPLE}}}},
        404: {"model": ErrorResponse, "content": {"application/json": {"example": NOT_FOUND_EXAMPLE}}},
    }
)
async def get_user(
    user_id: str,
    user_service: IUserService = Depends(get_user_service)
):
    user = await user_service.get_by_id(user_id)
    return UserDataResponse(data=UserResponse.model_validate(user))


@router.put(
    "/{user_id}",
    response_model=UserMessageResponse,
    summary="Update a user",
    description="Partial update: only the supplied fields are changed.",
    responses={
        400: {"model": ErrorResponse, "content": {"application/json": {"example": VALIDATION_EXAMPLE}}},
        404: {"model": ErrorResponse, "content": {"application/json": {"example": NOT_FOUND_EXAMPLE}}},
        409: {"model": ErrorResponse, "content": {"application/json": {"example": CONFLICT_EXAMPLE}}},
    }
)
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    user_service: IUserService = Depends(get_user_service)
):
    user = await user_service.update(user_id, name=request.name, email=request.email)
    return UserMessageResponse(message=UPDATED, data=UserResponse.model_validate(user))


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete a user",
    description="Soft delete: the user disappears from the API but the row is kept.",
    responses={
        404: {"model": ErrorResponse, "content": {"application/json": {"example": NOT_FOUND_EXAMPLE}}},
    }
)
async def delete_user(
    user_id: str,
    user_service: IUserService = Depends(get_user_service)
):
    await user_service.delete(user_id)
    return MessageResponse(message=DELETED)


# Export router for inclusion in main app
users_router = router
