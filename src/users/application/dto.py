"""
User Application DTOs
=====================

Data Transfer Objects for the users API layer.

These Pydantic models handle serialization/deserialization and validation
for API requests and responses. Following YAGNI - only what's needed.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID


# ========== Request DTOs ==========

class CreateUserRequest(BaseModel):
    """Request model for creating a user."""
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="Unique email address")


class UpdateUserRequest(BaseModel):
    """Request model for a partial user update. Omitted fields are left as is."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None


# ========== Response DTOs ==========

class UserResponse(BaseModel):
    """Public representation of a user."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="User UUID")
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class UserDataResponse(BaseModel):
    """Envelope for a single user."""
    data: UserResponse


class UserMessageResponse(BaseModel):
    """Envelope for a write that returns the affected user."""
    message: str
    data: UserResponse


class UserListResponse(BaseModel):
    """Envelope for a page of users."""
    data: List[UserResponse] = Field(default_factory=list)
    total: int = Field(..., description="Number of active users")
    page: int
    per_page: int
    total_pages: int


class MessageResponse(BaseModel):
    """Envelope carrying only a message."""
    message: str


class ErrorResponse(BaseModel):
    """Error envelope returned for every failure."""
    error: str = Field(..., description="Machine readable error code")
    message: str = Field(..., description="Human readable description")
    details: Optional[str] = None
