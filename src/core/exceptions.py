"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries. Each one knows the HTTP status
and machine-readable error code it maps to, so the API layer can render the
error envelope without inspecting exception types one by one.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.details = details
        if error_code is not None:
            self.error_code = error_code
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to the API error envelope."""
        body = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""

    status_code = 422
    error_code = "domain_error"


class RepositoryException(ApplicationException):
    """Base exception for repository/data access errors."""


class ValidationException(ApplicationException):
    """Exception for validation errors."""

    status_code = 400
    error_code = "validation_error"


class ConflictException(DomainException):
    """Exception when a write collides with existing state."""

    status_code = 409
    error_code = "conflict"


class ResourceNotFoundException(ApplicationException):
    """Exception when a requested resource is not found."""

    status_code = 404

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type}"
        if resource_id:
            message += f" with id '{resource_id}'"
        message += " not found"
        super().__init__(
            message,
            details,
            error_code=f"{resource_type.lower().replace(' ', '_')}_not_found"
        )
