"""
Shared API Middleware
======================

Common middleware and exception handlers for the FastAPI application.

Every failure leaves the API in the same envelope:
``{"error": <code>, "message": <text>, "details": <optional text>}``.
"""

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from src.core import ApplicationException
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: str | None = None,
    headers: dict | None = None
) -> JSONResponse:
    content = {"error": error, "message": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Adds correlation ID to requests for tracing.

    Correlation IDs link every log line written while serving a request.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Get existing correlation ID or generate new one
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())

        # Store in request state for access in endpoints
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs all requests and responses.

    Provides audit trail and debugging information.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = getattr(request.state, "correlation_id", "unknown")
        start_time = time.perf_counter()

        logger.info(
            "Request started",
            extra={
                "correlation_id": correlation_id,
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None
            }
        )

        response = await call_next(request)

        response_time = time.perf_counter() - start_time
        logger.info(
            "Request completed",
            extra={
                "correlation_id": correlation_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "response_time_ms": int(response_time * 1000)
            }
        )

        return response


class RecoveryMiddleware(BaseHTTPMiddleware):
    """
    Turns any unhandled exception into a 500 ``internal_error`` response.

    Exception text is only exposed in the development environment.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            correlation_id = getattr(request.state, "correlation_id", "unknown")

            logger.exception(
                "Unhandled exception",
                extra={
                    "correlation_id": correlation_id,
                    "path": request.url.path,
                    "method": request.method,
                    "error_type": type(exc).__name__,
                }
            )

            settings = getattr(request.app.state, "settings", None)
            is_dev = getattr(settings, "environment", None) == "development"

            return error_response(
                500,
                "internal_error",
                "Internal server error",
                details=str(exc) if is_dev else None
            )


# ========== Exception Handlers ==========

async def application_exception_handler(request: Request, exc: ApplicationException) -> JSONResponse:
    """Render ApplicationException subclasses with their own status and code."""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        exc.message,
        extra={
            "correlation_id": getattr(request.state, "correlation_id", "unknown"),
            "path": request.url.path,
            "error_code": exc.error_code,
            "status_code": exc.status_code
        }
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            parts.append("malformed JSON body")
            continue
        # Drop the "body"/"query"/"path" location prefix
        loc = [str(item) for item in error.get("loc", ())[1:]]
        field_name = ".".join(loc)
        parts.append(f"{field_name}: {error.get('msg')}" if field_name else str(error.get("msg")))
    return "; ".join(parts)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body decoding and field validation failures are client errors (400)."""
    return error_response(
        400,
        "validation_error",
        "Invalid request body",
        details=_format_validation_errors(exc)
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing and body parsing errors (unknown path, wrong method, undecodable body) in the standard envelope."""
    codes = {400: "validation_error", 404: "not_found", 405: "method_not_allowed"}
    return error_response(
        exc.status_code,
        codes.get(exc.status_code, "http_error"),
        str(exc.detail),
        headers=getattr(exc, "headers", None)
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationException, application_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
