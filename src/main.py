"""
User Service - Main Application
===============================

Template CRUD REST API for a single "user" resource.

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Entities and domain errors
- Infrastructure: Database, ORM models, repositories
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

# Configuration
from src.config import settings

# Infrastructure
from src.infrastructure.database import (
    init_database,
    close_database,
    create_tables,
    get_session_context,
)

# Module Routers
from src.users.interfaces import users_router

# Logging and middleware
from src.shared.infrastructure.logging import setup_logging, get_logger
from src.shared.api.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    RecoveryMiddleware,
    register_exception_handlers,
)

logger = get_logger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Initialize database
    3. Create database tables

    SHUTDOWN:
    1. Close database connections
    """
    # === STARTUP ===
    setup_logging(settings.log_level, settings.environment)
    logger.info("Starting User Service", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    logger.info("Initializing database")
    init_database()

    # Create tables (for development - use Alembic in production)
    # Note: If database is not available, the server will start but
    # database-dependent endpoints will fail
    logger.info("Creating database tables")
    try:
        await create_tables()
    except Exception as e:
        logger.warning(f"Database not available - running in degraded mode: {e}")

    logger.info("User Service started successfully")

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down User Service")
    await close_database()
    logger.info("User Service shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="User Service API",
    description="""
    ## User CRUD API

    | Method & Path | Success | Failure |
    |---|---|---|
    | `GET /api/v1/health` | 200 | - |
    | `POST /api/v1/users` | 201 | 400, 409 |
    | `GET /api/v1/users?page&per_page` | 200 | - |
    | `GET /api/v1/users/{id}` | 200 | 404 |
    | `PUT /api/v1/users/{id}` | 200 | 400, 404, 409 |
    | `DELETE /api/v1/users/{id}` | 200 | 404 |

    Errors use the envelope `{"error", "message", "details"?}`.
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)
app.state.settings = settings

# === Middleware (last added runs first) ===
app.add_middleware(RecoveryMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(CorrelationIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# === Routes ===
api_router = APIRouter(prefix=API_PREFIX)


@api_router.get("/health", tags=["Health"], responses={
    200: {
        "description": "Service health",
        "content": {
            "application/json": {
                "example": {
                    "status": "healthy",
                    "version": "1.0.0",
                    "environment": "development",
                    "checks": {"database": "connected"}
                }
            }
        }
    }
})
async def health_check():
    """
    Health check endpoint for load balancers and orchestrators.

    Always answers 200; a failing database turns the status to "degraded".
    """
    checks = {"database": "connected"}
    try:
        async with get_session_context() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"Health check database probe failed: {e}")
        checks["database"] = "disconnected"

    return {
        "status": "healthy" if checks["database"] == "connected" else "degraded",
        "version": settings.app_version,
        "environment": settings.environment,
        "checks": checks
    }


api_router.include_router(users_router)
app.include_router(api_router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "service": "User Service",
        "version": settings.app_version,
        "docs": "/docs",
        "health": f"{API_PREFIX}/health",
        "endpoints": [
            f"POST {API_PREFIX}/users - Create user",
            f"GET {API_PREFIX}/users - List users",
            f"GET {API_PREFIX}/users/{{id}} - Get user",
            f"PUT {API_PREFIX}/users/{{id}} - Update user",
            f"DELETE {API_PREFIX}/users/{{id}} - Delete user"
        ]
    }


# === Development Entry Point ===

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.server_port,
        reload=settings.environment == "development",
        log_level="info"
    )
