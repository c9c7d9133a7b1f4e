"""
Configuration Module
====================

Application settings and configuration management using Pydantic.

Settings are read once from the environment (and an optional ``.env`` file)
at import time and treated as immutable afterwards.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from functools import lru_cache
from typing import List, Optional

from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for type coercion only; values are not otherwise validated.
    """

    # ========== Application ==========
    app_name: str = Field(default="user-service", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENV", "ENVIRONMENT"),
        description="Environment name"
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root logging level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    server_port: int = Field(default=8080, description="Server port")

    # ========== Database ==========
    db_host: str = Field(default="localhost", description="PostgreSQL host")
    db_port: int = Field(default=5432, description="PostgreSQL port")
    db_user: str = Field(default="postgres", description="PostgreSQL user")
    db_password: str = Field(default="postgres", description="PostgreSQL password")
    db_name: str = Field(default="users", description="PostgreSQL database name")
    db_ssl_mode: str = Field(default="disable", description="SSL mode passed to asyncpg")
    db_pool_size: int = Field(default=5, description="Database connection pool size")
    db_max_overflow: int = Field(default=10, description="Max overflow connections")
    database_url_override: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL"),
        description="Full async database URL, takes precedence over DB_* settings"
    )

    # ========== Pagination ==========
    default_page_size: int = Field(default=10, description="Users per page when not requested")
    max_page_size: int = Field(default=100, description="Upper bound for per_page")

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def database_url(self) -> str:
        """Async SQLAlchemy URL for the configured database."""
        if self.database_url_override:
            return self.database_url_override

        url = URL.create(
            drivername="postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
            query={"ssl": self.db_ssl_mode},
        )
        return url.render_as_string(hide_password=False)

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
