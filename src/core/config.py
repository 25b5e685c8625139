from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment."""

    app_name: str = Field(default="Agency Project Tracker", validation_alias="APP_NAME")
    environment: str = Field(default="local", validation_alias="APP_ENV")
    version: str = Field(default="0.1.0")
    jwt_secret: str = Field(default="replace-with-secure-secret", validation_alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256")
    access_token_ttl_seconds: int = Field(default=3600)
    allowed_roles: tuple[str, ...] = Field(
        default=("originator", "reviewer", "assignee"), validation_alias="ALLOWED_ROLES"
    )
    database_url: str = Field(
        default="sqlite+aiosqlite:///./tracker.db",
        validation_alias="DATABASE_URL",
    )
    # "sql" persists through DATABASE_URL, "memory" keeps state for the process lifetime
    state_backend: str = Field(default="sql", validation_alias="STATE_BACKEND")

    @property
    def async_database_url(self) -> str:
        """Convert database URL to async format (postgresql+asyncpg://)."""
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("sqlite://"):
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url

    # Project tracking
    reference_prefix: str = Field(default="CMT", validation_alias="REFERENCE_PREFIX")
    renewal_warning_days: int = Field(default=15, validation_alias="RENEWAL_WARNING_DAYS")
    auth_delay_seconds: float = Field(default=0.0, validation_alias="AUTH_DELAY_SECONDS")
    restrict_delivery_to_assigned_developer: bool = Field(
        default=False,
        validation_alias="RESTRICT_DELIVERY_TO_ASSIGNED_DEVELOPER",
    )

    # Remote posts API
    posts_api_base_url: str = Field(
        default="https://crud-backend-nikita-kumaris-projects.vercel.app",
        validation_alias="POSTS_API_BASE_URL",
    )
    posts_timeout_seconds: int = Field(default=30, validation_alias="POSTS_TIMEOUT_SECONDS")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="allow")


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()
