"""
Matchmaker — Application Configuration

Loads all configuration from environment variables (and an optional .env file)
using Pydantic Settings.  A cached ``get_settings()`` helper is provided so that
FastAPI dependency-injection (and any other call-site) always receives the same
validated instance without re-parsing the environment on every request.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the matchmaking service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------ #
    # Database – PostgreSQL (asyncpg) or SQLite (aiosqlite)
    # ------------------------------------------------------------------ #
    DATABASE_URL: str
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800
    SQLITE_BUSY_TIMEOUT_SECONDS: float = 30.0

    # ------------------------------------------------------------------ #
    # Runtime environment
    # ------------------------------------------------------------------ #
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    # ------------------------------------------------------------------ #
    # CORS
    # ------------------------------------------------------------------ #
    ALLOWED_ORIGINS: str = "*"

    # ------------------------------------------------------------------ #
    # Identity header set by the upstream auth gateway
    # ------------------------------------------------------------------ #
    USER_ID_HEADER: str = "X-User-Id"

    # ------------------------------------------------------------------ #
    # Pagination (discovery feed + match list)
    # ------------------------------------------------------------------ #
    PAGINATION_DEFAULT_PAGE: int = 1
    PAGINATION_DEFAULT_LIMIT: int = 20
    PAGINATION_MAX_LIMIT: int = 100

    # ------------------------------------------------------------------ #
    # Match side effects
    # ------------------------------------------------------------------ #
    MATCH_NOTIFICATION_CONTENT: str = "You have a new match!"

    # ------------------------------------------------------------------ #
    # Derived helpers
    # ------------------------------------------------------------------ #
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list split on commas."""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",")]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @field_validator(
        "PAGINATION_DEFAULT_PAGE", "PAGINATION_DEFAULT_LIMIT", "PAGINATION_MAX_LIMIT"
    )
    @classmethod
    def _pagination_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Pagination values must be >= 1, got {v}")
        return v

    @model_validator(mode="after")
    def _default_limit_within_max(self) -> "Settings":
        if self.PAGINATION_DEFAULT_LIMIT > self.PAGINATION_MAX_LIMIT:
            raise ValueError(
                "PAGINATION_DEFAULT_LIMIT must not exceed PAGINATION_MAX_LIMIT"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached, validated ``Settings`` instance.

    Using ``@lru_cache`` guarantees the .env file is read and validated
    exactly once per process lifetime.  Import this function anywhere you
    need access to configuration::

        from matchmaker.config import get_settings
        settings = get_settings()
    """
    return Settings()  # type: ignore[call-arg]
