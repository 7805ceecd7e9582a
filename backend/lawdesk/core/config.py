"""
Application configuration using pydantic-settings.

Loads settings from environment variables (and optional .env file) with sensible defaults.

Fields loaded (env var names in parentheses):
- app_env (APP_ENV)
- log_level (LOG_LEVEL)
- db_url (DB_URL or DATABASE_URL)
- jwt_secret (JWT_SECRET, SECRET_KEY)
- jwt_algorithm (JWT_ALGORITHM)
- jwt_expires_minutes (JWT_EXPIRES_MINUTES)
- upload_dir (UPLOAD_DIR)
- max_upload_bytes (MAX_FILE_SIZE)
- allowed_mime_types (ALLOWED_MIME_TYPES, comma-separated)
- rate_limit_window_seconds (RATE_LIMIT_WINDOW_SECONDS)
- auth_rate_limit_max (AUTH_RATE_LIMIT_MAX)

Usage:
    from lawdesk.core.config import get_settings
    settings = get_settings()
    print(settings.db_url)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_MIME_TYPES = [
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
]


class Settings(BaseSettings):
    # Environment / logging
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Database URL (accept DB_URL or DATABASE_URL)
    db_url: str = Field(
        default="sqlite:///./lawdesk.db",
        validation_alias=AliasChoices("DB_URL", "DATABASE_URL"),
    )

    # Token signing
    jwt_secret: str = Field(
        default="dev-secret",
        validation_alias=AliasChoices("JWT_SECRET", "SECRET_KEY"),
    )
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expires_minutes: int = Field(default=7 * 24 * 60, alias="JWT_EXPIRES_MINUTES", ge=1)

    # Document storage
    upload_dir: str = Field(default="./uploads", alias="UPLOAD_DIR")
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, alias="MAX_FILE_SIZE", ge=1)
    allowed_mime_types: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_MIME_TYPES), alias="ALLOWED_MIME_TYPES"
    )

    # Rate limiting for authentication endpoints
    rate_limit_window_seconds: int = Field(default=15 * 60, alias="RATE_LIMIT_WINDOW_SECONDS", ge=1)
    auth_rate_limit_max: int = Field(default=5, alias="AUTH_RATE_LIMIT_MAX", ge=1)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("allowed_mime_types", mode="before")
    @classmethod
    def _split_mime_types(cls, value):
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached Settings instance.
    """
    return Settings()  # type: ignore[call-arg]


__all__ = ["Settings", "get_settings", "DEFAULT_MIME_TYPES"]
