"""
Client configuration models and helpers.

Centralizes settings management so the session layer, the HTTP client and the
maintenance scripts share a consistent configuration surface.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bujo.utils.http import normalize_base_url


class AppSettings(BaseSettings):
    """Root settings object for the journaling client."""

    environment: str = Field("development", description="Deployment label.")
    log_level: str = Field("INFO")

    # Backend API
    base_url: str = Field(
        ...,
        description="Origin of the journaling REST API, e.g. http://localhost:8000/api/.",
    )
    http_timeout: float = Field(10.0, gt=0)
    password_reset_path: str = Field(
        "auth/password-reset/",
        description="Endpoint that sends a password reset link.",
    )

    # Session persistence
    session_backend: Literal["sqlite", "memory"] = Field("sqlite")
    session_db_path: str = Field("./data/session.db")
    session_storage_key: str = Field("auth")
    session_encryption_secret: Optional[str] = Field(
        None,
        description=(
            "Secret used to derive the symmetric key for encrypting the stored session."
        ),
    )

    model_config = SettingsConfigDict(
        env_prefix="BUJO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("base_url")
    @classmethod
    def _normalize_base_url(cls, value: str) -> str:
        """Guarantee exactly one trailing slash before endpoint paths are appended."""
        if not value or not value.strip():
            raise ValueError("base_url must not be empty")
        return normalize_base_url(value)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = ["AppSettings", "get_settings"]
