"""Schemas exchanged with the authentication endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from bujo.models.session import UserProfile


class LoginCredentials(BaseModel):
    """Credentials posted to ``auth/login/``; either username or email identifies the user."""

    username: Optional[str] = Field(None, description="Account username.")
    email: Optional[str] = Field(None, description="Account email, accepted instead of username.")
    password: str = Field("", description="Plain password; never persisted client-side.")

    @model_validator(mode="after")
    def _require_identity(self) -> "LoginCredentials":
        if not (self.username or "").strip() and not (self.email or "").strip():
            raise ValueError("Username is required")
        if not self.password:
            raise ValueError("Password is required")
        return self

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)


class RegistrationPayload(BaseModel):
    """Body for ``auth/register/``."""

    model_config = ConfigDict(extra="allow")

    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class ForgotPasswordPayload(BaseModel):
    """Body for the password reset request."""

    email: str = Field(..., min_length=3)


class LoginResponse(BaseModel):
    """Token triple returned by a successful login."""

    access: str
    refresh: str
    user: UserProfile


class RefreshResponse(BaseModel):
    """Fresh access token returned by ``auth/refresh/``."""

    model_config = ConfigDict(extra="ignore")

    access: str = Field(..., min_length=1)


__all__ = [
    "ForgotPasswordPayload",
    "LoginCredentials",
    "LoginResponse",
    "RefreshResponse",
    "RegistrationPayload",
]
