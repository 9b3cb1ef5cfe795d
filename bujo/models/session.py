"""
Domain models for the persisted client session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class UserProfile(BaseModel):
    """Cached copy of the backend-owned user profile."""

    model_config = ConfigDict(extra="allow")

    id: Optional[Union[int, str]] = None
    username: str
    email: Optional[str] = None
    name: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    date_of_birth: Optional[str] = None
    theme: Optional[str] = None
    is_active: Optional[bool] = None
    created: Optional[str] = None
    updated: Optional[str] = None


class CredentialRecord(BaseModel):
    """The single persisted record that marks a user as logged in."""

    access: str = Field(..., description="Short-lived bearer access token.")
    refresh: str = Field(..., description="Opaque token exchanged for new access tokens.")
    user: UserProfile

    def with_access(self, access: str) -> "CredentialRecord":
        return self.model_copy(update={"access": access})

    def with_user(self, user: UserProfile) -> "CredentialRecord":
        return self.model_copy(update={"user": user})


@dataclass(slots=True, frozen=True)
class DecodedPayload:
    """Claims read from an access token payload. The signature is not verified."""

    claims: Dict[str, Any] = field(default_factory=dict)

    @property
    def expires_at(self) -> Optional[float]:
        exp = self.claims.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            return None
        return float(exp)

    @property
    def user_id(self) -> Optional[str]:
        subject = self.claims.get("user_id", self.claims.get("sub"))
        if subject is None or subject == "":
            return None
        return str(subject)


@dataclass(slots=True, frozen=True)
class InvalidToken:
    """Outcome of a token that could not be decoded."""

    reason: str


DecodeResult = Union[DecodedPayload, InvalidToken]


__all__ = [
    "CredentialRecord",
    "DecodeResult",
    "DecodedPayload",
    "InvalidToken",
    "UserProfile",
]
