"""
Authentication endpoint client.

These calls happen before (or instead of) having a usable access token, so
they bypass the bearer/refresh machinery of ``AuthenticatedClient``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from bujo.core.exceptions import ApiError
from bujo.schemas.auth import (
    ForgotPasswordPayload,
    LoginCredentials,
    LoginResponse,
    RefreshResponse,
    RegistrationPayload,
)
from bujo.utils.http import join_url, network_error, raise_for_api_status

logger = logging.getLogger(__name__)


class TokenRefreshError(Exception):
    """Raised when the refresh endpoint does not hand back a new access token."""


class AuthApiClient:
    """Login, registration, refresh and password reset calls."""

    LOGIN_PATH = "auth/login/"
    REGISTER_PATH = "auth/register/"
    REFRESH_PATH = "auth/refresh/"

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        password_reset_path: str = "auth/password-reset/",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._password_reset_path = password_reset_path
        self._transport = transport

    @property
    def refresh_url(self) -> str:
        return join_url(self._base_url, self.REFRESH_PATH)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            headers={"Content-Type": "application/json"},
        )

    async def _post(self, path: str, payload: Dict[str, Any]) -> httpx.Response:
        try:
            async with self._client() as client:
                response = await client.post(join_url(self._base_url, path), json=payload)
        except httpx.TransportError as exc:
            raise network_error(exc) from exc
        return raise_for_api_status(response, session_errors=False)

    async def login(self, credentials: LoginCredentials) -> LoginResponse:
        """Exchange credentials for an access/refresh/user triple."""
        response = await self._post(self.LOGIN_PATH, credentials.to_payload())
        try:
            return LoginResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ApiError(
                "Incomplete login payload returned from the API.",
                status_code=response.status_code,
            ) from exc

    async def register(self, payload: RegistrationPayload) -> Dict[str, Any]:
        """Create an account. The caller still has to log in separately."""
        response = await self._post(self.REGISTER_PATH, payload.model_dump())
        try:
            return response.json()
        except ValueError:
            return {}

    async def request_password_reset(self, payload: ForgotPasswordPayload) -> None:
        await self._post(self._password_reset_path, payload.model_dump())
        logger.info("Password reset link requested")

    async def refresh(self, refresh_token: Optional[str]) -> str:
        """Exchange a refresh token for a new access token."""
        if not refresh_token:
            raise TokenRefreshError("No refresh token stored.")

        try:
            async with self._client() as client:
                response = await client.post(self.refresh_url, json={"refresh": refresh_token})
        except httpx.TransportError as exc:
            raise TokenRefreshError(f"Refresh request failed: {exc.__class__.__name__}") from exc

        if not response.is_success:
            raise TokenRefreshError(f"Refresh rejected with status {response.status_code}")

        try:
            return RefreshResponse.model_validate(response.json()).access
        except (ValueError, ValidationError) as exc:
            raise TokenRefreshError("Incomplete refresh payload returned from the API.") from exc


__all__ = ["AuthApiClient", "TokenRefreshError"]
