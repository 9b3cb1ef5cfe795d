"""
Session facade: the only place user-initiated identity actions mutate the
stored session.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from bujo.clients.auth_api import AuthApiClient
from bujo.clients.http import AuthenticatedClient
from bujo.core.exceptions import ApiError, BujoClientError, UnauthenticatedError
from bujo.models.session import CredentialRecord, UserProfile
from bujo.schemas.auth import ForgotPasswordPayload, LoginCredentials, RegistrationPayload
from bujo.services.routing import HOME_PATH, LOGIN_PATH, Navigator
from bujo.services.token_store import TokenStore
from bujo.services.token_validator import TokenValidator
from bujo.utils.forms import parse_form

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[UserProfile]], None]


class SessionService:
    """Login, logout, profile edits, registration and password reset."""

    def __init__(
        self,
        token_store: TokenStore,
        auth_api: AuthApiClient,
        http_client: AuthenticatedClient,
        *,
        navigator: Optional[Navigator] = None,
        validator: Optional[TokenValidator] = None,
    ) -> None:
        self._store = token_store
        self._auth_api = auth_api
        self._http = http_client
        self._navigator = navigator
        self._validator = validator or TokenValidator()
        self._listeners: List[SessionListener] = []
        http_client.add_session_expired_listener(lambda: self._notify(None))

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register ``listener`` for user changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def current_user(self) -> Optional[UserProfile]:
        return self._store.read_user()

    def resolve_user_id(self) -> Optional[str]:
        """Cached profile id, else the ``user_id`` claim of the stored access token."""
        record = self._store.read()
        if record is None:
            return None
        if record.user.id not in (None, ""):
            return str(record.user.id)
        return self._validator.user_id(record.access)

    async def login(
        self, credentials: Union[LoginCredentials, Mapping[str, Any]]
    ) -> CredentialRecord:
        """Authenticate and persist the returned token triple.

        A failed login leaves any prior session untouched.
        """
        form = parse_form(LoginCredentials, credentials)
        try:
            result = await self._auth_api.login(form)
        except BujoClientError:
            logger.warning("Login failed")
            raise

        record = CredentialRecord(access=result.access, refresh=result.refresh, user=result.user)
        self._store.write(record)
        self._http.set_auth_header(record.access)
        self._notify(record.user)
        logger.info("User %s logged in", record.user.id)
        self._navigate(HOME_PATH)
        return record

    async def logout(self) -> None:
        """Invalidate the refresh token if possible, then always drop the local session."""
        refresh = self._store.read_refresh_token()
        try:
            if refresh:
                await self._http.post("auth/logout/", json={"refresh": refresh})
        except BujoClientError as exc:
            logger.warning("Backend logout failed; clearing local session anyway: %s", exc.message)
        finally:
            self._store.clear()
            self._http.clear_auth_header()
            self._notify(None)
            self._navigate(LOGIN_PATH)

    async def edit_profile(
        self, fields: Mapping[str, Any], user_id: Union[int, str]
    ) -> UserProfile:
        """Send a partial profile update and cache the returned profile."""
        if self._store.read() is None:
            raise UnauthenticatedError()

        response = await self._http.patch(f"user/{user_id}/", json=dict(fields))
        try:
            user = UserProfile.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ApiError(
                "Incomplete profile payload returned from the API.",
                status_code=response.status_code,
            ) from exc

        # Re-read: the request may have refreshed the access token.
        current = self._store.read()
        if current is None:
            raise UnauthenticatedError()
        self._store.write(current.with_user(user))
        self._notify(user)
        return user

    async def register(
        self, fields: Union[RegistrationPayload, Mapping[str, Any]]
    ) -> Dict[str, Any]:
        """Create an account. Logging in afterwards is a separate, explicit step."""
        payload = parse_form(RegistrationPayload, fields)
        return await self._auth_api.register(payload)

    async def forgot_password(
        self, fields: Union[ForgotPasswordPayload, Mapping[str, Any]]
    ) -> None:
        payload = parse_form(ForgotPasswordPayload, fields, message="Email is required.")
        await self._auth_api.request_password_reset(payload)

    def _notify(self, user: Optional[UserProfile]) -> None:
        for listener in list(self._listeners):
            listener(user)

    def _navigate(self, path: str) -> None:
        if self._navigator is not None:
            self._navigator.navigate(path)


__all__ = ["SessionListener", "SessionService"]
