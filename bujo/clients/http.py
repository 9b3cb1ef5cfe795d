"""
Authenticated HTTP client shared by every feature resource.

Each request carries the access token read fresh from the ``TokenStore``.
A ``401`` triggers at most one refresh-and-retry cycle:

    SENDING -> DONE
            -> REFRESHING -> RETRYING -> DONE | FAILED
                          -> SESSION_CLEARED, FAILED

Concurrent ``401`` responses share a single refresh: the refresh runs under a
lock, and a request whose token was already superseded retries with the new
token instead of refreshing again.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Callable, List, Optional

import httpx

from bujo.clients.auth_api import AuthApiClient, TokenRefreshError
from bujo.core.exceptions import UnauthorizedError
from bujo.utils.http import join_url, network_error, raise_for_api_status

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from bujo.services.token_store import TokenStore

logger = logging.getLogger(__name__)

SessionExpiredListener = Callable[[], None]


class AuthenticatedClient:
    """Attach bearer tokens and heal exactly one expired-token situation per request."""

    def __init__(
        self,
        base_url: str,
        token_store: "TokenStore",
        auth_api: AuthApiClient,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        self._store = token_store
        self._auth_api = auth_api
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._refresh_lock = asyncio.Lock()
        self._expired_listeners: List[SessionExpiredListener] = []
        self.refresh_count = 0

    async def __aenter__(self) -> "AuthenticatedClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def default_headers(self) -> httpx.Headers:
        return self._http.headers

    def set_auth_header(self, token: Optional[str]) -> None:
        """Set (or with ``None`` remove) the client-wide ``Authorization`` default."""
        if token:
            self._http.headers["Authorization"] = f"Bearer {token}"
        else:
            self.clear_auth_header()

    def clear_auth_header(self) -> None:
        self._http.headers.pop("Authorization", None)

    def add_session_expired_listener(self, listener: SessionExpiredListener) -> None:
        self._expired_listeners.append(listener)

    def url_for(self, path: str) -> str:
        return join_url(self._base_url, path)

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request, refreshing the session once on ``401``."""
        url = self.url_for(path)
        token = self._store.read_access_token()
        response = await self._send(method, url, token, **kwargs)

        if response.status_code != httpx.codes.UNAUTHORIZED or url == self._auth_api.refresh_url:
            return raise_for_api_status(response)

        logger.info("Access token rejected for %s %s; refreshing session", method, path)
        new_token = await self._refresh_access_token(stale_token=token)
        if new_token is None:
            raise UnauthorizedError()

        retry = await self._send(method, url, new_token, **kwargs)
        if retry.status_code == httpx.codes.UNAUTHORIZED:
            logger.warning("Request %s %s still unauthorized after refresh", method, path)
            self._expire_session()
            raise UnauthorizedError()
        return raise_for_api_status(retry)

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", path, **kwargs)

    async def get_json(self, path: str, **kwargs: Any) -> Any:
        response = await self.get(path, **kwargs)
        return response.json()

    async def _send(
        self, method: str, url: str, token: Optional[str], **kwargs: Any
    ) -> httpx.Response:
        request = self._http.build_request(method, url, **kwargs)
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        else:
            request.headers.pop("Authorization", None)
        try:
            return await self._http.send(request)
        except httpx.TransportError as exc:
            raise network_error(exc) from exc

    async def _refresh_access_token(self, *, stale_token: Optional[str]) -> Optional[str]:
        async with self._refresh_lock:
            current = self._store.read_access_token()
            if current and current != stale_token:
                return current
            if current is None and stale_token is not None:
                # Cleared while this request waited: an earlier refresh failed.
                return None

            try:
                access = await self._auth_api.refresh(self._store.read_refresh_token())
            except TokenRefreshError as exc:
                logger.warning("Session refresh failed; clearing stored session: %s", exc)
                self._expire_session()
                return None

            if not self._store.update_access_token(access):
                logger.warning("Session disappeared during refresh")
                self._expire_session()
                return None

            if "Authorization" in self._http.headers:
                self.set_auth_header(access)
            self.refresh_count += 1
            logger.info("Session refreshed")
            return access

    def _expire_session(self) -> None:
        self._store.clear()
        self.clear_auth_header()
        for listener in list(self._expired_listeners):
            listener()


__all__ = ["AuthenticatedClient", "SessionExpiredListener"]
