"""
Entrypoint assembling the journaling client.
"""

from __future__ import annotations

from typing import Optional

import httpx

from bujo.clients import (
    AuthApiClient,
    AuthenticatedClient,
    InMemorySessionStorage,
    SessionStorage,
    SQLiteSessionStorage,
)
from bujo.core.config import AppSettings, get_settings
from bujo.core.logging import configure_logging
from bujo.services import (
    AboutClient,
    BulletClient,
    DiaryClient,
    MotivationClient,
    NavigationHistory,
    RouteGuard,
    SessionCipher,
    SessionService,
    TokenStore,
    favorites_client,
    statement_client,
)
from bujo.services.routing import Navigator


class BujoApp:
    """One logged-in (or logged-out) client session and its feature clients."""

    def __init__(
        self,
        settings: AppSettings,
        *,
        storage: SessionStorage,
        navigator: Navigator,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.navigator = navigator

        cipher = None
        if settings.session_encryption_secret:
            cipher = SessionCipher(secret=settings.session_encryption_secret)
        self.token_store = TokenStore(storage, cipher=cipher)

        self.auth_api = AuthApiClient(
            settings.base_url,
            timeout=settings.http_timeout,
            password_reset_path=settings.password_reset_path,
            transport=transport,
        )
        self.http = AuthenticatedClient(
            settings.base_url,
            self.token_store,
            self.auth_api,
            timeout=settings.http_timeout,
            transport=transport,
        )
        self.session = SessionService(
            self.token_store, self.auth_api, self.http, navigator=navigator
        )
        self.router = RouteGuard(self.token_store, navigator=navigator)

        self.diary = DiaryClient(self.http, self.session, navigator=navigator)
        self.bullets = BulletClient(self.http, self.session, navigator=navigator)
        self.affirmations = statement_client(
            "affirmations", self.http, self.session, navigator=navigator
        )
        self.gratitudes = statement_client(
            "gratitudes", self.http, self.session, navigator=navigator
        )
        self.passions = statement_client("passions", self.http, self.session, navigator=navigator)
        self.favorites = favorites_client(self.http, self.session, navigator=navigator)
        self.about = AboutClient(self.http, self.session, navigator=navigator)
        self.motivation = MotivationClient(self.http, self.session, navigator=navigator)

        # Restore the default header for a session persisted by an earlier run.
        self.http.set_auth_header(self.token_store.read_access_token())

    async def __aenter__(self) -> "BujoApp":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http.aclose()


def _build_storage(settings: AppSettings) -> SessionStorage:
    if settings.session_backend == "memory":
        return InMemorySessionStorage()
    return SQLiteSessionStorage(settings.session_db_path, key=settings.session_storage_key)


def create_app(
    settings: Optional[AppSettings] = None,
    *,
    storage: Optional[SessionStorage] = None,
    navigator: Optional[Navigator] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> BujoApp:
    """Factory for the journaling client."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    return BujoApp(
        settings,
        storage=storage if storage is not None else _build_storage(settings),
        navigator=navigator if navigator is not None else NavigationHistory(),
        transport=transport,
    )


__all__ = ["BujoApp", "create_app"]
