"""Clients for the personal profile sections."""

from __future__ import annotations

from typing import Optional

from bujo.clients.http import AuthenticatedClient
from bujo.schemas.profile import (
    About,
    AboutUpdate,
    Favorite,
    FavoriteCreate,
    FavoriteUpdate,
    ProfileStatement,
    ProfileStatementCreate,
    ProfileStatementUpdate,
)
from bujo.services.resources import ResourceClient, unwrap_results
from bujo.services.routing import Navigator
from bujo.services.session import SessionService

_STATEMENT_SECTIONS = {
    "affirmations": ("affirmation", "Affirmation text is required."),
    "gratitudes": ("gratitude", "Gratitude text is required."),
    "passions": ("passion", "Passion text is required."),
}


def statement_client(
    section: str,
    http_client: AuthenticatedClient,
    session: SessionService,
    *,
    navigator: Optional[Navigator] = None,
) -> ResourceClient[ProfileStatement]:
    """Build the client for ``affirmations``, ``gratitudes`` or ``passions``."""
    try:
        label, required_message = _STATEMENT_SECTIONS[section]
    except KeyError as exc:
        raise ValueError(f"Unknown profile section: {section}") from exc
    return ResourceClient(
        http_client,
        session,
        path=f"profile/{section}/",
        record_model=ProfileStatement,
        create_model=ProfileStatementCreate,
        update_model=ProfileStatementUpdate,
        label=label,
        required_message=required_message,
        navigator=navigator,
    )


def favorites_client(
    http_client: AuthenticatedClient,
    session: SessionService,
    *,
    navigator: Optional[Navigator] = None,
) -> ResourceClient[Favorite]:
    return ResourceClient(
        http_client,
        session,
        path="profile/favorites/",
        record_model=Favorite,
        create_model=FavoriteCreate,
        update_model=FavoriteUpdate,
        label="favorite",
        required_message="Title is required.",
        navigator=navigator,
    )


class AboutClient(ResourceClient[About]):
    """The about section holds at most one record per user."""

    def __init__(
        self,
        http_client: AuthenticatedClient,
        session: SessionService,
        *,
        navigator: Optional[Navigator] = None,
    ) -> None:
        super().__init__(
            http_client,
            session,
            path="profile/about/",
            record_model=About,
            create_model=AboutUpdate,
            update_model=AboutUpdate,
            label="about section",
            navigator=navigator,
        )

    async def fetch(self) -> Optional[About]:
        """Return the user's about record, or ``None`` before one is created."""
        self.require_user_id()
        payload = await self._guard(self._get_json(self.path))
        if isinstance(payload, dict) and "id" in payload:
            return self._parse(payload)
        records = unwrap_results(payload)
        return self._parse(records[0]) if records else None


__all__ = ["AboutClient", "favorites_client", "statement_client"]
