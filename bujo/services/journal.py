"""Diary and daily bullet clients."""

from __future__ import annotations

from typing import Optional

from bujo.clients.http import AuthenticatedClient
from bujo.core.exceptions import FormValidationError
from bujo.schemas.journal import (
    RATING_FIELD_KEYS,
    Bullet,
    BulletAverages,
    BulletCreate,
    BulletUpdate,
    DiaryEntry,
    DiaryEntryCreate,
    DiaryEntryUpdate,
    FieldHistory,
)
from bujo.services.resources import ResourceClient
from bujo.services.routing import Navigator
from bujo.services.session import SessionService


class DiaryClient(ResourceClient[DiaryEntry]):
    """Diary entries; listing is scoped to the user id in the path."""

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
            path="diary/",
            list_path="diary/{user_id}",
            record_model=DiaryEntry,
            create_model=DiaryEntryCreate,
            update_model=DiaryEntryUpdate,
            label="diary entry",
            required_message="Title and content are required.",
            navigator=navigator,
        )


class BulletClient(ResourceClient[Bullet]):
    """Daily mood and habit ratings plus their aggregate views."""

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
            path="bullet/",
            record_model=Bullet,
            create_model=BulletCreate,
            update_model=BulletUpdate,
            label="bullet entry",
            required_message="Ratings must be between 1 and 5.",
            navigator=navigator,
        )

    async def field_history(self, field: str, days: int = 365) -> FieldHistory:
        """Ratings of ``field`` over the trailing ``days`` days."""
        if field not in RATING_FIELD_KEYS:
            raise FormValidationError(
                f"Unknown rating field: {field}", fields={"field": "not a rating field"}
            )
        if days < 1:
            raise FormValidationError("Days must be positive.", fields={"days": "must be >= 1"})
        self.require_user_id()
        payload = await self._guard(
            self._get_json(f"{self.path}field_history/", params={"field": field, "days": days})
        )
        return FieldHistory.model_validate(payload)

    async def averages(self) -> BulletAverages:
        self.require_user_id()
        payload = await self._guard(self._get_json(f"{self.path}averages/"))
        return BulletAverages.model_validate(payload)


__all__ = ["BulletClient", "DiaryClient"]
