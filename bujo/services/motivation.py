"""Motivation image boards and the images pinned to them."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from bujo.clients.http import AuthenticatedClient
from bujo.schemas.motivation import (
    BulkToggleRequest,
    ImageBoard,
    ImageBoardCreate,
    ImageBoardItem,
    ImageBoardItemUpdate,
    ImageBoardUpdate,
    ImageUpload,
    ReorderRequest,
)
from bujo.services.resources import ResourceClient
from bujo.services.routing import Navigator
from bujo.services.session import SessionService
from bujo.utils.forms import parse_form

IMAGES_PATH = "motivation/images/"


class MotivationClient(ResourceClient[ImageBoard]):
    """Boards are addressed by ``public_id``; images live under their own path."""

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
            path="motivation/boards/",
            record_model=ImageBoard,
            create_model=ImageBoardCreate,
            update_model=ImageBoardUpdate,
            label="image board",
            required_message="Board title is required.",
            navigator=navigator,
        )

    async def add_image(
        self,
        board_public_id: str,
        upload: Union[ImageUpload, Mapping[str, Any]],
    ) -> ImageBoardItem:
        """Upload an image as multipart form data."""
        image = parse_form(ImageUpload, upload, message="An image file is required.")
        data: Dict[str, str] = {}
        if image.caption:
            data["caption"] = image.caption
        if image.order:
            data["order"] = str(image.order)
        files = {"image": (image.filename, image.content, image.mime_type)}

        response = await self._mutate(
            "add image to",
            self._http.post(
                f"{self.detail_path(board_public_id)}add_image/", data=data, files=files
            ),
        )
        return ImageBoardItem.model_validate(response.json())

    async def update_image(
        self, public_id: str, data: Union[ImageBoardItemUpdate, Mapping[str, Any]]
    ) -> ImageBoardItem:
        body = self._form_body(ImageBoardItemUpdate, data)
        response = await self._mutate(
            "update image on", self._http.patch(f"{IMAGES_PATH}{public_id}/", json=body)
        )
        return ImageBoardItem.model_validate(response.json())

    async def delete_image(self, public_id: str) -> bool:
        await self._mutate("delete image from", self._http.delete(f"{IMAGES_PATH}{public_id}/"))
        return True

    async def reorder_images(
        self, board_public_id: str, request: Union[ReorderRequest, Mapping[str, Any]]
    ) -> bool:
        body = self._form_body(ReorderRequest, request)
        await self._mutate(
            "reorder images on",
            self._http.post(f"{self.detail_path(board_public_id)}reorder_images/", json=body),
        )
        return True

    async def bulk_toggle_images(
        self, request: Union[BulkToggleRequest, Mapping[str, Any]]
    ) -> bool:
        body = self._form_body(BulkToggleRequest, request)
        await self._mutate(
            "toggle images on",
            self._http.post(f"{IMAGES_PATH}bulk_toggle_active/", json=body),
        )
        return True


__all__ = ["IMAGES_PATH", "MotivationClient"]
