"""
Pydantic models for motivation image boards.
"""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ImageBoardItem(BaseModel):
    """An image pinned to a board."""

    model_config = ConfigDict(extra="allow")

    id: Union[int, str]
    image: Optional[str] = None
    image_url: Optional[str] = None
    caption: Optional[str] = None
    order: int = 0
    is_active: bool = True
    public_id: str
    created: Optional[str] = None
    updated: Optional[str] = None


class ImageBoard(BaseModel):
    """A titled collection of motivational images."""

    model_config = ConfigDict(extra="allow")

    id: Union[int, str]
    title: str
    description: Optional[str] = None
    is_active: bool = True
    order: int = 0
    public_id: str
    image_count: int = 0
    can_add_image: bool = True
    images: List[ImageBoardItem] = Field(default_factory=list)
    created: Optional[str] = None
    updated: Optional[str] = None


class ImageBoardCreate(BaseModel):
    title: str
    description: Optional[str] = None
    order: Optional[int] = None

    @field_validator("title")
    @classmethod
    def _title(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


class ImageBoardUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class ImageUpload(BaseModel):
    """Multipart upload of a new board image."""

    filename: str = Field(..., min_length=1)
    content: bytes = Field(..., min_length=1)
    mime_type: str = Field("application/octet-stream")
    caption: Optional[str] = None
    order: Optional[int] = None


class ImageBoardItemUpdate(BaseModel):
    caption: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class ReorderEntry(BaseModel):
    id: Union[int, str]
    order: int


class ReorderRequest(BaseModel):
    items: List[ReorderEntry] = Field(..., min_length=1)


class BulkToggleRequest(BaseModel):
    public_ids: List[str] = Field(..., min_length=1)
    is_active: bool


__all__ = [
    "BulkToggleRequest",
    "ImageBoard",
    "ImageBoardCreate",
    "ImageBoardItem",
    "ImageBoardItemUpdate",
    "ImageBoardUpdate",
    "ImageUpload",
    "ReorderEntry",
    "ReorderRequest",
]
