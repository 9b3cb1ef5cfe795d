"""
Pydantic models for the personal profile sections.

Affirmations, gratitudes and passions share one shape; favorites add a title
and category; the about section is a single record of free-text answers.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


def _required_text(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError("must not be blank")
    return stripped


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


class ProfileStatement(BaseModel):
    """An affirmation, gratitude or passion."""

    model_config = ConfigDict(extra="allow")

    id: Union[int, str]
    text: str
    category: Optional[str] = None
    is_active: bool = True
    order: int = 0
    created: Optional[str] = None
    updated: Optional[str] = None


class ProfileStatementCreate(BaseModel):
    text: str
    category: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("text")
    @classmethod
    def _text(cls, value: str) -> str:
        return _required_text(value)

    @field_validator("category")
    @classmethod
    def _category(cls, value: Optional[str]) -> Optional[str]:
        return _optional_text(value)


class ProfileStatementUpdate(BaseModel):
    text: Optional[str] = None
    category: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("text")
    @classmethod
    def _text(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _required_text(value)


class Favorite(BaseModel):
    """A favorite book, film, place or similar."""

    model_config = ConfigDict(extra="allow")

    id: Union[int, str]
    title: str
    description: Optional[str] = None
    category: str
    is_active: bool = True
    order: int = 0
    created: Optional[str] = None
    updated: Optional[str] = None


class FavoriteCreate(BaseModel):
    title: str
    description: Optional[str] = None
    category: str
    is_active: Optional[bool] = None

    @field_validator("title", "category")
    @classmethod
    def _required(cls, value: str) -> str:
        return _required_text(value)

    @field_validator("description")
    @classmethod
    def _description(cls, value: Optional[str]) -> Optional[str]:
        return _optional_text(value)


class FavoriteUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("title", "category")
    @classmethod
    def _required_if_present(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _required_text(value)


class About(BaseModel):
    """Free-text answers describing the user; every answer is optional."""

    model_config = ConfigDict(extra="allow")

    id: Union[int, str]
    nickname: Optional[str] = None
    location: Optional[str] = None
    occupation: Optional[str] = None
    education: Optional[str] = None
    personality_type: Optional[str] = None
    zodiac_sign: Optional[str] = None
    life_goals: Optional[str] = None
    personal_mission: Optional[str] = None
    hobbies: Optional[str] = None
    interests: Optional[str] = None
    core_values: Optional[str] = None
    career_goals: Optional[str] = None
    health_goals: Optional[str] = None
    bucket_list: Optional[str] = None
    dreams_aspirations: Optional[str] = None
    future_plans: Optional[str] = None
    notes: Optional[str] = None
    is_public: bool = False
    created: Optional[str] = None
    updated: Optional[str] = None


class AboutUpdate(BaseModel):
    """Create and update payload; unknown answer fields pass through."""

    model_config = ConfigDict(extra="allow")

    nickname: Optional[str] = None
    location: Optional[str] = None
    occupation: Optional[str] = None
    education: Optional[str] = None
    life_goals: Optional[str] = None
    hobbies: Optional[str] = None
    notes: Optional[str] = None
    is_public: Optional[bool] = None


__all__ = [
    "About",
    "AboutUpdate",
    "Favorite",
    "FavoriteCreate",
    "FavoriteUpdate",
    "ProfileStatement",
    "ProfileStatementCreate",
    "ProfileStatementUpdate",
]
