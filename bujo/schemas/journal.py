"""
Pydantic models for diary entries and daily bullet ratings.
"""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

RATING_MIN = 1
RATING_MAX = 5

RATING_FIELDS = (
    {"key": "day_rating", "label": "Day Rating", "description": "Overall day rating"},
    {"key": "mood", "label": "Mood", "description": "How you felt today"},
    {"key": "anxiety", "label": "Anxiety", "description": "Anxiety level (lower is better)"},
    {"key": "eating_habits", "label": "Eating Habits", "description": "How well you ate today"},
)

RATING_SCALE = (
    {"value": 1, "label": "Very Poor/Low", "color": "#ef4444"},
    {"value": 2, "label": "Poor/Low", "color": "#f97316"},
    {"value": 3, "label": "Average/Neutral", "color": "#eab308"},
    {"value": 4, "label": "Good/High", "color": "#22c55e"},
    {"value": 5, "label": "Excellent/Very High", "color": "#3b82f6"},
)

RATING_FIELD_KEYS = tuple(item["key"] for item in RATING_FIELDS)


def _strip_required(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError("must not be blank")
    return stripped


class DiaryEntry(BaseModel):
    """A diary entry as returned by the backend."""

    model_config = ConfigDict(extra="allow")

    id: Union[int, str]
    title: str
    content: str
    date_created: Optional[str] = None
    user_id: Optional[Union[int, str]] = None
    date: Optional[str] = None


class DiaryEntryCreate(BaseModel):
    title: str
    content: str
    date: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def _strip(cls, value: str) -> str:
        return _strip_required(value)


class DiaryEntryUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    date: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def _strip_if_present(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _strip_required(value)


class Bullet(BaseModel):
    """One day's mood and habit ratings."""

    model_config = ConfigDict(extra="allow")

    id: Union[int, str]
    date: str
    day_rating: int
    mood: int
    anxiety: int
    eating_habits: int
    created: Optional[str] = None
    updated: Optional[str] = None


class BulletCreate(BaseModel):
    date: Optional[str] = None
    day_rating: int = Field(..., ge=RATING_MIN, le=RATING_MAX)
    mood: int = Field(..., ge=RATING_MIN, le=RATING_MAX)
    anxiety: int = Field(..., ge=RATING_MIN, le=RATING_MAX)
    eating_habits: int = Field(..., ge=RATING_MIN, le=RATING_MAX)


class BulletUpdate(BaseModel):
    date: Optional[str] = None
    day_rating: Optional[int] = Field(None, ge=RATING_MIN, le=RATING_MAX)
    mood: Optional[int] = Field(None, ge=RATING_MIN, le=RATING_MAX)
    anxiety: Optional[int] = Field(None, ge=RATING_MIN, le=RATING_MAX)
    eating_habits: Optional[int] = Field(None, ge=RATING_MIN, le=RATING_MAX)


class FieldHistoryPoint(BaseModel):
    date: str
    rating: int


class FieldHistory(BaseModel):
    """Ratings of one field over a trailing window of days."""

    field: str
    period_days: int
    start_date: str
    end_date: str
    total_entries: int
    data: List[FieldHistoryPoint] = Field(default_factory=list)


class BulletAverages(BaseModel):
    day_rating: float
    mood: float
    anxiety: float
    eating_habits: float


__all__ = [
    "Bullet",
    "BulletAverages",
    "BulletCreate",
    "BulletUpdate",
    "DiaryEntry",
    "DiaryEntryCreate",
    "DiaryEntryUpdate",
    "FieldHistory",
    "FieldHistoryPoint",
    "RATING_FIELDS",
    "RATING_FIELD_KEYS",
    "RATING_MAX",
    "RATING_MIN",
    "RATING_SCALE",
]
