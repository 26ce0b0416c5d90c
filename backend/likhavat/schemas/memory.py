"""Request/response contracts for /api/memories."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from likhavat.models.memory import MOODS
from likhavat.schemas.common import CamelModel, parse_datetime


def _check_mood(v: Optional[str]) -> Optional[str]:
    if v is None or v == "":
        return None
    if v not in MOODS:
        raise ValueError(f"Invalid mood. Choose from: {', '.join(MOODS)}")
    return v


def _check_date(v):
    if v is None or v == "":
        return None
    return parse_datetime(v)


class _MemoryText(CamelModel):
    # Clients send either `text`, or a `title` and `content` pair
    text: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None

    def resolved_text(self) -> Optional[str]:
        """`text` wins; otherwise title and content joined by a blank line."""
        if self.text:
            return self.text
        if self.title and self.content:
            return f"{self.title}\n\n{self.content}"
        return self.title or self.content or None


class MemoryCreate(_MemoryText):
    room_id: uuid.UUID
    mood: Optional[str] = None
    date: Optional[datetime] = None
    media_urls: List[str] = Field(default_factory=list)

    @field_validator("mood", mode="before")
    @classmethod
    def validate_mood(cls, v):
        return _check_mood(v)

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        return _check_date(v)


class MemoryUpdate(_MemoryText):
    mood: Optional[str] = None
    date: Optional[datetime] = None
    media_urls: Optional[List[str]] = None

    @field_validator("mood", mode="before")
    @classmethod
    def validate_mood(cls, v):
        return _check_mood(v)

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        return _check_date(v)


class MemoryResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    room_id: uuid.UUID
    text: str
    mood: str
    date: datetime
    media_urls: List[str]
    created_at: datetime
    updated_at: datetime
