"""Request/response contracts for /api/rooms."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from likhavat.models.room import ROOM_TYPES
from likhavat.schemas.common import CamelModel


class RoomCreate(CamelModel):
    type: str = Field(default="free", description="One of: note, journal, story, free")
    title: str = Field(default="", max_length=255)
    content: str = Field(default="")

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v):
        if v is None or v == "":
            return "free"
        if v not in ROOM_TYPES:
            raise ValueError(f"Invalid room type. Choose from: {', '.join(ROOM_TYPES)}")
        return v


class RoomUpdate(CamelModel):
    title: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None


class RoomResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    type: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
