"""Request/response contracts for /api/stories and /api/stories/chapters."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from likhavat.schemas.common import CamelModel


class StoryCreate(CamelModel):
    room_id: uuid.UUID
    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    cover_image: Optional[str] = Field(default=None, max_length=1024)


class StoryUpdate(CamelModel):
    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    cover_image: Optional[str] = Field(default=None, max_length=1024)


class StoryResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    room_id: uuid.UUID
    title: str
    description: str
    cover_image: str
    created_at: datetime
    updated_at: datetime


class ChapterCreate(CamelModel):
    story_id: uuid.UUID
    title: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None
    # Omit to append after the story's last chapter
    order: Optional[int] = Field(default=None, ge=1)


class ChapterUpdate(CamelModel):
    title: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None
    order: Optional[int] = Field(default=None, ge=1)


class ChapterResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    story_id: uuid.UUID
    title: str
    content: str
    order: int
    created_at: datetime
    updated_at: datetime


class StoryDetailResponse(StoryResponse):
    """A story together with its chapters in reading order."""
    chapters: List[ChapterResponse] = Field(default_factory=list)
