"""
Kacchi Likhavat Backend — Note Schemas
=======================================

What:  Pydantic models for /api/notes request bodies and responses.

Defaults:
    A missing or empty title becomes "Untitled Note" (applied by the
    service so that an explicit "" is treated the same as no title).
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from likhavat.schemas.common import CamelModel


class NoteCreate(CamelModel):
    room_id: uuid.UUID = Field(description="Room this note belongs to")
    title: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_pinned: bool = False
    is_archived: bool = False


class NoteUpdate(CamelModel):
    """Partial update: omitted (or null) fields keep their stored value."""
    title: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None
    tags: Optional[List[str]] = None
    is_pinned: Optional[bool] = None
    is_archived: Optional[bool] = None


class NoteResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    room_id: uuid.UUID
    title: str
    content: str
    tags: List[str]
    is_pinned: bool
    is_archived: bool
    created_at: datetime
    updated_at: datetime
