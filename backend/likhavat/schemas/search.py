"""
Kacchi Likhavat Backend — Search Schemas
=========================================

What:  Projections returned by GET /api/search.

Each hit model carries only the fields a results list displays, so
search responses stay small even when every category is searched.
"""

import uuid
from datetime import datetime
from typing import List

from pydantic import Field

from likhavat.schemas.common import ApiResponse, CamelModel


class NoteHit(CamelModel):
    id: uuid.UUID
    title: str
    content: str
    tags: List[str]
    created_at: datetime
    updated_at: datetime


class StoryHit(CamelModel):
    id: uuid.UUID
    title: str
    description: str
    created_at: datetime
    updated_at: datetime


class ChapterHit(CamelModel):
    id: uuid.UUID
    story_id: uuid.UUID
    title: str
    content: str
    order: int
    created_at: datetime
    updated_at: datetime


class ExpenseHit(CamelModel):
    id: uuid.UUID
    title: str
    amount: float
    category: str
    date: datetime


class MemoryHit(CamelModel):
    id: uuid.UUID
    text: str
    mood: str
    date: datetime


class SearchResults(CamelModel):
    notes: List[NoteHit] = Field(default_factory=list)
    stories: List[StoryHit] = Field(default_factory=list)
    chapters: List[ChapterHit] = Field(default_factory=list)
    expenses: List[ExpenseHit] = Field(default_factory=list)
    memories: List[MemoryHit] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return (
            len(self.notes)
            + len(self.stories)
            + len(self.chapters)
            + len(self.expenses)
            + len(self.memories)
        )


class SearchResponse(ApiResponse[SearchResults]):
    total_results: int = Field(default=0, description="Hits across all categories")
