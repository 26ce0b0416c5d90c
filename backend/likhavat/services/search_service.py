"""
Kacchi Likhavat Backend — Global Search
========================================

What:  Case-insensitive substring search across the caller's notes,
       stories, chapters, expenses and memories.
How:   One query per selected category, run concurrently, each on its own
       session. Every list is capped at MAX_RESULTS_PER_CATEGORY.

Matching:
    `q` is matched literally. LIKE wildcards (% and _) and the escape
    character are escaped, so "50%" finds the text "50%" and nothing else.

    `tag` applies to notes only and requires an exact tag match. A
    tag-only search (no `q`) returns empty lists for the other categories.

    | category | fields searched with q               |
    |----------|--------------------------------------|
    | notes    | title, content                       |
    | stories  | title, description                   |
    | chapters | title, content                       |
    | expenses | title, description, category         |
    | memories | text                                 |
"""

import asyncio
import logging
import uuid
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple, Type

from pydantic import BaseModel
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from likhavat.database import async_session_factory
from likhavat.exceptions import ValidationError
from likhavat.models.expense import Expense
from likhavat.models.memory import Memory
from likhavat.models.note import Note, NoteTag
from likhavat.models.story import Chapter, Story
from likhavat.schemas.search import (
    ChapterHit,
    ExpenseHit,
    MemoryHit,
    NoteHit,
    SearchResults,
    StoryHit,
)
from likhavat.services.base import translate_db_errors

logger = logging.getLogger(__name__)

SEARCH_CATEGORIES = ("notes", "stories", "chapters", "expenses", "memories")
MAX_RESULTS_PER_CATEGORY = 20


def like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def parse_categories(type_param: Optional[str]) -> Tuple[str, ...]:
    """
    Turn the `type` query parameter into the categories to search.

    None, "" or "all" select every category; otherwise a single name or a
    comma-separated list of names.

    Raises:
        ValidationError: an unknown category name
    """
    if not type_param or type_param.strip().lower() == "all":
        return SEARCH_CATEGORIES

    requested = [part.strip().lower() for part in type_param.split(",") if part.strip()]
    unknown = [name for name in requested if name not in SEARCH_CATEGORIES]
    if unknown or not requested:
        raise ValidationError(
            message=f"Invalid search type. Choose from: {', '.join(SEARCH_CATEGORIES)}",
            field="type",
        )
    return tuple(name for name in SEARCH_CATEGORIES if name in requested)


class SearchService:

    def __init__(self, session_factory: async_sessionmaker = async_session_factory):
        self._session_factory = session_factory

    async def _fetch(self, query, hit_model: Type[BaseModel]) -> List[Any]:
        async with self._session_factory() as session:
            result = await session.execute(query.limit(MAX_RESULTS_PER_CATEGORY))
            return [hit_model.model_validate(row) for row in result.scalars().all()]

    async def _nothing(self) -> List[Any]:
        return []

    def _note_query(self, user_id: uuid.UUID, pattern: Optional[str], tag: Optional[str]):
        query = select(Note).where(Note.user_id == user_id)
        if pattern:
            query = query.where(
                or_(
                    Note.title.ilike(pattern, escape="\\"),
                    Note.content.ilike(pattern, escape="\\"),
                )
            )
        if tag:
            query = query.where(Note.id.in_(select(NoteTag.note_id).where(NoteTag.tag == tag)))
        return query.order_by(Note.updated_at.desc())

    def _text_query(self, model, user_id: uuid.UUID, pattern: str, columns: Sequence, order_column):
        return (
            select(model)
            .where(
                model.user_id == user_id,
                or_(*(column.ilike(pattern, escape="\\") for column in columns)),
            )
            .order_by(order_column.desc())
        )

    async def search(
        self,
        user_id: uuid.UUID,
        q: Optional[str] = None,
        tag: Optional[str] = None,
        type_param: Optional[str] = None,
    ) -> SearchResults:
        q = (q or "").strip()
        tag = (tag or "").strip()
        if not q and not tag:
            raise ValidationError("Search query or tag is required", field="q")

        categories = parse_categories(type_param)
        pattern = like_pattern(q) if q else None

        def wanted(name: str) -> bool:
            # Without q only the note tag filter has anything to match on
            return name in categories and (pattern is not None or name == "notes")

        plans: List[Tuple[str, Callable[[], Awaitable[List[Any]]]]] = [
            ("notes", lambda: self._fetch(self._note_query(user_id, pattern, tag), NoteHit)),
            ("stories", lambda: self._fetch(
                self._text_query(Story, user_id, pattern, (Story.title, Story.description), Story.updated_at),
                StoryHit,
            )),
            ("chapters", lambda: self._fetch(
                self._text_query(Chapter, user_id, pattern, (Chapter.title, Chapter.content), Chapter.updated_at),
                ChapterHit,
            )),
            ("expenses", lambda: self._fetch(
                self._text_query(
                    Expense, user_id, pattern,
                    (Expense.title, Expense.description, Expense.category),
                    Expense.date,
                ),
                ExpenseHit,
            )),
            ("memories", lambda: self._fetch(
                self._text_query(Memory, user_id, pattern, (Memory.text,), Memory.date),
                MemoryHit,
            )),
        ]

        with translate_db_errors("search"):
            lists = await asyncio.gather(
                *(make() if wanted(name) else self._nothing() for name, make in plans)
            )

        results = SearchResults(**dict(zip(SEARCH_CATEGORIES, lists)))
        logger.info(
            "Search by %s (q=%r, tag=%r, types=%s): %d results",
            user_id, q, tag, ",".join(categories), results.total,
        )
        return results


search_service = SearchService()
