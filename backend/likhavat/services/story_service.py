"""
Kacchi Likhavat Backend — Story and Chapter Service
====================================================

What:  Story CRUD plus the chapters that belong to each story.
Who:   Called by routes/stories.py.

Chapter numbering:
    Every story row carries `chapter_seq`, the highest order handed out
    so far. Creating a chapter without an explicit order runs

        UPDATE stories SET chapter_seq = chapter_seq + 1
        WHERE id = :story AND user_id = :user
        RETURNING chapter_seq

    and uses the returned value. The row lock taken by the UPDATE
    serializes concurrent creates under one story, so two chapters never
    receive the same automatic order. The same statement doubles as the
    ownership check: no row returned means the story is missing or
    belongs to someone else (404).

    An explicit order is stored as given and lifts `chapter_seq` to it
    when larger, so later automatic orders continue after it.

Deleting a story deletes its chapters first.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import case, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.exceptions import NotFoundError
from likhavat.models.story import Chapter, Story
from likhavat.schemas.story import ChapterCreate, ChapterUpdate, StoryCreate
from likhavat.services.base import OwnedRecordService, changes_from, translate_db_errors

logger = logging.getLogger(__name__)


class StoryService(OwnedRecordService[Story]):
    model = Story
    resource = "story"
    stat_field = "stories_count"

    async def create(self, db: AsyncSession, user_id: uuid.UUID, payload: StoryCreate) -> Story:
        story = Story(
            user_id=user_id,
            room_id=payload.room_id,
            title=payload.title or "Untitled Story",
            description=payload.description or "",
            cover_image=payload.cover_image or "",
        )
        return await self._insert(db, story)

    async def list(self, db: AsyncSession, user_id: uuid.UUID) -> List[Story]:
        query = (
            select(Story)
            .where(Story.user_id == user_id)
            .order_by(Story.updated_at.desc())
        )
        return await self._list(db, query)

    async def chapters_of(self, db: AsyncSession, story_id: uuid.UUID) -> List[Chapter]:
        query = (
            select(Chapter)
            .where(Chapter.story_id == story_id)
            .order_by(Chapter.order.asc(), Chapter.created_at.asc())
        )
        with translate_db_errors("retrieve chapters"):
            result = await db.execute(query)
            return list(result.scalars().all())

    async def _before_delete(self, db: AsyncSession, record: Story) -> None:
        result = await db.execute(delete(Chapter).where(Chapter.story_id == record.id))
        logger.info("Deleting story %s with %d chapters", record.id, result.rowcount)


class ChapterService(OwnedRecordService[Chapter]):
    model = Chapter
    resource = "chapter"

    async def _claim_order(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        story_id: uuid.UUID,
        order: Optional[int] = None,
    ) -> int:
        """Advance the story's chapter sequence and return the order to use."""
        if order is None:
            new_seq = Story.chapter_seq + 1
        else:
            new_seq = case((Story.chapter_seq < order, order), else_=Story.chapter_seq)

        result = await db.execute(
            update(Story)
            .where(Story.id == story_id, Story.user_id == user_id)
            .values(chapter_seq=new_seq)
            .returning(Story.chapter_seq)
            .execution_options(synchronize_session=False)
        )
        seq = result.scalar_one_or_none()
        if seq is None:
            raise NotFoundError(resource="story", resource_id=str(story_id))
        return seq if order is None else order

    async def create(self, db: AsyncSession, user_id: uuid.UUID, payload: ChapterCreate) -> Chapter:
        with translate_db_errors("create the chapter"):
            order = await self._claim_order(db, user_id, payload.story_id, payload.order)
        chapter = Chapter(
            user_id=user_id,
            story_id=payload.story_id,
            title=payload.title or "Untitled Chapter",
            content=payload.content or "",
            order=order,
        )
        return await self._insert(db, chapter)

    async def list(self, db: AsyncSession, user_id: uuid.UUID, story_id: uuid.UUID) -> List[Chapter]:
        # Confirms ownership of the story (404 otherwise)
        await story_service.get(db, user_id, story_id)
        return await story_service.chapters_of(db, story_id)

    async def update(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        record_id: uuid.UUID,
        payload: ChapterUpdate,
    ) -> Chapter:
        with translate_db_errors("update the chapter"):
            chapter = await self._get_owned(db, user_id, record_id)
            changes = changes_from(payload)
            if "order" in changes:
                await self._claim_order(db, user_id, chapter.story_id, changes["order"])
            self.apply_changes(chapter, changes)
            await db.flush()
        return chapter


story_service = StoryService()
chapter_service = ChapterService()
