"""Memory (journal entry) service."""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.models.memory import Memory
from likhavat.models.mixins import utcnow
from likhavat.schemas.memory import MemoryCreate, MemoryUpdate
from likhavat.services.base import OwnedRecordService, changes_from, translate_db_errors


class MemoryService(OwnedRecordService[Memory]):
    model = Memory
    resource = "memory"
    stat_field = "memories_count"

    async def create(self, db: AsyncSession, user_id: uuid.UUID, payload: MemoryCreate) -> Memory:
        memory = Memory(
            user_id=user_id,
            room_id=payload.room_id,
            text=payload.resolved_text() or "",
            mood=payload.mood or "neutral",
            date=payload.date or utcnow(),
            media_urls=list(payload.media_urls),
        )
        return await self._insert(db, memory)

    async def list(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        mood: Optional[str] = None,
    ) -> List[Memory]:
        query = select(Memory).where(Memory.user_id == user_id)
        if date_from is not None:
            query = query.where(Memory.date >= date_from)
        if date_to is not None:
            query = query.where(Memory.date <= date_to)
        if mood:
            query = query.where(Memory.mood == mood)
        query = query.order_by(Memory.date.desc())
        return await self._list(db, query)

    async def update(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        record_id: uuid.UUID,
        payload: MemoryUpdate,
    ) -> Memory:
        changes: Dict[str, Any] = changes_from(payload)
        for key in ("text", "title", "content"):
            changes.pop(key, None)
        text = payload.resolved_text()
        if text is not None:
            changes["text"] = text

        with translate_db_errors("update the memory"):
            memory = await self._get_owned(db, user_id, record_id)
            self.apply_changes(memory, changes)
            await db.flush()
        return memory


memory_service = MemoryService()
