"""
Kacchi Likhavat Backend — Note Service
=======================================

What:  Create, list, read, update and delete notes for one user.
Who:   Called by routes/notes.py.

Listing:
    Pinned notes first, then most recently updated. Optional filters:
    - room_id: notes of one room
    - tag:     notes carrying that exact tag

Tags:
    Stored one row per tag in note_tags. Incoming tags are trimmed,
    blanks dropped and duplicates collapsed (first occurrence wins).
"""

import uuid
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.models.note import Note, NoteTag
from likhavat.schemas.note import NoteCreate
from likhavat.services.base import OwnedRecordService


def clean_tags(tags: Iterable[str]) -> List[str]:
    cleaned = (tag.strip() for tag in tags)
    return list(dict.fromkeys(tag for tag in cleaned if tag))


class NoteService(OwnedRecordService[Note]):
    model = Note
    resource = "note"
    stat_field = "notes_count"

    async def create(self, db: AsyncSession, user_id: uuid.UUID, payload: NoteCreate) -> Note:
        note = Note(
            user_id=user_id,
            room_id=payload.room_id,
            title=payload.title or "Untitled Note",
            content=payload.content or "",
            is_pinned=payload.is_pinned,
            is_archived=payload.is_archived,
        )
        note.tags = clean_tags(payload.tags)
        return await self._insert(db, note)

    async def list(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        room_id: Optional[uuid.UUID] = None,
        tag: Optional[str] = None,
    ) -> List[Note]:
        query = select(Note).where(Note.user_id == user_id)
        if room_id is not None:
            query = query.where(Note.room_id == room_id)
        if tag:
            query = query.where(
                Note.id.in_(select(NoteTag.note_id).where(NoteTag.tag == tag.strip()))
            )
        query = query.order_by(Note.is_pinned.desc(), Note.updated_at.desc())
        return await self._list(db, query)

    def apply_changes(self, record: Note, changes: Dict[str, Any]) -> None:
        if "tags" in changes:
            record.tags = clean_tags(changes.pop("tags"))
        super().apply_changes(record, changes)


note_service = NoteService()
