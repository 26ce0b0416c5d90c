"""
Room service: the containers every other piece of content points at.

Rooms are loose containers. Deleting one leaves the notes, stories,
expenses and memories that reference its id in place.

Room creates and deletes do not touch the profile counters;
`created_rooms` is only ever set by an exact recount.
"""

import uuid
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.models.room import Room
from likhavat.schemas.room import RoomCreate
from likhavat.services.base import OwnedRecordService


class RoomService(OwnedRecordService[Room]):
    model = Room
    resource = "room"

    async def create(self, db: AsyncSession, user_id: uuid.UUID, payload: RoomCreate) -> Room:
        room = Room(
            user_id=user_id,
            type=payload.type,
            title=payload.title,
            content=payload.content,
        )
        return await self._insert(db, room)

    async def list(self, db: AsyncSession, user_id: uuid.UUID) -> List[Room]:
        query = (
            select(Room)
            .where(Room.user_id == user_id)
            .order_by(Room.updated_at.desc())
        )
        return await self._list(db, query)


room_service = RoomService()
