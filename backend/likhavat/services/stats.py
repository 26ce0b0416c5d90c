"""
Kacchi Likhavat Backend — Profile Stats Counters
=================================================

What:  Per-user counters (rooms, notes, stories, expenses, memories) kept
       on the user_profiles row.

Two ways the counters move:
    1. bump():  one UPDATE ... SET col = col + :delta statement per create
                or delete of a note, story, expense or memory. Atomic on
                the database side, so concurrent requests never lose an
                increment. Decrements clamp at 0. Rooms are never bumped.
    2. recount(): exact COUNT(*) per table, rooms included. The
                dashboard and the profile read call this and write the
                result back with store(), which repairs any drift in
                the cached values.
"""

import logging
import uuid
from typing import Dict

from sqlalchemy import case, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.models.expense import Expense
from likhavat.models.memory import Memory
from likhavat.models.note import Note
from likhavat.models.room import Room
from likhavat.models.story import Story
from likhavat.models.user_profile import STAT_FIELDS, UserProfile

logger = logging.getLogger(__name__)

# Stat column -> table it counts
COUNTED_MODELS = {
    "created_rooms": Room,
    "notes_count": Note,
    "stories_count": Story,
    "expenses_count": Expense,
    "memories_count": Memory,
}


class StatsService:

    async def bump(self, db: AsyncSession, user_id: uuid.UUID, field: str, delta: int) -> None:
        if field not in STAT_FIELDS:
            raise ValueError(f"Unknown stat field: {field}")

        column = getattr(UserProfile, field)
        if delta >= 0:
            new_value = column + delta
        else:
            new_value = case((column + delta < 0, 0), else_=column + delta)

        result = await db.execute(
            update(UserProfile)
            .where(UserProfile.user_id == user_id)
            .values({field: new_value})
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0 and delta > 0:
            # First write for this user: start the profile with this count
            db.add(UserProfile(user_id=user_id, **{field: delta}))
            await db.flush()

    async def count(self, db: AsyncSession, field: str, user_id: uuid.UUID) -> int:
        model = COUNTED_MODELS[field]
        result = await db.execute(
            select(func.count()).select_from(model).where(model.user_id == user_id)
        )
        return result.scalar() or 0

    async def recount(self, db: AsyncSession, user_id: uuid.UUID) -> Dict[str, int]:
        return {field: await self.count(db, field, user_id) for field in STAT_FIELDS}

    def store(self, profile: UserProfile, counts: Dict[str, int]) -> None:
        for field, value in counts.items():
            setattr(profile, field, value)
        logger.debug("Stored exact stats for user %s: %s", profile.user_id, counts)


stats_service = StatsService()
