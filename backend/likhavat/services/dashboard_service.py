"""
Kacchi Likhavat Backend — Dashboard Aggregator
===============================================

What:  Builds the single payload behind the dashboard page: recent rooms,
       a merged recent-activity feed and exact per-user stats.
How:   Eleven independent reads run concurrently with asyncio.gather. An
       AsyncSession cannot run two statements at once, so each read opens
       its own short-lived session from the shared factory.

    ┌──────────────┐     ┌──────────────────────────────────────────┐
    │ GET          │     │ rooms(10) notes(5) stories(5) expenses(5)│
    │ /api/dash-   │───▶ │ memories(5) profile count×5              │──┐
    │ board        │     │        (asyncio.gather, 11 sessions)     │  │
    └──────────────┘     └──────────────────────────────────────────┘  │
           ▲                                                           │
           │     merge activity · sort by date · top 10 · store stats  │
           └───────────────────────────────────────────────────────────┘

Stats written back here are exact counts, which repairs any drift in
the incrementally maintained counters.
"""

import asyncio
import logging
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from likhavat.database import async_session_factory
from likhavat.models.expense import Expense
from likhavat.models.memory import Memory
from likhavat.models.note import Note
from likhavat.models.room import Room
from likhavat.models.story import Story
from likhavat.models.user_profile import STAT_FIELDS, UserProfile
from likhavat.schemas.dashboard import ActivityItem, DashboardData
from likhavat.schemas.profile import UserStats
from likhavat.schemas.room import RoomResponse
from likhavat.services.base import translate_db_errors
from likhavat.services.stats import stats_service

logger = logging.getLogger(__name__)

T = TypeVar("T")

RECENT_ROOMS = 10
RECENT_PER_TYPE = 5
ACTIVITY_LIMIT = 10
MEMORY_TITLE_LENGTH = 50


def memory_title(text: str) -> str:
    if len(text) > MEMORY_TITLE_LENGTH:
        return text[:MEMORY_TITLE_LENGTH] + "..."
    return text


class DashboardService:

    def __init__(self, session_factory: async_sessionmaker = async_session_factory):
        self._session_factory = session_factory

    async def _read(self, fn: Callable[[AsyncSession], Awaitable[T]]) -> T:
        async with self._session_factory() as session:
            return await fn(session)

    def _recent(self, model, user_id: uuid.UUID, order_column, limit: int):
        async def run(session: AsyncSession) -> List[Any]:
            result = await session.execute(
                select(model)
                .where(model.user_id == user_id)
                .order_by(order_column.desc())
                .limit(limit)
            )
            return list(result.scalars().all())
        return run

    def _profile(self, user_id: uuid.UUID):
        async def run(session: AsyncSession) -> Optional[UserProfile]:
            result = await session.execute(
                select(UserProfile).where(UserProfile.user_id == user_id)
            )
            return result.scalar_one_or_none()
        return run

    def _count(self, field: str, user_id: uuid.UUID):
        async def run(session: AsyncSession) -> int:
            return await stats_service.count(session, field, user_id)
        return run

    async def build(self, db: AsyncSession, user_id: uuid.UUID) -> DashboardData:
        """
        Gather the dashboard for `user_id`, then store the fresh stats
        through the request session `db`.
        """
        with translate_db_errors("load the dashboard"):
            (
                rooms, notes, stories, expenses, memories, profile, *counts
            ) = await asyncio.gather(
                self._read(self._recent(Room, user_id, Room.updated_at, RECENT_ROOMS)),
                self._read(self._recent(Note, user_id, Note.updated_at, RECENT_PER_TYPE)),
                self._read(self._recent(Story, user_id, Story.updated_at, RECENT_PER_TYPE)),
                self._read(self._recent(Expense, user_id, Expense.date, RECENT_PER_TYPE)),
                self._read(self._recent(Memory, user_id, Memory.date, RECENT_PER_TYPE)),
                self._read(self._profile(user_id)),
                *(self._read(self._count(field, user_id)) for field in STAT_FIELDS),
            )

            stats: Dict[str, int] = dict(zip(STAT_FIELDS, counts))
            if profile is None:
                db.add(UserProfile(user_id=user_id, **stats))
            else:
                await db.execute(
                    update(UserProfile)
                    .where(UserProfile.user_id == user_id)
                    .values(**stats)
                    .execution_options(synchronize_session=False)
                )
            await db.flush()

        activity = [
            ActivityItem(id=n.id, type="note", title=n.title, date=n.updated_at) for n in notes
        ]
        activity += [
            ActivityItem(id=s.id, type="story", title=s.title, date=s.updated_at) for s in stories
        ]
        activity += [
            ActivityItem(id=e.id, type="expense", title=e.title, date=e.updated_at) for e in expenses
        ]
        activity += [
            ActivityItem(id=m.id, type="memory", title=memory_title(m.text), date=m.updated_at)
            for m in memories
        ]
        activity.sort(key=lambda item: item.date, reverse=True)

        logger.debug("Dashboard for %s: %d rooms, stats=%s", user_id, len(rooms), stats)
        return DashboardData(
            rooms=[RoomResponse.model_validate(room) for room in rooms],
            recent_activity=activity[:ACTIVITY_LIMIT],
            stats=UserStats(**stats),
        )


dashboard_service = DashboardService()
