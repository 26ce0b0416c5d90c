"""Response contract for GET /api/dashboard."""

import uuid
from datetime import datetime
from typing import List, Literal

from likhavat.schemas.common import CamelModel
from likhavat.schemas.profile import UserStats
from likhavat.schemas.room import RoomResponse


class ActivityItem(CamelModel):
    """One entry of the merged recent-activity feed."""
    id: uuid.UUID
    type: Literal["note", "story", "expense", "memory"]
    title: str
    date: datetime


class DashboardData(CamelModel):
    rooms: List[RoomResponse]
    recent_activity: List[ActivityItem]
    stats: UserStats
