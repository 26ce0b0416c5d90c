"""
Kacchi Likhavat Backend — User Profile Model
=============================================

What:  ORM model for the `user_profiles` table.
How:   One row per user, created lazily the first time anything touches it
       (profile read, dashboard load, or a stats bump on create).

Stats cache:
    The five `*_count` columns are a denormalized cache. Note, story,
    expense and memory creates and deletes bump them with single-statement
    atomic updates. The dashboard and profile reads overwrite all five,
    `created_rooms` included, with exact counts.
"""

import uuid
from typing import Any, Dict

from sqlalchemy import JSON, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from likhavat.database import Base
from likhavat.models.mixins import TimestampMixin

STAT_FIELDS = (
    "created_rooms",
    "notes_count",
    "stories_count",
    "expenses_count",
    "memories_count",
)


def default_preferences() -> Dict[str, Any]:
    return {
        "theme": "auto",
        "default_template": "blank",
        "editor_settings": {
            "font_size": 16,
            "font_family": "Inter",
            "line_height": 1.6,
        },
    }


class UserProfile(TimestampMixin, Base):
    __tablename__ = "user_profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    display_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    avatar_url: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    preferences: Mapped[Dict[str, Any]] = mapped_column(
        JSON, nullable=False, default=default_preferences
    )

    # ── Stats cache ───────────────────────────────────────────────────────
    created_rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    stories_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    expenses_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    memories_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    @property
    def stats(self) -> Dict[str, int]:
        return {name: getattr(self, name) or 0 for name in STAT_FIELDS}

    def __repr__(self) -> str:
        return f"<UserProfile(user_id={self.user_id}, stats={self.stats})>"
