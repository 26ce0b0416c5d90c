"""
Kacchi Likhavat Backend — Memory Model
=======================================

What:  ORM model for the `memories` table (mood-tagged journal entries).
"""

import uuid
from datetime import datetime
from typing import List

from sqlalchemy import JSON, DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from likhavat.database import Base
from likhavat.models.mixins import OwnedMixin, utcnow

MOODS = ("happy", "sad", "excited", "anxious", "calm", "angry", "neutral")


class Memory(OwnedMixin, Base):
    __tablename__ = "memories"

    room_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    mood: Mapped[str] = mapped_column(String(16), nullable=False, default="neutral", index=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    media_urls: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        Index("idx_memories_user_date", "user_id", "date"),
    )

    def __repr__(self) -> str:
        return f"<Memory(id={self.id}, mood='{self.mood}')>"
