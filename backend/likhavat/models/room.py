"""
Kacchi Likhavat Backend — Room Model
=====================================

What:  ORM model for the `rooms` table.

A room is a loose writing container. Notes, stories, expenses and
memories keep a `room_id` back-reference, but there is no foreign key:
deleting a room leaves those records (and their dangling `room_id`) in
place.
"""

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from likhavat.database import Base
from likhavat.models.mixins import OwnedMixin

ROOM_TYPES = ("note", "journal", "story", "free")


class Room(OwnedMixin, Base):
    __tablename__ = "rooms"

    # One of ROOM_TYPES; validated at the schema layer
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="free")
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    __table_args__ = (
        Index("idx_rooms_user_updated", "user_id", "updated_at"),
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, type='{self.type}', title='{self.title}')>"
