"""
Kacchi Likhavat Backend — Story and Chapter Models
===================================================

What:  ORM models for the `stories` and `chapters` tables.

Chapter ordering:
    `Story.chapter_seq` is a per-story counter. Auto-numbered chapters take
    their `order` from a single atomic
        UPDATE stories SET chapter_seq = chapter_seq + 1 ... RETURNING chapter_seq
    so two concurrent inserts under the same story never get the same value.
    An explicit order larger than the counter advances it.

Lifecycle:
    Deleting a story deletes its chapters (service-level delete plus
    ON DELETE CASCADE on the foreign key).
"""

import uuid

from sqlalchemy import ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from likhavat.database import Base
from likhavat.models.mixins import OwnedMixin


class Story(OwnedMixin, Base):
    __tablename__ = "stories"

    room_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="Untitled Story")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    cover_image: Mapped[str] = mapped_column(String(1024), nullable=False, default="")

    # Highest chapter order handed out so far
    chapter_seq: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_stories_user_updated", "user_id", "updated_at"),
    )

    def __repr__(self) -> str:
        return f"<Story(id={self.id}, title='{self.title}')>"


class Chapter(OwnedMixin, Base):
    __tablename__ = "chapters"

    story_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("stories.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="Untitled Chapter")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    order: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        Index("idx_chapters_story_order", "story_id", "order"),
    )

    def __repr__(self) -> str:
        return f"<Chapter(id={self.id}, story_id={self.story_id}, order={self.order})>"
