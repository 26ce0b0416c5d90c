"""
Kacchi Likhavat Backend — Note Models
======================================

What:  ORM models for the `notes` and `note_tags` tables.
How:   Tags live in their own table so that "notes carrying tag X" is a
       plain indexed equality lookup on every supported database. The
       `Note.tags` property exposes them as a list of strings.

Query Patterns:
    - List notes: WHERE user_id = :uid ORDER BY is_pinned DESC, updated_at DESC
    - Tag filter: WHERE id IN (SELECT note_id FROM note_tags WHERE tag = :tag)
    - Search:     WHERE user_id = :uid AND (title ILIKE :q OR content ILIKE :q)
"""

import uuid
from typing import Iterable, List

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from likhavat.database import Base
from likhavat.models.mixins import OwnedMixin


class NoteTag(Base):
    __tablename__ = "note_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    note_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("notes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tag: Mapped[str] = mapped_column(String(100), nullable=False, index=True)


class Note(OwnedMixin, Base):
    __tablename__ = "notes"

    room_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="Untitled Note")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # selectin: tags are always needed when a note is serialized, and lazy
    # loading is not available on AsyncSession.
    tag_links: Mapped[List[NoteTag]] = relationship(
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by=NoteTag.id,
    )

    __table_args__ = (
        Index("idx_notes_user_updated", "user_id", "updated_at"),
    )

    @property
    def tags(self) -> List[str]:
        return [link.tag for link in self.tag_links]

    @tags.setter
    def tags(self, values: Iterable[str]) -> None:
        # dict.fromkeys drops duplicates and keeps the caller's order
        self.tag_links = [NoteTag(tag=tag) for tag in dict.fromkeys(values)]

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', pinned={self.is_pinned})>"
