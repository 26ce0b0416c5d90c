"""
Kacchi Likhavat Backend — User Account Model
=============================================

What:  ORM model for the `users` table (login identity).
Who:   Written by AuthService.register, read by AuthService.login.

Only the bcrypt hash of the password is stored. Profile data (display
name, bio, preferences, cached counters) lives in `user_profiles`.
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from likhavat.database import Base
from likhavat.models.mixins import TimestampMixin


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Stored lowercased; uniqueness is case-insensitive in practice
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
