"""
Kacchi Likhavat Backend — Expense Model
========================================

What:  ORM model for the `expenses` table.

`amount` is stored as NUMERIC(12, 2) and handed back as a float, which is
what the JSON API exposes. `date` is when the money was spent and drives
listing order, date-range filters and the monthly summary; it is
independent of `created_at`.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from likhavat.database import Base
from likhavat.models.mixins import OwnedMixin, utcnow

EXPENSE_CATEGORIES = (
    "Food",
    "Transport",
    "Shopping",
    "Bills",
    "Entertainment",
    "Health",
    "Education",
    "Other",
)


class Expense(OwnedMixin, Base):
    __tablename__ = "expenses"

    room_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False, default="Other", index=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    __table_args__ = (
        Index("idx_expenses_user_date", "user_id", "date"),
    )

    def __repr__(self) -> str:
        return f"<Expense(id={self.id}, title='{self.title}', amount={self.amount})>"
