"""
Kacchi Likhavat Backend — Expense Service
==========================================

What:  Expense CRUD, filtered listing and the monthly summary.
Who:   Called by routes/expenses.py.

Monthly summary:
    For month M of year Y the window is
        [Y-M-01 00:00:00, last day of M 23:59:59.999999]  (UTC, inclusive)
    and the result carries the overall total, per-category totals and
    the number of expenses in the window.
"""

import calendar
import logging
import uuid
from collections import defaultdict
from datetime import date, datetime, time, timezone
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.exceptions import ValidationError
from likhavat.models.expense import Expense
from likhavat.models.mixins import utcnow
from likhavat.schemas.expense import ExpenseCreate, ExpenseSummary
from likhavat.services.base import OwnedRecordService, translate_db_errors

logger = logging.getLogger(__name__)


def month_window(month: int, year: int) -> Tuple[datetime, datetime]:
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12", field="month")
    if not 1 <= year <= 9999:
        raise ValidationError("Year must be a four-digit year", field="year")
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    end = datetime.combine(date(year, month, last_day), time.max, tzinfo=timezone.utc)
    return start, end


class ExpenseService(OwnedRecordService[Expense]):
    model = Expense
    resource = "expense"
    stat_field = "expenses_count"

    async def create(self, db: AsyncSession, user_id: uuid.UUID, payload: ExpenseCreate) -> Expense:
        expense = Expense(
            user_id=user_id,
            room_id=payload.room_id,
            title=payload.title,
            amount=payload.amount,
            category=payload.category or "Other",
            date=payload.date or utcnow(),
            description=payload.description or "",
        )
        return await self._insert(db, expense)

    async def list(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        category: Optional[str] = None,
    ) -> List[Expense]:
        query = select(Expense).where(Expense.user_id == user_id)
        if date_from is not None:
            query = query.where(Expense.date >= date_from)
        if date_to is not None:
            query = query.where(Expense.date <= date_to)
        if category:
            query = query.where(Expense.category == category)
        query = query.order_by(Expense.date.desc())
        return await self._list(db, query)

    async def monthly_summary(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> ExpenseSummary:
        today = utcnow()
        month = month if month is not None else today.month
        year = year if year is not None else today.year
        start, end = month_window(month, year)

        query = (
            select(Expense.category, func.sum(Expense.amount), func.count())
            .where(
                Expense.user_id == user_id,
                Expense.date >= start,
                Expense.date <= end,
            )
            .group_by(Expense.category)
        )
        with translate_db_errors("summarize expenses"):
            result = await db.execute(query)
            rows = result.all()

        category_totals: Dict[str, float] = defaultdict(float)
        expense_count = 0
        for category, amount, count in rows:
            category_totals[category] += float(amount or 0)
            expense_count += count

        total = round(sum(category_totals.values()), 2)
        logger.debug("Summary %04d-%02d for %s: %d expenses", year, month, user_id, expense_count)
        return ExpenseSummary(
            month=month,
            year=year,
            total=total,
            category_totals={k: round(v, 2) for k, v in category_totals.items()},
            expense_count=expense_count,
        )


expense_service = ExpenseService()
