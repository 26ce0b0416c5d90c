"""
Kacchi Likhavat Backend — Expense Route Handlers
=================================================

What:  CRUD for expenses at /api/expenses plus the monthly summary.

Query parameters for GET /api/expenses:
    from, to   inclusive ISO 8601 bounds on the expense date
    category   exact category name

/summary is declared before /{expense_id} so it is never parsed as an id.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.auth import get_current_user_id
from likhavat.database import get_db_session
from likhavat.routes.responses import AUTH_ERRORS, OWNED_RECORD_ERRORS, found
from likhavat.schemas.common import ApiResponse, DeletedRecord
from likhavat.schemas.expense import (
    ExpenseCreate,
    ExpenseListResponse,
    ExpenseResponse,
    ExpenseSummary,
    ExpenseUpdate,
)
from likhavat.services.base import date_bounds
from likhavat.services.expense_service import expense_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/expenses", tags=["Expenses"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[ExpenseResponse],
    response_model_exclude_none=True,
    responses=AUTH_ERRORS,
    summary="Record an expense",
    description="`roomId`, `title` and `amount` are required. Category defaults to 'Other', date to now.",
)
async def create_expense(
    payload: ExpenseCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    expense = await expense_service.create(db, user_id, payload)
    return ApiResponse(message="Expense added successfully", data=ExpenseResponse.model_validate(expense))


@router.get(
    "",
    response_model=ExpenseListResponse,
    response_model_exclude_none=True,
    responses=AUTH_ERRORS,
    summary="List expenses",
    description="Newest first. The envelope's `total` is the sum of the returned amounts.",
)
async def list_expenses(
    date_from: Optional[str] = Query(default=None, alias="from", description="Earliest date (inclusive)"),
    date_to: Optional[str] = Query(default=None, alias="to", description="Latest date (inclusive)"),
    category: Optional[str] = Query(default=None, description="Only this category"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    start, end = date_bounds(date_from, date_to)
    expenses = await expense_service.list(db, user_id, date_from=start, date_to=end, category=category)
    return ExpenseListResponse(
        message=found(len(expenses), "expense"),
        data=[ExpenseResponse.model_validate(expense) for expense in expenses],
        count=len(expenses),
        total=round(sum(expense.amount for expense in expenses), 2),
    )


@router.get(
    "/summary",
    response_model=ApiResponse[ExpenseSummary],
    response_model_exclude_none=True,
    responses=AUTH_ERRORS,
    summary="Monthly expense summary",
    description="Totals per category for one calendar month (default: the current UTC month).",
)
async def expense_summary(
    month: Optional[int] = Query(default=None, ge=1, le=12, description="Month, 1-12"),
    year: Optional[int] = Query(default=None, ge=1, le=9999, description="Four-digit year"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    summary = await expense_service.monthly_summary(db, user_id, month=month, year=year)
    return ApiResponse(message="Monthly summary generated successfully", data=summary)


@router.get(
    "/{expense_id}",
    response_model=ApiResponse[ExpenseResponse],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Get an expense",
)
async def get_expense(
    expense_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    expense = await expense_service.get(db, user_id, expense_id)
    return ApiResponse(message="Expense retrieved successfully", data=ExpenseResponse.model_validate(expense))


@router.put(
    "/{expense_id}",
    response_model=ApiResponse[ExpenseResponse],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Update an expense",
)
async def update_expense(
    expense_id: uuid.UUID,
    payload: ExpenseUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    expense = await expense_service.update(db, user_id, expense_id, payload)
    return ApiResponse(message="Expense updated successfully", data=ExpenseResponse.model_validate(expense))


@router.delete(
    "/{expense_id}",
    response_model=ApiResponse[DeletedRecord],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Delete an expense",
)
async def delete_expense(
    expense_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    expense = await expense_service.delete(db, user_id, expense_id)
    return ApiResponse(
        message="Expense deleted successfully",
        data=DeletedRecord(id=expense.id, title=expense.title),
    )
