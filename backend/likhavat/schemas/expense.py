"""
Kacchi Likhavat Backend — Expense Schemas
==========================================

What:  Pydantic models for /api/expenses bodies, list and summary responses.

Validation:
    - title and amount are required on create
    - category must be one of EXPENSE_CATEGORIES (default "Other")
    - date accepts ISO 8601 dates or datetimes and is stored in UTC
"""

import uuid
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field, field_validator

from likhavat.models.expense import EXPENSE_CATEGORIES
from likhavat.schemas.common import ApiResponse, CamelModel, parse_datetime


def _check_category(v: Optional[str]) -> Optional[str]:
    if v is None or v == "":
        return None
    if v not in EXPENSE_CATEGORIES:
        raise ValueError(f"Invalid category. Choose from: {', '.join(EXPENSE_CATEGORIES)}")
    return v


def _check_date(v):
    if v is None or v == "":
        return None
    return parse_datetime(v)


class ExpenseCreate(CamelModel):
    room_id: uuid.UUID
    title: str = Field(min_length=1, max_length=255)
    amount: float = Field(allow_inf_nan=False)
    category: Optional[str] = None
    date: Optional[datetime] = None
    description: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, v):
        return _check_category(v)

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        return _check_date(v)


class ExpenseUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    amount: Optional[float] = Field(default=None, allow_inf_nan=False)
    category: Optional[str] = None
    date: Optional[datetime] = None
    description: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, v):
        return _check_category(v)

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        return _check_date(v)


class ExpenseResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    room_id: uuid.UUID
    title: str
    amount: float
    category: str
    date: datetime
    description: str
    created_at: datetime
    updated_at: datetime


class ExpenseListResponse(ApiResponse[List[ExpenseResponse]]):
    total: float = Field(default=0.0, description="Sum of `amount` over the returned expenses")


class ExpenseSummary(CamelModel):
    month: int = Field(description="Calendar month, 1-12")
    year: int
    total: float
    category_totals: Dict[str, float]
    expense_count: int
