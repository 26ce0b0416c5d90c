"""GET /api/dashboard: recent rooms, recent activity and stats in one call."""

import logging
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.auth import get_current_user_id
from likhavat.database import get_db_session
from likhavat.routes.responses import AUTH_ERRORS
from likhavat.schemas.common import ApiResponse
from likhavat.schemas.dashboard import DashboardData
from likhavat.services.dashboard_service import dashboard_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Dashboard"])


@router.get(
    "/dashboard",
    response_model=ApiResponse[DashboardData],
    response_model_exclude_none=True,
    responses=AUTH_ERRORS,
    summary="Dashboard overview",
    description=(
        "Up to 10 recently updated rooms, the 10 most recent notes, stories, "
        "expenses and memories merged into one feed, and exact content counts."
    ),
)
async def get_dashboard(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    data = await dashboard_service.build(db, user_id)
    return ApiResponse(message="Dashboard data retrieved successfully", data=data)
