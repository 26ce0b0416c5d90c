"""
Kacchi Likhavat Backend — User Profile Route Handlers
======================================================

What:  GET and PUT /api/users/{user_id}.
Who:   The profile and settings pages.

Only the caller's own profile is reachable: a different {user_id} is
answered with 403. GET creates the profile on first access and returns
exact stats.
"""

import logging
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.auth import get_current_user_id
from likhavat.database import get_db_session
from likhavat.routes.responses import AUTH_ERRORS, error_response
from likhavat.schemas.common import ApiResponse
from likhavat.schemas.profile import UserProfileResponse, UserProfileUpdate
from likhavat.services.profile_service import profile_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])

PROFILE_ERRORS = {**AUTH_ERRORS, 403: error_response("Not the caller's profile")}


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserProfileResponse],
    response_model_exclude_none=True,
    responses=PROFILE_ERRORS,
    summary="Get the caller's profile",
)
async def get_profile(
    user_id: uuid.UUID,
    caller_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    profile = await profile_service.get_profile(db, caller_id, user_id)
    return ApiResponse(
        message="Profile retrieved successfully",
        data=UserProfileResponse.model_validate(profile),
    )


@router.put(
    "/{user_id}",
    response_model=ApiResponse[UserProfileResponse],
    response_model_exclude_none=True,
    responses=PROFILE_ERRORS,
    summary="Update the caller's profile",
    description="Partial update of displayName, bio, avatarUrl and preferences.",
)
async def update_profile(
    user_id: uuid.UUID,
    payload: UserProfileUpdate,
    caller_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    profile = await profile_service.update_profile(db, caller_id, user_id, payload)
    return ApiResponse(
        message="Profile updated successfully",
        data=UserProfileResponse.model_validate(profile),
    )
