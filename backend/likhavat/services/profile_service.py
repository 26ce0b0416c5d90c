"""
Kacchi Likhavat Backend — User Profile Service
===============================================

What:  Read and update the caller's profile (display name, bio, avatar,
       preferences and stats).
Who:   Called by routes/users.py; get_or_create() is also used at
       registration.

Access rule:
    The path id must equal the authenticated user id. Anything else is a
    403, since the caller is asking for someone else's profile by name.

Reads recompute stats from the content tables and store the exact
values, so the profile never shows drifted counters.
"""

import copy
import logging
import uuid
from typing import Any, Dict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.exceptions import PermissionDeniedError
from likhavat.models.mixins import utcnow
from likhavat.models.user_profile import UserProfile, default_preferences
from likhavat.schemas.profile import UserProfileUpdate
from likhavat.services.base import changes_from, translate_db_errors
from likhavat.services.stats import stats_service

logger = logging.getLogger(__name__)


def merge_preferences(current: Dict[str, Any], incoming: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay `incoming` onto `current` one level deep into editor_settings."""
    merged = copy.deepcopy(current or default_preferences())
    for key, value in incoming.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


class ProfileService:

    def _check_self(self, caller_id: uuid.UUID, target_id: uuid.UUID, action: str) -> None:
        if caller_id != target_id:
            logger.warning("User %s tried to %s profile of %s", caller_id, action, target_id)
            raise PermissionDeniedError(f"You can only {action} your own profile")

    async def get_or_create(self, db: AsyncSession, user_id: uuid.UUID, display_name: str = "") -> UserProfile:
        # populate_existing: counters may have moved via UPDATE statements
        # that bypass the identity map
        result = await db.execute(
            select(UserProfile)
            .where(UserProfile.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        profile = result.scalar_one_or_none()
        if profile is None:
            profile = UserProfile(
                user_id=user_id,
                display_name=display_name,
                preferences=default_preferences(),
            )
            db.add(profile)
            await db.flush()
            logger.info("Created profile for user %s", user_id)
        return profile

    async def get_profile(self, db: AsyncSession, caller_id: uuid.UUID, user_id: uuid.UUID) -> UserProfile:
        self._check_self(caller_id, user_id, "view")
        with translate_db_errors("retrieve the profile"):
            profile = await self.get_or_create(db, user_id)
            stats_service.store(profile, await stats_service.recount(db, user_id))
            await db.flush()
        return profile

    async def update_profile(
        self,
        db: AsyncSession,
        caller_id: uuid.UUID,
        user_id: uuid.UUID,
        payload: UserProfileUpdate,
    ) -> UserProfile:
        self._check_self(caller_id, user_id, "update")
        changes = changes_from(payload)
        preferences = changes.pop("preferences", None)

        with translate_db_errors("update the profile"):
            profile = await self.get_or_create(db, user_id)
            for name, value in changes.items():
                setattr(profile, name, value)
            if preferences:
                # Reassign so the JSON column is flagged dirty
                profile.preferences = merge_preferences(profile.preferences, preferences)
            profile.updated_at = utcnow()
            await db.flush()
        return profile


profile_service = ProfileService()
