"""Request/response contracts for /api/users/{id}."""

import uuid
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from likhavat.schemas.common import CamelModel


class EditorSettings(CamelModel):
    font_size: int = Field(default=16, ge=8, le=48)
    font_family: str = "Inter"
    line_height: float = Field(default=1.6, ge=1.0, le=3.0)


class Preferences(CamelModel):
    theme: Literal["light", "dark", "auto"] = "auto"
    default_template: str = "blank"
    editor_settings: EditorSettings = Field(default_factory=EditorSettings)


class EditorSettingsUpdate(CamelModel):
    font_size: Optional[int] = Field(default=None, ge=8, le=48)
    font_family: Optional[str] = None
    line_height: Optional[float] = Field(default=None, ge=1.0, le=3.0)


class PreferencesUpdate(CamelModel):
    theme: Optional[Literal["light", "dark", "auto"]] = None
    default_template: Optional[str] = None
    editor_settings: Optional[EditorSettingsUpdate] = None


class UserStats(CamelModel):
    created_rooms: int = 0
    notes_count: int = 0
    stories_count: int = 0
    expenses_count: int = 0
    memories_count: int = 0


class UserProfileUpdate(CamelModel):
    display_name: Optional[str] = Field(default=None, max_length=255)
    bio: Optional[str] = None
    avatar_url: Optional[str] = Field(default=None, max_length=1024)
    preferences: Optional[PreferencesUpdate] = None


class UserProfileResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    display_name: str
    bio: str
    avatar_url: str
    preferences: Preferences
    stats: UserStats
    created_at: datetime
    updated_at: datetime
