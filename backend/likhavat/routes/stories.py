"""
Kacchi Likhavat Backend — Story and Chapter Route Handlers
===========================================================

What:  CRUD for stories at /api/stories and their chapters at
       /api/stories/chapters.

Route order matters:
    The /chapters routes are declared before /{story_id}. Starlette
    matches in declaration order, and "chapters" must never be offered
    to the story_id converter.

Chapter ordering:
    POST /api/stories/chapters without `order` appends after the highest
    order used so far in that story. See services/story_service.py.
"""

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.auth import get_current_user_id
from likhavat.database import get_db_session
from likhavat.routes.responses import AUTH_ERRORS, OWNED_RECORD_ERRORS, found
from likhavat.schemas.common import ApiResponse, DeletedRecord
from likhavat.schemas.story import (
    ChapterCreate,
    ChapterResponse,
    ChapterUpdate,
    StoryCreate,
    StoryDetailResponse,
    StoryResponse,
    StoryUpdate,
)
from likhavat.services.story_service import chapter_service, story_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stories", tags=["Stories"])


# ══════════════════════════════════════════════════════════════════════════
# Chapters
# ══════════════════════════════════════════════════════════════════════════

@router.post(
    "/chapters",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[ChapterResponse],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Add a chapter to a story",
    description=(
        "Creates a chapter under `storyId`, which must be one of the caller's stories. "
        "Without `order` the chapter is numbered after the story's last chapter."
    ),
)
async def create_chapter(
    payload: ChapterCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    chapter = await chapter_service.create(db, user_id, payload)
    return ApiResponse(message="Chapter created successfully", data=ChapterResponse.model_validate(chapter))


@router.get(
    "/chapters",
    response_model=ApiResponse[List[ChapterResponse]],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="List the chapters of a story",
)
async def list_chapters(
    story_id: uuid.UUID = Query(alias="storyId", description="Story whose chapters to list"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    chapters = await chapter_service.list(db, user_id, story_id)
    return ApiResponse(
        message=found(len(chapters), "chapter"),
        data=[ChapterResponse.model_validate(chapter) for chapter in chapters],
        count=len(chapters),
    )


@router.get(
    "/chapters/{chapter_id}",
    response_model=ApiResponse[ChapterResponse],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Get a chapter",
)
async def get_chapter(
    chapter_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    chapter = await chapter_service.get(db, user_id, chapter_id)
    return ApiResponse(message="Chapter retrieved successfully", data=ChapterResponse.model_validate(chapter))


@router.put(
    "/chapters/{chapter_id}",
    response_model=ApiResponse[ChapterResponse],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Update a chapter",
)
async def update_chapter(
    chapter_id: uuid.UUID,
    payload: ChapterUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    chapter = await chapter_service.update(db, user_id, chapter_id, payload)
    return ApiResponse(message="Chapter updated successfully", data=ChapterResponse.model_validate(chapter))


@router.delete(
    "/chapters/{chapter_id}",
    response_model=ApiResponse[DeletedRecord],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Delete a chapter",
)
async def delete_chapter(
    chapter_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    chapter = await chapter_service.delete(db, user_id, chapter_id)
    return ApiResponse(
        message="Chapter deleted successfully",
        data=DeletedRecord(id=chapter.id, title=chapter.title),
    )


# ══════════════════════════════════════════════════════════════════════════
# Stories
# ══════════════════════════════════════════════════════════════════════════

@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[StoryResponse],
    response_model_exclude_none=True,
    responses=AUTH_ERRORS,
    summary="Create a story",
)
async def create_story(
    payload: StoryCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    story = await story_service.create(db, user_id, payload)
    return ApiResponse(message="Story created successfully", data=StoryResponse.model_validate(story))


@router.get(
    "",
    response_model=ApiResponse[List[StoryResponse]],
    response_model_exclude_none=True,
    responses=AUTH_ERRORS,
    summary="List stories",
    description="Returns the caller's stories, most recently updated first.",
)
async def list_stories(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    stories = await story_service.list(db, user_id)
    return ApiResponse(
        message=found(len(stories), "story", "stories"),
        data=[StoryResponse.model_validate(story) for story in stories],
        count=len(stories),
    )


@router.get(
    "/{story_id}",
    response_model=ApiResponse[StoryDetailResponse],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Get a story with its chapters",
    description="Chapters are embedded in reading order.",
)
async def get_story(
    story_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    story = await story_service.get(db, user_id, story_id)
    chapters = await story_service.chapters_of(db, story.id)
    detail = StoryDetailResponse.model_validate(story).model_copy(
        update={"chapters": [ChapterResponse.model_validate(c) for c in chapters]}
    )
    return ApiResponse(message="Story retrieved successfully", data=detail)


@router.put(
    "/{story_id}",
    response_model=ApiResponse[StoryResponse],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Update a story",
)
async def update_story(
    story_id: uuid.UUID,
    payload: StoryUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    story = await story_service.update(db, user_id, story_id, payload)
    return ApiResponse(message="Story updated successfully", data=StoryResponse.model_validate(story))


@router.delete(
    "/{story_id}",
    response_model=ApiResponse[DeletedRecord],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Delete a story and all of its chapters",
)
async def delete_story(
    story_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    story = await story_service.delete(db, user_id, story_id)
    return ApiResponse(
        message="Story and all chapters deleted successfully",
        data=DeletedRecord(id=story.id, title=story.title),
    )
