"""CRUD for memories (journal entries) at /api/memories."""

import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.auth import get_current_user_id
from likhavat.database import get_db_session
from likhavat.routes.responses import AUTH_ERRORS, OWNED_RECORD_ERRORS, found
from likhavat.schemas.common import ApiResponse, DeletedRecord
from likhavat.schemas.memory import MemoryCreate, MemoryResponse, MemoryUpdate
from likhavat.services.base import date_bounds
from likhavat.services.memory_service import memory_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/memories", tags=["Memories"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[MemoryResponse],
    response_model_exclude_none=True,
    responses=AUTH_ERRORS,
    summary="Save a memory",
    description="Send `text`, or `title` and `content` (stored as title, blank line, content).",
)
async def create_memory(
    payload: MemoryCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    memory = await memory_service.create(db, user_id, payload)
    return ApiResponse(message="Memory saved successfully", data=MemoryResponse.model_validate(memory))


@router.get(
    "",
    response_model=ApiResponse[List[MemoryResponse]],
    response_model_exclude_none=True,
    responses=AUTH_ERRORS,
    summary="List memories",
    description="Newest first, optionally filtered by date range and mood.",
)
async def list_memories(
    date_from: Optional[str] = Query(default=None, alias="from", description="Earliest date (inclusive)"),
    date_to: Optional[str] = Query(default=None, alias="to", description="Latest date (inclusive)"),
    mood: Optional[str] = Query(default=None, description="Only this mood"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    start, end = date_bounds(date_from, date_to)
    memories = await memory_service.list(db, user_id, date_from=start, date_to=end, mood=mood)
    return ApiResponse(
        message=found(len(memories), "memory", "memories"),
        data=[MemoryResponse.model_validate(memory) for memory in memories],
        count=len(memories),
    )


@router.get(
    "/{memory_id}",
    response_model=ApiResponse[MemoryResponse],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Get a memory",
)
async def get_memory(
    memory_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    memory = await memory_service.get(db, user_id, memory_id)
    return ApiResponse(message="Memory retrieved successfully", data=MemoryResponse.model_validate(memory))


@router.put(
    "/{memory_id}",
    response_model=ApiResponse[MemoryResponse],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Update a memory",
)
async def update_memory(
    memory_id: uuid.UUID,
    payload: MemoryUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    memory = await memory_service.update(db, user_id, memory_id, payload)
    return ApiResponse(message="Memory updated successfully", data=MemoryResponse.model_validate(memory))


@router.delete(
    "/{memory_id}",
    response_model=ApiResponse[DeletedRecord],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Delete a memory",
)
async def delete_memory(
    memory_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    memory = await memory_service.delete(db, user_id, memory_id)
    return ApiResponse(message="Memory deleted successfully", data=DeletedRecord(id=memory.id))
