"""
Kacchi Likhavat Backend — Room Route Handlers
==============================================

What:  CRUD for rooms at /api/rooms.
Who:   The dashboard sidebar and the room pages of the frontend.
"""

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.auth import get_current_user_id
from likhavat.database import get_db_session
from likhavat.routes.responses import AUTH_ERRORS, OWNED_RECORD_ERRORS, found
from likhavat.schemas.common import ApiResponse, DeletedRecord
from likhavat.schemas.room import RoomCreate, RoomResponse, RoomUpdate
from likhavat.services.room_service import room_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/rooms", tags=["Rooms"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[RoomResponse],
    response_model_exclude_none=True,
    responses=AUTH_ERRORS,
    summary="Create a room",
    description="Creates a room of type note, journal, story or free (default).",
)
async def create_room(
    payload: RoomCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    room = await room_service.create(db, user_id, payload)
    return ApiResponse(message="Room created successfully", data=RoomResponse.model_validate(room))


@router.get(
    "",
    response_model=ApiResponse[List[RoomResponse]],
    response_model_exclude_none=True,
    responses=AUTH_ERRORS,
    summary="List rooms",
    description="Returns the caller's rooms, most recently updated first.",
)
async def list_rooms(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    rooms = await room_service.list(db, user_id)
    return ApiResponse(
        message=found(len(rooms), "room"),
        data=[RoomResponse.model_validate(room) for room in rooms],
        count=len(rooms),
    )


@router.get(
    "/{room_id}",
    response_model=ApiResponse[RoomResponse],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Get a room",
)
async def get_room(
    room_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    room = await room_service.get(db, user_id, room_id)
    return ApiResponse(message="Room retrieved successfully", data=RoomResponse.model_validate(room))


@router.put(
    "/{room_id}",
    response_model=ApiResponse[RoomResponse],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Update a room",
    description="Partial update of title and content. The room type cannot change.",
)
async def update_room(
    room_id: uuid.UUID,
    payload: RoomUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    room = await room_service.update(db, user_id, room_id, payload)
    return ApiResponse(message="Room updated successfully", data=RoomResponse.model_validate(room))


@router.delete(
    "/{room_id}",
    response_model=ApiResponse[DeletedRecord],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Delete a room",
    description="Deletes the room only. Content that references it is left in place.",
)
async def delete_room(
    room_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    room = await room_service.delete(db, user_id, room_id)
    return ApiResponse(
        message="Room deleted successfully",
        data=DeletedRecord(id=room.id, title=room.title),
    )
