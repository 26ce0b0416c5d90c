"""
Kacchi Likhavat Backend — Note Route Handlers
==============================================

What:  CRUD for notes at /api/notes.
How:   Thin handlers: parse input, call note_service, wrap in the envelope.

Listing filters (all optional):
    GET /api/notes?roomId=<uuid>    notes of one room
    GET /api/notes?tag=ideas        notes carrying the tag "ideas"
"""

import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.auth import get_current_user_id
from likhavat.database import get_db_session
from likhavat.routes.responses import AUTH_ERRORS, OWNED_RECORD_ERRORS, found
from likhavat.schemas.common import ApiResponse, DeletedRecord
from likhavat.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from likhavat.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["Notes"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[NoteResponse],
    response_model_exclude_none=True,
    responses=AUTH_ERRORS,
    summary="Create a note",
    description="Creates a note inside a room. `roomId` is required; the title defaults to 'Untitled Note'.",
)
async def create_note(
    payload: NoteCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    note = await note_service.create(db, user_id, payload)
    return ApiResponse(message="Note created successfully", data=NoteResponse.model_validate(note))


@router.get(
    "",
    response_model=ApiResponse[List[NoteResponse]],
    response_model_exclude_none=True,
    responses=AUTH_ERRORS,
    summary="List notes",
    description="Pinned notes first, then most recently updated.",
)
async def list_notes(
    room_id: Optional[uuid.UUID] = Query(default=None, alias="roomId", description="Only notes of this room"),
    tag: Optional[str] = Query(default=None, max_length=100, description="Only notes carrying this exact tag"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    notes = await note_service.list(db, user_id, room_id=room_id, tag=tag)
    return ApiResponse(
        message=found(len(notes), "note"),
        data=[NoteResponse.model_validate(note) for note in notes],
        count=len(notes),
    )


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Get a note",
)
async def get_note(
    note_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    note = await note_service.get(db, user_id, note_id)
    return ApiResponse(message="Note retrieved successfully", data=NoteResponse.model_validate(note))


@router.put(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Update a note",
    description="Partial update. Sending `tags` replaces the whole tag list.",
)
async def update_note(
    note_id: uuid.UUID,
    payload: NoteUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    note = await note_service.update(db, user_id, note_id, payload)
    return ApiResponse(message="Note updated successfully", data=NoteResponse.model_validate(note))


@router.delete(
    "/{note_id}",
    response_model=ApiResponse[DeletedRecord],
    response_model_exclude_none=True,
    responses=OWNED_RECORD_ERRORS,
    summary="Delete a note",
)
async def delete_note(
    note_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    note = await note_service.delete(db, user_id, note_id)
    return ApiResponse(
        message="Note deleted successfully",
        data=DeletedRecord(id=note.id, title=note.title),
    )
