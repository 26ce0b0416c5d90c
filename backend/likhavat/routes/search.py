"""
Kacchi Likhavat Backend — Global Search Route
==============================================

What:  GET /api/search across all of the caller's content.

Examples:
    /api/search?q=apple                     every category
    /api/search?q=apple&type=notes,stories  two categories
    /api/search?tag=ideas                   notes tagged "ideas"
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query

from likhavat.auth import get_current_user_id
from likhavat.routes.responses import AUTH_ERRORS
from likhavat.schemas.search import SearchResponse
from likhavat.services.search_service import search_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Search"])


@router.get(
    "/search",
    response_model=SearchResponse,
    response_model_exclude_none=True,
    responses=AUTH_ERRORS,
    summary="Search notes, stories, chapters, expenses and memories",
    description=(
        "Case-insensitive substring match of `q`. `type` narrows the categories "
        "(comma-separated). `tag` filters notes by exact tag. At least one of `q` "
        "or `tag` is required. Each category returns at most 20 results."
    ),
)
async def search(
    q: Optional[str] = Query(default=None, max_length=200, description="Text to look for"),
    type: Optional[str] = Query(
        default=None,
        description="notes, stories, chapters, expenses, memories (comma-separated)",
    ),
    tag: Optional[str] = Query(default=None, max_length=100, description="Exact note tag"),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    results = await search_service.search(user_id, q=q, tag=tag, type_param=type)
    return SearchResponse(
        message=f"Found {results.total} results",
        data=results,
        total_results=results.total,
    )
