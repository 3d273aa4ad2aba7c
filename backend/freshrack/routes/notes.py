"""
Freshrack Backend — Note Route Handlers
=========================================

What:  GET and POST /api/foods/{food_id}/notes.
How:   Delegates to NoteService with the raw path value; the Id is not
       parsed or checked against the foods table.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from freshrack.database import get_db_session
from freshrack.schemas.food import ErrorResponse, InsertResponse
from freshrack.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/foods", tags=["Notes"])


@router.get(
    "/{food_id}/notes",
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List notes for a food",
)
async def list_notes(
    food_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    """Empty array (not 404) when the food has no notes."""
    return await note_service.list_notes(db, food_id)


@router.post(
    "/{food_id}/notes",
    status_code=status.HTTP_201_CREATED,
    response_model=InsertResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Add a note to a food",
)
async def create_note(
    food_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> InsertResponse:
    return await note_service.create_note(db, food_id, payload or {})
