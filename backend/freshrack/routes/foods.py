"""
Freshrack Backend — Food Route Handlers
=========================================

What:  The /api/foods surface: create, list/filter, expiry views, stats,
       per-user listing, and single-record get/update/delete.
How:   Extracts path/query/body values and delegates to FoodService.
       Failures propagate as Freshrack exceptions to the handlers in main.py.

Route Order:
    Static segments are registered before "/{food_id}" so that
    GET /api/foods/stats is never read as a lookup of Id "stats":

        /nearly-expired  →  /expired  →  /stats  →  /user/{email}  →  /{food_id}
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from freshrack.database import get_db_session
from freshrack.schemas.food import (
    DeleteResponse,
    ErrorResponse,
    InsertResponse,
    StatsResponse,
    UpdateResponse,
)
from freshrack.services.food_service import food_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/foods", tags=["Foods"])

_ERRORS = {500: {"description": "Server error", "model": ErrorResponse}}
_ID_ERRORS = {
    404: {"description": "Food not found", "model": ErrorResponse},
    **_ERRORS,
}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=InsertResponse,
    responses=_ERRORS,
    summary="Create a food record",
)
async def create_food(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> InsertResponse:
    """Stores the body as-is, stamping `addedDate` with the server clock."""
    return await food_service.create_food(db, payload or {})


@router.get(
    "",
    responses=_ERRORS,
    summary="List foods, optionally filtered",
)
async def list_foods(
    search: Optional[str] = Query(
        default=None,
        description="Case-insensitive substring of foodTitle or description",
    ),
    category: Optional[str] = Query(
        default=None,
        description='Exact category; "All" disables the filter',
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    return await food_service.list_foods(db, search=search, category=category)


@router.get(
    "/nearly-expired",
    responses=_ERRORS,
    summary="Foods expiring within the next 5 days",
)
async def list_nearly_expired(
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    return await food_service.list_nearly_expired(db)


@router.get(
    "/expired",
    responses=_ERRORS,
    summary="Expired foods, most recently expired first",
)
async def list_expired(
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    return await food_service.list_expired(db)


@router.get(
    "/stats",
    response_model=StatsResponse,
    responses=_ERRORS,
    summary="Expiry counts over the whole inventory",
)
async def get_stats(db: AsyncSession = Depends(get_db_session)) -> StatsResponse:
    return await food_service.get_stats(db)


@router.get(
    "/user/{email}",
    responses=_ERRORS,
    summary="Foods owned by a user",
)
async def list_foods_by_user(
    email: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    """Empty array (not 404) when the user owns nothing."""
    return await food_service.list_foods_by_user(db, email)


@router.get(
    "/{food_id}",
    responses=_ID_ERRORS,
    summary="Get a single food",
)
async def get_food(
    food_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    """
    `food_id` is taken as a string and parsed by the service: a value that is
    not a UUID is reported as a 500 with the parser's message, not as a 422.
    """
    return await food_service.get_food(db, food_id)


@router.put(
    "/{food_id}",
    response_model=UpdateResponse,
    responses=_ID_ERRORS,
    summary="Merge-patch a food",
)
async def update_food(
    food_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> UpdateResponse:
    return await food_service.update_food(db, food_id, payload or {})


@router.delete(
    "/{food_id}",
    response_model=DeleteResponse,
    responses=_ID_ERRORS,
    summary="Delete a food",
)
async def delete_food(
    food_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse:
    return await food_service.delete_food(db, food_id)
