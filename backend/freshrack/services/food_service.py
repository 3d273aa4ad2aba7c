"""
Freshrack Backend — Food Service
==================================

What:  Business logic for food records: create, filter, expiry views, stats,
       lookup, merge-patch update, delete.
How:   Each method builds a query from the request inputs, runs a single
       round trip through the injected AsyncSession, and returns either raw
       documents (read endpoints) or a `{success, ...}` schema (mutations).
Who:   Called by the /api/foods route handlers.

Error Handling:
    - Malformed path Id        → InvalidIdentifierError (500)
    - Addressed Id not present → NotFoundError (404)
    - Any store failure        → DatabaseError (500, driver message)
    List endpoints never raise NotFoundError; no match is an empty list.

Clock:
    `clock` is injectable so tests can pin "now". Every method that needs the
    current time reads the clock once.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from freshrack.exceptions import NotFoundError
from freshrack.models.food import Food
from freshrack.schemas.food import (
    DeleteResponse,
    InsertResponse,
    StatsResponse,
    UpdateResponse,
)
from freshrack.services.expiry import Clock, ExpiryWindow, to_iso, utc_now
from freshrack.services.food_filters import (
    catalog_filter,
    expired_clause,
    nearly_expired_clause,
    owner_filter,
)
from freshrack.services.store import parse_id, store_errors

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class FoodService:
    """
    Request-to-query mapping for the `foods` table.

    Responsibilities:
        - create_food(): stamp addedDate, insert
        - list_foods() / list_foods_by_user(): filtered listings
        - list_nearly_expired() / list_expired() / get_stats(): expiry views
        - get_food() / update_food() / delete_food(): single-record operations
    """

    def __init__(self, clock: Clock = utc_now):
        self.clock = clock

    # ── Create ────────────────────────────────────────────────────────────

    async def create_food(self, db: AsyncSession, payload: Mapping[str, Any]) -> InsertResponse:
        """
        Insert a food record.

        No required fields: an empty body is stored as an empty document.
        `addedDate` is always the server's clock; `_id` is always generated.
        """
        food = Food.from_payload(payload, overrides={"addedDate": to_iso(self.clock())})
        with store_errors("create_food"):
            db.add(food)
            await db.flush()  # commit happens in get_db_session
        logger.info("Food created: %s", food.id)
        return InsertResponse(insertedId=str(food.id))

    # ── Listings ──────────────────────────────────────────────────────────

    async def _find(
        self,
        db: AsyncSession,
        clauses: List[ColumnElement[bool]],
        operation: str,
        order_by: Optional[ColumnElement[Any]] = None,
    ) -> List[Document]:
        query = select(Food)
        if clauses:
            query = query.where(*clauses)
        if order_by is not None:
            query = query.order_by(order_by)
        with store_errors(operation):
            result = await db.execute(query)
            foods = result.scalars().all()
        return [food.to_document() for food in foods]

    async def list_foods(
        self,
        db: AsyncSession,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Document]:
        """All foods matching the optional search term and category."""
        return await self._find(db, catalog_filter(search, category), "list_foods")

    async def list_foods_by_user(self, db: AsyncSession, user_email: str) -> List[Document]:
        return await self._find(db, owner_filter(user_email), "list_foods_by_user")

    async def list_nearly_expired(self, db: AsyncSession) -> List[Document]:
        """Foods expiring within [now, now + 5 days], unsorted."""
        window = ExpiryWindow.at(self.clock())
        return await self._find(db, [nearly_expired_clause(window)], "list_nearly_expired")

    async def list_expired(self, db: AsyncSession) -> List[Document]:
        """Foods whose expiryDate is before now, most recently expired first."""
        window = ExpiryWindow.at(self.clock())
        return await self._find(
            db,
            [expired_clause(window)],
            "list_expired",
            order_by=Food.expiry_date.desc(),
        )

    # ── Stats ─────────────────────────────────────────────────────────────

    async def get_stats(self, db: AsyncSession) -> StatsResponse:
        """
        Counts over the whole collection for a single `now`.

        Query plan:
            SELECT count(*),
                   count(*) FILTER (WHERE expiry_date < :now),
                   count(*) FILTER (WHERE expiry_date BETWEEN :now AND :horizon)
            FROM foods

        `safe` is derived by subtraction; the two windows are disjoint.
        """
        window = ExpiryWindow.at(self.clock())
        query = select(
            func.count().label("total"),
            func.count().filter(expired_clause(window)).label("expired"),
            func.count().filter(nearly_expired_clause(window)).label("nearly_expired"),
        ).select_from(Food)

        with store_errors("get_stats"):
            row = (await db.execute(query)).one()

        total = row.total or 0
        expired = row.expired or 0
        nearly_expired = row.nearly_expired or 0
        return StatsResponse(
            total=total,
            expired=expired,
            nearlyExpired=nearly_expired,
            safe=total - expired - nearly_expired,
        )

    # ── Single record ─────────────────────────────────────────────────────

    async def get_food(self, db: AsyncSession, food_id: str) -> Document:
        """
        Fetch one food by Id.

        Raises:
            InvalidIdentifierError: `food_id` is not a UUID
            NotFoundError: no food has this Id
        """
        uid = parse_id(food_id)
        with store_errors("get_food", food_id=food_id):
            result = await db.execute(select(Food).where(Food.id == uid))
            food = result.scalar_one_or_none()
        if food is None:
            raise NotFoundError(resource="food", resource_id=food_id)
        return food.to_document()

    async def update_food(
        self,
        db: AsyncSession,
        food_id: str,
        payload: Mapping[str, Any],
    ) -> UpdateResponse:
        """
        Merge-patch a food.

        Only keys in `payload` are overwritten; omitted fields are kept.
        The row is locked for the read-modify-write (FOR UPDATE on PostgreSQL).
        modifiedCount is 0 when the patch matched but changed nothing.
        """
        uid = parse_id(food_id)
        with store_errors("update_food", food_id=food_id):
            result = await db.execute(
                select(Food).where(Food.id == uid).with_for_update()
            )
            food = result.scalar_one_or_none()
            if food is None:
                raise NotFoundError(resource="food", resource_id=food_id)

            modified = food.apply_patch(payload)
            await db.flush()  # commit happens in get_db_session

        logger.info("Food %s updated (modified=%s)", food_id, modified)
        return UpdateResponse(modifiedCount=1 if modified else 0)

    async def delete_food(self, db: AsyncSession, food_id: str) -> DeleteResponse:
        """
        Delete a food. Its notes are left in place.

        Raises:
            NotFoundError: nothing was deleted
        """
        uid = parse_id(food_id)
        with store_errors("delete_food", food_id=food_id):
            result = await db.execute(delete(Food).where(Food.id == uid))

        if result.rowcount == 0:
            raise NotFoundError(resource="food", resource_id=food_id)
        logger.info("Food %s deleted", food_id)
        return DeleteResponse(deletedCount=result.rowcount)


# ── Singleton Instance ────────────────────────────────────────────────────
food_service = FoodService()
