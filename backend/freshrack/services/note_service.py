"""
Freshrack Backend — Note Service
==================================

What:  Lists and creates the free-text notes attached to a food.
How:   The food Id from the path is used as a raw string key. It is not
       parsed into a UUID and the food's existence is not checked, so
       listing notes for an unknown or malformed Id is an empty list.
Who:   Called by the /api/foods/{id}/notes route handlers.
"""

import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from freshrack.models.note import Note
from freshrack.schemas.food import InsertResponse
from freshrack.services.expiry import Clock, to_iso, utc_now
from freshrack.services.store import store_errors

logger = logging.getLogger(__name__)


class NoteService:
    """Notes for a food: append-only, never updated or deleted."""

    def __init__(self, clock: Clock = utc_now):
        self.clock = clock

    async def list_notes(self, db: AsyncSession, food_id: str) -> List[Dict[str, Any]]:
        """All notes whose foodId equals `food_id`, unsorted."""
        with store_errors("list_notes", food_id=food_id):
            result = await db.execute(select(Note).where(Note.food_id == food_id))
            notes = result.scalars().all()
        return [note.to_document() for note in notes]

    async def create_note(
        self,
        db: AsyncSession,
        food_id: str,
        payload: Mapping[str, Any],
    ) -> InsertResponse:
        """
        Insert a note under `food_id`.

        `foodId` and `addedDate` are server-assigned and override any values
        in the body.
        """
        note = Note.from_payload(
            payload,
            overrides={"foodId": food_id, "addedDate": to_iso(self.clock())},
        )
        with store_errors("create_note", food_id=food_id):
            db.add(note)
            await db.flush()  # commit happens in get_db_session
        logger.info("Note %s added to food %s", note.id, food_id)
        return InsertResponse(insertedId=str(note.id))


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
