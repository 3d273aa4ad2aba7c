"""
Freshrack Backend — Note SQLAlchemy Model
===========================================

What:  ORM model for the `notes` table: free-text notes attached to a food.
How:   `food_id` holds the raw path string of the food it was posted under.
       There is no foreign key: a note may reference a food that does not
       exist, and deleting a food leaves its notes in place.
Who:   Used by NoteService and by Alembic.

Lifecycle:
    Created by POST /api/foods/{id}/notes, listed by GET on the same path.
    Never updated or deleted.
"""

from typing import Optional

from sqlalchemy import Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from freshrack.database import Base
from freshrack.models.document import IsoText, OpenDocumentMixin


class Note(OpenDocumentMixin, Base):
    """A note attached to a food record by raw string Id."""

    __tablename__ = "notes"

    FIELD_MAP = {
        "foodId": "food_id",
        "addedDate": "added_date",
    }

    food_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    added_date: Mapped[Optional[str]] = mapped_column(IsoText, nullable=True)

    __table_args__ = (
        Index("idx_notes_food_id", "food_id"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, food_id='{self.food_id}')>"
