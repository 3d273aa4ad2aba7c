"""
Freshrack Backend — Food SQLAlchemy Model
===========================================

What:  ORM model for the `foods` table: one row per tracked food item.
How:   Typed columns for the fields the API filters on, plus the open
       `extra` map inherited from OpenDocumentMixin.
Who:   Used by FoodService and by Alembic for schema management.

Query Patterns:
    - Search:       lower(food_title|description) LIKE %term%
    - Category:     WHERE category = :category     (idx_foods_category)
    - Owner:        WHERE user_email = :email      (idx_foods_user_email)
    - Expiry views: WHERE expiry_date < :now / BETWEEN :now AND :horizon
                    ORDER BY expiry_date DESC      (idx_foods_expiry_date)

Dates are ISO-8601 strings, not timestamps: callers may send any text for
expiryDate and it is stored and compared as-is.
"""

from typing import Optional

from sqlalchemy import Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from freshrack.database import Base
from freshrack.models.document import IsoText, OpenDocumentMixin


class Food(OpenDocumentMixin, Base):
    """A perishable item in the household inventory."""

    __tablename__ = "foods"

    FIELD_MAP = {
        "foodTitle": "food_title",
        "description": "description",
        "category": "category",
        "userEmail": "user_email",
        "expiryDate": "expiry_date",
        "addedDate": "added_date",
    }

    food_title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    user_email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    expiry_date: Mapped[Optional[str]] = mapped_column(IsoText, nullable=True)

    # Always server-assigned at insertion (see FoodService.create_food)
    added_date: Mapped[Optional[str]] = mapped_column(IsoText, nullable=True)

    __table_args__ = (
        Index("idx_foods_category", "category"),
        Index("idx_foods_user_email", "user_email"),
        Index("idx_foods_expiry_date", "expiry_date"),
    )

    def __repr__(self) -> str:
        return f"<Food(id={self.id}, title='{self.food_title}', expiry='{self.expiry_date}')>"
