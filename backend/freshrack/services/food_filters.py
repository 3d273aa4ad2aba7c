"""
Freshrack Backend — Food Query Filters
========================================

What:  Translates endpoint inputs into SQLAlchemy WHERE clauses on `foods`.
How:   Each builder returns a list of clauses; callers AND them together.
       An empty list means "no filter" (every food).

Rules:
    search    → foodTitle OR description matches the term as a case-insensitive
                regular expression (~ on PostgreSQL, REGEXP on SQLite);
                an invalid pattern fails in the store
    category  → exact match, unless "All" (the wildcard)
    user      → exact match on userEmail
    expired   → expiryDate <  now
    nearly    → now <= expiryDate <= horizon

Empty strings count as "not supplied" for search and category.
"""

from typing import List, Optional

from sqlalchemy import ColumnElement, and_, or_

from freshrack.models.food import Food
from freshrack.services.expiry import ExpiryWindow

ALL_CATEGORIES = "All"


def search_clause(search: str) -> ColumnElement[bool]:
    # Inline flag: SQLite's REGEXP has no separate flags argument
    pattern = f"(?i){search}"
    return or_(
        Food.food_title.regexp_match(pattern),
        Food.description.regexp_match(pattern),
    )


def catalog_filter(
    search: Optional[str] = None,
    category: Optional[str] = None,
) -> List[ColumnElement[bool]]:
    """Clauses for GET /api/foods?search=&category=."""
    clauses: List[ColumnElement[bool]] = []
    if search:
        clauses.append(search_clause(search))
    if category and category != ALL_CATEGORIES:
        clauses.append(Food.category == category)
    return clauses


def owner_filter(user_email: str) -> List[ColumnElement[bool]]:
    return [Food.user_email == user_email]


def expired_clause(window: ExpiryWindow) -> ColumnElement[bool]:
    return Food.expiry_date < window.now


def nearly_expired_clause(window: ExpiryWindow) -> ColumnElement[bool]:
    # Closed on both ends; disjoint from expired_clause at `now`
    return and_(
        Food.expiry_date >= window.now,
        Food.expiry_date <= window.horizon,
    )
