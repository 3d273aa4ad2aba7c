"""
Freshrack Backend — Expiry Classification Policy
==================================================

What:  Clock access and the date windows used by the expiry views.
How:   A request takes one snapshot of "now" and derives every boundary
       from it, so the expired / nearly-expired / stats queries of that
       request agree with each other.

Classification (string comparison on ISO-8601 text):
    expired          expiryDate <  now
    nearly expired   now <= expiryDate <= now + NEARLY_EXPIRED_DAYS
    safe             everything else (including missing or non-ISO values)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

NEARLY_EXPIRED_DAYS = 5

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """
    Serialize as `YYYY-MM-DDTHH:MM:SS.mmmZ`, the browser `toISOString` form.

    Naive datetimes are taken to be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ExpiryWindow:
    """Boundaries for one request: `now` and `horizon` = now + 5 days."""

    now: str
    horizon: str

    @classmethod
    def at(cls, moment: datetime) -> "ExpiryWindow":
        return cls(
            now=to_iso(moment),
            horizon=to_iso(moment + timedelta(days=NEARLY_EXPIRED_DAYS)),
        )
