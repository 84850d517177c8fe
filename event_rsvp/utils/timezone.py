"""Timezone helpers.

All timestamps are stored and compared in UTC. SQLite drops tzinfo on the
way back, so anything read from the database goes through ensure_utc.
"""

from datetime import datetime, timezone
from typing import Optional


def now_utc() -> datetime:
    """Get the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Return dt as an aware UTC datetime.

    Naive datetimes are assumed to already be in UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
