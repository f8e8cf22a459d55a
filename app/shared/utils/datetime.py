"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system are timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    SQLite returns naive datetimes from DateTime(timezone=True) columns;
    normalize at repository boundaries.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def seconds_between(start: datetime | None, end: datetime | None) -> int:
    """
    Whole seconds elapsed from start to end; 0 when either bound is missing.

    Args:
        start: Start of the interval
        end: End of the interval

    Returns:
        Truncated number of seconds (never negative)
    """
    if start is None or end is None:
        return 0
    return max(0, int((ensure_utc(end) - ensure_utc(start)).total_seconds()))
