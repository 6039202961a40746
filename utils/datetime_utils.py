"""
Timezone-aware datetime utilities.

All functions return timezone-aware datetime objects in UTC so that
membership join dates are comparable regardless of the server timezone.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Get the current UTC time as a timezone-aware datetime object.

    This replaces datetime.utcnow() which is deprecated in Python 3.12+.

    Returns:
        datetime: Current UTC time with timezone information
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensure a datetime object is timezone-aware and in UTC.

    Naive datetimes (as returned by SQLite) are assumed to already be UTC.

    Args:
        dt: Datetime object (may be naive or timezone-aware)

    Returns:
        datetime: Timezone-aware datetime in UTC
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def duration_ms(started: datetime, finished: datetime = None) -> float:
    """Milliseconds elapsed between two datetimes, rounded to 0.1ms."""
    finished = finished or utc_now()
    return round((ensure_utc(finished) - ensure_utc(started)).total_seconds() * 1000, 1)
