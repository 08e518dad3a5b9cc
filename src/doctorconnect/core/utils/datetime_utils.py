"""
Date and time utility functions for Doctor Connect.

MongoDB hands datetimes back naive (UTC), so everything in the application
works with naive UTC values to keep comparisons valid.
"""

from datetime import date, datetime, time, timezone
from typing import Union


def utc_now() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an aware datetime to naive UTC; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def start_of_day(value: Union[date, datetime]) -> datetime:
    """Midnight at the beginning of the given day."""
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, time.min)


def format_long_date(value: Union[date, datetime]) -> str:
    """Format as e.g. 'January 5, 2024'."""
    return f"{value:%B} {value.day}, {value.year}"


def format_period(start: Union[date, datetime], end: Union[date, datetime]) -> str:
    """Human-readable service period."""
    return f"{format_long_date(start)} - {format_long_date(end)}"
