"""Clock helpers.

Timestamps are stored and compared as naive UTC datetimes, which is what
SQLite hands back through SQLAlchemy.
"""

from datetime import date, datetime, time, UTC
from typing import Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Return the current instant as a naive UTC datetime."""
    return datetime.now(UTC).replace(tzinfo=None)


def to_naive_utc(value: date | datetime) -> datetime:
    """Normalize a date or datetime to a naive UTC datetime.

    Plain dates become midnight of that day. Aware datetimes are converted to
    UTC before dropping the offset.
    """
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value
