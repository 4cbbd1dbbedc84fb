"""Time bucket boundaries for noise-level range queries.

Every range is a half-open UTC interval ``[start, end)`` derived from the
calendar date of a reference day. An aware reference value is converted to
UTC before its date is taken; a naive one is read as UTC. Its time-of-day is
ignored.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum


class Bucket(str, Enum):
    """Supported range shapes."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def _as_date(day: datetime | date) -> date:
    if not isinstance(day, datetime):
        return day
    if day.tzinfo is not None:
        day = day.astimezone(timezone.utc)
    return day.date()


def _midnight(d: date) -> datetime:
    return datetime.combine(d, time.min, tzinfo=timezone.utc)


def day_range(day: datetime | date) -> tuple[datetime, datetime]:
    """[00:00 of day, 00:00 of the next day)."""
    start = _midnight(_as_date(day))
    return start, start + timedelta(days=1)


def week_range(day: datetime | date) -> tuple[datetime, datetime]:
    """[Monday 00:00, next Monday 00:00) for the week containing day."""
    d = _as_date(day)
    monday = d - timedelta(days=d.weekday())
    start = _midnight(monday)
    return start, start + timedelta(days=7)


def month_range(day: datetime | date) -> tuple[datetime, datetime]:
    """[first of the month, first of the next month)."""
    d = _as_date(day)
    first = d.replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return _midnight(first), _midnight(next_first)


def year_range(day: datetime | date) -> tuple[datetime, datetime]:
    """[Jan 1 of the year, Jan 1 of the next year)."""
    d = _as_date(day)
    return _midnight(date(d.year, 1, 1)), _midnight(date(d.year + 1, 1, 1))


BUCKET_RANGES: dict[Bucket, Callable[[datetime | date], tuple[datetime, datetime]]] = {
    Bucket.DAY: day_range,
    Bucket.WEEK: week_range,
    Bucket.MONTH: month_range,
    Bucket.YEAR: year_range,
}


def bucket_range(bucket: Bucket, day: datetime | date) -> tuple[datetime, datetime]:
    """Return the ``[start, end)`` interval of the given bucket around day."""
    return BUCKET_RANGES[bucket](day)
