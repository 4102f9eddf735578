from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone
from typing import Iterator

from ..core.exceptions import InvalidDate


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise InvalidDate(f"Invalid date {value!r}, expected YYYY-MM-DD")


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        raise InvalidDate(f"Invalid timestamp {value!r}, expected ISO-8601")
    return ensure_utc(parsed)


def now_utc() -> datetime:
    """Current instant, timezone-aware.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def whole_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes elapsed from start to end, truncated toward zero."""
    return int((end - start).total_seconds() / 60)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def isoformat_or_none(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
