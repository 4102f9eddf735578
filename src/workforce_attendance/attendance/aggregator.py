from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional

from ..common.datetime_utils import whole_minutes
from .model import AttendanceDay, BreakInterval, DailyAggregate


def break_minutes(breaks: Iterable[BreakInterval]) -> tuple[int, bool]:
    """Closed-break minutes and whether any break is still open."""
    total = 0
    active = False
    for b in breaks:
        if b.break_end is None:
            active = True
            continue
        total += max(whole_minutes(b.break_start, b.break_end), 0)
    return total, active


def aggregate(day: Optional[AttendanceDay], breaks: Iterable[BreakInterval], now: datetime) -> DailyAggregate:
    """Effective minutes for one day.

    An open day is measured up to ``now``; break time is subtracted and the
    result floored at zero.
    """
    minutes_on_break, active = break_minutes(breaks)

    if day is None or day.check_in is None:
        return DailyAggregate(work_minutes=0, break_minutes=minutes_on_break, active_break=active)

    end = day.check_out if day.check_out is not None else now
    elapsed = whole_minutes(day.check_in, end)
    return DailyAggregate(
        work_minutes=max(elapsed - minutes_on_break, 0),
        break_minutes=minutes_on_break,
        active_break=active,
    )


def measured_until(day: AttendanceDay, today: date, now: datetime) -> datetime:
    """Instant an open day is measured up to.

    Only the current day runs on the clock. A past day that was never checked
    out counts nothing beyond its check-in.
    """
    if day.check_out is not None or day.check_in is None:
        return now
    return now if day.work_date >= today else day.check_in
