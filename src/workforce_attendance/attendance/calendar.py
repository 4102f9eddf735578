"""Month calendar: one status for every day, merged from several sources.

Resolution order, highest first:

1. an approved leave covering the day -> ``leave`` (even over a recorded
   ``present``; leave is what compliance reports rely on)
2. the recorded attendance status for that day
3. ``weekend`` on Saturday and Sunday
4. ``absent``
"""
from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from ..common.datetime_utils import is_weekend, iter_dates, month_bounds
from ..common.validators import require_year_month
from ..core.enums import AttendanceStatus, LeaveStatus
from ..core.exceptions import ValidationError
from ..leaves.model import LeaveRange
from .model import AttendanceDay, CalendarDay


def resolve_status(day: date, recorded: dict[date, AttendanceStatus], leaves: Sequence[LeaveRange]) -> AttendanceStatus:
    if any(leave.covers(day) for leave in leaves):
        return AttendanceStatus.LEAVE
    status = recorded.get(day)
    if status is not None:
        return status
    if is_weekend(day):
        return AttendanceStatus.WEEKEND
    return AttendanceStatus.ABSENT


def build_range(
    employee_id: int,
    start: date,
    end: date,
    days: Iterable[AttendanceDay],
    leaves: Iterable[LeaveRange],
) -> list[CalendarDay]:
    if end < start:
        raise ValidationError(f"range end {end} is before start {start}")

    recorded = {d.work_date: d.status for d in days if d.employee_id == employee_id}
    approved = [
        leave
        for leave in leaves
        if leave.employee_id == employee_id
        and leave.status == LeaveStatus.APPROVED
        and leave.overlaps(start, end)
    ]
    return [CalendarDay(day=d, status=resolve_status(d, recorded, approved)) for d in iter_dates(start, end)]


def build_month(
    employee_id: int,
    year: int,
    month: int,
    days: Iterable[AttendanceDay],
    leaves: Iterable[LeaveRange],
) -> list[CalendarDay]:
    """Every day of the month in order, no gaps."""
    year, month = require_year_month(year, month)
    start, end = month_bounds(year, month)
    return build_range(employee_id, start, end, days, leaves)
