from __future__ import annotations

from typing import Iterable, Sequence

from ..attendance.model import CalendarDay
from ..core.enums import AttendanceStatus
from ..shifts.model import ShiftPolicy
from .model import DailyWork, WorkAnalytics


def streaks(statuses: Iterable[AttendanceStatus]) -> tuple[int, int]:
    """Longest present run and longest absent run.

    present extends the present run and ends the absent one, absent does the
    reverse, and every other status (leave, holiday, weekend, ...) ends both
    without counting toward either.
    """
    best = worst = 0
    present_run = absent_run = 0
    for status in statuses:
        if status == AttendanceStatus.PRESENT:
            present_run += 1
            absent_run = 0
            best = max(best, present_run)
        elif status == AttendanceStatus.ABSENT:
            absent_run += 1
            present_run = 0
            worst = max(worst, absent_run)
        else:
            present_run = 0
            absent_run = 0
    return best, worst


def summarize(entries: Sequence[DailyWork], calendar: Sequence[CalendarDay], policy: ShiftPolicy) -> WorkAnalytics:
    ordered = sorted(entries, key=lambda e: e.day)
    normal = policy.normal_work_minutes

    total = 0.0
    overtime = 0.0
    late = 0
    early = 0
    daily: list[tuple] = []

    for entry in ordered:
        minutes = max(float(entry.work_minutes), 0.0)
        total += minutes
        overtime += max(minutes - normal, 0.0)
        if entry.check_in is not None and policy.is_late(entry.check_in):
            late += 1
        if entry.check_out is not None and policy.is_early(entry.check_out):
            early += 1
        daily.append((entry.day, minutes))

    best, worst = streaks(c.status for c in sorted(calendar, key=lambda c: c.day))
    return WorkAnalytics(
        total_minutes=total,
        overtime_minutes=overtime,
        late_arrivals=late,
        early_checkouts=early,
        best_streak=best,
        worst_streak=worst,
        daily_minutes=daily,
    )
