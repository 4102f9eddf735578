from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import month_bounds, now_utc
from ..common.validators import require_year_month
from ..core.claims import SessionClaims
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..leaves.repository import LeaveRepository
from ..shifts.model import ShiftPolicy
from . import calendar
from .aggregator import aggregate, measured_until
from .break_repository import BreakRepository
from .model import AttendanceDay, BreakInterval, CalendarDay
from .repository import AttendanceRepository


def _day_view(day: AttendanceDay, breaks: Sequence[BreakInterval], *, today: date, now: datetime) -> dict:
    summary = aggregate(day, breaks, measured_until(day, today, now))
    return {
        **day.to_dict(),
        "break_minutes": summary.break_minutes,
        "break_active": summary.active_break,
        "total_minutes": summary.work_minutes,
    }


class AttendanceService:
    """Read paths over the attendance and break stores."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        breaks: BreakRepository,
        leaves: LeaveRepository,
    ):
        self._attendance = attendance
        self._breaks = breaks
        self._leaves = leaves

    def get_today(self, claims: SessionClaims, *, policy: ShiftPolicy, now: datetime | None = None) -> Optional[dict]:
        now = now or now_utc()
        return self.get_by_date(claims, policy.local_date(now), policy=policy, now=now)

    def get_by_date(
        self,
        claims: SessionClaims,
        work_date: date,
        *,
        policy: ShiftPolicy,
        now: datetime | None = None,
    ) -> Optional[dict]:
        now = now or now_utc()
        record = self._attendance.get_for_employee_and_date(
            organization_id=claims.organization_id, employee_id=claims.employee_id, work_date=work_date
        )
        if not record:
            return None
        breaks = self._breaks.list_for_date(
            organization_id=claims.organization_id, employee_id=claims.employee_id, work_date=work_date
        )
        return _day_view(record, breaks, today=policy.local_date(now), now=now)

    def get_history(
        self,
        claims: SessionClaims,
        *,
        policy: ShiftPolicy,
        limit: int = DEFAULT_HISTORY_LIMIT,
        now: datetime | None = None,
    ) -> list[dict]:
        now = now or now_utc()
        rows = self._attendance.list_recent(
            organization_id=claims.organization_id, employee_id=claims.employee_id, limit=limit
        )
        if not rows:
            return []

        by_date: dict[date, list[BreakInterval]] = defaultdict(list)
        for b in self._breaks.list_for_range(
            organization_id=claims.organization_id,
            employee_id=claims.employee_id,
            start_date=min(r.work_date for r in rows),
            end_date=max(r.work_date for r in rows),
        ):
            by_date[b.work_date].append(b)

        today = policy.local_date(now)
        return [_day_view(r, by_date.get(r.work_date, []), today=today, now=now) for r in rows]

    def get_month(self, claims: SessionClaims, *, year: int, month: int) -> list[CalendarDay]:
        return self.month_for_employee(
            organization_id=claims.organization_id,
            employee_id=claims.employee_id,
            year=year,
            month=month,
        )

    def month_for_employee(self, *, organization_id: int, employee_id: int, year: int, month: int) -> list[CalendarDay]:
        year, month = require_year_month(year, month)
        start, end = month_bounds(year, month)
        days = self._attendance.list_for_range(
            organization_id=organization_id, employee_id=employee_id, start_date=start, end_date=end
        )
        leaves = self._leaves.list_approved_for_range(
            organization_id=organization_id,
            employee_id=employee_id,
            start_date=start,
            end_date=end,
        )
        return calendar.build_month(employee_id, year, month, days, leaves)
