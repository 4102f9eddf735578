from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta

from ..attendance import calendar
from ..attendance.aggregator import aggregate, measured_until
from ..attendance.break_repository import BreakRepository
from ..attendance.model import BreakInterval
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds, now_utc
from ..core.claims import SessionClaims
from ..core.constants import LAST_N_DAYS
from ..core.enums import AnalyticsRange
from ..core.exceptions import ValidationError
from ..leaves.repository import LeaveRepository
from ..shifts.model import ShiftPolicy
from . import engine
from .model import DailyWork

logger = logging.getLogger(__name__)


def resolve_range(range_name: str | None, today: date) -> tuple[AnalyticsRange, date, date]:
    try:
        selected = AnalyticsRange(range_name or AnalyticsRange.CURRENT_MONTH.value)
    except ValueError:
        allowed = ", ".join(r.value for r in AnalyticsRange)
        raise ValidationError(f"Unknown range {range_name!r}; expected one of: {allowed}", field="range")

    if selected == AnalyticsRange.LAST_30:
        return selected, today - timedelta(days=LAST_N_DAYS - 1), today
    start, end = month_bounds(today.year, today.month)
    return selected, start, end


class AnalyticsService:
    def __init__(self, attendance: AttendanceRepository, breaks: BreakRepository, leaves: LeaveRepository):
        self._attendance = attendance
        self._breaks = breaks
        self._leaves = leaves

    def work_analytics(
        self,
        claims: SessionClaims,
        *,
        policy: ShiftPolicy,
        range_name: str | None = None,
        now: datetime | None = None,
    ) -> dict:
        now = now or now_utc()
        today = policy.local_date(now)
        selected, start, end = resolve_range(range_name, today)

        scope = dict(
            organization_id=claims.organization_id,
            employee_id=claims.employee_id,
            start_date=start,
            end_date=end,
        )
        days = self._attendance.list_for_range(**scope)
        by_date: dict[date, list[BreakInterval]] = defaultdict(list)
        for b in self._breaks.list_for_range(**scope):
            by_date[b.work_date].append(b)
        leaves = self._leaves.list_approved_for_range(**scope)

        entries = [
            DailyWork(
                day=d.work_date,
                status=d.status,
                check_in=d.check_in,
                check_out=d.check_out,
                work_minutes=aggregate(d, by_date.get(d.work_date, []), measured_until(d, today, now)).work_minutes,
            )
            for d in days
        ]
        # Days after today have not happened yet and must not count as absences.
        elapsed = calendar.build_range(claims.employee_id, start, min(end, today), days, leaves)
        result = engine.summarize(entries, elapsed, policy)

        logger.debug(
            "analytics: employee=%s range=%s %s..%s days=%d",
            claims.employee_id,
            selected.value,
            start,
            end,
            len(entries),
        )
        return {
            "range": selected.value,
            "range_start": start.isoformat(),
            "range_end": end.isoformat(),
            **result.to_dict(),
        }
