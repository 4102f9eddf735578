from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRange:
    """Leave dates for an employee, both ends inclusive."""

    employee_id: int
    start_date: date
    end_date: date
    status: LeaveStatus = LeaveStatus.APPROVED

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def overlaps(self, start: date, end: date) -> bool:
        return self.start_date <= end and self.end_date >= start
