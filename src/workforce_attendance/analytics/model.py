from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class DailyWork:
    """One recorded day joined with its aggregated work minutes."""

    day: date
    status: AttendanceStatus
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    work_minutes: float


@dataclass(frozen=True)
class WorkAnalytics:
    """Range totals held at full precision; rounded only in ``to_dict``."""

    total_minutes: float
    overtime_minutes: float
    late_arrivals: int
    early_checkouts: int
    best_streak: int
    worst_streak: int
    daily_minutes: list[tuple[date, float]] = field(default_factory=list)

    @property
    def total_hours(self) -> float:
        return self.total_minutes / 60

    @property
    def overtime_hours(self) -> float:
        return self.overtime_minutes / 60

    def to_dict(self) -> dict:
        return {
            "total_hours": round(self.total_hours, 1),
            "overtime_hours": round(self.overtime_hours, 1),
            "late_arrivals": self.late_arrivals,
            "early_checkouts": self.early_checkouts,
            "best_streak": self.best_streak,
            "worst_streak": self.worst_streak,
            "daily_hours": [
                {"date": d.isoformat(), "hours": round(minutes / 60, 1)} for d, minutes in self.daily_minutes
            ],
        }
