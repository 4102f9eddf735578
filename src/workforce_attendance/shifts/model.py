from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from types import ModuleType
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def _parse_clock(value: Any, name: str) -> time:
    if isinstance(value, time):
        return value
    try:
        return datetime.strptime(str(value).strip(), "%H:%M").time()
    except ValueError:
        raise ValueError(f"{name} must be HH:MM, got {value!r}")


@dataclass(frozen=True)
class ShiftPolicy:
    """Process-wide working-hours rules.

    Loaded once at start-up and handed to the state machine and analytics
    engine explicitly. Shift times are wall-clock times in ``timezone``.
    """

    shift_start: time
    shift_end: time
    late_tolerance_minutes: int = 5
    early_tolerance_minutes: int = 5
    normal_work_hours_per_day: float = 8
    timezone: str = "UTC"

    def __post_init__(self):
        if self.late_tolerance_minutes < 0 or self.early_tolerance_minutes < 0:
            raise ValueError("tolerance minutes must not be negative")
        if self.normal_work_hours_per_day <= 0:
            raise ValueError("normal_work_hours_per_day must be positive")
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone {self.timezone!r}")

    @classmethod
    def from_settings(cls, settings: ModuleType) -> "ShiftPolicy":
        return cls(
            shift_start=_parse_clock(getattr(settings, "SHIFT_START", "10:00"), "SHIFT_START"),
            shift_end=_parse_clock(getattr(settings, "SHIFT_END", "18:00"), "SHIFT_END"),
            late_tolerance_minutes=int(getattr(settings, "LATE_TOLERANCE_MINUTES", 5)),
            early_tolerance_minutes=int(getattr(settings, "EARLY_TOLERANCE_MINUTES", 5)),
            normal_work_hours_per_day=float(getattr(settings, "NORMAL_WORK_HOURS_PER_DAY", 8)),
            timezone=str(getattr(settings, "ATTENDANCE_TIMEZONE", "UTC")),
        )

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def normal_work_minutes(self) -> float:
        return self.normal_work_hours_per_day * 60

    def local_date(self, instant: datetime) -> date:
        """The calendar day an absolute instant falls on in the policy timezone."""
        return instant.astimezone(self.zone).date()

    def _on(self, day: date, clock: time) -> datetime:
        return datetime.combine(day, clock, tzinfo=self.zone)

    def is_late(self, check_in: datetime) -> bool:
        local = check_in.astimezone(self.zone)
        threshold = self._on(local.date(), self.shift_start) + timedelta(minutes=self.late_tolerance_minutes)
        return local > threshold

    def is_early(self, check_out: datetime) -> bool:
        local = check_out.astimezone(self.zone)
        threshold = self._on(local.date(), self.shift_end) - timedelta(minutes=self.early_tolerance_minutes)
        return local < threshold
