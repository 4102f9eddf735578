from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import AttendanceStatus
from ..geofence.model import GeoPoint


@dataclass(frozen=True)
class AttendanceDay:
    """Domain entity: one attendance row per (employee, date), owned by one organization."""

    attendance_id: int
    organization_id: int
    employee_id: int
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus
    check_in_location: Optional[GeoPoint] = None
    check_out_location: Optional[GeoPoint] = None
    device_id: Optional[str] = None
    work_minutes: Optional[int] = None

    def __post_init__(self):
        if self.check_in and self.check_out and self.check_out < self.check_in:
            raise ValueError(
                f"attendance {self.attendance_id}: check_out precedes check_in"
            )

    @property
    def is_checked_out(self) -> bool:
        return self.check_out is not None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "organization_id": self.organization_id,
            "employee_id": self.employee_id,
            "date": self.work_date.isoformat(),
            "check_in": isoformat_or_none(self.check_in),
            "check_out": isoformat_or_none(self.check_out),
            "check_in_lat": self.check_in_location.lat if self.check_in_location else None,
            "check_in_lng": self.check_in_location.lng if self.check_in_location else None,
            "check_out_lat": self.check_out_location.lat if self.check_out_location else None,
            "check_out_lng": self.check_out_location.lng if self.check_out_location else None,
            "status": self.status.value,
            "device_id": self.device_id,
            "work_minutes": self.work_minutes,
        }


@dataclass(frozen=True)
class BreakInterval:
    break_id: int
    organization_id: int
    employee_id: int
    work_date: date
    break_start: datetime
    break_end: Optional[datetime] = None

    def __post_init__(self):
        if self.break_end is not None and self.break_end < self.break_start:
            raise ValueError(f"break {self.break_id}: break_end precedes break_start")

    @property
    def is_open(self) -> bool:
        return self.break_end is None


@dataclass(frozen=True)
class DailyAggregate:
    work_minutes: int
    break_minutes: int
    active_break: bool


@dataclass(frozen=True)
class CalendarDay:
    day: date
    status: AttendanceStatus

    def to_dict(self) -> dict:
        return {"date": self.day.isoformat(), "status": self.status.value}


@dataclass(frozen=True)
class CheckInOutcome:
    attendance_id: int
    check_in: datetime
    distance_m: int
    late: bool


@dataclass(frozen=True)
class CheckOutOutcome:
    attendance_id: int
    check_out: datetime
    distance_m: int
    work_minutes: int
    early: bool
