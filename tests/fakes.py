from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import Optional

from workforce_attendance.attendance.model import AttendanceDay, BreakInterval
from workforce_attendance.core.enums import AttendanceStatus, LeaveStatus
from workforce_attendance.core.exceptions import AlreadyCheckedIn, BreakAlreadyActive, RecordNotFound
from workforce_attendance.geofence.model import GeoPoint, OfficeLocation
from workforce_attendance.leaves.model import LeaveRange

OFFICE = GeoPoint(28.6139, 77.2090)
NEAR_OFFICE = GeoPoint(28.6140, 77.2091)
FAR_AWAY = GeoPoint(28.7000, 77.3000)

ORG_ID = 1
EMPLOYEE_ID = 7


class InMemoryAttendance:
    def __init__(self):
        self.rows: dict[int, AttendanceDay] = {}
        self._id = 0

    def add(self, day: AttendanceDay) -> AttendanceDay:
        self.rows[day.attendance_id] = day
        self._id = max(self._id, day.attendance_id)
        return day

    def _row_for(self, employee_id: int, work_date: date) -> Optional[AttendanceDay]:
        # Mirrors the UNIQUE (employee_id, date) key: at most one row in any organization.
        for r in self.rows.values():
            if r.employee_id == employee_id and r.work_date == work_date:
                return r
        return None

    def get_for_employee_and_date(
        self, *, organization_id: int, employee_id: int, work_date: date
    ) -> Optional[AttendanceDay]:
        row = self._row_for(employee_id, work_date)
        return row if row and row.organization_id == organization_id else None

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceDay]:
        return self.rows.get(attendance_id)

    def find_device_use(self, *, organization_id: int, device_id: str, work_date: date) -> Optional[AttendanceDay]:
        for r in self.rows.values():
            if r.organization_id == organization_id and r.device_id == device_id and r.work_date == work_date:
                return r
        return None

    def create_checkin(
        self,
        *,
        organization_id: int,
        employee_id: int,
        work_date: date,
        check_in: datetime,
        location: GeoPoint,
        device_id: Optional[str],
        status: AttendanceStatus = AttendanceStatus.PRESENT,
    ) -> int:
        if self._row_for(employee_id, work_date):
            raise AlreadyCheckedIn()
        self._id += 1
        self.rows[self._id] = AttendanceDay(
            attendance_id=self._id,
            organization_id=organization_id,
            employee_id=employee_id,
            work_date=work_date,
            check_in=check_in,
            check_out=None,
            status=status,
            check_in_location=location,
            device_id=device_id,
        )
        return self._id

    def close_checkout(
        self,
        *,
        attendance_id: int,
        check_out: datetime,
        location: GeoPoint,
        work_minutes: int,
        device_id: Optional[str] = None,
    ) -> bool:
        row = self.rows.get(attendance_id)
        if row is None or row.check_out is not None:
            return False
        self.rows[attendance_id] = replace(
            row,
            check_out=check_out,
            check_out_location=location,
            work_minutes=work_minutes,
            device_id=row.device_id or device_id,
        )
        return True

    def list_for_range(self, *, organization_id: int, employee_id: int, start_date: date, end_date: date):
        items = [
            r
            for r in self.rows.values()
            if r.organization_id == organization_id
            and r.employee_id == employee_id
            and start_date <= r.work_date <= end_date
        ]
        return sorted(items, key=lambda r: r.work_date)

    def list_recent(self, *, organization_id: int, employee_id: int, limit: int):
        items = [r for r in self.rows.values() if r.organization_id == organization_id and r.employee_id == employee_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def list_for_organization(self, *, organization_id: int, start_date=None, end_date=None, limit: int = 500):
        items = [
            r
            for r in self.rows.values()
            if r.organization_id == organization_id
            and (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
        ]
        items.sort(key=lambda r: (r.work_date, r.employee_id), reverse=True)
        return items[:limit]

    def admin_upsert(self, *, organization_id, employee_id, work_date, check_in, check_out, status) -> int:
        existing = self._row_for(employee_id, work_date)
        if existing and existing.organization_id != organization_id:
            raise RecordNotFound("Employee not found in this organization")
        if existing:
            self.rows[existing.attendance_id] = replace(existing, check_in=check_in, check_out=check_out, status=status)
            return existing.attendance_id
        self._id += 1
        self.rows[self._id] = AttendanceDay(
            attendance_id=self._id,
            organization_id=organization_id,
            employee_id=employee_id,
            work_date=work_date,
            check_in=check_in,
            check_out=check_out,
            status=status,
        )
        return self._id

    def admin_update_record(self, *, attendance_id, check_in, check_out, status) -> bool:
        row = self.rows.get(attendance_id)
        if row is None:
            return False
        self.rows[attendance_id] = replace(row, check_in=check_in, check_out=check_out, status=status)
        return True


class InMemoryBreaks:
    def __init__(self):
        self.rows: list[BreakInterval] = []

    def add(self, interval: BreakInterval) -> BreakInterval:
        self.rows.append(interval)
        return interval

    def _owned(self, b: BreakInterval, organization_id: int, employee_id: int) -> bool:
        return b.organization_id == organization_id and b.employee_id == employee_id

    def get_open_break(self, *, organization_id: int, employee_id: int, work_date: date) -> Optional[BreakInterval]:
        for b in self.rows:
            if self._owned(b, organization_id, employee_id) and b.work_date == work_date and b.is_open:
                return b
        return None

    def start_break(self, *, organization_id: int, employee_id: int, work_date: date, break_start: datetime) -> int:
        if self.get_open_break(organization_id=organization_id, employee_id=employee_id, work_date=work_date):
            raise BreakAlreadyActive()
        interval = BreakInterval(
            break_id=len(self.rows) + 1,
            organization_id=organization_id,
            employee_id=employee_id,
            work_date=work_date,
            break_start=break_start,
        )
        self.rows.append(interval)
        return interval.break_id

    def close_open_break(self, *, organization_id: int, employee_id: int, work_date: date, break_end: datetime) -> bool:
        for i, b in enumerate(self.rows):
            if self._owned(b, organization_id, employee_id) and b.work_date == work_date and b.is_open:
                self.rows[i] = replace(b, break_end=break_end)
                return True
        return False

    def list_for_date(self, *, organization_id: int, employee_id: int, work_date: date):
        return [b for b in self.rows if self._owned(b, organization_id, employee_id) and b.work_date == work_date]

    def list_for_range(self, *, organization_id: int, employee_id: int, start_date: date, end_date: date):
        return [
            b
            for b in self.rows
            if self._owned(b, organization_id, employee_id) and start_date <= b.work_date <= end_date
        ]


@dataclass
class InMemoryEmployees:
    organizations: dict[int, int] = field(default_factory=dict)

    def get_organization_id(self, employee_id: int) -> Optional[int]:
        return self.organizations.get(employee_id)


@dataclass
class InMemoryOffices:
    offices: dict[int, OfficeLocation] = field(default_factory=dict)

    def get_office_location(self, organization_id: int) -> Optional[OfficeLocation]:
        return self.offices.get(organization_id)


@dataclass
class InMemoryLeaves:
    leaves: list[tuple[int, LeaveRange]] = field(default_factory=list)

    def list_approved_for_range(self, *, organization_id: int, employee_id: int, start_date: date, end_date: date):
        return [
            leave
            for org, leave in self.leaves
            if org == organization_id
            and leave.employee_id == employee_id
            and leave.status == LeaveStatus.APPROVED
            and leave.overlaps(start_date, end_date)
        ]


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)

