from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from ..geofence.model import GeoPoint
from .model import AttendanceDay


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(
        self, *, organization_id: int, employee_id: int, work_date: date
    ) -> Optional[AttendanceDay]:
        """The day's row, only if it belongs to the organization."""

        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceDay]:
        raise NotImplementedError

    def find_device_use(self, *, organization_id: int, device_id: str, work_date: date) -> Optional[AttendanceDay]:
        """Any row in the organization that checked in from this device on that date."""

        raise NotImplementedError

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
        """Insert the day's row. Raises AlreadyCheckedIn on a duplicate key."""

        raise NotImplementedError

    def close_checkout(
        self,
        *,
        attendance_id: int,
        check_out: datetime,
        location: GeoPoint,
        work_minutes: int,
        device_id: Optional[str] = None,
    ) -> bool:
        """Set check-out only while it is still empty; False if already closed."""

        raise NotImplementedError

    def list_for_range(
        self, *, organization_id: int, employee_id: int, start_date: date, end_date: date
    ) -> Sequence[AttendanceDay]:
        """Rows in [start_date, end_date] ordered by date ascending."""

        raise NotImplementedError

    def list_recent(self, *, organization_id: int, employee_id: int, limit: int) -> Sequence[AttendanceDay]:
        raise NotImplementedError

    def list_for_organization(
        self,
        *,
        organization_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[AttendanceDay]:
        raise NotImplementedError

    def admin_upsert(
        self,
        *,
        organization_id: int,
        employee_id: int,
        work_date: date,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        status: AttendanceStatus,
    ) -> int:
        """Admin-only manual entry; overwrites the day's row if present.

        Raises RecordNotFound when the employee's row for that date belongs to
        another organization.
        """

        raise NotImplementedError

    def admin_update_record(
        self,
        *,
        attendance_id: int,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        status: AttendanceStatus,
    ) -> bool:
        raise NotImplementedError
