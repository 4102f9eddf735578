from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import parse_instant, parse_iso_date
from ..core.claims import SessionClaims
from ..core.constants import DEFAULT_ADMIN_LIST_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import AuthorizationError, RecordNotFound, ValidationError
from ..employees.repository import EmployeeDirectory
from ..shifts.model import ShiftPolicy
from .model import CalendarDay
from .repository import AttendanceRepository
from .service import AttendanceService

logger = logging.getLogger(__name__)


def _require_admin(claims: SessionClaims) -> None:
    if not claims.role.is_admin:
        raise AuthorizationError("Admin access only")


def _parse_status(value: Any) -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value or "").strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"Invalid status {value!r}; expected one of: {allowed}", field="status")


def _parse_moment(value: Any, work_date: date, policy: ShiftPolicy, field_name: str) -> Optional[datetime]:
    """Accept an ISO-8601 instant or a wall-clock HH:MM on the work date."""
    v = str(value).strip() if value is not None else ""
    if not v:
        return None
    if len(v) <= 5 and ":" in v:
        try:
            clock = datetime.strptime(v, "%H:%M").time()
        except ValueError:
            raise ValidationError(f"{field_name} must be HH:MM or ISO-8601", field=field_name)
        return datetime.combine(work_date, clock, tzinfo=policy.zone)
    return parse_instant(v)


class AdminAttendanceService:
    """Manual entry and organization-wide views for HR and org admins."""

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeDirectory, queries: AttendanceService):
        self._attendance = attendance
        self._employees = employees
        self._queries = queries

    def _member_of_org(self, claims: SessionClaims, employee_id: Any) -> int:
        """Employee id as int, only when the employee belongs to the caller's organization."""
        if employee_id in (None, ""):
            raise ValidationError("employee_id is required", field="employee_id")
        try:
            target = int(employee_id)
        except (TypeError, ValueError):
            raise ValidationError("employee_id must be an integer", field="employee_id")

        if self._employees.get_organization_id(target) != claims.organization_id:
            logger.warning(
                "user %s asked for employee %s outside organization %s",
                claims.user_id,
                target,
                claims.organization_id,
            )
            raise RecordNotFound("Employee not found")
        return target

    def mark_attendance(
        self,
        claims: SessionClaims,
        *,
        employee_id: Any,
        work_date: str,
        check_in: Any,
        check_out: Any,
        status: Any,
        policy: ShiftPolicy,
    ) -> int:
        _require_admin(claims)
        target = self._member_of_org(claims, employee_id)

        day = parse_iso_date(work_date)
        new_in = _parse_moment(check_in, day, policy, "check_in")
        new_out = _parse_moment(check_out, day, policy, "check_out")
        if new_in and new_out and new_out < new_in:
            raise ValidationError("check_out cannot be earlier than check_in")

        attendance_id = self._attendance.admin_upsert(
            organization_id=claims.organization_id,
            employee_id=target,
            work_date=day,
            check_in=new_in,
            check_out=new_out,
            status=_parse_status(status),
        )
        logger.info("manual attendance by user %s: employee=%s date=%s", claims.user_id, target, day)
        return attendance_id

    def update_record(
        self,
        claims: SessionClaims,
        *,
        attendance_id: int,
        check_in: Any,
        check_out: Any,
        status: Any,
        policy: ShiftPolicy,
    ) -> None:
        _require_admin(claims)
        record = self._attendance.get_by_id(int(attendance_id))
        if not record or record.organization_id != claims.organization_id:
            raise RecordNotFound("Attendance record not found")

        new_in = _parse_moment(check_in, record.work_date, policy, "check_in")
        new_out = _parse_moment(check_out, record.work_date, policy, "check_out")
        if new_in and new_out and new_out < new_in:
            raise ValidationError("check_out cannot be earlier than check_in")

        ok = self._attendance.admin_update_record(
            attendance_id=record.attendance_id,
            check_in=new_in,
            check_out=new_out,
            status=_parse_status(status),
        )
        if not ok:
            raise RecordNotFound("Attendance record not found")
        logger.info("attendance %s overwritten by user %s", record.attendance_id, claims.user_id)

    def month_for_employee(self, claims: SessionClaims, *, employee_id: Any, year: Any, month: Any) -> list[CalendarDay]:
        _require_admin(claims)
        target = self._member_of_org(claims, employee_id)
        return self._queries.month_for_employee(
            organization_id=claims.organization_id,
            employee_id=target,
            year=year,
            month=month,
        )

    def list_all(
        self,
        claims: SessionClaims,
        *,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: int = DEFAULT_ADMIN_LIST_LIMIT,
    ) -> list[dict]:
        _require_admin(claims)
        start = parse_iso_date(date_from) if date_from else None
        end = parse_iso_date(date_to) if date_to else None
        if start and end and end < start:
            raise ValidationError("date_to is before date_from")
        rows = self._attendance.list_for_organization(
            organization_id=claims.organization_id,
            start_date=start,
            end_date=end,
            limit=limit,
        )
        return [r.to_dict() for r in rows]
