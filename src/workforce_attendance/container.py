from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Optional

from .analytics.service import AnalyticsService
from .attendance.admin_service import AdminAttendanceService
from .attendance.break_repository import BreakRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.mysql_break_repository import MySQLBreakRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.state_machine import AttendanceStateMachine
from .core.constants import DEFAULT_GEOFENCE_RADIUS_M
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeDirectory
from .employees.repository import EmployeeDirectory
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .organizations.mysql_office_repository import MySQLOfficeLocationRepository
from .organizations.repository import OfficeLocationRepository
from .shifts.model import ShiftPolicy


@dataclass(frozen=True)
class Container:
    shift_policy: ShiftPolicy

    attendance_repo: AttendanceRepository
    breaks_repo: BreakRepository
    offices_repo: OfficeLocationRepository
    leaves_repo: LeaveRepository
    employees_repo: EmployeeDirectory

    state_machine: AttendanceStateMachine
    attendance_service: AttendanceService
    admin_service: AdminAttendanceService
    analytics_service: AnalyticsService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    shift_policy: ShiftPolicy,
    attendance_repo: AttendanceRepository,
    breaks_repo: BreakRepository,
    offices_repo: OfficeLocationRepository,
    leaves_repo: LeaveRepository,
    employees_repo: EmployeeDirectory,
    default_radius_m: float = DEFAULT_GEOFENCE_RADIUS_M,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of whatever repositories are given."""
    state_machine = AttendanceStateMachine(
        attendance_repo,
        breaks_repo,
        offices_repo,
        default_radius_m=default_radius_m,
    )
    attendance_service = AttendanceService(attendance_repo, breaks_repo, leaves_repo)
    admin_service = AdminAttendanceService(attendance_repo, employees_repo, attendance_service)
    analytics_service = AnalyticsService(attendance_repo, breaks_repo, leaves_repo)

    return Container(
        shift_policy=shift_policy,
        attendance_repo=attendance_repo,
        breaks_repo=breaks_repo,
        offices_repo=offices_repo,
        leaves_repo=leaves_repo,
        employees_repo=employees_repo,
        state_machine=state_machine,
        attendance_service=attendance_service,
        admin_service=admin_service,
        analytics_service=analytics_service,
        conn=conn,
    )


def build_container(*, settings: ModuleType) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))

    return wire(
        shift_policy=ShiftPolicy.from_settings(settings),
        attendance_repo=MySQLAttendanceRepository(conn),
        breaks_repo=MySQLBreakRepository(conn),
        offices_repo=MySQLOfficeLocationRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        employees_repo=MySQLEmployeeDirectory(conn),
        default_radius_m=float(getattr(settings, "DEFAULT_GEOFENCE_RADIUS_M", DEFAULT_GEOFENCE_RADIUS_M)),
        conn=conn,
    )
