from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles carried in the session claims."""

    EMPLOYEE = "employee"
    HR = "hr"
    ORG_ADMIN = "org_admin"

    @property
    def is_admin(self) -> bool:
        return self in {Role.HR, Role.ORG_ADMIN}


class AttendanceStatus(str, Enum):
    """Per-day status shared by the state machine, calendar and analytics."""

    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"
    HALF_DAY = "half_day"
    LATE = "late"


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AnalyticsRange(str, Enum):
    CURRENT_MONTH = "current_month"
    LAST_30 = "last_30"
