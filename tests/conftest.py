from __future__ import annotations

from datetime import datetime, time

import pytest

from workforce_attendance.container import wire
from workforce_attendance.core.claims import SessionClaims
from workforce_attendance.core.enums import Role
from workforce_attendance.geofence.model import OfficeLocation
from workforce_attendance.shifts.model import ShiftPolicy

from fakes import (
    EMPLOYEE_ID,
    OFFICE,
    ORG_ID,
    InMemoryAttendance,
    InMemoryBreaks,
    InMemoryEmployees,
    InMemoryLeaves,
    InMemoryOffices,
    utc,
)


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return utc(2024, 3, 4, 9, 58)


@pytest.fixture
def policy() -> ShiftPolicy:
    return ShiftPolicy(shift_start=time(10, 0), shift_end=time(18, 0))


@pytest.fixture
def claims() -> SessionClaims:
    return SessionClaims(user_id=EMPLOYEE_ID, organization_id=ORG_ID, employee_id=EMPLOYEE_ID, role=Role.EMPLOYEE)


@pytest.fixture
def admin_claims() -> SessionClaims:
    return SessionClaims(user_id=2, organization_id=ORG_ID, employee_id=2, role=Role.HR)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def breaks_repo() -> InMemoryBreaks:
    return InMemoryBreaks()


@pytest.fixture
def offices_repo() -> InMemoryOffices:
    return InMemoryOffices({ORG_ID: OfficeLocation(organization_id=ORG_ID, point=OFFICE)})


@pytest.fixture
def leaves_repo() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees({EMPLOYEE_ID: ORG_ID, 2: ORG_ID})


@pytest.fixture
def container(policy, attendance_repo, breaks_repo, offices_repo, leaves_repo, employees_repo):
    return wire(
        shift_policy=policy,
        attendance_repo=attendance_repo,
        breaks_repo=breaks_repo,
        offices_repo=offices_repo,
        leaves_repo=leaves_repo,
        employees_repo=employees_repo,
    )
