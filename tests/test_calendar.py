from datetime import date

import pytest

from workforce_attendance.attendance import calendar
from workforce_attendance.attendance.model import AttendanceDay
from workforce_attendance.common.datetime_utils import days_in_month
from workforce_attendance.core.enums import AttendanceStatus, LeaveStatus
from workforce_attendance.core.exceptions import InvalidMonth, ValidationError
from workforce_attendance.leaves.model import LeaveRange

from fakes import EMPLOYEE_ID, ORG_ID, utc


def _present(work_date, employee_id=EMPLOYEE_ID, status=AttendanceStatus.PRESENT):
    return AttendanceDay(
        attendance_id=work_date.toordinal(),
        organization_id=ORG_ID,
        employee_id=employee_id,
        work_date=work_date,
        check_in=utc(work_date.year, work_date.month, work_date.day, 9, 0),
        check_out=None,
        status=status,
    )


@pytest.mark.parametrize("year,month", [(2024, 2), (2023, 2), (2024, 4), (2024, 12)])
def test_month_is_gapless_and_ordered(year, month):
    days = calendar.build_month(EMPLOYEE_ID, year, month, [], [])

    assert len(days) == days_in_month(year, month)
    assert [d.day.day for d in days] == list(range(1, len(days) + 1))


def test_leap_february_has_29_days():
    assert len(calendar.build_month(EMPLOYEE_ID, 2024, 2, [], [])) == 29


def test_default_statuses_are_weekend_and_absent():
    by_day = {d.day: d.status for d in calendar.build_month(EMPLOYEE_ID, 2024, 3, [], [])}

    assert by_day[date(2024, 3, 2)] == AttendanceStatus.WEEKEND  # Saturday
    assert by_day[date(2024, 3, 3)] == AttendanceStatus.WEEKEND
    assert by_day[date(2024, 3, 4)] == AttendanceStatus.ABSENT


def test_recorded_status_beats_weekend():
    saturday = date(2024, 3, 2)
    by_day = {d.day: d.status for d in calendar.build_month(EMPLOYEE_ID, 2024, 3, [_present(saturday)], [])}

    assert by_day[saturday] == AttendanceStatus.PRESENT


def test_approved_leave_beats_recorded_presence():
    monday = date(2024, 3, 4)
    leave = LeaveRange(employee_id=EMPLOYEE_ID, start_date=date(2024, 3, 4), end_date=date(2024, 3, 6))

    by_day = {d.day: d.status for d in calendar.build_month(EMPLOYEE_ID, 2024, 3, [_present(monday)], [leave])}

    assert by_day[monday] == AttendanceStatus.LEAVE
    assert by_day[date(2024, 3, 6)] == AttendanceStatus.LEAVE
    assert by_day[date(2024, 3, 7)] == AttendanceStatus.ABSENT


def test_leave_spilling_into_month_is_clipped():
    leave = LeaveRange(employee_id=EMPLOYEE_ID, start_date=date(2024, 2, 27), end_date=date(2024, 3, 1))

    days = calendar.build_month(EMPLOYEE_ID, 2024, 3, [], [leave])

    assert days[0].status == AttendanceStatus.LEAVE
    assert len(days) == 31


def test_pending_leave_and_other_employees_are_ignored():
    monday = date(2024, 3, 4)
    pending = LeaveRange(employee_id=EMPLOYEE_ID, start_date=monday, end_date=monday, status=LeaveStatus.PENDING)
    other = _present(date(2024, 3, 5), employee_id=99)

    by_day = {d.day: d.status for d in calendar.build_month(EMPLOYEE_ID, 2024, 3, [other], [pending])}

    assert by_day[monday] == AttendanceStatus.ABSENT
    assert by_day[date(2024, 3, 5)] == AttendanceStatus.ABSENT


@pytest.mark.parametrize("month", [0, 13, "x", None])
def test_invalid_month(month):
    with pytest.raises(InvalidMonth):
        calendar.build_month(EMPLOYEE_ID, 2024, month, [], [])


def test_range_end_before_start():
    with pytest.raises(ValidationError):
        calendar.build_range(EMPLOYEE_ID, date(2024, 3, 5), date(2024, 3, 4), [], [])
