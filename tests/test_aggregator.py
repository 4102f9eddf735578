from datetime import date

from workforce_attendance.attendance.aggregator import aggregate, break_minutes, measured_until
from workforce_attendance.attendance.model import AttendanceDay, BreakInterval
from workforce_attendance.core.enums import AttendanceStatus

from fakes import EMPLOYEE_ID, ORG_ID, utc

DAY = date(2024, 3, 4)


def _day(check_in, check_out=None, work_date=DAY):
    return AttendanceDay(
        attendance_id=1,
        organization_id=ORG_ID,
        employee_id=EMPLOYEE_ID,
        work_date=work_date,
        check_in=check_in,
        check_out=check_out,
        status=AttendanceStatus.PRESENT,
    )


def _break(start, end=None, break_id=1):
    return BreakInterval(
        break_id=break_id,
        organization_id=ORG_ID,
        employee_id=EMPLOYEE_ID,
        work_date=DAY,
        break_start=start,
        break_end=end,
    )


def test_full_day_minus_lunch():
    day = _day(utc(2024, 3, 4, 9, 58), utc(2024, 3, 4, 18, 5))
    lunch = _break(utc(2024, 3, 4, 13, 0), utc(2024, 3, 4, 13, 30))

    result = aggregate(day, [lunch], now=utc(2024, 3, 4, 23, 0))

    assert result.work_minutes == 457
    assert result.break_minutes == 30
    assert result.active_break is False


def test_open_day_runs_to_now():
    day = _day(utc(2024, 3, 4, 9, 0))

    assert aggregate(day, [], now=utc(2024, 3, 4, 11, 30)).work_minutes == 150


def test_open_break_counts_nothing_but_is_flagged():
    day = _day(utc(2024, 3, 4, 9, 0))
    open_break = _break(utc(2024, 3, 4, 10, 0))

    result = aggregate(day, [open_break], now=utc(2024, 3, 4, 10, 20))

    assert result.break_minutes == 0
    assert result.active_break is True
    assert result.work_minutes == 80


def test_breaks_longer_than_work_floor_at_zero():
    day = _day(utc(2024, 3, 4, 9, 0), utc(2024, 3, 4, 9, 10))
    long_break = _break(utc(2024, 3, 4, 9, 0), utc(2024, 3, 4, 10, 0))

    assert aggregate(day, [long_break], now=utc(2024, 3, 4, 12, 0)).work_minutes == 0


def test_missing_day_is_zero():
    result = aggregate(None, [], now=utc(2024, 3, 4, 12, 0))

    assert result.work_minutes == 0
    assert result.active_break is False


def test_partial_minutes_are_truncated():
    total, active = break_minutes(
        [
            _break(utc(2024, 3, 4, 12, 0, 0), utc(2024, 3, 4, 12, 10, 59), break_id=1),
            _break(utc(2024, 3, 4, 15, 0, 0), utc(2024, 3, 4, 15, 0, 30), break_id=2),
        ]
    )

    assert total == 10
    assert active is False


def test_past_open_day_stops_at_check_in():
    day = _day(utc(2024, 3, 1, 9, 0), work_date=date(2024, 3, 1))
    now = utc(2024, 3, 4, 12, 0)

    until = measured_until(day, today=date(2024, 3, 4), now=now)

    assert until == day.check_in
    assert aggregate(day, [], until).work_minutes == 0


def test_current_open_day_runs_on_clock():
    day = _day(utc(2024, 3, 4, 9, 0))
    now = utc(2024, 3, 4, 12, 0)

    assert measured_until(day, today=DAY, now=now) == now
