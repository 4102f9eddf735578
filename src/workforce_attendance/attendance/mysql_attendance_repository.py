from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedIn, RecordNotFound
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    from_db_datetime,
    is_duplicate_key,
    point_or_none,
    to_db_datetime,
)
from ..geofence.model import GeoPoint
from .model import AttendanceDay
from .repository import AttendanceRepository

_COLUMNS = """
    id, organization_id, employee_id, date, check_in, check_out,
    check_in_lat, check_in_lng, check_out_lat, check_out_lng,
    status, device_id, work_minutes
"""


def _to_day(r: Dict[str, Any]) -> AttendanceDay:
    return AttendanceDay(
        attendance_id=int(r["id"]),
        organization_id=int(r["organization_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["date"],
        check_in=from_db_datetime(r.get("check_in")),
        check_out=from_db_datetime(r.get("check_out")),
        status=AttendanceStatus(r.get("status") or AttendanceStatus.PRESENT.value),
        check_in_location=point_or_none(r.get("check_in_lat"), r.get("check_in_lng")),
        check_out_location=point_or_none(r.get("check_out_lat"), r.get("check_out_lng")),
        device_id=r.get("device_id"),
        work_minutes=int(r["work_minutes"]) if r.get("work_minutes") is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(
        self, *, organization_id: int, employee_id: int, work_date: date
    ) -> Optional[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE organization_id=%s AND employee_id=%s AND date=%s
                """,
                (organization_id, employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_day(r) if r else None

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_day(r) if r else None

    def find_device_use(self, *, organization_id: int, device_id: str, work_date: date) -> Optional[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE organization_id=%s AND device_id=%s AND date=%s
                LIMIT 1
                """,
                (organization_id, device_id, work_date),
            )
            r = fetchone(cur)
            return _to_day(r) if r else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records
                        (organization_id, employee_id, date, check_in, status, check_in_lat, check_in_lng, device_id)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        organization_id,
                        employee_id,
                        work_date,
                        to_db_datetime(check_in),
                        status.value,
                        location.lat,
                        location.lng,
                        device_id,
                    ),
                )
            except mysql.connector.IntegrityError as exc:
                if is_duplicate_key(exc):
                    raise AlreadyCheckedIn() from exc
                raise
            return int(cur.lastrowid)

    def close_checkout(
        self,
        *,
        attendance_id: int,
        check_out: datetime,
        location: GeoPoint,
        work_minutes: int,
        device_id: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out=%s, check_out_lat=%s, check_out_lng=%s, work_minutes=%s,
                    device_id=COALESCE(device_id, %s)
                WHERE id=%s AND check_out IS NULL
                """,
                (to_db_datetime(check_out), location.lat, location.lng, int(work_minutes), device_id, attendance_id),
            )
            return cur.rowcount > 0

    def list_for_range(
        self, *, organization_id: int, employee_id: int, start_date: date, end_date: date
    ) -> Sequence[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE organization_id=%s AND employee_id=%s AND date BETWEEN %s AND %s
                ORDER BY date ASC
                """,
                (organization_id, employee_id, start_date, end_date),
            )
            return [_to_day(r) for r in fetchall(cur)]

    def list_recent(self, *, organization_id: int, employee_id: int, limit: int) -> Sequence[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE organization_id=%s AND employee_id=%s
                ORDER BY date DESC
                LIMIT %s
                """,
                (organization_id, employee_id, int(limit)),
            )
            return [_to_day(r) for r in fetchall(cur)]

    def list_for_organization(
        self,
        *,
        organization_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[AttendanceDay]:
        clauses = ["organization_id=%s"]
        params: list[object] = [organization_id]

        if start_date is not None:
            clauses.append("date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("date <= %s")
            params.append(end_date)
        params.append(int(limit))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY date DESC, employee_id ASC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_day(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            # One row per (employee, date); it must not be taken over across organizations.
            cur.execute(
                "SELECT organization_id FROM attendance_records WHERE employee_id=%s AND date=%s FOR UPDATE",
                (employee_id, work_date),
            )
            owner = fetchone(cur)
            if owner and int(owner["organization_id"]) != organization_id:
                raise RecordNotFound("Employee not found in this organization")

            cur.execute(
                """
                INSERT INTO attendance_records (organization_id, employee_id, date, check_in, check_out, status)
                VALUES (%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    id=LAST_INSERT_ID(id),
                    check_in=VALUES(check_in),
                    check_out=VALUES(check_out),
                    status=VALUES(status)
                """,
                (
                    organization_id,
                    employee_id,
                    work_date,
                    to_db_datetime(check_in),
                    to_db_datetime(check_out),
                    status.value,
                ),
            )
            return int(cur.lastrowid)

    def admin_update_record(
        self,
        *,
        attendance_id: int,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        status: AttendanceStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in=%s, check_out=%s, status=%s
                WHERE id=%s
                """,
                (to_db_datetime(check_in), to_db_datetime(check_out), status.value, int(attendance_id)),
            )
            return cur.rowcount > 0
