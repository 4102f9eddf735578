from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.exceptions import BreakAlreadyActive
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, is_duplicate_key, to_db_datetime
from .break_repository import BreakRepository
from .model import BreakInterval


def _to_break(r: Dict[str, Any]) -> BreakInterval:
    return BreakInterval(
        break_id=int(r["id"]),
        organization_id=int(r["organization_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["date"],
        break_start=from_db_datetime(r["break_start"]),
        break_end=from_db_datetime(r.get("break_end")),
    )


class MySQLBreakRepository(BreakRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_open_break(self, *, organization_id: int, employee_id: int, work_date: date) -> Optional[BreakInterval]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, organization_id, employee_id, date, break_start, break_end
                FROM attendance_breaks
                WHERE organization_id=%s AND employee_id=%s AND date=%s AND break_end IS NULL
                """,
                (organization_id, employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_break(r) if r else None

    def start_break(self, *, organization_id: int, employee_id: int, work_date: date, break_start: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_breaks (organization_id, employee_id, date, break_start)
                    VALUES (%s,%s,%s,%s)
                    """,
                    (organization_id, employee_id, work_date, to_db_datetime(break_start)),
                )
            except mysql.connector.IntegrityError as exc:
                # uq_breaks_one_open rejects a second open interval for the day.
                if is_duplicate_key(exc):
                    raise BreakAlreadyActive() from exc
                raise
            return int(cur.lastrowid)

    def close_open_break(self, *, organization_id: int, employee_id: int, work_date: date, break_end: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_breaks
                SET break_end=%s
                WHERE organization_id=%s AND employee_id=%s AND date=%s AND break_end IS NULL
                """,
                (to_db_datetime(break_end), organization_id, employee_id, work_date),
            )
            return cur.rowcount > 0

    def list_for_date(self, *, organization_id: int, employee_id: int, work_date: date) -> Sequence[BreakInterval]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, organization_id, employee_id, date, break_start, break_end
                FROM attendance_breaks
                WHERE organization_id=%s AND employee_id=%s AND date=%s
                ORDER BY break_start
                """,
                (organization_id, employee_id, work_date),
            )
            return [_to_break(r) for r in fetchall(cur)]

    def list_for_range(
        self, *, organization_id: int, employee_id: int, start_date: date, end_date: date
    ) -> Sequence[BreakInterval]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, organization_id, employee_id, date, break_start, break_end
                FROM attendance_breaks
                WHERE organization_id=%s AND employee_id=%s AND date BETWEEN %s AND %s
                ORDER BY date, break_start
                """,
                (organization_id, employee_id, start_date, end_date),
            )
            return [_to_break(r) for r in fetchall(cur)]
