from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LeaveRange
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_approved_for_range(
        self,
        *,
        organization_id: int,
        employee_id: int,
        start_date: date,
        end_date: date,
    ) -> Sequence[LeaveRange]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, start_date, end_date, status
                FROM leave_requests
                WHERE organization_id=%s AND employee_id=%s AND status=%s
                  AND start_date <= %s AND end_date >= %s
                ORDER BY start_date
                """,
                (organization_id, employee_id, LeaveStatus.APPROVED.value, end_date, start_date),
            )
            rows = fetchall(cur)
            return [
                LeaveRange(
                    employee_id=int(r["employee_id"]),
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                    status=LeaveStatus(r["status"]),
                )
                for r in rows
            ]
