from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import BreakInterval


class BreakRepository(Protocol):
    def get_open_break(self, *, organization_id: int, employee_id: int, work_date: date) -> Optional[BreakInterval]:
        raise NotImplementedError

    def start_break(self, *, organization_id: int, employee_id: int, work_date: date, break_start: datetime) -> int:
        """Open a break. Raises BreakAlreadyActive if one is already open."""

        raise NotImplementedError

    def close_open_break(self, *, organization_id: int, employee_id: int, work_date: date, break_end: datetime) -> bool:
        """Close the open break; False when there is none."""

        raise NotImplementedError

    def list_for_date(self, *, organization_id: int, employee_id: int, work_date: date) -> Sequence[BreakInterval]:
        raise NotImplementedError

    def list_for_range(
        self, *, organization_id: int, employee_id: int, start_date: date, end_date: date
    ) -> Sequence[BreakInterval]:
        raise NotImplementedError
