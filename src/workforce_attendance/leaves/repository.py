from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import LeaveRange


class LeaveRepository(Protocol):
    def list_approved_for_range(
        self,
        *,
        organization_id: int,
        employee_id: int,
        start_date: date,
        end_date: date,
    ) -> Sequence[LeaveRange]:
        """Approved leave ranges overlapping [start_date, end_date]."""

        raise NotImplementedError
