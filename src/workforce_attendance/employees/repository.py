from __future__ import annotations

from typing import Optional, Protocol


class EmployeeDirectory(Protocol):
    def get_organization_id(self, employee_id: int) -> Optional[int]:
        """Organization the employee belongs to, or None if unknown."""

        raise NotImplementedError
