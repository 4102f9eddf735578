from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .enums import Role
from .exceptions import AuthenticationError


@dataclass(frozen=True)
class SessionClaims:
    """Identity claims issued by the platform's session layer. Trusted as-is."""

    user_id: int
    organization_id: int
    employee_id: int
    role: Role

    @classmethod
    def from_session(cls, data: Mapping[str, Any]) -> "SessionClaims":
        user_id = data.get("user_id")
        organization_id = data.get("organization_id")
        if user_id is None or organization_id is None:
            raise AuthenticationError("Unauthorized")

        # Older sessions carry no employee_id; the user id doubles as one there.
        employee_id: Optional[Any] = data.get("employee_id") or user_id
        try:
            role = Role(data.get("role") or Role.EMPLOYEE.value)
        except ValueError:
            raise AuthenticationError("Unknown role in session")

        try:
            return cls(
                user_id=int(user_id),
                organization_id=int(organization_id),
                employee_id=int(employee_id),
                role=role,
            )
        except (TypeError, ValueError):
            raise AuthenticationError("Malformed session identifiers")
