from __future__ import annotations

from typing import Optional, Protocol

from ..geofence.model import OfficeLocation


class OfficeLocationRepository(Protocol):
    def get_office_location(self, organization_id: int) -> Optional[OfficeLocation]:
        """None when the organization has no usable office coordinates."""

        raise NotImplementedError
