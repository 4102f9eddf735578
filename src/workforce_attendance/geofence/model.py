from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class OfficeLocation:
    """An organization's registered office and optional radius override."""

    organization_id: int
    point: GeoPoint
    radius_m: Optional[float] = None


@dataclass(frozen=True)
class GeofenceResult:
    distance_m: float
    within_radius: bool

    @property
    def rounded_distance(self) -> int:
        return int(round(self.distance_m))
