"""Great-circle geofence checks.

Distances use the haversine formula on a sphere, which stays accurate near
the poles and across the antimeridian where flat-earth approximations drift.
"""
from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_M
from ..core.exceptions import InvalidCoordinates
from .model import GeofenceResult, GeoPoint


def check_point(point: GeoPoint, label: str = "location") -> None:
    if not (math.isfinite(point.lat) and math.isfinite(point.lng)):
        raise InvalidCoordinates(f"{label} coordinates must be finite")
    if not -90.0 <= point.lat <= 90.0:
        raise InvalidCoordinates(f"{label} latitude out of range: {point.lat}")
    if not -180.0 <= point.lng <= 180.0:
        raise InvalidCoordinates(f"{label} longitude out of range: {point.lng}")


def haversine_meters(a: GeoPoint, b: GeoPoint) -> float:
    """
    Calculate distance between two coordinates using Haversine formula

    Returns:
        float: Distance in meters
    """
    lat1_rad = math.radians(a.lat)
    lat2_rad = math.radians(b.lat)
    delta_lat = math.radians(b.lat - a.lat)
    delta_lon = math.radians(b.lng - a.lng)

    h = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) *
         math.sin(delta_lon / 2) ** 2)
    # Rounding can push h a hair past 1 for antipodal points.
    h = min(1.0, h)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_M * c


def evaluate(office: GeoPoint, reported: GeoPoint, radius_m: float) -> GeofenceResult:
    """
    Measure how far the reported point is from the office and whether it is inside the fence

    Args:
        office: Registered office coordinates
        reported: Coordinates reported by the employee's device
        radius_m: Allowed radius in meters (boundary counts as inside)

    Raises:
        InvalidCoordinates: On non-finite or out-of-range input
    """
    check_point(office, "office")
    check_point(reported, "location")
    try:
        radius = float(radius_m)
    except (TypeError, ValueError):
        raise InvalidCoordinates("radius must be a number")
    if not math.isfinite(radius) or radius <= 0:
        raise InvalidCoordinates(f"radius must be a positive finite number, got {radius_m!r}")

    distance = haversine_meters(office, reported)
    return GeofenceResult(distance_m=distance, within_radius=distance <= radius)
