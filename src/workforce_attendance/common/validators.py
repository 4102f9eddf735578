from __future__ import annotations

import math
from typing import Any, Optional

from ..core.exceptions import InvalidCoordinates, InvalidMonth, LocationRequired, ValidationError
from ..geofence.model import GeoPoint


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required", field=field_name)
    return str(value).strip()


def _coordinate(value: Any, field_name: str) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise LocationRequired(field_name)
    if isinstance(value, bool):
        raise InvalidCoordinates(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidCoordinates(f"{field_name} must be a number")
    if not math.isfinite(number):
        raise InvalidCoordinates(f"{field_name} must be finite")
    return number


def require_coordinates(lat: Any, lng: Any) -> GeoPoint:
    """Turn raw request values into a GeoPoint, naming the missing field."""
    return GeoPoint(lat=_coordinate(lat, "lat"), lng=_coordinate(lng, "lng"))


def optional_device_id(value: Any) -> Optional[str]:
    if value is None:
        return None
    device_id = str(value).strip()
    return device_id or None


def require_year_month(year: Any, month: Any) -> tuple[int, int]:
    if year in (None, "") or month in (None, ""):
        raise InvalidMonth("Missing year or month", field="year" if year in (None, "") else "month")
    try:
        y = int(year)
        m = int(month)
    except (TypeError, ValueError):
        raise InvalidMonth("year and month must be integers")
    if not 1 <= m <= 12:
        raise InvalidMonth(f"month must be between 1 and 12, got {m}")
    if not 1 <= y <= 9999:
        raise InvalidMonth(f"year out of range: {y}")
    return y, m
