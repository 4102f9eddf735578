from __future__ import annotations

import logging
import math
from typing import Any, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from ..geofence.model import GeoPoint, OfficeLocation
from .repository import OfficeLocationRepository

logger = logging.getLogger(__name__)


def _as_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class MySQLOfficeLocationRepository(OfficeLocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_office_location(self, organization_id: int) -> Optional[OfficeLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, office_lat, office_lng, office_radius_m
                FROM organizations
                WHERE id=%s
                """,
                (organization_id,),
            )
            r = fetchone(cur)
            if not r:
                return None

            lat = _as_float(r.get("office_lat"))
            lng = _as_float(r.get("office_lng"))
            if lat is None or lng is None:
                # Garbled or unset coordinates are treated as missing.
                logger.warning("organization %s has unusable office coordinates", organization_id)
                return None

            radius = _as_float(r.get("office_radius_m"))
            return OfficeLocation(
                organization_id=int(r["id"]),
                point=GeoPoint(lat=lat, lng=lng),
                radius_m=radius if radius and radius > 0 else None,
            )
