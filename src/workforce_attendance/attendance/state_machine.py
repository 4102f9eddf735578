"""Per-day attendance transitions.

States: NotStarted -> CheckedIn -> CheckedOut, with a break sub-state
(NoActiveBreak <-> OnBreak) that only exists while CheckedIn. The machine keeps
no state of its own; every call re-reads the persisted row, and the database
keys make concurrent duplicates fail instead of double-applying.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..core.claims import SessionClaims
from ..core.constants import DEFAULT_GEOFENCE_RADIUS_M
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    BreakAlreadyActive,
    DeviceAlreadyUsed,
    DeviceMismatch,
    GeofenceUnavailable,
    InvalidCoordinates,
    NoActiveBreak,
    NotCheckedIn,
    OutsideGeofence,
)
from ..geofence import validator
from ..geofence.model import GeofenceResult, GeoPoint
from ..organizations.repository import OfficeLocationRepository
from ..shifts.model import ShiftPolicy
from .aggregator import aggregate
from .break_repository import BreakRepository
from .model import CheckInOutcome, CheckOutOutcome
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceStateMachine:
    def __init__(
        self,
        attendance: AttendanceRepository,
        breaks: BreakRepository,
        offices: OfficeLocationRepository,
        *,
        default_radius_m: float = DEFAULT_GEOFENCE_RADIUS_M,
    ):
        self._attendance = attendance
        self._breaks = breaks
        self._offices = offices
        self._default_radius_m = float(default_radius_m)

    def _check_geofence(self, organization_id: int, reported: GeoPoint) -> GeofenceResult:
        validator.check_point(reported)

        office = self._offices.get_office_location(organization_id)
        if office is None:
            logger.error("geofence unavailable: organization %s has no office location", organization_id)
            raise GeofenceUnavailable(organization_id)

        radius = office.radius_m or self._default_radius_m
        try:
            result = validator.evaluate(office.point, reported, radius)
        except InvalidCoordinates:
            # The reported point already passed, so the office row is what is broken.
            logger.error("geofence unavailable: organization %s office coordinates invalid", organization_id)
            raise GeofenceUnavailable(organization_id)

        if not result.within_radius:
            logger.warning(
                "outside geofence: org=%s distance=%dm radius=%sm",
                organization_id,
                result.rounded_distance,
                radius,
            )
            raise OutsideGeofence(distance=result.rounded_distance, radius=radius)
        return result

    def check_in(
        self,
        claims: SessionClaims,
        *,
        location: GeoPoint,
        device_id: Optional[str],
        policy: ShiftPolicy,
        now: datetime | None = None,
    ) -> CheckInOutcome:
        now = now or now_utc()
        today = policy.local_date(now)

        existing = self._attendance.get_for_employee_and_date(
            organization_id=claims.organization_id, employee_id=claims.employee_id, work_date=today
        )
        if existing:
            raise AlreadyCheckedIn()

        if device_id:
            used = self._attendance.find_device_use(
                organization_id=claims.organization_id, device_id=device_id, work_date=today
            )
            if used and used.employee_id != claims.employee_id:
                logger.warning(
                    "device %s already used today by employee %s (requested by %s)",
                    device_id,
                    used.employee_id,
                    claims.employee_id,
                )
                raise DeviceAlreadyUsed()

        result = self._check_geofence(claims.organization_id, location)

        attendance_id = self._attendance.create_checkin(
            organization_id=claims.organization_id,
            employee_id=claims.employee_id,
            work_date=today,
            check_in=now,
            location=location,
            device_id=device_id,
            status=AttendanceStatus.PRESENT,
        )
        late = policy.is_late(now)
        logger.info(
            "check-in: employee=%s date=%s distance=%dm late=%s",
            claims.employee_id,
            today,
            result.rounded_distance,
            late,
        )
        return CheckInOutcome(
            attendance_id=attendance_id,
            check_in=now,
            distance_m=result.rounded_distance,
            late=late,
        )

    def check_out(
        self,
        claims: SessionClaims,
        *,
        location: GeoPoint,
        device_id: Optional[str],
        policy: ShiftPolicy,
        now: datetime | None = None,
    ) -> CheckOutOutcome:
        now = now or now_utc()
        today = policy.local_date(now)

        record = self._attendance.get_for_employee_and_date(
            organization_id=claims.organization_id, employee_id=claims.employee_id, work_date=today
        )
        if not record or record.check_in is None:
            raise NotCheckedIn("No check-in found")
        if record.is_checked_out:
            raise AlreadyCheckedOut()
        if record.device_id and device_id and record.device_id != device_id:
            logger.warning("device mismatch on check-out: employee=%s", claims.employee_id)
            raise DeviceMismatch()

        result = self._check_geofence(claims.organization_id, location)

        breaks = self._breaks.list_for_date(
            organization_id=claims.organization_id, employee_id=claims.employee_id, work_date=today
        )
        # Stored minutes match the daily view: elapsed time less closed breaks.
        work_minutes = aggregate(record, breaks, now).work_minutes
        closed = self._attendance.close_checkout(
            attendance_id=record.attendance_id,
            check_out=now,
            location=location,
            work_minutes=work_minutes,
            device_id=device_id,
        )
        if not closed:
            # Another request closed the day between our read and write.
            raise AlreadyCheckedOut()

        early = policy.is_early(now)
        logger.info(
            "check-out: employee=%s date=%s minutes=%d early=%s",
            claims.employee_id,
            today,
            work_minutes,
            early,
        )
        return CheckOutOutcome(
            attendance_id=record.attendance_id,
            check_out=now,
            distance_m=result.rounded_distance,
            work_minutes=work_minutes,
            early=early,
        )

    def break_start(self, claims: SessionClaims, *, policy: ShiftPolicy, now: datetime | None = None) -> int:
        now = now or now_utc()
        today = policy.local_date(now)

        record = self._attendance.get_for_employee_and_date(
            organization_id=claims.organization_id, employee_id=claims.employee_id, work_date=today
        )
        if not record or record.check_in is None:
            raise NotCheckedIn()
        if record.is_checked_out:
            raise NotCheckedIn("Breaks cannot start after check-out")

        if self._breaks.get_open_break(
            organization_id=claims.organization_id, employee_id=claims.employee_id, work_date=today
        ):
            raise BreakAlreadyActive()

        break_id = self._breaks.start_break(
            organization_id=claims.organization_id,
            employee_id=claims.employee_id,
            work_date=today,
            break_start=now,
        )
        logger.info("break started: employee=%s date=%s", claims.employee_id, today)
        return break_id

    def break_end(self, claims: SessionClaims, *, policy: ShiftPolicy, now: datetime | None = None) -> None:
        now = now or now_utc()
        today = policy.local_date(now)

        closed = self._breaks.close_open_break(
            organization_id=claims.organization_id,
            employee_id=claims.employee_id,
            work_date=today,
            break_end=now,
        )
        if not closed:
            raise NoActiveBreak()
        logger.info("break ended: employee=%s date=%s", claims.employee_id, today)
