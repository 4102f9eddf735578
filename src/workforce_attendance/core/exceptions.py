from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    ``code`` is the stable name reported to clients and ``http_status`` the
    status the HTTP layer answers with.
    """

    code = "DomainError"
    http_status = 400

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> dict:
        return {"message": self.message, "code": self.code, **self.extra}


# Client input
class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "ValidationError"


class LocationRequired(ValidationError):
    code = "LocationRequired"

    def __init__(self, field: str):
        super().__init__(f"Location required: missing '{field}'", field=field)


class InvalidCoordinates(ValidationError):
    code = "InvalidCoordinates"


class InvalidMonth(ValidationError):
    code = "InvalidMonth"


class InvalidDate(ValidationError):
    code = "InvalidDate"


# State conflicts
class StateConflictError(DomainError):
    """An attendance transition is not legal from the current state."""

    code = "StateConflict"


class AlreadyCheckedIn(StateConflictError):
    code = "AlreadyCheckedIn"

    def __init__(self, message: str = "You have already checked in today"):
        super().__init__(message)


class AlreadyCheckedOut(StateConflictError):
    code = "AlreadyCheckedOut"

    def __init__(self, message: str = "Already checked out"):
        super().__init__(message)


class NotCheckedIn(StateConflictError):
    code = "NotCheckedIn"

    def __init__(self, message: str = "Please check in first"):
        super().__init__(message)


class BreakAlreadyActive(StateConflictError):
    code = "BreakAlreadyActive"

    def __init__(self, message: str = "You already have an active break"):
        super().__init__(message)


class NoActiveBreak(StateConflictError):
    code = "NoActiveBreak"

    def __init__(self, message: str = "No active break found"):
        super().__init__(message)


# Policy violations
class PolicyViolation(DomainError):
    code = "PolicyViolation"


class OutsideGeofence(PolicyViolation):
    code = "OutsideGeofence"

    def __init__(self, distance: int, radius: Optional[float] = None):
        super().__init__("You are outside office radius", distance=distance)
        self.distance = distance
        self.radius = radius


class DeviceAlreadyUsed(PolicyViolation):
    code = "DeviceAlreadyUsed"
    http_status = 403

    def __init__(self):
        super().__init__("Only one check-in is allowed per device")


class DeviceMismatch(PolicyViolation):
    code = "DeviceMismatch"
    http_status = 403

    def __init__(self):
        super().__init__("You must check out from the same device you checked in with")


# Tenant configuration
class ConfigurationError(DomainError):
    code = "ConfigurationError"
    http_status = 503


class GeofenceUnavailable(ConfigurationError):
    """Office location missing or unusable; geofence checks fail closed."""

    code = "OfficeLocationMissing"

    def __init__(self, organization_id: int):
        super().__init__("Office location is not configured for this organization")
        self.organization_id = organization_id


# Access
class AuthenticationError(DomainError):
    """Raised when the session carries no usable claims."""

    code = "Unauthorized"
    http_status = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "Forbidden"
    http_status = 403


class RecordNotFound(DomainError):
    code = "NotFound"
    http_status = 404


class PersistenceError(DomainError):
    code = "PersistenceError"
    http_status = 500
