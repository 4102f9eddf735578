import math

import pytest

from workforce_attendance.core.exceptions import InvalidCoordinates
from workforce_attendance.geofence import validator
from workforce_attendance.geofence.model import GeoPoint

from fakes import FAR_AWAY, NEAR_OFFICE, OFFICE


def test_nearby_point_is_within_radius():
    result = validator.evaluate(OFFICE, NEAR_OFFICE, 200)

    assert 14 <= result.distance_m <= 16
    assert result.within_radius is True


def test_far_point_is_rejected_with_distance():
    result = validator.evaluate(OFFICE, FAR_AWAY, 200)

    assert result.within_radius is False
    assert result.rounded_distance > 11_000


def test_distance_is_symmetric():
    a = GeoPoint(51.5007, -0.1246)
    b = GeoPoint(48.8584, 2.2945)

    assert validator.haversine_meters(a, b) == pytest.approx(validator.haversine_meters(b, a))


def test_distance_grows_with_separation():
    near = validator.haversine_meters(OFFICE, GeoPoint(OFFICE.lat + 0.001, OFFICE.lng))
    far = validator.haversine_meters(OFFICE, GeoPoint(OFFICE.lat + 0.01, OFFICE.lng))

    assert 0 < near < far


def test_same_point_is_zero_and_inside():
    result = validator.evaluate(OFFICE, OFFICE, 1)

    assert result.distance_m == 0
    assert result.within_radius


def test_boundary_counts_as_inside():
    distance = validator.haversine_meters(OFFICE, NEAR_OFFICE)

    assert validator.evaluate(OFFICE, NEAR_OFFICE, distance).within_radius
    assert not validator.evaluate(OFFICE, NEAR_OFFICE, distance - 0.01).within_radius


def test_antipodal_points_do_not_blow_up():
    d = validator.haversine_meters(GeoPoint(0, 0), GeoPoint(0, 180))

    assert d == pytest.approx(math.pi * 6_371_000, rel=1e-9)


@pytest.mark.parametrize(
    "point",
    [
        GeoPoint(91, 0),
        GeoPoint(-90.5, 0),
        GeoPoint(0, 180.1),
        GeoPoint(float("nan"), 0),
        GeoPoint(0, float("inf")),
    ],
)
def test_invalid_point_raises(point):
    with pytest.raises(InvalidCoordinates):
        validator.evaluate(OFFICE, point, 200)


@pytest.mark.parametrize("radius", [0, -5, float("nan"), float("inf"), "abc"])
def test_invalid_radius_raises(radius):
    with pytest.raises(InvalidCoordinates):
        validator.evaluate(OFFICE, NEAR_OFFICE, radius)
