import itertools
import math

import pytest
from pytest import approx

from geobearing import GeoPoint
from geobearing.geodesic import *

from tests.functions import assert_points_equal


def test_haversine_distance():
    # Sourced from haversine package
    expected = 157.253373
    actual = haversine_distance(GeoPoint(0.0, 0.0), GeoPoint(0.001, 0.001))
    assert actual == approx(expected, abs=1e-6)

    expected = 157_249.381271
    actual = haversine_distance(GeoPoint(0.0, 0.0), GeoPoint(1.0, 1.0))
    assert actual == approx(expected, abs=1e-6)

    # One degree of latitude
    actual = haversine_distance(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0))
    assert actual == approx(111_195, rel=0.01)
    assert actual == approx(6_371_000 * math.pi / 180)

    # Antimeridian test
    expected = 222389.853289
    actual = haversine_distance(GeoPoint(0., 179.), GeoPoint(0., -179.))
    assert actual == approx(expected, abs=1e-6)

    # Pole to pole
    actual = haversine_distance(GeoPoint(90., 0.), GeoPoint(-90., 0.))
    assert actual == approx(math.pi * 6_371_000)

    # Altitude plays no part
    assert haversine_distance(GeoPoint(0., 0., 0.), GeoPoint(0., 0., 5000.)) == 0.

    # Custom radius
    actual = haversine_distance(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0), radius=1.)
    assert actual == approx(math.pi / 180)


def test_haversine_distance_symmetric():
    points = [
        GeoPoint(0., 0.),
        GeoPoint(69.705561, 18.832721, 488.8),
        GeoPoint(-33.8688, 151.2093),
        GeoPoint(89.9, -179.9),
        GeoPoint(0., 180.),
    ]
    for a, b in itertools.product(points, points):
        assert haversine_distance(a, b) == approx(haversine_distance(b, a))

    for a in points:
        assert haversine_distance(a, a) == 0.


def test_haversine_distance_antipodal():
    actual = haversine_distance(GeoPoint(10., 20.), GeoPoint(-10., -160.))
    assert actual == approx(math.pi * 6_371_000)
    assert not math.isnan(actual)


def test_haversine_bearing():
    expected = 45.
    actual = haversine_bearing(GeoPoint(0.0, 0.0), GeoPoint(0.001, 0.001))
    assert actual == approx(expected, abs=1e-4)

    # Cardinal directions
    origin = GeoPoint(0., 0.)
    assert haversine_bearing(origin, GeoPoint(1., 0.)) == approx(0.)
    assert haversine_bearing(origin, GeoPoint(0., 1.)) == approx(90.)
    assert haversine_bearing(origin, GeoPoint(-1., 0.)) == approx(180.)
    assert haversine_bearing(origin, GeoPoint(0., -1.)) == approx(270.)

    # Antimeridian test - east is the short way
    assert haversine_bearing(GeoPoint(0., 179.), GeoPoint(0., -179.)) == approx(90.)
    assert haversine_bearing(GeoPoint(0., -179.), GeoPoint(0., 179.)) == approx(270.)


def test_haversine_bearing_range():
    points = [
        GeoPoint(0., 0.),
        GeoPoint(90., 0.),
        GeoPoint(-90., 0.),
        GeoPoint(45., 180.),
        GeoPoint(-45., -180.),
        GeoPoint(0., -0.0000001),
        GeoPoint(1e-12, 0.),
    ]
    for a, b in itertools.product(points, points):
        bearing = haversine_bearing(a, b)
        assert 0 <= bearing < 360


def test_haversine_bearing_not_reversible():
    a, b = GeoPoint(0., 0.), GeoPoint(10., 10.)
    forward = haversine_bearing(a, b)
    backward = haversine_bearing(b, a)
    assert forward != backward

    # On a sphere the return bearing is not simply the reverse of the initial one
    assert (forward + 180) % 360 != approx(backward, abs=1e-3)


def test_haversine_destination():
    expected = GeoPoint(0.7058494, 0.7059029)
    actual = haversine_destination(GeoPoint(0.0, 0.0), 45., 111_000)
    assert_points_equal(expected, actual)

    # Altitude is carried along
    actual = haversine_destination(GeoPoint(0.0, 0.0, 120.), 90., 1000)
    assert actual.altitude == 120.

    # Round trip through distance and bearing
    start = GeoPoint(69.68, 18.94)
    dest = haversine_destination(start, 300., 5000)
    assert haversine_distance(start, dest) == approx(5000)
    assert haversine_bearing(start, dest) == approx(300.)


def test_total_distance_3d():
    assert total_distance_3d(3., 4.) == approx(5.)
    assert total_distance_3d(3., -4.) == approx(5.)
    assert total_distance_3d(0., 0.) == 0.
    assert total_distance_3d(100., 0.) == 100.
