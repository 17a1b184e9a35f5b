"""
Geodesic calculations on a spherical earth: great-circle distance, initial
bearing and their inverse.
"""

__all__ = [
    'haversine_bearing', 'haversine_destination', 'haversine_distance',
    'total_distance_3d',
]

import math

from geobearing._const import EARTH_RADIUS_METERS
from geobearing.coordinates import GeoPoint
from geobearing.utils.functions import normalize_360


def haversine_distance(
    point1: GeoPoint,
    point2: GeoPoint,
    radius: float = EARTH_RADIUS_METERS,
) -> float:
    """
    Calculate the great-circle distance in meters between two points using the
    Haversine formula. Altitude is ignored.

    Args:
        point1:
            A GeoPoint

        point2:
            A second GeoPoint

        radius: (float) (Default 6,371,000)
            The radius of the sphere, in meters

    Returns:
        (float) the distance in meters
    """
    lat1, lon1 = math.radians(point1.latitude), math.radians(point1.longitude)
    lat2, lon2 = math.radians(point2.latitude), math.radians(point2.longitude)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = (math.sin(dlat / 2) ** 2 +
         math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2)
    # Rounding can push a fractionally outside [0, 1] for near-antipodal points
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return radius * c


def haversine_bearing(start: GeoPoint, end: GeoPoint) -> float:
    """
    Calculate the initial bearing (forward azimuth) from start to end, in degrees
    clockwise from north.

    Coincident points are not special-cased; the result is 0 but carries no meaning.

    Args:
        start:
            The starting GeoPoint

        end:
            The ending GeoPoint

    Returns:
        (float) the bearing in degrees, in [0, 360)
    """
    lat1, lon1 = math.radians(start.latitude), math.radians(start.longitude)
    lat2, lon2 = math.radians(end.latitude), math.radians(end.longitude)

    dlon = lon2 - lon1

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)

    initial_bearing = math.atan2(y, x)
    return normalize_360(math.degrees(initial_bearing))


def haversine_destination(
    start: GeoPoint,
    bearing_degrees: float,
    distance: float,
    radius: float = EARTH_RADIUS_METERS,
) -> GeoPoint:
    """
    Given a start location, a direction of travel (in degrees clockwise from north)
    and a distance of travel, returns the finish location. The start altitude is
    preserved.

    Args:
        start:
            The starting GeoPoint

        bearing_degrees:
            The direction of travel, in degrees

        distance:
            The amount of movement, in meters

        radius: (float) (Default 6,371,000)
            The radius of the sphere, in meters

    Returns:
        GeoPoint
    """
    lat1 = math.radians(start.latitude)
    lon1 = math.radians(start.longitude)
    bearing_rad = math.radians(bearing_degrees)

    ang_dist = distance / radius

    lat2 = math.asin(math.sin(lat1) * math.cos(ang_dist) +
                     math.cos(lat1) * math.sin(ang_dist) * math.cos(bearing_rad))

    lon2 = lon1 + math.atan2(math.sin(bearing_rad) * math.sin(ang_dist) * math.cos(lat1),
                             math.cos(ang_dist) - math.sin(lat1) * math.sin(lat2))

    return GeoPoint(math.degrees(lat2), math.degrees(lon2), start.altitude)


def total_distance_3d(horizontal: float, altitude_diff: float) -> float:
    """
    Combine a horizontal (great-circle) distance with an altitude difference
    into a straight-line distance. Only a reasonable approximation while the
    altitude difference is small relative to the earth's radius.

    Args:
        horizontal:
            The horizontal distance, in meters

        altitude_diff:
            The difference in altitude, in meters

    Returns:
        (float) the distance in meters
    """
    return math.hypot(horizontal, altitude_diff)
