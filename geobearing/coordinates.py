"""
Representation of a specific point on earth, including its altitude
"""

__all__ = ['GeoPoint']

import math
from typing import Optional, Tuple, Union

from geobearing.utils.functions import is_finite_number, round_half_up
from geobearing.utils.logging import LOGGER


class GeoPoint:
    """
    Representation of a point on the globe (i.e., a lat/lon pair) with an altitude
    in meters. Instances are immutable.
    """

    __slots__ = ('_latitude', '_longitude', '_altitude')

    def __init__(
        self,
        latitude: Union[float, int, str],
        longitude: Union[float, int, str],
        altitude: Union[float, int, str, None] = 0.0,
    ):
        lat, lon = float(latitude), float(longitude)
        alt = float(altitude) if altitude is not None else 0.0
        if not (math.isfinite(lat) and math.isfinite(lon) and math.isfinite(alt)):
            raise ValueError(
                f'GeoPoint values must be finite, got ({latitude}, {longitude}, {altitude})'
            )

        # Each full turn of latitude crosses both poles and lands on the same point
        lat = math.fmod(lat, 360)
        while not -90 <= lat <= 90:
            # Crosses one of the poles
            lat = 90 - (lat - 90) if lat > 90 else -90 - (lat + 90)
            lon = lon + 180 if lon < 0 else lon - 180

        lon = math.fmod(lon, 360)
        while not -180 <= lon <= 180:
            # Crosses the antimeridian
            lon = lon - 360 if lon > 180 else lon + 360

        object.__setattr__(self, '_latitude', lat)
        object.__setattr__(self, '_longitude', lon)
        object.__setattr__(self, '_altitude', alt)

    def __setattr__(self, key, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __eq__(self, other):
        if not isinstance(other, GeoPoint):
            return False

        return (
            self.latitude == other.latitude and
            self.longitude == other.longitude and
            self.altitude == other.altitude
        )

    def __hash__(self):
        return hash((self.latitude, self.longitude, self.altitude))

    def __repr__(self):
        return f'<GeoPoint({self.latitude}, {self.longitude}, {self.altitude})>'

    def __reduce__(self):
        return self.__class__, (self.latitude, self.longitude, self.altitude)

    @property
    def latitude(self) -> float:
        return self._latitude

    @property
    def longitude(self) -> float:
        return self._longitude

    @property
    def altitude(self) -> float:
        return self._altitude

    @classmethod
    def from_reading(
        cls,
        latitude: Optional[float],
        longitude: Optional[float],
        altitude: Optional[float] = None,
    ) -> Optional['GeoPoint']:
        """
        Creates a GeoPoint from a raw location fix, as reported by a positioning
        sensor. Sensors frequently report missing fields; a fix without a usable
        latitude or longitude yields None rather than raising. A missing or
        unusable altitude is treated as 0.

        Args:
            latitude:
                The reported latitude, in degrees

            longitude:
                The reported longitude, in degrees

            altitude:
                (Optional) the reported altitude, in meters

        Returns:
            GeoPoint, or None if the fix is unusable
        """
        if not (is_finite_number(latitude) and is_finite_number(longitude)):
            LOGGER.debug('Discarding location fix (%s, %s)', latitude, longitude)
            return None

        if abs(latitude) > 90 or abs(longitude) > 180:  # type: ignore
            LOGGER.debug('Discarding out of range location fix (%s, %s)', latitude, longitude)
            return None

        return cls(
            latitude,  # type: ignore
            longitude,  # type: ignore
            altitude if is_finite_number(altitude) else 0.0
        )

    @classmethod
    def from_dms(
        cls,
        lat: Tuple[int, int, float, str],
        lon: Tuple[int, int, float, str],
        altitude: float = 0.0,
    ) -> 'GeoPoint':
        """
        Creates a GeoPoint from a Degree Minutes Seconds (lat, lon) pair.

        The quadrant value should consist of either 'N'/'S' (latitude) or 'E'/'W' (longitude)

        Args:
            lat:
                Latitude, as a 4-tuple of
                ( <degrees> (float),  <minutes> (float), <seconds> (float), <quadrant> (str) )
            lon:
                Longitude, as a 4-tuple of
                ( <degrees> (float),  <minutes> (float), <seconds> (float), <quadrant> (str))
            altitude:
                (Optional) the altitude, in meters

        Returns:
            GeoPoint
        """
        def convert(dms: Tuple[int, int, float, str]):
            mult = -1 if dms[3] in ('S', 'W') else 1
            return mult * (dms[0] + (dms[1] / 60) + (dms[2] / 3600))

        return cls(convert(lat), convert(lon), altitude)

    def to_dms(self) -> Tuple[Tuple[int, int, float, str], Tuple[int, int, float, str]]:
        """
        Convert the latitude and longitude to tuples of degrees, minutes,
        seconds, hemisphere

        Returns:
            (latitude, longitude), each as (degrees, minutes, seconds, hemisphere)
        """
        def convert(dd: float) -> Tuple[int, int, float]:
            minutes, seconds = divmod(abs(dd) * 3600, 60)
            degrees, minutes = divmod(minutes, 60)
            return int(degrees), int(minutes), round_half_up(seconds, 5)

        return (
            (*convert(self.latitude), 'N' if self.latitude >= 0 else 'S'),
            (*convert(self.longitude), 'E' if self.longitude >= 0 else 'W'),
        )

    def to_float(self) -> Tuple[float, float, float]:
        """
        Converts the point to a tuple of (latitude, longitude, altitude)
        """
        return self.latitude, self.longitude, self.altitude
