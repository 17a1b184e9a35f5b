"""
Projection of the bearing to a target into a smoothed 3D placement around the
observer's viewpoint
"""

__all__ = ['BearingProjector', 'BearingResult', 'DirectionVector', 'project']

import math
import threading
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from geobearing.config import EngineConfig
from geobearing.coordinates import GeoPoint
from geobearing.geodesic import haversine_bearing, haversine_distance, total_distance_3d
from geobearing.utils.functions import normalize_180
from geobearing.utils.mixins import LoggingMixin


class BearingResult:
    """
    The direction and distance from an observer to a target, relative to the
    direction the observer is facing.

    Args:
        relative_bearing:
            Degrees in (-180, 180]. 0 is straight ahead, positive is clockwise.

        elevation:
            The (clamped) elevation angle toward the target, in radians

        horizontal_distance:
            The great-circle distance to the target, in meters

        total_distance:
            The straight-line distance to the target including altitude, in meters

        bearing:
            The absolute bearing to the target in degrees [0, 360), or None if it
            could not be determined

        degenerate:
            True if the observer coincides with the target and the relative bearing
            was carried over from the last valid reading
    """

    __slots__ = (
        'relative_bearing', 'elevation', 'horizontal_distance', 'total_distance',
        'bearing', 'degenerate'
    )

    def __init__(
        self,
        relative_bearing: float,
        elevation: float,
        horizontal_distance: float,
        total_distance: float,
        bearing: Optional[float] = None,
        degenerate: bool = False,
    ):
        self.relative_bearing = relative_bearing
        self.elevation = elevation
        self.horizontal_distance = horizontal_distance
        self.total_distance = total_distance
        self.bearing = bearing
        self.degenerate = degenerate

    def __eq__(self, other) -> bool:
        if not isinstance(other, BearingResult):
            return False

        return self.to_tuple() == other.to_tuple()

    def __hash__(self):
        return hash(self.to_tuple())

    def __repr__(self):
        return (
            f'<BearingResult {self.relative_bearing:.2f}deg '
            f'elev={math.degrees(self.elevation):.2f}deg '
            f'dist={self.total_distance:.1f}m{" (degenerate)" if self.degenerate else ""}>'
        )

    @property
    def elevation_degrees(self) -> float:
        return math.degrees(self.elevation)

    def to_tuple(self) -> Tuple:
        return (
            self.relative_bearing, self.elevation, self.horizontal_distance,
            self.total_distance, self.bearing, self.degenerate
        )


class DirectionVector:
    """
    A point on a fixed-radius sphere around the observer's viewpoint, marking where
    the target should be drawn. Uses a right-handed, y-up frame in which negative z
    is straight ahead.
    """

    __slots__ = ('_xyz',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._xyz = np.array([x, y, z], dtype=float)
        self._xyz.setflags(write=False)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DirectionVector):
            return False

        return bool(np.array_equal(self._xyz, other._xyz))

    def __hash__(self):
        return hash(self.to_float())

    def __repr__(self):
        return f'<DirectionVector({self.x}, {self.y}, {self.z})>'

    @property
    def x(self) -> float:
        return float(self._xyz[0])

    @property
    def y(self) -> float:
        return float(self._xyz[1])

    @property
    def z(self) -> float:
        return float(self._xyz[2])

    @property
    def magnitude(self) -> float:
        return float(np.linalg.norm(self._xyz))

    @classmethod
    def neutral(cls) -> 'DirectionVector':
        """The placeholder vector held before any projection has been made"""
        return cls()

    @classmethod
    def from_array(cls, arr: Union[np.ndarray, Sequence[float]]) -> 'DirectionVector':
        x, y, z = (float(v) for v in arr)
        return cls(x, y, z)

    def smoothed_toward(self, raw: 'DirectionVector', factor: float) -> 'DirectionVector':
        """
        Moves each axis a fraction of the way toward a freshly computed vector.

        Args:
            raw:
                The newly computed target vector

            factor:
                The fraction of the distance to cover, in (0, 1]

        Returns:
            DirectionVector
        """
        return self.from_array(self._xyz + (raw._xyz - self._xyz) * factor)

    def to_array(self) -> np.ndarray:
        return self._xyz.copy()

    def to_float(self) -> Tuple[float, float, float]:
        return self.x, self.y, self.z


def _placement(relative_bearing: float, elevation: float, radius: float) -> DirectionVector:
    angle_rad = math.radians(relative_bearing)
    return DirectionVector(
        radius * math.sin(angle_rad),
        radius * math.sin(elevation),
        -radius * math.cos(angle_rad),
    )


def project(
    observer: GeoPoint,
    target: GeoPoint,
    heading: float,
    previous_vector: Optional[DirectionVector],
    config: EngineConfig,
    fallback_relative_bearing: Optional[float] = None,
) -> Optional[Tuple[BearingResult, DirectionVector]]:
    """
    Computes the bearing result and the smoothed placement vector for a target as
    seen from the observer.

    When the observer coincides with the target the bearing is undefined; the
    fallback relative bearing is used instead, and without one no projection can
    be made.

    Args:
        observer:
            The observer's position

        target:
            The target's position

        heading:
            The direction the observer is facing, in degrees [0, 360)

        previous_vector:
            The last emitted vector, or None to place the new vector directly
            without smoothing. Smoothing up from the neutral (0, 0, 0) placeholder
            would drag the first marker out of the viewpoint, so BearingProjector
            passes None for its first projection (and after reset()).

        config:
            The EngineConfig supplying radii, clamp and smoothing constants

        fallback_relative_bearing:
            (Optional) the last valid relative bearing

    Returns:
        A (BearingResult, DirectionVector) tuple, or None
    """
    horizontal = haversine_distance(observer, target, radius=config.earth_radius_meters)
    altitude_diff = target.altitude - observer.altitude

    bearing: Optional[float]
    if horizontal < config.min_bearing_distance:
        if fallback_relative_bearing is None:
            return None
        bearing, relative_bearing = None, fallback_relative_bearing
    else:
        bearing = haversine_bearing(observer, target)
        relative_bearing = normalize_180(bearing - heading)

    elevation = math.atan2(altitude_diff, horizontal)
    elevation = min(max(elevation, -config.max_elevation), config.max_elevation)

    raw = _placement(relative_bearing, elevation, config.render_radius)
    if previous_vector is None:
        vector = raw
    else:
        vector = previous_vector.smoothed_toward(raw, config.position_smoothing_factor)

    result = BearingResult(
        relative_bearing,
        elevation,
        horizontal,
        total_distance_3d(horizontal, altitude_diff),
        bearing=bearing,
        degenerate=bearing is None,
    )
    return result, vector


class BearingProjector(LoggingMixin):
    """
    Holds the last emitted projection and smooths each new one toward it.

    Args:
        config:
            (Optional) the EngineConfig to project with
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        super().__init__()
        self.config = config or EngineConfig()
        self._lock = threading.Lock()
        self._vector = DirectionVector.neutral()
        self._result: Optional[BearingResult] = None
        self._last_relative_bearing: Optional[float] = None

    def __repr__(self):
        return f'<BearingProjector {self._result!r} {self._vector!r}>'

    @property
    def result(self) -> Optional[BearingResult]:
        """The last valid result, or None before the first projection"""
        return self._result

    @property
    def vector(self) -> DirectionVector:
        return self._vector

    def update(
        self,
        observer: Optional[GeoPoint],
        target: Optional[GeoPoint],
        heading: Optional[float],
    ) -> Optional[Tuple[BearingResult, DirectionVector]]:
        """
        Recomputes the projection from the latest known inputs.

        If any input is still unknown, or the observer coincides with the target
        before any valid bearing was seen, nothing is updated and None is returned.

        Returns:
            The new (BearingResult, DirectionVector), or None
        """
        if observer is None or target is None or heading is None:
            return None

        with self._lock:
            projected = project(
                observer,
                target,
                heading,
                self._vector if self._result is not None else None,
                self.config,
                self._last_relative_bearing,
            )
            if projected is None:
                self.warn_once(
                    'Observer coincides with the target before any bearing was established; '
                    'projection unavailable. (this warning will not repeat)'
                )
                return None

            result, vector = projected
            if result.degenerate:
                self.logger.debug('Observer at target, holding bearing %.2f', result.relative_bearing)
            else:
                self._last_relative_bearing = result.relative_bearing

            self._result, self._vector = result, vector
            return projected

    def reset(self) -> None:
        with self._lock:
            self._vector = DirectionVector.neutral()
            self._result = None
            self._last_relative_bearing = None
