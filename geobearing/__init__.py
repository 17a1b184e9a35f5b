from geobearing._version import __version__  # noqa: F401
from geobearing.utils.logging import LOGGER
from geobearing.coordinates import GeoPoint
from geobearing.config import EngineConfig
from geobearing.geodesic import (
    haversine_bearing, haversine_destination, haversine_distance, total_distance_3d
)
from geobearing.heading import HeadingFilter, HeadingSample
from geobearing.projection import BearingProjector, BearingResult, DirectionVector, project
from geobearing.engine import BearingEngine, Projection


__all__ = [
    'BearingEngine',
    'BearingProjector',
    'BearingResult',
    'DirectionVector',
    'EngineConfig',
    'GeoPoint',
    'HeadingFilter',
    'HeadingSample',
    'Projection',
    'haversine_bearing',
    'haversine_destination',
    'haversine_distance',
    'project',
    'total_distance_3d',
    'LOGGER',
]
