"""Textual readouts of engine output, for labels and compass strips"""

__all__ = ['cardinal_direction', 'compass_strip_offset', 'describe', 'format_distance']

import math

from geobearing.engine import Projection
from geobearing.utils.functions import normalize_360, round_half_up

_CARDINALS_8 = ['N', 'NE', 'E', 'SE', 'S', 'SW', 'W', 'NW']
_CARDINALS_16 = [
    'N', 'NNE', 'NE', 'ENE', 'E', 'ESE', 'SE', 'SSE',
    'S', 'SSW', 'SW', 'WSW', 'W', 'WNW', 'NW', 'NNW'
]


def format_distance(meters: float) -> str:
    """
    Formats a distance for a marker label, e.g. '488m away' or '12.3km away'

    Args:
        meters:
            The distance, in meters

    Returns:
        str
    """
    rounded = round_half_up(meters, 0)
    if rounded >= 1000:
        return f'{round_half_up(meters / 1000, 1)}km away'

    return f'{int(rounded)}m away'


def cardinal_direction(degrees: float, points: int = 8) -> str:
    """
    Names the compass point closest to a bearing.

    Args:
        degrees:
            The bearing, in degrees clockwise from north

        points: (int) (Default 8)
            The number of compass points to choose from, either 8 or 16

    Returns:
        str
    """
    if points not in (8, 16):
        raise ValueError(f'points must be 8 or 16, got {points}')

    names = _CARDINALS_8 if points == 8 else _CARDINALS_16
    sector = 360 / points
    return names[int((normalize_360(degrees) + sector / 2) // sector) % points]


def compass_strip_offset(heading: float, pixels_per_degree: float = 1.0) -> float:
    """
    The horizontal translation of a scrolling compass strip showing the given heading.

    Args:
        heading:
            The current heading, in degrees

        pixels_per_degree: (float) (Default 1.0)
            The strip's scale

    Returns:
        (float) the offset in pixels, in [0, 360 * pixels_per_degree)
    """
    return normalize_360(heading) * pixels_per_degree


def describe(projection: Projection) -> str:
    """
    A one-line description of a projection, e.g. 'Target 12° right, 1.2km away'
    """
    if not projection.available:
        return 'Acquiring position and heading...'

    result = projection.result
    angle = round_half_up(abs(result.relative_bearing), 0)  # type: ignore
    if angle == 0:
        side = 'ahead'
    elif angle == 180:
        side = 'behind'
    else:
        side = f'{int(angle)}\N{DEGREE SIGN} {"right" if result.relative_bearing > 0 else "left"}'  # type: ignore

    parts = [f'Target {side}', format_distance(result.total_distance)]  # type: ignore
    elevation = round_half_up(math.degrees(result.elevation), 0)  # type: ignore
    if elevation:
        parts.append(f'{int(abs(elevation))}\N{DEGREE SIGN} {"up" if elevation > 0 else "down"}')

    return ', '.join(parts)
