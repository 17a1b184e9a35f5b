"""Module for miscellaneous multi-use functions"""

__all__ = [
    'is_finite_number', 'normalize_180', 'normalize_360',
    'round_half_up', 'shortest_angle_delta'
]

from decimal import Decimal
import math
import numbers
from typing import Any


def is_finite_number(value: Any) -> bool:
    """
    Test whether a raw sensor value is usable, i.e. a real, finite number.
    Any numbers.Real is accepted, including numpy scalars, as is a Decimal. None,
    NaN, infinities, bools and non-numeric types are all rejected.
    """
    if isinstance(value, Decimal):
        return value.is_finite()

    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False

    return math.isfinite(value)


def normalize_360(angle: float) -> float:
    """
    Wraps an angle in degrees into [0, 360).

    Python's float modulo can round a tiny negative value up to exactly 360.0,
    which is folded back to 0.

    Args:
        angle:
            The angle, in degrees

    Returns:
        float
    """
    wrapped = (angle + 360) % 360
    if wrapped >= 360.0:
        return 0.0

    return wrapped


def normalize_180(angle: float) -> float:
    """
    Wraps an angle in degrees into (-180, 180].

    Args:
        angle:
            The angle, in degrees

    Returns:
        float
    """
    if not math.isfinite(angle):
        raise ValueError(f'Cannot normalize non-finite angle {angle}')

    angle = math.fmod(angle, 360)
    while angle > 180:
        angle -= 360
    while angle <= -180:
        angle += 360

    return angle


def shortest_angle_delta(target: float, current: float) -> float:
    """
    The signed difference (target - current) in degrees, taken the short way
    around the circle. Both angles are expected in [0, 360).

    Args:
        target:
            The angle being moved toward

        current:
            The angle being moved from

    Returns:
        float in [-180, 180]; positive is clockwise
    """
    diff = target - current
    if diff > 180:
        diff -= 360
    elif diff < -180:
        diff += 360

    return diff


def round_half_up(value: float, precision) -> float:
    """
    Rounds numbers to the nearest whole, where a value exactly between the two nearest
    wholes is rounded to the higher whole.

    Args:
        value:
            The float value to be rounded
        precision:
            The precision to round the float value to

    """
    mod = value + 10 ** -(precision + 12)

    return round(mod, precision)
