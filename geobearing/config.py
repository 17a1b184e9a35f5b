"""Tunable configuration for the bearing engine"""

from __future__ import annotations

__all__ = ['EngineConfig', 'PRESETS']

import math
from typing import Any, Dict

from pydantic import validate_call

from geobearing._const import (
    DEFAULT_MAX_ELEVATION, DEFAULT_MIN_BEARING_DISTANCE,
    DEFAULT_POSITION_SMOOTHING_FACTOR, DEFAULT_RENDER_RADIUS,
    DEFAULT_SMOOTHING_FACTOR, EARTH_RADIUS_METERS
)


# Tunings observed across deployments of the overlay. None of them is authoritative.
PRESETS: Dict[str, Dict[str, float]] = {
    'default': {},
    'steady': {
        'smoothing_factor': 0.1,
        'position_smoothing_factor': 0.15,
        'max_elevation': math.radians(30),
    },
    'responsive': {
        'smoothing_factor': 0.5,
        'position_smoothing_factor': 0.6,
    },
    'wide': {
        'max_elevation': math.radians(45),
        'render_radius': 10.0,
    },
}


class EngineConfig:
    """
    Configuration constants for a BearingEngine.

    Args:
        smoothing_factor:
            Exponential smoothing factor for heading samples, in (0, 1]. A value
            of 1 passes samples straight through.

        position_smoothing_factor:
            Smoothing factor applied to the direction vector between updates, in (0, 1]

        max_elevation:
            The maximum magnitude of the elevation angle, in radians, in (0, pi/2]

        render_radius:
            The radius of the placement sphere around the viewpoint. A rendering-scale
            constant, not a physical distance.

        earth_radius_meters:
            The radius of the spherical earth model

        min_bearing_distance:
            Horizontal distance, in meters, below which the observer is considered to
            coincide with the target and the bearing is undefined
    """

    _FIELDS = (
        'smoothing_factor', 'position_smoothing_factor', 'max_elevation',
        'render_radius', 'earth_radius_meters', 'min_bearing_distance',
    )

    @validate_call
    def __init__(
        self,
        smoothing_factor: float = DEFAULT_SMOOTHING_FACTOR,
        position_smoothing_factor: float = DEFAULT_POSITION_SMOOTHING_FACTOR,
        max_elevation: float = DEFAULT_MAX_ELEVATION,
        render_radius: float = DEFAULT_RENDER_RADIUS,
        earth_radius_meters: float = EARTH_RADIUS_METERS,
        min_bearing_distance: float = DEFAULT_MIN_BEARING_DISTANCE,
    ):
        for name, value in (
            ('smoothing_factor', smoothing_factor),
            ('position_smoothing_factor', position_smoothing_factor),
        ):
            if not 0 < value <= 1:
                raise ValueError(f'{name} must be in (0, 1], got {value}')

        if not 0 < max_elevation <= math.pi / 2:
            raise ValueError(f'max_elevation must be in (0, pi/2], got {max_elevation}')

        if not (math.isfinite(render_radius) and render_radius > 0):
            raise ValueError(f'render_radius must be positive, got {render_radius}')

        if not (math.isfinite(earth_radius_meters) and earth_radius_meters > 0):
            raise ValueError(f'earth_radius_meters must be positive, got {earth_radius_meters}')

        if not (math.isfinite(min_bearing_distance) and min_bearing_distance >= 0):
            raise ValueError(
                f'min_bearing_distance must not be negative, got {min_bearing_distance}'
            )

        self.smoothing_factor = smoothing_factor
        self.position_smoothing_factor = position_smoothing_factor
        self.max_elevation = max_elevation
        self.render_radius = render_radius
        self.earth_radius_meters = earth_radius_meters
        self.min_bearing_distance = min_bearing_distance

    def __eq__(self, other) -> bool:
        if not isinstance(other, EngineConfig):
            return False

        return self.to_dict() == other.to_dict()

    def __repr__(self):
        params = ', '.join(f'{k}={v}' for k, v in self.to_dict().items())
        return f'<EngineConfig({params})>'

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> EngineConfig:
        """
        Creates an EngineConfig from a dictionary of values. Unknown keys raise a
        ValueError rather than being silently dropped.
        """
        unknown = set(values) - set(cls._FIELDS)
        if unknown:
            raise ValueError(f'Unknown configuration keys: {sorted(unknown)}')

        return cls(**values)

    @classmethod
    def from_preset(cls, name: str, **overrides) -> EngineConfig:
        """
        Creates an EngineConfig from one of the named PRESETS, optionally overriding
        individual values.

        Args:
            name:
                The name of the preset, e.g. 'steady'

        Keyword Args:
            Any EngineConfig parameter

        Returns:
            EngineConfig
        """
        if name not in PRESETS:
            raise ValueError(f"Unknown preset '{name}'. Options: {list(PRESETS.keys())}")

        return cls.from_dict({**PRESETS[name], **overrides})

    def replace(self, **overrides) -> EngineConfig:
        """Returns a copy of this configuration with the given values replaced"""
        return self.from_dict({**self.to_dict(), **overrides})

    def to_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in self._FIELDS}
