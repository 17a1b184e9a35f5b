"""
Fusion of noisy, wrap-around orientation readings into a stable heading
"""

__all__ = ['HeadingFilter', 'HeadingSample']

import threading
from typing import Optional, Tuple

from geobearing._const import DEFAULT_SMOOTHING_FACTOR
from geobearing.utils.functions import (
    is_finite_number, normalize_180, normalize_360, shortest_angle_delta
)
from geobearing.utils.mixins import LoggingMixin


class HeadingSample:
    """
    A single raw orientation reading, as delivered by a device orientation sensor.

    Any field may be missing (None) or garbage; the sample is validated when it is
    ingested, never when it is created.

    Args:
        alpha:
            Device yaw in degrees [0, 360), measured counter-clockwise

        compass_heading:
            A true/magnetic heading in degrees, clockwise from north, when the
            platform supplies one directly

        beta:
            Device pitch in degrees [-180, 180)

        gamma:
            Device roll in degrees [-90, 90)
    """

    __slots__ = ('alpha', 'compass_heading', 'beta', 'gamma')

    def __init__(
        self,
        alpha: Optional[float] = None,
        compass_heading: Optional[float] = None,
        beta: Optional[float] = None,
        gamma: Optional[float] = None,
    ):
        self.alpha = alpha
        self.compass_heading = compass_heading
        self.beta = beta
        self.gamma = gamma

    def __eq__(self, other):
        if not isinstance(other, HeadingSample):
            return False

        return (
            self.alpha == other.alpha and
            self.compass_heading == other.compass_heading and
            self.beta == other.beta and
            self.gamma == other.gamma
        )

    def __repr__(self):
        return (
            f'<HeadingSample(alpha={self.alpha}, compass_heading={self.compass_heading}, '
            f'beta={self.beta}, gamma={self.gamma})>'
        )

    def candidate_heading(self) -> Optional[float]:
        """
        The compass-style heading this sample represents, in [0, 360).

        The platform-native heading wins whenever it is present (0 is due north); otherwise
        the heading is derived from the device yaw, which runs counter-clockwise.

        Returns:
            float, or None if the sample carries no usable heading
        """
        if is_finite_number(self.compass_heading):
            return normalize_360(float(self.compass_heading))  # type: ignore

        if is_finite_number(self.alpha):
            return normalize_360(360 - float(self.alpha))  # type: ignore

        return None


def _check_factor(smoothing_factor: float) -> float:
    if not 0 < smoothing_factor <= 1:
        raise ValueError(f'smoothing_factor must be in (0, 1], got {smoothing_factor}')

    return smoothing_factor


class HeadingFilter(LoggingMixin):
    """
    Exponentially smooths heading samples, always moving the short way around the
    circle so that e.g. 359 -> 2 is a 3 degree step rather than a 357 degree one.

    The first valid sample seeds the heading directly. After that, the heading is
    only ever replaced through smoothing, or cleared by reset().

    Args:
        smoothing_factor:
            The default smoothing factor, in (0, 1]. A factor of 1 means no smoothing.
    """

    def __init__(self, smoothing_factor: float = DEFAULT_SMOOTHING_FACTOR):
        super().__init__()
        self.smoothing_factor = _check_factor(smoothing_factor)
        self._lock = threading.Lock()
        self._heading: Optional[float] = None
        self._alpha: Optional[float] = None
        self._beta: Optional[float] = None
        self._gamma: Optional[float] = None

    def __repr__(self):
        return f'<HeadingFilter heading={self._heading} factor={self.smoothing_factor}>'

    @property
    def heading(self) -> Optional[float]:
        """The smoothed heading in degrees [0, 360), or None before the first valid sample"""
        return self._heading

    @property
    def initialized(self) -> bool:
        return self._heading is not None

    @property
    def orientation(self) -> Tuple[Optional[float], Optional[float], Optional[float]]:
        """The smoothed raw (alpha, beta, gamma) angles of the device"""
        return self._alpha, self._beta, self._gamma

    def ingest(
        self,
        sample: HeadingSample,
        smoothing_factor: Optional[float] = None
    ) -> Optional[float]:
        """
        Folds a new sample into the smoothed heading.

        Samples without a usable heading are ignored and leave all state untouched.

        Args:
            sample:
                The raw orientation reading

            smoothing_factor:
                (Optional) overrides the filter's default smoothing factor for this
                sample only

        Returns:
            The (possibly unchanged) smoothed heading, or None if no valid sample
            has been seen yet
        """
        factor = (
            self.smoothing_factor if smoothing_factor is None
            else _check_factor(smoothing_factor)
        )

        candidate = sample.candidate_heading()
        if candidate is None:
            self.reject('Discarding orientation sample without a heading: %r', sample)
            return self._heading

        with self._lock:
            if self._heading is None:
                self._heading = candidate
            else:
                diff = shortest_angle_delta(candidate, self._heading)
                self._heading = normalize_360(self._heading + diff * factor)

            self._smooth_orientation(sample, factor)
            return self._heading

    def _smooth_orientation(self, sample: HeadingSample, factor: float) -> None:
        """Tracks the raw device angles; must be called while holding the lock"""
        if is_finite_number(sample.alpha):
            alpha = normalize_360(float(sample.alpha))  # type: ignore
            if self._alpha is None:
                self._alpha = alpha
            else:
                diff = shortest_angle_delta(alpha, self._alpha)
                self._alpha = normalize_360(self._alpha + diff * factor)

        if is_finite_number(sample.beta):
            beta = normalize_180(float(sample.beta))  # type: ignore
            if self._beta is None:
                self._beta = beta
            else:
                # Same short-way rule as the heading, on (-180, 180]
                diff = normalize_180(beta - self._beta)
                self._beta = normalize_180(self._beta + diff * factor)

        if is_finite_number(sample.gamma):
            gamma = min(max(float(sample.gamma), -90.0), 90.0)  # type: ignore
            if self._gamma is None:
                self._gamma = gamma
            else:
                self._gamma += (gamma - self._gamma) * factor

    def reset(self) -> None:
        """Forgets all smoothed state; the next valid sample seeds the filter again"""
        with self._lock:
            self._heading = None
            self._alpha = self._beta = self._gamma = None
