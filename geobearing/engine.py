"""
The bearing engine: owns the observer, target, heading and placement state for a
single overlay, and recomputes the projection as sensor input arrives.
"""

__all__ = ['BearingEngine', 'Projection']

from typing import Callable, List, Optional

from geobearing.config import EngineConfig
from geobearing.coordinates import GeoPoint
from geobearing.heading import HeadingFilter, HeadingSample
from geobearing.projection import BearingProjector, BearingResult, DirectionVector
from geobearing.utils.mixins import LoggingMixin


class Projection:
    """
    The latest output of a BearingEngine. Before the engine has seen a target, a
    position fix and a heading, the projection is unavailable: `result` is None and
    `vector` holds the neutral placeholder, which must not be drawn as a reading.
    """

    __slots__ = ('result', 'vector')

    def __init__(self, result: Optional[BearingResult], vector: DirectionVector):
        self.result = result
        self.vector = vector

    def __eq__(self, other) -> bool:
        if not isinstance(other, Projection):
            return False

        return self.result == other.result and self.vector == other.vector

    def __repr__(self):
        if not self.available:
            return '<Projection unavailable>'

        return f'<Projection {self.result!r} {self.vector!r}>'

    @property
    def available(self) -> bool:
        return self.result is not None

    @classmethod
    def unavailable(cls) -> 'Projection':
        return cls(None, DirectionVector.neutral())


ProjectionCallback = Callable[[Projection], None]


class BearingEngine(LoggingMixin):
    """
    Converts position fixes and orientation samples into a direction-and-distance
    signal pointing at a fixed target.

    Inputs may arrive interleaved and at independent rates; every recompute uses the
    latest value of each. Invalid input is dropped, so none of the input methods
    raise for sensor data.

    Args:
        target:
            (Optional) the fixed destination. May instead be supplied once through
            set_target().

        config:
            (Optional) an EngineConfig; defaults are used if omitted
    """

    def __init__(
        self,
        target: Optional[GeoPoint] = None,
        config: Optional[EngineConfig] = None,
    ):
        super().__init__()
        self.config = config or EngineConfig()
        self._target: Optional[GeoPoint] = None
        self._observer: Optional[GeoPoint] = None
        self._filter = HeadingFilter(self.config.smoothing_factor)
        self._projector = BearingProjector(self.config)
        self._projection = Projection.unavailable()
        self._subscribers: List[ProjectionCallback] = []

        if target is not None:
            self.set_target(target)

    def __repr__(self):
        return f'<BearingEngine target={self._target!r} {self._projection!r}>'

    @property
    def target(self) -> Optional[GeoPoint]:
        return self._target

    @property
    def observer(self) -> Optional[GeoPoint]:
        """The last known observer position; never cleared by a failed fix"""
        return self._observer

    @property
    def heading(self) -> Optional[float]:
        return self._filter.heading

    @property
    def heading_filter(self) -> HeadingFilter:
        return self._filter

    def set_target(self, point: GeoPoint) -> None:
        """
        Sets the fixed destination. The target cannot be changed once set; build a
        new engine to track a different one.

        Args:
            point:
                The target position
        """
        if not isinstance(point, GeoPoint):
            raise TypeError(f'Target must be a GeoPoint, not {type(point)}')

        if self._target is not None:
            if point == self._target:
                return
            raise ValueError(
                f'Target is already set to {self._target!r}; cannot change it to {point!r}'
            )

        self._target = point
        self._recompute()

    def on_position_fix(self, point: Optional[GeoPoint]) -> Projection:
        """
        Records a new observer position and recomputes. A missing fix (None) keeps the
        last known position.

        Returns:
            The current Projection
        """
        if not isinstance(point, GeoPoint):
            self.reject('Discarding position fix %r; keeping last known position', point)
            return self._projection

        self._observer = point
        return self._recompute()

    def on_orientation_sample(self, sample: HeadingSample) -> Projection:
        """
        Feeds an orientation reading through the heading filter and recomputes.

        Returns:
            The current Projection
        """
        if not isinstance(sample, HeadingSample):
            self.reject('Discarding orientation sample %r', sample)
            return self._projection

        rejected = self._filter.rejected
        self._filter.ingest(sample)
        if self._filter.rejected != rejected:
            self.rejected += 1
            return self._projection

        return self._recompute()

    def current_projection(self) -> Projection:
        """
        Returns the most recently computed projection without recomputing it.
        Repeated calls with no input in between return equal results.
        """
        return self._projection

    def tick(self) -> Projection:
        """
        Render-tick recompute from the current state. Each call with a known target,
        position and heading moves the placement one smoothing step further toward
        its settled value.
        """
        return self._recompute()

    def subscribe(self, callback: ProjectionCallback) -> None:
        """Registers a callback to receive every newly computed Projection"""
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: ProjectionCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def reset(self) -> None:
        """
        Re-initializes the engine, discarding the observer position, the heading and
        the placement. The target and configuration are kept.
        """
        self._observer = None
        self._filter.reset()
        self._projector.reset()
        self._projection = Projection.unavailable()

    def _recompute(self) -> Projection:
        projected = self._projector.update(self._observer, self._target, self._filter.heading)
        if projected is None:
            return self._projection

        self._projection = Projection(*projected)
        self._publish(self._projection)
        return self._projection

    def _publish(self, projection: Projection) -> None:
        for callback in list(self._subscribers):
            try:
                callback(projection)
            except Exception:  # pylint: disable=broad-except
                self.logger.exception('Projection subscriber %r failed', callback)
