import logging
import math

import pytest
from pytest import approx

from geobearing import BearingEngine, EngineConfig, GeoPoint, HeadingSample, Projection
from geobearing.projection import DirectionVector

from tests.functions import assert_vectors_equal


TARGET = GeoPoint(0., 1.)


@pytest.fixture
def config():
    return EngineConfig(smoothing_factor=1., position_smoothing_factor=1., render_radius=4.)


@pytest.fixture
def engine(config):
    return BearingEngine(target=TARGET, config=config)


def facing(heading: float) -> HeadingSample:
    # Yaw-only sample, as reported by platforms without a native compass heading
    return HeadingSample(alpha=(360 - heading) % 360)


def test_engine_unavailable_until_inputs(engine):
    projection = engine.current_projection()
    assert not projection.available
    assert projection.result is None
    assert projection == Projection.unavailable()
    assert repr(projection) == '<Projection unavailable>'

    # Position alone is not enough
    engine.on_position_fix(GeoPoint(0., 0.))
    assert not engine.current_projection().available

    engine.on_orientation_sample(facing(90.))
    projection = engine.current_projection()
    assert projection.available
    assert projection.result.relative_bearing == approx(0.)
    assert_vectors_equal(projection.vector, DirectionVector(0., 0., -4.))


def test_engine_heading_alone_is_not_enough(engine):
    engine.on_orientation_sample(facing(90.))
    assert engine.heading == 90.
    assert not engine.current_projection().available


def test_engine_without_target(config):
    engine = BearingEngine(config=config)
    engine.on_position_fix(GeoPoint(0., 0.))
    engine.on_orientation_sample(facing(90.))
    assert not engine.current_projection().available

    engine.set_target(TARGET)
    assert engine.current_projection().available
    assert engine.target == TARGET


def test_engine_set_target_once(engine):
    # Same target again is harmless
    engine.set_target(GeoPoint(0., 1.))

    with pytest.raises(ValueError):
        engine.set_target(GeoPoint(5., 5.))

    with pytest.raises(TypeError):
        BearingEngine().set_target((0., 1.))

    assert engine.target == TARGET


def test_engine_input_order_does_not_matter(config):
    first = BearingEngine(TARGET, config)
    first.on_position_fix(GeoPoint(0., 0.))
    first.on_orientation_sample(facing(45.))

    second = BearingEngine(TARGET, config)
    second.on_orientation_sample(facing(45.))
    second.on_position_fix(GeoPoint(0., 0.))

    assert first.current_projection() == second.current_projection()


def test_engine_current_projection_idempotent(engine):
    engine.on_position_fix(GeoPoint(0., 0.))
    engine.on_orientation_sample(facing(10.))

    p1 = engine.current_projection()
    p2 = engine.current_projection()
    assert p1 == p2
    assert p1 is p2


def test_engine_uses_latest_inputs(engine):
    engine.on_position_fix(GeoPoint(0., 0.))
    engine.on_orientation_sample(facing(90.))
    assert engine.current_projection().result.relative_bearing == approx(0.)

    engine.on_orientation_sample(facing(0.1))
    assert engine.current_projection().result.relative_bearing == approx(89.9)

    # Move north of the target; it now lies to the south-east
    engine.on_position_fix(GeoPoint(1., 1.))
    result = engine.current_projection().result
    assert result.bearing == approx(180.)
    assert result.relative_bearing == approx(179.9)


def test_engine_keeps_last_position_on_failed_fix(engine, caplog):
    caplog.set_level(logging.DEBUG, logger='geobearing')
    engine.on_position_fix(GeoPoint(0., 0.))
    engine.on_orientation_sample(facing(90.))
    before = engine.current_projection()

    assert engine.on_position_fix(None) == before
    assert engine.on_position_fix(GeoPoint.from_reading(None, None)) == before
    assert engine.observer == GeoPoint(0., 0.)
    assert engine.current_projection() is before
    assert engine.rejected == 2
    assert 'Discarding position fix' in caplog.text


def test_engine_ignores_invalid_samples(engine):
    engine.on_position_fix(GeoPoint(0., 0.))
    engine.on_orientation_sample(facing(90.))
    before = engine.current_projection()

    assert engine.on_orientation_sample(HeadingSample()) is before
    assert engine.on_orientation_sample(HeadingSample(alpha=float('nan'))) is before
    assert engine.on_orientation_sample({'alpha': 10.}) is before
    assert engine.heading == 90.
    assert engine.rejected == 3

def test_engine_compass_heading_due_north(engine):
    engine.on_position_fix(GeoPoint(0., 0.))
    engine.on_orientation_sample(HeadingSample(compass_heading=10.))
    assert engine.heading == approx(10.)

    projection = engine.on_orientation_sample(HeadingSample(compass_heading=0.))
    assert engine.heading == approx(0.)
    assert projection.result.relative_bearing == approx(90.)
    assert engine.rejected == 0


def test_engine_drops_out_of_range_fix(engine):
    engine.on_position_fix(GeoPoint(0., 0.))
    engine.on_orientation_sample(facing(90.))
    before = engine.current_projection()

    assert engine.on_position_fix(GeoPoint.from_reading(1e20, 0.)) is before
    assert engine.on_position_fix(GeoPoint.from_reading(0., -1e20)) is before
    assert engine.observer == GeoPoint(0., 0.)
    assert engine.rejected == 2



def test_engine_at_target(engine):
    engine.on_position_fix(GeoPoint(0., 0.))
    engine.on_orientation_sample(facing(0.))
    assert engine.current_projection().result.relative_bearing == approx(90.)

    engine.on_position_fix(GeoPoint(0., 1.))
    result = engine.current_projection().result
    assert result.degenerate
    assert result.horizontal_distance == 0.
    assert result.relative_bearing == approx(90.)
    assert not math.isnan(result.relative_bearing)


def test_engine_rapid_wraparound(config):
    engine = BearingEngine(TARGET, config.replace(smoothing_factor=0.3))
    engine.on_position_fix(GeoPoint(0., 0.))
    for i in range(500):
        projection = engine.on_orientation_sample(HeadingSample(alpha=359.5 if i % 2 else 0.5))
        heading = engine.heading
        assert heading < 1. or heading > 359.
        assert -180 < projection.result.relative_bearing <= 180
        assert all(math.isfinite(v) for v in projection.vector.to_float())


def test_engine_extreme_coordinates(config):
    cases = [
        (GeoPoint(90., 0.), GeoPoint(-90., 0.)),
        (GeoPoint(89.99999, 179.99999), GeoPoint(89.99999, -179.99999)),
        (GeoPoint(0., 180.), GeoPoint(0., -180.)),
        (GeoPoint(-45., -179.5), GeoPoint(-45., 179.5, 8848.)),
    ]
    for observer, target in cases:
        engine = BearingEngine(target, config)
        engine.on_position_fix(observer)
        engine.on_orientation_sample(HeadingSample(alpha=123.))
        projection = engine.current_projection()
        if projection.available:
            result = projection.result
            assert -180 < result.relative_bearing <= 180
            assert abs(result.elevation) <= config.max_elevation
            assert all(math.isfinite(v) for v in projection.vector.to_float())


def test_engine_tick_smooths(config):
    engine = BearingEngine(TARGET, config.replace(position_smoothing_factor=0.5))
    assert not engine.tick().available

    engine.on_position_fix(GeoPoint(0., 0.))
    engine.on_orientation_sample(facing(90.))
    assert_vectors_equal(engine.current_projection().vector, DirectionVector(0., 0., -4.))

    engine.on_orientation_sample(facing(0.))
    assert_vectors_equal(engine.current_projection().vector, DirectionVector(2., 0., -2.))

    engine.tick()
    assert_vectors_equal(engine.current_projection().vector, DirectionVector(3., 0., -1.))

    for _ in range(60):
        engine.tick()
    assert_vectors_equal(engine.current_projection().vector, DirectionVector(4., 0., 0.))


def test_engine_subscribers(engine, caplog):
    received = []

    def broken(projection):
        raise RuntimeError('display went away')

    engine.subscribe(broken)
    engine.subscribe(received.append)
    engine.subscribe(received.append)

    engine.on_position_fix(GeoPoint(0., 0.))
    assert received == []

    engine.on_orientation_sample(facing(90.))
    assert received == [engine.current_projection()]
    assert 'Projection subscriber' in caplog.text
    assert 'display went away' in caplog.text

    # Rejected input produces nothing new
    engine.on_orientation_sample(HeadingSample())
    assert len(received) == 1

    engine.unsubscribe(received.append)
    engine.unsubscribe(received.append)
    engine.on_orientation_sample(facing(80.))
    assert len(received) == 1


def test_engine_reset(engine):
    engine.on_position_fix(GeoPoint(0., 0.))
    engine.on_orientation_sample(facing(90.))
    engine.reset()

    assert engine.observer is None
    assert engine.heading is None
    assert engine.target == TARGET
    assert not engine.current_projection().available

    engine.on_position_fix(GeoPoint(0., 0.))
    engine.on_orientation_sample(facing(0.))
    assert engine.current_projection().result.relative_bearing == approx(90.)


def test_engine_default_config():
    engine = BearingEngine(GeoPoint(69.705561, 18.832721, 488.8))
    assert engine.config == EngineConfig()
    assert engine.heading_filter.smoothing_factor == engine.config.smoothing_factor

    engine.on_position_fix(GeoPoint(69.6496, 18.9560, 10.))
    engine.on_orientation_sample(HeadingSample(alpha=45.))
    result = engine.current_projection().result
    assert result.total_distance > result.horizontal_distance > 0
    assert 0 < result.elevation <= math.pi / 4
