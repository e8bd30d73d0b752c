from __future__ import annotations

import logging
import math
import random

import pytest

from keycap_outline.geom.angle import Angle
from keycap_outline.geom.arc import (
    DEFAULT_TOLERANCE,
    _center,
    _unit_arc,
    arc_error_bound,
    arc_to_bezier,
    check_tolerance,
)
from keycap_outline.geom.vector import Vector

SQRT_2 = math.sqrt(2.0)


def _ends(segments):
    return [end for _, _, end in segments]


def _total(segments):
    total = Vector.zero()
    for _, _, end in segments:
        total = total + end
    return total


@pytest.mark.parametrize(
    ("r", "rotation", "large_arc", "sweep", "d", "expected"),
    [
        ((1.0, 1.0), 0.0, False, False, (1.0, 1.0), [(1.0, 1.0)]),
        ((1.0, 1.0), 0.0, True, False, (1.0, 1.0), [(-1.0, 1.0), (1.0, 1.0), (1.0, -1.0)]),
        ((1.0, 1.0), 0.0, True, True, (1.0, 1.0), [(1.0, -1.0), (1.0, 1.0), (-1.0, 1.0)]),
        ((1.0, 1.0), 0.0, True, True, (1.0, -1.0), [(-1.0, -1.0), (1.0, -1.0), (1.0, 1.0)]),
        ((1.0, 2.0), 0.0, False, False, (1.0, 2.0), [(1.0, 2.0)]),
        ((1.0, 2.0), 90.0, False, False, (2.0, -1.0), [(2.0, -1.0)]),
        ((SQRT_2, SQRT_2), 0.0, False, True, (0.0, -2.0), [(0.0, -2.0)]),
        ((SQRT_2, SQRT_2), 0.0, False, False, (0.0, 2.0), [(0.0, 2.0)]),
        ((1.0, 1.0), 0.0, False, False, (2.0, 0.0), [(1.0, 1.0), (1.0, -1.0)]),
        ((1.0, 1.0), 0.0, False, False, (4.0, 0.0), [(2.0, 2.0), (2.0, -2.0)]),
    ],
)
def test_segment_endpoints(r, rotation, large_arc, sweep, d, expected):
    segments = arc_to_bezier(Vector(*r), Angle.from_degrees(rotation), large_arc, sweep, Vector(*d))
    ends = _ends(segments)
    assert len(ends) == len(expected)
    for end, exp in zip(ends, expected):
        assert end.is_close(Vector(*exp))


def test_quarter_circle_is_one_segment():
    segments = arc_to_bezier(Vector(1.0, 1.0), Angle.zero(), False, False, Vector(1.0, 1.0))
    assert len(segments) == 1
    assert segments[0][2].is_close(Vector(1.0, 1.0))


def test_large_arc_complement_is_three_segments():
    segments = arc_to_bezier(Vector(1.0, 1.0), Angle.zero(), True, False, Vector(1.0, 1.0))
    assert len(segments) == 3
    assert _total(segments).is_close(Vector(1.0, 1.0))


def test_zero_displacement_gives_no_segments():
    assert arc_to_bezier(Vector(1.0, 1.0), Angle.zero(), False, False, Vector(0.0, 0.0)) == []


@pytest.mark.parametrize("r", [(0.0, 0.0), (0.0, 3.0), (2.0, 0.0)])
def test_zero_radius_gives_straight_cubic(r):
    d = Vector(3.0, -6.0)
    segments = arc_to_bezier(Vector(*r), Angle.from_degrees(30.0), True, True, d)
    assert len(segments) == 1
    ctrl1, ctrl2, end = segments[0]
    assert ctrl1.is_close(Vector(1.0, -2.0))
    assert ctrl2.is_close(Vector(2.0, -4.0))
    assert end.is_close(d)


@pytest.mark.parametrize(
    ("r", "large_arc", "sweep", "d", "expected"),
    [
        ((1.0, 1.0), False, False, (1.0, 1.0), (1.0, 0.0)),
        ((1.0, 1.0), True, False, (1.0, 1.0), (0.0, 1.0)),
        ((1.0, 1.0), False, True, (1.0, 1.0), (0.0, 1.0)),
        ((1.0, 1.0), True, True, (1.0, 1.0), (1.0, 0.0)),
        ((1.0, 1.0), False, False, (2.0, 0.0), (1.0, 0.0)),
    ],
)
def test_center(r, large_arc, sweep, d, expected):
    assert _center(Vector(*r), large_arc, sweep, Vector(*d)).is_close(Vector(*expected))


_A = (4.0 / 3.0) * math.tan(math.radians(90.0 / 4.0))


@pytest.mark.parametrize(
    ("r", "phi0", "dphi", "expected"),
    [
        ((1.0, 1.0), 0.0, 90.0, [(0.0, _A), (_A - 1.0, 1.0), (-1.0, 1.0)]),
        ((1.0, 1.0), 90.0, 90.0, [(-_A, 0.0), (-1.0, _A - 1.0), (-1.0, -1.0)]),
        ((1.0, 1.0), 180.0, 90.0, [(0.0, -_A), (1.0 - _A, -1.0), (1.0, -1.0)]),
        ((1.0, 1.0), -90.0, 90.0, [(_A, 0.0), (1.0, 1.0 - _A), (1.0, 1.0)]),
        ((1.0, 1.0), 0.0, -90.0, [(0.0, -_A), (_A - 1.0, -1.0), (-1.0, -1.0)]),
        ((1.0, 1.0), 90.0, -90.0, [(_A, 0.0), (1.0, _A - 1.0), (1.0, -1.0)]),
        ((1.0, 1.0), 180.0, -90.0, [(0.0, _A), (1.0 - _A, 1.0), (1.0, 1.0)]),
        ((1.0, 1.0), -90.0, -90.0, [(-_A, 0.0), (-1.0, 1.0 - _A), (-1.0, 1.0)]),
        ((2.0, 1.0), 0.0, 90.0, [(0.0, _A), (2.0 * (_A - 1.0), 1.0), (-2.0, 1.0)]),
    ],
)
def test_unit_arc(r, phi0, dphi, expected):
    segment = _unit_arc(Vector(*r), Angle.from_degrees(phi0), Angle.from_degrees(dphi))
    for point, exp in zip(segment, expected):
        assert point.is_close(Vector(*exp))


def _random_arcs(seed: int, count: int):
    rng = random.Random(seed)
    for _ in range(count):
        r = Vector(rng.uniform(0.1, 5.0), rng.uniform(0.1, 5.0))
        rotation = Angle.from_degrees(rng.uniform(-180.0, 180.0))
        d = Vector(rng.uniform(-10.0, 10.0), rng.uniform(-10.0, 10.0))
        yield r, rotation, rng.random() < 0.5, rng.random() < 0.5, d


@pytest.mark.parametrize("seed", range(8))
def test_arc_ends_at_displacement(seed):
    for r, rotation, large_arc, sweep, d in _random_arcs(seed, 50):
        segments = arc_to_bezier(r, rotation, large_arc, sweep, d)
        assert 1 <= len(segments) <= 4
        assert _total(segments).is_close(d, abs_tol=1e-6 * max(1.0, d.length()))


@pytest.mark.parametrize("seed", range(4))
def test_circular_segments_span_at_most_a_quarter_turn(seed):
    rng = random.Random(seed)
    for _ in range(50):
        radius = rng.uniform(0.5, 5.0)
        d = Vector(rng.uniform(-8.0, 8.0), rng.uniform(-8.0, 8.0))
        segments = arc_to_bezier(Vector.splat(radius), Angle.zero(), rng.random() < 0.5, rng.random() < 0.5, d)
        # Radii too small to span d are scaled up first
        effective = max(radius, d.length() / 2.0)
        for _, _, end in segments:
            assert end.length() <= effective * SQRT_2 * (1.0 + 1e-6)


@pytest.mark.parametrize("sweep", [False, True])
def test_both_sweep_directions_mirror(sweep):
    d = Vector(2.0, 0.0)
    ends = _ends(arc_to_bezier(Vector(1.0, 1.0), Angle.zero(), False, sweep, d))
    assert len(ends) == 2
    sign = -1.0 if sweep else 1.0
    assert ends[0].is_close(Vector(1.0, sign))


def test_arc_error_bound():
    # Single cubic per quarter turn deviates by about 2.7e-4 of the radius
    assert arc_error_bound(1.0) == pytest.approx(2.7e-4, rel=0.02)
    assert arc_error_bound(10.0) == pytest.approx(10.0 * arc_error_bound(1.0))
    assert arc_error_bound(1.0, Angle.from_degrees(45.0)) < arc_error_bound(1.0)


def test_check_tolerance_logs_shortfall(caplog):
    with caplog.at_level(logging.DEBUG, logger="keycap_outline"):
        assert check_tolerance(Vector(1.0, 1.0), DEFAULT_TOLERANCE)
        assert not check_tolerance(Vector(100.0, 50.0), 1e-6)
    assert "exceeds requested tolerance" in caplog.text
