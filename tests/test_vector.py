from __future__ import annotations

import math

import pytest

from keycap_outline.geom.angle import Angle
from keycap_outline.geom.vector import Point, Vector
from keycap_outline.units import DOT_PER_UNIT, Length


def test_vector_arithmetic():
    a = Vector(1.0, 2.0)
    b = Vector(3.0, -1.0)
    assert a + b == Vector(4.0, 1.0)
    assert a - b == Vector(-2.0, 3.0)
    assert a * 2.0 == Vector(2.0, 4.0)
    assert 2.0 * a == Vector(2.0, 4.0)
    assert a / 2.0 == Vector(0.5, 1.0)
    assert -a == Vector(-1.0, -2.0)
    assert abs(Vector(-1.0, 2.0)) == Vector(1.0, 2.0)


def test_vector_componentwise_helpers():
    a = Vector(1.0, 4.0)
    b = Vector(3.0, 2.0)
    assert a.min(b) == Vector(1.0, 2.0)
    assert a.max(b) == Vector(3.0, 4.0)
    assert a.component_mul(b) == Vector(3.0, 8.0)
    assert a.component_div(b) == Vector(1.0 / 3.0, 2.0)
    assert a.dot(b) == 11.0
    assert a.neg_x() == Vector(-1.0, 4.0)
    assert a.neg_y() == Vector(1.0, -4.0)
    assert a.swap() == Vector(4.0, 1.0)
    assert Vector.splat(2.0) == Vector(2.0, 2.0)
    assert Vector.zero() == Vector(0.0, 0.0)
    assert Vector.from_lengths(Length(1.0), Length(2.0)) == Vector(1.0, 2.0)


def test_vector_length_and_rotate():
    assert Vector(3.0, 4.0).length() == pytest.approx(5.0)
    rotated = Vector(1.0, 0.0).rotate(Angle.frac_pi_2())
    assert rotated.is_close(Vector(0.0, 1.0))
    assert Vector(1.0, 1.0).rotate(Angle.from_degrees(45.0)).is_close(Vector(0.0, math.sqrt(2.0)))


def test_lerp_matches_definition():
    a = Vector(1.0, 2.0)
    b = Vector(5.0, -2.0)
    for t in (0.0, 0.25, 0.5, 1.0, 1.5):
        assert a.lerp(b, t).is_close(a + (b - a) * t)
    assert Point(0.0, 0.0).lerp(Point(10.0, 20.0), 0.25).is_close(Point(2.5, 5.0))


def test_point_vector_algebra():
    p = Point(1.0, 2.0)
    q = Point(4.0, 6.0)
    assert q - p == Vector(3.0, 4.0)
    assert p + Vector(1.0, 1.0) == Point(2.0, 3.0)
    assert p - Vector(1.0, 1.0) == Point(0.0, 1.0)
    assert p.min(q) == p and p.max(q) == q
    assert p.to_vector() == Vector(1.0, 2.0)
    assert Vector(1.0, 2.0).to_point() == p
    assert Point.origin() == Point(0.0, 0.0)
    assert Point.splat(3.0) == Point(3.0, 3.0)


def test_convert_scales_components():
    assert Point(0.5, 1.0).convert(DOT_PER_UNIT) == Point(500.0, 1000.0)
    assert Vector(0.25, 2.0).convert(DOT_PER_UNIT) == Vector(250.0, 2000.0)


def test_is_close_uses_shared_tolerance():
    assert Point(1.0, 1.0).is_close(Point(1.0 + 1e-9, 1.0))
    assert not Point(1.0, 1.0).is_close(Point(1.01, 1.0))
