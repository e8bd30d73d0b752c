from __future__ import annotations

import math

from ..log import get_logger
from ..tolerance import ABS_TOL, is_close, is_zero
from ..units import U
from .angle import Angle
from .vector import Vector

logger = get_logger(__name__)

# Maximum deviation between a true arc and its Bezier approximation, in the path's units
DEFAULT_TOLERANCE = 1.0

BezierTriple = tuple[Vector[U], Vector[U], Vector[U]]


def arc_error_bound(radius: float, sweep: Angle = Angle.frac_pi_2()) -> float:
    """Worst radial deviation of one cubic approximating a circular arc of ``sweep``."""
    quarter = abs(sweep.radians) / 4.0
    return abs(radius) * (2.0 / 27.0) * math.sin(quarter) ** 6 / math.cos(quarter) ** 2


def check_tolerance(radii: Vector[U], tolerance: float) -> bool:
    """Report whether quarter-arc cubics on ``radii`` stay within ``tolerance``."""
    bound = arc_error_bound(max(abs(radii.x), abs(radii.y)))
    if bound > tolerance:
        logger.debug("Arc error bound %.3g exceeds requested tolerance %.3g", bound, tolerance)
        return False
    return True


def arc_to_bezier(
    r: Vector[U],
    x_rotation: Angle,
    large_arc: bool,
    sweep: bool,
    d: Vector[U],
) -> list[BezierTriple]:
    """Convert an SVG style elliptical arc into cubic Bezier segments.

    Every returned triple ``(ctrl1, ctrl2, end)`` is a displacement from the pen
    position at the start of that segment, so the triples can be appended to a
    path in order. A zero displacement yields no segments and a zero radius
    yields a single straight cubic.
    """
    if is_zero(d.length()):
        return []

    r = abs(r)
    if is_zero(r.x) or is_zero(r.y):
        return [(d / 3.0, d * (2.0 / 3.0), d)]

    # Solve with the ellipse axes aligned, then rotate the result back
    d = d.rotate(-x_rotation)

    # Grow radii that cannot span the endpoints, keeping their ratio
    scale = max(d.component_div(r * 2.0).length(), 1.0)
    r = r * scale

    c = _center(r, large_arc, sweep, d)

    c_r = (-c).component_div(r)
    phi0 = Angle.atan2(c_r.y, c_r.x)
    dc_r = (d - c).component_div(r)
    dphi = _sweep_angle(Angle.atan2(dc_r.y, dc_r.x) - phi0, large_arc, sweep)

    if not _sweep_in_quadrant(dphi, large_arc, sweep):
        logger.debug(
            "Arc sweep %.6f rad outside expected range for large_arc=%s sweep=%s",
            dphi.radians,
            large_arc,
            sweep,
        )

    # Subtract the tolerance so 90 degrees plus float error stays one segment
    count = math.ceil(abs(dphi / Angle.frac_pi_2()) - ABS_TOL)
    count = min(max(count, 1), 4)
    step = dphi / count

    segments: list[BezierTriple] = []
    for i in range(count):
        ctrl1, ctrl2, end = _unit_arc(r, phi0 + step * i, step)
        segments.append((ctrl1.rotate(x_rotation), ctrl2.rotate(x_rotation), end.rotate(x_rotation)))
    return segments


def _center(r: Vector[U], large_arc: bool, sweep: bool, d: Vector[U]) -> Vector[U]:
    """Ellipse center relative to the arc start, for axis aligned radii."""
    half = d / 2.0
    sign = 1.0 if large_arc == sweep else -1.0

    expr = (r.x * half.y) ** 2 + (r.y * half.x) ** 2
    v = ((r.x * r.y) ** 2 - expr) / expr
    if is_close(v, 0.0) or v < 0.0:
        co = 0.0
    else:
        co = sign * math.sqrt(v)

    c = Vector(r.x * half.y / r.y, -r.y * half.x / r.x)
    return c * co + half


def _sweep_angle(dphi: Angle, large_arc: bool, sweep: bool) -> Angle:
    # Half turns land within rounding of +-pi, either of which is already large
    if large_arc and sweep and dphi < Angle.pi() and not dphi.is_close(Angle.pi()):
        return dphi + Angle.two_pi()
    if large_arc and not sweep and dphi > -Angle.pi() and not dphi.is_close(-Angle.pi()):
        return dphi - Angle.two_pi()
    if not large_arc and sweep and dphi < Angle.zero():
        return dphi + Angle.two_pi()
    if not large_arc and not sweep and dphi > Angle.zero():
        return dphi - Angle.two_pi()
    return dphi


def _sweep_in_quadrant(dphi: Angle, large_arc: bool, sweep: bool) -> bool:
    if large_arc:
        lo, hi = (Angle.pi(), Angle.two_pi()) if sweep else (-Angle.two_pi(), -Angle.pi())
    else:
        lo, hi = (Angle.zero(), Angle.pi()) if sweep else (-Angle.pi(), Angle.zero())
    return (lo <= dphi <= hi) or dphi.is_close(lo) or dphi.is_close(hi)


def _unit_arc(r: Vector[U], phi0: Angle, dphi: Angle) -> BezierTriple:
    """One cubic for the arc of ``dphi`` starting at ``phi0`` on the ellipse ``r``."""
    kappa = (4.0 / 3.0) * math.tan(dphi.radians / 4.0)

    sin0, cos0 = phi0.sin_cos()
    sin1, cos1 = (phi0 + dphi).sin_cos()
    p1 = Vector(cos0, sin0)
    p4 = Vector(cos1, sin1)
    p2 = Vector(p1.x - p1.y * kappa, p1.y + p1.x * kappa)
    p3 = Vector(p4.x + p4.y * kappa, p4.y - p4.x * kappa)

    return (
        (p2 - p1).component_mul(r),
        (p3 - p1).component_mul(r),
        (p4 - p1).component_mul(r),
    )
