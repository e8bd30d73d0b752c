from __future__ import annotations

from typing import Callable, Literal, NamedTuple, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .errors import UnsupportedShapeError
from .geom.angle import Angle
from .geom.arc import DEFAULT_TOLERANCE, check_tolerance
from .geom.ellipse import Circle
from .geom.path import Path, PathBuilder
from .geom.rect import Rect, RoundRect
from .geom.vector import Point, Vector
from .log import get_logger
from .profile import Profile
from .shapes import Blank, Homing, IsoHorizontal, IsoVertical, KeyShape, Normal, SteppedCaps
from .types import Color
from .units import DOT_PER_UNIT, Dot, KeyUnit

logger = get_logger(__name__)


class Outline(BaseModel):
    model_config = ConfigDict(frozen=True)

    color: Color
    width: float = Field(ge=0.0)


class KeyPath(BaseModel):
    """One drawable feature of a key, in drawing units."""

    model_config = ConfigDict(frozen=True)

    feature: str
    path: Path
    fill: Color | None = None
    outline: Outline | None = None


class _Edge(NamedTuple):
    """Straight run along ``axis`` up to ``rect.side`` offset by ``sign`` radii."""

    axis: Literal["x", "y"]
    rect: Literal["wide", "tall"]
    side: Literal["min", "max"]
    sign: float


class _Corner(NamedTuple):
    """Quarter arc displacing the pen by ``(dx, dy)`` radii."""

    dx: float
    dy: float
    sweep: bool


_Step = _Edge | _Corner

# Clockwise in y-down coordinates, starting on the left edge below the top-left corner
_ISO_STEPS: tuple[_Step, ...] = (
    _Corner(1.0, -1.0, True),
    _Edge("x", "wide", "max", -1.0),
    _Corner(1.0, 1.0, True),
    _Edge("y", "tall", "max", -1.0),
    _Corner(-1.0, 1.0, True),
    _Edge("x", "tall", "min", 1.0),
    _Corner(-1.0, -1.0, True),
    _Edge("y", "wide", "max", 1.0),
    _Corner(-1.0, -1.0, False),
    _Edge("x", "wide", "min", 1.0),
    _Corner(-1.0, -1.0, True),
)

_STEP_STEPS: tuple[_Step, ...] = (
    _Corner(-1.0, -1.0, False),
    _Edge("x", "wide", "max", -1.0),
    _Corner(1.0, 1.0, True),
    _Edge("y", "wide", "max", -1.0),
    _Corner(-1.0, 1.0, True),
    _Edge("x", "wide", "min", -1.0),
    _Corner(1.0, -1.0, False),
)


def _trace(
    start: Point[Dot],
    rects: dict[str, Rect[Dot]],
    radii: Vector[Dot],
    steps: Sequence[_Step],
) -> Path[Dot]:
    builder: PathBuilder[Dot] = PathBuilder()
    builder.abs_move(start)
    for step in steps:
        if isinstance(step, _Corner):
            d = Vector(step.dx * radii.x, step.dy * radii.y)
            builder.rel_arc(radii, Angle.zero(), False, step.sweep, d)
            continue
        edge = getattr(rects[step.rect], step.side)
        if step.axis == "x":
            builder.abs_horiz_line(edge.x + step.sign * radii.x)
        else:
            builder.abs_vert_line(edge.y + step.sign * radii.y)
    builder.close()
    return builder.build()


def iso_path(wide: Rect[Dot], tall: Rect[Dot], radii: Vector[Dot]) -> Path[Dot]:
    """Outline of the union of ``wide`` and ``tall`` for an ISO enter.

    ``tall`` must share its top edge with ``wide`` and hang below it, flush with
    its right edge, leaving a single concave corner on the left.
    """
    start = wide.min + Vector(0.0, radii.y)
    return _trace(start, {"wide": wide, "tall": tall}, radii, _ISO_STEPS)


def _iso(with_size: Callable[[Vector[KeyUnit]], RoundRect[Dot]], tolerance: float) -> Path[Dot]:
    wide = with_size(Vector(1.5, 1.0))
    tall = with_size(Vector(1.25, 2.0)).rect().translate(Vector(DOT_PER_UNIT.apply(0.25), 0.0))
    check_tolerance(wide.radii, tolerance)
    return iso_path(wide.rect(), tall, wide.radii)


def top(profile: Profile, size: Vector[KeyUnit] | None = None, tolerance: float = DEFAULT_TOLERANCE) -> Path[Dot]:
    return profile.top_with_size(size if size is not None else Vector.splat(1.0)).to_path(tolerance)


def bottom(profile: Profile, size: Vector[KeyUnit] | None = None, tolerance: float = DEFAULT_TOLERANCE) -> Path[Dot]:
    return profile.bottom_with_size(size if size is not None else Vector.splat(1.0)).to_path(tolerance)


def iso_top(profile: Profile, tolerance: float = DEFAULT_TOLERANCE) -> Path[Dot]:
    return _iso(profile.top_with_size, tolerance)


def iso_bottom(profile: Profile, tolerance: float = DEFAULT_TOLERANCE) -> Path[Dot]:
    return _iso(profile.bottom_with_size, tolerance)


def step(profile: Profile, tolerance: float = DEFAULT_TOLERANCE) -> Path[Dot]:
    """The raised step of a stepped caps key, 0.5 u wide at 1.25 u.

    Its size is the average of the top and bottom templates.
    """
    mid = profile.top_rect().lerp(profile.bottom_rect(), 0.5)
    radii = mid.radii
    check_tolerance(radii, tolerance)
    rect = Rect.from_origin_and_size(
        Point(DOT_PER_UNIT.apply(1.25) - mid.min.x, mid.min.y),
        Vector(DOT_PER_UNIT.apply(0.5), mid.height()),
    )
    return _trace(rect.min + Vector(0.0, radii.y), {"wide": rect}, radii, _STEP_STEPS)


def homing_bar(profile: Profile, tolerance: float = DEFAULT_TOLERANCE) -> Path[Dot]:
    center = profile.top_rect().center() + Vector(0.0, profile.homing_bar_offset())
    return Rect.from_center_and_size(center, profile.homing_bar_size()).to_path(tolerance)


def homing_bump(profile: Profile, tolerance: float = DEFAULT_TOLERANCE) -> Path[Dot]:
    center = profile.top_rect().center() + Vector(0.0, profile.homing_bump_offset())
    return Circle(center, profile.homing_bump_radius()).to_path(tolerance)


def draw_key(
    profile: Profile,
    shape: KeyShape,
    tolerance: float = DEFAULT_TOLERANCE,
    fill: Color | None = None,
    outline: Outline | None = None,
) -> list[KeyPath]:
    """Build every outline feature of a key, bottom first.

    ``fill`` and ``outline`` are copied onto each returned :class:`KeyPath`.
    """
    logger.debug("Drawing %s key with profile %s", type(shape).__name__, profile.name)

    features: list[tuple[str, Path[Dot]]] = []
    if isinstance(shape, Normal):
        features.append(("bottom", bottom(profile, shape.size, tolerance)))
        features.append(("top", top(profile, shape.size, tolerance)))
    elif isinstance(shape, Homing):
        features.append(("bottom", bottom(profile, None, tolerance)))
        features.append(("top", top(profile, None, tolerance)))
        kind = shape.kind or profile.homing.default
        if kind == "bar":
            features.append(("homing-bar", homing_bar(profile, tolerance)))
        elif kind == "bump":
            features.append(("homing-bump", homing_bump(profile, tolerance)))
    elif isinstance(shape, SteppedCaps):
        features.append(("bottom", bottom(profile, Vector(1.75, 1.0), tolerance)))
        features.append(("top", top(profile, Vector(1.25, 1.0), tolerance)))
        features.append(("step", step(profile, tolerance)))
    elif isinstance(shape, (IsoHorizontal, IsoVertical)):
        features.append(("bottom", iso_bottom(profile, tolerance)))
        features.append(("top", iso_top(profile, tolerance)))
    elif isinstance(shape, Blank):
        pass
    else:
        raise UnsupportedShapeError(f"Unsupported key shape: {type(shape).__name__}")

    return [KeyPath(feature=name, path=path, fill=fill, outline=outline) for name, path in features]
