from __future__ import annotations

from typing import Generic, Iterable, Iterator, TypeAlias

from pydantic import BaseModel, ConfigDict

from ..tolerance import ABS_TOL, REL_TOL
from ..units import Conversion, U, V
from .angle import Angle
from .arc import arc_to_bezier
from .rect import Rect
from .transform import Rotate, Scale, Transform, Translate
from .vector import Point, Vector


class _Segment(BaseModel):
    model_config = ConfigDict(frozen=True)


class Move(_Segment, Generic[U]):
    """Start a new subpath at an absolute point."""

    point: Point[U]

    def __init__(self, point: Point[U]) -> None:
        super().__init__(point=point)

    def translate(self, by: Vector[U]) -> Move[U]:
        return Move(self.point + by)

    def scale(self, x: float, y: float) -> Move[U]:
        return Move(Point(self.point.x * x, self.point.y * y))

    def transform(self, transform: Transform) -> Move[U]:
        return Move(transform.transform_point(self.point))

    def convert(self, conversion: Conversion[U, V]) -> Move[V]:
        return Move(self.point.convert(conversion))

    def is_close(self, other: PathSegment, abs_tol: float = ABS_TOL, rel_tol: float = REL_TOL) -> bool:
        return isinstance(other, Move) and self.point.is_close(other.point, abs_tol, rel_tol)


class Line(_Segment, Generic[U]):
    d: Vector[U]

    def __init__(self, d: Vector[U]) -> None:
        super().__init__(d=d)

    def translate(self, by: Vector[U]) -> Line[U]:
        return self

    def scale(self, x: float, y: float) -> Line[U]:
        return Line(self.d.component_mul(Vector(x, y)))

    def transform(self, transform: Transform) -> Line[U]:
        return Line(transform.transform_vector(self.d))

    def convert(self, conversion: Conversion[U, V]) -> Line[V]:
        return Line(self.d.convert(conversion))

    def is_close(self, other: PathSegment, abs_tol: float = ABS_TOL, rel_tol: float = REL_TOL) -> bool:
        return isinstance(other, Line) and self.d.is_close(other.d, abs_tol, rel_tol)


class CubicBezier(_Segment, Generic[U]):
    ctrl1: Vector[U]
    ctrl2: Vector[U]
    d: Vector[U]

    def __init__(self, ctrl1: Vector[U], ctrl2: Vector[U], d: Vector[U]) -> None:
        super().__init__(ctrl1=ctrl1, ctrl2=ctrl2, d=d)

    def translate(self, by: Vector[U]) -> CubicBezier[U]:
        return self

    def scale(self, x: float, y: float) -> CubicBezier[U]:
        factor = Vector(x, y)
        return CubicBezier(
            self.ctrl1.component_mul(factor),
            self.ctrl2.component_mul(factor),
            self.d.component_mul(factor),
        )

    def transform(self, transform: Transform) -> CubicBezier[U]:
        return CubicBezier(
            transform.transform_vector(self.ctrl1),
            transform.transform_vector(self.ctrl2),
            transform.transform_vector(self.d),
        )

    def convert(self, conversion: Conversion[U, V]) -> CubicBezier[V]:
        return CubicBezier(
            self.ctrl1.convert(conversion),
            self.ctrl2.convert(conversion),
            self.d.convert(conversion),
        )

    def is_close(self, other: PathSegment, abs_tol: float = ABS_TOL, rel_tol: float = REL_TOL) -> bool:
        return (
            isinstance(other, CubicBezier)
            and self.ctrl1.is_close(other.ctrl1, abs_tol, rel_tol)
            and self.ctrl2.is_close(other.ctrl2, abs_tol, rel_tol)
            and self.d.is_close(other.d, abs_tol, rel_tol)
        )


class QuadraticBezier(_Segment, Generic[U]):
    ctrl: Vector[U]
    d: Vector[U]

    def __init__(self, ctrl: Vector[U], d: Vector[U]) -> None:
        super().__init__(ctrl=ctrl, d=d)

    def translate(self, by: Vector[U]) -> QuadraticBezier[U]:
        return self

    def scale(self, x: float, y: float) -> QuadraticBezier[U]:
        factor = Vector(x, y)
        return QuadraticBezier(self.ctrl.component_mul(factor), self.d.component_mul(factor))

    def transform(self, transform: Transform) -> QuadraticBezier[U]:
        return QuadraticBezier(transform.transform_vector(self.ctrl), transform.transform_vector(self.d))

    def convert(self, conversion: Conversion[U, V]) -> QuadraticBezier[V]:
        return QuadraticBezier(self.ctrl.convert(conversion), self.d.convert(conversion))

    def is_close(self, other: PathSegment, abs_tol: float = ABS_TOL, rel_tol: float = REL_TOL) -> bool:
        return (
            isinstance(other, QuadraticBezier)
            and self.ctrl.is_close(other.ctrl, abs_tol, rel_tol)
            and self.d.is_close(other.d, abs_tol, rel_tol)
        )


class Close(_Segment):
    """Return the pen to the start of the current subpath."""

    def translate(self, by: Vector) -> Close:
        return self

    def scale(self, x: float, y: float) -> Close:
        return self

    def transform(self, transform: Transform) -> Close:
        return self

    def convert(self, conversion: Conversion) -> Close:
        return self

    def is_close(self, other: PathSegment, abs_tol: float = ABS_TOL, rel_tol: float = REL_TOL) -> bool:
        return isinstance(other, Close)


PathSegment: TypeAlias = Move | Line | CubicBezier | QuadraticBezier | Close


def _walk(segments: Iterable[PathSegment], start: Point[U], point: Point[U]) -> Iterator[tuple[Point[U], Point[U]]]:
    """Yield ``(subpath start, pen)`` after each segment."""
    for seg in segments:
        if isinstance(seg, Move):
            start = point = seg.point
        elif isinstance(seg, Close):
            point = start
        else:
            point = point + seg.d
        yield start, point


def _pen_after(segments: Iterable[PathSegment]) -> tuple[Point[U], Point[U]]:
    origin: Point[U] = Point.origin()
    start, point = origin, origin
    for start, point in _walk(segments, origin, origin):
        pass
    return start, point


def calculate_bounds(segments: Iterable[PathSegment]) -> Rect[U]:
    """Bounds over every endpoint the pen visits.

    Data that does not open with a Move starts with the pen at the origin, so the
    origin is counted. Control points are not.
    """
    segments = list(segments)
    if not segments:
        return Rect.empty()
    origin: Point[U] = Point.origin()
    bounds = None if isinstance(segments[0], Move) else Rect(origin, origin)
    for _, point in _walk(segments, origin, origin):
        bounds = Rect(point, point) if bounds is None else bounds.include(point)
    return bounds


class Path(BaseModel, Generic[U]):
    """Immutable sequence of path segments with cached bounds."""

    model_config = ConfigDict(frozen=True)

    segments: tuple[PathSegment, ...]
    bounds: Rect[U]

    def __init__(self, segments: Iterable[PathSegment], bounds: Rect[U]) -> None:
        super().__init__(segments=tuple(segments), bounds=bounds)

    @classmethod
    def empty(cls) -> Path[U]:
        return Path((), Rect.empty())

    @classmethod
    def builder(cls) -> PathBuilder[U]:
        return PathBuilder()

    @classmethod
    def from_segments(cls, segments: Iterable[PathSegment]) -> Path[U]:
        segments = tuple(segments)
        return Path(segments, calculate_bounds(segments))

    @classmethod
    def join(cls, paths: Iterable[Path[U]]) -> Path[U]:
        builder: PathBuilder[U] = PathBuilder()
        for path in paths:
            builder.extend(path)
        return builder.build()

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[PathSegment]:  # type: ignore[override]
        return iter(self.segments)

    def is_empty(self) -> bool:
        return not self.segments

    def translate(self, by: Vector[U]) -> Path[U]:
        return self.transform(Translate.from_vector(by))

    def scale(self, x: float, y: float | None = None) -> Path[U]:
        y = x if y is None else y
        return Path((seg.scale(x, y) for seg in self.segments), self.bounds.scale(x, y))

    def rotate(self, angle: Angle) -> Path[U]:
        return self.transform(Rotate(angle))

    def transform(self, transform: Transform | Scale | Translate | Rotate) -> Path[U]:
        if not isinstance(transform, Transform):
            transform = transform.to_transform()
        segments = tuple(seg.transform(transform) for seg in self.segments)
        # The implicit pen at the origin is not moved by a transform, so only
        # paths opening with a Move can map their cached bounds directly
        if transform.is_axis_aligned() and self.segments and isinstance(self.segments[0], Move):
            lo = transform.transform_point(self.bounds.min)
            hi = transform.transform_point(self.bounds.max)
            return Path(segments, Rect.from_points(lo, hi))
        return Path(segments, calculate_bounds(segments))

    def convert(self, conversion: Conversion[U, V]) -> Path[V]:
        return Path((seg.convert(conversion) for seg in self.segments), self.bounds.convert(conversion))

    def is_close(self, other: Path[U], abs_tol: float = ABS_TOL, rel_tol: float = REL_TOL) -> bool:
        return (
            len(self) == len(other)
            and self.bounds.is_close(other.bounds, abs_tol, rel_tol)
            and all(a.is_close(b, abs_tol, rel_tol) for a, b in zip(self.segments, other.segments))
        )


class PathBuilder(Generic[U]):
    """Mutable accumulator for a :class:`Path`.

    Relative operations are the primitives; the absolute ones only compute a
    displacement from the pen, so bounds are maintained in a single place.
    """

    def __init__(self) -> None:
        self._segments: list[PathSegment] = []
        self._start: Point[U] = Point.origin()
        self._point: Point[U] = Point.origin()
        self._bounds: Rect[U] = Rect.empty()

    @property
    def point(self) -> Point[U]:
        return self._point

    @property
    def start(self) -> Point[U]:
        return self._start

    @property
    def bounds(self) -> Rect[U]:
        return self._bounds

    def __len__(self) -> int:
        return len(self._segments)

    def is_empty(self) -> bool:
        return not self._segments

    def build(self) -> Path[U]:
        return Path(self._segments, self._bounds)

    def _advance(self, segment: PathSegment, d: Vector[U]) -> None:
        self._segments.append(segment)
        self._point = self._point + d
        self._bounds = self._bounds.include(self._point)

    def extend(self, other: PathBuilder[U] | Path[U]) -> None:
        if isinstance(other, PathBuilder):
            segments, bounds = other._segments, other._bounds
        else:
            segments, bounds = list(other.segments), other.bounds
        if not segments:
            return
        was_empty = self.is_empty()
        if not isinstance(segments[0], Move):
            self._segments.append(Move(Point.origin()))
        self._segments.extend(segments)
        self._bounds = bounds if was_empty else self._bounds.union(bounds)
        self._start, self._point = _pen_after(segments)

    def __iadd__(self, other: PathBuilder[U] | Path[U]) -> PathBuilder[U]:
        self.extend(other)
        return self

    def rel_move(self, d: Vector[U]) -> None:
        self.abs_move(self._point + d)

    def rel_line(self, d: Vector[U]) -> None:
        self._advance(Line(d), d)

    def rel_horiz_line(self, dx: float) -> None:
        self.rel_line(Vector(dx, 0.0))

    def rel_vert_line(self, dy: float) -> None:
        self.rel_line(Vector(0.0, dy))

    def rel_cubic_bezier(self, ctrl1: Vector[U], ctrl2: Vector[U], d: Vector[U]) -> None:
        self._advance(CubicBezier(ctrl1, ctrl2, d), d)

    def rel_smooth_cubic_bezier(self, ctrl2: Vector[U], d: Vector[U]) -> None:
        """Cubic whose first control point mirrors the previous cubic's second one."""
        prev = self._segments[-1] if self._segments else None
        ctrl1 = prev.d - prev.ctrl2 if isinstance(prev, CubicBezier) else Vector.zero()
        self.rel_cubic_bezier(ctrl1, ctrl2, d)

    def rel_quadratic_bezier(self, ctrl: Vector[U], d: Vector[U]) -> None:
        self._advance(QuadraticBezier(ctrl, d), d)

    def rel_smooth_quadratic_bezier(self, d: Vector[U]) -> None:
        prev = self._segments[-1] if self._segments else None
        ctrl = prev.d - prev.ctrl if isinstance(prev, QuadraticBezier) else Vector.zero()
        self.rel_quadratic_bezier(ctrl, d)

    def rel_arc(self, r: Vector[U], x_rotation: Angle, large_arc: bool, sweep: bool, d: Vector[U]) -> None:
        for ctrl1, ctrl2, end in arc_to_bezier(r, x_rotation, large_arc, sweep, d):
            self.rel_cubic_bezier(ctrl1, ctrl2, end)

    def close(self) -> None:
        self._segments.append(Close())
        self._point = self._start

    def abs_move(self, point: Point[U]) -> None:
        if self.is_empty():
            self._bounds = Rect(point, point)
        else:
            self._bounds = self._bounds.include(point)
        self._segments.append(Move(point))
        self._start = point
        self._point = point

    def abs_line(self, point: Point[U]) -> None:
        self.rel_line(point - self._point)

    def abs_horiz_line(self, x: float) -> None:
        self.rel_horiz_line(x - self._point.x)

    def abs_vert_line(self, y: float) -> None:
        self.rel_vert_line(y - self._point.y)

    def abs_cubic_bezier(self, ctrl1: Point[U], ctrl2: Point[U], point: Point[U]) -> None:
        self.rel_cubic_bezier(ctrl1 - self._point, ctrl2 - self._point, point - self._point)

    def abs_smooth_cubic_bezier(self, ctrl2: Point[U], point: Point[U]) -> None:
        self.rel_smooth_cubic_bezier(ctrl2 - self._point, point - self._point)

    def abs_quadratic_bezier(self, ctrl: Point[U], point: Point[U]) -> None:
        self.rel_quadratic_bezier(ctrl - self._point, point - self._point)

    def abs_smooth_quadratic_bezier(self, point: Point[U]) -> None:
        self.rel_smooth_quadratic_bezier(point - self._point)

    def abs_arc(self, r: Vector[U], x_rotation: Angle, large_arc: bool, sweep: bool, point: Point[U]) -> None:
        self.rel_arc(r, x_rotation, large_arc, sweep, point - self._point)
