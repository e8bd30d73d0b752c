from __future__ import annotations

from typing import TYPE_CHECKING, Generic

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from ..tolerance import ABS_TOL, REL_TOL
from ..units import Conversion, U, V
from .angle import Angle
from .arc import DEFAULT_TOLERANCE, check_tolerance
from .vector import Point, Vector

if TYPE_CHECKING:
    from .path import Path


class Rect(BaseModel, Generic[U]):
    model_config = ConfigDict(frozen=True)

    min: Point[U]
    max: Point[U]

    def __init__(self, min: Point[U], max: Point[U]) -> None:
        super().__init__(min=min, max=max)

    @classmethod
    def empty(cls) -> Rect[U]:
        return Rect(Point.origin(), Point.origin())

    @classmethod
    def from_points(cls, a: Point[U], b: Point[U]) -> Rect[U]:
        return Rect(a.min(b), a.max(b))

    @classmethod
    def from_origin_and_size(cls, origin: Point[U], size: Vector[U]) -> Rect[U]:
        return cls.from_points(origin, origin + size)

    @classmethod
    def from_center_and_size(cls, center: Point[U], size: Vector[U]) -> Rect[U]:
        half = abs(size) / 2.0
        return Rect(center - half, center + half)

    def size(self) -> Vector[U]:
        return self.max - self.min

    def width(self) -> float:
        return self.max.x - self.min.x

    def height(self) -> float:
        return self.max.y - self.min.y

    def center(self) -> Point[U]:
        return self.min.lerp(self.max, 0.5)

    def union(self, other: Rect[U]) -> Rect[U]:
        return Rect(self.min.min(other.min), self.max.max(other.max))

    def include(self, point: Point[U]) -> Rect[U]:
        return Rect(self.min.min(point), self.max.max(point))

    def translate(self, by: Vector[U]) -> Rect[U]:
        return Rect(self.min + by, self.max + by)

    def scale(self, x: float, y: float) -> Rect[U]:
        a = Point(self.min.x * x, self.min.y * y)
        b = Point(self.max.x * x, self.max.y * y)
        return Rect.from_points(a, b)

    def convert(self, conversion: Conversion[U, V]) -> Rect[V]:
        return Rect.from_points(self.min.convert(conversion), self.max.convert(conversion))

    def is_close(self, other: Rect[U], abs_tol: float = ABS_TOL, rel_tol: float = REL_TOL) -> bool:
        return self.min.is_close(other.min, abs_tol, rel_tol) and self.max.is_close(other.max, abs_tol, rel_tol)

    def to_path(self, tolerance: float = DEFAULT_TOLERANCE) -> Path[U]:
        from .path import PathBuilder

        builder: PathBuilder[U] = PathBuilder()
        builder.abs_move(self.min)
        builder.abs_horiz_line(self.max.x)
        builder.abs_vert_line(self.max.y)
        builder.abs_horiz_line(self.min.x)
        builder.close()
        return builder.build()


class RoundRect(BaseModel, Generic[U]):
    """Rectangle with one pair of (possibly elliptical) corner radii shared by all corners.

    Radii are clamped when the model is built so opposite corners never overlap.
    """

    model_config = ConfigDict(frozen=True)

    min: Point[U]
    max: Point[U]
    radii: Vector[U]

    def __init__(self, min: Point[U], max: Point[U], radii: Vector[U]) -> None:
        super().__init__(min=min, max=max, radii=radii)

    @field_validator("radii")
    @classmethod
    def _clamp_radii(cls, radii: Vector, info: ValidationInfo) -> Vector:
        lo = info.data.get("min")
        hi = info.data.get("max")
        if lo is None or hi is None:
            return radii
        half = abs(hi - lo) / 2.0
        return abs(radii).min(half)

    @classmethod
    def from_rect(cls, rect: Rect[U], radii: Vector[U]) -> RoundRect[U]:
        return RoundRect(rect.min, rect.max, radii)

    @classmethod
    def from_origin_size_and_radii(cls, origin: Point[U], size: Vector[U], radii: Vector[U]) -> RoundRect[U]:
        return cls.from_rect(Rect.from_origin_and_size(origin, size), radii)

    @classmethod
    def from_center_size_and_radii(cls, center: Point[U], size: Vector[U], radii: Vector[U]) -> RoundRect[U]:
        return cls.from_rect(Rect.from_center_and_size(center, size), radii)

    def rect(self) -> Rect[U]:
        return Rect(self.min, self.max)

    def size(self) -> Vector[U]:
        return self.max - self.min

    def width(self) -> float:
        return self.max.x - self.min.x

    def height(self) -> float:
        return self.max.y - self.min.y

    def center(self) -> Point[U]:
        return self.min.lerp(self.max, 0.5)

    def lerp(self, other: RoundRect[U], t: float) -> RoundRect[U]:
        return RoundRect(
            self.min.lerp(other.min, t),
            self.max.lerp(other.max, t),
            self.radii.lerp(other.radii, t),
        )

    def translate(self, by: Vector[U]) -> RoundRect[U]:
        return RoundRect(self.min + by, self.max + by, self.radii)

    def convert(self, conversion: Conversion[U, V]) -> RoundRect[V]:
        return RoundRect(
            self.min.convert(conversion),
            self.max.convert(conversion),
            self.radii.convert(conversion),
        )

    def is_close(self, other: RoundRect[U], abs_tol: float = ABS_TOL, rel_tol: float = REL_TOL) -> bool:
        return (
            self.min.is_close(other.min, abs_tol, rel_tol)
            and self.max.is_close(other.max, abs_tol, rel_tol)
            and self.radii.is_close(other.radii, abs_tol, rel_tol)
        )

    def to_path(self, tolerance: float = DEFAULT_TOLERANCE) -> Path[U]:
        from .path import PathBuilder

        radii = self.radii
        check_tolerance(radii, tolerance)
        builder: PathBuilder[U] = PathBuilder()
        builder.abs_move(self.min + Vector(0.0, radii.y))
        builder.rel_arc(radii, Angle.zero(), False, True, radii.neg_y())
        builder.abs_horiz_line(self.max.x - radii.x)
        builder.rel_arc(radii, Angle.zero(), False, True, radii)
        builder.abs_vert_line(self.max.y - radii.y)
        builder.rel_arc(radii, Angle.zero(), False, True, radii.neg_x())
        builder.abs_horiz_line(self.min.x + radii.x)
        builder.rel_arc(radii, Angle.zero(), False, True, -radii)
        builder.close()
        return builder.build()
