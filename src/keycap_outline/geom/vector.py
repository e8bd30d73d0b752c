from __future__ import annotations

import math
from typing import Generic, overload

from pydantic import BaseModel, ConfigDict

from ..tolerance import ABS_TOL, REL_TOL, is_close
from ..units import Conversion, Length, U, V
from .angle import Angle


class Vector(BaseModel, Generic[U]):
    """A displacement in the measurement space ``U``."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def __init__(self, x: float, y: float) -> None:
        super().__init__(x=x, y=y)

    @classmethod
    def zero(cls) -> Vector[U]:
        return Vector(0.0, 0.0)

    @classmethod
    def splat(cls, value: float) -> Vector[U]:
        return Vector(value, value)

    @classmethod
    def from_lengths(cls, x: Length[U], y: Length[U]) -> Vector[U]:
        return Vector(x.value, y.value)

    def __add__(self, other: Vector[U]) -> Vector[U]:
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector[U]) -> Vector[U]:
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vector[U]:
        return Vector(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vector[U]:
        return Vector(self.x / divisor, self.y / divisor)

    def __neg__(self) -> Vector[U]:
        return Vector(-self.x, -self.y)

    def __abs__(self) -> Vector[U]:
        return Vector(abs(self.x), abs(self.y))

    def min(self, other: Vector[U]) -> Vector[U]:
        return Vector(min(self.x, other.x), min(self.y, other.y))

    def max(self, other: Vector[U]) -> Vector[U]:
        return Vector(max(self.x, other.x), max(self.y, other.y))

    def lerp(self, other: Vector[U], t: float) -> Vector[U]:
        return self + (other - self) * t

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def dot(self, other: Vector[U]) -> float:
        return self.x * other.x + self.y * other.y

    def component_mul(self, other: Vector[U]) -> Vector[U]:
        return Vector(self.x * other.x, self.y * other.y)

    def component_div(self, other: Vector[U]) -> Vector[U]:
        return Vector(self.x / other.x, self.y / other.y)

    def rotate(self, angle: Angle) -> Vector[U]:
        sin, cos = angle.sin_cos()
        return Vector(self.x * cos - self.y * sin, self.x * sin + self.y * cos)

    def neg_x(self) -> Vector[U]:
        return Vector(-self.x, self.y)

    def neg_y(self) -> Vector[U]:
        return Vector(self.x, -self.y)

    def swap(self) -> Vector[U]:
        return Vector(self.y, self.x)

    def to_point(self) -> Point[U]:
        return Point(self.x, self.y)

    def convert(self, conversion: Conversion[U, V]) -> Vector[V]:
        return Vector(conversion.apply(self.x), conversion.apply(self.y))

    def is_close(self, other: Vector[U], abs_tol: float = ABS_TOL, rel_tol: float = REL_TOL) -> bool:
        return is_close(self.x, other.x, abs_tol, rel_tol) and is_close(self.y, other.y, abs_tol, rel_tol)


class Point(BaseModel, Generic[U]):
    """A position in the measurement space ``U``."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def __init__(self, x: float, y: float) -> None:
        super().__init__(x=x, y=y)

    @classmethod
    def origin(cls) -> Point[U]:
        return Point(0.0, 0.0)

    @classmethod
    def splat(cls, value: float) -> Point[U]:
        return Point(value, value)

    def __add__(self, other: Vector[U]) -> Point[U]:
        return Point(self.x + other.x, self.y + other.y)

    @overload
    def __sub__(self, other: Point[U]) -> Vector[U]: ...

    @overload
    def __sub__(self, other: Vector[U]) -> Point[U]: ...

    def __sub__(self, other):
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        return Point(self.x - other.x, self.y - other.y)

    def min(self, other: Point[U]) -> Point[U]:
        return Point(min(self.x, other.x), min(self.y, other.y))

    def max(self, other: Point[U]) -> Point[U]:
        return Point(max(self.x, other.x), max(self.y, other.y))

    def lerp(self, other: Point[U], t: float) -> Point[U]:
        return self + (other - self) * t

    def to_vector(self) -> Vector[U]:
        return Vector(self.x, self.y)

    def convert(self, conversion: Conversion[U, V]) -> Point[V]:
        return Point(conversion.apply(self.x), conversion.apply(self.y))

    def is_close(self, other: Point[U], abs_tol: float = ABS_TOL, rel_tol: float = REL_TOL) -> bool:
        return is_close(self.x, other.x, abs_tol, rel_tol) and is_close(self.y, other.y, abs_tol, rel_tol)
