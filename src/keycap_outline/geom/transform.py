from __future__ import annotations

from typing import Generic

from pydantic import BaseModel, ConfigDict

from ..tolerance import ABS_TOL, REL_TOL, is_close, is_zero
from ..units import U
from .angle import Angle
from .vector import Point, Vector


class Scale(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def __init__(self, x: float, y: float) -> None:
        super().__init__(x=x, y=y)

    @classmethod
    def uniform(cls, factor: float) -> Scale:
        return cls(factor, factor)

    def to_transform(self) -> Transform:
        return Transform(self.x, 0.0, 0.0, self.y, 0.0, 0.0)


class Translate(BaseModel, Generic[U]):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def __init__(self, x: float, y: float) -> None:
        super().__init__(x=x, y=y)

    @classmethod
    def from_vector(cls, vector: Vector[U]) -> Translate[U]:
        return Translate(vector.x, vector.y)

    def to_vector(self) -> Vector[U]:
        return Vector(self.x, self.y)

    def to_transform(self) -> Transform:
        return Transform(1.0, 0.0, 0.0, 1.0, self.x, self.y)


class Rotate(BaseModel):
    model_config = ConfigDict(frozen=True)

    angle: Angle

    def __init__(self, angle: Angle) -> None:
        super().__init__(angle=angle)

    def to_transform(self) -> Transform:
        sin, cos = self.angle.sin_cos()
        return Transform(cos, -sin, sin, cos, 0.0, 0.0)


class Transform(BaseModel):
    """2x3 affine matrix.

    Points map as ``x' = x*a_xx + y*a_xy + t_x`` and ``y' = x*a_yx + y*a_yy + t_y``;
    vectors use the same matrix without the translation column.
    """

    model_config = ConfigDict(frozen=True)

    a_xx: float
    a_xy: float
    a_yx: float
    a_yy: float
    t_x: float
    t_y: float

    def __init__(self, a_xx: float, a_xy: float, a_yx: float, a_yy: float, t_x: float, t_y: float) -> None:
        super().__init__(a_xx=a_xx, a_xy=a_xy, a_yx=a_yx, a_yy=a_yy, t_x=t_x, t_y=t_y)

    @classmethod
    def identity(cls) -> Transform:
        return cls(1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

    def transform_point(self, point: Point[U]) -> Point[U]:
        return Point(
            point.x * self.a_xx + point.y * self.a_xy + self.t_x,
            point.x * self.a_yx + point.y * self.a_yy + self.t_y,
        )

    def transform_vector(self, vector: Vector[U]) -> Vector[U]:
        return Vector(
            vector.x * self.a_xx + vector.y * self.a_xy,
            vector.x * self.a_yx + vector.y * self.a_yy,
        )

    def then(self, other: Transform) -> Transform:
        """The transform applying ``self`` first and ``other`` second."""
        return Transform(
            other.a_xx * self.a_xx + other.a_xy * self.a_yx,
            other.a_xx * self.a_xy + other.a_xy * self.a_yy,
            other.a_yx * self.a_xx + other.a_yy * self.a_yx,
            other.a_yx * self.a_xy + other.a_yy * self.a_yy,
            other.a_xx * self.t_x + other.a_xy * self.t_y + other.t_x,
            other.a_yx * self.t_x + other.a_yy * self.t_y + other.t_y,
        )

    def determinant(self) -> float:
        return self.a_xx * self.a_yy - self.a_xy * self.a_yx

    def inverse(self) -> Transform:
        det = self.determinant()
        if is_zero(det):
            raise ValueError("Transform is not invertible")
        a_xx = self.a_yy / det
        a_xy = -self.a_xy / det
        a_yx = -self.a_yx / det
        a_yy = self.a_xx / det
        return Transform(
            a_xx,
            a_xy,
            a_yx,
            a_yy,
            -(a_xx * self.t_x + a_xy * self.t_y),
            -(a_yx * self.t_x + a_yy * self.t_y),
        )

    def is_axis_aligned(self) -> bool:
        """True when the matrix has no shear or rotation, so boxes map to boxes."""
        return is_zero(self.a_xy) and is_zero(self.a_yx)

    def is_close(self, other: Transform, abs_tol: float = ABS_TOL, rel_tol: float = REL_TOL) -> bool:
        pairs = (
            (self.a_xx, other.a_xx),
            (self.a_xy, other.a_xy),
            (self.a_yx, other.a_yx),
            (self.a_yy, other.a_yy),
            (self.t_x, other.t_x),
            (self.t_y, other.t_y),
        )
        return all(is_close(a, b, abs_tol, rel_tol) for a, b in pairs)
