from __future__ import annotations

import math
from typing import TYPE_CHECKING, Generic

from pydantic import BaseModel, ConfigDict

from ..tolerance import ABS_TOL
from ..units import Conversion, U, V
from .angle import Angle
from .arc import DEFAULT_TOLERANCE, check_tolerance
from .rect import Rect
from .vector import Point, Vector

if TYPE_CHECKING:
    from .path import Path


class Ellipse(BaseModel, Generic[U]):
    model_config = ConfigDict(frozen=True)

    center: Point[U]
    radii: Vector[U]
    rotation: Angle = Angle.zero()

    def __init__(self, center: Point[U], radii: Vector[U], rotation: Angle | None = None) -> None:
        super().__init__(center=center, radii=abs(radii), rotation=rotation or Angle.zero())

    @classmethod
    def from_circle(cls, center: Point[U], radius: float) -> Ellipse[U]:
        return Ellipse(center, Vector.splat(radius))

    def bounding_rect(self) -> Rect[U]:
        """Tight axis aligned box around the (possibly rotated) ellipse."""
        sin, cos = self.rotation.sin_cos()
        half = Vector(
            math.hypot(self.radii.x * cos, self.radii.y * sin),
            math.hypot(self.radii.x * sin, self.radii.y * cos),
        )
        return Rect(self.center - half, self.center + half)

    def convert(self, conversion: Conversion[U, V]) -> Ellipse[V]:
        return Ellipse(self.center.convert(conversion), self.radii.convert(conversion), self.rotation)

    def to_path(self, tolerance: float = DEFAULT_TOLERANCE) -> Path[U]:
        from .path import PathBuilder

        check_tolerance(self.radii, tolerance)
        across = Vector(2.0 * self.radii.x, 0.0).rotate(self.rotation)
        builder: PathBuilder[U] = PathBuilder()
        builder.abs_move(self.center - across / 2.0)
        builder.rel_arc(self.radii, self.rotation, False, True, across)
        builder.rel_arc(self.radii, self.rotation, False, True, -across)
        builder.close()
        return builder.build()


class Circle(BaseModel, Generic[U]):
    model_config = ConfigDict(frozen=True)

    center: Point[U]
    radius: float

    def __init__(self, center: Point[U], radius: float) -> None:
        super().__init__(center=center, radius=abs(radius))

    def to_ellipse(self) -> Ellipse[U]:
        return Ellipse.from_circle(self.center, self.radius)

    def bounding_rect(self) -> Rect[U]:
        return Rect.from_center_and_size(self.center, Vector.splat(2.0 * self.radius))

    def convert(self, conversion: Conversion[U, V]) -> Circle[V]:
        return Circle(self.center.convert(conversion), conversion.apply(self.radius))

    def to_path(self, tolerance: float = DEFAULT_TOLERANCE) -> Path[U]:
        return self.to_ellipse().to_path(tolerance)


class Arc(BaseModel, Generic[U]):
    """An open elliptical arc in center parameterization."""

    model_config = ConfigDict(frozen=True)

    center: Point[U]
    radii: Vector[U]
    start: Angle
    sweep: Angle
    rotation: Angle = Angle.zero()

    def __init__(
        self,
        center: Point[U],
        radii: Vector[U],
        start: Angle,
        sweep: Angle,
        rotation: Angle | None = None,
    ) -> None:
        super().__init__(
            center=center,
            radii=abs(radii),
            start=start,
            sweep=sweep,
            rotation=rotation or Angle.zero(),
        )

    def point_at(self, angle: Angle) -> Point[U]:
        sin, cos = angle.sin_cos()
        return self.center + Vector(self.radii.x * cos, self.radii.y * sin).rotate(self.rotation)

    def start_point(self) -> Point[U]:
        return self.point_at(self.start)

    def end_point(self) -> Point[U]:
        return self.point_at(self.start + self.sweep)

    def to_path(self, tolerance: float = DEFAULT_TOLERANCE) -> Path[U]:
        from .path import PathBuilder

        check_tolerance(self.radii, tolerance)
        builder: PathBuilder[U] = PathBuilder()
        builder.abs_move(self.start_point())
        # Each piece spans at most a quarter turn, so none is a large arc
        count = max(math.ceil(abs(self.sweep / Angle.frac_pi_2()) - ABS_TOL), 1)
        piece = self.sweep / count
        positive = self.sweep.radians > 0.0
        for i in range(1, count + 1):
            builder.abs_arc(self.radii, self.rotation, False, positive, self.point_at(self.start + piece * i))
        return builder.build()
