from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict

from ..tolerance import ABS_TOL, REL_TOL, is_close

_TWO_PI = 2.0 * math.pi


class Angle(BaseModel):
    """An angle stored in radians. Degrees are a convenience at the edges only."""

    model_config = ConfigDict(frozen=True)

    radians: float

    def __init__(self, radians: float) -> None:
        super().__init__(radians=radians)

    @classmethod
    def zero(cls) -> Angle:
        return cls(0.0)

    @classmethod
    def from_degrees(cls, degrees: float) -> Angle:
        return cls(math.radians(degrees))

    @classmethod
    def frac_pi_2(cls) -> Angle:
        return cls(math.pi / 2.0)

    @classmethod
    def pi(cls) -> Angle:
        return cls(math.pi)

    @classmethod
    def two_pi(cls) -> Angle:
        return cls(_TWO_PI)

    @classmethod
    def atan2(cls, y: float, x: float) -> Angle:
        return cls(math.atan2(y, x))

    @classmethod
    def asin(cls, value: float) -> Angle:
        return cls(math.asin(value))

    @classmethod
    def acos(cls, value: float) -> Angle:
        return cls(math.acos(value))

    @property
    def degrees(self) -> float:
        return math.degrees(self.radians)

    def positive(self) -> Angle:
        """Equivalent angle in [0, 2pi)."""
        value = self.radians % _TWO_PI
        if value >= _TWO_PI:
            value -= _TWO_PI
        return Angle(value)

    def signed(self) -> Angle:
        """Equivalent angle in (-pi, pi]."""
        value = self.positive().radians
        if value > math.pi:
            value -= _TWO_PI
        return Angle(value)

    def sin(self) -> float:
        return math.sin(self.radians)

    def cos(self) -> float:
        return math.cos(self.radians)

    def tan(self) -> float:
        return math.tan(self.radians)

    def sin_cos(self) -> tuple[float, float]:
        return math.sin(self.radians), math.cos(self.radians)

    def __add__(self, other: Angle) -> Angle:
        return Angle(self.radians + other.radians)

    def __sub__(self, other: Angle) -> Angle:
        return Angle(self.radians - other.radians)

    def __mul__(self, factor: float) -> Angle:
        return Angle(self.radians * factor)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Angle):
            return self.radians / other.radians
        return Angle(self.radians / other)

    def __neg__(self) -> Angle:
        return Angle(-self.radians)

    def __abs__(self) -> Angle:
        return Angle(abs(self.radians))

    def __lt__(self, other: Angle) -> bool:
        return self.radians < other.radians

    def __le__(self, other: Angle) -> bool:
        return self.radians <= other.radians

    def __gt__(self, other: Angle) -> bool:
        return self.radians > other.radians

    def __ge__(self, other: Angle) -> bool:
        return self.radians >= other.radians

    def is_close(self, other: Angle, abs_tol: float = ABS_TOL, rel_tol: float = REL_TOL) -> bool:
        return is_close(self.radians, other.radians, abs_tol=abs_tol, rel_tol=rel_tol)
