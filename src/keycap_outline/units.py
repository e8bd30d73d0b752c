from __future__ import annotations

from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from .tolerance import ABS_TOL, REL_TOL, is_close


class Unit:
    """Marker for a measurement space.

    Units only ever appear as type parameters (``Point[Mm]``) and as the
    endpoints of a :class:`Conversion`, so they are never instantiated.
    """

    symbol: ClassVar[str] = ""

    def __new__(cls, *args, **kwargs):
        raise TypeError(f"{cls.__name__} is a unit marker and cannot be instantiated")


class KeyUnit(Unit):
    """Keyboard unit, the pitch of a 1x1 key (19.05 mm)."""

    symbol = "u"


class Mm(Unit):
    symbol = "mm"


class Inch(Unit):
    symbol = "in"


class Dot(Unit):
    """Abstract drawing unit, 1000 per key unit."""

    symbol = "dot"


class FontUnit(Unit):
    """Font design unit, scaled by the face's units-per-em."""

    symbol = "fu"


U = TypeVar("U", bound=Unit)
V = TypeVar("V", bound=Unit)
W = TypeVar("W", bound=Unit)


class Length(BaseModel, Generic[U]):
    model_config = ConfigDict(frozen=True)

    value: float

    def __init__(self, value: float) -> None:
        super().__init__(value=value)

    @classmethod
    def zero(cls) -> Length[U]:
        return Length(0.0)

    def __add__(self, other: Length[U]) -> Length[U]:
        return Length(self.value + other.value)

    def __sub__(self, other: Length[U]) -> Length[U]:
        return Length(self.value - other.value)

    def __mul__(self, factor: float) -> Length[U]:
        return Length(self.value * factor)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Length):
            return self.value / other.value
        return Length(self.value / other)

    def __neg__(self) -> Length[U]:
        return Length(-self.value)

    def __abs__(self) -> Length[U]:
        return Length(abs(self.value))

    def __lt__(self, other: Length[U]) -> bool:
        return self.value < other.value

    def __le__(self, other: Length[U]) -> bool:
        return self.value <= other.value

    def __gt__(self, other: Length[U]) -> bool:
        return self.value > other.value

    def __ge__(self, other: Length[U]) -> bool:
        return self.value >= other.value

    def min(self, other: Length[U]) -> Length[U]:
        return Length(min(self.value, other.value))

    def max(self, other: Length[U]) -> Length[U]:
        return Length(max(self.value, other.value))

    def lerp(self, other: Length[U], t: float) -> Length[U]:
        return Length(self.value + (other.value - self.value) * t)

    def convert(self, conversion: Conversion[U, V]) -> Length[V]:
        return Length(conversion.apply(self.value))

    def is_close(self, other: Length[U], abs_tol: float = ABS_TOL, rel_tol: float = REL_TOL) -> bool:
        return is_close(self.value, other.value, abs_tol=abs_tol, rel_tol=rel_tol)


class Conversion(BaseModel, Generic[U, V]):
    """Declared linear factor taking values in ``source`` units to ``target`` units."""

    model_config = ConfigDict(frozen=True)

    source: type[Unit]
    target: type[Unit]
    factor: float

    def __init__(self, source: type[Unit], target: type[Unit], factor: float) -> None:
        super().__init__(source=source, target=target, factor=factor)

    def apply(self, value: float) -> float:
        return value * self.factor

    def inverse(self) -> Conversion[V, U]:
        return Conversion(self.target, self.source, 1.0 / self.factor)

    def then(self, other: Conversion[V, W]) -> Conversion[U, W]:
        if other.source is not self.target:
            raise ValueError(
                f"Cannot chain {self.source.__name__}->{self.target.__name__} "
                f"with {other.source.__name__}->{other.target.__name__}"
            )
        return Conversion(self.source, other.target, self.factor * other.factor)

    def __repr__(self) -> str:
        return f"Conversion({self.source.__name__} -> {self.target.__name__}, {self.factor})"


DOT_PER_UNIT: Conversion[KeyUnit, Dot] = Conversion(KeyUnit, Dot, 1000.0)
MM_PER_UNIT: Conversion[KeyUnit, Mm] = Conversion(KeyUnit, Mm, 19.05)
INCH_PER_UNIT: Conversion[KeyUnit, Inch] = Conversion(KeyUnit, Inch, 0.75)
MM_PER_INCH: Conversion[Inch, Mm] = Conversion(Inch, Mm, 25.4)
DOT_PER_MM: Conversion[Mm, Dot] = MM_PER_UNIT.inverse().then(DOT_PER_UNIT)
DOT_PER_INCH: Conversion[Inch, Dot] = INCH_PER_UNIT.inverse().then(DOT_PER_UNIT)


def font_conversion(units_per_em: float, font_size: Length[V], target: type[Unit]) -> Conversion[FontUnit, V]:
    """Conversion from a face's design units to ``target`` for an em of ``font_size``."""
    if units_per_em <= 0:
        raise ValueError(f"units_per_em must be positive, got {units_per_em}")
    return Conversion(FontUnit, target, font_size.value / units_per_em)
