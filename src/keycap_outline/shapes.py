from __future__ import annotations

from typing import Literal, TypeAlias

from pydantic import BaseModel, ConfigDict

from .geom.vector import Vector
from .units import KeyUnit

HomingKind = Literal["scoop", "bar", "bump"]


class _Shape(BaseModel):
    model_config = ConfigDict(frozen=True)


class Normal(_Shape):
    """A plain rectangular key of ``size`` key units."""

    size: Vector

    def __init__(self, size: Vector[KeyUnit] | None = None) -> None:
        super().__init__(size=size if size is not None else Vector.splat(1.0))


class Space(Normal):
    """A spacebar; drawn exactly like a normal key of the same size."""


class Blank(_Shape):
    """A placeholder occupying layout space that draws nothing."""


class SteppedCaps(_Shape):
    pass


class IsoHorizontal(_Shape):
    pass


class IsoVertical(_Shape):
    pass


class Homing(_Shape):
    """A 1x1 homing key; ``kind=None`` defers to the profile's default."""

    kind: HomingKind | None = None

    def __init__(self, kind: HomingKind | None = None) -> None:
        super().__init__(kind=kind)


KeyShape: TypeAlias = Normal | Space | Blank | SteppedCaps | IsoHorizontal | IsoVertical | Homing
