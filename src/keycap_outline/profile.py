from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ProfileError
from .geom.rect import Rect, RoundRect
from .geom.vector import Point, Vector
from .log import get_logger
from .shapes import HomingKind
from .units import DOT_PER_MM, DOT_PER_UNIT, MM_PER_UNIT, Dot, KeyUnit

logger = get_logger(__name__)

_HOMING_ALIASES: dict[str, HomingKind] = {
    "scoop": "scoop",
    "deep-dish": "scoop",
    "dish": "scoop",
    "bar": "bar",
    "line": "bar",
    "bump": "bump",
    "nub": "bump",
    "dot": "bump",
    "nipple": "bump",
}


def _mm(units: float) -> float:
    return MM_PER_UNIT.apply(units)


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False, extra="forbid")


class Dish(_Section):
    """Records the top surface type for callers; outlines do not read it."""

    kind: Literal["cylindrical", "spherical", "flat"] = "cylindrical"
    depth: float = Field(default=1.0, ge=0.0)

    def effective_depth(self) -> float:
        return 0.0 if self.kind == "flat" else self.depth


class TopSurface(_Section):
    width: float = Field(default=_mm(0.660), ge=0.0)
    height: float = Field(default=_mm(0.735), ge=0.0)
    radius: float = Field(default=_mm(0.065), ge=0.0)
    y_offset: float = _mm(-0.0775)


class BottomSurface(_Section):
    width: float = Field(default=_mm(0.95), ge=0.0)
    height: float = Field(default=_mm(0.95), ge=0.0)
    radius: float = Field(default=_mm(0.065), ge=0.0)


class ScoopProps(_Section):
    depth: float = Field(default=2.0, ge=0.0)


class BarProps(_Section):
    width: float = Field(default=3.81, ge=0.0)
    height: float = Field(default=0.51, ge=0.0)
    y_offset: float = 6.35


class BumpProps(_Section):
    diameter: float = Field(default=0.51, ge=0.0)
    y_offset: float = 0.0


class HomingProps(_Section):
    default: HomingKind = "bar"
    scoop: ScoopProps = ScoopProps()
    bar: BarProps = BarProps()
    bump: BumpProps = BumpProps()

    @field_validator("default", mode="before")
    @classmethod
    def _resolve_alias(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _HOMING_ALIASES.get(value.strip().lower(), value)
        return value


class Profile(_Section):
    """Keycap template, in millimetres.

    The ``top_*``/``bottom_*``/``homing_*`` helpers return geometry in drawing
    units for a key whose top-left corner sits at the origin.
    """

    name: str = "default"
    dish: Dish = Dish()
    top: TopSurface = TopSurface()
    bottom: BottomSurface = BottomSurface()
    homing: HomingProps = HomingProps()

    def top_rect(self) -> RoundRect[Dot]:
        center = _key_center() + Vector(0.0, DOT_PER_MM.apply(self.top.y_offset))
        size = Vector(DOT_PER_MM.apply(self.top.width), DOT_PER_MM.apply(self.top.height))
        return RoundRect.from_center_size_and_radii(center, size, Vector.splat(DOT_PER_MM.apply(self.top.radius)))

    def bottom_rect(self) -> RoundRect[Dot]:
        size = Vector(DOT_PER_MM.apply(self.bottom.width), DOT_PER_MM.apply(self.bottom.height))
        return RoundRect.from_center_size_and_radii(
            _key_center(), size, Vector.splat(DOT_PER_MM.apply(self.bottom.radius))
        )

    def top_with_size(self, size: Vector[KeyUnit]) -> RoundRect[Dot]:
        return _grow(self.top_rect(), size)

    def bottom_with_size(self, size: Vector[KeyUnit]) -> RoundRect[Dot]:
        return _grow(self.bottom_rect(), size)

    def top_with_rect(self, rect: Rect[KeyUnit]) -> RoundRect[Dot]:
        return _place(self.top_rect(), rect)

    def bottom_with_rect(self, rect: Rect[KeyUnit]) -> RoundRect[Dot]:
        return _place(self.bottom_rect(), rect)

    def homing_bar_size(self) -> Vector[Dot]:
        return Vector(DOT_PER_MM.apply(self.homing.bar.width), DOT_PER_MM.apply(self.homing.bar.height))

    def homing_bar_offset(self) -> float:
        return DOT_PER_MM.apply(self.homing.bar.y_offset)

    def homing_bump_radius(self) -> float:
        return DOT_PER_MM.apply(self.homing.bump.diameter) / 2.0

    def homing_bump_offset(self) -> float:
        return DOT_PER_MM.apply(self.homing.bump.y_offset)


def _key_center() -> Point[Dot]:
    return Point.splat(DOT_PER_UNIT.apply(0.5))


def _grow(template: RoundRect[Dot], size: Vector[KeyUnit]) -> RoundRect[Dot]:
    extra = (size - Vector.splat(1.0)).convert(DOT_PER_UNIT)
    return RoundRect(template.min, template.max + extra, template.radii)


def _place(template: RoundRect[Dot], rect: Rect[KeyUnit]) -> RoundRect[Dot]:
    lo = rect.min.to_vector().convert(DOT_PER_UNIT)
    hi = (rect.max.to_vector() - Vector.splat(1.0)).convert(DOT_PER_UNIT)
    return RoundRect(template.min + lo, template.max + hi, template.radii)


def _profiles_dir(profiles_dir: Path | None = None) -> Path:
    return Path(profiles_dir) if profiles_dir else Path(__file__).parent / "profiles"


@lru_cache
def _load_profile_file(profile_path: str) -> dict[str, Any]:
    data = yaml.safe_load(Path(profile_path).read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ProfileError(f"Invalid profile format: {profile_path}")
    return data


def load_profile(profile_name: str, profiles_dir: Path | None = None) -> Profile:
    profiles_dir = _profiles_dir(profiles_dir)
    profile_path = profiles_dir / f"{profile_name}.yaml"
    if not profile_path.exists():
        raise ProfileError(f"Profile not found: {profile_name}")
    try:
        raw = _load_profile_file(str(profile_path))
    except yaml.YAMLError as exc:
        raise ProfileError(f"Could not parse profile {profile_path}: {exc}") from exc
    payload = dict(raw)
    payload["name"] = profile_name
    try:
        profile = Profile.model_validate(payload)
    except ValidationError as exc:
        raise ProfileError(f"Invalid profile {profile_name}: {exc}") from exc
    logger.debug("Loaded profile %s from %s", profile_name, profile_path)
    return profile
