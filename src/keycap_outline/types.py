from __future__ import annotations

from typing import TypeAlias

# Caller supplied colours are opaque to the geometry core
Color: TypeAlias = tuple[float, float, float]
