from __future__ import annotations

import math

# Shared thresholds for every float comparison in the package
ABS_TOL = 1e-6
REL_TOL = 1e-6


def is_close(a: float, b: float, abs_tol: float = ABS_TOL, rel_tol: float = REL_TOL) -> bool:
    """Absolute-or-relative comparison, close if either tolerance is met."""
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_zero(value: float, abs_tol: float = ABS_TOL) -> bool:
    return abs(value) <= abs_tol
