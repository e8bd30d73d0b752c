from __future__ import annotations


class KeycapOutlineError(Exception):
    """Base error for the package."""


class ProfileError(KeycapOutlineError, ValueError):
    """Profile data is missing or fails validation."""


class UnsupportedShapeError(KeycapOutlineError, TypeError):
    """The outline generator was handed something that is not a key shape."""
