from __future__ import annotations

import pytest

from keycap_outline.profile import Profile, load_profile


@pytest.fixture
def profile() -> Profile:
    return Profile()


@pytest.fixture(params=["default", "dsa"])
def bundled_profile(request) -> Profile:
    return load_profile(request.param)
