from __future__ import annotations

import pytest

from core.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read VISION_* environment variables for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
