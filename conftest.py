"""
Pytest configuration shared by the whole repository.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def reset_test_env(monkeypatch):
    """Reset environment variables and cached settings before each test."""
    from strata.config import clear_settings_cache

    for name in (
        "STRATA_ROOT_PATH",
        "STRATA_IGNORE_FILENAME",
        "STRATA_MANIFEST_FILENAME",
        "STRATA_TARGETS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("STRATA_LOG_LEVEL", "DEBUG")
    clear_settings_cache()
    yield
    clear_settings_cache()
