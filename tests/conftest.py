"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import src...' works, and
provides fixtures that pin the host time zone and reset process-wide state.
"""
import sys
import time
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from src.config.settings import reset_settings  # noqa: E402
from src.dates.timezone import reset_default_timezone_cache  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Give every test fresh settings and a fresh default timezone cache."""
    reset_settings()
    reset_default_timezone_cache()
    yield
    reset_settings()
    reset_default_timezone_cache()


@pytest.fixture
def set_local_timezone(monkeypatch):
    """
    Return a function that switches the host zone for the current test.

    Uses POSIX TZ strings (e.g. "CST-8" for UTC+8, "EST+5" for UTC-5), which
    need no tz database. The original zone is restored afterwards.
    """
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset() is not available on this platform")

    def _set(tz: str) -> None:
        monkeypatch.setenv("TZ", tz)
        time.tzset()

    yield _set

    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def utc_plus_8(set_local_timezone):
    """Pin the host zone to a fixed UTC+8 offset (no DST)."""
    set_local_timezone("CST-8")
