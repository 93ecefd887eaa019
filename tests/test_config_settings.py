"""
Tests for src/config/settings.py

**Purpose**: Verify defaults, environment loading, validation errors, and the
lazily cached singleton. Every test starts from reset settings (see the
autouse fixture in conftest.py).
"""

import pytest

from src.config.settings import (
    DEFAULT_TIMEZONE_CACHE_CAPACITY,
    DEFAULT_TIMEZONE_CACHE_MAX_AGE_SECONDS,
    Settings,
    TimezoneCacheSettings,
    get_settings,
    reset_settings,
)

ENV_VARS = ["TIMEZONE_CACHE_CAPACITY", "TIMEZONE_CACHE_MAX_AGE_SECONDS", "LOG_LEVEL"]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every settings variable from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_timezone_cache_defaults():
    """Test the documented defaults."""
    settings = TimezoneCacheSettings()

    assert settings.capacity == 1000
    assert settings.max_age_seconds == 86400


@pytest.mark.parametrize(
    "kwargs",
    [{"capacity": 0}, {"capacity": -1}, {"max_age_seconds": 0}],
)
def test_timezone_cache_validation(kwargs):
    """Test that non-positive bounds are rejected."""
    with pytest.raises(ValueError, match="must be positive"):
        TimezoneCacheSettings(**kwargs)


def test_from_env_defaults(clean_env):
    """Test loading with nothing set."""
    settings = Settings.from_env()

    assert settings.timezone_cache.capacity == DEFAULT_TIMEZONE_CACHE_CAPACITY
    assert settings.timezone_cache.max_age_seconds == DEFAULT_TIMEZONE_CACHE_MAX_AGE_SECONDS
    assert settings.log_level == "WARNING"


def test_from_env_values(clean_env):
    """Test loading explicit values."""
    clean_env.setenv("TIMEZONE_CACHE_CAPACITY", "50")
    clean_env.setenv("TIMEZONE_CACHE_MAX_AGE_SECONDS", "3600")
    clean_env.setenv("LOG_LEVEL", " debug ")

    settings = Settings.from_env()

    assert settings.timezone_cache == TimezoneCacheSettings(capacity=50, max_age_seconds=3600)
    assert settings.log_level == "DEBUG"


def test_from_env_non_integer(clean_env):
    """Test that a non-integer capacity is reported clearly."""
    clean_env.setenv("TIMEZONE_CACHE_CAPACITY", "lots")

    with pytest.raises(ValueError, match="TIMEZONE_CACHE_CAPACITY must be an integer"):
        Settings.from_env()


def test_invalid_log_level(clean_env):
    """Test that unknown log levels are rejected."""
    clean_env.setenv("LOG_LEVEL", "LOUD")

    with pytest.raises(ValueError, match="LOG_LEVEL"):
        Settings.from_env()


def test_get_settings_is_cached(clean_env):
    """Test that get_settings() loads once."""
    first = get_settings()
    clean_env.setenv("TIMEZONE_CACHE_CAPACITY", "5")

    assert get_settings() is first
    assert get_settings().timezone_cache.capacity == DEFAULT_TIMEZONE_CACHE_CAPACITY


def test_reset_settings_reloads(clean_env):
    """Test that reset_settings() picks up environment changes."""
    get_settings()
    clean_env.setenv("TIMEZONE_CACHE_CAPACITY", "5")

    reset_settings()

    assert get_settings().timezone_cache.capacity == 5


def test_settings_frozen():
    """Test that settings cannot be mutated."""
    settings = Settings()

    with pytest.raises(AttributeError):
        settings.log_level = "DEBUG"
