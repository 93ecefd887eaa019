"""
Configuration settings for the date formatting utilities.

**Conceptual**: This module provides strongly-typed configuration objects that
load from environment variables (via .env files). Values are validated when the
settings object is built, so a bad cache size fails at startup rather than on
the first formatted log line.

**What is configurable?**
  - The timezone offset cache (capacity and per-entry max age).
  - The log level used by the command-line entry point.

Formatting behaviour itself (separators, month names) is not configurable here;
callers pass separators explicitly per call.

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from project root (no-op when the file is absent)
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DEFAULT_TIMEZONE_CACHE_CAPACITY = 1000
DEFAULT_TIMEZONE_CACHE_MAX_AGE_SECONDS = 24 * 60 * 60
DEFAULT_LOG_LEVEL = "WARNING"

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _int_from_env(name: str, default: int) -> int:
    """Read an integer environment variable, raising ValueError with context."""
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {raw}")


@dataclass(frozen=True)
class TimezoneCacheSettings:
    """
    Configuration for the timezone offset cache.

    **Conceptual**: The access-log formatter needs the local UTC offset for
    every line it renders. The offset only changes at DST transitions, so it is
    cached per calendar day. These settings bound that cache.

    Attributes:
        capacity: Maximum number of distinct calendar days kept (default 1000).
                  Must be positive.
        max_age_seconds: Lifetime of a cached offset in seconds (default 86400,
                         one day). Must be positive.
    """
    capacity: int = DEFAULT_TIMEZONE_CACHE_CAPACITY
    max_age_seconds: float = DEFAULT_TIMEZONE_CACHE_MAX_AGE_SECONDS

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.capacity <= 0:
            raise ValueError(
                f"TIMEZONE_CACHE_CAPACITY must be positive, got: {self.capacity}"
            )
        if self.max_age_seconds <= 0:
            raise ValueError(
                f"TIMEZONE_CACHE_MAX_AGE_SECONDS must be positive, got: {self.max_age_seconds}"
            )

    @classmethod
    def from_env(cls) -> "TimezoneCacheSettings":
        """
        Load timezone cache settings from environment variables.

        **Environment variables**:
          - TIMEZONE_CACHE_CAPACITY (optional): defaults to 1000.
          - TIMEZONE_CACHE_MAX_AGE_SECONDS (optional): defaults to 86400.

        Raises:
            ValueError: If a value is not an integer or not positive.
        """
        return cls(
            capacity=_int_from_env("TIMEZONE_CACHE_CAPACITY", DEFAULT_TIMEZONE_CACHE_CAPACITY),
            max_age_seconds=_int_from_env(
                "TIMEZONE_CACHE_MAX_AGE_SECONDS", DEFAULT_TIMEZONE_CACHE_MAX_AGE_SECONDS
            ),
        )


@dataclass(frozen=True)
class Settings:
    """
    Global settings for the date utilities.

    **Usage pattern**:
      ```python
      from src.config.settings import get_settings

      settings = get_settings()
      capacity = settings.timezone_cache.capacity
      ```

    Attributes:
        timezone_cache: Timezone offset cache bounds.
        log_level: Level name used by setup_logger() in the CLI.
    """
    timezone_cache: TimezoneCacheSettings = field(default_factory=TimezoneCacheSettings)
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.log_level.upper() not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {sorted(_VALID_LOG_LEVELS)}, got: {self.log_level}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load global settings from environment variables.

        **Environment variables**:
          - TIMEZONE_CACHE_CAPACITY, TIMEZONE_CACHE_MAX_AGE_SECONDS (see
            TimezoneCacheSettings.from_env).
          - LOG_LEVEL (optional): defaults to WARNING.

        Raises:
            ValueError: If any value fails validation.
        """
        return cls(
            timezone_cache=TimezoneCacheSettings.from_env(),
            log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper(),
        )


# Lazily loaded singleton. Tests call reset_settings() to reload from environment.
_default_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings singleton.

    Settings are loaded from the environment on first call, then cached for
    reuse. Tests can bypass this by constructing Settings objects directly.

    Raises:
        ValueError: If the environment holds invalid values.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = Settings.from_env()

    return _default_settings


def reset_settings():
    """
    Reset the global settings singleton (for testing).

    Clears the cached settings so the next get_settings() call reloads them
    from the environment.
    """
    global _default_settings
    _default_settings = None
