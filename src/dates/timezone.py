"""
Local UTC offset formatting and the per-day offset cache.

**Conceptual**: The access-log format ends every line with the host's UTC
offset (e.g. "+0800"). Computing it is cheap but not free, and it only changes
at DST transitions, so offsets are cached per local calendar day.

**Known approximation**: A cached offset is reused for the whole calendar day
(and up to max_age after insertion). On the day of a DST transition, lines
rendered after the switch keep the offset that was cached before it. This is
accepted behaviour, not a bug.
"""

import logging
import math
import threading
import time
from collections import OrderedDict
from datetime import datetime
from typing import Callable, Optional

import pandas as pd

from src.config.settings import (
    DEFAULT_TIMEZONE_CACHE_CAPACITY,
    DEFAULT_TIMEZONE_CACHE_MAX_AGE_SECONDS,
    TimezoneCacheSettings,
    get_settings,
)
from src.dates.parts import INVALID_FIELD, is_invalid_date, to_local

logger = logging.getLogger(__name__)


def local_utc_offset_minutes(d: datetime) -> int:
    """
    Return the host's UTC offset at d, in minutes east of UTC.

    Naive datetimes are interpreted as local time; aware ones are converted.
    """
    if isinstance(d, pd.Timestamp):
        d = d.to_pydatetime()
    offset = d.astimezone().utcoffset()
    return int(offset.total_seconds() / 60)


def format_timezone_offset(d: datetime) -> str:
    """
    Format the host's UTC offset at d as "+HHMM" or "-HHMM".

    **Mathematical**: With behind = minutes the local zone is behind UTC
    (the negated offset):
        HH = floor(-behind / 60)
        MM = abs(behind rem 60)   (remainder takes the sign of behind)
    The sign comes from HH. Zones west of UTC with a fractional hour floor
    to the next hour down, so UTC-3:30 renders as "-0430". Existing log
    consumers parse that form, so it is kept.

    Examples (host zone in parentheses):
        UTC+8  -> "+0800"
        UTC    -> "+0000"
        UTC-5  -> "-0500"
        UTC+5:45 -> "+0545"
        UTC-3:30 -> "-0430"

    An invalid date (pandas.NaT) renders as "NaN".
    """
    if is_invalid_date(d):
        return INVALID_FIELD
    behind = -local_utc_offset_minutes(d)
    hours = math.floor(-behind / 60)
    remainder = int(abs(math.fmod(behind, 60)))
    sign = "+" if hours >= 0 else "-"
    return f"{sign}{abs(hours):02d}{remainder:02d}"


class TimezoneCache:
    """
    Bounded LRU cache of offset strings keyed by local calendar day.

    **Functionally**:
      - Key: "{year}-{month}-{day}" from local fields, month unpadded and 1-based.
      - Hit (present, not expired): return the cached string and mark the key
        most recently used.
      - Miss or expired: compute with offset_formatter, store with an expiry of
        now + max_age_seconds, return the fresh value.
      - Inserting beyond capacity evicts the least recently used key.

    The get-or-insert-and-evict sequence runs under a lock, so concurrent
    callers for the same key all observe a single stored value.

    Args:
        capacity: Maximum number of distinct keys (default 1000).
        max_age_seconds: Entry lifetime (default one day).
        offset_formatter: Computes the offset string on a miss.
        timer: Monotonic clock in seconds used for expiry.

    Example:
        >>> cache = TimezoneCache(capacity=10)
        >>> cache.get(datetime(2013, 4, 16, 16, 40, 9))  # on a UTC+8 host
        '+0800'
    """

    def __init__(
        self,
        capacity: int = DEFAULT_TIMEZONE_CACHE_CAPACITY,
        max_age_seconds: float = DEFAULT_TIMEZONE_CACHE_MAX_AGE_SECONDS,
        offset_formatter: Callable[[datetime], str] = format_timezone_offset,
        timer: Callable[[], float] = time.monotonic,
    ):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got: {capacity}")
        if max_age_seconds <= 0:
            raise ValueError(f"max_age_seconds must be positive, got: {max_age_seconds}")
        self.capacity = capacity
        self.max_age_seconds = max_age_seconds
        self._offset_formatter = offset_formatter
        self._timer = timer
        # key -> (offset string, expiry on the timer's scale); order is recency
        self._entries: OrderedDict[str, tuple[str, float]] = OrderedDict()
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: TimezoneCacheSettings) -> "TimezoneCache":
        """Build a cache bounded by the given settings."""
        return cls(capacity=settings.capacity, max_age_seconds=settings.max_age_seconds)

    @staticmethod
    def key_for(d: datetime) -> str:
        """Return the calendar-day key for d, e.g. "2013-4-16"."""
        local = to_local(d)
        return f"{local.year}-{local.month}-{local.day}"

    def get(self, d: datetime) -> str:
        """
        Return the offset string for d's local calendar day.

        Invalid dates bypass the cache and render as "NaN".
        """
        if is_invalid_date(d):
            return INVALID_FIELD

        key = self.key_for(d)
        with self._lock:
            now = self._timer()
            entry = self._entries.get(key)
            if entry is not None:
                value, expires_at = entry
                if now < expires_at:
                    self._entries.move_to_end(key)
                    return value
                logger.debug("Timezone offset for %s expired", key)
                del self._entries[key]

            value = self._offset_formatter(d)
            self._entries[key] = (value, now + self.max_age_seconds)
            logger.debug("Cached timezone offset %s for %s", value, key)

            while len(self._entries) > self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted timezone offset for %s", evicted)
            return value

    def __contains__(self, d: datetime) -> bool:
        """True when an unexpired offset is cached for d's calendar day."""
        if is_invalid_date(d):
            return False
        key = self.key_for(d)
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and self._timer() < entry[1]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._entries.clear()


_default_cache: Optional[TimezoneCache] = None
_default_cache_lock = threading.Lock()


def get_default_timezone_cache() -> TimezoneCache:
    """
    Return the process-wide cache used when callers inject none.

    Built on first use from get_settings().timezone_cache.
    """
    global _default_cache

    with _default_cache_lock:
        if _default_cache is None:
            _default_cache = TimezoneCache.from_settings(get_settings().timezone_cache)
        return _default_cache


def reset_default_timezone_cache() -> None:
    """Discard the process-wide cache (for testing)."""
    global _default_cache

    with _default_cache_lock:
        _default_cache = None
