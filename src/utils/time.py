"""
Clock abstractions for deterministic date formatting.

Every formatter in src.dates falls back to "now" when no date is given. Instead
of calling datetime.now() directly, they ask a Clock. Production code uses
RealClock; tests hand in a FrozenClock so the output is reproducible.

Clocks return *local* time: the formatters render calendar fields in the host's
time zone, so "now" has to be expressed there too.
"""

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """
    Abstract time source protocol.

    **Conceptual**: A Clock answers "what time is it right now?" Formatters
    accept an optional Clock and call clock.now() only when the caller did not
    pass a date explicitly.

    **Example**:
        # In production (default when clock is None):
        log_date()

        # In tests:
        log_date(clock=FrozenClock(datetime(2021, 1, 5, 9, 3, 2)))
    """

    def now(self) -> datetime:
        """
        Return the current time according to this clock.

        Returns:
            datetime in the host's local time zone.
        """
        ...


class RealClock:
    """
    Clock that returns the actual current system time in the local zone.

    **Usage**:
        clock = RealClock()
        current_time = clock.now()  # aware datetime, local fixed offset
    """

    def now(self) -> datetime:
        """
        Return the current local time from the system clock.

        Returns:
            Timezone-aware datetime carrying the host's current UTC offset.
        """
        # astimezone() with no argument attaches the local offset
        return datetime.now().astimezone()


class FrozenClock:
    """
    Clock that always returns a fixed timestamp.

    **Usage**:
        clock = FrozenClock(datetime(2013, 4, 16, 16, 40, 9))
        access_log_date(clock=clock)  # always the same instant

    Naive datetimes are taken as local wall-clock time, aware ones are
    converted to local time by the formatters.
    """

    def __init__(self, fixed_now: datetime):
        """
        Initialize a FrozenClock with a fixed timestamp.

        Args:
            fixed_now: The datetime to return on every call to now().
        """
        self._fixed_now = fixed_now

    def now(self) -> datetime:
        """Return the configured fixed timestamp."""
        return self._fixed_now


_real_clock = RealClock()


def get_real_clock() -> Clock:
    """
    Return the shared RealClock instance.

    RealClock is stateless, so formatters reuse one instance rather than
    constructing a clock on every call.
    """
    return _real_clock


def get_frozen_clock(fixed_now: datetime) -> Clock:
    """
    Factory function to create a FrozenClock with a given timestamp.

    Args:
        fixed_now: The datetime to freeze at.

    Returns:
        FrozenClock instance configured with fixed_now.
    """
    return FrozenClock(fixed_now)


def resolve_now(clock: Clock | None = None) -> datetime:
    """Return clock.now(), using the real clock when clock is None."""
    return (clock or _real_clock).now()
