"""
Conversions between Unix timestamps and date values.

**Seconds vs milliseconds**: Callers hand in epoch values without saying which
unit they use. parse_timestamp() guesses: a value whose decimal string is
exactly 10 characters long is taken as seconds, anything else as milliseconds.
That covers every seconds value between September 2001 and November 2286, and
existing callers rely on it. It also misreads short seconds values (dates
before 2001) as milliseconds. Pass an explicit TimestampPrecision to skip the
guess.

Returned dates are timezone-aware and expressed in the host's local zone.
"""

import math
from datetime import datetime, timedelta, timezone
from enum import Enum

import pandas as pd

from src.dates.parts import is_invalid_date
from src.utils.time import Clock, resolve_now

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Decimal length that marks a seconds-precision epoch value
SECONDS_DIGITS = 10


class TimestampPrecision(str, Enum):
    """Unit of an epoch timestamp."""
    SECONDS = "s"
    MILLISECONDS = "ms"


def _numeric_value(t: int | float | str) -> int | float:
    """
    Coerce a number or numeric string to a number.

    Integral floats collapse to int so that 1366101609.0 reads as ten digits,
    the same as 1366101609.
    """
    if isinstance(t, str):
        try:
            value = float(t.strip())
        except ValueError:
            raise ValueError(f"Timestamp must be numeric, got: {t!r}")
    else:
        value = t
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return value


def guess_precision(t: int | float | str) -> TimestampPrecision:
    """
    Guess the unit of an epoch value from its decimal length.

    Example:
        >>> guess_precision(1366101609)
        <TimestampPrecision.SECONDS: 's'>
        >>> guess_precision(1366101609000)
        <TimestampPrecision.MILLISECONDS: 'ms'>
    """
    if len(str(_numeric_value(t))) == SECONDS_DIGITS:
        return TimestampPrecision.SECONDS
    return TimestampPrecision.MILLISECONDS


def from_milliseconds(ms: int | float) -> datetime:
    """
    Convert epoch milliseconds to an aware local datetime.

    Built from timedelta arithmetic on the epoch rather than
    datetime.fromtimestamp(ms / 1000) so millisecond values stay exact.

    NaN, infinities and instants outside datetime's years 1-9999 return
    pandas.NaT, which the formatters render as "NaN" fields.
    """
    ms = float(ms)
    if math.isnan(ms):
        return pd.NaT
    try:
        return (EPOCH + timedelta(milliseconds=ms)).astimezone()
    except OverflowError:
        return pd.NaT


def to_epoch_millis(d: datetime) -> int:
    """
    Return whole milliseconds since the epoch for d.

    Naive datetimes are interpreted as local time.

    Raises:
        ValueError: If d is the invalid date (pandas.NaT).
    """
    if is_invalid_date(d):
        raise ValueError("Cannot convert an invalid date to an epoch timestamp")
    if isinstance(d, pd.Timestamp):
        d = d.to_pydatetime()
    if d.tzinfo is None:
        d = d.astimezone()
    return (d - EPOCH) // timedelta(milliseconds=1)


def _round_millis_to_seconds(ms: int) -> int:
    # Half-up rounding: 1500 -> 2, -1500 -> -1
    return (ms + 500) // 1000


def parse_timestamp(
    t: int | float | str,
    precision: TimestampPrecision | None = None,
) -> datetime:
    """
    Convert an epoch timestamp to a date.

    Args:
        t: Epoch value as a number or numeric string.
        precision: Unit of t. When None, guess_precision() decides.

    Returns:
        Aware datetime in the host's local zone, or pandas.NaT for NaN and
        values outside datetime's range.

    Raises:
        ValueError: If t is a non-numeric string.

    Example:
        >>> parse_timestamp(1366101609)           # seconds, guessed
        >>> parse_timestamp("1366101609000")      # milliseconds, guessed
        >>> parse_timestamp(978307200, TimestampPrecision.SECONDS)  # 9 digits
    """
    value = _numeric_value(t)
    if precision is None:
        precision = guess_precision(value)
    if precision == TimestampPrecision.SECONDS:
        value = value * 1000
    return from_milliseconds(value)


def current_timestamp(clock: Clock | None = None) -> int:
    """Return the current Unix time in whole seconds (rounded half-up)."""
    return _round_millis_to_seconds(to_epoch_millis(resolve_now(clock)))


def timestamp(t: int | float | str | None = None) -> int | datetime:
    """
    Dual-purpose helper: current Unix seconds, or parse t into a date.

    A falsy t (None, 0, "") returns current_timestamp(); anything else goes
    through parse_timestamp().
    """
    if t:
        return parse_timestamp(t)
    return current_timestamp()


def date_to_unix_timestamp(d: datetime) -> int:
    """
    Convert a date to Unix time in whole seconds (rounded half-up).

    No precision guessing happens here; the inverse of parse_timestamp() only
    for values that were seconds to begin with.
    """
    return _round_millis_to_seconds(to_epoch_millis(d))
