"""
Format an epoch-milliseconds value by name.

Reporting code stores raw millisecond timestamps and picks an output format
per column or per report. get_date_from_milliseconds() validates the value and
routes it to the matching formatter.
"""

import numbers
from enum import Enum

import numpy as np

from src.dates.formatters import access_log_date, log_date, yyyymmdd, yyyymmdd_hhmmss
from src.dates.parts import INVALID_FIELD, is_invalid_date
from src.dates.timestamps import date_to_unix_timestamp, from_milliseconds
from src.dates.timezone import TimezoneCache


class InvalidInputError(ValueError):
    """
    Raised when a value to format is not a finite number.

    Covers NaN, positive and negative infinity, and non-numeric values such as
    strings or None. Subclasses ValueError so callers that already guard
    conversions with ``except ValueError`` keep working.
    """
    pass


class DateFormat(str, Enum):
    """Named output formats understood by get_date_from_milliseconds()."""
    DateTimeWithTimeZone = "DateTimeWithTimeZone"
    DateTimeWithMilliSeconds = "DateTimeWithMilliSeconds"
    DateTimeWithSeconds = "DateTimeWithSeconds"
    UnixTimestamp = "UnixTimestamp"


def is_finite_number(value) -> bool:
    """True for real, non-boolean numbers that are neither NaN nor infinite."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return bool(np.isfinite(value))


def get_date_from_milliseconds(
    milliseconds: int | float,
    fmt: DateFormat | str | None = None,
    *,
    cache: TimezoneCache | None = None,
) -> str:
    """
    Format epoch milliseconds using a named format.

    Args:
        milliseconds: Epoch time in milliseconds. Must be a finite number.
        fmt: Output format. None (or an unrecognised name) selects the
             date-only "YYYY-MM-DD" format. Plain strings matching a
             DateFormat value are accepted.
        cache: Timezone cache for DateTimeWithTimeZone.

    Returns:
        | fmt                       | Example                        |
        |---------------------------|--------------------------------|
        | DateTimeWithTimeZone      | 16/Apr/2013:16:40:09 +0800     |
        | DateTimeWithMilliSeconds  | 2013-04-16 16:40:09.000        |
        | DateTimeWithSeconds       | 2013-04-16 16:40:09            |
        | UnixTimestamp             | 1366101609                     |
        | None                      | 2013-04-16                     |

    Finite values outside datetime's range (years 1-9999) render as "NaN"
    fields, e.g. "NaN-NaN-NaN" for the default format.

    Raises:
        InvalidInputError: If milliseconds is not a finite number.
    """
    if not is_finite_number(milliseconds):
        raise InvalidInputError(f"Invalid milliseconds value: {milliseconds!r}")

    d = from_milliseconds(milliseconds)
    if fmt == DateFormat.DateTimeWithTimeZone:
        return access_log_date(d, cache=cache)
    if fmt == DateFormat.DateTimeWithMilliSeconds:
        return log_date(d)
    if fmt == DateFormat.DateTimeWithSeconds:
        return yyyymmdd_hhmmss(d)
    if fmt == DateFormat.UnixTimestamp:
        if is_invalid_date(d):
            return INVALID_FIELD
        return str(date_to_unix_timestamp(d))
    return yyyymmdd(d)
