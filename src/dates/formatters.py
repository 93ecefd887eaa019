"""
String formatters for log lines and reports.

Each formatter takes an optional date (defaulting to the clock's "now") and
named separator options, and assembles the zero-padded fields produced by
get_date_string_parts().

| Formatter          | Output                              |
|--------------------|-------------------------------------|
| access_log_date    | 16/Apr/2013:16:40:09 +0800          |
| log_date           | 2021-01-05 09:03:02.007             |
| yyyymmdd_hhmmss    | 2021-01-05 09:03:02                 |
| yyyymmdd           | 2021-01-05                          |

The upper-case aliases (YYYYMMDDHHmmssSSS, YYYYMMDDHHmmss, YYYYMMDD) name the
same functions after the pattern they render.
"""

import numbers
from dataclasses import dataclass
from datetime import datetime

import pandas as pd

from src.dates.parts import (
    INVALID_FIELD,
    MONTHS,
    get_date_string_parts,
    is_invalid_date,
    resolve_date,
    to_local,
)
from src.dates.timestamps import from_milliseconds
from src.dates.timezone import TimezoneCache, get_default_timezone_cache
from src.utils.time import Clock, resolve_now

DEFAULT_MS_SEP = "."
DEFAULT_DATE_SEP = "-"
DEFAULT_TIME_SEP = ":"


@dataclass(frozen=True)
class DateTimeOptions:
    """
    Separators for yyyymmdd_hhmmss().

    Attributes:
        date_sep: Between year, month and day (default "-").
        time_sep: Between hour, minute and second (default ":").

    Empty strings fall back to the defaults.
    """
    date_sep: str = DEFAULT_DATE_SEP
    time_sep: str = DEFAULT_TIME_SEP


def access_log_date(
    d: datetime | None = None,
    *,
    cache: TimezoneCache | None = None,
    clock: Clock | None = None,
) -> str:
    """
    Format a date the way HTTP access logs do: "DD/Mon/YYYY:HH:mm:ss +HHMM".

    Args:
        d: Date to format. Defaults to the clock's "now".
        cache: Timezone offset cache. Defaults to the process-wide cache.
        clock: Source of "now" when d is None.

    Example:
        >>> access_log_date(datetime(2013, 4, 16, 16, 40, 9))  # UTC+8 host
        '16/Apr/2013:16:40:09 +0800'
    """
    d = resolve_date(d, clock)
    year, month, day, hours, minutes, seconds = get_date_string_parts(d)
    if cache is None:
        cache = get_default_timezone_cache()
    offset = cache.get(d)
    month_name = MONTHS.get(month, INVALID_FIELD)
    return f"{day}/{month_name}/{year}:{hours}:{minutes}:{seconds} {offset}"


def log_date(
    d: datetime | None = None,
    *,
    ms_sep: str = DEFAULT_MS_SEP,
    clock: Clock | None = None,
) -> str:
    """
    Format a date as "YYYY-MM-DD HH:mm:ss.SSS".

    Args:
        d: Date to format. Defaults to the clock's "now".
        ms_sep: Inserted between seconds and milliseconds. An empty string
                falls back to ".".
        clock: Source of "now" when d is None.

    Example:
        >>> log_date(datetime(2021, 1, 5, 9, 3, 2, 7000))
        '2021-01-05 09:03:02.007'
        >>> log_date(datetime(2021, 1, 5, 9, 3, 2, 7000), ms_sep=",")
        '2021-01-05 09:03:02,007'
    """
    d = resolve_date(d, clock)
    year, month, day, hours, minutes, seconds = get_date_string_parts(d)
    if is_invalid_date(d):
        milliseconds = INVALID_FIELD
    else:
        milliseconds = f"{to_local(d).microsecond // 1000:03d}"
    ms_sep = ms_sep or DEFAULT_MS_SEP
    return f"{year}-{month}-{day} {hours}:{minutes}:{seconds}{ms_sep}{milliseconds}"


YYYYMMDDHHmmssSSS = log_date


def _coerce_date(d, clock: Clock | None = None) -> datetime:
    """
    Turn a datetime, date string or epoch-milliseconds number into a date.

    Empty values (None, "", 0) mean "now". Strings go through pandas; anything
    pandas cannot parse becomes NaT and renders as "NaN" fields. Strings
    without an offset are local wall time, so "2021-01-05" is local midnight,
    not UTC midnight. Numbers are epoch milliseconds; NaN and out-of-range values
    become NaT.
    """
    if d is None or (isinstance(d, (str, numbers.Real)) and not d):
        return resolve_now(clock)
    if isinstance(d, datetime) or is_invalid_date(d):
        return d
    if isinstance(d, str):
        return pd.to_datetime(d, errors="coerce")
    if isinstance(d, numbers.Real) and not isinstance(d, bool):
        return from_milliseconds(d)
    raise TypeError(f"Expected datetime, str or number, got: {type(d).__name__}")


def yyyymmdd_hhmmss(
    d: datetime | str | int | float | None = None,
    options: DateTimeOptions | None = None,
    *,
    clock: Clock | None = None,
) -> str:
    """
    Format a date as "YYYY-MM-DD HH:mm:ss" with configurable separators.

    Args:
        d: A datetime, a date string (local time unless it carries an
           offset), or epoch milliseconds. Defaults to "now".
        options: Separators (see DateTimeOptions).
        clock: Source of "now" when d is empty.

    Example:
        >>> yyyymmdd_hhmmss(datetime(2021, 1, 5, 9, 3, 2),
        ...                 DateTimeOptions(date_sep="/", time_sep="-"))
        '2021/01/05 09-03-02'
        >>> yyyymmdd_hhmmss("not a date")
        'NaN-NaN-NaN NaN:NaN:NaN'
    """
    d = _coerce_date(d, clock)
    date_sep = DEFAULT_DATE_SEP
    time_sep = DEFAULT_TIME_SEP
    if options is not None:
        date_sep = options.date_sep or DEFAULT_DATE_SEP
        time_sep = options.time_sep or DEFAULT_TIME_SEP
    year, month, day, hours, minutes, seconds = get_date_string_parts(d)
    return f"{year}{date_sep}{month}{date_sep}{day} {hours}{time_sep}{minutes}{time_sep}{seconds}"


YYYYMMDDHHmmss = yyyymmdd_hhmmss


def yyyymmdd(
    d: datetime | None = None,
    *,
    sep: str | None = DEFAULT_DATE_SEP,
    clock: Clock | None = None,
) -> str:
    """
    Format a date as "YYYY-MM-DD".

    Args:
        d: Date to format. Defaults to the clock's "now".
        sep: Separator between fields. None means "-"; "" is honoured and
             yields "YYYYMMDD".
        clock: Source of "now" when d is None.

    Example:
        >>> yyyymmdd(datetime(2021, 1, 5))
        '2021-01-05'
        >>> yyyymmdd(datetime(2021, 1, 5), sep="")
        '20210105'
    """
    if sep is None:
        sep = DEFAULT_DATE_SEP
    year, month, day = get_date_string_parts(d, only_date=True, clock=clock)
    return f"{year}{sep}{month}{sep}{day}"


YYYYMMDD = yyyymmdd
