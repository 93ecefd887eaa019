"""
Date part extraction shared by every formatter.

**Conceptual**: All output formats in this package are assembled from the same
zero-padded calendar fields (year, month, day, hour, minute, second). This
module is the single place that reads those fields off a date value, so every
formatter agrees on how a date maps to local wall-clock time.

**Local time rule**:
  - Naive datetimes are wall-clock local time and are read as-is.
  - Aware datetimes (including pandas Timestamps) are converted to the host's
    local zone first.
  - pandas.NaT is the invalid date; its fields render as "NaN" rather than
    raising, so a bad value in a log line never takes the caller down.
"""

from datetime import datetime

import pandas as pd

from src.utils.time import Clock, resolve_now

# Rendered in place of each calendar field for an invalid date
INVALID_FIELD = "NaN"

MONTHS = {
    "01": "Jan",
    "02": "Feb",
    "03": "Mar",
    "04": "Apr",
    "05": "May",
    "06": "Jun",
    "07": "Jul",
    "08": "Aug",
    "09": "Sep",
    "10": "Oct",
    "11": "Nov",
    "12": "Dec",
}


def is_invalid_date(d) -> bool:
    """Return True for the invalid-date sentinel (pandas.NaT)."""
    return d is pd.NaT


def resolve_date(d: datetime | None = None, clock: Clock | None = None) -> datetime:
    """Return d, or the clock's current time when d is None."""
    if d is None:
        return resolve_now(clock)
    return d


def to_local(d: datetime) -> datetime:
    """
    Express a date value in the host's local time.

    Args:
        d: Naive (already local) or aware datetime. pandas Timestamps are
           converted to plain datetimes first.

    Returns:
        A datetime whose calendar fields are local wall-clock fields. Naive
        input is returned unchanged.
    """
    if isinstance(d, pd.Timestamp):
        d = d.to_pydatetime()
    if d.tzinfo is not None:
        return d.astimezone()
    return d


def get_date_string_parts(
    d: datetime | None = None,
    only_date: bool = False,
    clock: Clock | None = None,
) -> list[str]:
    """
    Split a date into zero-padded string fields.

    Args:
        d: Date to decompose. Defaults to the clock's "now".
        only_date: If True, return only [YYYY, MM, DD].
        clock: Source of "now" when d is None (RealClock by default).

    Returns:
        [YYYY, MM, DD] when only_date, else [YYYY, MM, DD, HH, mm, ss].
        Month and day are 1-based. An invalid date yields "NaN" for every field.

    Example:
        >>> get_date_string_parts(datetime(2021, 1, 5, 9, 3, 2))
        ['2021', '01', '05', '09', '03', '02']
        >>> get_date_string_parts(datetime(2021, 1, 5), only_date=True)
        ['2021', '01', '05']
    """
    d = resolve_date(d, clock)
    count = 3 if only_date else 6
    if is_invalid_date(d):
        return [INVALID_FIELD] * count

    d = to_local(d)
    parts = [f"{d.year:04d}", f"{d.month:02d}", f"{d.day:02d}"]
    if only_date:
        return parts
    parts.extend([f"{d.hour:02d}", f"{d.minute:02d}", f"{d.second:02d}"])
    return parts
