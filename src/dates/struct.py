"""
Compact numeric date record for bucketing log and report rows by day and hour.
"""

from dataclasses import dataclass
from datetime import datetime

from src.dates.parts import is_invalid_date, resolve_date, to_local
from src.utils.time import Clock


@dataclass(frozen=True)
class DateStruct:
    """
    Numeric calendar day and hour of a date.

    Attributes:
        YYYYMMDD: Day as an integer, e.g. 20130401.
        H: Hour of day, 0-23.
    """
    YYYYMMDD: int
    H: int


def datestruct(d: datetime | None = None, clock: Clock | None = None) -> DateStruct:
    """
    Return the DateStruct for d (default: the clock's "now").

    Example:
        >>> datestruct(datetime(2013, 4, 1, 9))
        DateStruct(YYYYMMDD=20130401, H=9)

    Raises:
        ValueError: If d is the invalid date (pandas.NaT).
    """
    d = resolve_date(d, clock)
    if is_invalid_date(d):
        raise ValueError("Cannot build a DateStruct from an invalid date")
    local = to_local(d)
    return DateStruct(
        YYYYMMDD=local.year * 10000 + local.month * 100 + local.day,
        H=local.hour,
    )
