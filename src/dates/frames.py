"""
pandas adapters for rendering timestamp columns in reports.

**Conceptual**: Reports are built as DataFrames whose timestamp column holds
either raw epoch milliseconds (as stored by the logging pipeline) or parsed
datetime64 values. These helpers render such a column with any DateFormat,
element by element through get_date_from_milliseconds(), so a report shows
exactly what a log line would.

**Timestamp conventions**:
  - Integer/float columns are epoch milliseconds.
  - Naive datetime64 columns are treated as UTC.
  - Timezone-aware datetime64 columns are converted to UTC first.
  - Rendering always happens in the host's local zone.
"""

import pandas as pd

from src.dates.dispatch import DateFormat, get_date_from_milliseconds
from src.dates.timezone import TimezoneCache

_EPOCH = pd.Timestamp("1970-01-01")


def to_epoch_millis_series(values: pd.Series) -> pd.Series:
    """
    Express a timestamp Series as epoch milliseconds.

    Numeric Series are returned unchanged. datetime64 Series are converted;
    NaT becomes NaN.
    """
    if not pd.api.types.is_datetime64_any_dtype(values):
        return values
    if values.dt.tz is not None:
        values = values.dt.tz_convert("UTC").dt.tz_localize(None)
    return (values - _EPOCH) // pd.Timedelta(milliseconds=1)


def format_milliseconds_series(
    series: pd.Series,
    fmt: DateFormat | str | None = None,
    cache: TimezoneCache | None = None,
) -> pd.Series:
    """
    Format every value of a timestamp Series.

    Args:
        series: Epoch milliseconds or datetime64 values.
        fmt: Output format (see get_date_from_milliseconds).
        cache: Timezone cache for DateTimeWithTimeZone.

    Returns:
        Series of strings with the same index and name as the input.

    Raises:
        InvalidInputError: If any value is missing or not finite.

    Example:
        >>> s = pd.Series([1366101609000, 1609808582007])
        >>> format_milliseconds_series(s, DateFormat.UnixTimestamp).tolist()
        ['1366101609', '1609808582']
    """
    millis = to_epoch_millis_series(series)
    return millis.map(lambda ms: get_date_from_milliseconds(ms, fmt, cache=cache))


def add_formatted_column(
    df: pd.DataFrame,
    col: str = "timestamp",
    fmt: DateFormat | str | None = None,
    out_col: str | None = None,
    cache: TimezoneCache | None = None,
) -> pd.DataFrame:
    """
    Return a copy of df with a formatted rendering of a timestamp column.

    Args:
        df: DataFrame containing the timestamp column.
        col: Name of the timestamp column (default: "timestamp").
        fmt: Output format (see get_date_from_milliseconds).
        out_col: Name of the new column. Defaults to "{col}_formatted".
                 Passing col itself replaces the column in the copy.
        cache: Timezone cache for DateTimeWithTimeZone.

    Returns:
        New DataFrame; the input is not modified.

    Raises:
        KeyError: If col does not exist.
        InvalidInputError: If any timestamp is missing or not finite.

    Example:
        >>> df = pd.DataFrame({"timestamp": [1366101609000], "status": [200]})
        >>> add_formatted_column(df, fmt=DateFormat.DateTimeWithSeconds)  # UTC+8 host
               timestamp  status  timestamp_formatted
        0  1366101609000     200  2013-04-16 16:40:09
    """
    if col not in df.columns:
        raise KeyError(
            f"Timestamp column '{col}' not found in DataFrame. "
            f"Available columns: {list(df.columns)}"
        )

    result = df.copy()
    if out_col is None:
        out_col = f"{col}_formatted"
    result[out_col] = format_milliseconds_series(result[col], fmt, cache=cache)
    return result
