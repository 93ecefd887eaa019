"""
Tests for src/dates/frames.py

**Purpose**: Verify that report columns holding epoch milliseconds or
datetime64 values are rendered exactly as the dispatcher renders scalars,
and that input frames are never modified.
"""

from datetime import timedelta, timezone

import numpy as np
import pandas as pd
import pytest

from src.dates.dispatch import DateFormat, InvalidInputError
from src.dates.frames import (
    add_formatted_column,
    format_milliseconds_series,
    to_epoch_millis_series,
)
from src.dates.timezone import TimezoneCache

APRIL_16 = 1366101609000
JANUARY_5 = 1609808582007


# ============================================================================
# Tests for to_epoch_millis_series()
# ============================================================================

def test_numeric_series_unchanged():
    """Test that numeric input is returned as-is."""
    s = pd.Series([APRIL_16, JANUARY_5])

    assert to_epoch_millis_series(s) is s


def test_naive_datetime64_treated_as_utc():
    """Test that naive datetime64 values are taken as UTC."""
    s = pd.Series(pd.to_datetime(["2013-04-16 08:40:09", "2021-01-05 01:03:02.007"]))

    assert to_epoch_millis_series(s).tolist() == [APRIL_16, JANUARY_5]


def test_aware_datetime64_converted_to_utc():
    """Test that aware datetime64 values are converted first."""
    s = pd.Series(pd.to_datetime(["2013-04-16 17:40:09"])).dt.tz_localize(
        timezone(timedelta(hours=9))
    )

    assert to_epoch_millis_series(s).tolist() == [APRIL_16]


# ============================================================================
# Tests for format_milliseconds_series()
# ============================================================================

def test_format_series_preserves_index_and_name(utc_plus_8):
    """Test that the result aligns with the input."""
    s = pd.Series([APRIL_16, JANUARY_5], index=["a", "b"], name="ts")

    result = format_milliseconds_series(s, DateFormat.DateTimeWithMilliSeconds)

    assert result.index.tolist() == ["a", "b"]
    assert result.name == "ts"
    assert result.tolist() == ["2013-04-16 16:40:09.000", "2021-01-05 09:03:02.007"]


def test_format_series_default_is_date_only(utc_plus_8):
    """Test the default format."""
    result = format_milliseconds_series(pd.Series([APRIL_16, JANUARY_5]))

    assert result.tolist() == ["2013-04-16", "2021-01-05"]


def test_format_series_with_timezone_cache(utc_plus_8):
    """Test the access-log format through an injected cache."""
    cache = TimezoneCache()

    result = format_milliseconds_series(
        pd.Series([APRIL_16]), DateFormat.DateTimeWithTimeZone, cache=cache
    )

    assert result.tolist() == ["16/Apr/2013:16:40:09 +0800"]
    assert len(cache) == 1


def test_format_series_missing_value_rejected():
    """Test that NaN entries raise InvalidInputError."""
    with pytest.raises(InvalidInputError):
        format_milliseconds_series(pd.Series([APRIL_16, np.nan]))


def test_format_series_nat_rejected():
    """Test that NaT entries raise InvalidInputError."""
    s = pd.Series(pd.to_datetime(["2013-04-16 08:40:09", None]))

    with pytest.raises(InvalidInputError):
        format_milliseconds_series(s)


# ============================================================================
# Tests for add_formatted_column()
# ============================================================================

def test_add_formatted_column(utc_plus_8):
    """Test the default output column name and content."""
    df = pd.DataFrame({"timestamp": [APRIL_16, JANUARY_5], "status": [200, 404]})

    result = add_formatted_column(df, fmt=DateFormat.DateTimeWithSeconds)

    assert result.columns.tolist() == ["timestamp", "status", "timestamp_formatted"]
    assert result["timestamp_formatted"].tolist() == ["2013-04-16 16:40:09", "2021-01-05 09:03:02"]
    assert result["status"].tolist() == [200, 404]


def test_add_formatted_column_does_not_modify_input():
    """Test that the input frame is left untouched."""
    df = pd.DataFrame({"timestamp": [APRIL_16]})

    add_formatted_column(df, fmt=DateFormat.UnixTimestamp)

    assert df.columns.tolist() == ["timestamp"]


def test_add_formatted_column_replace_in_place():
    """Test that out_col=col replaces the column in the copy."""
    df = pd.DataFrame({"ts": [APRIL_16]})

    result = add_formatted_column(df, col="ts", fmt=DateFormat.UnixTimestamp, out_col="ts")

    assert result["ts"].tolist() == ["1366101609"]
    assert df["ts"].tolist() == [APRIL_16]


def test_add_formatted_column_datetime64():
    """Test a parsed datetime64 column."""
    df = pd.DataFrame({"timestamp": pd.to_datetime(["2013-04-16 08:40:09"])})

    result = add_formatted_column(df, fmt=DateFormat.UnixTimestamp, out_col="unix")

    assert result["unix"].tolist() == ["1366101609"]


def test_add_formatted_column_missing_column():
    """Test that a missing column raises KeyError."""
    df = pd.DataFrame({"value": [1]})

    with pytest.raises(KeyError, match="not found"):
        add_formatted_column(df)


def test_add_formatted_column_empty_frame():
    """Test that empty frames gain an empty output column."""
    df = pd.DataFrame({"timestamp": pd.Series([], dtype="int64")})

    result = add_formatted_column(df)

    assert result.empty
    assert "timestamp_formatted" in result.columns
