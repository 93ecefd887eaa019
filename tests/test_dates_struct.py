"""
Tests for src/dates/struct.py
"""

from datetime import datetime, timezone

import pandas as pd
import pytest

from src.dates.struct import DateStruct, datestruct
from src.utils.time import FrozenClock


def test_datestruct():
    """Test the canonical example."""
    assert datestruct(datetime(2013, 4, 1, 9)) == DateStruct(YYYYMMDD=20130401, H=9)


@pytest.mark.parametrize("hour", [0, 1, 9, 12, 23])
def test_datestruct_hours(hour):
    """Test the hour field across the day."""
    result = datestruct(datetime(2021, 12, 31, hour, 30))

    assert result.YYYYMMDD == 20211231
    assert result.H == hour


def test_datestruct_defaults_to_clock():
    """Test the "now" fallback."""
    clock = FrozenClock(datetime(2013, 4, 16, 16, 40, 9))

    assert datestruct(clock=clock) == DateStruct(YYYYMMDD=20130416, H=16)


def test_datestruct_aware_input_uses_local_day(utc_plus_8):
    """Test that aware input is read in local time."""
    d = datetime(2013, 4, 30, 20, tzinfo=timezone.utc)

    assert datestruct(d) == DateStruct(YYYYMMDD=20130501, H=4)


def test_datestruct_fields_are_ints():
    """Test that both fields are plain integers."""
    result = datestruct(datetime(2013, 4, 1, 9))

    assert type(result.YYYYMMDD) is int
    assert type(result.H) is int


def test_datestruct_rejects_invalid_date():
    """Test that NaT raises instead of producing NaN fields."""
    with pytest.raises(ValueError, match="invalid date"):
        datestruct(pd.NaT)
