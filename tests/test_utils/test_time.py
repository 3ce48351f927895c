"""Tests for time conversions."""

from __future__ import annotations

from datetime import datetime

import numpy as np
import pandas as pd
import pytest

from febustools.utils.time import to_datetime64, to_timedelta64


class TestToDateTime64:
    """Tests for converting block times and tlim bounds to datetime64."""

    def test_block_times(self):
        """Float seconds from a Febus time dataset keep ms precision."""
        out = to_datetime64(np.array([1_600_000_000.0, 1_600_000_000.125]))
        expected = np.array(
            ["2020-09-13T12:26:40", "2020-09-13T12:26:40.125"], dtype="datetime64[ns]"
        )
        assert np.all(out == expected)

    def test_single_number(self):
        """Scalars give scalars."""
        assert to_datetime64(1.0) == np.datetime64("1970-01-01T00:00:01", "ns")
        assert to_datetime64(np.int64(2)) == np.datetime64("1970-01-01T00:00:02")

    def test_negative(self):
        """Times before 1970 are symmetric."""
        assert to_datetime64(-1.5) == np.datetime64("1969-12-31T23:59:58.5", "ns")

    def test_nan(self):
        """NaN becomes NaT."""
        out = to_datetime64(np.array([np.nan, 1.0]))
        assert pd.isnull(out[0]) and not pd.isnull(out[1])

    @pytest.mark.parametrize(
        "value",
        [
            "2020-01-01T00:00:10",
            "2020-01-01T00:00:10Z",
            np.datetime64("2020-01-01T00:00:10", "s"),
            datetime(2020, 1, 1, 0, 0, 10),
            pd.Timestamp("2020-01-01T00:00:10"),
        ],
    )
    def test_bounds(self, value):
        """Everything accepted as a tlim bound gives the same ns datetime."""
        out = to_datetime64(value)
        assert out == np.datetime64("2020-01-01T00:00:10", "ns")
        assert str(out) == "2020-01-01T00:00:10.000000000"

    def test_empty(self):
        """Empty arrays give empty datetime arrays."""
        out = to_datetime64(np.array([]))
        assert out.shape == (0,)
        assert np.issubdtype(out.dtype, np.datetime64)

    def test_none(self):
        """None is NaT."""
        assert pd.isnull(to_datetime64(None))

    def test_bad_string(self):
        """Strings which aren't dates raise."""
        with pytest.raises(ValueError):
            to_datetime64("not a time")

    def test_unsupported_type(self):
        """Other types raise."""
        with pytest.raises(NotImplementedError):
            to_datetime64(object())


class TestToTimeDelta64:
    """Tests for converting seconds to timedelta64."""

    def test_float(self):
        """Seconds become ns."""
        assert to_timedelta64(1.5) == np.timedelta64(1_500_000_000, "ns")

    def test_sample_multiples(self):
        """Multiples of a sample interval are rounded, not truncated."""
        out = to_timedelta64(np.arange(1000) * 0.01)
        assert np.all(np.diff(out) == np.timedelta64(10, "ms"))

    def test_empty(self):
        """Empty arrays give empty timedelta arrays."""
        out = to_timedelta64(np.array([]))
        assert out.shape == (0,)
        assert np.issubdtype(out.dtype, np.timedelta64)
