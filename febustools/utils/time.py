"""Utility for working with time."""

from __future__ import annotations

from datetime import datetime
from functools import singledispatch

import numpy as np
import pandas as pd

from febustools.constants import ONE_BILLION, timeable_types


@singledispatch
def to_datetime64(obj: timeable_types | np.ndarray):
    """
    Convert an object to a datetime64.

    Used for the block times stored in Febus files and for tlim bounds.

    Parameters
    ----------
    obj
        An object to convert to a datetime64. If a string is passed, it
        should conform to [ISO 8601](https://en.wikipedia.org/wiki/ISO_8601).
        Floats and integers are interpreted as seconds from Jan 1st, 1970,
        which is how Febus files store block times.

    Examples
    --------
    >>> import febustools as ft
    >>>
    >>> # Convert an iso 8601 string to datetime64
    >>> dt_1 = ft.to_datetime64('2017-09-17T12:11:01.23212')
    >>>
    >>> # Convert a time stamp (seconds from 1970) to datetime64
    >>> dt_2 = ft.to_datetime64(631152000.0)
    """
    if pd.isnull(obj):
        return np.datetime64("NaT")
    msg = f"type {type(obj)} is not supported"
    raise NotImplementedError(msg)


@to_datetime64.register(str)
def _str_to_datetime64(obj: str) -> np.datetime64:
    # numpy doesn't accept the zulu suffix.
    if obj.endswith("Z"):
        obj = obj[:-1]
    return np.datetime64(obj, "ns")


@to_datetime64.register(float)
@to_datetime64.register(int)
@to_datetime64.register(np.number)
def _float_to_datetime(num: float | int) -> np.datetime64:
    return _array_to_datetime64(np.asarray([num]))[0]


@to_datetime64.register(np.ndarray)
def _array_to_datetime64(array: np.ndarray) -> np.ndarray:
    """
    Convert an array of timestamps (s) to datetime64[ns].

    Whole seconds and fractions are converted separately so large
    timestamps keep ns precision. NaN becomes NaT.
    """
    if np.issubdtype(array.dtype, np.datetime64):
        return array.astype("datetime64[ns]")
    if not array.size:
        return np.empty(array.shape, dtype="datetime64[ns]")
    array = np.array(array, dtype=np.float64)
    nans = np.isnan(array)
    array[nans] = 0
    sign = np.sign(array).astype(np.int64)
    abs_array = np.abs(array)
    int_sec = abs_array.astype(np.int64)
    ns = np.round((abs_array % 1.0) * ONE_BILLION).astype(np.int64)
    out = (sign * (int_sec * ONE_BILLION + ns)).astype("datetime64[ns]")
    out[nans] = np.datetime64("NaT")
    return out


@to_datetime64.register(np.datetime64)
def _pass_datetime(datetime):
    return np.datetime64(datetime, "ns")


@to_datetime64.register(datetime)
def _datetime_to_datetime64(dt: datetime):
    # pandas NaT is a datetime subclass.
    if pd.isnull(dt):
        return np.datetime64("NaT")
    return np.datetime64(dt, "ns")


@to_datetime64.register(pd.Timestamp)
def _pandas_timestamp(datetime: pd.Timestamp):
    return datetime.to_datetime64().astype("datetime64[ns]")


def to_timedelta64(seconds) -> np.ndarray:
    """
    Convert seconds (float or array of floats) to timedelta64[ns].

    Values are rounded to the nearest ns so multiples of a sample interval
    don't accumulate truncation errors.
    """
    seconds = np.asarray(seconds, dtype=np.float64)
    ns = np.round(seconds * ONE_BILLION).astype(np.int64)
    return ns.astype("timedelta64[ns]")
