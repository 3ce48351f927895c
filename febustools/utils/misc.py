"""Misc Utilities."""

from __future__ import annotations

import contextlib
import warnings
from collections.abc import Callable, Sequence

import numpy as np
import pandas as pd

from febustools.constants import WARN_LEVELS
from febustools.exceptions import ParameterError


def warn_or_raise(
    msg: str,
    exception: type[Exception] = Exception,
    warning: type[Warning] = UserWarning,
    behavior: WARN_LEVELS = "warn",
):
    """
    A helper function to issues a warning, raise an exception or do nothing.

    Parameters
    ----------
    msg
        The message to attach to warning or exception.
    exception
        The exception class to raise.
    warning
        The type of warning to use. Must be a subclass of Warning.
    behavior
        If None, do nothing. If "raise" raise exception, else issue warning.
    """
    if not behavior or behavior == "ignore":
        return
    if behavior == "raise":
        raise exception(msg)
    warnings.warn(msg, warning, stacklevel=3)


def all_close(ar1, ar2):
    """
    Return True if ar1 is allcose to ar2.

    Just uses numpy.allclose unless ar1 is a datetime, in which case
    strict equality is used.
    """
    ar1, ar2 = np.asarray(ar1), np.asarray(ar2)
    if not ar1.shape == ar2.shape:
        return False
    is_numeric = np.issubdtype(ar1.dtype, np.number) and np.issubdtype(
        ar2.dtype, np.number
    )
    if not is_numeric:
        return np.all(ar1 == ar2)
    return np.allclose(ar1, ar2, equal_nan=True)


def iterate(obj):
    """
    Return an iterable from any object.

    If a string, do not iterate characters, return str in tuple.
    """
    if obj is None:
        return ()
    if isinstance(obj, str):
        return (obj,)
    return obj if isinstance(obj, (list, tuple, np.ndarray)) else (obj,)


def unbyte(byte_or_str: bytes | str) -> str:
    """Ensure a string is given by str or possibly bytes."""
    if isinstance(byte_or_str, bytes | np.bytes_):
        byte_or_str = byte_or_str.decode("utf8")
    return byte_or_str


def _maybe_unpack(maybe_array):
    """Unpack an array like object if it is size one, else return input."""
    size = getattr(maybe_array, "size", 0)
    if size == 1:
        maybe_array = np.ravel(maybe_array)[0]
    return maybe_array


def sanitize_range_param(select, name="range") -> tuple:
    """Given a slice or tuple, check and return a length 2 tuple."""
    # convert ellipses or ellipses values
    if select is None or select is Ellipsis:
        select = (None, None)
    if not isinstance(select, (tuple | slice | list | np.ndarray)):
        msg = f"{name} values must be a tuple or slice not {select!r}."
        raise ParameterError(msg)
    # handle slices, need to convert to tuple
    if isinstance(select, slice):
        if select.step is not None:
            msg = f"Step not supported in {name}. Use xdecimate for decimation."
            raise ParameterError(msg)
        select = (select.start, select.stop)
    # validate length (only length 2 allowed)
    if len(select) != 2:
        msg = f"{name} must be a length 2 sequence, not {select!r}."
        raise ParameterError(msg)
    # swap out ellipses for None so downstream funcs dont have to
    return tuple(None if x is ... else x for x in select)


def selects_only_first(selector: None | int | Sequence[int] | Callable) -> bool:
    """
    Return True if selector picks the first (1-based) zone or source.

    Selector can be None (the default, first only), an integer, a sequence
    of integers, or a function of the form f(index) -> bool which must
    accept index 1.
    """
    if selector is None:
        return True
    if callable(selector):
        return bool(selector(1))
    if isinstance(selector, int | np.integer):
        return selector == 1
    return list(iterate(selector)) == [1]


def register_func(list_or_dict: list | dict, key=None):
    """
    Decorator for registering a function name in a list or dict.

    If list_or_dict is a list only append the name of the function. If it is
    as dict append name (as key) and function as the value.

    Parameters
    ----------
    list_or_dict
        A list or dict to which the wrapped function will be added.
    key
        The name to use, if different than the name of the function.
    """

    def wrapper(func):
        name = key or func.__name__
        if hasattr(list_or_dict, "append"):
            list_or_dict.append(name)
        else:
            list_or_dict[name] = func
        return func

    return wrapper


def _all_null(maybe_ar):
    """Return True if all values in maybe_ar are null."""
    with contextlib.suppress(TypeError, ValueError):
        out = pd.isnull(maybe_ar)
        if isinstance(out, np.ndarray):
            out = bool(out.size) and bool(np.all(out))
        return bool(out)
    return False
