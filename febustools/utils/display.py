"""Utils for displaying febustools objects."""

from __future__ import annotations

import textwrap
from functools import singledispatch

import numpy as np
import pandas as pd
from rich.text import Text

from febustools.constants import FLOAT_PRECISION, febus_styles


@singledispatch
def get_nice_text(value, style=None) -> Text:
    """
    Get a rich Text object for formatting nice display for various datatypes.

    Parameters
    ----------
    value
        The value which should be stylized.
    style
        A string which is either an entry in febustools.constants.febus_styles
        or a valid rich style string.
    """
    txt = value if isinstance(value, Text) else Text(str(value))
    if style is not None:
        style = febus_styles.get(style, style)
        txt.stylize(style)
    return txt


@get_nice_text.register(float)
@get_nice_text.register(np.float64)
def _nice_float_string(value, style=None):
    """Nice print value for floats."""
    fmt_str = f".{FLOAT_PRECISION}"
    return get_nice_text(Text(f"{float(value):{fmt_str}}"), style)


@get_nice_text.register(tuple)
def _nice_tuple(value, style=None):
    """Nice print value for tuples of numbers."""
    inner = Text(", ").join([get_nice_text(x) for x in value])
    return get_nice_text(Text("(") + inner + Text(")"), style)


@get_nice_text.register(np.datetime64)
@get_nice_text.register(pd.Timestamp)
def _nice_datetime(value, style=None):
    """Get a nice datetime value, colored by date, time and decimal parts."""
    if pd.isnull(value):
        return get_nice_text(str(value), style)
    dt_str = str(np.datetime64(value, "ns"))
    date, _, clock = dt_str.partition("T")
    hms, _, dec = clock.partition(".")
    out = Text(date, febus_styles["ymd"]) + Text("T") + Text(hms, febus_styles["hms"])
    if dec := dec.rstrip("0"):
        out += Text(".") + Text(dec, febus_styles["dec"])
    return get_nice_text(out, style)


def array_to_text(data, name="Data", units=None) -> Text:
    """Convert an array to text."""
    header = Text("➤ ") + Text(name, style=febus_styles["header"])
    unitstr = Text("") if units is None else Text(f", units: {units}")
    header += Text(f" ({data.dtype}, shape: {data.shape}") + unitstr + Text(")")
    threshold = febus_styles["np_array_threshold"]
    np_str = np.array2string(
        data,
        precision=FLOAT_PRECISION,
        threshold=threshold,
    )
    numpy_format = textwrap.indent(np_str, "   ")
    return header + Text("\n") + Text(numpy_format)


def range_to_text(array, name, units=None) -> Text:
    """Summarize a 1D array by its first and last values."""
    txt = Text("    ") + Text(f"{name}: ", febus_styles["keys"])
    if not len(array):
        return txt + Text("empty")
    txt += get_nice_text(array[0]) + Text(" → ") + get_nice_text(array[-1])
    txt += Text(f" ({len(array)}")
    if units is not None:
        txt += Text(", ") + Text(units, febus_styles["units"])
    return txt + Text(")")


def metadata_to_text(metadata) -> Text:
    """Convert a metadata model to text."""
    txt = Text("➤ ") + Text("Metadata", style=febus_styles["header"])
    txt += Text("\n")
    for name, value in metadata.model_dump().items():
        if name == "other":
            continue
        txt += Text("    ")
        txt += Text(f"{name}: ", febus_styles["keys"])
        txt += get_nice_text(value)
        txt += Text("\n")
    if other := metadata.other:
        keys = ", ".join(sorted(other))
        txt += Text("    ") + Text("other: ", febus_styles["keys"]) + Text(keys)
    return txt
