"""
Normalized Febus metadata.

The raw zone attributes are stored in instrument units (cm, mHz, ms...).
They are converted to SI units by a table of conversion functions, each
registered against the raw attribute name, then used to build one
immutable metadata model.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Literal

import numpy as np
from pydantic import Field

from febustools.constants import (
    CM_PER_M,
    DEFAULT_FILE_VERSION,
    MILLI,
    STRAIN,
    STRAIN_RATE,
)
from febustools.core.schema import FebusSchema, SchemaV1
from febustools.exceptions import MetadataConsistencyWarning
from febustools.utils.display import metadata_to_text
from febustools.utils.mapping import FrozenDict
from febustools.utils.misc import _maybe_unpack, register_func, unbyte, warn_or_raise
from febustools.utils.models import (
    FebusBaseModel,
    FloatTuple,
    FrozenDictType,
    IntTuple,
)

# {raw attribute name: func(value, schema, overlap) -> dict of fields}
ATTR_CONVERSIONS = {}


class NormalizedMetadata(FebusBaseModel):
    """
    Metadata of a Febus zone, in SI units.

    Attributes which the file didn't provide keep their (null) defaults.
    Raw attributes without a conversion rule are kept, unchanged, in
    `other`.
    """

    sampling_res: float = Field(np.nan, description="Sampling resolution (m).")
    block_rate: float = Field(np.nan, description="Rate blocks are written (Hz).")
    block_length: float = Field(np.nan, description="Duration of each block (s).")
    block_interval: float = Field(
        np.nan, description="Time between the start of consecutive blocks (s)."
    )
    block_overlap: float = Field(
        100.0, description="Percent of a block repeated in the next one."
    )
    pulse_rate_freq: float = Field(np.nan, description="Pulse rate (Hz).")
    data_domain: IntTuple = ()
    extent: IntTuple = Field(
        (),
        description="Channel start, channel end, sample start, sample end.",
    )
    whole_extent: IntTuple = Field(
        (), description="Extent before any down-sampling by the instrument."
    )
    sampling_rate: float = Field(np.nan, description="Sampling rate (Hz).")
    derivation_time: float = Field(np.nan, description="Derivation time (s).")
    origin: FloatTuple = Field(
        (), description="Distance origin (m) and time offset (ms)."
    )
    spacing: FloatTuple = Field(
        (), description="Distance step (m) and time step (ms)."
    )
    sampling_interval: float = Field(
        np.nan, description="Time between samples (s)."
    )
    nsamples_per_block: int = Field(
        0, description="Number of samples per block before down-sampling."
    )
    data_type: Literal[STRAIN, STRAIN_RATE, ""] = ""
    file_version: str = DEFAULT_FILE_VERSION
    sensor: str = ""
    source: str = ""
    zone: str = ""
    other: FrozenDictType = Field(default_factory=FrozenDict)

    def __rich__(self):
        return metadata_to_text(self)

    def __str__(self):
        return str(self.__rich__())

    __repr__ = __str__


def _as_scalar_or_array(value):
    """Unpack single element values, decode strings, else return the array."""
    value = _maybe_unpack(value)
    if isinstance(value, np.ndarray) and value.dtype.kind in "SO":
        return tuple(unbyte(x) for x in value)
    return unbyte(value)


def _as_ints(value):
    out = np.atleast_1d(np.asarray(value)).astype(np.int64)
    return int(out[0]) if out.size == 1 else tuple(int(x) for x in out)


@register_func(ATTR_CONVERSIONS, key="SamplingRes")
def _sampling_res(value, schema, overlap):
    # cm -> m
    return {"sampling_res": float(_maybe_unpack(value)) / CM_PER_M}


@register_func(ATTR_CONVERSIONS, key="BlockRate")
def _block_rate(value, schema, overlap):
    raw = float(_maybe_unpack(value))  # mHz
    return {
        "block_length": schema.get_block_length(raw, overlap),
        "block_interval": MILLI / raw,
        "block_rate": raw / MILLI,
    }


@register_func(ATTR_CONVERSIONS, key="BlockOverlap")
def _block_overlap(value, schema, overlap):
    # resolved by the schema before any other attribute.
    return {"block_overlap": overlap}


@register_func(ATTR_CONVERSIONS, key="PulseRateFreq")
def _pulse_rate_freq(value, schema, overlap):
    # mHz -> Hz
    return {"pulse_rate_freq": float(_maybe_unpack(value)) / MILLI}


@register_func(ATTR_CONVERSIONS, key="DataDomain")
def _data_domain(value, schema, overlap):
    return {"data_domain": _as_ints(value)}


@register_func(ATTR_CONVERSIONS, key="Extent")
def _extent(value, schema, overlap):
    return {"extent": _as_ints(value)}


@register_func(ATTR_CONVERSIONS, key="WholeExtent")
def _whole_extent(value, schema, overlap):
    return {"whole_extent": _as_ints(value)}


@register_func(ATTR_CONVERSIONS, key="SamplingRate")
def _sampling_rate(value, schema, overlap):
    return {"sampling_rate": float(_maybe_unpack(value)) / schema.sampling_rate_scale}


@register_func(ATTR_CONVERSIONS, key="DerivationTime")
def _derivation_time(value, schema, overlap):
    # ms -> s
    return {"derivation_time": float(_maybe_unpack(value)) / MILLI}


@register_func(ATTR_CONVERSIONS, key="Origin")
def _origin(value, schema, overlap):
    return {"origin": np.atleast_1d(value)}


@register_func(ATTR_CONVERSIONS, key="Spacing")
def _spacing(value, schema, overlap):
    spacing = np.atleast_1d(np.asarray(value, dtype=np.float64))
    out = {"spacing": spacing}
    if len(spacing) > 1:
        # ms -> s
        out["sampling_interval"] = spacing[1] / MILLI
    return out


def _get_nsamples_per_block(out: dict) -> int:
    """Count the samples in a block from the whole (or zone) extent."""
    extent = np.atleast_1d(out.get("whole_extent", out.get("extent", ())))
    if len(extent) < 4:
        return 0
    return int(extent[3] - extent[2] + 1)


def check_consistency(metadata: NormalizedMetadata, behavior="warn"):
    """
    Check the sample count per block agrees with the block length and pulse rate.

    A mismatch is reported as a MetadataConsistencyWarning (or raised if
    behavior == "raise").
    """
    expected = metadata.block_length * metadata.pulse_rate_freq
    actual = metadata.nsamples_per_block
    if not np.isfinite(expected) or not actual:
        return
    if not np.isclose(actual, expected):
        msg = (
            f"Number of samples per block from WholeExtent ({actual}) does not "
            f"equal BlockLength * PulseRateFreq ({expected:g})."
        )
        warn_or_raise(
            msg,
            exception=ValueError,
            warning=MetadataConsistencyWarning,
            behavior=behavior,
        )


def normalize_attributes(
    zone_attrs: Mapping,
    schema: FebusSchema | None = None,
    source_attrs: Mapping | None = None,
    **kwargs,
) -> NormalizedMetadata:
    """
    Convert raw Febus attributes into NormalizedMetadata.

    Parameters
    ----------
    zone_attrs
        The attributes of the zone node, as stored in the file.
    schema
        The schema of the file, defaults to the version 1 schema.
    source_attrs
        The attributes of the source node. Only WholeExtent is used.
    **kwargs
        Any other metadata fields (eg data_type, zone).
    """
    schema = schema if schema is not None else SchemaV1()
    source_attrs = source_attrs if source_attrs is not None else {}
    raw = dict(zone_attrs)
    if "WholeExtent" in source_attrs and "WholeExtent" not in raw:
        raw["WholeExtent"] = source_attrs["WholeExtent"]
    # overlap must be known before BlockRate can be converted.
    overlap = schema.get_overlap(raw)
    out = {"block_overlap": overlap, "file_version": schema.version}
    other = {}
    for key, value in raw.items():
        if (func := ATTR_CONVERSIONS.get(key)) is not None:
            out.update(func(value, schema, overlap))
        else:
            other[key] = _as_scalar_or_array(value)
    out["nsamples_per_block"] = _get_nsamples_per_block(out)
    out["other"] = other
    out.update(kwargs)
    metadata = NormalizedMetadata(**out)
    check_consistency(metadata)
    return metadata
