"""
Resolve time and distance windows into index ranges.

Validation functions are called before the file is opened, resolution
functions once the block times and channel distances are known. Resolution
returns None when the window selects nothing; that is not an error.
"""

from __future__ import annotations

import warnings
from typing import NamedTuple

import numpy as np

from febustools.exceptions import (
    BlockRangeWarning,
    EmptySelectionWarning,
    MetadataConsistencyWarning,
    ParameterError,
    TimeError,
)
from febustools.utils.misc import sanitize_range_param
from febustools.utils.time import to_datetime64


class BlockIndexRange(NamedTuple):
    """An inclusive, 1-based range of blocks."""

    t1: int
    t2: int

    @property
    def nblocks(self) -> int:
        return max(self.t2 - self.t1 + 1, 0)

    def to_slice(self) -> slice:
        """Return the (0-based) slice of the block axis."""
        return slice(self.t1 - 1, self.t2)


class ChannelIndexRange(NamedTuple):
    """An inclusive, 0-based range of channels and the stride through it."""

    x1: int
    x2: int
    stride: int = 1

    @property
    def nchannels(self) -> int:
        return len(range(self.x1, self.x2 + 1, self.stride))

    def to_slice(self) -> slice:
        """Return the strided slice of the channel axis."""
        return slice(self.x1, self.x2 + 1, self.stride)

    def full_slice(self) -> slice:
        """Return the slice of the channel axis, ignoring the stride."""
        return slice(self.x1, self.x2 + 1)


# --- Validation (before I/O)


def _to_time_bound(value):
    """Convert a tlim bound to datetime64, None stays None."""
    if value is None:
        return None
    try:
        return to_datetime64(value)
    except (ValueError, NotImplementedError) as e:
        msg = f"Can't interpret {value!r} as a time in tlim"
        raise TimeError(msg) from e


def validate_time_window(tlim=None, blocks=None):
    """
    Check the time selection parameters.

    Only one of tlim and blocks can be used; if neither is given all
    blocks are selected.

    Returns
    -------
    A tuple of (tlim, blocks) where the unused one is None. tlim bounds are
    datetime64 or None (open ended), blocks bounds are ints.
    """
    if tlim is not None and blocks is not None:
        msg = "Only one of tlim and blocks can be specified."
        raise ParameterError(msg)
    if blocks is not None:
        t1, t2 = sanitize_range_param(blocks, name="blocks")
        if not all(isinstance(x, int | np.integer) for x in (t1, t2)):
            msg = f"blocks must be a pair of integers, not {blocks!r}"
            raise ParameterError(msg)
        if t2 < t1:
            msg = f"blocks must be ordered, not {blocks!r}"
            raise ParameterError(msg)
        return None, (int(t1), int(t2))
    lo, hi = (_to_time_bound(x) for x in sanitize_range_param(tlim, name="tlim"))
    if lo is not None and hi is not None and hi < lo:
        msg = f"tlim must be ordered, not {tlim!r}"
        raise ParameterError(msg)
    return (lo, hi), None


def validate_distance_window(xlim=None, xdecimate=1):
    """
    Check the distance selection parameters.

    Returns
    -------
    A tuple of ((lo, hi), xdecimate); None indicates an open bound.
    """
    lo, hi = sanitize_range_param(xlim, name="xlim")
    if lo is not None and hi is not None and hi < lo:
        msg = f"xlim must be ordered, not {xlim!r}"
        raise ParameterError(msg)
    is_int = isinstance(xdecimate, int | np.integer) and not isinstance(
        xdecimate, bool
    )
    if not is_int or xdecimate < 1:
        msg = f"xdecimate must be a positive integer, not {xdecimate!r}"
        raise ParameterError(msg)
    return (lo, hi), int(xdecimate)


# --- Resolution


def _first_last(mask) -> tuple[int, int] | None:
    """Return the first and last index where mask is True, or None."""
    inds = np.flatnonzero(mask)
    if not len(inds):
        return None
    return int(inds[0]), int(inds[-1])


def _in_limits(values, limits):
    lo, hi = limits
    mask = np.ones(len(values), dtype=bool)
    if lo is not None:
        mask &= values >= lo
    if hi is not None:
        mask &= values <= hi
    return mask


def resolve_time_window(
    block_times, tlim=(None, None), path=""
) -> BlockIndexRange | None:
    """
    Get the range of blocks whose start times are within tlim.

    Parameters
    ----------
    block_times
        An array of datetime64, the start time of each block.
    tlim
        A validated (lo, hi) pair of datetime64, None for open bounds.
    path
        The file name, used in the warning message.
    """
    first_last = _first_last(_in_limits(np.asarray(block_times), tlim))
    if first_last is None:
        msg = f"No blocks between {tlim[0]} and {tlim[1]} in file '{path}'"
        warnings.warn(msg, EmptySelectionWarning, stacklevel=2)
        return None
    ind1, ind2 = first_last
    return BlockIndexRange(ind1 + 1, ind2 + 1)


def resolve_block_window(blocks, nblocks: int, path="") -> BlockIndexRange | None:
    """
    Get the range of blocks from 1-based block indices.

    Indices outside of [1, nblocks] issue a warning and are clamped to the
    blocks which exist.
    """
    t1, t2 = blocks
    if t1 >= 1 and t2 <= nblocks:
        return BlockIndexRange(t1, t2)
    msg = (
        f"Requested blocks {t1} to {t2} but file '{path}' has blocks "
        f"1 to {nblocks}; only the available blocks will be read."
    )
    warnings.warn(msg, BlockRangeWarning, stacklevel=2)
    out = BlockIndexRange(max(t1, 1), min(t2, nblocks))
    if not out.nblocks:
        msg = f"No blocks between {t1} and {t2} in file '{path}'"
        warnings.warn(msg, EmptySelectionWarning, stacklevel=2)
        return None
    return out


def get_distances(metadata, nchannels: int | None = None) -> np.ndarray:
    """
    Get the distance (m) of each channel in a zone.

    Distances are computed from the Origin, Extent and Spacing attributes.
    If nchannels (the size of the data array) disagrees with the extent a
    warning is issued and the array size is used.
    """
    x0, dx = metadata.origin[0], metadata.spacing[0]
    start, stop = metadata.extent[0], metadata.extent[1]
    expected = stop - start + 1
    if nchannels is not None and nchannels != expected:
        msg = (
            f"Zone extent specifies {expected} channels but the data array "
            f"has {nchannels}; using the data array size."
        )
        warnings.warn(msg, MetadataConsistencyWarning, stacklevel=2)
        expected = nchannels
    return x0 + (start + np.arange(expected)) * dx


def resolve_distance_window(
    distances, xlim=(None, None), xdecimate: int = 1
) -> ChannelIndexRange | None:
    """
    Get the range of channels whose distances are within xlim.

    Parameters
    ----------
    distances
        The distance of each channel.
    xlim
        A validated (lo, hi) pair of distances, None for open bounds.
    xdecimate
        Stride through the selected channels.
    """
    first_last = _first_last(_in_limits(np.asarray(distances), xlim))
    if first_last is None:
        msg = f"No channels between distances {xlim[0]} and {xlim[1]}"
        warnings.warn(msg, EmptySelectionWarning, stacklevel=2)
        return None
    return ChannelIndexRange(*first_last, stride=xdecimate)
