"""
Block geometry.

Each Febus block holds more samples than the time between blocks (the
blocks overlap). Here we find the samples of each block which, when the
blocks are concatenated, give a series without gaps or repeated samples.
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from febustools.exceptions import BlockGeometryError


class BlockGeometry(NamedTuple):
    """
    The samples used from each block.

    s1 and s2 are the inclusive sample range in the units of the zone
    Extent attribute; offset is the index of s1 in the block's data array.
    """

    s1: int
    s2: int
    offset: int = 0

    @property
    def nsamples(self) -> int:
        return self.s2 - self.s1 + 1

    def to_slice(self) -> slice:
        """Return the slice of the in-block sample axis."""
        return slice(self.offset, self.offset + self.nsamples)


def resolve_block_geometry(
    sample_extent, sampling_interval: float, block_interval: float
) -> BlockGeometry:
    """
    Get the in-block sample range which tiles consecutive blocks.

    Parameters
    ----------
    sample_extent
        The (start, end) sample indices stored for each block, inclusive.
    sampling_interval
        The time between samples (s).
    block_interval
        The time between the start of consecutive blocks (s).

    Notes
    -----
    The window always starts at the first stored sample of each block.
    Choosing the window which best aligns samples with the block
    timestamps is not attempted.
    """
    if not np.isfinite(sampling_interval) or sampling_interval <= 0:
        msg = (
            f"Invalid sampling interval {sampling_interval}; the zone Spacing "
            f"attribute must give the time step (ms) as its second element."
        )
        raise BlockGeometryError(msg)
    s1_raw, s2_raw = (int(x) for x in sample_extent)
    nsamples_raw = s2_raw - s1_raw + 1
    duration = nsamples_raw * sampling_interval
    if duration < block_interval and not np.isclose(duration, block_interval):
        msg = (
            f"Block sample extent ({s1_raw}, {s2_raw}) spans {duration} s at "
            f"{sampling_interval} s per sample, which is shorter than the block "
            f"interval of {block_interval} s; blocks can't be joined without gaps."
        )
        raise BlockGeometryError(msg)
    nsamples = int(np.round(block_interval / sampling_interval))
    nsamples = min(max(nsamples, 1), nsamples_raw)
    return BlockGeometry(s1_raw, s1_raw + nsamples - 1)
