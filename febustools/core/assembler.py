"""
Assemble 2D data arrays from the 3D Febus block arrays.

h5py presents the data array of a zone with shape
(block, in-block sample, channel), the reverse of the dimension order
written by the instrument. Selecting the needed blocks, samples and
channels then flattening the first two axes gives a (time, channel) array.
"""

from __future__ import annotations

import numpy as np

from febustools.constants import DECIMATE_READ_THRESHOLD
from febustools.core.geometry import BlockGeometry
from febustools.core.windows import BlockIndexRange, ChannelIndexRange
from febustools.exceptions import AssemblyError
from febustools.utils.time import to_datetime64, to_timedelta64


class ReadStrategy:
    """Base class for ways of reading the selected part of a block array."""

    name = ""

    def read(self, dataset, blocks: slice, samples: slice, channels):
        """Return the selected 3D array."""
        raise NotImplementedError


class DirectStridedRead(ReadStrategy):
    """Read the strided channel selection from the file in one go."""

    name = "direct_strided_read"

    def read(self, dataset, blocks, samples, channels: ChannelIndexRange):
        return np.asarray(dataset[blocks, samples, channels.to_slice()])


class ReadThenDecimate(ReadStrategy):
    """
    Read the full channel range and decimate in memory.

    Strided reads with small strides are slow in HDF5, so this is used
    for small decimation factors.
    """

    name = "read_then_decimate"

    def read(self, dataset, blocks, samples, channels: ChannelIndexRange):
        data = np.asarray(dataset[blocks, samples, channels.full_slice()])
        return data[..., :: channels.stride]


def get_read_strategy(stride: int, threshold=DECIMATE_READ_THRESHOLD):
    """
    Choose how to read the data for a given channel stride.

    A stride of 1, or of at least threshold, is read directly; anything in
    between is read in full then decimated.
    """
    if stride == 1 or stride >= threshold:
        return DirectStridedRead()
    return ReadThenDecimate()


def assemble_data(
    dataset,
    block_range: BlockIndexRange,
    geometry: BlockGeometry,
    channel_range: ChannelIndexRange,
    strategy: ReadStrategy | None = None,
) -> np.ndarray:
    """
    Read the selected data and reshape it to (time, channel).

    Parameters
    ----------
    dataset
        An h5py Dataset (or array) with shape (block, sample, channel).
    block_range
        The blocks to read.
    geometry
        The samples to use from each block.
    channel_range
        The channels to read, and the stride through them.
    strategy
        How to read the data, if None one is chosen from the stride.

    Raises
    ------
    AssemblyError if the output doesn't have the expected shape.
    """
    if strategy is None:
        strategy = get_read_strategy(channel_range.stride)
    data_3d = strategy.read(
        dataset, block_range.to_slice(), geometry.to_slice(), channel_range
    )
    expected = (block_range.nblocks * geometry.nsamples, channel_range.nchannels)
    if data_3d.ndim != 3 or data_3d.shape[-1] != expected[1]:
        msg = f"Read data with shape {data_3d.shape}, expected {expected}"
        raise AssemblyError(msg)
    data = data_3d.reshape(-1, data_3d.shape[-1])
    if data.shape != expected:
        msg = f"Assembled data have shape {data.shape}, expected {expected}"
        raise AssemblyError(msg)
    return data


def get_times(nsamples: int, sampling_interval: float) -> np.ndarray:
    """Get the time (s) of each sample relative to the first one."""
    return np.arange(nsamples) * sampling_interval


def get_dates(start, nsamples: int, sampling_interval: float) -> np.ndarray:
    """Get the absolute time of each sample, starting at start."""
    start = to_datetime64(start)
    return start + to_timedelta64(get_times(nsamples, sampling_interval))
