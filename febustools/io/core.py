"""
Read Febus A1 DAS files.

More info about febus can be found here: https://www.febus-optics.com/en/
"""

from __future__ import annotations

import warnings
from collections.abc import Callable, Sequence

from febustools.constants import path_types
from febustools.core.assembler import assemble_data, get_dates, get_times
from febustools.core.data import FebusData
from febustools.core.geometry import resolve_block_geometry
from febustools.core.metadata import normalize_attributes
from febustools.core.schema import resolve_schema
from febustools.core.windows import (
    get_distances,
    resolve_block_window,
    resolve_distance_window,
    resolve_time_window,
    validate_distance_window,
    validate_time_window,
)
from febustools.exceptions import (
    InvalidFebusFileError,
    MetadataConsistencyWarning,
    ParameterError,
)
from febustools.utils.hdf5 import H5pyFile, get_attr, open_h5, read_attrs
from febustools.utils.misc import selects_only_first

from .utils import _get_block_times, _get_febus_slice, _get_febus_version_str

# Attributes a zone must have for the data to be located.
_REQUIRED_ZONE_ATTRS = ("BlockRate", "Extent", "Origin", "Spacing")

_selector_type = None | int | Sequence[int] | Callable[[int], bool]


def _validate_zones_sources(zones, sources):
    """Only the first zone of the first source can currently be read."""
    for name, selector in (("zones", zones), ("sources", sources)):
        if not selects_only_first(selector):
            msg = (
                f"Only the first of the {name} can currently be read but "
                f"{name}={selector!r} was passed."
            )
            raise ParameterError(msg)


def _check_block_count(block_times, dataset):
    """Warn if the number of block times differs from the number of blocks."""
    if len(block_times) != dataset.shape[0]:
        msg = (
            f"File has {len(block_times)} block times but {dataset.shape[0]} "
            f"blocks of data in {dataset.name}."
        )
        warnings.warn(msg, MetadataConsistencyWarning, stacklevel=3)


def read_hdf5(
    path: path_types | H5pyFile,
    tlim=None,
    *,
    blocks: tuple[int, int] | None = None,
    xlim: tuple[float | None, float | None] | None = None,
    xdecimate: int = 1,
    zones: _selector_type = None,
    sources: _selector_type = None,
    header_only: bool = False,
    version=None,
) -> FebusData:
    """
    Read strain or strain rate data from a Febus HDF5 file.

    Overlapping parts of consecutive blocks are removed so the output is
    one continuous series.

    Parameters
    ----------
    path
        The path to the file, or an open h5py File (which is not closed).
    tlim
        A (start, end) pair of times; blocks which start in this range,
        inclusive, are read. Either may be None for an open bound. Values
        can be anything accepted by `to_datetime64`, numbers are seconds
        since 1970.
    blocks
        A (first, last) pair of 1-based, inclusive block numbers to read.
        Can't be used with tlim.
    xlim
        A (start, end) pair of distances (m); channels in this range,
        inclusive, are read.
    xdecimate
        Read only every xdecimate-th channel.
    zones
        Which zone(s) to read, as an index, sequence of indices, or a
        function f(index) -> bool. Only zone 1 is currently supported.
    sources
        Which source(s) to read, as for zones. Only source 1 is currently
        supported.
    header_only
        If True, only read the metadata; data, dates and times are empty.
    version
        If not None, use this file version rather than the one in the file.

    Raises
    ------
    ParameterError
        If the parameters are invalid; raised before the file is opened.
    InvalidFebusFileError
        If the file doesn't have the Febus layout.
    FebusSchemaError
        If the zone has no dataset with a known name.
    BlockGeometryError
        If the blocks are too short to be joined without gaps.

    Examples
    --------
    >>> import febustools as ft
    >>> # Read a whole file
    >>> fd = ft.read_hdf5(path)  # doctest: +SKIP
    >>> # Read a time window, and every 10th channel between 100 and 500 m
    >>> fd = ft.read_hdf5(  # doctest: +SKIP
    ...     path,
    ...     tlim=("2023-01-01T00:00:10", "2023-01-01T00:01:00"),
    ...     xlim=(100, 500),
    ...     xdecimate=10,
    ... )
    """
    tlim, blocks = validate_time_window(tlim, blocks)
    xlim, xdecimate = validate_distance_window(xlim, xdecimate)
    _validate_zones_sources(zones, sources)
    with open_h5(path) as fi:
        feb = _get_febus_slice(fi)
        schema = resolve_schema(get_attr(feb.source, "Version"), override=version)
        zone_attrs = read_attrs(feb.zone)
        if missing := [x for x in _REQUIRED_ZONE_ATTRS if x not in zone_attrs]:
            msg = f"Zone {feb.zone.name} is missing attributes {missing}"
            raise InvalidFebusFileError(msg)
        data_name, data_type = schema.find_dataset(feb.zone)
        dataset = feb.zone[data_name]
        metadata = normalize_attributes(
            zone_attrs,
            schema,
            source_attrs=read_attrs(feb.source),
            data_type=data_type,
            sensor=feb.sensor_name,
            source=feb.source_name,
            zone=feb.zone_name,
        )
        geometry = resolve_block_geometry(
            metadata.extent[2:4], metadata.sampling_interval, metadata.block_interval
        )
        distances = get_distances(metadata, dataset.shape[-1])
        block_times = _get_block_times(feb)
        _check_block_count(block_times, dataset)
        if blocks is not None:
            block_range = resolve_block_window(blocks, len(block_times), fi.filename)
        else:
            block_range = resolve_time_window(block_times, tlim, fi.filename)
        channel_range = resolve_distance_window(distances, xlim, xdecimate)
        if block_range is None or channel_range is None:
            return FebusData.empty(distances, metadata)
        out_distances = distances[channel_range.to_slice()]
        if header_only:
            return FebusData.empty(out_distances, metadata)
        data = assemble_data(dataset, block_range, geometry, channel_range)
        dt = metadata.sampling_interval
        dates = get_dates(block_times[block_range.t1 - 1], len(data), dt)
        return FebusData(
            data=data,
            dates=dates,
            times=get_times(len(data), dt),
            distances=out_distances,
            metadata=metadata,
        )


def read_header(path: path_types | H5pyFile, **kwargs) -> FebusData:
    """
    Read only the metadata of a Febus file.

    Accepts the same keyword arguments as `read_hdf5`.
    """
    kwargs["header_only"] = True
    return read_hdf5(path, **kwargs)


def get_febus_version(path: path_types | H5pyFile) -> str:
    """
    Return the version of a Febus file, or an empty string if it isn't one.

    Parameters
    ----------
    path
        The path to an HDF5 file, or an open h5py File.
    """
    with open_h5(path) as fi:
        return _get_febus_version_str(fi)
