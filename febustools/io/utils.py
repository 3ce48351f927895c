"""Utilities for locating the parts of a Febus file."""

from __future__ import annotations

from collections import namedtuple

import numpy as np

from febustools.constants import (
    DEFAULT_FILE_VERSION,
    FEBUS_SOURCE_ATTRS,
    TIME_DATASET_NAME,
)
from febustools.exceptions import InvalidFebusFileError
from febustools.utils.hdf5 import Group, get_attr
from febustools.utils.time import to_datetime64

_FebusSlice = namedtuple(
    "FebusSlice",
    ["sensor", "sensor_name", "source", "source_name", "zone", "zone_name"],
)


def _only(names, what, parent) -> str:
    """Return the only name in names, else raise."""
    names = list(names)
    if len(names) != 1:
        msg = (
            f"Expected exactly one {what} in {parent!r} but found "
            f"{len(names)}: {names}. Only files with a single {what} are "
            f"supported."
        )
        raise InvalidFebusFileError(msg)
    return names[0]


def _get_febus_slice(fi) -> _FebusSlice:
    """
    Get the sensor, source and zone groups of a Febus file.

    The file must have exactly one of each; the source holds the block
    "time" dataset and the zone group.
    """
    groups = [k for k, v in fi.items() if isinstance(v, Group)]
    sensor_name = _only(groups, "sensor", fi.name)
    sensor = fi[sensor_name]
    sources = [k for k, v in sensor.items() if isinstance(v, Group)]
    source_name = _only(sources, "source", sensor.name)
    source = sensor[source_name]
    if TIME_DATASET_NAME not in source:
        msg = f"Source {source.name} has no '{TIME_DATASET_NAME}' dataset."
        raise InvalidFebusFileError(msg)
    zones = [k for k in source.keys() if k != TIME_DATASET_NAME]
    zone_name = _only(zones, "zone", source.name)
    zone = source[zone_name]
    return _FebusSlice(sensor, sensor_name, source, source_name, zone, zone_name)


def _get_block_times(feb: _FebusSlice) -> np.ndarray:
    """Get the start time of each block as datetime64."""
    # In older versions time has shape (1, n) rather than (n,).
    times = np.ravel(feb.source[TIME_DATASET_NAME][()])
    return to_datetime64(times.astype(np.float64))


def _get_febus_version_str(fi) -> str:
    """
    Return the version string of a Febus file, or "" if it isn't one.

    Febus files are identified by the attributes of their sources. Files
    without a Version attribute are given the default version.
    """
    sensor_names = sorted(fi.keys())
    if not sensor_names:
        return ""
    version = DEFAULT_FILE_VERSION
    for sensor_name in sensor_names:
        sensor = fi[sensor_name]
        if not isinstance(sensor, Group) or not len(sensor):
            return ""
        for source in sensor.values():
            if not isinstance(source, Group):
                return ""
            if not FEBUS_SOURCE_ATTRS.issubset(set(source.attrs)):
                return ""
            version = str(get_attr(source, "Version", version))
    return version
