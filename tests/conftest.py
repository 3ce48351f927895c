"""pytest configuration for febustools."""

from __future__ import annotations

import h5py
import numpy as np
import pytest

from febustools.constants import SCHEMA_V2_VERSION
from febustools.core.schema import parse_version

# Start of the first block in all test files (seconds since 1970).
START_TIME = 1_600_000_000.0


# --- Synthetic Febus files


def expected_value(block, sample, channel, samples_per_interval):
    """
    The value written at a block, sample and channel of test files.

    The value is (continuous sample index) * 1000 + channel so, once the
    overlaps are removed, each column is a steady ramp.
    """
    return (block * samples_per_interval + sample) * 1000 + channel


def write_febus_file(
    path,
    version: str | None = None,
    nblocks: int = 5,
    nchannels: int = 20,
    dt_ms: float = 10.0,
    block_rate: float = 1000.0,
    overlap: float | None = None,
    data_name: str | None = None,
    strain: bool = False,
    dx: float = 1.0,
    x0: float = 0.0,
    channel_start: int = 0,
    nsamples: int | None = None,
    pulse_rate: float | None = None,
    extra_zone_attrs: dict | None = None,
    extra_zones: tuple[str, ...] = (),
    extra_sources: tuple[str, ...] = (),
):
    """
    Write a small Febus-like file.

    The data array is written with shape (block, sample, channel), which is
    how h5py shows files written by the instrument.
    """
    is_v2 = version is not None and parse_version(version) >= parse_version(
        SCHEMA_V2_VERSION
    )
    overlap = (80.0 if is_v2 else 100.0) if overlap is None else overlap
    block_interval = 1000 / block_rate
    block_length = (100 + overlap) * 10 / block_rate if is_v2 else 2000 / block_rate
    dt = dt_ms / 1000
    nsamples = int(round(block_length / dt)) if nsamples is None else nsamples
    per_interval = int(round(block_interval / dt))
    # Default pulse rate makes WholeExtent consistent with the block length.
    pulse_rate = nsamples / block_length if pulse_rate is None else pulse_rate
    if data_name is None:
        if is_v2:
            data_name = "Strain [nStrain]" if strain else "Strain Rate [nStrain|s]"
        else:
            data_name = "Strain" if strain else "StrainRate"
    b, s, c = np.meshgrid(
        np.arange(nblocks), np.arange(nsamples), np.arange(nchannels), indexing="ij"
    )
    data = expected_value(b, s, c, per_interval).astype(np.float32)
    extent = np.array(
        [channel_start, channel_start + nchannels - 1, 0, nsamples - 1], dtype=np.int32
    )
    rate_scale = 1_000 if is_v2 else 1_000_000
    with h5py.File(path, "w") as fi:
        sensor = fi.create_group("fa1-22070037")
        source = sensor.create_group("Source1")
        source.attrs["AmpliPower"] = 25
        source.attrs["Hostname"] = "fa1-22070037"
        source.attrs["WholeExtent"] = extent
        source.attrs["SamplingRate"] = int(round(rate_scale / dt))
        if version is not None:
            source.attrs["Version"] = version
        for name in extra_sources:
            sensor.create_group(name)
        times = START_TIME + np.arange(nblocks) * block_interval
        source.create_dataset("time", data=times)
        zone = source.create_group("Zone1")
        zone.attrs["SamplingRes"] = np.array([40.0])
        zone.attrs["BlockRate"] = np.array([block_rate])
        zone.attrs["PulseRateFreq"] = np.array([pulse_rate * 1000])
        zone.attrs["DataDomain"] = np.array([1.0])
        zone.attrs["Extent"] = extent
        zone.attrs["SamplingRate"] = np.array([rate_scale / dt])
        zone.attrs["DerivationTime"] = np.array([5.0])
        zone.attrs["Origin"] = np.array([x0, 0.0])
        zone.attrs["Spacing"] = np.array([dx, dt_ms])
        zone.attrs["GaugeLength"] = np.array([10.0])
        if is_v2:
            zone.attrs["BlockOverlap"] = np.array([overlap])
        for key, value in (extra_zone_attrs or {}).items():
            zone.attrs[key] = value
        zone.create_dataset(data_name, data=data)
        for name in extra_zones:
            source.create_group(name)
    return path


@pytest.fixture(scope="session")
def febus_file_factory(tmp_path_factory):
    """Return a function which writes a Febus file and returns its path."""
    counter = iter(range(1_000_000))

    def _make(**kwargs):
        path = tmp_path_factory.mktemp("febus") / f"febus_{next(counter)}.h5"
        return write_febus_file(path, **kwargs)

    return _make


@pytest.fixture(scope="session")
def febus_v1_path(febus_file_factory):
    """A version 1 file (no Version attribute) of strain rate."""
    return febus_file_factory()


@pytest.fixture(scope="session")
def febus_v1_tagged_path(febus_file_factory):
    """The same file as febus_v1_path but with an explicit Version."""
    return febus_file_factory(version="1.0.0")


@pytest.fixture(scope="session")
def febus_v2_path(febus_file_factory):
    """A version 2.3.21 file with 80% overlap and 0.5 Hz block rate."""
    return febus_file_factory(version="2.3.21", block_rate=500.0, overlap=80.0)


@pytest.fixture(scope="session")
def febus_500_channel_path(febus_file_factory):
    """A file with 500 channels."""
    return febus_file_factory(nchannels=500, nblocks=2, dt_ms=50.0)


@pytest.fixture(scope="session")
def start_time():
    """The start of the first block of the test files, as datetime64."""
    from febustools.utils.time import to_datetime64

    return to_datetime64(START_TIME)
