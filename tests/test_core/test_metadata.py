"""Tests for normalizing Febus attributes."""

from __future__ import annotations

import warnings

import numpy as np
import pytest

from febustools.core.metadata import (
    NormalizedMetadata,
    check_consistency,
    normalize_attributes,
)
from febustools.core.schema import SchemaV1, SchemaV2
from febustools.exceptions import MetadataConsistencyWarning


@pytest.fixture()
def raw_attrs():
    """Raw zone attributes as they would be read from a v1 file."""
    return {
        "SamplingRes": np.array([40.0]),
        "BlockRate": np.array([1000.0]),
        "PulseRateFreq": np.array([100_000.0]),
        "DataDomain": np.array([1.0]),
        "Extent": np.array([0, 19, 0, 199]),
        "SamplingRate": np.array([100_000_000.0]),
        "DerivationTime": np.array([5.0]),
        "Origin": np.array([10.0, -2.0]),
        "Spacing": np.array([2.0, 10.0]),
        "GaugeLength": np.array([10.0]),
        "Comment": np.array([b"a", b"b"]),
    }


class TestNormalizeAttributes:
    """Tests for converting raw attributes to metadata."""

    @pytest.fixture()
    def metadata(self, raw_attrs):
        """Normalized v1 metadata."""
        source = {"WholeExtent": np.array([0, 19, 0, 199])}
        return normalize_attributes(raw_attrs, SchemaV1(), source_attrs=source)

    def test_units(self, metadata):
        """Each attribute should be converted to SI units."""
        assert metadata.sampling_res == pytest.approx(0.4)
        assert metadata.block_rate == pytest.approx(1.0)
        assert metadata.pulse_rate_freq == pytest.approx(100.0)
        assert metadata.sampling_rate == pytest.approx(100.0)
        assert metadata.derivation_time == pytest.approx(0.005)
        assert metadata.sampling_interval == pytest.approx(0.01)

    def test_v1_block_length(self, metadata):
        """v1 blocks are twice the block interval."""
        assert metadata.block_length == pytest.approx(2.0)
        assert metadata.block_interval == pytest.approx(1.0)
        assert metadata.block_overlap == 100.0

    def test_integers(self, metadata):
        """Extent and friends should be ints."""
        assert metadata.extent == (0, 19, 0, 199)
        assert all(isinstance(x, int) for x in metadata.extent)
        assert metadata.whole_extent == (0, 19, 0, 199)
        assert metadata.data_domain == (1,)
        assert metadata.nsamples_per_block == 200

    def test_pairs(self, metadata):
        """Origin and spacing are kept as pairs of floats."""
        assert metadata.origin == (10.0, -2.0)
        assert metadata.spacing == (2.0, 10.0)

    def test_unknown_passed_through(self, metadata):
        """Attributes without a rule end up in other."""
        assert metadata.other["GaugeLength"] == 10.0
        assert metadata.other["Comment"] == ("a", "b")

    def test_v2_block_length(self, raw_attrs):
        """v2 block length depends on the overlap."""
        raw_attrs.update(BlockRate=np.array([500.0]), BlockOverlap=np.array([80.0]))
        raw_attrs["SamplingRate"] = np.array([100_000.0])
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", MetadataConsistencyWarning)
            metadata = normalize_attributes(raw_attrs, SchemaV2(version="2.3.21"))
        assert metadata.block_length == pytest.approx(3.6)
        assert metadata.block_interval == pytest.approx(2.0)
        assert metadata.block_overlap == 80.0
        assert metadata.sampling_rate == pytest.approx(100.0)
        assert metadata.file_version == "2.3.21"

    def test_kwargs(self, raw_attrs):
        """Extra keywords are set on the metadata."""
        out = normalize_attributes(raw_attrs, data_type="strain [nstrain]", zone="Z")
        assert out.data_type == "strain [nstrain]"
        assert out.zone == "Z"

    def test_immutable(self, metadata):
        """Metadata can't be changed after creation."""
        with pytest.raises(ValueError):
            metadata.block_rate = 12

    def test_independent_of_key_order(self, raw_attrs):
        """The order of the raw attributes doesn't matter."""
        reversed_attrs = dict(reversed(list(raw_attrs.items())))
        assert normalize_attributes(raw_attrs) == normalize_attributes(reversed_attrs)


class TestConsistency:
    """Tests for checking samples per block."""

    def test_mismatch_warns(self, raw_attrs):
        """A pulse rate which disagrees with WholeExtent warns."""
        raw_attrs["PulseRateFreq"] = np.array([2_000_000.0])
        source = {"WholeExtent": np.array([0, 19, 0, 199])}
        with pytest.warns(MetadataConsistencyWarning, match="WholeExtent"):
            out = normalize_attributes(raw_attrs, source_attrs=source)
        assert out.nsamples_per_block == 200

    def test_raise(self):
        """The check can be made to raise."""
        metadata = NormalizedMetadata(
            block_length=2.0, pulse_rate_freq=10.0, nsamples_per_block=200
        )
        with pytest.raises(ValueError, match="WholeExtent"):
            check_consistency(metadata, behavior="raise")

    def test_missing_values_skip(self):
        """Nothing happens if the needed values are absent."""
        check_consistency(NormalizedMetadata(), behavior="raise")


class TestDisplay:
    """Tests for displaying metadata."""

    def test_str(self, raw_attrs):
        """The string should include field names and other keys."""
        out = str(normalize_attributes(raw_attrs))
        assert "block_length" in out
        assert "GaugeLength" in out
