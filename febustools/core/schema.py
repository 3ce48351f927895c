"""
Febus file schema versions.

Febus files changed layout at version 2.3.13. Earlier files always have
100% block overlap and name their data "Strain" or "StrainRate", later files
store the overlap explicitly in the "BlockOverlap" attribute and use
"Strain [nStrain]" or "Strain Rate [nStrain|s]". The version is resolved
once and the matching schema object is passed to everything downstream.
"""

from __future__ import annotations

import re
import warnings
from typing import ClassVar

import numpy as np
from packaging.version import Version

from febustools.constants import (
    DEFAULT_FILE_VERSION,
    MAX_KNOWN_VERSION,
    MICRO,
    MILLI,
    MIN_KNOWN_VERSION,
    SCHEMA_V2_VERSION,
    STRAIN,
    STRAIN_RATE,
)
from febustools.exceptions import FebusSchemaError, VersionWarning
from febustools.utils.misc import _maybe_unpack, unbyte
from febustools.utils.models import FebusBaseModel

_LEADING_VERSION = re.compile(r"\d+(\.\d+){0,2}")


class FebusSchema(FebusBaseModel):
    """
    Base class for the Febus file schemas.

    Attributes
    ----------
    version
        The version string the schema was resolved from.
    """

    name: ClassVar[str] = ""
    strain_name: ClassVar[str] = ""
    strain_rate_name: ClassVar[str] = ""
    # True if the BlockOverlap attribute is read from the file.
    explicit_overlap: ClassVar[bool] = False
    # Divide the raw SamplingRate attribute by this to get Hz.
    sampling_rate_scale: ClassVar[float] = MILLI

    version: str = DEFAULT_FILE_VERSION

    @property
    def dataset_names(self) -> dict[str, str]:
        """Return a dict of {dataset_name: data_type} for this schema."""
        return {self.strain_name: STRAIN, self.strain_rate_name: STRAIN_RATE}

    def find_dataset(self, zone) -> tuple[str, str]:
        """
        Return the name and data type of the data array in a zone.

        Raises
        ------
        FebusSchemaError if none of the schema's dataset names are found.
        """
        keys = set(zone.keys())
        for name, data_type in self.dataset_names.items():
            if name in keys:
                return name, data_type
        msg = (
            f"Zone {getattr(zone, 'name', zone)} has none of the datasets "
            f"{list(self.dataset_names)} expected for file version "
            f"{self.version}, found {sorted(keys)}"
        )
        raise FebusSchemaError(msg)

    def get_overlap(self, zone_attrs) -> float:
        """Return the overlap of consecutive blocks in percent."""
        return 100.0

    def get_block_length(self, block_rate_mhz: float, overlap: float) -> float:
        """Return the duration of one block (s) from the raw block rate (mHz)."""
        raise NotImplementedError


class SchemaV1(FebusSchema):
    """Files before 2.3.13; full overlap, original dataset names."""

    name: ClassVar[str] = "v1"
    strain_name: ClassVar[str] = "Strain"
    strain_rate_name: ClassVar[str] = "StrainRate"
    explicit_overlap: ClassVar[bool] = False
    sampling_rate_scale: ClassVar[float] = MICRO

    def get_block_length(self, block_rate_mhz: float, overlap: float) -> float:
        # Each block is twice the block interval.
        return 2 * MILLI / block_rate_mhz


class SchemaV2(FebusSchema):
    """Files from 2.3.13 on; explicit BlockOverlap, renamed datasets."""

    name: ClassVar[str] = "v2"
    strain_name: ClassVar[str] = "Strain [nStrain]"
    strain_rate_name: ClassVar[str] = "Strain Rate [nStrain|s]"
    explicit_overlap: ClassVar[bool] = True
    sampling_rate_scale: ClassVar[float] = MILLI

    def get_overlap(self, zone_attrs) -> float:
        if "BlockOverlap" not in zone_attrs:
            msg = (
                f"File version {self.version} should have a BlockOverlap "
                f"attribute but none was found; assuming 100%."
            )
            warnings.warn(msg, VersionWarning, stacklevel=2)
            return 100.0
        return float(_maybe_unpack(np.asarray(zone_attrs["BlockOverlap"])))

    def get_block_length(self, block_rate_mhz: float, overlap: float) -> float:
        return (100 + overlap) * 10 / block_rate_mhz


def parse_version(version_str) -> Version:
    """
    Parse a Febus version string, never raising.

    Only the leading release numbers are kept; pre-release, build or other
    trailing tags are discarded so "2.3.13-beta" is treated as 2.3.13.
    Anything which can't be understood issues a warning and is treated as
    the default version.
    """
    if isinstance(version_str, Version):
        return Version(version_str.base_version)
    version_str = str(unbyte(version_str)).strip()
    if match := _LEADING_VERSION.search(version_str):
        return Version(match.group(0))
    msg = (
        f"Could not parse Febus file version {version_str!r}, "
        f"treating it as {DEFAULT_FILE_VERSION}"
    )
    warnings.warn(msg, VersionWarning, stacklevel=2)
    return Version(DEFAULT_FILE_VERSION)


def resolve_schema(file_version=None, override=None) -> FebusSchema:
    """
    Get the schema for a Febus file.

    Parameters
    ----------
    file_version
        The Version attribute of the source node, or None if it is absent.
    override
        If not None, use this version instead of the one in the file.
    """
    raw = override if override is not None else file_version
    raw = DEFAULT_FILE_VERSION if raw is None else raw
    version = parse_version(raw)
    if not Version(MIN_KNOWN_VERSION) <= version < Version(MAX_KNOWN_VERSION):
        msg = (
            f"Febus file version {version} is outside the known range "
            f"[{MIN_KNOWN_VERSION}, {MAX_KNOWN_VERSION}); reading it anyway."
        )
        warnings.warn(msg, VersionWarning, stacklevel=2)
    cls = SchemaV2 if version >= Version(SCHEMA_V2_VERSION) else SchemaV1
    return cls(version=str(version))
