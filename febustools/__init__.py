"""FebusTools - Read strain data from Febus A1 DAS files."""
from __future__ import annotations

from febustools.core.data import FebusData
from febustools.core.metadata import NormalizedMetadata
from febustools.core.schema import SchemaV1, SchemaV2, resolve_schema
from febustools.io.core import get_febus_version, read_hdf5, read_header
from febustools.utils.time import to_datetime64, to_timedelta64
from febustools.version import __last_version__, __version__
