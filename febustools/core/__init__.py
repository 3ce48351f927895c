"""Core components for reading Febus files."""
from __future__ import annotations

from febustools.core.schema import FebusSchema, SchemaV1, SchemaV2, resolve_schema
from febustools.core.metadata import NormalizedMetadata, normalize_attributes
from febustools.core.windows import BlockIndexRange, ChannelIndexRange
from febustools.core.geometry import BlockGeometry, resolve_block_geometry
from febustools.core.assembler import (
    DirectStridedRead,
    ReadThenDecimate,
    assemble_data,
    get_read_strategy,
)
from febustools.core.data import FebusData
