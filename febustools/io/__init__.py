"""
Support for the Febus format.

This is used by the Febus A1 DAS interrogator.
"""
from __future__ import annotations
from .core import get_febus_version, read_hdf5, read_header
