"""Custom febustools exceptions and warnings."""

from __future__ import annotations


class FebusError(Exception):
    """Base class for febustools errors."""


class ParameterError(ValueError, FebusError):
    """Raised when something is wrong with an input parameter."""


class InvalidFebusFileError(IOError, FebusError):
    """Raised when a file does not have the expected Febus layout."""


class FebusSchemaError(KeyError, FebusError):
    """Raised when no known dataset exists in a zone for the file's schema."""


class BlockGeometryError(ValueError, FebusError):
    """Raised when the blocks of a file cannot be tiled without gaps."""


class AssemblyError(AssertionError, FebusError):
    """Raised when the assembled data don't have the expected shape."""


class TimeError(ValueError, FebusError):
    """Raised when something is wrong with a time value."""


# --- Warnings


class FebusWarning(UserWarning):
    """Base class for febustools warnings."""


class EmptySelectionWarning(FebusWarning):
    """Issued when a time or distance window selects no data."""


class BlockRangeWarning(FebusWarning):
    """Issued when requested block indices fall outside of the file."""


class VersionWarning(FebusWarning):
    """Issued when a file version is outside the known range."""


class MetadataConsistencyWarning(FebusWarning):
    """Issued when file attributes disagree with each other."""
