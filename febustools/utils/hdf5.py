"""
Utilities for working with HDF5 files.

h5py should only be imported in this module (and the tests) in case we
need to switch out the hdf5 backend in the future.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from h5py import Group  # noqa (we purposely re-import this other places)
from h5py import File as H5pyFile

from febustools.constants import path_types
from febustools.exceptions import InvalidFebusFileError
from febustools.utils.misc import _maybe_unpack, unbyte


class H5Reader(H5pyFile):
    """A thin wrapper around the h5py File object for reading."""

    mode = "r"
    constructor = H5pyFile

    @classmethod
    def get_handle(cls, resource):
        """Get the File object from various sources."""
        if isinstance(resource, cls | H5pyFile):
            return resource
        try:
            return cls.constructor(resource, mode=cls.mode)
        except TypeError:
            msg = f"Couldn't get handle from {resource} using {cls}"
            raise NotImplementedError(msg)
        except OSError as e:
            msg = f"Couldn't open {resource} as an HDF5 file: {e}"
            raise InvalidFebusFileError(msg) from e


@contextmanager
def open_h5(resource: path_types | H5pyFile) -> Iterator[H5pyFile]:
    """
    Open an HDF5 file for reading, closing it on exit.

    If an open h5py File is passed it is yielded unchanged and left open
    since the caller owns it.
    """
    handle = H5Reader.get_handle(resource)
    try:
        yield handle
    finally:
        if handle is not resource:
            handle.close()


def get_attr(obj, name, default=None):
    """Get an attribute from an h5py object, unpacked and decoded."""
    if name not in obj.attrs:
        return default
    return unbyte(_maybe_unpack(obj.attrs[name]))


def read_attrs(obj) -> dict:
    """Read all the attributes of an h5py object into a dict."""
    return {unbyte(key): obj.attrs[key] for key in obj.attrs.keys()}

