"""
Compatibility module for febustools.

Array creation goes through here so the backing array library can be
swapped in a single place.
"""

from __future__ import annotations

import numpy as np


def array(array):
    """Wrapper function for creating 'immutable' arrays."""
    out = np.asarray(array)
    # Setting the write flag to false makes the array immutable unless
    # the flag is switched back.
    out.setflags(write=False)
    return out


def is_array(maybe_array):
    """Determine if an object is array like."""
    return isinstance(maybe_array, np.ndarray)
