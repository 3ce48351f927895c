"""
A few mappings that might be useful.

We can't simply use types.MappingProxyType because it can't be pickled.
"""
import collections.abc


class FrozenDict(collections.abc.Mapping):
    """
    An immutable wrapper around dictionaries that implements the complete
    :py:class:`collections.Mapping` interface.

    Used for the pass-through attributes of a Febus zone, which must not
    change after the metadata are built.

    Notes
    -----
    Changes in the original dict are not reflected in the frozen dict so
    that the hash doesn't break.
    """

    def __init__(self, *args, **kwargs):
        self._dict = dict(*args, **kwargs)
        self._hash = None

    def __getitem__(self, key):
        return self._dict[key]

    def __contains__(self, key):
        return key in self._dict

    def __iter__(self):
        return iter(self._dict)

    def __len__(self):
        return len(self._dict)

    def __repr__(self):
        return "<%s %r>" % (self.__class__.__name__, self._dict)

    def _hash_contents(self):
        """Returns a hash of the dictionary, arrays are hashed by their bytes."""
        out = 0
        for key, value in self._dict.items():
            value = value.tobytes() if hasattr(value, "tobytes") else value
            out ^= hash((key, value))
        return out

    def __hash__(self):
        if self._hash is None:
            self._hash = self._hash_contents()
        return self._hash
