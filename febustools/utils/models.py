"""Utilities for models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated

import numpy as np
from pydantic import BaseModel, ConfigDict, PlainSerializer, PlainValidator

from febustools.compat import array, is_array
from febustools.utils.mapping import FrozenDict
from febustools.utils.misc import _all_null, all_close

# --- A list of custom types with appropriate serialization/deserialization
# these can just be use with pydantic type-hints.

frozen_dict_validator = PlainValidator(lambda x: FrozenDict(x))
frozen_dict_serializer = PlainSerializer(lambda x: dict(x))

ArrayLike = Annotated[
    np.ndarray,
    PlainValidator(array),
]

IntTuple = Annotated[
    tuple[int, ...],
    PlainValidator(lambda x: tuple(int(i) for i in np.atleast_1d(x))),
]

FloatTuple = Annotated[
    tuple[float, ...],
    PlainValidator(lambda x: tuple(float(i) for i in np.atleast_1d(x))),
]

FrozenDictType = Annotated[
    FrozenDict,
    frozen_dict_validator,
    frozen_dict_serializer,
]


def sensible_model_equals(
    self: BaseModel | Mapping, other: BaseModel | Mapping
) -> bool:
    """Custom equality to not compare private attrs and handle numpy arrays."""
    d1 = self.model_dump() if hasattr(self, "model_dump") else self
    d2 = other.model_dump() if hasattr(other, "model_dump") else other
    if not isinstance(d2, Mapping) or not set(d1) == set(d2):
        return False
    for name in set(x for x in d1 if not x.startswith("_")):
        val1, val2 = d1[name], d2[name]
        if is_array(val1) or is_array(val2):
            if not all_close(val1, val2):
                return False
        elif isinstance(val1, Mapping) and isinstance(val2, Mapping):
            if not sensible_model_equals(val1, val2):
                return False
        elif val1 != val2 and not (_all_null(val1) and _all_null(val2)):
            return False
    return True


class FebusBaseModel(BaseModel):
    """A base model with sensible configurations."""

    model_config = ConfigDict(
        extra="ignore",
        validate_assignment=True,
        frozen=True,
        validate_default=True,
        arbitrary_types_allowed=True,
    )

    __eq__ = sensible_model_equals
