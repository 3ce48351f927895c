"""The FebusData model returned by the reader."""

from __future__ import annotations

import numpy as np
from pydantic import Field
from rich.text import Text

from febustools.constants import febus_styles
from febustools.core.metadata import NormalizedMetadata
from febustools.utils.display import array_to_text, range_to_text
from febustools.utils.models import ArrayLike, FebusBaseModel


class FebusData(FebusBaseModel):
    """
    Data read from a Febus file.

    Attributes
    ----------
    data
        A 2D array; rows are time samples, columns are channels.
    dates
        The absolute time (datetime64) of each row, empty if no data
        were read.
    times
        The time (s) of each row relative to the first row.
    distances
        The distance (m) of each column.
    metadata
        The normalized metadata of the zone the data came from.
    """

    data: ArrayLike = Field(default_factory=lambda: np.empty((0, 0), np.float32))
    dates: ArrayLike = Field(
        default_factory=lambda: np.empty(0, dtype="datetime64[ns]")
    )
    times: ArrayLike = Field(default_factory=lambda: np.empty(0, dtype=np.float64))
    distances: ArrayLike = Field(
        default_factory=lambda: np.empty(0, dtype=np.float64)
    )
    metadata: NormalizedMetadata = Field(default_factory=NormalizedMetadata)

    @classmethod
    def empty(cls, distances, metadata: NormalizedMetadata):
        """Create FebusData with no data, only distances and metadata."""
        return cls(distances=distances, metadata=metadata)

    @property
    def shape(self) -> tuple[int, ...]:
        return self.data.shape

    @property
    def is_empty(self) -> bool:
        return not self.data.size

    def __rich__(self):
        header = Text("FebusData", style=febus_styles["title"])
        if self.metadata.data_type:
            header += Text(f" ({self.metadata.data_type})")
        line = Text("-" * len(header))
        ranges = Text("\n").join(
            [
                Text("➤ ") + Text("Coordinates", style=febus_styles["header"]),
                range_to_text(self.dates, "dates"),
                range_to_text(self.times, "times", units="s"),
                range_to_text(self.distances, "distances", units="m"),
            ]
        )
        data = array_to_text(self.data)
        meta = self.metadata.__rich__()
        return Text("\n").join([header, line, ranges, data, meta])

    def __str__(self):
        return str(self.__rich__())

    __repr__ = __str__
