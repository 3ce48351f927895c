"""Constants used throughout febustools."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import numpy as np
import pandas as pd

# Types febustools can convert into time representations
timeable_types = int | float | str | np.datetime64 | pd.Timestamp

# types used to represent paths
path_types = str | Path

# one billion
ONE_BILLION = 1_000_000_000

# Float printing precision
FLOAT_PRECISION = 3

# Options for handling specific warnings
WARN_LEVELS = Literal["warn", "raise", None]

# --- Febus file layout

# Name of the dataset, under each source, holding one timestamp per block.
TIME_DATASET_NAME = "time"

# Version assumed when the source node doesn't carry a Version attribute.
DEFAULT_FILE_VERSION = "1.0.0"

# Files from this version on store BlockOverlap and use the renamed datasets.
SCHEMA_V2_VERSION = "2.3.13"

# Versions outside [MIN_KNOWN_VERSION, MAX_KNOWN_VERSION) issue a warning.
MIN_KNOWN_VERSION = "1.0.0"
MAX_KNOWN_VERSION = "3.0.0"

# Attributes found on every Febus source node, used to identify the format.
FEBUS_SOURCE_ATTRS = frozenset({"AmpliPower", "Hostname", "WholeExtent", "SamplingRate"})

# Output strings for the "data_type" metadata field.
STRAIN = "strain [nstrain]"
STRAIN_RATE = "strain rate [nstrain/s]"

# Decimation strides at or above this value are read directly from the file
# with a strided selection, below it (and above 1) the full channel range
# is read then decimated in memory.
DECIMATE_READ_THRESHOLD = 50

# Unit scale factors for raw attributes.
CM_PER_M = 100
MILLI = 1_000
MICRO = 1_000_000

# Rich styles for displaying febus objects.
febus_styles = dict(
    np_array_threshold=100,  # max number of elements to show in array
    title="bold blue",
    header="bold red",
    keys="grey50",
    units="bright blue",
    ymd="blue",
    hms="green",
    dec="green",
)
