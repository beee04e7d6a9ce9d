"""Domain Port(s) for Terrain I/O.

Defines interfaces (Protocols) that the grid entity and infrastructure adapters
must implement. No concrete I/O here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, TextIO

import numpy as np
from numpy.typing import NDArray

from .value_objects import GridHeader, ParseOptions, ParseSummary


class EsriGrid(Protocol):
    """Capability set of an elevation grid read from an Esri ASCII file.

    The header scalars are plain read/write attributes; setters coerce type
    only. ``min_height``/``max_height`` are None until a real (non-NoData)
    sample has been written.
    """

    ncols: int
    nrows: int
    xllcorner: float
    yllcorner: float
    cellsize: float
    nodata_value: float

    @property
    def min_height(self) -> float | None:
        """Smallest real sample written so far (the floor)."""
        ...

    @property
    def max_height(self) -> float | None:
        """Biggest real sample written so far (the ceiling)."""
        ...

    @property
    def header(self) -> GridHeader:
        """Snapshot of the six header fields."""
        ...

    def allocate(self) -> None:
        """Create a zero-filled nrows x ncols matrix and reset the extrema."""
        ...

    def height(self, row: int, col: int) -> float:
        """Return the height at the intersection of a row and column."""
        ...

    def set_height(self, row: int, col: int, height: float) -> None:
        """Set the height at a cell, updating the extrema."""
        ...

    def heights(self) -> NDArray[np.float32]:
        """Return a read-only copy of the sample matrix."""
        ...

    def read(
        self, source: TextIO, options: ParseOptions | None = None
    ) -> ParseSummary:
        """Populate the grid from an Esri ASCII text stream."""
        ...


class GridRepository(Protocol):
    """Port for obtaining elevation grids from external sources.

    Implementations live in infrastructure (e.g., the ASCII grid file adapter).
    """

    def load_grid(
        self, file_path: Path | str, options: ParseOptions | None = None
    ) -> EsriGrid:
        """Load a grid file and return a fully parsed EsriGrid."""
        ...
