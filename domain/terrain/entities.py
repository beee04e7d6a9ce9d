"""Terrain Bounded Context - Entities.

ElevationGrid is the single concrete implementation of the EsriGrid port. It
owns the header scalars, the float32 sample matrix and the running extrema.
"""

from __future__ import annotations

import logging
from typing import TextIO

import numpy as np
from numpy.typing import NDArray

from domain.terrain.services import read_esri_grid
from domain.terrain.value_objects import GridHeader, ParseOptions, ParseSummary

logger = logging.getLogger(__name__)


class ElevationGrid:
    """Mutable elevation grid populated by the Esri ASCII parser.

    Constructed empty: dimensions zero, no matrix, extrema unset. Once parsing
    has finished it is treated as read-only by its collaborators.

    Invariants:
        EG-1: min_height <= max_height whenever both are set
        EG-2: samples equal to nodata_value never change the extrema
        EG-3: out-of-range writes leave matrix and extrema unchanged
    """

    def __init__(self) -> None:
        self._ncols = 0
        self._nrows = 0
        self._xllcorner = 0.0
        self._yllcorner = 0.0
        self._cellsize = 0.0
        self._nodata_value = 0.0
        self._heights: NDArray[np.float32] | None = None
        self._min_height: float | None = None  # None until a real sample is set
        self._max_height: float | None = None

    def __repr__(self) -> str:
        return (
            f"ElevationGrid(ncols={self._ncols}, nrows={self._nrows}, "
            f"floor={self._min_height}, ceiling={self._max_height})"
        )

    # -----------------------------------------------------------------------
    # Header scalars
    # -----------------------------------------------------------------------
    @property
    def ncols(self) -> int:
        return self._ncols

    @ncols.setter
    def ncols(self, ncols: int) -> None:
        self._ncols = int(ncols)

    @property
    def nrows(self) -> int:
        return self._nrows

    @nrows.setter
    def nrows(self, nrows: int) -> None:
        self._nrows = int(nrows)

    @property
    def xllcorner(self) -> float:
        """East component of the map reference of the bottom left cell."""
        return self._xllcorner

    @xllcorner.setter
    def xllcorner(self, xllcorner: float) -> None:
        self._xllcorner = float(xllcorner)

    @property
    def yllcorner(self) -> float:
        """North component of the map reference of the bottom left cell."""
        return self._yllcorner

    @yllcorner.setter
    def yllcorner(self, yllcorner: float) -> None:
        self._yllcorner = float(yllcorner)

    @property
    def cellsize(self) -> float:
        return self._cellsize

    @cellsize.setter
    def cellsize(self, cellsize: float) -> None:
        self._cellsize = float(cellsize)

    @property
    def nodata_value(self) -> float:
        """Height value set where the sensor had no data."""
        return self._nodata_value

    @nodata_value.setter
    def nodata_value(self, nodata_value: float) -> None:
        self._nodata_value = float(nodata_value)

    # -----------------------------------------------------------------------
    # Statistics
    # -----------------------------------------------------------------------
    @property
    def min_height(self) -> float | None:
        """Smallest real height (the floor), None if no real sample yet."""
        return self._min_height

    @property
    def max_height(self) -> float | None:
        """Biggest real height (the ceiling), None if no real sample yet."""
        return self._max_height

    @property
    def header(self) -> GridHeader:
        """Snapshot of the header. Raises ValueError if the header is unset."""
        return GridHeader(
            ncols=self._ncols,
            nrows=self._nrows,
            xllcorner=self._xllcorner,
            yllcorner=self._yllcorner,
            cellsize=self._cellsize,
            nodata_value=self._nodata_value,
        )

    # -----------------------------------------------------------------------
    # Cells
    # -----------------------------------------------------------------------
    def allocate(self) -> None:
        """Create a zero-filled nrows x ncols matrix and reset the extrema."""
        self._heights = np.zeros((self._nrows, self._ncols), dtype=np.float32)
        self._min_height = None
        self._max_height = None

    def _matrix_for(self, row: int, col: int) -> NDArray[np.float32] | None:
        """Return the sample matrix if (row, col) lies inside it, else None."""
        if self._heights is None:
            return None
        nrows, ncols = self._heights.shape
        if 0 <= row < nrows and 0 <= col < ncols:
            return self._heights
        return None

    def height(self, row: int, col: int) -> float:
        """Return the height at the intersection of a row and column.

        Raises:
            IndexError: row or col is outside the grid (negative included).
        """
        heights = self._matrix_for(row, col)
        if heights is None:
            raise IndexError(
                f"height({row},{col}) outside {self._nrows}x{self._ncols} grid"
            )
        return float(heights[row, col])

    def set_height(self, row: int, col: int, height: float) -> None:
        """Set the height at a cell and widen the extrema if needed.

        Out-of-range writes are logged and dropped.
        """
        heights = self._matrix_for(row, col)
        if heights is None:
            logger.warning("set_height(%d,%d) - row or column out of range", row, col)
            return

        stored = np.float32(height)
        heights[row, col] = stored

        # Exact equality at storage precision, no tolerance
        if stored == np.float32(self._nodata_value):
            return

        value = float(stored)
        if self._max_height is None or value > self._max_height:
            self._max_height = value
        if self._min_height is None or value < self._min_height:
            self._min_height = value

    def heights(self) -> NDArray[np.float32]:
        """Return a read-only copy of the sample matrix (nrows x ncols)."""
        if self._heights is None:
            data = np.zeros((0, 0), dtype=np.float32)
        else:
            data = np.array(self._heights, dtype=np.float32, copy=True, order="C")
        data.flags.writeable = False
        return data

    def nodata_mask(self) -> NDArray[np.bool_]:
        """Boolean matrix, True where the sample equals the NoData value."""
        return self.heights() == np.float32(self._nodata_value)

    def cell_center(self, row: int, col: int) -> tuple[float, float]:
        """Map coordinates (x, y) of the centre of a cell."""
        if self._matrix_for(row, col) is None:
            raise IndexError(
                f"cell_center({row},{col}) outside {self._nrows}x{self._ncols} grid"
            )
        x, y = self.header.transform @ (col + 0.5, row + 0.5)
        return float(x), float(y)

    # -----------------------------------------------------------------------
    # Parsing
    # -----------------------------------------------------------------------
    def read(
        self, source: TextIO, options: ParseOptions | None = None
    ) -> ParseSummary:
        """Populate this grid from an Esri ASCII text stream.

        See ``domain.terrain.services.read_esri_grid`` for the error contract.
        """
        return read_esri_grid(self, source, options)
