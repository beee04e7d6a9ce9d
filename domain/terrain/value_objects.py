"""Terrain Bounded Context - Value Objects.

Immutable data structures describing an Esri ASCII grid and the options used to
read and render it. All validation occurs at construction time via Pydantic.
"""

from __future__ import annotations

from affine import Affine
from pydantic import BaseModel, ConfigDict, Field, model_validator

# ---------------------------------------------------------------------------
# Numeric Constants
# ---------------------------------------------------------------------------
FLOAT32_BYTES = 4  # Samples are held as float32
MAX_SHADES = 256  # Distinct grey levels in an 8-bit image


class GridExtent(BaseModel):
    """Map extent of a grid in the grid's own units (Value Object).

    No CRS is attached: Esri ASCII grids carry none, and reprojection is out
    of scope.
    """

    min_x: float  # Western edge (xllcorner)
    min_y: float  # Southern edge (yllcorner)
    max_x: float  # Eastern edge
    max_y: float  # Northern edge

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_ordering(self) -> "GridExtent":
        if not (self.min_x < self.max_x):
            raise ValueError(
                f"Invalid x ordering: min_x={self.min_x} >= max_x={self.max_x}"
            )
        if not (self.min_y < self.max_y):
            raise ValueError(
                f"Invalid y ordering: min_y={self.min_y} >= max_y={self.max_y}"
            )
        return self

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


class GridHeader(BaseModel):
    """The six header fields of an Esri ASCII grid (Value Object).

    Invariants:
        GH-1: ncols > 0 and nrows > 0
        GH-2: cellsize > 0
    """

    ncols: int = Field(gt=0)
    nrows: int = Field(gt=0)
    xllcorner: float  # Easting of the bottom-left corner
    yllcorner: float  # Northing of the bottom-left corner
    cellsize: float = Field(gt=0)
    nodata_value: float

    model_config = ConfigDict(frozen=True)

    @property
    def extent(self) -> GridExtent:
        """Return the map extent covered by the grid."""
        return GridExtent(
            min_x=self.xllcorner,
            min_y=self.yllcorner,
            max_x=self.xllcorner + self.ncols * self.cellsize,
            max_y=self.yllcorner + self.nrows * self.cellsize,
        )

    @property
    def transform(self) -> Affine:
        """Affine transform from (col, row) to map coordinates.

        Origin is the top-left corner of row 0 (north-up), so row indices grow
        southwards like the sample matrix.
        """
        top = self.yllcorner + self.nrows * self.cellsize
        return Affine.translation(self.xllcorner, top) @ Affine.scale(
            self.cellsize, -self.cellsize
        )


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
class ParseOptions(BaseModel):
    """Options passed explicitly into the parse operation.

    ``verbose`` only changes how much is logged, never the parsed result.
    ``max_bytes`` is an optional memory budget for the float32 sample matrix.
    """

    verbose: bool = False
    max_bytes: int | None = Field(default=None, gt=0)

    model_config = ConfigDict(frozen=True)


class RenderOptions(BaseModel):
    """Options for rendering a grid as a grayscale image.

    ``floor`` and ``ceiling`` override the grid's own extrema when given.
    """

    floor: float | None = None
    ceiling: float | None = None
    shades: int = Field(default=MAX_SHADES, ge=2, le=MAX_SHADES)
    nodata_shade: int = Field(default=255, ge=0, le=255)
    world_file: bool = False

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_range(self) -> "RenderOptions":
        if (
            self.floor is not None
            and self.ceiling is not None
            and self.floor > self.ceiling
        ):
            raise ValueError(
                f"floor ({self.floor}) must not exceed ceiling ({self.ceiling})"
            )
        return self


# ---------------------------------------------------------------------------
# ParseSummary
# ---------------------------------------------------------------------------
class ParseSummary(BaseModel):
    """Outcome of a successful parse (Value Object).

    A successful parse is best-effort: rows listed in ``skipped_rows`` and rows
    past ``rows_read`` keep their zero default.

    Invariants:
        PS-1: 0 <= rows_read <= rows_expected
        PS-2: every skipped row index is < rows_read
    """

    rows_expected: int = Field(ge=0)
    rows_read: int = Field(ge=0)
    skipped_rows: tuple[int, ...] = ()
    trailing_content: bool = False

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_counts(self) -> "ParseSummary":
        if self.rows_read > self.rows_expected:
            raise ValueError(
                f"rows_read ({self.rows_read}) exceeds rows_expected "
                f"({self.rows_expected})"
            )
        if any(r < 0 or r >= self.rows_read for r in self.skipped_rows):
            raise ValueError("skipped_rows must index rows that were read")
        return self

    def is_complete(self) -> bool:
        """True if every declared row was read and none was skipped."""
        return self.rows_read == self.rows_expected and not self.skipped_rows
