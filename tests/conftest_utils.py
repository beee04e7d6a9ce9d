"""Shared pytest helpers.

These utilities are used by:
- tests/conftest.py
- tests/gis/*
- tests/terrain/*
"""

from __future__ import annotations

import io
from pathlib import Path

from domain.terrain.entities import ElevationGrid
from domain.terrain.value_objects import ParseOptions, ParseSummary

# The 4 column, 6 row example from the format documentation
EXAMPLE_GRID = """\
ncols         4
nrows         6
xllcorner     0.0
yllcorner     0.0
cellsize      50.0
NODATA_value  -9999
-9999 -9999 5 2
-9999 20 100 36
3 8 35 10
32 42 50 6
88 75 27 9
13 5 1 -9999
"""


def get_fixtures_dir() -> Path:
    """Return path to tests/fixtures/ directory."""
    return Path(__file__).parent / "fixtures"


def make_grid_text(
    rows: list[str],
    ncols: object = 4,
    nrows: object = 6,
    xllcorner: object = "0.0",
    yllcorner: object = "0.0",
    cellsize: object = "50.0",
    nodata: object = "-9999",
) -> str:
    """Build Esri ASCII grid text from header values and data lines."""
    header = [
        f"ncols         {ncols}",
        f"nrows         {nrows}",
        f"xllcorner     {xllcorner}",
        f"yllcorner     {yllcorner}",
        f"cellsize      {cellsize}",
        f"NODATA_value  {nodata}",
    ]
    return "\n".join(header + rows) + "\n"


def parse_text(
    text: str, options: ParseOptions | None = None
) -> tuple[ElevationGrid, ParseSummary]:
    """Parse grid text into a fresh ElevationGrid (no file I/O)."""
    grid = ElevationGrid()
    summary = grid.read(io.StringIO(text), options)
    return grid, summary
