"""Root pytest configuration for all tests.

`src` and the project root are put on sys.path by the pytest `pythonpath`
setting in pyproject.toml, so tests import `domain.*`, `infrastructure.*`
and `application.*` directly.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from domain.terrain.entities import ElevationGrid
from tests.conftest_utils import EXAMPLE_GRID, get_fixtures_dir, parse_text


@pytest.fixture
def fixtures_dir() -> Path:
    return get_fixtures_dir()


@pytest.fixture
def example_grid() -> ElevationGrid:
    """Parsed 4x6 example grid from the format documentation."""
    grid, _ = parse_text(EXAMPLE_GRID)
    return grid


@pytest.fixture
def allocated_grid() -> ElevationGrid:
    """Empty 3x2 grid (3 columns, 2 rows) with NoData -9999."""
    grid = ElevationGrid()
    grid.ncols = 3
    grid.nrows = 2
    grid.nodata_value = -9999
    grid.allocate()
    return grid


@pytest.fixture(autouse=True)
def _capture_terrain_warnings(caplog: pytest.LogCaptureFixture) -> None:
    """Capture WARNING and above from all loggers by default."""
    caplog.set_level(logging.WARNING)
