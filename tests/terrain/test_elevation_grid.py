"""Tests for the ElevationGrid entity: accessors, set_height and extrema.

Grids are built directly in memory - no parsing or file I/O.
"""

from __future__ import annotations

import numpy as np
import pytest

from domain.terrain.entities import ElevationGrid
from domain.terrain.repositories import EsriGrid


def snapshot(grid: ElevationGrid) -> tuple[np.ndarray, float | None, float | None]:
    return grid.heights(), grid.min_height, grid.max_height


# ---------------------------------------------------------------------------
# Construction and scalars
# ---------------------------------------------------------------------------
def test_new_grid_is_empty():
    grid = ElevationGrid()

    assert grid.ncols == 0
    assert grid.nrows == 0
    assert grid.min_height is None
    assert grid.max_height is None
    assert grid.heights().shape == (0, 0)


def test_setters_coerce_type():
    grid = ElevationGrid()
    grid.ncols = "4"
    grid.nrows = 6.0
    grid.xllcorner = 1
    grid.yllcorner = "2.5"
    grid.cellsize = 50
    grid.nodata_value = -9999

    assert grid.ncols == 4 and isinstance(grid.ncols, int)
    assert grid.nrows == 6 and isinstance(grid.nrows, int)
    assert grid.xllcorner == 1.0 and isinstance(grid.xllcorner, float)
    assert grid.yllcorner == 2.5
    assert grid.cellsize == 50.0
    assert grid.nodata_value == -9999.0


def test_satisfies_esri_grid_protocol():
    def takes_grid(grid: EsriGrid) -> int:
        return grid.ncols

    assert takes_grid(ElevationGrid()) == 0


def test_allocate_zero_fills_and_resets_extrema(allocated_grid):
    allocated_grid.set_height(0, 0, 12.5)
    assert allocated_grid.max_height == 12.5

    allocated_grid.allocate()

    assert allocated_grid.heights().shape == (2, 3)
    assert not allocated_grid.heights().any()
    assert allocated_grid.min_height is None
    assert allocated_grid.max_height is None


# ---------------------------------------------------------------------------
# set_height and extrema
# ---------------------------------------------------------------------------
def test_first_real_sample_sets_both_extrema(allocated_grid):
    allocated_grid.set_height(1, 2, 7.0)

    assert allocated_grid.height(1, 2) == 7.0
    assert allocated_grid.min_height == 7.0
    assert allocated_grid.max_height == 7.0


def test_extrema_widen_only_when_more_extreme(allocated_grid):
    for col, value in enumerate([5.0, -3.0, 12.0]):
        allocated_grid.set_height(0, col, value)
    allocated_grid.set_height(1, 0, 4.0)

    assert allocated_grid.min_height == -3.0
    assert allocated_grid.max_height == 12.0


def test_nodata_sample_does_not_change_extrema(allocated_grid):
    allocated_grid.set_height(0, 0, 10.0)
    allocated_grid.set_height(0, 1, -9999.0)

    assert allocated_grid.height(0, 1) == -9999.0
    assert allocated_grid.min_height == 10.0
    assert allocated_grid.max_height == 10.0


def test_nodata_first_leaves_extrema_unset(allocated_grid):
    allocated_grid.set_height(0, 0, -9999)

    assert allocated_grid.min_height is None
    assert allocated_grid.max_height is None


def test_nodata_exclusion_is_exact_equality(allocated_grid):
    allocated_grid.set_height(0, 0, -9998.5)

    assert allocated_grid.min_height == -9998.5


@pytest.mark.parametrize(
    "row,col",
    [(2, 0), (0, 3), (5, 5), (-1, 0), (0, -1)],
)
def test_out_of_range_write_is_dropped(allocated_grid, caplog, row, col):
    allocated_grid.set_height(0, 0, 1.0)
    before = snapshot(allocated_grid)

    allocated_grid.set_height(row, col, 500.0)

    after = snapshot(allocated_grid)
    np.testing.assert_array_equal(before[0], after[0])
    assert before[1:] == after[1:]
    assert "out of range" in caplog.text


def test_write_before_allocate_is_dropped(caplog):
    grid = ElevationGrid()
    grid.ncols = 2
    grid.nrows = 2

    grid.set_height(0, 0, 1.0)

    assert grid.max_height is None
    assert "out of range" in caplog.text


def test_extrema_bound_every_real_sample():
    rng = np.random.default_rng(7)
    grid = ElevationGrid()
    grid.ncols, grid.nrows, grid.nodata_value = 8, 5, -9999
    grid.allocate()
    values = rng.uniform(-100, 100, size=(5, 8)).astype(np.float32)
    values[1, 1] = -9999
    for (row, col), value in np.ndenumerate(values):
        grid.set_height(row, col, float(value))

    real = values[values != -9999]
    assert grid.min_height == float(real.min())
    assert grid.max_height == float(real.max())
    assert grid.min_height <= grid.max_height


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("row,col", [(2, 0), (0, 3), (-1, 0), (0, -1)])
def test_out_of_range_read_raises(allocated_grid, row, col):
    with pytest.raises(IndexError):
        allocated_grid.height(row, col)


def test_heights_is_read_only_copy(allocated_grid):
    data = allocated_grid.heights()

    with pytest.raises(ValueError):
        data[0, 0] = 1.0
    allocated_grid.set_height(0, 0, 3.0)
    assert data[0, 0] == 0.0


def test_nodata_mask(example_grid):
    mask = example_grid.nodata_mask()

    assert mask.sum() == 4
    assert mask[0, 0] and mask[5, 3]
    assert not mask[5, 0]


def test_header_snapshot(example_grid):
    header = example_grid.header

    assert header.ncols == 4
    assert header.nrows == 6
    assert header.cellsize == 50.0
    assert header.nodata_value == -9999.0


def test_header_of_empty_grid_is_invalid():
    with pytest.raises(ValueError):
        ElevationGrid().header


def test_cell_center_bottom_left_and_top_right(example_grid):
    assert example_grid.cell_center(5, 0) == (25.0, 25.0)
    assert example_grid.cell_center(0, 3) == (175.0, 275.0)


def test_cell_center_out_of_range(example_grid):
    with pytest.raises(IndexError):
        example_grid.cell_center(6, 0)


def test_repr_mentions_dimensions(example_grid):
    assert "ncols=4" in repr(example_grid)
    assert "nrows=6" in repr(example_grid)
