"""Tests for terrain Value Objects (construction-time validation)."""

from __future__ import annotations

import pytest
from affine import Affine
from pydantic import ValidationError

from domain.terrain.value_objects import (
    GridExtent,
    GridHeader,
    ParseOptions,
    ParseSummary,
    RenderOptions,
)


def make_header(**overrides) -> GridHeader:
    fields = dict(
        ncols=4,
        nrows=6,
        xllcorner=1000.0,
        yllcorner=2000.0,
        cellsize=50.0,
        nodata_value=-9999.0,
    )
    fields.update(overrides)
    return GridHeader(**fields)


# ---------------------------------------------------------------------------
# GridHeader / GridExtent
# ---------------------------------------------------------------------------
class TestGridHeader:
    def test_extent(self) -> None:
        extent = make_header().extent

        assert extent == GridExtent(
            min_x=1000.0, min_y=2000.0, max_x=1200.0, max_y=2300.0
        )
        assert extent.width == 200.0
        assert extent.height == 300.0

    def test_transform_maps_corners(self) -> None:
        transform = make_header().transform

        assert isinstance(transform, Affine)
        # Top-left of row 0 and bottom-left of the last row
        assert transform @ (0, 0) == (1000.0, 2300.0)
        assert transform @ (0, 6) == (1000.0, 2000.0)
        assert transform @ (4, 6) == (1200.0, 2000.0)

    @pytest.mark.parametrize(
        "overrides", [{"ncols": 0}, {"nrows": -1}, {"cellsize": 0.0}]
    )
    def test_invalid_header_rejected(self, overrides) -> None:
        with pytest.raises(ValidationError):
            make_header(**overrides)

    def test_frozen(self) -> None:
        header = make_header()
        with pytest.raises(ValidationError):
            header.ncols = 5


class TestGridExtent:
    def test_inverted_x_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid x ordering"):
            GridExtent(min_x=10, min_y=0, max_x=0, max_y=10)

    def test_degenerate_y_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid y ordering"):
            GridExtent(min_x=0, min_y=5, max_x=10, max_y=5)


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------
class TestOptions:
    def test_parse_defaults(self) -> None:
        options = ParseOptions()

        assert options.verbose is False
        assert options.max_bytes is None

    def test_parse_budget_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ParseOptions(max_bytes=0)

    def test_render_defaults(self) -> None:
        options = RenderOptions()

        assert options.shades == 256
        assert options.nodata_shade == 255
        assert options.floor is None and options.ceiling is None

    def test_floor_above_ceiling_rejected(self) -> None:
        with pytest.raises(ValueError, match="must not exceed"):
            RenderOptions(floor=10.0, ceiling=5.0)

    def test_equal_floor_and_ceiling_allowed(self) -> None:
        assert RenderOptions(floor=5.0, ceiling=5.0).floor == 5.0

    @pytest.mark.parametrize("shades", [1, 257])
    def test_shades_range(self, shades) -> None:
        with pytest.raises(ValidationError):
            RenderOptions(shades=shades)


# ---------------------------------------------------------------------------
# ParseSummary
# ---------------------------------------------------------------------------
class TestParseSummary:
    def test_complete(self) -> None:
        assert ParseSummary(rows_expected=6, rows_read=6).is_complete()

    def test_short_is_incomplete(self) -> None:
        assert not ParseSummary(rows_expected=6, rows_read=4).is_complete()

    def test_skipped_is_incomplete(self) -> None:
        summary = ParseSummary(rows_expected=6, rows_read=6, skipped_rows=(2,))
        assert not summary.is_complete()

    def test_rows_read_bounded(self) -> None:
        with pytest.raises(ValueError, match="exceeds rows_expected"):
            ParseSummary(rows_expected=2, rows_read=3)

    def test_skipped_rows_must_be_read(self) -> None:
        with pytest.raises(ValueError, match="skipped_rows"):
            ParseSummary(rows_expected=6, rows_read=2, skipped_rows=(4,))
