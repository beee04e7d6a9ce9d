"""Grayscale PNG renderer for elevation grids.

Maps each cell linearly from [floor, ceiling] to a grey shade and writes a
single-band 8-bit PNG with one pixel per cell, top row first. Low ground is
light and high ground dark. The grid's affine transform is attached so GDAL
can write georeferencing alongside the image.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import numpy as np
import rasterio
from numpy.typing import NDArray

from domain.terrain.errors import AllNoDataError
from domain.terrain.repositories import EsriGrid
from domain.terrain.value_objects import MAX_SHADES, RenderOptions

logger = logging.getLogger(__name__)

NUMBER_OF_SHADES = MAX_SHADES  # Number of shades of grey available


def resolve_range(grid: EsriGrid, options: RenderOptions) -> tuple[float, float]:
    """Return (floor, ceiling): explicit overrides first, else the grid's extrema.

    Raises:
        AllNoDataError: No override given and the grid has no real samples.
    """
    floor = options.floor if options.floor is not None else grid.min_height
    ceiling = options.ceiling if options.ceiling is not None else grid.max_height
    if floor is None or ceiling is None:
        raise AllNoDataError(
            "Grid contains 100% NoData samples - supply floor and ceiling"
        )
    return floor, ceiling


def shade_levels(
    heights: NDArray[Any],
    floor: float,
    ceiling: float,
    shades: int = NUMBER_OF_SHADES,
) -> NDArray[np.uint8]:
    """Map heights to grey values in 0-255.

    Heights are split into ``shades`` equal bands between floor and ceiling
    and clamped at both ends. The floor band is white, the ceiling band black.
    A degenerate range (ceiling <= floor) maps everything to white.
    """
    span = ceiling - floor
    if span <= 0:
        level = np.zeros(np.shape(heights), dtype=np.int64)
    else:
        scaled = np.floor((np.asarray(heights, dtype=np.float64) - floor) * shades / span)
        level = np.clip(scaled, 0, shades - 1).astype(np.int64)
    shade = (shades - 1) - level
    return np.rint(shade * 255.0 / (shades - 1)).astype(np.uint8)


def shade(
    height: float, floor: float, ceiling: float, shades: int = NUMBER_OF_SHADES
) -> int:
    """Grey value (0-255) for a single height."""
    return int(shade_levels(np.array([height]), floor, ceiling, shades)[0])


class PngGridRenderer:
    """Infrastructure adapter writing an EsriGrid as a grayscale PNG."""

    def to_pixels(
        self, grid: EsriGrid, options: RenderOptions | None = None
    ) -> NDArray[np.uint8]:
        """Return the (nrows, ncols) uint8 image for ``grid``."""
        options = options or RenderOptions()
        floor, ceiling = resolve_range(grid, options)
        heights = grid.heights()

        logger.debug(
            "shading %dx%d cells: floor %f ceiling %f shades %d",
            heights.shape[1],
            heights.shape[0],
            floor,
            ceiling,
            options.shades,
        )
        if ceiling <= floor:
            logger.warning(
                "ceiling %f <= floor %f - every cell gets the same shade",
                ceiling,
                floor,
            )

        pixels = shade_levels(heights, floor, ceiling, options.shades)
        pixels[heights == np.float32(grid.nodata_value)] = options.nodata_shade
        return pixels

    def render(
        self,
        grid: EsriGrid,
        output_path: Path | str,
        options: RenderOptions | None = None,
    ) -> Path:
        """Render ``grid`` and write it to ``output_path`` as PNG.

        Raises:
            AllNoDataError: Nothing to normalise against (see resolve_range).
            OSError: The output file cannot be written.
        """
        options = options or RenderOptions()
        path = Path(output_path)
        pixels = self.to_pixels(grid, options)
        height, width = pixels.shape

        kwargs: dict[str, Any] = {
            "driver": "PNG",
            "height": height,
            "width": width,
            "count": 1,
            "dtype": "uint8",
            "transform": grid.header.transform,
        }
        if options.world_file:
            kwargs["WORLDFILE"] = "YES"

        with rasterio.Env():
            with rasterio.open(path, "w", **kwargs) as dst:
                dst.write(pixels, 1)

        logger.info("Wrote %dx%d image to %s", width, height, path.name)
        return path
