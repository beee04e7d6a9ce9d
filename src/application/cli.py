"""Command-line entry point: render an Esri ASCII grid as a grayscale PNG.

Usage:
    esrigrid -i dem.asc -o dem.png [-f FLOOR] [-c CEILING] [-v]
"""

from __future__ import annotations

import logging
import sys

import click

from domain.terrain.errors import TerrainError
from domain.terrain.value_objects import MAX_SHADES, ParseOptions, RenderOptions
from infrastructure.terrain import AsciiGridTerrainAdapter, PngGridRenderer

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool) -> None:
    """Send diagnostics to stderr; verbose mode lowers the threshold to DEBUG."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


@click.command()
@click.option(
    "-i",
    "--input",
    "input_path",
    required=True,
    type=click.Path(dir_okay=False),
    help="Esri ASCII grid file to display.",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    required=True,
    type=click.Path(dir_okay=False, writable=True),
    help="PNG results file.",
)
@click.option(
    "-f", "--floor", type=float, default=None, help="Minimum height expected."
)
@click.option(
    "-c", "--ceiling", type=float, default=None, help="Maximum height expected."
)
@click.option(
    "-s",
    "--shades",
    type=click.IntRange(2, MAX_SHADES),
    default=MAX_SHADES,
    show_default=True,
    help="Number of shades of grey.",
)
@click.option(
    "--world-file", is_flag=True, help="Also write a .wld georeferencing file."
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose mode.")
def main(
    input_path: str,
    output_path: str,
    floor: float | None,
    ceiling: float | None,
    shades: int,
    world_file: bool,
    verbose: bool,
) -> None:
    """
    Load an Esri ASCII elevation grid and save it as a
    grayscale PNG with one pixel per grid cell.

    Floor and ceiling default to the lowest and highest
    heights in the file, NoData cells excluded.

    """
    configure_logging(verbose)

    try:
        render_options = RenderOptions(
            floor=floor, ceiling=ceiling, shades=shades, world_file=world_file
        )
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    adapter = AsciiGridTerrainAdapter(ParseOptions(verbose=verbose))
    renderer = PngGridRenderer()
    try:
        grid = adapter.load_grid(input_path)
        path = renderer.render(grid, output_path, render_options)
    except (OSError, TerrainError) as e:
        logger.debug("render failed", exc_info=True)
        raise click.ClickException(f"{type(e).__name__}: {e}") from e

    used_floor = floor if floor is not None else grid.min_height
    used_ceiling = ceiling if ceiling is not None else grid.max_height
    click.secho(
        f"Wrote {grid.ncols}x{grid.nrows} image to {path} "
        f"(floor {used_floor:g}, ceiling {used_ceiling:g})",
        fg="green",
    )


if __name__ == "__main__":
    main()
