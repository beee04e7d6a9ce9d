"""Terrain Bounded Context - Domain Services.

Pure domain logic for reading the Esri ASCII grid format.
NO file-system I/O - opening files is implemented by infrastructure adapters
under `src/infrastructure/terrain/ascii_grid_adapter.py`. The parser only
consumes an already-open text stream.

A very simple example of the input format:

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

Six header lines are followed by nrows lines of ncols heights each. The first
data line is the northernmost row of the grid and the last is the southernmost,
so the first value of the last line is the height at (xllcorner, yllcorner).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from typing import TextIO

import numpy as np

from domain.terrain.errors import (
    HeaderParseError,
    InsufficientMemoryError,
    SampleParseError,
)
from domain.terrain.repositories import EsriGrid
from domain.terrain.value_objects import FLOAT32_BYTES, ParseOptions, ParseSummary

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
HEADER_FIELDS = ("ncols", "nrows", "xllcorner", "yllcorner", "cellsize", "NODATA_value")
HEADER_LINE_COUNT = len(HEADER_FIELDS)

# Decimal numbers only: nan/inf and hex floats are not part of the format
_INTEGER_RE = re.compile(r"[+-]?\d+")
_REAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


# ---------------------------------------------------------------------------
# Tokenizing
# ---------------------------------------------------------------------------
def strip_spaces(line: str) -> str:
    """Trim the line and collapse each run of interior white space to one space."""
    return " ".join(line.split())


def tokenize(line: str) -> list[str]:
    """Split a normalized line into tokens. A blank line has no tokens."""
    stripped = strip_spaces(line)
    return stripped.split(" ") if stripped else []


def parse_int(token: str) -> int | None:
    """Parse a decimal integer token, returning None if malformed."""
    if _INTEGER_RE.fullmatch(token) is None:
        return None
    return int(token)


def parse_real(token: str) -> float | None:
    """Parse a decimal real token, returning None if malformed.

    Values that overflow float32 storage are malformed too.
    """
    if _REAL_RE.fullmatch(token) is None:
        return None
    value = float(token)
    with np.errstate(over="ignore"):
        if not np.isfinite(np.float32(value)):
            return None
    return value


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
def _read_header_token(
    lines: Iterator[str], field: str, line_number: int, verbose: bool
) -> str:
    """Read one header line and return its value token.

    A wrong field name is only a warning: the value is taken positionally.
    """
    line = next(lines, None)
    if line is None:
        raise HeaderParseError(field, line_number, None, "missing header line")
    if verbose:
        logger.debug("header line %d: %s", line_number, line.rstrip("\n"))

    tokens = tokenize(line)
    if len(tokens) < 2:
        raise HeaderParseError(
            field, line_number, strip_spaces(line), f"expected '{field} <value>'"
        )
    if tokens[0] != field:
        logger.warning(
            "line %d: expected header field %s, got %s", line_number, field, tokens[0]
        )
    return tokens[1]


def _read_header_int(
    lines: Iterator[str], field: str, line_number: int, verbose: bool
) -> int:
    token = _read_header_token(lines, field, line_number, verbose)
    value = parse_int(token)
    if value is None:
        raise HeaderParseError(field, line_number, token, "not an integer")
    if value <= 0:
        raise HeaderParseError(field, line_number, token, "must be positive")
    if verbose:
        logger.debug("%s %d", field, value)
    return value


def _read_header_real(
    lines: Iterator[str],
    field: str,
    line_number: int,
    verbose: bool,
    positive: bool = False,
) -> float:
    token = _read_header_token(lines, field, line_number, verbose)
    value = parse_real(token)
    if value is None:
        raise HeaderParseError(field, line_number, token, "not a number")
    if positive and value <= 0:
        raise HeaderParseError(field, line_number, token, "must be positive")
    if verbose:
        logger.debug("%s %f", field, value)
    return value


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------
def read_esri_grid(
    grid: EsriGrid, source: TextIO, options: ParseOptions | None = None
) -> ParseSummary:
    """Read an Esri ASCII grid from a text stream into ``grid``.

    Args:
        grid: Grid to populate. Dimensions are set and the matrix allocated
            as soon as ncols and nrows have been read.
        source: Text stream positioned at the first header line.
        options: Parse configuration (verbose logging, memory budget).

    Returns:
        ParseSummary describing how much of the declared grid was filled.

    Raises:
        HeaderParseError: A header line is missing or malformed.
        SampleParseError: A data token is not a number.
        InsufficientMemoryError: The declared grid exceeds ``options.max_bytes``
            or cannot be allocated.

    Rows with the wrong number of values and a wrong total number of lines
    are logged as warnings and do not abort the parse.
    """
    options = options or ParseOptions()
    verbose = options.verbose
    lines = iter(source)

    # ncols is read strictly before nrows; allocation waits for both
    grid.ncols = _read_header_int(lines, "ncols", 1, verbose)
    grid.nrows = _read_header_int(lines, "nrows", 2, verbose)

    if options.max_bytes is not None:
        est_bytes = grid.ncols * grid.nrows * FLOAT32_BYTES
        if est_bytes > options.max_bytes:
            raise InsufficientMemoryError(
                f"Estimated grid size {est_bytes}B exceeds budget {options.max_bytes}B"
            )
    try:
        grid.allocate()
    except (MemoryError, ValueError) as e:
        raise InsufficientMemoryError(
            f"Cannot allocate {grid.nrows}x{grid.ncols} float32 grid"
        ) from e

    grid.xllcorner = _read_header_real(lines, "xllcorner", 3, verbose)
    grid.yllcorner = _read_header_real(lines, "yllcorner", 4, verbose)
    grid.cellsize = _read_header_real(lines, "cellsize", 5, verbose, positive=True)
    grid.nodata_value = _read_header_real(lines, "NODATA_value", 6, verbose)

    if verbose:
        logger.debug("reading %d data lines", grid.nrows)

    lines_expected = grid.nrows + HEADER_LINE_COUNT
    line_number = HEADER_LINE_COUNT
    row = 0
    skipped: list[int] = []
    trailing_content = False

    for line in lines:
        if row == grid.nrows:
            # Trailing blank lines are harmless; anything else is ignored
            if line.strip():
                logger.warning("too many lines - expected %d", lines_expected)
                trailing_content = True
                break
            continue

        line_number += 1
        tokens = tokenize(line)
        if len(tokens) != grid.ncols:
            logger.warning(
                "line %d has too %s columns - got %d expected %d",
                line_number,
                "many" if len(tokens) > grid.ncols else "few",
                len(tokens),
                grid.ncols,
            )
            skipped.append(row)
            row += 1
            continue

        # Validate the whole row before writing any of it
        values: list[float] = []
        for col, token in enumerate(tokens):
            value = parse_real(token)
            if value is None:
                raise SampleParseError(row, col, line_number, token)
            values.append(value)

        for col, value in enumerate(values):
            grid.set_height(row, col, value)
            if verbose:
                logger.debug("height[%d][%d] %f", row, col, grid.height(row, col))
        row += 1

    if row < grid.nrows:
        logger.warning(
            "too few lines - got %d expected %d", line_number, lines_expected
        )

    logger.info("floor %s ceiling %s", grid.min_height, grid.max_height)

    return ParseSummary(
        rows_expected=grid.nrows,
        rows_read=row,
        skipped_rows=tuple(skipped),
        trailing_content=trailing_content,
    )
