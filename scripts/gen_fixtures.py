#!/usr/bin/env python3
"""Generate Esri ASCII grid fixtures for parser and renderer tests.

Fixtures are minimal synthetic grids - not real terrain data.

Usage:
    python scripts/gen_fixtures.py

Requirements:
    pip install numpy

Output:
    tests/fixtures/*.asc

Dependencies:
    This script imports from shared/fixtures_expected.py (not tests/) to avoid
    circular dependencies between scripts and tests packages.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np
from numpy.typing import NDArray

from shared.fixtures_expected import EXPECTED_FIXTURE_COUNT, EXPECTED_FIXTURES

# Output directory
FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"

NODATA = -9999.0

# Rows of the example grid from the format documentation (top row first)
EXAMPLE_ROWS = [
    "-9999 -9999 5 2",
    "-9999 20 100 36",
    "3 8 35 10",
    "32 42 50 6",
    "88 75 27 9",
    "13 5 1 -9999",
]


def ensure_dir() -> None:
    """Ensure fixtures directory exists."""
    FIXTURES_DIR.mkdir(parents=True, exist_ok=True)
    print(f"Output directory: {FIXTURES_DIR}")


# =============================================================================
# Helpers
# =============================================================================
def header_lines(
    ncols: Any,
    nrows: Any,
    xllcorner: Any = "0.0",
    yllcorner: Any = "0.0",
    cellsize: Any = "50.0",
    nodata: Any = "-9999",
    names: tuple[str, ...] = (
        "ncols",
        "nrows",
        "xllcorner",
        "yllcorner",
        "cellsize",
        "NODATA_value",
    ),
) -> list[str]:
    """Build the six header lines, name padded to 14 characters."""
    values = (ncols, nrows, xllcorner, yllcorner, cellsize, nodata)
    return [f"{name:<14}{value}" for name, value in zip(names, values)]


def write_grid(path: Path, header: list[str], rows: list[str]) -> None:
    """Write header and data lines, newline terminated."""
    path.write_text("\n".join(header + rows) + "\n", encoding="utf-8")


def format_rows(data: NDArray[Any]) -> list[str]:
    """Format a 2D array as space separated data lines (%g)."""
    return [" ".join(f"{v:g}" for v in row) for row in data]


# =============================================================================
# Fixtures
# =============================================================================
def gen_example_4x6() -> None:
    """The 4 column, 6 row example from the format documentation."""
    path = FIXTURES_DIR / "example_4x6.asc"
    write_grid(path, header_lines(4, 6), EXAMPLE_ROWS)
    print(f"  Created: {path.name} (4x6)")


def gen_gradient_20x10() -> None:
    """20 columns x 10 rows, value = row * 20 + col, origin (1000, 2000), 10m cells."""
    path = FIXTURES_DIR / "gradient_20x10.asc"
    nrows, ncols = 10, 20
    data = np.arange(nrows * ncols, dtype=np.float32).reshape(nrows, ncols)
    header = header_lines(ncols, nrows, "1000.0", "2000.0", "10.0", "-9999")
    write_grid(path, header, format_rows(data))
    print(f"  Created: {path.name} (20x10)")


def gen_all_nodata() -> None:
    """3x3 grid where every sample is NODATA_value."""
    path = FIXTURES_DIR / "all_nodata.asc"
    data = np.full((3, 3), NODATA, dtype=np.float32)
    write_grid(path, header_lines(3, 3), format_rows(data))
    print(f"  Created: {path.name} (3x3, 100% NoData)")


def gen_short_row() -> None:
    """Example grid with one value missing from row 2."""
    path = FIXTURES_DIR / "short_row.asc"
    rows = list(EXAMPLE_ROWS)
    rows[2] = "3 8 35"
    write_grid(path, header_lines(4, 6), rows)
    print(f"  Created: {path.name} (row 2 short)")


def gen_too_few_lines() -> None:
    """Declares 6 rows but only the first 4 are present."""
    path = FIXTURES_DIR / "too_few_lines.asc"
    write_grid(path, header_lines(4, 6), EXAMPLE_ROWS[:4])
    print(f"  Created: {path.name} (4 of 6 rows)")


def gen_too_many_lines() -> None:
    """Declares 6 rows but has a seventh."""
    path = FIXTURES_DIR / "too_many_lines.asc"
    write_grid(path, header_lines(4, 6), EXAMPLE_ROWS + ["999 999 999 999"])
    print(f"  Created: {path.name} (7 rows)")


def gen_bad_header_number() -> None:
    """ncols value is not a number."""
    path = FIXTURES_DIR / "bad_header_number.asc"
    write_grid(path, header_lines("abc", 6), EXAMPLE_ROWS)
    print(f"  Created: {path.name} (ncols abc)")


def gen_bad_sample() -> None:
    """Row 3 contains a non-numeric token."""
    path = FIXTURES_DIR / "bad_sample.asc"
    rows = list(EXAMPLE_ROWS)
    rows[3] = "32 4x2 50 6"
    write_grid(path, header_lines(4, 6), rows)
    print(f"  Created: {path.name} (row 3 token 4x2)")


def gen_header_name_mismatch() -> None:
    """Lower-case / misspelt field names with parsable values."""
    path = FIXTURES_DIR / "header_name_mismatch.asc"
    names = ("NCOLS", "NROWS", "xllcenter", "yllcenter", "cellsize", "nodata_value")
    write_grid(path, header_lines(4, 6, names=names), EXAMPLE_ROWS)
    print(f"  Created: {path.name} (wrong field names)")


def gen_empty() -> None:
    """Zero byte file."""
    path = FIXTURES_DIR / "empty.asc"
    path.write_bytes(b"")
    print(f"  Created: {path.name} (0 bytes)")


# =============================================================================
# Main
# =============================================================================
def main() -> int:
    """Generate all fixtures.

    Returns:
        0 on success, 1 on failure
    """
    print("=" * 60)
    print("Generating Esri ASCII Grid Test Fixtures")
    print("=" * 60)

    try:
        ensure_dir()
    except OSError as e:
        print(f"ERROR: Cannot create fixtures directory: {e}")
        return 1

    gen_example_4x6()
    gen_gradient_20x10()
    gen_all_nodata()
    gen_short_row()
    gen_too_few_lines()
    gen_too_many_lines()
    gen_bad_header_number()
    gen_bad_sample()
    gen_header_name_mismatch()
    gen_empty()

    # Verify generated fixtures match expected list exactly
    found_set = {f.name for f in FIXTURES_DIR.iterdir() if f.suffix == ".asc"}
    expected_set = set(EXPECTED_FIXTURES)
    if found_set != expected_set:
        print("ERROR: Fixture filenames do not match expected list!")
        missing = expected_set - found_set
        extra = found_set - expected_set
        if missing:
            print(f"  Missing (expected but not generated): {sorted(missing)}")
        if extra:
            print(f"  Extra (generated but not expected): {sorted(extra)}")
        print("\nUpdate shared/fixtures_expected.py to match generated fixtures.")
        return 1

    print(f"\nAll {EXPECTED_FIXTURE_COUNT} fixtures verified successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
