"""Single source of truth for expected Esri ASCII grid test fixtures.

This module defines the list of expected fixture filenames used by both:
- scripts/gen_fixtures.py (generation verification)
- tests/gis/test_fixtures_sanity.py (existence verification)

Location: shared/ (not tests/) to avoid scripts->tests dependency.

When adding/removing fixtures, update ONLY this list.
"""

from __future__ import annotations

# Sorted alphabetically for deterministic comparison.
EXPECTED_FIXTURES: list[str] = sorted(
    [
        "all_nodata.asc",  # Every sample is NODATA_value
        "bad_header_number.asc",  # ncols abc
        "bad_sample.asc",  # Non-numeric token in a data row
        "empty.asc",  # Zero bytes
        "example_4x6.asc",  # Format documentation example
        "gradient_20x10.asc",  # 20 columns x 10 rows, value = row * 20 + col
        "header_name_mismatch.asc",  # Wrong field names, parsable values
        "short_row.asc",  # Row 2 has one value too few
        "too_few_lines.asc",  # Declares 6 rows, has 4
        "too_many_lines.asc",  # Declares 6 rows, has 7
    ]
)

# Count derived from list for verification
EXPECTED_FIXTURE_COUNT: int = len(EXPECTED_FIXTURES)
