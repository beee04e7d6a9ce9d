"""Terrain Bounded Context - Error Hierarchy.

Custom exceptions for reading and rendering Esri ASCII grids.

I/O failures (missing file, permission denied) are NOT part of this hierarchy:
they surface as the built-in ``OSError`` subclasses so callers can tell them
apart from malformed grid content.
"""

from __future__ import annotations


class TerrainError(Exception):
    """Base error for terrain operations."""


class InvalidGridError(TerrainError):
    """Grid text is malformed and cannot be parsed."""


class GridReadError(TerrainError):
    """Input could not be decoded as text."""


class InsufficientMemoryError(TerrainError):
    """Operation requires more memory than allowed or available."""


class AllNoDataError(TerrainError):
    """Grid contains 100% NoData samples - no floor or ceiling to render with."""


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------
class HeaderParseError(InvalidGridError):
    """A header line is missing or its value cannot be parsed.

    Attributes:
        field: Expected header field name (e.g. ``ncols``)
        line_number: 1-based line number in the source
        token: The offending value token, or None if the line was missing
        reason: Short description of what went wrong
    """

    def __init__(
        self, field: str, line_number: int, token: str | None, reason: str
    ) -> None:
        self.field = field
        self.line_number = line_number
        self.token = token
        self.reason = reason
        detail = f" (got {token!r})" if token is not None else ""
        super().__init__(f"line {line_number}: header {field}: {reason}{detail}")


class SampleParseError(InvalidGridError):
    """A data line contains a token that is not a real number.

    Attributes:
        row: 0-based grid row
        col: 0-based grid column
        line_number: 1-based line number in the source
        token: The offending token
    """

    def __init__(self, row: int, col: int, line_number: int, token: str) -> None:
        self.row = row
        self.col = col
        self.line_number = line_number
        self.token = token
        super().__init__(
            f"line {line_number}: height[{row}][{col}] is not a number: {token!r}"
        )
