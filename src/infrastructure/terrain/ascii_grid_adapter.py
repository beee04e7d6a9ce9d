"""Esri ASCII grid adapter for GridRepository.

Implements loading of elevation grids from plain-text Esri ASCII files and
returns a fully parsed domain ElevationGrid.

Lifecycle (to avoid resource leaks):
1) Check the path exists
2) Open the file as text with a context manager
3) Hand the stream to the domain parser (ElevationGrid.read)
4) Exit the context to release the file handle
5) Return the ElevationGrid
"""

from __future__ import annotations

import logging
from pathlib import Path

from domain.terrain.entities import ElevationGrid
from domain.terrain.errors import GridReadError
from domain.terrain.value_objects import ParseOptions, ParseSummary

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)

# The format is ASCII; UTF-8 is a strict superset
_ENCODING = "utf-8"


class AsciiGridTerrainAdapter:
    """Infrastructure adapter for loading grids from Esri ASCII files.

    Parameters
    ----------
    options: ParseOptions | None
        Default parse options, used when ``load_grid`` is called without any.
    """

    def __init__(self, options: ParseOptions | None = None) -> None:
        self.options = options or ParseOptions()
        self.last_summary: ParseSummary | None = None

    def load_grid(
        self, file_path: Path | str, options: ParseOptions | None = None
    ) -> ElevationGrid:
        """Load an Esri ASCII grid file and return the parsed ElevationGrid.

        Raises:
            FileNotFoundError: The file does not exist.
            PermissionError: The file cannot be opened (message has filename only).
            OSError: Any other failure opening or reading the file.
            GridReadError: The file is not valid text.
            InvalidGridError: The header or a sample is malformed.
        """
        path = Path(file_path)
        options = options or self.options

        # Check existence first to ensure missing files surface as FileNotFoundError
        if not path.exists():
            raise FileNotFoundError(str(path))

        if options.verbose:
            logger.debug("load_grid: %s", path.name)

        grid = ElevationGrid()
        try:
            with path.open("r", encoding=_ENCODING) as source:
                summary = grid.read(source, options)
        except PermissionError as e:
            # Re-raise with filename only to avoid leaking full path in logs
            raise PermissionError(path.name) from e
        except UnicodeDecodeError as e:
            raise GridReadError(f"{path.name} is not a text file: {e}") from e
        except OSError as e:
            # Log only filename, errno, and strerror to avoid leaking absolute paths
            logger.error(
                "Failed to read %s (errno=%s, strerror=%s)",
                path.name,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise

        self.last_summary = summary
        if not summary.is_complete():
            logger.warning(
                "Grid %s: %d of %d rows filled; remaining cells default to 0",
                path.name,
                summary.rows_read - len(summary.skipped_rows),
                summary.rows_expected,
            )
        logger.debug("Grid %s: Loaded %dx%d grid", path.name, grid.ncols, grid.nrows)
        return grid
