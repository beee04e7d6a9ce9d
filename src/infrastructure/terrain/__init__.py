"""Infrastructure adapters for the terrain bounded context.

This module provides the infrastructure layer implementations for terrain
operations: loading grids from Esri ASCII files and rendering them as PNG.
"""

from .ascii_grid_adapter import AsciiGridTerrainAdapter
from .png_renderer import PngGridRenderer

__all__ = ["AsciiGridTerrainAdapter", "PngGridRenderer"]
