"""Esri Grid Domain Layer.

This package contains the core logic organized by bounded contexts:
- terrain: Elevation grids, the Esri ASCII grid parser, NoData handling
"""

from domain import terrain

__all__ = ["terrain"]
