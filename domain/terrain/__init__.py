"""Terrain Bounded Context.

Responsible for elevation grids read from Esri ASCII files:
- Value Objects: GridHeader, GridExtent, ParseOptions, ParseSummary, RenderOptions
- Entities: ElevationGrid
- Services: read_esri_grid (text stream parser)
"""
