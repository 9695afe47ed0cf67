"""Discrete Voronoi partitioning of 2D grids for procedural map generation."""

__version__ = "0.1.0"
