"""Occupancy grid storage."""
from cells3d.grid.grid import OccupancyGrid, CellGenerator

__all__ = ["OccupancyGrid", "CellGenerator"]
