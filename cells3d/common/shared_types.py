"""
Centralized constants and types for the 3D connectivity engine.
Single source of truth for dtypes, grid defaults and neighbor offsets.
"""

import numpy as np
from typing import Tuple, Any

# Core data types
INDEX_DTYPE = np.int64
LABEL_DTYPE = np.int64
COORD_DTYPE = np.int64
OCC_DTYPE = np.uint8
BOOL_DTYPE = np.bool_

# Type aliases
Coord = Tuple[int, int, int]
Shape3D = Tuple[int, int, int]

# Default grid geometry (X -> Y -> Z numbering, X fastest)
DEFAULT_NX = 400
DEFAULT_NY = 250
DEFAULT_NZ = 100

# Random sources
DEFAULT_GRID_SEED = 5
DEFAULT_LINK_SEED = 1
DEFAULT_OCCUPANCY_PROBABILITY = 0.5
RANDOM_BLOCK_SIZE = 4096

# Forest / label sentinels (internal only, never returned to callers)
UNTRACKED = -1
BACKGROUND_LABEL = 0
FIRST_COMPONENT_ID = 1


def format_bounds_error(value: Any, shape: Shape3D) -> str:
    """Format coordinate bounds error messages consistently."""
    nx, ny, nz = shape
    return f"3D coordinates {value} are outside bounds [0, {nx}) x [0, {ny}) x [0, {nz})"


def format_index_error(idx: Any, volume: int) -> str:
    """Format flat index error messages consistently."""
    return f"Cell index {idx} is outside bounds [0, {volume})"
