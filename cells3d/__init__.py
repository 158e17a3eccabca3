"""Connected groups of occupied cells in a 3D occupancy grid."""

__version__ = "0.1.0"

from cells3d.common import (
    OutOfRangeError, BernoulliSource, coord_to_idx, idx_to_coord,
)
from cells3d.grid import OccupancyGrid
from cells3d.dsu import (
    DisjointSet, ArrayDisjointSet, Found, NotFound, NOT_FOUND,
    RandomLinkPolicy, FixedLinkPolicy,
)
from cells3d.connectivity import (
    ComponentCatalog, LabelResult, FloodFill, UnionFindSweep,
    ConnectivityConfig, get_strategy, find_components,
)

__all__ = [
    "OutOfRangeError", "BernoulliSource", "coord_to_idx", "idx_to_coord",
    "OccupancyGrid",
    "DisjointSet", "ArrayDisjointSet", "Found", "NotFound", "NOT_FOUND",
    "RandomLinkPolicy", "FixedLinkPolicy",
    "ComponentCatalog", "LabelResult", "FloodFill", "UnionFindSweep",
    "ConnectivityConfig", "get_strategy", "find_components",
]
