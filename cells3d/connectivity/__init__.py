"""Connectivity strategies and result normalization."""
from cells3d.connectivity.catalog import ComponentCatalog, LabelResult, ConnectivityResult
from cells3d.connectivity.flood_fill import FloodFill, flood_fill_labels
from cells3d.connectivity.union_find_sweep import (
    UnionFindSweep, sweep_array_forest, sweep_disjoint_set, BACKENDS,
)
from cells3d.connectivity.builderconfig import ConnectivityConfig, STRATEGY_NAMES
from cells3d.connectivity.builder import (
    ConnectivityStrategy, register, get_strategy, available_strategies, find_components,
)

__all__ = [
    "ComponentCatalog", "LabelResult", "ConnectivityResult",
    "FloodFill", "flood_fill_labels",
    "UnionFindSweep", "sweep_array_forest", "sweep_disjoint_set", "BACKENDS",
    "ConnectivityConfig", "STRATEGY_NAMES",
    "ConnectivityStrategy", "register", "get_strategy", "available_strategies",
    "find_components",
]
