# cells3d/connectivity/builder.py - SIMPLE FUNCTIONAL REGISTRY
"""Registry mapping strategy names to factories, plus the one-call entry point."""

from typing import Callable, Dict, Optional, Protocol, Tuple, runtime_checkable

import logging
logger = logging.getLogger(__name__)

from cells3d.grid.grid import OccupancyGrid
from cells3d.connectivity.builderconfig import ConnectivityConfig
from cells3d.connectivity.catalog import ComponentCatalog, ConnectivityResult
from cells3d.connectivity.flood_fill import FloodFill
from cells3d.connectivity.union_find_sweep import UnionFindSweep


@runtime_checkable
class ConnectivityStrategy(Protocol):
    name: str
    def connect(self, grid: OccupancyGrid) -> ConnectivityResult: ...
    def run(self, grid: OccupancyGrid) -> ComponentCatalog: ...


StrategyFactory = Callable[[ConnectivityConfig], ConnectivityStrategy]

# Simple dictionary mapping strategy name -> factory
_strategy_registry: Dict[str, StrategyFactory] = {}


def register(name: str):
    """Decorator to register a strategy factory under ``name``."""
    def _decorator(fn: StrategyFactory) -> StrategyFactory:
        _strategy_registry[name] = fn
        return fn
    return _decorator


@register("flood_fill")
def _make_flood_fill(config: ConnectivityConfig) -> FloodFill:
    return FloodFill()


@register("union_find")
def _make_union_find_sweep(config: ConnectivityConfig) -> UnionFindSweep:
    return UnionFindSweep(policy=config.make_link_policy(), backend=config.backend)


def available_strategies() -> Tuple[str, ...]:
    return tuple(_strategy_registry)


def get_strategy(name: str, config: Optional[ConnectivityConfig] = None) -> ConnectivityStrategy:
    """Build the strategy registered under ``name``."""
    factory = _strategy_registry.get(name)
    if factory is None:
        raise ValueError(f"Unknown strategy {name!r}; expected one of {available_strategies()}")
    return factory(config if config is not None else ConnectivityConfig(strategy=name))


def find_components(
    grid: OccupancyGrid,
    strategy: Optional[str] = None,
    config: Optional[ConnectivityConfig] = None,
) -> ComponentCatalog:
    """Connect ``grid`` with the chosen strategy and catalog the result.

    ``strategy`` defaults to ``config.strategy`` (``"union_find"`` without a config).
    """
    if strategy is None:
        strategy = config.strategy if config is not None else "union_find"
    builder = get_strategy(strategy, config)
    catalog = builder.run(grid)
    logger.debug("%s found %d components in %r", strategy, len(catalog), grid)
    return catalog
