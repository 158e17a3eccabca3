# cells3d/connectivity/builderconfig.py

"""Configuration settings for a connectivity run."""

from dataclasses import dataclass

from cells3d.common.shared_types import (
    DEFAULT_NX, DEFAULT_NY, DEFAULT_NZ, DEFAULT_GRID_SEED, DEFAULT_LINK_SEED,
    DEFAULT_OCCUPANCY_PROBABILITY, Shape3D,
)
from cells3d.common.validation import validate_shape, validate_probability
from cells3d.common.random_source import BernoulliSource
from cells3d.dsu.link_policy import RandomLinkPolicy
from cells3d.grid.grid import OccupancyGrid
from cells3d.connectivity.union_find_sweep import BACKENDS

STRATEGY_NAMES = ("flood_fill", "union_find")


@dataclass
class ConnectivityConfig:
    """Grid geometry, random seeds and strategy selection."""
    nx: int = DEFAULT_NX
    ny: int = DEFAULT_NY
    nz: int = DEFAULT_NZ
    seed: int = DEFAULT_GRID_SEED
    probability: float = DEFAULT_OCCUPANCY_PROBABILITY
    link_seed: int = DEFAULT_LINK_SEED
    strategy: str = "union_find"
    backend: str = "numba"  # union_find only

    def __post_init__(self):
        self.nx, self.ny, self.nz = validate_shape((self.nx, self.ny, self.nz))
        self.probability = validate_probability(self.probability)
        if self.strategy not in STRATEGY_NAMES:
            raise ValueError(f"strategy must be one of {STRATEGY_NAMES}, got {self.strategy!r}")
        if self.backend not in BACKENDS:
            raise ValueError(f"backend must be one of {BACKENDS}, got {self.backend!r}")

    @property
    def shape(self) -> Shape3D:
        return self.nx, self.ny, self.nz

    def make_generator(self) -> BernoulliSource:
        return BernoulliSource(seed=self.seed, p=self.probability)

    def make_grid(self) -> OccupancyGrid:
        return OccupancyGrid(self.nx, self.ny, self.nz, generator=self.make_generator())

    def make_link_policy(self) -> RandomLinkPolicy:
        return RandomLinkPolicy(seed=self.link_seed)
