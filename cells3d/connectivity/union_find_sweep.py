# cells3d/connectivity/union_find_sweep.py
"""Union-find sweep over occupied cells.

Cells are visited once in index order. Each occupied cell becomes a singleton
set and is then merged with whichever of its -X, -Y and -Z neighbors is
already tracked. Every such neighbor has a smaller index, so it was visited
earlier; the forward half of each adjacency is covered when the later cell
looks backwards.
"""

from __future__ import annotations

import numpy as np
from numba import njit
from typing import Optional, Union

import logging
logger = logging.getLogger(__name__)

from cells3d.common.shared_types import UNTRACKED, BOOL_DTYPE
from cells3d.common.coord_utils import coord_to_idx_scalar
from cells3d.grid.grid import OccupancyGrid
from cells3d.dsu.array_forest import ArrayDisjointSet, find_root, link_roots
from cells3d.dsu.disjoint_set import DisjointSet
from cells3d.dsu.link_policy import LinkPolicy, RandomLinkPolicy
from cells3d.connectivity.catalog import ComponentCatalog

BACKENDS = ("numba", "python")

# =============================================================================
# NUMBA BACKEND
# =============================================================================

@njit(cache=True, nogil=True)
def _union_tracked(parent, coins, n_coins, a, b):
    """Union ``a`` with tracked ``b``; consumes one coin per actual link."""
    ra = find_root(parent, a)
    rb = find_root(parent, b)
    if ra == rb:
        return n_coins
    link_roots(parent, ra, rb, coins[n_coins])
    return n_coins + 1


@njit(cache=True, nogil=True)
def _sweep_numba(occ: np.ndarray, nx: int, ny: int, nz: int,
                 parent: np.ndarray, coins: np.ndarray):
    """Fill ``parent`` in place. Returns (cells tracked, links made)."""
    plane = nx * ny
    n_tracked = 0
    n_links = 0
    for k in range(nz):
        for j in range(ny):
            for i in range(nx):
                idx = coord_to_idx_scalar(i, j, k, nx, ny)
                if occ[idx] == 0:
                    continue
                if parent[idx] == UNTRACKED:
                    parent[idx] = idx
                    n_tracked += 1

                if i > 0 and parent[idx - 1] != UNTRACKED:
                    n_links = _union_tracked(parent, coins, n_links, idx, idx - 1)
                if j > 0 and parent[idx - nx] != UNTRACKED:
                    n_links = _union_tracked(parent, coins, n_links, idx, idx - nx)
                if k > 0 and parent[idx - plane] != UNTRACKED:
                    n_links = _union_tracked(parent, coins, n_links, idx, idx - plane)
    return n_tracked, n_links


def sweep_array_forest(grid: OccupancyGrid, policy: Optional[LinkPolicy] = None) -> ArrayDisjointSet:
    """Union-find sweep into a dense array forest sized to the grid.

    The kernel cannot call back into the policy, so ``n_occupied - 1`` coins
    are drawn up front and only the first ``n_links`` are used. A policy that
    is reused afterwards (e.g. through ``forest.union_sets``) has advanced by
    the full draw, unlike the python backend which draws once per link. The
    resulting forest is the same for both backends.
    """
    forest = ArrayDisjointSet(grid.volume, policy=policy)
    # a forest over m cells links at most m - 1 times
    n_coins = max(grid.n_occupied - 1, 0)
    coins = np.ascontiguousarray(forest.policy.draw(n_coins), dtype=BOOL_DTYPE)
    if coins.shape != (n_coins,):
        raise ValueError(f"link policy drew {coins.shape} coins, expected ({n_coins},)")
    n_tracked, n_links = _sweep_numba(grid.flat, grid.nx, grid.ny, grid.nz, forest.parent, coins)
    forest.sync_counts(n_tracked, n_tracked - n_links)
    logger.debug("Sweep tracked %d cells with %d links", n_tracked, n_links)
    return forest

# =============================================================================
# PYTHON BACKEND
# =============================================================================

def sweep_disjoint_set(grid: OccupancyGrid, policy: Optional[LinkPolicy] = None) -> DisjointSet:
    """Union-find sweep driving the generic forest through its public operations."""
    forest: DisjointSet[int] = DisjointSet(policy=policy)
    nx, ny, nz = grid.shape
    plane = nx * ny
    occ = grid.flat
    for k in range(nz):
        for j in range(ny):
            for i in range(nx):
                idx = coord_to_idx_scalar(i, j, k, nx, ny)
                if not occ[idx]:
                    continue
                forest.make_set(idx)
                if i > 0 and forest.is_tracked(idx - 1):
                    forest.union_sets(idx, idx - 1)
                if j > 0 and forest.is_tracked(idx - nx):
                    forest.union_sets(idx, idx - nx)
                if k > 0 and forest.is_tracked(idx - plane):
                    forest.union_sets(idx, idx - plane)
    logger.debug("Sweep tracked %d cells into %d sets", len(forest), forest.n_sets)
    return forest

# =============================================================================
# STRATEGY
# =============================================================================

class UnionFindSweep:
    """Connectivity by a single backward-neighbor union pass."""

    name = "union_find"

    def __init__(self, policy: Optional[LinkPolicy] = None, backend: str = "numba") -> None:
        if backend not in BACKENDS:
            raise ValueError(f"Unknown sweep backend {backend!r}; expected one of {BACKENDS}")
        self.policy = policy
        self.backend = backend

    def _link_policy(self) -> LinkPolicy:
        return self.policy if self.policy is not None else RandomLinkPolicy()

    def connect(self, grid: OccupancyGrid) -> Union[ArrayDisjointSet, DisjointSet]:
        if self.backend == "numba":
            return sweep_array_forest(grid, self._link_policy())
        return sweep_disjoint_set(grid, self._link_policy())

    def run(self, grid: OccupancyGrid) -> ComponentCatalog:
        return ComponentCatalog.from_result(self.connect(grid))

    def __repr__(self) -> str:
        return f"UnionFindSweep(policy={self.policy!r}, backend={self.backend!r})"
