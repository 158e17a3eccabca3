# cells3d/dsu/array_forest.py - DENSE NUMBA VERSION
"""Array-indexed disjoint-set forest for dense non-negative integer elements.

``parent[a] == a`` marks a root and ``parent[a] == UNTRACKED`` marks a slot
that was never passed to ``make_set``. The kernels below operate on the raw
parent array so the connectivity sweep can run entirely inside numba.
"""

from __future__ import annotations

import numpy as np
from numba import njit
from typing import Dict, Optional, Set

import logging
logger = logging.getLogger(__name__)

from cells3d.common.shared_types import (
    INDEX_DTYPE, UNTRACKED, FIRST_COMPONENT_ID,
)
from cells3d.common.validation import check_index, is_integral_index
from cells3d.dsu.link_policy import LinkPolicy, RandomLinkPolicy
from cells3d.dsu.results import Found, NOT_FOUND, FindResult

# =============================================================================
# NUMBA KERNELS
# =============================================================================

@njit(cache=True, nogil=True)
def find_root(parent: np.ndarray, a: int) -> int:
    """Root of ``a`` with full path compression. ``a`` must be tracked."""
    root = a
    while parent[root] != root:
        root = parent[root]
    while parent[a] != root:
        nxt = parent[a]
        parent[a] = root
        a = nxt
    return root


@njit(cache=True, nogil=True)
def link_roots(parent: np.ndarray, ra: int, rb: int, coin: bool) -> None:
    """Attach one root under the other; ``coin`` keeps ``rb`` as the survivor."""
    if coin:
        parent[ra] = rb
    else:
        parent[rb] = ra


@njit(cache=True, nogil=True)
def compress_all(parent: np.ndarray) -> np.ndarray:
    """Root of every slot (UNTRACKED stays UNTRACKED); flattens every tree."""
    n = parent.shape[0]
    roots = np.empty(n, dtype=INDEX_DTYPE)
    for a in range(n):
        if parent[a] == UNTRACKED:
            roots[a] = UNTRACKED
        else:
            roots[a] = find_root(parent, a)
    return roots

# =============================================================================
# FOREST CLASS
# =============================================================================

class ArrayDisjointSet:
    """Disjoint-set forest over the integers ``0 .. capacity-1``."""

    __slots__ = ("_parent", "_policy", "_n_tracked", "_n_sets")

    def __init__(self, capacity: int, policy: Optional[LinkPolicy] = None) -> None:
        capacity = int(capacity)
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._parent = np.full(capacity, UNTRACKED, dtype=INDEX_DTYPE)
        self._policy = policy if policy is not None else RandomLinkPolicy()
        self._n_tracked = 0
        self._n_sets = 0

    @property
    def capacity(self) -> int:
        return self._parent.shape[0]

    @property
    def parent(self) -> np.ndarray:
        """Raw parent array, shared with the numba kernels."""
        return self._parent

    @property
    def policy(self) -> LinkPolicy:
        return self._policy

    def _in_capacity(self, a: int) -> bool:
        return 0 <= a < self._parent.shape[0]

    def sync_counts(self, n_tracked: int, n_sets: int) -> None:
        """Record counters after a kernel mutated ``parent`` directly."""
        self._n_tracked = int(n_tracked)
        self._n_sets = int(n_sets)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def make_set(self, a: int) -> None:
        a = check_index(a, self.capacity)
        if self._parent[a] == UNTRACKED:
            self._parent[a] = a
            self._n_tracked += 1
            self._n_sets += 1

    def find_set(self, a: int) -> int:
        """Root of ``a``; KeyError when ``a`` is not tracked.

        The raw ``find_root`` kernel does no such check: on an untracked slot it
        follows ``parent[-1]`` and corrupts the forest.
        """
        if not self.is_tracked(a):
            raise KeyError(a)
        return int(find_root(self._parent, int(a)))

    def find_set_checked(self, a: int) -> FindResult:
        if not self.is_tracked(a):
            return NOT_FOUND
        return Found(int(find_root(self._parent, int(a))))

    def _link(self, ra: int, rb: int) -> bool:
        if ra == rb:
            return False
        link_roots(self._parent, ra, rb, self._policy.flip())
        self._n_sets -= 1
        return True

    def union_sets(self, a: int, b: int) -> bool:
        """Merge the sets of two tracked elements; True when a link happened."""
        return self._link(self.find_set(a), self.find_set(b))

    def union_sets_checked(self, a: int, b: int) -> bool:
        ra = self.find_set_checked(a)
        rb = self.find_set_checked(b)
        if not ra or not rb:
            return False
        return self._link(ra.value, rb.value)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_tracked(self, a: int) -> bool:
        if not is_integral_index(a):
            return False
        a = int(a)
        return self._in_capacity(a) and bool(self._parent[a] != UNTRACKED)

    def __contains__(self, a: object) -> bool:
        return self.is_tracked(a)

    def __len__(self) -> int:
        return self._n_tracked

    @property
    def n_sets(self) -> int:
        return self._n_sets

    def elements(self) -> np.ndarray:
        """Tracked elements, ascending."""
        return np.flatnonzero(self._parent != UNTRACKED).astype(INDEX_DTYPE)

    def roots(self) -> np.ndarray:
        """Root of every tracked element, aligned with :meth:`elements`."""
        all_roots = compress_all(self._parent)
        return all_roots[all_roots != UNTRACKED]

    def leaders(self) -> Set[int]:
        """Distinct roots. Compresses every tracked element's path."""
        return set(np.unique(self.roots()).tolist())

    def partition(self) -> Dict[int, np.ndarray]:
        """Number the sets 1..n in ascending element order, members ascending."""
        elements = self.elements()
        roots = self.roots()
        if elements.shape[0] == 0:
            return {}

        # first_pos[r] is where root r first shows up while scanning elements
        unique_roots, first_pos, inverse = np.unique(roots, return_index=True, return_inverse=True)
        rank = np.empty(unique_roots.shape[0], dtype=INDEX_DTYPE)
        rank[np.argsort(first_pos, kind="stable")] = np.arange(unique_roots.shape[0], dtype=INDEX_DTYPE)
        ids = rank[inverse.reshape(-1)]

        order = np.argsort(ids, kind="stable")
        grouped = elements[order]
        bounds = np.searchsorted(ids[order], np.arange(unique_roots.shape[0] + 1))

        areas = {
            FIRST_COMPONENT_ID + g: grouped[bounds[g]:bounds[g + 1]]
            for g in range(unique_roots.shape[0])
        }
        logger.debug("Partitioned %d elements into %d sets", elements.shape[0], len(areas))
        return areas

    def __repr__(self) -> str:
        return (f"ArrayDisjointSet(capacity={self.capacity}, "
                f"elements={self._n_tracked}, sets={self._n_sets})")
