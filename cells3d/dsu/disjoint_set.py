# cells3d/dsu/disjoint_set.py
"""Generic disjoint-set forest over any totally ordered, hashable element type.

Parent links live in a dict; every root maps to itself. ``find_set`` is
iterative and compresses the whole path it walks, so deep trees never touch
the interpreter's recursion limit.
"""

from __future__ import annotations

from typing import Dict, Generic, Hashable, Iterator, List, Optional, Set, TypeVar

import logging
logger = logging.getLogger(__name__)

from cells3d.common.shared_types import FIRST_COMPONENT_ID
from cells3d.dsu.link_policy import LinkPolicy, RandomLinkPolicy
from cells3d.dsu.results import Found, NOT_FOUND, FindResult

T = TypeVar("T", bound=Hashable)


class DisjointSet(Generic[T]):
    """Union-find with full path compression and policy-driven linking."""

    __slots__ = ("_parent", "_policy", "_n_sets")

    def __init__(self, policy: Optional[LinkPolicy] = None) -> None:
        self._parent: Dict[T, T] = {}
        self._policy = policy if policy is not None else RandomLinkPolicy()
        self._n_sets = 0

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def make_set(self, a: T) -> None:
        """Track ``a`` as a singleton; no-op when already tracked."""
        if a not in self._parent:
            self._parent[a] = a
            self._n_sets += 1

    def find_set(self, a: T) -> T:
        """Root of ``a``'s tree. ``a`` must be tracked (KeyError otherwise)."""
        parent = self._parent
        root = a
        while parent[root] != root:
            root = parent[root]
        while parent[a] != root:
            parent[a], a = root, parent[a]
        return root

    def find_set_checked(self, a: T) -> FindResult:
        if a not in self._parent:
            return NOT_FOUND
        return Found(self.find_set(a))

    def _link(self, ra: T, rb: T) -> bool:
        if ra == rb:
            return False
        if self._policy.flip():
            ra, rb = rb, ra
        self._parent[rb] = ra
        self._n_sets -= 1
        return True

    def union_sets(self, a: T, b: T) -> bool:
        """Merge the sets of ``a`` and ``b``; both must be tracked.

        Returns True when two distinct trees were linked.
        """
        return self._link(self.find_set(a), self.find_set(b))

    def union_sets_checked(self, a: T, b: T) -> bool:
        """Like :meth:`union_sets`, but silently ignores untracked elements."""
        ra = self.find_set_checked(a)
        rb = self.find_set_checked(b)
        if not ra or not rb:
            return False
        return self._link(ra.value, rb.value)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_tracked(self, a: T) -> bool:
        return a in self._parent

    def __contains__(self, a: object) -> bool:
        return a in self._parent

    def __len__(self) -> int:
        return len(self._parent)

    def __iter__(self) -> Iterator[T]:
        return iter(self.elements())

    @property
    def n_sets(self) -> int:
        """Number of disjoint sets currently tracked."""
        return self._n_sets

    def elements(self) -> List[T]:
        """All tracked elements, ascending."""
        return sorted(self._parent)

    def leaders(self) -> Set[T]:
        """Distinct roots. Compresses every tracked element's path."""
        return {self.find_set(a) for a in self._parent}

    def partition(self) -> Dict[int, List[T]]:
        """Number the sets 1..n in ascending element order.

        An id is handed out the first time its root is reached while walking
        the tracked elements in ascending order; members come out ascending.
        """
        areas: Dict[int, List[T]] = {}
        rename: Dict[T, int] = {}
        next_id = FIRST_COMPONENT_ID
        for a in self.elements():
            leader = self.find_set(a)
            cid = rename.get(leader)
            if cid is None:
                cid = rename[leader] = next_id
                areas[cid] = []
                next_id += 1
            areas[cid].append(a)
        logger.debug("Partitioned %d elements into %d sets", len(self._parent), len(areas))
        return areas

    def __repr__(self) -> str:
        return f"DisjointSet(elements={len(self._parent)}, sets={self._n_sets})"
