# cells3d/connectivity/catalog.py
"""Normalize connectivity results into id -> ascending member indices."""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Tuple, Union

import logging
logger = logging.getLogger(__name__)

from cells3d.common.shared_types import (
    INDEX_DTYPE, LABEL_DTYPE, BACKGROUND_LABEL, FIRST_COMPONENT_ID, Shape3D,
)
from cells3d.dsu.disjoint_set import DisjointSet
from cells3d.dsu.array_forest import ArrayDisjointSet


@dataclass(frozen=True)
class LabelResult:
    """Per-cell component ids: 0 for unoccupied cells, 1..n_components otherwise."""
    labels: np.ndarray
    n_components: int
    shape: Shape3D

    def labels_3d(self) -> np.ndarray:
        """Labels reshaped to (nx, ny, nz), indexed ``[i, j, k]``."""
        return self.labels.reshape(self.shape, order="F")


ConnectivityResult = Union[LabelResult, DisjointSet, ArrayDisjointSet]


class ComponentCatalog:
    """Mapping from component id to the ascending indices of its cells."""

    __slots__ = ("_sets",)

    def __init__(self, sets: Mapping[int, Iterable[int]]) -> None:
        self._sets: Dict[int, np.ndarray] = {
            int(cid): np.sort(np.fromiter(members, dtype=INDEX_DTYPE))
            for cid, members in sets.items()
        }

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_labels(cls, result: LabelResult) -> "ComponentCatalog":
        labels = np.asarray(result.labels, dtype=LABEL_DTYPE)
        cells = np.flatnonzero(labels != BACKGROUND_LABEL).astype(INDEX_DTYPE)
        cell_labels = labels[cells]

        # stable sort keeps each group's cells in ascending index order
        order = np.argsort(cell_labels, kind="stable")
        grouped = cells[order]
        ids = np.arange(FIRST_COMPONENT_ID, FIRST_COMPONENT_ID + result.n_components + 1)
        bounds = np.searchsorted(cell_labels[order], ids)

        catalog = cls.__new__(cls)
        catalog._sets = {
            int(ids[g]): grouped[bounds[g]:bounds[g + 1]]
            for g in range(result.n_components)
        }
        return catalog

    @classmethod
    def from_disjoint_set(cls, forest: Union[DisjointSet, ArrayDisjointSet]) -> "ComponentCatalog":
        return cls(forest.partition())

    @classmethod
    def from_result(cls, result: ConnectivityResult) -> "ComponentCatalog":
        """Dispatch on the structure a strategy's ``connect`` returned."""
        if isinstance(result, LabelResult):
            catalog = cls.from_labels(result)
        elif isinstance(result, (DisjointSet, ArrayDisjointSet)):
            catalog = cls.from_disjoint_set(result)
        else:
            raise TypeError(f"Cannot catalog result of type {type(result).__name__}")
        logger.debug("Cataloged %d components over %d cells", len(catalog), catalog.n_cells)
        return catalog

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------
    def get_set(self, cid: int) -> np.ndarray:
        """Members of component ``cid``; KeyError for unknown ids."""
        return self._sets[cid]

    def __getitem__(self, cid: int) -> np.ndarray:
        return self._sets[cid]

    def __contains__(self, cid: object) -> bool:
        return cid in self._sets

    def __len__(self) -> int:
        return len(self._sets)

    def __iter__(self) -> Iterator[int]:
        return iter(self._sets)

    def ids(self) -> Tuple[int, ...]:
        return tuple(self._sets)

    def items(self) -> Iterator[Tuple[int, np.ndarray]]:
        return iter(self._sets.items())

    def as_dict(self) -> Dict[int, np.ndarray]:
        return dict(self._sets)

    def sizes(self) -> Dict[int, int]:
        return {cid: int(members.shape[0]) for cid, members in self._sets.items()}

    @property
    def n_cells(self) -> int:
        return sum(int(members.shape[0]) for members in self._sets.values())

    def largest(self) -> Optional[Tuple[int, np.ndarray]]:
        """The biggest component (lowest id wins ties), or None when empty."""
        if not self._sets:
            return None
        cid = max(self._sets, key=lambda c: (self._sets[c].shape[0], -c))
        return cid, self._sets[cid]

    def partition(self) -> FrozenSet[FrozenSet[int]]:
        """Id-agnostic view for comparing catalogs from different strategies."""
        return frozenset(frozenset(members.tolist()) for members in self._sets.values())

    def to_labels(self, volume: int) -> np.ndarray:
        """Flat label array of length ``volume`` using this catalog's ids."""
        labels = np.full(volume, BACKGROUND_LABEL, dtype=LABEL_DTYPE)
        for cid, members in self._sets.items():
            labels[members] = cid
        return labels

    def __repr__(self) -> str:
        return f"ComponentCatalog(components={len(self._sets)}, cells={self.n_cells})"
