# cells3d/connectivity/flood_fill.py - NUMBA EXPLICIT-STACK VERSION
"""Depth-first flood fill labelling of 6-connected occupied cells.

Cells are scanned in index order (X fastest, then Y, then Z). Every unvisited
occupied cell seeds a new component that is grown with a preallocated numpy
stack, so a component spanning the whole grid never touches the call stack.
"""

from __future__ import annotations

import numpy as np
from numba import njit

import logging
logger = logging.getLogger(__name__)

from cells3d.common.shared_types import (
    INDEX_DTYPE, LABEL_DTYPE, BOOL_DTYPE, BACKGROUND_LABEL, FIRST_COMPONENT_ID,
)
from cells3d.common.coord_utils import idx_to_coord_scalar
from cells3d.grid.grid import OccupancyGrid
from cells3d.connectivity.catalog import ComponentCatalog, LabelResult


@njit(cache=True, nogil=True)
def _push_if_new(occ, visited, stack, top, nb):
    """Mark ``nb`` visited and push it when occupied; returns the new stack top."""
    if not visited[nb]:
        visited[nb] = True
        if occ[nb] != 0:
            stack[top] = nb
            top += 1
    return top


@njit(cache=True, nogil=True)
def _flood_fill_numba(occ: np.ndarray, nx: int, ny: int, nz: int):
    """
    Label every occupied cell with its component id.

    Each cell is marked visited when first examined, whether occupied or not,
    so it is pushed at most once and the stack never outgrows the grid.
    """
    n = occ.shape[0]
    plane = nx * ny
    labels = np.full(n, BACKGROUND_LABEL, dtype=LABEL_DTYPE)
    visited = np.zeros(n, dtype=BOOL_DTYPE)
    stack = np.empty(n, dtype=INDEX_DTYPE)
    next_label = FIRST_COMPONENT_ID

    for seed in range(n):
        if visited[seed]:
            continue
        visited[seed] = True
        if occ[seed] == 0:
            continue

        stack[0] = seed
        top = 1
        while top > 0:
            top -= 1
            cur = stack[top]
            labels[cur] = next_label

            i, j, k = idx_to_coord_scalar(cur, nx, ny)

            if k < nz - 1:
                top = _push_if_new(occ, visited, stack, top, cur + plane)
            if j < ny - 1:
                top = _push_if_new(occ, visited, stack, top, cur + nx)
            if i < nx - 1:
                top = _push_if_new(occ, visited, stack, top, cur + 1)
            if k > 0:
                top = _push_if_new(occ, visited, stack, top, cur - plane)
            if j > 0:
                top = _push_if_new(occ, visited, stack, top, cur - nx)
            if i > 0:
                top = _push_if_new(occ, visited, stack, top, cur - 1)

        next_label += 1

    return labels, next_label - FIRST_COMPONENT_ID


def flood_fill_labels(grid: OccupancyGrid) -> LabelResult:
    """Run the flood fill kernel over ``grid``."""
    labels, n_components = _flood_fill_numba(grid.flat, grid.nx, grid.ny, grid.nz)
    logger.debug("Flood fill found %d components in %s", n_components, grid)
    return LabelResult(labels=labels, n_components=int(n_components), shape=grid.shape)


class FloodFill:
    """Connectivity by explicit-stack depth-first traversal."""

    name = "flood_fill"

    def connect(self, grid: OccupancyGrid) -> LabelResult:
        return flood_fill_labels(grid)

    def run(self, grid: OccupancyGrid) -> ComponentCatalog:
        return ComponentCatalog.from_result(self.connect(grid))

    def __repr__(self) -> str:
        return "FloodFill()"
