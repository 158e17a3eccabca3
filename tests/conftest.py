"""Shared fixtures: small hand-built grids and a brute-force BFS oracle."""

from collections import deque

import numpy as np
import pytest

from cells3d.common.random_source import BernoulliSource
from cells3d.grid.grid import OccupancyGrid


def bfs_components(grid: OccupancyGrid) -> frozenset:
    """Partition of occupied cells by plain breadth-first search over (i, j, k)."""
    nx, ny, nz = grid.shape
    occ = grid.to_array()
    seen = np.zeros_like(occ, dtype=bool)
    parts = []
    for k in range(nz):
        for j in range(ny):
            for i in range(nx):
                if not occ[i, j, k] or seen[i, j, k]:
                    continue
                members = set()
                queue = deque([(i, j, k)])
                seen[i, j, k] = True
                while queue:
                    x, y, z = queue.popleft()
                    members.add(x + y * nx + z * nx * ny)
                    for dx, dy, dz in ((1, 0, 0), (-1, 0, 0), (0, 1, 0),
                                       (0, -1, 0), (0, 0, 1), (0, 0, -1)):
                        a, b, c = x + dx, y + dy, z + dz
                        if 0 <= a < nx and 0 <= b < ny and 0 <= c < nz \
                                and occ[a, b, c] and not seen[a, b, c]:
                            seen[a, b, c] = True
                            queue.append((a, b, c))
                parts.append(frozenset(members))
    return frozenset(parts)


@pytest.fixture
def bfs_oracle():
    return bfs_components


@pytest.fixture
def three_blob_grid() -> OccupancyGrid:
    """3x3x3 grid with components {0, 1, 4}, {6} and {17, 26}."""
    occ = np.zeros((3, 3, 3), dtype=bool)
    occ[0, 0, 0] = occ[1, 0, 0] = occ[1, 1, 0] = True   # 0, 1, 4
    occ[0, 2, 0] = True                                 # 6
    occ[2, 2, 1] = occ[2, 2, 2] = True                  # 17, 26
    return OccupancyGrid.from_array(occ)


RANDOM_SHAPES = [(3, 3, 3), (4, 4, 4), (5, 3, 2), (1, 1, 7), (6, 1, 4), (2, 7, 3)]


@pytest.fixture(params=[(shape, seed, p)
                        for shape in RANDOM_SHAPES
                        for seed in (0, 7, 42)
                        for p in (0.3, 0.5, 0.7)],
                ids=lambda v: f"{v[0][0]}x{v[0][1]}x{v[0][2]}-s{v[1]}-p{v[2]}")
def random_grid(request) -> OccupancyGrid:
    (nx, ny, nz), seed, p = request.param
    return OccupancyGrid(nx, ny, nz, generator=BernoulliSource(seed=seed, p=p))
