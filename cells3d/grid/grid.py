# cells3d/grid/grid.py
"""Read-only 3D occupancy grid backed by a flat numpy array.

Cells are numbered X -> Y -> Z (X fastest), so the flat index of (i, j, k) is
``i + j * nx + k * nx * ny``. The backing array is marked read-only once the
grid is built.
"""

import numpy as np
from typing import Callable, Optional
import logging
logger = logging.getLogger(__name__)

from cells3d.common.shared_types import (
    OCC_DTYPE, BOOL_DTYPE, INDEX_DTYPE, Coord, Shape3D,
    DEFAULT_NX, DEFAULT_NY, DEFAULT_NZ, DEFAULT_GRID_SEED,
)
from cells3d.common.validation import validate_shape, check_coord, check_index
from cells3d.common.random_source import BernoulliSource
from cells3d.common.coord_utils import coord_to_idx_scalar, idx_to_coord_scalar

CellGenerator = Callable[[], bool]

# =============================================================================
# GRID CLASS
# =============================================================================
class OccupancyGrid:
    """
    Immutable occupancy store with coordinate <-> index mapping.

    The cell generator is called exactly once per cell, in index order. A
    generator that also provides ``fill(n)`` is asked for the whole volume in
    one call instead; ``fill(n)`` must return what ``n`` calls would have.
    """
    __slots__ = ("nx", "ny", "nz", "_volume", "_data")

    def __init__(
        self,
        nx: int = DEFAULT_NX,
        ny: int = DEFAULT_NY,
        nz: int = DEFAULT_NZ,
        generator: Optional[CellGenerator] = None,
    ) -> None:
        self.nx, self.ny, self.nz = validate_shape((nx, ny, nz))
        self._volume = self.nx * self.ny * self.nz

        if generator is None:
            generator = BernoulliSource(seed=DEFAULT_GRID_SEED)

        if hasattr(generator, "fill"):
            cells = np.asarray(generator.fill(self._volume), dtype=BOOL_DTYPE)
            if cells.shape != (self._volume,):
                raise ValueError(
                    f"generator.fill returned shape {cells.shape}, expected ({self._volume},)"
                )
        else:
            cells = np.fromiter(
                (bool(generator()) for _ in range(self._volume)),
                dtype=BOOL_DTYPE, count=self._volume,
            )

        self._data = self._freeze(cells)
        logger.debug("Built %dx%dx%d grid with %d occupied cells",
                     self.nx, self.ny, self.nz, self.n_occupied)

    @staticmethod
    def _freeze(cells: np.ndarray) -> np.ndarray:
        data = np.ascontiguousarray(cells, dtype=OCC_DTYPE)
        data.flags.writeable = False
        return data

    @classmethod
    def from_array(cls, occupancy: np.ndarray) -> "OccupancyGrid":
        """Build a grid from a 3D array indexed ``[i, j, k]``; nonzero means occupied."""
        occupancy = np.asarray(occupancy)
        if occupancy.ndim != 3:
            raise ValueError(f"occupancy must be a 3D array, got {occupancy.ndim}D")
        nx, ny, nz = validate_shape(occupancy.shape)

        # Fortran order makes the first axis fastest, matching the flat index
        flat = (occupancy != 0).ravel(order="F")
        grid = cls.__new__(cls)
        grid.nx, grid.ny, grid.nz = nx, ny, nz
        grid._volume = nx * ny * nz
        grid._data = cls._freeze(flat)
        return grid

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def shape(self) -> Shape3D:
        return self.nx, self.ny, self.nz

    @property
    def volume(self) -> int:
        return self._volume

    def __len__(self) -> int:
        return self._volume

    def index(self, i: int, j: int, k: int) -> int:
        """Flat index of (i, j, k); raises OutOfRangeError outside the grid."""
        i, j, k = check_coord(i, j, k, self.shape)
        return int(coord_to_idx_scalar(i, j, k, self.nx, self.ny))

    def coordinates(self, idx: int) -> Coord:
        """Inverse of :meth:`index`; raises OutOfRangeError outside the grid."""
        i, j, k = idx_to_coord_scalar(check_index(idx, self._volume), self.nx, self.ny)
        return int(i), int(j), int(k)

    # ------------------------------------------------------------------
    # Occupancy
    # ------------------------------------------------------------------
    def occupied(self, i: int, j: Optional[int] = None, k: Optional[int] = None) -> bool:
        """Occupancy bit by flat index ``occupied(idx)`` or by ``occupied(i, j, k)``."""
        if j is None and k is None:
            return bool(self._data[check_index(i, self._volume)])
        if j is None or k is None:
            raise TypeError("occupied() takes either a flat index or three coordinates")
        return bool(self._data[self.index(i, j, k)])

    @property
    def flat(self) -> np.ndarray:
        """Read-only flat uint8 occupancy array in index order."""
        return self._data

    @property
    def n_occupied(self) -> int:
        return int(np.count_nonzero(self._data))

    def occupied_indices(self) -> np.ndarray:
        """Ascending flat indices of all occupied cells."""
        return np.flatnonzero(self._data).astype(INDEX_DTYPE)

    def to_array(self) -> np.ndarray:
        """Boolean copy shaped (nx, ny, nz), indexed ``[i, j, k]``."""
        return self._data.astype(BOOL_DTYPE).reshape(self.shape, order="F")

    def __repr__(self) -> str:
        return (f"OccupancyGrid(nx={self.nx}, ny={self.ny}, nz={self.nz}, "
                f"occupied={self.n_occupied}/{self._volume})")
