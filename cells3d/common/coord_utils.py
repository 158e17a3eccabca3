"""Coordinate utilities - numpy/numba native flat index <-> (i, j, k) mapping.

Cells are numbered X fastest, then Y, then Z:

    idx = i + j * nx + k * nx * ny

Every function takes the grid shape explicitly; nothing here assumes a fixed
board size.
"""

import numpy as np
from numba import njit
from typing import Tuple

from cells3d.common.shared_types import (
    COORD_DTYPE, INDEX_DTYPE, BOOL_DTYPE, Shape3D,
    format_bounds_error, format_index_error,
)
from cells3d.common.validation import OutOfRangeError

# Below this many coordinates plain numpy beats a jitted loop
VECTORIZATION_THRESHOLD = 100

# =============================================================================
# SCALAR KERNELS
# =============================================================================

@njit(cache=True, nogil=True, inline='always')
def coord_to_idx_scalar(i: int, j: int, k: int, nx: int, ny: int) -> int:
    """Scalar coordinate to index conversion (no bounds check)."""
    return i + nx * j + nx * ny * k


@njit(cache=True, nogil=True, inline='always')
def idx_to_coord_scalar(idx: int, nx: int, ny: int) -> Tuple[int, int, int]:
    """Scalar index to coordinate conversion (no bounds check)."""
    plane = nx * ny
    k = idx // plane
    rem = idx - k * plane
    j = rem // nx
    i = rem - j * nx
    return i, j, k

# =============================================================================
# CORE COORDINATE UTILITIES
# =============================================================================

class CoordinateUtils:
    """Centralized coordinate utilities - vectorized and batched."""

    coord_to_idx_scalar = staticmethod(coord_to_idx_scalar)
    idx_to_coord_scalar = staticmethod(idx_to_coord_scalar)

    @staticmethod
    @njit(cache=True)
    def _coord_to_idx_batch_numba(coords: np.ndarray, nx: int, ny: int) -> np.ndarray:
        """Numba coordinate to index conversion."""
        n = coords.shape[0]
        result = np.empty(n, dtype=INDEX_DTYPE)
        for r in range(n):
            result[r] = coord_to_idx_scalar(coords[r, 0], coords[r, 1], coords[r, 2], nx, ny)
        return result

    @staticmethod
    @njit(cache=True)
    def _idx_to_coord_batch_numba(indices: np.ndarray, nx: int, ny: int) -> np.ndarray:
        """Numba index to coordinate conversion."""
        n = indices.shape[0]
        result = np.empty((n, 3), dtype=COORD_DTYPE)
        for r in range(n):
            i, j, k = idx_to_coord_scalar(indices[r], nx, ny)
            result[r, 0] = i
            result[r, 1] = j
            result[r, 2] = k
        return result

    @staticmethod
    def in_bounds(coords: np.ndarray, shape: Shape3D) -> np.ndarray:
        """Bounds checking for coordinates - fully vectorized."""
        coords = np.atleast_2d(np.asarray(coords, dtype=COORD_DTYPE))
        upper = np.asarray(shape, dtype=COORD_DTYPE)
        return ((coords >= 0) & (coords < upper)).all(axis=1).astype(BOOL_DTYPE)

    @staticmethod
    def coord_to_idx(coords: np.ndarray, shape: Shape3D) -> np.ndarray:
        """Convert (N, 3) coordinates to flat indices, raising on out-of-range rows."""
        coords = np.atleast_2d(np.asarray(coords, dtype=COORD_DTYPE))
        if coords.ndim != 2 or coords.shape[1] != 3:
            raise ValueError(f"coords must have shape (N, 3), got {coords.shape}")

        valid = CoordinateUtils.in_bounds(coords, shape)
        if not valid.all():
            bad = coords[~valid][0].tolist()
            raise OutOfRangeError(format_bounds_error(tuple(bad), shape))

        nx, ny, _ = shape
        if coords.shape[0] > VECTORIZATION_THRESHOLD:
            return CoordinateUtils._coord_to_idx_batch_numba(coords, nx, ny)
        return (coords[:, 0] + nx * coords[:, 1] + nx * ny * coords[:, 2]).astype(INDEX_DTYPE)

    @staticmethod
    def idx_to_coord(indices: np.ndarray, shape: Shape3D) -> np.ndarray:
        """Convert flat indices to an (N, 3) coordinate array, raising on out-of-range entries."""
        indices = np.atleast_1d(np.asarray(indices, dtype=INDEX_DTYPE))
        nx, ny, nz = shape
        volume = nx * ny * nz

        bad = (indices < 0) | (indices >= volume)
        if bad.any():
            raise OutOfRangeError(format_index_error(int(indices[bad][0]), volume))

        if indices.shape[0] > VECTORIZATION_THRESHOLD:
            return CoordinateUtils._idx_to_coord_batch_numba(indices, nx, ny)

        plane = nx * ny
        coords = np.empty((indices.shape[0], 3), dtype=COORD_DTYPE, order='C')
        coords[:, 2] = indices // plane
        remainder = indices % plane
        coords[:, 1] = remainder // nx
        coords[:, 0] = remainder % nx
        return coords

# =============================================================================
# PUBLIC API FUNCTIONS
# =============================================================================

def coord_to_idx(coords: np.ndarray, shape: Shape3D) -> np.ndarray:
    """Vectorized coordinate -> flat index conversion."""
    return CoordinateUtils.coord_to_idx(coords, shape)


def idx_to_coord(indices: np.ndarray, shape: Shape3D) -> np.ndarray:
    """Vectorized flat index -> coordinate conversion."""
    return CoordinateUtils.idx_to_coord(indices, shape)


def in_bounds_vectorized(coords: np.ndarray, shape: Shape3D) -> np.ndarray:
    """Vectorized bounds checking for coordinate arrays."""
    return CoordinateUtils.in_bounds(coords, shape)
