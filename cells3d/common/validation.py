# cells3d/common/validation.py
"""Consolidated validation for grid shapes, coordinates and flat indices."""

from __future__ import annotations

import numbers
from typing import Any, Sequence

from cells3d.common.shared_types import (
    Coord, Shape3D, format_bounds_error, format_index_error,
)

import logging
logger = logging.getLogger(__name__)

# ==============================================================================
# PRIMARY EXCEPTION CLASS
# ==============================================================================

class OutOfRangeError(IndexError):
    """Raised when a coordinate or cell index falls outside the grid."""
    pass

# ==============================================================================
# SHAPE VALIDATION
# ==============================================================================

def _as_int(value: Any, name: str) -> int:
    # bool is an Integral subclass, but a flag is never a valid extent
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(value)


def validate_shape(shape: Sequence[Any]) -> Shape3D:
    """Validate and normalize an (nx, ny, nz) triple of positive integers."""
    if len(shape) != 3:
        raise ValueError(f"shape must contain three integers, got {len(shape)}")
    nx, ny, nz = (_as_int(v, name) for v, name in zip(shape, ("nx", "ny", "nz")))
    if nx <= 0 or ny <= 0 or nz <= 0:
        raise ValueError(f"grid dimensions must be positive, got ({nx}, {ny}, {nz})")
    return nx, ny, nz


def validate_probability(p: float) -> float:
    """Validate an occupancy/coin probability in [0, 1]."""
    p = float(p)
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"probability must lie in [0, 1], got {p}")
    return p

# ==============================================================================
# BOUNDS VALIDATION
# ==============================================================================

def is_integral_index(value: Any) -> bool:
    """True for ints and numpy integers; False for bools, floats and the rest."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def check_coord(i: Any, j: Any, k: Any, shape: Shape3D) -> Coord:
    """Return (i, j, k) as ints or raise OutOfRangeError."""
    nx, ny, nz = shape
    if not (is_integral_index(i) and is_integral_index(j) and is_integral_index(k)):
        raise OutOfRangeError(f"non-integer coordinates: {format_bounds_error((i, j, k), shape)}")
    i, j, k = int(i), int(j), int(k)
    if not (0 <= i < nx):
        raise OutOfRangeError(f"illegal nx index: {format_bounds_error((i, j, k), shape)}")
    if not (0 <= j < ny):
        raise OutOfRangeError(f"illegal ny index: {format_bounds_error((i, j, k), shape)}")
    if not (0 <= k < nz):
        raise OutOfRangeError(f"illegal nz index: {format_bounds_error((i, j, k), shape)}")
    return i, j, k


def check_index(idx: Any, volume: int) -> int:
    """Return idx as an int or raise OutOfRangeError."""
    if not is_integral_index(idx):
        raise OutOfRangeError(f"non-integer index: {format_index_error(idx, volume)}")
    value = int(idx)
    if not (0 <= value < volume):
        raise OutOfRangeError(format_index_error(idx, volume))
    return value
