"""Top-level common API – importable from *any* package."""

# constants
from .shared_types import (
    INDEX_DTYPE, LABEL_DTYPE, COORD_DTYPE, OCC_DTYPE, BOOL_DTYPE,
    Coord, Shape3D,
)

# validation
from .validation import OutOfRangeError, validate_shape, check_coord, check_index

# coordinates
from .coord_utils import (
    coord_to_idx_scalar, idx_to_coord_scalar, coord_to_idx, idx_to_coord, in_bounds_vectorized,
)

# random sources
from .random_source import BernoulliSource

__all__ = [
    # constants
    "INDEX_DTYPE", "LABEL_DTYPE", "COORD_DTYPE", "OCC_DTYPE", "BOOL_DTYPE",
    "Coord", "Shape3D",
    # validation
    "OutOfRangeError", "validate_shape", "check_coord", "check_index",
    # coordinates
    "coord_to_idx_scalar", "idx_to_coord_scalar", "coord_to_idx", "idx_to_coord", "in_bounds_vectorized",
    # random sources
    "BernoulliSource",
]
