# cells3d/common/random_source.py
"""Seeded random boolean sources.

The grid and the disjoint-set link policy both consume booleans one at a time.
Draws are buffered in fixed-size blocks from a ``numpy.random.Generator`` so
that ``fill(n)`` yields exactly the same values as ``n`` successive calls.
"""

from __future__ import annotations

import numpy as np

from cells3d.common.shared_types import (
    BOOL_DTYPE, DEFAULT_GRID_SEED, DEFAULT_OCCUPANCY_PROBABILITY, RANDOM_BLOCK_SIZE,
)
from cells3d.common.validation import validate_probability


class BernoulliSource:
    """Zero-argument callable producing i.i.d. booleans with P(True) == p."""

    __slots__ = ("seed", "p", "block_size", "_rng", "_buffer", "_pos")

    def __init__(
        self,
        seed: int = DEFAULT_GRID_SEED,
        p: float = DEFAULT_OCCUPANCY_PROBABILITY,
        block_size: int = RANDOM_BLOCK_SIZE,
    ) -> None:
        if block_size <= 0:
            raise ValueError("block_size must be positive")
        self.seed = seed
        self.p = validate_probability(p)
        self.block_size = int(block_size)
        self._rng = np.random.default_rng(seed)
        self._buffer = np.empty(0, dtype=BOOL_DTYPE)
        self._pos = 0

    def _refill(self) -> None:
        self._buffer = self._rng.random(self.block_size) < self.p
        self._pos = 0

    def __call__(self) -> bool:
        if self._pos >= self._buffer.shape[0]:
            self._refill()
        value = bool(self._buffer[self._pos])
        self._pos += 1
        return value

    def fill(self, n: int) -> np.ndarray:
        """Return the next ``n`` values as a bool array."""
        if n < 0:
            raise ValueError("n must be non-negative")
        out = np.empty(n, dtype=BOOL_DTYPE)
        written = 0
        while written < n:
            if self._pos >= self._buffer.shape[0]:
                self._refill()
            take = min(n - written, self._buffer.shape[0] - self._pos)
            out[written:written + take] = self._buffer[self._pos:self._pos + take]
            self._pos += take
            written += take
        return out

    def __repr__(self) -> str:
        return f"BernoulliSource(seed={self.seed!r}, p={self.p})"
