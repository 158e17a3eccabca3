# cells3d/dsu/link_policy.py
"""Tie-break policies deciding which root survives a union.

A policy answers one question per link: ``True`` keeps the second argument's
root, ``False`` keeps the first's. Randomized linking gives no worst-case depth
bound; combined with path compression it is fast in practice.
"""

from __future__ import annotations

import numpy as np
from typing import Protocol, runtime_checkable

from cells3d.common.shared_types import BOOL_DTYPE, DEFAULT_LINK_SEED
from cells3d.common.random_source import BernoulliSource


@runtime_checkable
class LinkPolicy(Protocol):
    def flip(self) -> bool: ...
    def draw(self, n: int) -> np.ndarray: ...


class RandomLinkPolicy:
    """Unbiased seeded coin."""

    __slots__ = ("_source",)

    def __init__(self, seed: int = DEFAULT_LINK_SEED) -> None:
        self._source = BernoulliSource(seed=seed, p=0.5)

    def flip(self) -> bool:
        return self._source()

    def draw(self, n: int) -> np.ndarray:
        return self._source.fill(n)

    def __repr__(self) -> str:
        return f"RandomLinkPolicy(seed={self._source.seed!r})"


class FixedLinkPolicy:
    """Always returns the same answer; makes linking fully deterministic."""

    __slots__ = ("value",)

    def __init__(self, value: bool = False) -> None:
        self.value = bool(value)

    def flip(self) -> bool:
        return self.value

    def draw(self, n: int) -> np.ndarray:
        return np.full(n, self.value, dtype=BOOL_DTYPE)

    def __repr__(self) -> str:
        return f"FixedLinkPolicy({self.value})"
