"""Discriminated result of a membership-checked lookup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(slots=True, frozen=True)
class Found:
    """The element is tracked; ``value`` is its root."""
    value: Any

    def __bool__(self) -> bool:
        return True


@dataclass(slots=True, frozen=True)
class NotFound:
    """The element is not tracked by the forest."""

    def __bool__(self) -> bool:
        return False


NOT_FOUND = NotFound()

FindResult = Union[Found, NotFound]
