"""A callable that hands out successive ids."""

from __future__ import annotations

from typing import Callable, Optional

NextFn = Callable[[int], int]


def _increment(current: int) -> int:
    return current + 1


class IDGenerator:
    """Returns the next id on each call, then advances it with a step function.

    The step function given at construction (default: add one) is used unless
    a call passes its own.
    """

    def __init__(self, start: int = 0, next_fn: NextFn = _increment) -> None:
        self._next = start
        self._next_fn = next_fn

    def __repr__(self) -> str:
        return f"IDGenerator(next={self._next})"

    @property
    def peek(self) -> int:
        """The id the next call will return."""
        return self._next

    def __call__(self, next_fn: Optional[NextFn] = None) -> int:
        current = self._next
        self._next = (next_fn or self._next_fn)(current)
        return current