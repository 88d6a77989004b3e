"""Thread-safe FIFO queues: unbounded and bounded.

Blocking calls poll :func:`halkit.proc.checkpoint`, so a proc blocked in
them can be stopped with :meth:`halkit.proc.Proc.stop_exec`.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Generic, Optional, TypeVar

from halkit.proc import checkpoint

T = TypeVar("T")

_POLL_SECONDS = 0.05
_MISSING = object()


class Buffer(Generic[T]):
    """An unbounded FIFO queue: push never blocks, pop blocks while empty."""

    def __init__(self) -> None:
        self._queue: Deque[T] = deque()
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._empty = threading.Condition(self._lock)
        self._push_count = 0
        self._pop_count = 0

    def push(self, item: T) -> None:
        """Append ``item`` to the back of the queue."""
        checkpoint()
        with self._lock:
            self._append(item)

    def pop(self) -> T:
        """Remove and return the front item, blocking while the queue is empty."""
        return self._pop(wait=True)

    def pop_nowait(self) -> Optional[T]:
        """Remove and return the front item, or None if the queue is empty."""
        item = self._pop(wait=False)
        return None if item is _MISSING else item

    def wait_for_empty(self) -> int:
        """Block until the queue is empty; return how many items passed through it."""
        checkpoint()
        with self._lock:
            while self._queue:
                self._empty.wait(_POLL_SECONDS)
                checkpoint()
            assert self._pop_count == self._push_count
            return self._pop_count

    def _append(self, item: T) -> None:
        # Caller holds the lock.
        self._queue.append(item)
        self._push_count += 1
        self._not_empty.notify()

    def _removed(self) -> None:
        """Hook run with the lock held after an item leaves the queue."""

    def _pop(self, wait: bool):
        checkpoint()
        with self._lock:
            if not self._queue:
                if not wait:
                    return _MISSING
                while not self._queue:
                    self._not_empty.wait(_POLL_SECONDS)
                    checkpoint()
            item = self._queue.popleft()
            self._pop_count += 1
            self._removed()
            if not self._queue:
                self._empty.notify_all()
            return item


class LimitBuffer(Buffer[T]):
    """A FIFO queue holding at most ``capacity`` items; push blocks while full."""

    def __init__(self, capacity: int = 1) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, not {capacity}")
        super().__init__()
        self.capacity = capacity
        self._not_full = threading.Condition(self._lock)

    def push(self, item: T) -> None:
        """Append ``item``, blocking while the queue holds ``capacity`` items."""
        checkpoint()
        with self._lock:
            while len(self._queue) >= self.capacity:
                self._not_full.wait(_POLL_SECONDS)
                checkpoint()
            self._append(item)

    def pop(self) -> T:
        """Remove and return the front item, blocking while empty; frees a slot."""
        return super().pop()

    def pop_nowait(self) -> Optional[T]:
        """Remove and return the front item, or None if empty; frees a slot."""
        return super().pop_nowait()

    def wait_for_empty(self) -> int:
        """Block until the queue is empty; return how many items passed through it."""
        return super().wait_for_empty()

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)

    def _removed(self) -> None:
        self._not_full.notify()