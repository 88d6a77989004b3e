"""A ring buffer shared by several writers and one reader, growing on demand.

Writers fill the buffer faster than the reader drains it.  Rather than
overrunning the reader, a writer that finds the buffer full extends it by
``stepup_size`` slots, up to ``max_size``.  Once the buffer has reached
``max_size``, a writer waits for the reader to free a slot instead.

When the buffer grows, the slots on whichever side of the read position is
shorter are moved into the new region, so the fewest items are copied.
"""

from __future__ import annotations

import argparse
import datetime
import logging
import sys
import threading
import time
from typing import Callable, List, Optional, Sequence

log = logging.getLogger(__name__)


class RingBuffer:
    """A FIFO ring of ints; writers and readers wait until :meth:`start` is called.

    One slot is always left free, so a buffer of ``size`` slots holds at most
    ``size - 1`` items before it has to grow.
    """

    def __init__(self, size: int = 50, stepup_size: int = 20, max_size: int = 500) -> None:
        if size < 2:
            raise ValueError(f"size must be at least 2, not {size}")
        if stepup_size < 1:
            raise ValueError(f"stepup_size must be at least 1, not {stepup_size}")
        if max_size < size:
            raise ValueError(f"max_size ({max_size}) must not be less than size ({size})")
        self._buffer: List[int] = [0] * size
        self._size = size
        self.stepup_size = stepup_size
        self.max_size = max_size
        self._r_index = 0
        self._w_index = 0
        self._paused = True
        self._lock = threading.Lock()
        self._started = threading.Condition(self._lock)
        self._readable = threading.Condition(self._lock)
        self._writable = threading.Condition(self._lock)

    def __repr__(self) -> str:
        return f"RingBuffer(size={self.size}, max_size={self.max_size}, items={len(self)})"

    @property
    def size(self) -> int:
        """The current number of slots."""
        with self._lock:
            return self._size

    def __len__(self) -> int:
        with self._lock:
            return (self._w_index - self._r_index) % self._size

    def start(self) -> None:
        """Let writers and readers proceed."""
        with self._lock:
            self._paused = False
            self._started.notify_all()

    @staticmethod
    def _await(
        cond: threading.Condition, predicate: Callable[[], bool], deadline: Optional[float]
    ) -> None:
        remaining = None if deadline is None else deadline - time.monotonic()
        if not cond.wait_for(predicate, remaining):
            raise TimeoutError("timed out waiting on the ring buffer")

    @staticmethod
    def _deadline(timeout: Optional[float]) -> Optional[float]:
        return None if timeout is None else time.monotonic() + timeout

    def write(self, value: int, timeout: Optional[float] = None) -> None:
        """Write ``value``, growing the buffer if it is full and may still grow.

        Raises TimeoutError if no slot frees up within ``timeout`` seconds.
        """
        deadline = self._deadline(timeout)
        with self._lock:
            self._await(self._started, lambda: not self._paused, deadline)
            while self._full():
                if self._size >= self.max_size:
                    log.info("pause writer %d", threading.get_ident())
                    self._await(self._writable, lambda: not self._full(), deadline)
                else:
                    self._grow()
            self._buffer[self._w_index] = value
            self._w_index = (self._w_index + 1) % self._size
            self._readable.notify_all()

    def read(self, timeout: Optional[float] = None) -> int:
        """Remove and return the oldest value, waiting for one to arrive.

        Raises TimeoutError if nothing arrives within ``timeout`` seconds.
        """
        deadline = self._deadline(timeout)
        with self._lock:
            self._await(self._started, lambda: not self._paused, deadline)
            self._await(self._readable, lambda: self._r_index != self._w_index, deadline)
            value = self._buffer[self._r_index]
            self._r_index = (self._r_index + 1) % self._size
            self._writable.notify_all()
            return value

    def _full(self) -> bool:
        return (self._w_index + 1) % self._size == self._r_index

    def _grow(self) -> None:
        # Caller holds the lock and has found the buffer full.
        old_size = self._size
        new_size = min(self.max_size, old_size + self.stepup_size)
        old = list(self._buffer)
        self._buffer.extend([0] * (new_size - old_size))
        log.info(
            "writer thread %d extends ringbuffer size from %d to %d",
            threading.get_ident(),
            old_size,
            new_size,
        )
        r_index = self._r_index
        if r_index == 0:
            pass  # the free slots already follow the write position
        elif r_index > old_size // 2:
            moved = old_size - r_index
            self._buffer[new_size - moved:new_size] = old[r_index:old_size]
            self._r_index = new_size - moved
        else:
            w_index = old_size
            for value in old[: r_index - 1]:
                self._buffer[w_index] = value
                w_index = (w_index + 1) % new_size
            self._w_index = w_index
        self._size = new_size


def _timestamp() -> str:
    return datetime.datetime.now().strftime("%X")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run writers and one reader against a shared ring buffer and report counts."""
    parser = argparse.ArgumentParser(
        prog="halkit-ringbuffer", description="Several writers and one reader on a ring buffer."
    )
    parser.add_argument("--writers", type=int, default=2, help="writer threads (default: 2)")
    parser.add_argument("--writer-seconds", type=float, default=60.0, help="default: 60")
    parser.add_argument("--reader-seconds", type=float, default=240.0, help="default: 240")
    parser.add_argument("--write-interval", type=float, default=0.5, help="default: 0.5")
    parser.add_argument("--read-interval", type=float, default=1.0, help="default: 1")
    parser.add_argument(
        "--idle-timeout", type=float, default=10.0, help="reader quits after this idle time"
    )
    parser.add_argument("--size", type=int, default=50, help="initial slots (default: 50)")
    parser.add_argument("--stepup", type=int, default=20, help="growth step (default: 20)")
    parser.add_argument("--max-size", type=int, default=500, help="most slots (default: 500)")
    args = parser.parse_args(argv)

    ring = RingBuffer(args.size, args.stepup, args.max_size)
    out_lock = threading.Lock()

    def say(text: str) -> None:
        with out_lock:
            sys.stdout.write(text + "\n")
            sys.stdout.flush()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    log.addHandler(handler)
    previous_level = log.level
    log.setLevel(logging.INFO)

    def writer(initial_value: int) -> None:
        count = 0
        value = initial_value
        deadline = time.monotonic() + args.writer_seconds
        while (remaining := deadline - time.monotonic()) > 0:
            try:
                ring.write(value, timeout=max(1.0, remaining))
            except TimeoutError:
                break
            value += 1
            count += 1
            time.sleep(args.write_interval)
        say(f"writer thread id = {threading.get_ident()}, write count = {count}")

    def reader() -> None:
        count = 0
        deadline = time.monotonic() + args.reader_seconds
        while time.monotonic() < deadline:
            try:
                ring.read(timeout=args.idle_timeout)
            except TimeoutError:
                break
            count += 1
            time.sleep(args.read_interval)
        say(f"reader thread id = {threading.get_ident()}, read count = {count}")

    try:
        say(f"Current time before run is {_timestamp()}")
        threads = [
            threading.Thread(target=writer, args=(1,), name=f"writer-{n}", daemon=True)
            for n in range(args.writers)
        ]
        threads.append(threading.Thread(target=reader, name="reader", daemon=True))
        for thread in threads:
            thread.start()
        ring.start()
        for thread in threads:
            thread.join()
        say(f"Current time after run is {_timestamp()}")
    finally:
        log.removeHandler(handler)
        log.setLevel(previous_level)
    return 0