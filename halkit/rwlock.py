"""A lock for many concurrent readers or one writer, and a contention demo.

With stagnation avoidance on, a writer that is waiting keeps new readers
out, so a steady stream of readers cannot starve it.
"""

from __future__ import annotations

import argparse
import contextlib
import dataclasses
import os
import threading
import time
from typing import Iterator, List, Optional, Sequence

READ_HOLD_SECONDS = 0.1
WRITE_HOLD_SECONDS = 0.5


class ReadWriteLock:
    """Shared read access for many threads, or exclusive write access for one."""

    def __init__(self, stagnant_avoidance: bool = True) -> None:
        self.stagnant_avoidance = stagnant_avoidance
        self._cond = threading.Condition()
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0

    @property
    def readers(self) -> int:
        """The number of readers holding the lock."""
        with self._cond:
            return self._readers

    @property
    def writers_waiting(self) -> int:
        """The number of writers waiting for the lock."""
        with self._cond:
            return self._writers_waiting

    @property
    def write_locked(self) -> bool:
        """Whether a writer holds the lock."""
        with self._cond:
            return self._writing

    def acquire_read(self) -> None:
        """Take shared access, waiting while a writer holds or (with avoidance) awaits it."""
        with self._cond:
            while self._writing or (self.stagnant_avoidance and self._writers_waiting):
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        """Give back shared access."""
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read without a matching acquire_read")
            self._readers -= 1
            self._cond.notify_all()

    def acquire_write(self) -> None:
        """Take exclusive access, waiting until no reader or writer holds the lock."""
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._readers > 0 or self._writing:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
                self._cond.notify_all()
            self._writing = True

    def release_write(self) -> None:
        """Give back exclusive access."""
        with self._cond:
            if not self._writing:
                raise RuntimeError("release_write without a matching acquire_write")
            self._writing = False
            self._cond.notify_all()

    @contextlib.contextmanager
    def reading(self) -> Iterator["ReadWriteLock"]:
        """Hold shared access for the duration of a ``with`` block."""
        self.acquire_read()
        try:
            yield self
        finally:
            self.release_read()

    @contextlib.contextmanager
    def writing(self) -> Iterator["ReadWriteLock"]:
        """Hold exclusive access for the duration of a ``with`` block."""
        self.acquire_write()
        try:
            yield self
        finally:
            self.release_write()


@dataclasses.dataclass
class ContentionResult:
    """How many times the writer and each reader got the lock."""

    writes: int
    reads: List[int]


def run_contention(duration: float, num_readers: int, stagnant_avoidance: bool) -> ContentionResult:
    """Run one writer (in the calling thread) against ``num_readers`` readers.

    Each side keeps taking the lock for ``duration`` seconds; readers hold it
    for READ_HOLD_SECONDS and the writer for WRITE_HOLD_SECONDS.  Readers
    start only once the writer has begun.
    """
    if num_readers < 0:
        raise ValueError(f"num_readers must not be negative, not {num_readers}")
    lock = ReadWriteLock(stagnant_avoidance)
    has_data = threading.Event()
    reads = [0] * num_readers

    def reader(slot: int) -> None:
        deadline = time.monotonic() + duration
        has_data.wait()
        while time.monotonic() < deadline:
            with lock.reading():
                reads[slot] += 1
                time.sleep(READ_HOLD_SECONDS)

    threads = [
        threading.Thread(target=reader, args=(slot,), name=f"reader-{slot}", daemon=True)
        for slot in range(num_readers)
    ]
    for thread in threads:
        thread.start()

    writes = 0
    deadline = time.monotonic() + duration
    has_data.set()
    while time.monotonic() < deadline:
        with lock.writing():
            writes += 1
            time.sleep(WRITE_HOLD_SECONDS)

    for thread in threads:
        thread.join()
    return ContentionResult(writes=writes, reads=reads)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the reader/writer contention demo and report the counts."""
    parser = argparse.ArgumentParser(
        prog="halkit-rwlock", description="Many readers against one writer."
    )
    parser.add_argument("--duration", type=float, default=5.0, help="seconds to run (default: 5)")
    parser.add_argument("--readers", type=int, default=16, help="reader threads (default: 16)")
    parser.add_argument(
        "--no-stagnant-avoidance",
        dest="stagnant_avoidance",
        action="store_false",
        help="let new readers in while the writer waits",
    )
    args = parser.parse_args(argv)

    print(f"# of hardware concurrency = {os.cpu_count() or 0}")
    result = run_contention(args.duration, args.readers, args.stagnant_avoidance)
    print(f"write thread runs {result.writes} times ")
    for slot, count in enumerate(result.reads):
        print(f"read thread[{slot}] runs {count} times")
    return 0