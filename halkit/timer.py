"""A timer that runs a callback repeatedly at a fixed interval."""

from __future__ import annotations

import contextlib
import datetime
import time
from typing import Any, Callable, Optional, Union

from halkit.proc import Proc, ProcState, checkpoint

Interval = Union[float, int, datetime.timedelta]

_SLICE_SECONDS = 0.05


def _seconds(interval: Interval) -> float:
    if isinstance(interval, datetime.timedelta):
        seconds = interval.total_seconds()
    else:
        seconds = float(interval)
    if seconds < 0:
        raise ValueError(f"interval must not be negative, not {interval!r}")
    return seconds


def _sleep(seconds: float) -> None:
    deadline = time.monotonic() + seconds
    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            break
        time.sleep(min(_SLICE_SECONDS, remaining))
        checkpoint()
    checkpoint()


class Timer:
    """Runs ``fn`` in its own thread every ``interval`` (seconds or timedelta)."""

    def __init__(self, interval: Interval, fn: Callable[[], Any]) -> None:
        self._proc = Proc("timer")
        self._fn = fn
        self._interval = _seconds(interval)
        self.start(interval, fn)

    @property
    def interval(self) -> float:
        """The current interval in seconds."""
        return self._interval

    @property
    def running(self) -> bool:
        """Whether the timer is running."""
        return self._proc.state is ProcState.RUNNING

    def start(self, interval: Interval, fn: Optional[Callable[[], Any]] = None) -> None:
        """Restart the timer with a new interval and, if given, a new callback."""
        self._interval = _seconds(interval)
        if fn is not None:
            self._fn = fn
        self.stop()
        self._proc.exec(self._run)

    def _run(self) -> None:
        interval, fn = self._interval, self._fn
        while True:
            _sleep(interval)
            fn()

    def stop(self) -> None:
        """Stop the timer; does nothing if it is not running."""
        with contextlib.suppress(Exception):
            self._proc.stop_exec()

    def __enter__(self) -> "Timer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()