"""Named worker threads with cooperative cancellation.

A :class:`Proc` runs a task in its own thread.  Stopping a proc is
cooperative: the task is asked to stop, and the request takes effect the
next time the task's thread reaches :func:`checkpoint` (directly or through
a blocking call in this package that polls it).  At that point
:class:`Cancelled` is raised inside the task's thread, unwinding it.
"""

from __future__ import annotations

import enum
import threading
import time
from typing import Callable, Optional

Task = Callable[[], object]

_local = threading.local()


class ProcState(enum.Enum):
    """Lifecycle of a :class:`Proc`."""

    INVALID = enum.auto()
    NEW = enum.auto()
    READY = enum.auto()
    RUNNING = enum.auto()


class Cancelled(BaseException):
    """Raised in a proc's thread at a checkpoint once the proc is stopped."""


def checkpoint() -> None:
    """Raise :class:`Cancelled` if the calling proc was asked to stop, then yield.

    Outside a proc's thread this only yields the processor.
    """
    event: Optional[threading.Event] = getattr(_local, "cancel", None)
    if event is not None and event.is_set():
        raise Cancelled()
    time.sleep(0)


class Proc:
    """A named thread that runs a task, which may be run again after it ends."""

    def __init__(self, name: str, fn: Optional[Task] = None) -> None:
        self.name = name
        self._fn: Optional[Task] = None
        self._state = ProcState.NEW
        self._thread: Optional[threading.Thread] = None
        self._cancel = threading.Event()
        self._error: Optional[BaseException] = None
        if fn is not None:
            self._set_task(fn)

    def __repr__(self) -> str:
        return f"Proc(name={self.name!r}, state={self._state.name})"

    @property
    def state(self) -> ProcState:
        """The current lifecycle state."""
        return self._state

    def _set_task(self, fn: Task) -> None:
        if self._state not in (ProcState.NEW, ProcState.READY):
            raise RuntimeError(
                f"The task of the Proc ({self.name}) cannot be replaced while it runs"
            )
        self._fn = fn
        self._state = ProcState.READY

    def exec(self, fn: Optional[Task] = None) -> bool:
        """Start the task (replacing it first if ``fn`` is given) in a new thread.

        Returns False if the thread could not be started.
        """
        if fn is not None:
            self._set_task(fn)
        if self._state is not ProcState.READY:
            raise RuntimeError(f"No task is assigned to the Proc ({self.name})")

        self._cancel = threading.Event()
        self._error = None
        thread = threading.Thread(
            target=self._run, args=(self._fn, self._cancel), name=self.name, daemon=True
        )
        old_state = self._state
        self._state = ProcState.RUNNING
        try:
            thread.start()
        except RuntimeError:
            self._state = old_state
            return False
        self._thread = thread
        return True

    def _run(self, fn: Task, cancel: threading.Event) -> None:
        _local.cancel = cancel
        try:
            fn()
        except Cancelled:
            pass
        except BaseException as exc:  # handed over to wait()
            self._error = exc
        finally:
            _local.cancel = None

    def wait(self) -> bool:
        """Block until the running task ends; re-raise any error it raised."""
        if self._state is not ProcState.RUNNING or self._thread is None:
            raise RuntimeError("No task is exec")
        self._thread.join()
        self._thread = None
        self._state = ProcState.READY
        error, self._error = self._error, None
        if error is not None:
            raise error
        return True

    def stop_exec(self) -> bool:
        """Ask the running task to stop and wait for it to end."""
        if self._state is not ProcState.RUNNING:
            raise RuntimeError("No task is exec")
        self._cancel.set()
        return self.wait()

    def __enter__(self) -> "Proc":
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._state is ProcState.RUNNING:
            self.stop_exec()