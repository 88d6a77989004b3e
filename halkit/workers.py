"""A pool of worker threads consuming tasks from a shared queue."""

from __future__ import annotations

import enum
import threading
from collections import deque
from typing import Any, Callable, Deque, List, Optional


def _default_noop() -> None:
    print("default noop for task")


class WorkerTask:
    """A named unit of work; by default it only reports that it did nothing."""

    def __init__(self, name: str = "unknown", fn: Optional[Callable[[], Any]] = None) -> None:
        self.name = name
        self._fn = fn if fn is not None else _default_noop

    def __repr__(self) -> str:
        return f"WorkerTask(name={self.name!r})"

    def execute(self) -> Any:
        """Run the task and return what its function returns."""
        return self._fn()


class _State(enum.Enum):
    INITIALIZED = enum.auto()
    STOP = enum.auto()


class WorkerExecution:
    """Runs added tasks on ``num_workers`` threads, in the order they were added.

    Closing stops the workers once their current tasks end; tasks still
    queued are dropped.
    """

    def __init__(self, num_workers: int = 1) -> None:
        if num_workers < 1:
            raise ValueError(f"num_workers must be at least 1, not {num_workers}")
        self._tasks: Deque[WorkerTask] = deque()
        self._cond = threading.Condition()
        self._state = _State.INITIALIZED
        self._workers: List[threading.Thread] = [
            threading.Thread(target=self._run, name=f"worker-{n}", daemon=True)
            for n in range(num_workers)
        ]
        for worker in self._workers:
            worker.start()

    @property
    def num_workers(self) -> int:
        """The number of worker threads."""
        return len(self._workers)

    @property
    def closed(self) -> bool:
        """Whether the workers have been told to stop."""
        return self._state is _State.STOP

    @property
    def pending(self) -> int:
        """The number of tasks waiting for a worker."""
        with self._cond:
            return len(self._tasks)

    def add_task(self, task: WorkerTask) -> bool:
        """Queue ``task`` for the next free worker."""
        with self._cond:
            if self._state is _State.STOP:
                raise RuntimeError("cannot add a task to a closed worker execution")
            self._tasks.append(task)
            self._cond.notify_all()
        return True

    def _run(self) -> None:
        while True:
            with self._cond:
                while not self._tasks and self._state is not _State.STOP:
                    self._cond.wait()
                if self._state is _State.STOP:
                    return
                task = self._tasks.popleft()
            task.execute()

    def close(self) -> None:
        """Stop the workers and wait for them to finish their current tasks."""
        with self._cond:
            self._state = _State.STOP
            self._cond.notify_all()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()

    def __enter__(self) -> "WorkerExecution":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()