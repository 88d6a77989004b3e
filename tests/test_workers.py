import threading
import time

import pytest

from halkit.workers import WorkerExecution, WorkerTask


def test_task_execute_returns_function_result():
    task = WorkerTask("answer", lambda: "done")
    assert task.execute() == "done"
    assert task.name == "answer"


def test_default_task_prints_noop(capsys):
    WorkerTask().execute()
    assert capsys.readouterr().out == "default noop for task\n"


def test_added_tasks_are_run():
    first, second = threading.Event(), threading.Event()
    with WorkerExecution(2) as execution:
        assert execution.add_task(WorkerTask("first", first.set)) is True
        execution.add_task(WorkerTask("second", second.set))
        assert first.wait(2)
        assert second.wait(2)


def test_tasks_run_in_order_on_single_worker():
    order = []
    done = threading.Event()
    with WorkerExecution(1) as execution:
        for name in ("first", "second", "third"):
            execution.add_task(WorkerTask(name, lambda n=name: order.append(n)))
        execution.add_task(WorkerTask("done", done.set))
        assert done.wait(2)
    assert order == ["first", "second", "third"]


def test_two_workers_run_tasks_concurrently():
    barrier = threading.Barrier(2, timeout=2)
    passed = []
    lock = threading.Lock()

    def meet():
        barrier.wait()
        with lock:
            passed.append(True)

    with WorkerExecution(2) as execution:
        assert execution.add_task(WorkerTask("a", meet)) is True
        assert execution.add_task(WorkerTask("b", meet)) is True
        deadline = time.monotonic() + 3
        while len(passed) < 2 and time.monotonic() < deadline:
            time.sleep(0.01)
    assert execution.closed
    assert len(passed) == 2
    assert barrier.broken is False


def test_close_drops_queued_tasks():
    release = threading.Event()
    started = threading.Event()
    second_ran = threading.Event()

    def blocker():
        started.set()
        release.wait(5)

    execution = WorkerExecution(1)
    execution.add_task(WorkerTask("blocker", blocker))
    assert started.wait(2)
    execution.add_task(WorkerTask("second", second_ran.set))
    closer = threading.Thread(target=execution.close)
    closer.start()
    deadline = time.monotonic() + 2
    while not execution.closed and time.monotonic() < deadline:
        time.sleep(0.01)
    assert execution.closed
    release.set()
    closer.join(5)
    assert not closer.is_alive()
    assert not second_ran.is_set()
    assert execution.pending == 1


def test_add_after_close_raises():
    execution = WorkerExecution()
    execution.close()
    with pytest.raises(RuntimeError):
        execution.add_task(WorkerTask())


def test_invalid_worker_count_raises():
    with pytest.raises(ValueError):
        WorkerExecution(0)