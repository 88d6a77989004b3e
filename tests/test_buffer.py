import threading
import time

import pytest

from halkit.buffer import Buffer, LimitBuffer
from halkit.proc import Proc, ProcState


def test_proc_pops_pushed_strings_in_order_and_can_be_stopped():
    buf = Buffer()
    popped = []
    proc = Proc("proc", lambda: popped.append(buf.pop()))

    value = "hello"
    buf.push(value)
    proc.exec()
    proc.wait()

    buf.push("abc")
    proc.exec()
    proc.wait()

    assert popped == ["hello", "abc"]

    # A third run blocks on the empty buffer until it is stopped.
    proc.exec()
    time.sleep(0.1)
    assert proc.state is ProcState.RUNNING
    assert proc.stop_exec() is True
    assert popped == ["hello", "abc"]


def test_int_buffer_round_trip():
    int_buf = Buffer()
    int_buf.push(2)
    assert int_buf.pop() == 2


def test_pushed_value_is_left_unchanged():
    buf = Buffer()
    to_buf = "not move"
    buf.push(to_buf)
    from_buf = buf.pop()
    assert from_buf == "not move"
    assert to_buf == "not move"


def test_buffer_is_fifo():
    buf = Buffer()
    for item in ["a", "b", "c"]:
        buf.push(item)
    assert [buf.pop(), buf.pop(), buf.pop()] == ["a", "b", "c"]


def test_pop_nowait_on_empty_returns_none():
    buf = Buffer()
    assert buf.pop_nowait() is None
    buf.push("x")
    assert buf.pop_nowait() == "x"
    assert buf.pop_nowait() is None


def test_pop_blocks_until_item_is_pushed():
    buf = Buffer()
    got = []
    proc = Proc("consumer", lambda: got.append(buf.pop()))
    proc.exec()
    time.sleep(0.1)
    assert got == []
    buf.push("late")
    proc.wait()
    assert got == ["late"]


def test_wait_for_empty_returns_total_passed_through():
    buf = Buffer()
    items = ["one", "two", "three"]
    for item in items:
        buf.push(item)

    def drain():
        for _ in items:
            buf.pop()

    proc = Proc("drain", drain)
    proc.exec()
    assert buf.wait_for_empty() == len(items)
    proc.wait()


def test_wait_for_empty_on_fresh_buffer():
    assert Buffer().wait_for_empty() == 0


def test_limit_buffer_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        LimitBuffer(0)


def test_limit_buffer_default_capacity():
    assert LimitBuffer().capacity == 1


def test_limit_buffer_push_blocks_while_full():
    buf = LimitBuffer(1)
    buf.push("first")
    pushed = threading.Event()

    def producer():
        buf.push("second")
        pushed.set()

    proc = Proc("producer", producer)
    proc.exec()
    time.sleep(0.1)
    assert not pushed.is_set()
    assert len(buf) == 1

    assert buf.pop() == "first"
    proc.wait()
    assert pushed.is_set()
    assert len(buf) == 1
    assert buf.pop() == "second"
    assert len(buf) == 0


def test_limit_buffer_blocked_push_can_be_stopped():
    buf = LimitBuffer(1)
    buf.push("held")
    proc = Proc("stuck", lambda: buf.push("never"))
    proc.exec()
    time.sleep(0.1)
    assert proc.stop_exec() is True
    assert len(buf) == 1
    assert buf.pop_nowait() == "held"


def test_limit_buffer_pop_nowait_on_empty_keeps_size():
    buf = LimitBuffer(2)
    assert buf.pop_nowait() is None
    assert len(buf) == 0
    buf.push("a")
    buf.push("b")
    assert len(buf) == 2
    assert buf.pop_nowait() == "a"
    assert len(buf) == 1


def test_limit_buffer_wait_for_empty_counts_items():
    buf = LimitBuffer(2)
    items = [1, 2, 3, 4]

    def produce():
        for item in items:
            buf.push(item)

    producer = Proc("producer", produce)
    producer.exec()
    received = [buf.pop() for _ in items]
    producer.wait()
    assert received == items
    assert buf.wait_for_empty() == len(items)