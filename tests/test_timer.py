import datetime
import threading
import time

import pytest

from halkit.timer import Timer


def test_timer_runs_after_interval_not_before():
    fired = threading.Event()
    with Timer(0.3, fired.set) as timer:
        assert not fired.is_set()
        assert fired.wait(3.0)
        assert timer.running


def test_timer_repeats():
    calls = []
    with Timer(0.05, lambda: calls.append(1)):
        time.sleep(0.5)
    assert len(calls) >= 3


def test_stop_halts_callbacks():
    calls = []
    timer = Timer(0.05, lambda: calls.append(1))
    time.sleep(0.3)
    timer.stop()
    assert not timer.running
    seen = len(calls)
    time.sleep(0.3)
    assert len(calls) == seen


def test_stop_twice_is_harmless():
    timer = Timer(10, lambda: None)
    timer.stop()
    timer.stop()
    assert not timer.running


def test_start_replaces_callback_and_interval():
    first = threading.Event()
    second = threading.Event()
    timer = Timer(10, first.set)
    timer.start(datetime.timedelta(milliseconds=50), second.set)
    try:
        assert timer.interval == pytest.approx(0.05)
        assert second.wait(3.0)
        assert not first.is_set()
    finally:
        timer.stop()


def test_start_keeps_callback_when_none_given():
    fired = threading.Event()
    timer = Timer(10, fired.set)
    timer.start(0.05)
    try:
        assert fired.wait(3.0)
    finally:
        timer.stop()


def test_negative_interval_rejected():
    with pytest.raises(ValueError):
        Timer(-1, lambda: None)