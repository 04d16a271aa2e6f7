"""Tests de la minuterie récurrente utilisée comme déclencheur sans Celery."""

import threading

import pytest

from spirithub.infra.ops.recurring_timer import RecurringTimer

FAST_INTERVAL = 0.01
WAIT_TIMEOUT = 2.0


def test_rejects_non_positive_interval() -> None:
    with pytest.raises(ValueError):
        RecurringTimer(0, lambda: None)


def test_runs_handler_repeatedly_until_stopped() -> None:
    calls = []
    done = threading.Event()

    def handler() -> None:
        calls.append(1)
        if len(calls) >= 3:
            done.set()

    with RecurringTimer(FAST_INTERVAL, handler) as timer:
        assert done.wait(WAIT_TIMEOUT)
        assert timer.running
    assert not timer.running
    assert timer.ticks >= 3


def test_handler_errors_do_not_stop_the_timer() -> None:
    """Une exception du handler est journalisée; les ticks suivants ont lieu."""
    calls = []
    done = threading.Event()

    def handler() -> None:
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")
        done.set()

    with RecurringTimer(FAST_INTERVAL, handler):
        assert done.wait(WAIT_TIMEOUT)
    assert len(calls) >= 2


def test_tick_runs_handler_synchronously() -> None:
    calls = []
    timer = RecurringTimer(3600, lambda: calls.append(1), run_immediately=False)
    timer.tick()
    assert calls == [1]
    assert timer.ticks == 1
    assert not timer.running


def test_start_is_idempotent() -> None:
    timer = RecurringTimer(3600, lambda: None, run_immediately=False)
    try:
        assert timer.start() is timer
        thread = timer._thread
        timer.start()
        assert timer._thread is thread
    finally:
        timer.stop()
