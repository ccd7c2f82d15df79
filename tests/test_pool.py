from __future__ import annotations

import threading
import time

import pytest

from presentation_downloader.pool import TaskOutcome, WorkerPool


def test_outcomes_are_returned_in_slot_order() -> None:
    delays = [0.05, 0.0, 0.03, 0.01]

    def task(position: int, delay: float) -> int:
        time.sleep(delay)
        return position * 10

    with WorkerPool(2) as pool:
        slots = [pool.submit(task, position, delay) for position, delay in enumerate(delays)]
        outcomes = pool.wait_all()

    assert slots == [0, 1, 2, 3]
    assert [outcome.slot for outcome in outcomes] == [0, 1, 2, 3]
    assert [outcome.value for outcome in outcomes] == [0, 10, 20, 30]


def test_failures_do_not_affect_siblings() -> None:
    def task(position: int) -> int:
        if position % 2:
            raise RuntimeError(f"task {position} failed")
        return position

    with WorkerPool(3) as pool:
        for position in range(6):
            pool.submit(task, position)
        outcomes = pool.wait_all()

    assert len(outcomes) == 6
    assert [outcome.value for outcome in outcomes if outcome.ok] == [0, 2, 4]
    failed = [outcome for outcome in outcomes if not outcome.ok]
    assert [str(outcome.error) for outcome in failed] == [
        "task 1 failed",
        "task 3 failed",
        "task 5 failed",
    ]


def test_capacity_bounds_concurrency() -> None:
    lock = threading.Lock()
    state = {"running": 0, "peak": 0}

    def task() -> None:
        with lock:
            state["running"] += 1
            state["peak"] = max(state["peak"], state["running"])
        time.sleep(0.02)
        with lock:
            state["running"] -= 1

    with WorkerPool(3) as pool:
        for _ in range(12):
            pool.submit(task)
        pool.wait_all()

    assert 1 <= state["peak"] <= 3


def test_runs_tasks_in_parallel() -> None:
    barrier = threading.Barrier(2, timeout=5)

    def task() -> bool:
        barrier.wait()
        return True

    with WorkerPool(2) as pool:
        pool.submit(task)
        pool.submit(task)
        outcomes = pool.wait_all()

    assert all(outcome.ok and outcome.value for outcome in outcomes)


def test_wait_all_waits_for_every_task() -> None:
    finished = []

    def task(position: int) -> None:
        time.sleep(0.01 * position)
        finished.append(position)

    with WorkerPool(2) as pool:
        for position in range(5):
            pool.submit(task, position)
        outcomes = pool.wait_all()
        assert sorted(finished) == [0, 1, 2, 3, 4]
        assert len(outcomes) == 5


def test_on_settled_is_called_once_per_task() -> None:
    calls = []
    lock = threading.Lock()

    def on_settled(outcome: TaskOutcome, settled: int, total: int) -> None:
        with lock:
            calls.append((outcome.slot, settled))

    def task(position: int) -> int:
        if position == 2:
            raise ValueError("boom")
        return position

    with WorkerPool(2, on_settled=on_settled) as pool:
        for position in range(4):
            pool.submit(task, position)
        pool.wait_all()

    assert sorted(slot for slot, _ in calls) == [0, 1, 2, 3]
    assert sorted(settled for _, settled in calls) == [1, 2, 3, 4]


def test_empty_pool_returns_no_outcomes() -> None:
    with WorkerPool(2) as pool:
        assert pool.wait_all() == []
        assert pool.submitted == 0


@pytest.mark.parametrize("capacity", [0, -1])
def test_invalid_capacity(capacity: int) -> None:
    with pytest.raises(ValueError):
        WorkerPool(capacity)


def test_failing_settle_callback_keeps_every_outcome(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("ERROR", logger="presentation_downloader")
    lock = threading.Lock()
    seen = []

    def on_settled(outcome: TaskOutcome, settled: int, total: int) -> None:
        with lock:
            seen.append(settled)
        if settled == 2:
            raise RuntimeError("progress display broke")

    with WorkerPool(2, on_settled=on_settled) as pool:
        for position in range(4):
            pool.submit(lambda value: value * 2, position)
        outcomes = pool.wait_all()

    assert [outcome.value for outcome in outcomes] == [0, 2, 4, 6]
    assert all(outcome.ok for outcome in outcomes)
    assert sorted(seen) == [1, 2, 3, 4]
    assert "Settle callback failed" in caplog.text
    assert "progress display broke" in caplog.text
