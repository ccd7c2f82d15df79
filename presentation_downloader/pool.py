"""Bounded worker pool with one result slot per task."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, TypeVar

LOGGER = logging.getLogger("presentation_downloader.pool")

T = TypeVar("T")


@dataclass(frozen=True)
class TaskOutcome(Generic[T]):
    """
    Settled result of one submitted task.

    Attributes:
        slot: Submission position of the task
        value: Return value when the task succeeded
        error: Exception raised by the task, None on success
    """
    slot: int
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


SettledCallback = Callable[[TaskOutcome[Any], int, int], None]


class WorkerPool(Generic[T]):
    """Run at most *capacity* tasks at once and collect every outcome.

    Each task owns a slot in the outcome list that is written exactly once,
    by the task itself, when it settles. A failing task never affects its
    siblings and :meth:`wait_all` only returns once every submitted task has
    either returned or raised. An error from the settle callback is logged
    and does not change the outcome already recorded for the task.
    """

    def __init__(self, capacity: int, *, on_settled: Optional[SettledCallback] = None) -> None:
        if capacity < 1:
            raise ValueError(f"Pool capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self.on_settled = on_settled
        self._executor = ThreadPoolExecutor(
            max_workers=capacity, thread_name_prefix="presentation-worker"
        )
        self._futures: List[Future] = []
        self._slots: List[Optional[TaskOutcome[T]]] = []
        self._settled = 0
        self._lock = threading.Lock()

    def __enter__(self) -> "WorkerPool[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def submit(self, fn: Callable[..., T], *args: Any) -> int:
        """Schedule ``fn(*args)`` and return the slot its outcome lands in."""

        slot = len(self._slots)
        self._slots.append(None)
        self._futures.append(self._executor.submit(self._run, slot, fn, args))
        return slot

    def _run(self, slot: int, fn: Callable[..., T], args: tuple) -> None:
        try:
            outcome: TaskOutcome[T] = TaskOutcome(slot=slot, value=fn(*args))
        except Exception as exc:
            outcome = TaskOutcome(slot=slot, error=exc)
        self._slots[slot] = outcome

        with self._lock:
            self._settled += 1
            settled = self._settled
        if self.on_settled:
            try:
                self.on_settled(outcome, settled, len(self._slots))
            except Exception:
                LOGGER.exception("Settle callback failed for task %d", slot)

    def wait_all(self) -> List[TaskOutcome[T]]:
        """Block until every task settled and return outcomes in slot order."""

        wait(self._futures)
        return [outcome for outcome in self._slots if outcome is not None]

    @property
    def submitted(self) -> int:
        return len(self._slots)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)


__all__ = ["TaskOutcome", "WorkerPool"]
