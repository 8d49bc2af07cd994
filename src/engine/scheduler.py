"""
Hi-Lo - Cooperative Scheduler

Single-threaded deferred calls. Nothing runs on its own: the owner calls
run_due() (from a UI refresh tick, or after advancing a ManualClock in
tests) and every task whose due time has passed runs in due order.
"""

from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)


class ManualClock:
    """Virtual clock for deterministic tests."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards ({seconds}).")
        self._now += seconds
        return self._now

    __call__ = now


@dataclass(order=True)
class ScheduledTask:
    """A deferred call. Ordered by due time, then by creation order."""
    due: float
    seq: int
    label: str = field(compare=False)
    action: Callable[[], None] = field(compare=False, repr=False)


class Scheduler:
    """Runs deferred continuations on the caller's thread."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._tasks: list[ScheduledTask] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._clock()

    def call_later(
        self, delay: float, action: Callable[[], None], label: str = ""
    ) -> ScheduledTask:
        """Schedule action to run once delay seconds have passed."""
        task = ScheduledTask(
            due=self.now() + delay,
            seq=next(self._counter),
            label=label,
            action=action,
        )
        self._tasks.append(task)
        self._tasks.sort()
        logger.debug("Scheduled %s in %.2fs", label or "task", delay)
        return task

    def run_due(self) -> int:
        """Run every task that is due. Returns the number of tasks run."""
        ran = 0
        while self._tasks and self._tasks[0].due <= self.now():
            task = self._tasks.pop(0)
            logger.debug("Running %s", task.label or "task")
            task.action()
            ran += 1
        return ran

    @property
    def pending(self) -> tuple[ScheduledTask, ...]:
        return tuple(self._tasks)

    def cancel_all(self) -> None:
        self._tasks.clear()
