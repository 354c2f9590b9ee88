from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

import itertools
import time

_sequence = itertools.count()


@dataclass(order=True)
class ScheduledTask:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    """Cooperative delayed-call queue.

    Nothing runs on its own: the owner calls ``run_due`` (typically on every
    request) and every task whose due time has passed is executed in order.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self.clock = clock or time.monotonic
        self._tasks: List[ScheduledTask] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(due=self.clock() + max(0.0, delay), seq=next(_sequence), callback=callback)
        self._tasks.append(task)
        self._tasks.sort()
        return task

    def pending(self) -> int:
        return sum(1 for task in self._tasks if not task.cancelled)

    def run_due(self) -> int:
        """Run every due, uncancelled task; return how many ran."""
        ran = 0
        now = self.clock()
        while self._tasks and self._tasks[0].due <= now:
            task = self._tasks.pop(0)
            if task.cancelled:
                continue
            task.callback()
            ran += 1
        return ran

    def cancel_all(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()
