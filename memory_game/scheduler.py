"""
Deferred tasks keyed by session generation.

Tasks are not cancelled one by one. A task scheduled for generation N is
only ever run while N is still the current generation; bumping the
generation makes every older task inert.
"""

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass(order=True)
class ScheduledTask:
    due_at: float
    seq: int
    generation: int = field(compare=False)
    callback: Callable[[], None] = field(compare=False)


class DeferredTasks:
    def __init__(self):
        self._heap: List[ScheduledTask] = []
        self._seq = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def schedule(self, due_at: float, generation: int, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(due_at, next(self._seq), generation, callback)
        heapq.heappush(self._heap, task)
        return task

    def next_due(self) -> Optional[float]:
        return self._heap[0].due_at if self._heap else None

    def discard_before(self, generation: int) -> int:
        """Drop every task scheduled for an older generation. Returns how many were dropped."""
        kept = [t for t in self._heap if t.generation >= generation]
        dropped = len(self._heap) - len(kept)
        if dropped:
            heapq.heapify(kept)
            self._heap = kept
            logger.debug("Discarded %d stale task(s) before generation %d", dropped, generation)
        return dropped

    def run_due(self, now: float, generation: int) -> int:
        """
        Run tasks due at or before `now`, earliest first.

        Tasks from any other generation are popped without running.
        Returns the number of callbacks that ran.
        """
        ran = 0
        while self._heap and self._heap[0].due_at <= now:
            task = heapq.heappop(self._heap)
            if task.generation != generation:
                logger.debug("Skipping stale task from generation %d", task.generation)
                continue
            task.callback()
            ran += 1
        return ran
