"""Cancellable one-shot timers for the game clock.

The engine never sleeps; it asks a scheduler to call it back later.
``ManualScheduler`` only moves when told to (tests, replays), while
``PollingScheduler`` follows the monotonic clock and is pumped from a
frontend's input loop.
"""

from __future__ import annotations

import heapq
import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol

Callback = Callable[[], None]


class CancelToken(Protocol):
    def cancel(self) -> None: ...

    @property
    def cancelled(self) -> bool: ...


class Scheduler(Protocol):
    def schedule(self, delay_ms: int, callback: Callback) -> CancelToken: ...


@dataclass(order=True)
class _Entry:
    due_ms: float
    seq: int
    callback: Callback = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class _HeapScheduler:
    """Shared min-heap of pending callbacks ordered by due time."""

    def __init__(self) -> None:
        self._heap: list[_Entry] = []
        self._seq = itertools.count()

    def _now_ms(self) -> float:
        raise NotImplementedError

    def schedule(self, delay_ms: int, callback: Callback) -> _Entry:
        entry = _Entry(self._now_ms() + max(delay_ms, 0), next(self._seq), callback)
        heapq.heappush(self._heap, entry)
        return entry

    @property
    def pending(self) -> int:
        return sum(1 for e in self._heap if not e.cancelled)

    def _run_due(self, until_ms: float, on_step: Callable[[float], None]) -> int:
        """Fire every live entry due at or before *until_ms*, in order.

        Callbacks may schedule new entries; those run too if they fall due
        inside the window.
        """
        fired = 0
        while self._heap and self._heap[0].due_ms <= until_ms:
            entry = heapq.heappop(self._heap)
            if entry.cancelled:
                continue
            on_step(entry.due_ms)
            entry.cancelled = True
            entry.callback()
            fired += 1
        return fired


class ManualScheduler(_HeapScheduler):
    """Virtual clock that only advances through :meth:`advance`."""

    def __init__(self) -> None:
        super().__init__()
        self.now_ms: float = 0.0

    def _now_ms(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> int:
        """Move the clock forward by *ms* and return how many callbacks ran."""
        target = self.now_ms + ms

        def step(due: float) -> None:
            self.now_ms = due

        fired = self._run_due(target, step)
        self.now_ms = target
        return fired


class PollingScheduler(_HeapScheduler):
    """Wall-clock scheduler for a single-threaded event loop.

    Nothing runs in the background: call :meth:`run_pending` regularly,
    e.g. each time a keypress wait times out.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        super().__init__()
        self._clock = clock

    def _now_ms(self) -> float:
        return self._clock() * 1000.0

    def run_pending(self) -> int:
        return self._run_due(self._now_ms(), lambda _due: None)
