"""Cancellable delayed callbacks for opponent pacing.

ThreadingScheduler runs callbacks on daemon timer threads. ManualScheduler
queues them until run_pending() is called, which keeps tests and the text
front end deterministic.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Protocol

logger = logging.getLogger(__name__)


class ScheduledCall(Protocol):
    """Handle returned by a scheduler."""

    def cancel(self) -> None:
        ...

    @property
    def cancelled(self) -> bool:
        ...


class Scheduler(Protocol):
    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        ...


class _TimerCall:
    def __init__(self, timer: threading.Timer) -> None:
        self._timer = timer
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        self._timer.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ThreadingScheduler:
    """Runs each callback on a daemon threading.Timer."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> _TimerCall:
        timer = threading.Timer(max(0.0, delay), callback)
        timer.daemon = True
        timer.start()
        return _TimerCall(timer)


class _ManualCall:
    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self._cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler:
    """Queues calls until run_pending() is invoked.

    Example:
        >>> scheduler = ManualScheduler()
        >>> handle = scheduler.schedule(0.5, lambda: print("fired"))
        >>> scheduler.run_pending()
        fired
        1
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._queue: List[_ManualCall] = []

    def schedule(self, delay: float, callback: Callable[[], None]) -> _ManualCall:
        call = _ManualCall(delay, callback)
        with self._lock:
            self._queue.append(call)
        return call

    @property
    def pending(self) -> List[_ManualCall]:
        with self._lock:
            return [c for c in self._queue if not c.cancelled and not c.fired]

    @property
    def next_delay(self) -> float | None:
        pending = self.pending
        return pending[0].delay if pending else None

    def run_pending(self) -> int:
        """Fire every queued, non-cancelled call in order.

        Calls scheduled while running are left for the next run.

        Returns:
            Number of callbacks fired
        """
        with self._lock:
            batch, self._queue = self._queue, []
        fired = 0
        for call in batch:
            if call.cancelled:
                logger.debug("Skipping cancelled scheduled call")
                continue
            call.fired = True
            call.callback()
            fired += 1
        return fired
