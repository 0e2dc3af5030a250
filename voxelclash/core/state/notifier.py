# voxelclash/core/state/notifier.py
"""Delivers game events to front-end listeners.

The turn controller publishes every claim, score update, combo, turn change
and game end here. Renderers, sound and the terminal printer subscribe per
event type (or to all of them) and never call back into the controller's
internals.

A listener that raises is reported and skipped; the remaining listeners still
run and the game state is untouched. Reports go to the callable passed as
``logger`` (one string with the traceback attached) and to this module's
logger when none was given or the callable itself fails.
"""

import logging
import threading
import traceback
from collections import defaultdict
from collections.abc import Callable

from voxelclash.core.state.events import Event, EventType

logger = logging.getLogger(__name__)

# Error sink: receives one formatted report per failing listener
ErrorSink = Callable[[str], None]
Listener = Callable[[Event], None]


class StateNotifier:
    """Thread-safe event hub shared by the controller and its front ends.

    Example:
        >>> notifier = StateNotifier()
        >>> def on_claim(event):
        ...     print(f"Claimed: {event.payload['index']}")
        >>> notifier.subscribe(EventType.CELL_CLAIMED, on_claim)
        >>> notifier.notify(Event.create(EventType.CELL_CLAIMED, {"index": 13}))
        Claimed: 13
    """

    def __init__(self, logger: ErrorSink | None = None) -> None:
        """
        Args:
            logger: Receives a report for every listener that raises.
        """
        self._listeners: defaultdict[EventType, list[Listener]] = defaultdict(list)
        self._lock = threading.RLock()
        self._logger = logger

    def subscribe(self, event_type: EventType, callback: Listener) -> None:
        """Register ``callback`` for ``event_type``; registering twice has no effect."""
        with self._lock:
            listeners = self._listeners[event_type]
            if callback not in listeners:
                listeners.append(callback)

    def subscribe_all(self, callback: Listener) -> None:
        for event_type in EventType:
            self.subscribe(event_type, callback)

    def unsubscribe(self, event_type: EventType, callback: Listener) -> None:
        with self._lock:
            listeners = self._listeners.get(event_type)
            if listeners and callback in listeners:
                listeners.remove(callback)

    def notify(self, event: Event) -> None:
        """Deliver ``event`` to the listeners registered when the call starts.

        Listeners added or removed during delivery take effect from the next
        event on.
        """
        with self._lock:
            listeners = list(self._listeners.get(event.event_type, ()))

        for callback in listeners:
            try:
                callback(event)
            except Exception as e:
                self._log_error(event, callback, e)

    def _log_error(self, event: Event, callback: Listener, e: Exception) -> None:
        listener = getattr(callback, "__qualname__", None) or getattr(callback, "__name__", repr(callback))
        report = (
            f"Listener {listener} failed on {event.event_type.value} event: {type(e).__name__}: {e}\n"
            f"{traceback.format_exc()}"
        )
        if self._logger is not None:
            try:
                self._logger(report)
                return
            except Exception:
                logger.exception("Event error sink failed, falling back to module logger")
        logger.error(report)

    def clear(self, event_type: EventType | None = None) -> None:
        """Drop all listeners, or only those of one event type."""
        with self._lock:
            if event_type is None:
                self._listeners.clear()
            else:
                self._listeners.pop(event_type, None)
