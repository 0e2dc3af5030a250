"""State notification system for VoxelClash.

Front ends (renderers, audio, animation) subscribe here instead of being
called by the game core directly.

Public API:
    - EventType: Enum of event types (CELL_CLAIMED, SCORE_CHANGED, etc.)
    - Event: Immutable event dataclass with optional payload
    - StateNotifier: Pub-sub notification system

Example:
    >>> from voxelclash.core.state import EventType, Event, StateNotifier
    >>>
    >>> notifier = StateNotifier()
    >>>
    >>> def on_turn(event):
    ...     print(f"Turn: {event.payload['side']}")
    >>>
    >>> notifier.subscribe(EventType.TURN_CHANGED, on_turn)
    >>> notifier.notify(Event.create(EventType.TURN_CHANGED, {"side": "player"}))
    Turn: player
"""
from voxelclash.core.state.events import Event, EventType
from voxelclash.core.state.notifier import StateNotifier

__all__ = ["EventType", "Event", "StateNotifier"]
