# voxelclash/core/state/events.py
"""Event types and base Event class for state notification system.

All events are frozen (immutable). The payload is a shallow read-only view;
cell sets inside payloads are frozensets so they cannot be mutated either.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class EventType(Enum):
    """Event type enumeration.

    Each type has a string value for debugging/logging purposes.
    """

    CELL_CLAIMED = "cell_claimed"  # {index, side, coords}
    SCORE_CHANGED = "score_changed"  # {side, score}
    COMBO_CELLS = "combo_cells"  # {side, cells}
    TURN_CHANGED = "turn_changed"  # {side}
    GAME_OVER = "game_over"  # {winner, scores}
    GAME_RESET = "game_reset"


def _freeze_payload(payload: dict[str, Any] | None) -> Mapping[str, Any] | None:
    """Convert payload to an immutable MappingProxyType (shallow copy)."""
    if payload is None:
        return None
    return MappingProxyType(dict(payload))  # Copy then proxy


@dataclass(frozen=True)
class Event:
    """Base event class (immutable).

    Attributes:
        event_type: The type of event (from EventType enum)
        _payload: Internal storage for the frozen payload

    Example:
        >>> event = Event.create(EventType.SCORE_CHANGED, {"side": "player", "score": 30})
        >>> event.payload["score"]
        30
        >>> event.payload["score"] = 0  # Raises TypeError
    """

    event_type: EventType
    _payload: Mapping[str, Any] | None = field(default=None, repr=False)

    @classmethod
    def create(cls, event_type: EventType, payload: dict[str, Any] | None = None) -> "Event":
        """Factory method to create an Event with frozen payload."""
        return cls(event_type=event_type, _payload=_freeze_payload(payload))

    @property
    def payload(self) -> Mapping[str, Any] | None:
        """Read-only access to the payload."""
        return self._payload
