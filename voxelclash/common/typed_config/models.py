# voxelclash/common/typed_config/models.py
#
# Frozen dataclass definitions and conversion helpers.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from voxelclash.core.constants import AI_DEFAULT, DEFAULT_AI_MOVE_DELAY

# =============================================================================
# Helper Functions
# =============================================================================


def safe_int(value: Any, default: int) -> int:
    """int conversion. None/bool/float/failed conversion return default.

    Note:
        bool is a subclass of int but deliberately returns default, and
        floats return default rather than being truncated.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def safe_optional_int(value: Any) -> int | None:
    """Like safe_int, but None stands for "not set"."""
    if value is None or isinstance(value, (bool, float)):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def safe_float(value: Any, default: float) -> float:
    """float conversion. None/bool/failed conversion return default."""
    if value is None:
        return default
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def safe_str(value: Any, default: str) -> str:
    """str passthrough. None/empty/non-str return default."""
    if value is None:
        return default
    if not isinstance(value, str):
        return default
    if not value:
        return default
    return value


# =============================================================================
# Dataclasses
# =============================================================================


@dataclass(frozen=True)
class GameConfig:
    """Game settings ("game" section).

    Thread-safety: Immutable (frozen=True)

    Attributes:
        ai_move_delay: Seconds between a player move and the opponent reply
        ai_strategy: Registered opponent strategy name
        seed: Seed for the opponent's random source, None for nondeterministic
    """

    ai_move_delay: float = DEFAULT_AI_MOVE_DELAY
    ai_strategy: str = AI_DEFAULT
    seed: int | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "GameConfig":
        """Build from a dict. Missing keys use defaults, bad types are converted safely."""
        delay = safe_float(d.get("ai_move_delay"), DEFAULT_AI_MOVE_DELAY)
        if delay < 0:
            delay = DEFAULT_AI_MOVE_DELAY
        return cls(
            ai_move_delay=delay,
            ai_strategy=safe_str(d.get("ai_strategy"), AI_DEFAULT),
            seed=safe_optional_int(d.get("seed")),
        )
