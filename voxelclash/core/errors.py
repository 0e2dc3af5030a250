"""
VoxelClash exception hierarchy.

Only programming errors and configuration errors are raised. Rejected moves
are reported through MoveResult values instead (see voxelclash.core.game).
"""

from typing import Any, Dict, Optional


class VoxelClashError(Exception):
    """Base exception for VoxelClash errors.

    Attributes:
        user_message: Safe, user-facing error message.
        context: Dictionary of debug information.
    """

    def __init__(
        self,
        message: str,
        *,
        user_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.user_message = user_message or message
        self.context = context or {}


class InvalidIndexError(VoxelClashError, IndexError):
    """Cell index or coordinates outside the 3x3x3 grid."""

    pass


class NoFreeCellError(VoxelClashError):
    """Opponent asked to move on a full grid."""

    pass


class ConfigError(VoxelClashError):
    """Configuration load/validation errors."""

    pass
