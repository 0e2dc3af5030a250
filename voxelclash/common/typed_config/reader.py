# voxelclash/common/typed_config/reader.py
#
# TypedConfigReader - typed view over a plain config dict.

import json
import logging
from pathlib import Path
from typing import Any

from voxelclash.common.typed_config.models import GameConfig
from voxelclash.core.errors import ConfigError

logger = logging.getLogger(__name__)


class TypedConfigReader:
    """Typed config reader.

    Each get_*() call parses a copy of the section, so it always reflects the
    current dict contents.

    Usage:
        reader = TypedConfigReader({"game": {"ai_move_delay": 0.2}})
        game = reader.get_game()  # GameConfig
    """

    def __init__(self, config_dict: dict[str, Any]) -> None:
        self._config = config_dict

    def get_game(self) -> GameConfig:
        raw = self._config.get("game")
        snapshot = dict(raw) if isinstance(raw, dict) else {}
        return GameConfig.from_dict(snapshot)


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Load a JSON config file into a dict.

    Raises:
        ConfigError: file missing, unreadable or not a JSON object
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(
            f"Configuration file not found: {path}",
            context={"path": str(path)},
        ) from None
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(
            f"Error reading config file {path}: {e}",
            user_message=f"Could not read configuration file {path}",
            context={"path": str(path)},
        ) from e
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must contain a JSON object, got {type(data).__name__}",
            context={"path": str(path)},
        )
    logger.debug("Loaded config from %s", path)
    return data
