# voxelclash/common/typed_config - typed configuration accessors
#
# Config sections are parsed into frozen dataclasses; malformed values fall
# back to defaults instead of raising.

from voxelclash.common.typed_config.models import (
    GameConfig,
    safe_float,
    safe_int,
    safe_optional_int,
    safe_str,
)
from voxelclash.common.typed_config.reader import TypedConfigReader, load_config_file

__all__ = [
    # Dataclasses
    "GameConfig",
    # Reader
    "TypedConfigReader",
    "load_config_file",
    # Helper functions
    "safe_int",
    "safe_optional_int",
    "safe_float",
    "safe_str",
]
