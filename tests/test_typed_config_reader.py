# tests/test_typed_config_reader.py
#
# Unit tests for voxelclash.common.typed_config.reader

import json

import pytest

from voxelclash.common.typed_config import GameConfig, TypedConfigReader, load_config_file
from voxelclash.core.errors import ConfigError


class TestTypedConfigReader:
    def test_get_game_returns_game_config(self):
        cfg = TypedConfigReader({"game": {"ai_move_delay": 0.2}}).get_game()
        assert isinstance(cfg, GameConfig)
        assert cfg.ai_move_delay == 0.2

    def test_missing_section_returns_defaults(self):
        assert TypedConfigReader({}).get_game() == GameConfig()

    def test_non_dict_section_returns_defaults(self):
        assert TypedConfigReader({"game": "fast"}).get_game() == GameConfig()

    def test_reflects_current_dict_contents(self):
        config = {"game": {"seed": 1}}
        reader = TypedConfigReader(config)
        assert reader.get_game().seed == 1
        config["game"]["seed"] = 2
        assert reader.get_game().seed == 2


class TestLoadConfigFile:
    def test_load(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"game": {"ai_strategy": "random"}}), encoding="utf-8")
        assert load_config_file(path) == {"game": {"ai_strategy": "random"}}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(tmp_path / "nope.json")
        assert exc_info.value.context["path"].endswith("nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)
        assert "Could not read" in exc_info.value.user_message

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError, match="JSON object"):
            load_config_file(path)
