"""Tests for the JSON user config."""

import json

from vibe_monitor.config.user_config import get_default_config, load_config, save_config


class TestLoadConfig:
    def test_missing_file_returns_defaults(self, tmp_path):
        assert load_config(tmp_path / "config.json") == get_default_config()

    def test_values_override_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"tier": "max_5x", "no_color": True, "width": 60}))

        config = load_config(path)

        assert config == {"tier": "max_5x", "no_color": True, "width": 60}

    def test_partial_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"tier": "max20"}))

        config = load_config(path)

        assert config["tier"] == "max20"
        assert config["width"] == get_default_config()["width"]

    def test_invalid_json_returns_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{oops")

        assert load_config(path) == get_default_config()

    def test_out_of_range_width_is_ignored(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"width": 500}))

        assert load_config(path)["width"] == 42

    def test_wrong_types_are_ignored(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"tier": 5, "no_color": "yes", "width": True, "extra": 1}))

        assert load_config(path) == get_default_config()


class TestSaveConfig:
    def test_save_then_load(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        config = {"tier": "pro", "no_color": False, "width": 30}

        save_config(config, path)

        assert path.exists()
        assert load_config(path) == config
