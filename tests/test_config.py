# tests/test_config.py

import json

import pytest

from RatMath import config_manager
from RatMath import error as E


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_manager, "config_json", path)
    return path


class TestValidateSettings:

    def test_defaults_fill_missing_keys(self):
        assert config_manager.validate_settings({}) == config_manager.DEFAULT_SETTINGS

    def test_keeps_given_values(self):
        settings = config_manager.validate_settings({"output_mode": "RAT", "input_base": 16})
        assert settings["output_mode"] == "RAT"
        assert settings["input_base"] == 16
        assert settings["decimal_limit"] == 20

    @pytest.mark.parametrize("settings, key", [
        ({"output_mode": "HEX"}, "output_mode"),
        ({"decimal_limit": 0}, "decimal_limit"),
        ({"max_period_check": True}, "max_period_check"),
        ({"max_period_digits": "10"}, "max_period_digits"),
        ({"input_base": 1}, "input_base"),
        ({"input_base": 63}, "input_base"),
        ({"type_aware": "yes"}, "type_aware"),
        ({"debug": 1}, "debug"),
    ])
    def test_rejects_bad_values(self, settings, key):
        with pytest.raises(E.ConfigurationError, match=key) as error:
            config_manager.validate_settings(settings)
        assert error.value.code == "5000"


class TestStorage:

    def test_missing_file(self, config_file):
        assert config_manager.load_setting_value("all") == {}
        assert config_manager.load_settings_with_defaults() == config_manager.DEFAULT_SETTINGS

    def test_save_and_load(self, config_file):
        config_manager.save_setting({"output_mode": "DECI", "decimal_limit": 8})
        assert json.loads(config_file.read_text(encoding="utf-8"))["output_mode"] == "DECI"
        assert config_manager.load_setting_value("decimal_limit") == 8
        assert config_manager.load_setting_value("unknown") == 0

        settings = config_manager.load_settings_with_defaults()
        assert settings["output_mode"] == "DECI"
        assert settings["type_aware"] is True

    def test_broken_file(self, config_file):
        config_file.write_text("{not json", encoding="utf-8")
        assert config_manager.load_setting_value("all") == {}

    def test_shipped_config_is_valid(self):
        shipped = config_manager.config_json
        with open(shipped, "r", encoding="utf-8") as f:
            settings = json.load(f)
        assert config_manager.validate_settings(settings) == settings

    def test_descriptions_cover_settings(self):
        descriptions = config_manager.load_setting_description("all")
        for key in config_manager.DEFAULT_SETTINGS:
            assert key in descriptions
