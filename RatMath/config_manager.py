# config_manager.py
from pathlib import Path
import json

from . import error as E

config_json = Path(__file__).resolve().parent.parent / "config.json"
ui_strings = Path(__file__).resolve().parent.parent / "ui_strings.json"


DEFAULT_SETTINGS = {
    "output_mode": "BOTH",
    "decimal_limit": 20,
    "type_aware": True,
    "max_period_check": 10000000,
    "max_period_digits": 1000,
    "input_base": 10,
    "darkmode": False,
    "debug": False
}


def load_setting_value(key_value):
    try:
        with open(config_json, 'r', encoding= 'utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return {}


    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_setting_description(key_value):
    try:
        with open(ui_strings, 'r', encoding= 'utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return {}


    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_settings_with_defaults():
    """Return the stored settings merged over DEFAULT_SETTINGS."""
    settings = dict(DEFAULT_SETTINGS)
    stored = load_setting_value("all")
    if isinstance(stored, dict):
        settings.update(stored)
    return settings


def validate_settings(settings):
    """Fill missing keys from DEFAULT_SETTINGS and reject values the calculator cannot use."""
    merged = dict(DEFAULT_SETTINGS)
    merged.update(settings)

    if merged["output_mode"] not in ("DECI", "RAT", "BOTH"):
        raise E.ConfigurationError("output_mode must be DECI, RAT or BOTH", code="5000")

    for key in ("decimal_limit", "max_period_check", "max_period_digits"):
        value = merged[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise E.ConfigurationError(f"{key} must be a positive integer", code="5000")

    base = merged["input_base"]
    if isinstance(base, bool) or not isinstance(base, int) or not 2 <= base <= 62:
        raise E.ConfigurationError("input_base must be an integer between 2 and 62", code="5000")

    for key in ("type_aware", "darkmode", "debug"):
        if not isinstance(merged[key], bool):
            raise E.ConfigurationError(f"{key} must be true or false", code="5000")

    return merged


def save_setting(settings_dict):
    try:
        with open (config_json, 'w', encoding= 'utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except (FileNotFoundError, json.JSONDecodeError):
        return{}





if __name__ == "__main__":
    print(load_setting_value("output_mode"))
    print(load_setting_value("all"))
    print(load_settings_with_defaults())
