# config_manager.py
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

config_json = Path(__file__).resolve().parent.parent / "config.json"
ui_strings = Path(__file__).resolve().parent.parent / "ui_strings.json"


DEFAULT_SETTINGS = {
    "precision": 10,
    "use_fractions": False,
    "use_thousands_separator": False,
    "angle_unit": "degrees",
    "darkmode": False,
    "default_mode": "Standard",
    "default_base": "DEC",
    "shift_to_copy": True
}


def _read_json(path):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)

    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return {}


def load_setting_value(key_value):
    """Return one setting, or every setting merged over DEFAULT_SETTINGS for "all"."""
    settings_dict = dict(DEFAULT_SETTINGS)
    stored = _read_json(config_json)
    if isinstance(stored, dict):
        settings_dict.update(stored)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_setting_description(key_value):
    descriptions = _read_json(ui_strings)

    if key_value == "all":
        return descriptions

    else:
        return descriptions.get(key_value, 0)


def save_setting(settings_dict):
    try:
        with open(config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except (OSError, TypeError) as e:
        logger.error("Could not save settings to %s: %s", config_json, e)
        return {}
