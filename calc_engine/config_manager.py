# config_manager.py
import os
import json
from pathlib import Path

from . import error as E

DEFAULT_CONFIG = Path(__file__).resolve().parent / "config.json"

DEFAULT_SETTINGS = {
    "radians": False,
    "debug": False,
    "decimal_places": 12,
    "fractions": False,
    "copy_to_clipboard": False,
    "constants": {},
}


def config_path():
    """Settings file in use; CALC_ENGINE_CONFIG overrides the packaged one."""
    override = os.environ.get("CALC_ENGINE_CONFIG")
    if override:
        return Path(override)
    return DEFAULT_CONFIG


def load_setting_value(key_value):
    try:
        with open(config_path(), 'r', encoding='utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        settings_dict = {}

    merged = dict(DEFAULT_SETTINGS)
    merged.update(settings_dict)

    if key_value == "all":
        return merged

    else:
        return merged.get(key_value, 0)


def save_setting(settings_dict):
    target = config_path()
    try:
        with open(target, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4, ensure_ascii=False)
            return settings_dict

    except OSError as e:
        raise E.ConfigurationError(f"Not all settings could be saved: {target} ({e})", path=str(target))
