"""JSON-based settings persistence for the range calendar."""

import json
import logging
import os

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".range-calendar-settings.json")

_DEFAULTS = {
    "dark_mode": False,
    "show_week_numbers": True,
    "window_x": None,
    "window_y": None,
    "comparison_days": 0,
}


def load_settings() -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(_SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", _SETTINGS_PATH, e)
        return settings
    if not isinstance(stored, dict):
        logger.warning("Ignoring settings file %s: not a JSON object", _SETTINGS_PATH)
        return settings

    for key in ("dark_mode", "show_week_numbers"):
        if key in stored and isinstance(stored[key], bool):
            settings[key] = stored[key]
    for key in ("window_x", "window_y"):
        # bool is an int subclass; keep it out
        if key in stored and isinstance(stored[key], int) and not isinstance(stored[key], bool):
            settings[key] = stored[key]
    days = stored.get("comparison_days")
    if isinstance(days, int) and not isinstance(days, bool) and days >= 0:
        settings["comparison_days"] = days
    return settings


def save_settings(settings: dict) -> None:
    """Persist settings to disk."""
    with open(_SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
