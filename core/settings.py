"""
User settings (~/.album_dashboard/settings.json).

Settings are grouped by category. Values found in the file are merged over
the defaults, so new settings appear automatically after an upgrade.
"""
import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from core.constants import ELIGIBLE_THRESHOLD


DEFAULT_SETTINGS: Dict[str, Dict[str, Any]] = {
    "general": {
        "eligible_threshold": ELIGIBLE_THRESHOLD,
        "storage_path": None  # None = ~/.album_dashboard/<storage key>.msgpack
    },
    "video": {
        "ui_scale": 1.0,
        "grid_columns": 5,
        "viewport_width": 1920,
        "viewport_height": 1080
    }
}


def get_settings_path() -> Path:
    """Get path to the settings file."""
    return Path.home() / ".album_dashboard" / "settings.json"


def load_settings(path: Optional[Union[str, Path]] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load settings, merged over the defaults.

    A missing file is created with the defaults; an unreadable one is
    ignored.

    Args:
        path: Settings file (None = default location)

    Returns:
        Settings dictionary by category
    """
    config_path = Path(path) if path is not None else get_settings_path()
    settings = copy.deepcopy(DEFAULT_SETTINGS)

    if not config_path.exists():
        try:
            save_settings(settings, config_path)
            print("[SETTINGS] Created new settings file with defaults")
        except IOError as e:
            print(f"[SETTINGS] {e}")
        return settings

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            loaded = json.load(f)
    except Exception as e:
        print(f"[SETTINGS] Failed to load settings: {e}")
        return settings

    if not isinstance(loaded, dict):
        print("[SETTINGS] Settings file is not an object, using defaults")
        return settings

    for category in settings:
        if isinstance(loaded.get(category), dict):
            settings[category].update(loaded[category])
    return settings


def save_settings(settings: Dict[str, Dict[str, Any]],
                  path: Optional[Union[str, Path]] = None):
    """
    Write settings to disk.

    Raises:
        IOError: If the file cannot be written
    """
    config_path = Path(path) if path is not None else get_settings_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
    except Exception as e:
        raise IOError(f"Failed to save settings to {config_path}: {e}") from e
