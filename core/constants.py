"""
Album constants and defaults.

Default stage names, catalog size, storage key, navigation prefix, etc.
"""
from typing import Any, Dict, List

# Stage names every new song starts with (display order)
DEFAULT_STAGE_NAMES = [
    "Demo",
    "Basic Track",
    "Instruments",
    "Lyrics",
    "Vocals",
    "Mix",
]

# Default catalog size
DEFAULT_SONG_COUNT = 20

# Album defaults
DEFAULT_ALBUM_TITLE = "Album Dashboard"
DEFAULT_TARGET_ISO = "2026-08-01T00:00:00+00:00"

# Stage value range (percent)
PERCENT_MIN = 0
PERCENT_MAX = 100

# Songs at or above this completion count as eligible
ELIGIBLE_THRESHOLD = 75

# Versioned storage key (bump the suffix for incompatible record changes)
STORAGE_KEY = "albumProgress_v3"

# Navigation token prefix (e.g. "song/7")
NAV_SONG_PREFIX = "song/"

# Suggested export filename
EXPORT_FILENAME = "album_dashboard.json"


def clamp_percent(value: int) -> int:
    """
    Clamp a percentage to the 0-100 range.

    Example:
        >>> clamp_percent(150)
        100
        >>> clamp_percent(-5)
        0
    """
    return min(PERCENT_MAX, max(PERCENT_MIN, value))


def stage_label(position: int) -> str:
    """
    Default label for the stage at a 1-based position.

    Example:
        >>> stage_label(7)
        'Stage 7'
    """
    return f"Stage {position}"


def default_stage_dicts() -> List[Dict[str, Any]]:
    """Fresh list of the default stages, all at 0%."""
    return [{"name": name, "value": 0} for name in DEFAULT_STAGE_NAMES]


def default_song_dicts() -> List[Dict[str, Any]]:
    """Fresh default catalog: songs 1..20, each with the default stages."""
    return [
        {"id": i + 1, "title": f"Song {i + 1}", "stages": default_stage_dicts()}
        for i in range(DEFAULT_SONG_COUNT)
    ]
