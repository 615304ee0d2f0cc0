"""
Migration of stored album data from older shapes.

Stored records have gone through three shapes for a song's stages:
- v2+: list of {"name", "value"} dicts (current, passed through untouched)
- v1:  mapping of stage name -> value
- v0:  no stages at all

Everything here is forgiving: any input yields a usable song list.
"""
import math
from typing import Any, Dict, List, Optional, Union

from core.constants import (
    DEFAULT_ALBUM_TITLE,
    DEFAULT_TARGET_ISO,
    default_song_dicts,
    default_stage_dicts,
)
from core.models import to_utc


Number = Union[int, float]


def _to_number(value: Any) -> Number:
    """Coerce a legacy stage value to a number (0 when not numeric)."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number):
        return 0
    if number.is_integer():
        return int(number)
    return number


def migrate_song(song: Dict[str, Any]) -> Dict[str, Any]:
    """
    Bring one song dictionary to the current stage shape.

    Args:
        song: Song dictionary in any known shape

    Returns:
        The same dictionary when already current, otherwise a migrated copy
    """
    stages = song.get("stages")

    # Current shape: leave it alone
    if isinstance(stages, list):
        if all(isinstance(stage, dict) for stage in stages):
            return song
        # Keep the readable stages; nothing readable means defaults
        kept = [stage for stage in stages if isinstance(stage, dict)]
        return {**song, "stages": kept or default_stage_dicts()}

    if isinstance(stages, dict):
        migrated = [
            {"name": str(name), "value": _to_number(value)}
            for name, value in stages.items()
        ]
        return {**song, "stages": migrated}

    return {**song, "stages": default_stage_dicts()}


def migrate_songs(songs: Any) -> List[Dict[str, Any]]:
    """
    Normalize a stored song list.

    Args:
        songs: Whatever was stored under "songs"

    Returns:
        List of song dictionaries with list-shaped stages. The default
        catalog when the input is missing or not a list.
    """
    if not isinstance(songs, list):
        return default_song_dicts()
    return [migrate_song(song) for song in songs if isinstance(song, dict)]


def migrate_record(record: Optional[Any]) -> Dict[str, Any]:
    """
    Normalize a whole stored record (songs, albumTitle, targetISO).

    Missing or empty fields fall back to the album defaults.
    """
    if not isinstance(record, dict):
        record = {}

    title = record.get("albumTitle")
    if not isinstance(title, str) or not title.strip():
        title = DEFAULT_ALBUM_TITLE

    target = record.get("targetISO")
    if not isinstance(target, str) or not target.strip():
        target = DEFAULT_TARGET_ISO
    else:
        try:
            to_utc(target)
        except (ValueError, OverflowError):
            target = DEFAULT_TARGET_ISO

    return {
        "songs": migrate_songs(record.get("songs")),
        "albumTitle": title,
        "targetISO": target,
    }
