"""
Immutable data models for the album dashboard.

All models are frozen dataclasses so that:
- Every edit produces a new Album (replace, never mutate in place)
- Views can hold a reference without seeing half-applied changes
- Serialization is a plain to_dict/from_dict round trip
"""
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Tuple, Optional, Dict, Any, List, Union

from core.constants import (
    PERCENT_MAX,
    PERCENT_MIN,
    clamp_percent,
    stage_label,
)


Timestamp = Union[datetime, str, int, float]


def to_percent(value: Any) -> int:
    """
    Coerce any stored or user-entered value to an integer percentage.

    Non-numeric values become 0; out-of-range values are clamped;
    fractional values round half up.
    """
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return clamp_percent(value)
    try:
        number = float(value)
    except OverflowError:
        # Too big for a float, so far outside 0-100 either way
        return PERCENT_MAX if value > 0 else PERCENT_MIN
    except (TypeError, ValueError):
        return 0
    if math.isnan(number):
        return 0
    return int(math.floor(clamp_percent(number) + 0.5))


def to_utc(value: Timestamp) -> datetime:
    """
    Normalize a deadline to an aware datetime in UTC.

    Accepts:
        - datetime (naive values are local wall time)
        - ISO-8601 string, trailing "Z" allowed
        - POSIX timestamp in seconds

    Raises:
        ValueError: If the value cannot be read as an instant
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(f"Timestamp out of range: {value}") from e
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    if not isinstance(value, datetime):
        raise ValueError(f"Not a timestamp: {value!r}")

    # Naive -> local wall time (what a date picker hands us)
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class Stage:
    """
    One named bit of work on a song.

    Attributes:
        name: Display name (non-empty after trim)
        value: Completion percent (0-100, clamped on construction)
    """
    name: str
    value: int = 0

    def __post_init__(self):
        """Normalize name and clamp value."""
        name = str(self.name).strip()
        if not name:
            raise ValueError("Stage name must not be empty")
        object.__setattr__(self, 'name', name)
        object.__setattr__(self, 'value', to_percent(self.value))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], position: int = 1) -> "Stage":
        """
        Create Stage from dictionary.

        Args:
            data: Stage dictionary ({"name", "value"})
            position: 1-based position, used to label unnamed stages
        """
        name = str(data.get("name") or "").strip() or stage_label(position)
        return cls(name=name, value=data.get("value", 0))


@dataclass(frozen=True)
class Song:
    """
    One song on the album.

    Attributes:
        id: Stable identifier, unique within the album (navigation key)
        title: Song title
        stages: Tuple of Stage objects (display order, may be empty)
    """
    id: int
    title: str
    stages: Tuple[Stage, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Validate song."""
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise ValueError(f"Song id must be an integer, got {self.id!r}")
        object.__setattr__(self, 'stages', tuple(self.stages))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "stages": [s.to_dict() for s in self.stages],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Song":
        """Create Song from dictionary."""
        song_id = int(data["id"])
        stages = tuple(
            Stage.from_dict(s, position=i + 1)
            for i, s in enumerate(data.get("stages", []))
        )
        return cls(
            id=song_id,
            title=str(data.get("title") or f"Song {song_id}"),
            stages=stages,
        )


@dataclass(frozen=True)
class Album:
    """
    The whole album: title, release deadline and songs.

    Attributes:
        title: Album title
        target: Release deadline (aware datetime, UTC)
        songs: Tuple of Song objects (display order, unique ids)
    """
    title: str
    target: datetime
    songs: Tuple[Song, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Validate album."""
        if self.target.tzinfo is None:
            raise ValueError("Album target must be timezone-aware")
        object.__setattr__(self, 'songs', tuple(self.songs))

        seen = set()
        for song in self.songs:
            if song.id in seen:
                raise ValueError(f"Duplicate song id: {song.id}")
            seen.add(song.id)

    def song_index(self, song_id: int) -> Optional[int]:
        """Position of a song in the album, or None if absent."""
        for i, song in enumerate(self.songs):
            if song.id == song_id:
                return i
        return None

    def get_song(self, song_id: int) -> Optional[Song]:
        """Look up a song by id."""
        index = self.song_index(song_id)
        return None if index is None else self.songs[index]

    def song_ids(self) -> List[int]:
        """Ids of all songs in display order."""
        return [s.id for s in self.songs]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted record shape."""
        return {
            "songs": [s.to_dict() for s in self.songs],
            "albumTitle": self.title,
            "targetISO": self.target.isoformat(),
        }
