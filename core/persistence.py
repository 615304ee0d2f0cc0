"""
Album storage and JSON snapshots.

Storage format:
- One MessagePack record per installation (fast, compact)
- Record fields: songs, albumTitle, targetISO
- File named after the versioned storage key
- Rewritten in full after every edit

Snapshots are plain JSON ({"songs", "albumTitle"}) for moving an album
between machines or keeping a backup.
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import msgpack

from core.constants import STORAGE_KEY
from core.migration import migrate_record
from core.models import Album, Song, to_utc


class SnapshotError(ValueError):
    """Raised when an imported snapshot cannot be read."""


class ProgressStore:
    """Loads and saves the album record."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Args:
            path: Record file (None = per-user default location)
        """
        if path is None:
            path = ProgressStore.get_default_path()
        self.path = Path(path)

    @staticmethod
    def get_default_path() -> Path:
        """
        Get path to the per-user album record.

        Returns:
            ~/.album_dashboard/<storage key>.msgpack
        """
        return Path.home() / ".album_dashboard" / f"{STORAGE_KEY}.msgpack"

    def exists(self) -> bool:
        """Check if a stored record exists."""
        return self.path.exists()

    # Record I/O

    def _read_record(self) -> Dict[str, Any]:
        """Read the raw stored record ({} when missing or unreadable)."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "rb") as f:
                packed_data = f.read()
            record = msgpack.unpackb(packed_data, raw=False)
        except Exception as e:
            print(f"[STORE] Could not read {self.path}, using defaults: {e}")
            return {}

        if not isinstance(record, dict):
            print("[STORE] Stored record is not a mapping, using defaults")
            return {}
        return record

    def _write_record(self, record: Dict[str, Any]):
        """
        Replace the stored record.

        Raises:
            IOError: If the write fails (the previous record is kept)
        """
        tmp_path = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            packed_data = msgpack.packb(record, use_bin_type=True)
            with open(tmp_path, "wb") as f:
                f.write(packed_data)
            tmp_path.replace(self.path)
        except Exception as e:
            raise IOError(f"Failed to write album record to {self.path}: {e}") from e

    # Album state

    def load(self) -> Tuple[Tuple[Song, ...], str, datetime]:
        """
        Load the stored album, falling back to defaults.

        Never raises: unreadable records, legacy shapes and broken songs
        all end up as usable data.

        Returns:
            (songs, album title, target deadline in UTC)
        """
        record = migrate_record(self._read_record())
        songs = _songs_from_dicts(record["songs"])
        return songs, record["albumTitle"], to_utc(record["targetISO"])

    def save(self, songs: Iterable[Song], title: str, target: datetime):
        """
        Save the album, replacing any previous record.

        Failures are logged, not raised.

        Args:
            songs: Songs in display order
            title: Album title
            target: Release deadline
        """
        record = Album(title=title, target=to_utc(target), songs=tuple(songs)).to_dict()
        try:
            self._write_record(record)
        except IOError as e:
            print(f"[STORE] Save failed: {e}")

    def reset_to_defaults(self):
        """Delete the stored record; the next load uses the default catalog."""
        try:
            self.path.unlink()
            print(f"[STORE] Removed {self.path}")
        except FileNotFoundError:
            pass

    # Snapshots

    @staticmethod
    def export_snapshot(songs: Iterable[Song], title: str) -> str:
        """
        Build a JSON snapshot of the album.

        Args:
            songs: Songs in display order
            title: Album title

        Returns:
            Indented JSON text ({"songs", "albumTitle"})
        """
        data = {
            "songs": [song.to_dict() for song in songs],
            "albumTitle": title,
        }
        return json.dumps(data, indent=2, ensure_ascii=False)

    @staticmethod
    def write_snapshot(path: Union[str, Path], blob: str) -> Path:
        """
        Write an exported snapshot to a file.

        Args:
            path: Destination (".json" is enforced)
            blob: Snapshot text from export_snapshot()

        Returns:
            Path actually written

        Raises:
            IOError: If the write fails
        """
        path = Path(path)
        if path.suffix != ".json":
            path = path.with_suffix(".json")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(blob)
        except Exception as e:
            raise IOError(f"Failed to export album to {path}: {e}") from e
        return path

    def import_snapshot(self, blob: Union[str, bytes]):
        """
        Install a snapshot as the stored record.

        The snapshot is stored as-is; migration runs on the next load, so
        snapshots from older versions are fine. Reload state afterwards.

        Raises:
            SnapshotError: If the blob is not a JSON object or cannot be
                stored. The existing record is left untouched.
        """
        try:
            data = json.loads(blob)
        except (ValueError, TypeError) as e:
            raise SnapshotError(f"Invalid JSON file: {e}") from e

        if not isinstance(data, dict):
            raise SnapshotError("Invalid JSON file: expected an object at the top level")

        try:
            self._write_record(data)
        except IOError as e:
            raise SnapshotError(str(e)) from e
        print(f"[IMPORT] Installed snapshot ({_count(data.get('songs'))} songs)")

    def read_snapshot(self, path: Union[str, Path]):
        """
        Import a snapshot file.

        Raises:
            SnapshotError: If the file cannot be read or is not valid
        """
        try:
            with open(path, "rb") as f:
                blob = f.read()
        except OSError as e:
            raise SnapshotError(f"Could not open {path}: {e}") from e
        self.import_snapshot(blob)


def _songs_from_dicts(song_dicts: List[Dict[str, Any]]) -> Tuple[Song, ...]:
    """Build songs, skipping entries that are broken or reuse an id."""
    songs = []
    seen = set()
    for data in song_dicts:
        try:
            song = Song.from_dict(data)
        except Exception as e:
            print(f"[STORE] Skipping unreadable song {data.get('id')!r}: {e}")
            continue
        if song.id in seen:
            print(f"[STORE] Skipping duplicate song id {song.id}")
            continue
        seen.add(song.id)
        songs.append(song)
    return tuple(songs)


def _count(items: Any) -> int:
    return len(items) if isinstance(items, list) else 0
