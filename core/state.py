"""
Album state: the one in-memory album and every edit that can be made to it.

Each edit replaces the current Album with a new one, saves it right away,
then tells listeners. Edits that point at a song or stage that doesn't
exist change nothing and return False.
"""
from dataclasses import replace
from typing import Callable, List, Optional, Tuple

from core.constants import DEFAULT_STAGE_NAMES, stage_label
from core.models import Album, Song, Stage, Timestamp, to_utc
from core.persistence import ProgressStore


AlbumListener = Callable[[Album], None]


class AlbumState:
    """
    Owner of the album for the running session.

    Manages:
    - Current album (title, deadline, songs)
    - Saving after every edit
    - Change notifications for the views
    """

    def __init__(self, album: Album, store: ProgressStore):
        """
        Args:
            album: Starting album
            store: Where edits are saved
        """
        self._album = album
        self._store = store
        self._listeners: List[AlbumListener] = []

    @classmethod
    def load(cls, store: ProgressStore) -> "AlbumState":
        """Create state from whatever the store holds (or the defaults)."""
        songs, title, target = store.load()
        return cls(Album(title=title, target=target, songs=songs), store)

    def reload(self):
        """Re-read the store (after an import or reset) and notify."""
        songs, title, target = self._store.load()
        self._album = Album(title=title, target=target, songs=songs)
        print(f"[STATE] Reloaded album '{title}' ({len(songs)} songs)")
        self._notify()

    # Reading

    def get_album(self) -> Album:
        """Get the current album."""
        return self._album

    def get_songs(self) -> Tuple[Song, ...]:
        """Get songs in display order."""
        return self._album.songs

    def get_title(self) -> str:
        """Get album title."""
        return self._album.title

    def get_target(self):
        """Get release deadline (aware datetime, UTC)."""
        return self._album.target

    def get_song(self, song_id: int) -> Optional[Song]:
        """Get a song by id."""
        return self._album.get_song(song_id)

    def song_ids(self) -> List[int]:
        """Get ids of all songs."""
        return self._album.song_ids()

    def get_store(self) -> ProgressStore:
        """Get the backing store."""
        return self._store

    # Listeners

    def add_listener(self, callback: AlbumListener):
        """Call `callback(album)` after every successful edit."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: AlbumListener):
        """Stop notifying `callback`."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self):
        for callback in list(self._listeners):
            callback(self._album)

    def _commit(self, album: Album) -> bool:
        """Install a new album, save it, notify listeners."""
        self._album = album
        self._store.save(album.songs, album.title, album.target)
        self._notify()
        return True

    def _commit_song(self, index: int, song: Song) -> bool:
        songs = list(self._album.songs)
        songs[index] = song
        return self._commit(replace(self._album, songs=tuple(songs)))

    # Album edits

    def rename_album(self, title: str) -> bool:
        """Rename the album (blank titles are ignored)."""
        title = (title or "").strip()
        if not title:
            return False
        return self._commit(replace(self._album, title=title))

    def set_deadline(self, value: Timestamp) -> bool:
        """
        Move the release deadline.

        Args:
            value: datetime, ISO-8601 string or POSIX timestamp.
                Naive values are local wall time.

        Returns:
            False if the value could not be read as an instant
        """
        try:
            target = to_utc(value)
        except (ValueError, OverflowError) as e:
            print(f"[STATE] Ignoring deadline {value!r}: {e}")
            return False
        return self._commit(replace(self._album, target=target))

    def add_song(self, title: Optional[str] = None) -> bool:
        """Append a new song with the default stages."""
        ids = self._album.song_ids()
        song_id = max(ids) + 1 if ids else 1
        song = Song(
            id=song_id,
            title=(title or "").strip() or f"Song {song_id}",
            stages=tuple(Stage(name=name) for name in DEFAULT_STAGE_NAMES),
        )
        return self._commit(replace(self._album, songs=self._album.songs + (song,)))

    def remove_song(self, song_id: int) -> bool:
        """Remove a song for good."""
        if self._album.song_index(song_id) is None:
            return False
        songs = tuple(s for s in self._album.songs if s.id != song_id)
        return self._commit(replace(self._album, songs=songs))

    # Song edits

    def rename_song(self, song_id: int, title: str) -> bool:
        """Rename a song (blank titles are ignored)."""
        index = self._album.song_index(song_id)
        title = (title or "").strip()
        if index is None or not title:
            return False
        song = self._album.songs[index]
        return self._commit_song(index, replace(song, title=title))

    def add_stage(self, song_id: int) -> bool:
        """Append a "Stage N" at 0% to a song."""
        index = self._album.song_index(song_id)
        if index is None:
            return False
        song = self._album.songs[index]
        stage = Stage(name=stage_label(len(song.stages) + 1), value=0)
        return self._commit_song(index, replace(song, stages=song.stages + (stage,)))

    def update_stage(self, song_id: int, stage_index: int,
                     name: Optional[str] = None, value: Optional[int] = None) -> bool:
        """
        Edit one stage of a song.

        Args:
            song_id: Song to edit
            stage_index: Position of the stage (0-based)
            name: New name (None or blank = keep)
            value: New percent, clamped to 0-100 (None = keep)
        """
        index = self._album.song_index(song_id)
        if index is None:
            return False
        song = self._album.songs[index]
        if not 0 <= stage_index < len(song.stages):
            return False

        old_stage = song.stages[stage_index]
        new_name = (name or "").strip() or old_stage.name
        new_value = old_stage.value if value is None else value

        stages = list(song.stages)
        stages[stage_index] = Stage(name=new_name, value=new_value)
        return self._commit_song(index, replace(song, stages=tuple(stages)))

    def remove_stage(self, song_id: int, stage_index: int) -> bool:
        """Remove one stage; the rest keep their order."""
        index = self._album.song_index(song_id)
        if index is None:
            return False
        song = self._album.songs[index]
        if not 0 <= stage_index < len(song.stages):
            return False

        stages = song.stages[:stage_index] + song.stages[stage_index + 1:]
        return self._commit_song(index, replace(song, stages=stages))
