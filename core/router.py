"""
Navigation between the grid and a single zoomed song.

The only thing the router remembers is the navigation token (the
"address", e.g. "song/7"). Which view to show is worked out from the
token and the current album every time it is asked, so a token that
points at a removed song simply falls back to the grid.
"""
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from core.constants import NAV_SONG_PREFIX
from core.models import Album


_SONG_TOKEN = re.compile(r"^#?" + re.escape(NAV_SONG_PREFIX) + r"(-?\d+)$")


@dataclass(frozen=True)
class GridView:
    """All songs as cards."""


@dataclass(frozen=True)
class ZoomedView:
    """One song, enlarged."""
    song_id: int


View = Union[GridView, ZoomedView]


def parse_token(token: Optional[str]) -> Optional[int]:
    """
    Extract the song id from a navigation token.

    Example:
        >>> parse_token("song/7")
        7
        >>> parse_token("#song/7")
        7
        >>> parse_token("song/seven") is None
        True
    """
    if not token:
        return None
    match = _SONG_TOKEN.match(token.strip())
    if match is None:
        return None
    return int(match.group(1))


def token_for(song_id: int) -> str:
    """Navigation token for a song."""
    return f"{NAV_SONG_PREFIX}{song_id}"


def resolve_view(token: Optional[str], album: Album) -> View:
    """
    Work out which view a token selects for the given album.

    Returns:
        ZoomedView if the token names a song that exists, else GridView
    """
    song_id = parse_token(token)
    if song_id is not None and album.get_song(song_id) is not None:
        return ZoomedView(song_id)
    return GridView()


class ViewRouter:
    """Holds the navigation token and derives the view from it."""

    def __init__(self, token: str = ""):
        """
        Args:
            token: Starting navigation token ("" = grid)
        """
        self._token = token
        self._listeners: List[Callable[[str], None]] = []

    @property
    def token(self) -> str:
        """Current navigation token."""
        return self._token

    def add_listener(self, callback: Callable[[str], None]):
        """Call `callback(token)` whenever the token changes."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[str], None]):
        """Stop notifying `callback`."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def navigate(self, token: str):
        """Set the navigation token (as if the address changed)."""
        token = token or ""
        if token == self._token:
            return
        print(f"[NAV] {self._token or '(grid)'} -> {token or '(grid)'}")
        self._token = token
        for callback in list(self._listeners):
            callback(token)

    def zoom(self, song_id: int):
        """Go to the zoomed view of a song."""
        self.navigate(token_for(song_id))

    def back(self):
        """Go back to the grid."""
        self.navigate("")

    def current(self, album: Album) -> View:
        """View for the current token and album."""
        return resolve_view(self._token, album)
