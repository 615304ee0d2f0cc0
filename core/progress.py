"""
Completion math for songs and albums.

Everything here is a pure function of the models; nothing is cached.
All rounding is half-up and done in integers, so a song with many stages
gets exactly the same answer as a hand-computed mean.
"""
from typing import Iterable, Sequence

from core.constants import ELIGIBLE_THRESHOLD, clamp_percent
from core.models import Song


def round_half_up(numerator: int, denominator: int) -> int:
    """
    Round a non-negative fraction to the nearest integer, ties up.

    Example:
        >>> round_half_up(1, 2)
        1
        >>> round_half_up(100, 3)
        33
    """
    if denominator <= 0:
        raise ValueError(f"Denominator must be positive, got {denominator}")
    return (2 * numerator + denominator) // (2 * denominator)


def song_completion(song: Song) -> int:
    """
    Completion of one song: the mean of its stage values.

    Args:
        song: Song to measure

    Returns:
        Percent 0-100 (0 when the song has no stages)
    """
    if not song.stages:
        return 0
    total = sum(clamp_percent(stage.value) for stage in song.stages)
    return round_half_up(total, len(song.stages))


def album_completion(songs: Sequence[Song]) -> int:
    """
    Completion of the album: the mean of each song's completion.

    Songs count equally no matter how many stages they have.

    Args:
        songs: Songs on the album

    Returns:
        Percent 0-100 (0 when there are no songs)
    """
    if not songs:
        return 0
    total = sum(song_completion(song) for song in songs)
    return round_half_up(total, len(songs))


def eligible_count(songs: Iterable[Song], threshold: int = ELIGIBLE_THRESHOLD) -> int:
    """Number of songs whose completion is at or above the threshold."""
    return sum(1 for song in songs if song_completion(song) >= threshold)
