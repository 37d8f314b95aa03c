"""
Songbook - Statistics Aggregator
"""

from typing import Any, Dict, List, Optional

from songbook.config import UNSPECIFIED_GENRE
from songbook.services.duration import format_seconds, to_seconds


def _year(song: Dict[str, Any]) -> int:
    try:
        return int(song.get("year") or 0)
    except (TypeError, ValueError):
        return 0


def _oldest(songs: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    oldest = None
    for song in songs:
        if oldest is None or _year(song) < _year(oldest):
            oldest = song
    return oldest


def _newest(songs: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    newest = None
    for song in songs:
        if newest is None or _year(song) > _year(newest):
            newest = song
    return newest


def aggregate_stats(songs: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Compute collection-wide statistics.

    Ties for oldest/newest go to the first song encountered.  Songs without
    a genre are counted under the unspecified sentinel, which is excluded
    from ``totalGenres``.
    """
    by_genre: Dict[str, int] = {}
    by_year: Dict[str, int] = {}
    total_seconds = 0

    for song in songs:
        genre = song.get("genre") or UNSPECIFIED_GENRE
        by_genre[genre] = by_genre.get(genre, 0) + 1

        year = str(song.get("year"))
        by_year[year] = by_year.get(year, 0) + 1

        total_seconds += to_seconds(song.get("duration"))

    artists = {song.get("artist") for song in songs}
    genres = {
        song.get("genre")
        for song in songs
        if song.get("genre") and song.get("genre") != UNSPECIFIED_GENRE
    }

    return {
        "totalSongs": len(songs),
        "totalArtists": len(artists),
        "totalGenres": len(genres),
        "totalDurationSeconds": total_seconds,
        "totalDurationFormatted": format_seconds(total_seconds),
        "oldestSong": _oldest(songs),
        "newestSong": _newest(songs),
        "byGenre": by_genre,
        "byYear": by_year,
    }
