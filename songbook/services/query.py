"""
Songbook - Query Engine

Filter → sort → limit over an in-memory list of songs, as used by
``GET /api/songs``.
"""

from typing import Any, Callable, Dict, List, Optional

from songbook.config import SORT_KEYS
from songbook.models import QueryResult, SongQuery
from songbook.services.duration import to_seconds


def _contains(haystack: Any, needle: str) -> bool:
    return needle.lower() in str(haystack or "").lower()


def _numeric(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _text(value: Any) -> tuple:
    text = str(value or "")
    return (text.casefold(), text)


_SORT_KEY_FUNCS: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    "id": lambda song: _numeric(song.get("id")),
    "year": lambda song: _numeric(song.get("year")),
    "title": lambda song: _text(song.get("title")),
    "artist": lambda song: _text(song.get("artist")),
    "duration": lambda song: to_seconds(song.get("duration")),
}


def parse_limit(limit: Any) -> Optional[int]:
    """
    Return a usable positive limit or None.

    Accepts ints and numeric strings; fractional values are truncated
    (``"2.7"`` → 2).  Zero, negatives, infinities and garbage mean "no limit".
    """
    if limit is None or isinstance(limit, bool) or limit == "":
        return None
    try:
        value = int(float(limit))
    except (TypeError, ValueError, OverflowError):
        return None
    return value if value > 0 else None


def sort_songs(
    songs: List[Dict[str, Any]], sort: str = "id", order: str = "asc"
) -> List[Dict[str, Any]]:
    """Stable sort by ``sort`` (unknown keys fall back to id); ``order='desc'`` reverses."""
    key = sort if sort in SORT_KEYS else "id"
    return sorted(songs, key=_SORT_KEY_FUNCS[key], reverse=(order == "desc"))


def query_songs(songs: List[Dict[str, Any]], query: SongQuery) -> QueryResult:
    """Apply the artist/genre filters, sort, then the result-count limit."""
    result = list(songs)

    if query.artist:
        result = [s for s in result if _contains(s.get("artist"), query.artist)]
    if query.genre:
        result = [s for s in result if _contains(s.get("genre"), query.genre)]

    result = sort_songs(result, query.sort, query.order)

    limit = parse_limit(query.limit)
    if limit is not None:
        result = result[:limit]

    filters = {
        "artist": query.artist or None,
        "genre": query.genre or None,
        "limit": query.limit or None,
        "sort": query.sort,
        "order": query.order,
    }
    return QueryResult(data=result, total=len(songs), filters=filters)
