"""
Songbook - Song Manager

Orchestrates reads and writes against the ``SongStore``:
- Listing with filter/sort/limit and collection statistics
- Lookup by id
- Create (full validation, duplicate check, defaults, id assignment)
- Update (partial validation, duplicate check on merged values, id pinned)
- Delete

Every write loads the whole collection, mutates it in memory and saves the
whole collection back.  Failures are raised as ``songbook.exceptions``
errors; nothing here knows about HTTP.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from songbook.config import DEFAULT_DURATION, UNSPECIFIED_GENRE
from songbook.exceptions import ConflictError, NotFoundError, ValidationFailure
from songbook.models import QueryResult, SongCreate, SongQuery, SongUpdate
from songbook.services.query import query_songs
from songbook.services.stats import aggregate_stats
from songbook.services.validators import (
    current_year,
    is_blank_year,
    parse_year,
    validate_song_fields,
)
from songbook.store import SongStore


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _same(a: Any, b: Any) -> bool:
    return str(a or "").strip().lower() == str(b or "").strip().lower()


# ---------------------------------------------------------------------------
# Duplicate detection
# ---------------------------------------------------------------------------
def is_duplicate(
    songs: List[Dict[str, Any]],
    title: str,
    artist: str,
    exclude_index: Optional[int] = None,
) -> bool:
    """True if another song has the same title AND artist, ignoring case."""
    return any(
        i != exclude_index
        and _same(song.get("title"), title)
        and _same(song.get("artist"), artist)
        for i, song in enumerate(songs)
    )


def _find(songs: List[Dict[str, Any]], song_id: int) -> Tuple[int, Dict[str, Any]]:
    for index, song in enumerate(songs):
        if song.get("id") == song_id:
            return index, song
    raise NotFoundError()


# ---------------------------------------------------------------------------
# Field normalisation (runs after validation)
# ---------------------------------------------------------------------------
def _normalise(name: str, value: Any) -> Any:
    if name == "year":
        return current_year() if is_blank_year(value) else parse_year(value)
    if name == "genre":
        return value.strip() or UNSPECIFIED_GENRE
    if name == "duration":
        return value.strip() or DEFAULT_DURATION
    return value.strip()


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
async def list_songs(store: SongStore, query: SongQuery) -> QueryResult:
    songs = await store.load()
    return query_songs(songs, query)


async def get_song(store: SongStore, song_id: int) -> Dict[str, Any]:
    songs = await store.load()
    _, song = _find(songs, song_id)
    return song


async def get_stats(store: SongStore) -> Dict[str, Any]:
    songs = await store.load()
    return aggregate_stats(songs)


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------
async def create_song(store: SongStore, payload: SongCreate) -> Dict[str, Any]:
    """Validate every field, reject duplicates, then append and persist."""
    fields = payload.supplied()
    logger.debug("📥 Create payload: {}", fields)
    errors = validate_song_fields(fields)
    if errors:
        logger.info("🚫 Song rejected: {} validation error(s)", len(errors))
        raise ValidationFailure(errors)

    async with store.write_lock():
        songs = await store.load()

        if is_duplicate(songs, fields["title"], fields["artist"]):
            logger.info(
                "⚠️ Duplicate song rejected: {} - {}", fields["artist"], fields["title"]
            )
            raise ConflictError()

        song = {
            "id": store.next_id(songs),
            "title": _normalise("title", fields["title"]),
            "artist": _normalise("artist", fields["artist"]),
            "year": _normalise("year", fields.get("year")),
            "genre": _normalise("genre", fields.get("genre", "")),
            "duration": _normalise("duration", fields.get("duration", "")),
            "addedDate": _now_iso(),
            "plays": 0,
        }
        songs.append(song)
        await store.save(songs)

    logger.success(
        "✅ Song added (id={}): {} - {}", song["id"], song["title"], song["artist"]
    )
    return song


async def update_song(
    store: SongStore, song_id: int, payload: SongUpdate
) -> Dict[str, Any]:
    """
    Apply a partial update.

    Only supplied fields are validated and merged.  A duplicate check runs
    when title or artist is supplied, comparing the merged pair against every
    other song.  The stored id is never changed.
    """
    fields = payload.supplied()
    logger.debug("📥 Update payload for song {}: {}", song_id, fields)

    async with store.write_lock():
        songs = await store.load()
        index, existing = _find(songs, song_id)

        errors = validate_song_fields(fields, partial=True)
        if errors:
            logger.info(
                "🚫 Update of song {} rejected: {} validation error(s)",
                song_id,
                len(errors),
            )
            raise ValidationFailure(errors)

        if "title" in fields or "artist" in fields:
            title = fields.get("title", existing.get("title"))
            artist = fields.get("artist", existing.get("artist"))
            if is_duplicate(songs, title, artist, exclude_index=index):
                logger.info(
                    "⚠️ Update of song {} would duplicate: {} - {}",
                    song_id,
                    artist,
                    title,
                )
                raise ConflictError(
                    "A song with this title and artist already exists"
                )

        updated = dict(existing)
        for name, value in fields.items():
            updated[name] = _normalise(name, value)
        updated["id"] = song_id
        updated["updatedDate"] = _now_iso()

        songs[index] = updated
        await store.save(songs)

    logger.info("✏️ Song id={} updated: {}", song_id, sorted(fields))
    return updated


async def delete_song(store: SongStore, song_id: int) -> Dict[str, Any]:
    """Remove a song and return it."""
    async with store.write_lock():
        songs = await store.load()
        index, _ = _find(songs, song_id)
        removed = songs.pop(index)
        await store.save(songs)

    logger.info(
        "🗑️ Song id={} deleted: {} - {}",
        song_id,
        removed.get("title"),
        removed.get("artist"),
    )
    return removed
