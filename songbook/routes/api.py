"""
Songbook - JSON API Routes

Thin adapters between HTTP and ``songbook.services.song_manager``:
- Songs CRUD (list with filter/sort/limit, get, create, update, delete)
- Collection statistics
- Health check

Errors are raised as ``songbook.exceptions`` types and rendered by the
exception handlers registered in ``songbook.main``.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Query, Request

from songbook.config import APP_VERSION, SERVICE_NAME
from songbook.exceptions import NotFoundError
from songbook.models import SongCreate, SongQuery, SongUpdate
from songbook.services import song_manager
from songbook.store import SongStore

router = APIRouter(tags=["API"])


def _store(request: Request) -> SongStore:
    return request.app.state.store


def _parse_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise NotFoundError() from None


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@router.get("/health")
async def health_check():
    """Health check endpoint for the service."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
        "version": APP_VERSION,
    }


# ---------------------------------------------------------------------------
# Songs
# ---------------------------------------------------------------------------
@router.get("/api/songs")
async def api_list_songs(
    request: Request,
    artist: Optional[str] = Query(None),
    genre: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    sort: str = Query("id"),
    order: str = Query("asc"),
):
    """List songs with optional artist/genre filters, sorting and a result limit."""
    query = SongQuery(artist=artist, genre=genre, limit=limit, sort=sort, order=order)
    result = await song_manager.list_songs(_store(request), query)
    return {
        "success": True,
        "count": result.count,
        "total": result.total,
        "filters": result.filters,
        "data": result.data,
    }


@router.get("/api/songs/stats")
async def api_song_stats(request: Request):
    """Collection-wide statistics."""
    stats = await song_manager.get_stats(_store(request))
    return {"success": True, "data": stats}


@router.get("/api/songs/{song_id}")
async def api_get_song(request: Request, song_id: str):
    song = await song_manager.get_song(_store(request), _parse_id(song_id))
    return {"success": True, "data": song}


@router.post("/api/songs", status_code=201)
async def api_create_song(request: Request, body: SongCreate):
    song = await song_manager.create_song(_store(request), body)
    return {"success": True, "message": "Song added successfully", "data": song}


@router.put("/api/songs/{song_id}")
async def api_update_song(request: Request, song_id: str, body: SongUpdate):
    """Update any subset of title, artist, year, genre and duration."""
    song = await song_manager.update_song(_store(request), _parse_id(song_id), body)
    return {"success": True, "message": "Song updated successfully", "data": song}


@router.delete("/api/songs/{song_id}")
async def api_delete_song(request: Request, song_id: str):
    song = await song_manager.delete_song(_store(request), _parse_id(song_id))
    return {"success": True, "message": "Song deleted successfully", "data": song}
