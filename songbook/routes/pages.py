"""
Songbook - Page Routes

Serves the browser-facing collection page using Jinja2 templates.  The page
accepts the same filter/sort/limit query parameters as ``GET /api/songs``;
its add/edit/delete controls call the JSON API from a small inline script.
"""

from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse

from songbook.config import APP_VERSION, SERVICE_NAME
from songbook.models import SongQuery
from songbook.services import song_manager

router = APIRouter(tags=["Pages"])


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    artist: Optional[str] = Query(None),
    genre: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    sort: str = Query("id"),
    order: str = Query("asc"),
):
    """Collection page: song table, add/edit/delete controls and a statistics summary."""
    store = request.app.state.store
    query = SongQuery(artist=artist, genre=genre, limit=limit, sort=sort, order=order)
    result = await song_manager.list_songs(store, query)
    stats = await song_manager.get_stats(store)

    context = {
        "request": request,
        "page_title": SERVICE_NAME,
        "version": APP_VERSION,
        "songs": result.data,
        "count": result.count,
        "total": result.total,
        "filters": result.filters,
        "stats": stats,
        "docs_url": request.app.docs_url,
    }
    return request.app.state.templates.TemplateResponse(request, "index.html", context)
