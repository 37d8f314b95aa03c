"""
Songbook - Pytest Configuration & Shared Fixtures

Provides reusable fixtures for:
- An isolated songs file / SongStore per test
- A sample collection of songs (and a store pre-seeded with it)
- A FastAPI TestClient bound to an app built around the isolated store
- A helper for driving the async store/service functions from sync tests
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from songbook.config import UNSPECIFIED_GENRE
from songbook.main import create_app
from songbook.store import SongStore

# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------


def _sample_songs() -> List[Dict[str, Any]]:
    return [
        {
            "id": 1,
            "title": "Bohemian Rhapsody",
            "artist": "Queen",
            "year": 1975,
            "genre": "Rock",
            "duration": "5:55",
            "addedDate": "2024-01-01T10:00:00.000Z",
            "plays": 0,
        },
        {
            "id": 2,
            "title": "Billie Jean",
            "artist": "Michael Jackson",
            "year": 1982,
            "genre": "Pop",
            "duration": "4:54",
            "addedDate": "2024-01-02T10:00:00.000Z",
            "plays": 0,
        },
        {
            "id": 3,
            "title": "Another One Bites the Dust",
            "artist": "Queen",
            "year": 1980,
            "genre": "Rock",
            "duration": "3:35",
            "addedDate": "2024-01-03T10:00:00.000Z",
            "plays": 0,
        },
        {
            "id": 4,
            "title": "Echoes",
            "artist": "Pink Floyd",
            "year": 1971,
            "genre": "Progressive Rock",
            "duration": "23:31",
            "addedDate": "2024-01-04T10:00:00.000Z",
            "plays": 0,
        },
        {
            "id": 5,
            "title": "Gruppa Krovi",
            "artist": "Kino",
            "year": 1988,
            "genre": UNSPECIFIED_GENRE,
            "duration": "4:45",
            "addedDate": "2024-01-05T10:00:00.000Z",
            "plays": 0,
        },
    ]


@pytest.fixture
def sample_songs() -> List[Dict[str, Any]]:
    """Five songs with distinct ids, two by the same artist, one without a genre."""
    return _sample_songs()


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def songs_file(tmp_path: Path) -> Path:
    """Path of a songs file that does not exist yet."""
    return tmp_path / "data" / "songs.json"


@pytest.fixture
def store(songs_file: Path) -> SongStore:
    """An empty, fail-open store backed by a temporary file."""
    return SongStore(songs_file, fail_open=True)


@pytest.fixture
def seeded_store(songs_file: Path, sample_songs) -> SongStore:
    """A store whose file already holds ``sample_songs``."""
    songs_file.parent.mkdir(parents=True, exist_ok=True)
    songs_file.write_text(json.dumps(sample_songs, indent=2), encoding="utf-8")
    return SongStore(songs_file, fail_open=True)


def read_songs_file(path: Path) -> List[Dict[str, Any]]:
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def stored_songs(songs_file: Path):
    """Callable returning whatever is currently persisted in the songs file."""

    def _read() -> List[Dict[str, Any]]:
        if not songs_file.exists():
            return []
        return read_songs_file(songs_file)

    return _read


# ---------------------------------------------------------------------------
# Async helper
# ---------------------------------------------------------------------------


@pytest.fixture
def run():
    """Run a coroutine to completion from a synchronous test."""
    return asyncio.run


# ---------------------------------------------------------------------------
# HTTP client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def client(store: SongStore) -> TestClient:
    """TestClient over an app using the empty temporary store."""
    return TestClient(create_app(store))


@pytest.fixture
def seeded_client(seeded_store: SongStore) -> TestClient:
    """TestClient over an app using the store seeded with ``sample_songs``."""
    return TestClient(create_app(seeded_store))
