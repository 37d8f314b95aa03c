"""
Songbook - Configuration
All settings loaded from environment variables with sensible defaults.

The collection is persisted as a single JSON document on local disk.  Every
write rewrites the whole document, so the only tunables here are where that
document lives and how reads/writes of it behave.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
_ = load_dotenv()

# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------
APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = int(os.getenv("APP_PORT", "3000"))
APP_ENV = os.getenv("APP_ENV", "development")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
DEBUG = os.getenv("DEBUG", "true").lower() == "true"
SERVICE_NAME = os.getenv("SERVICE_NAME", "Favorite Songs API")

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = BASE_DIR.parent

DATA_DIR = Path(os.getenv("DATA_DIR", str(PROJECT_ROOT / "data")))
SONGS_FILE = Path(os.getenv("SONGS_FILE", str(DATA_DIR / "songs.json")))

TEMPLATES_DIR = BASE_DIR / "templates"

# ---------------------------------------------------------------------------
# Logging — stdout only
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# ---------------------------------------------------------------------------
# Store behaviour
# ---------------------------------------------------------------------------
# When true, an unreadable or corrupt songs file is treated as an empty
# collection instead of an error.  The next write will overwrite it.
SONGS_STORE_FAIL_OPEN = os.getenv("SONGS_STORE_FAIL_OPEN", "true").lower() == "true"

# Serialize create/update/delete inside this process with an asyncio.Lock.
# Does nothing for multiple worker processes sharing the same file.
SONGS_SERIALIZE_WRITES = (
    os.getenv("SONGS_SERIALIZE_WRITES", "true").lower() == "true"
)

# ---------------------------------------------------------------------------
# Song defaults & validation limits
# ---------------------------------------------------------------------------
UNSPECIFIED_GENRE = os.getenv("UNSPECIFIED_GENRE", "Unspecified")
DEFAULT_DURATION = "0:00"

MIN_YEAR = 1900
TITLE_MAX_LENGTH = 100
ARTIST_MAX_LENGTH = 100
GENRE_MAX_LENGTH = 50

# Fields a client may set through POST / PUT.
EDITABLE_SONG_FIELDS = ["title", "artist", "year", "genre", "duration"]

# Keys accepted by the ``sort`` query parameter.  Anything else sorts by id.
SORT_KEYS = {"id", "year", "title", "artist", "duration"}


def ensure_directories() -> None:
    """Create the local directory that holds the songs file."""
    SONGS_FILE.parent.mkdir(parents=True, exist_ok=True)
