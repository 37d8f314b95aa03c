"""
Songbook - JSON Record Store

The whole collection lives in one JSON array on disk.  Every operation reads
the full document and every mutation writes the full document back; there is
no indexing and no partial update at this layer.

Reads are fail-open by default: a corrupt or unreadable file is logged and
treated as an empty collection.  Writes go to a temporary sibling file that
is then renamed over the target, so readers never observe a half-written
document.
"""

import asyncio
import json
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import aiofiles
import aiofiles.os
from loguru import logger

from songbook.config import SONGS_FILE, SONGS_SERIALIZE_WRITES, SONGS_STORE_FAIL_OPEN
from songbook.exceptions import StoreUnavailableError


class SongStore:
    """Load/save access to the songs file. Callers never touch the file directly."""

    def __init__(
        self,
        path: Union[str, Path, None] = None,
        fail_open: bool = SONGS_STORE_FAIL_OPEN,
        serialize_writes: bool = SONGS_SERIALIZE_WRITES,
    ):
        self.path = Path(path) if path is not None else SONGS_FILE
        self.fail_open = fail_open
        self.serialize_writes = serialize_writes
        self._write_lock: Optional[asyncio.Lock] = None

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------
    async def load(self) -> List[Dict[str, Any]]:
        """Return the stored songs in order. A missing file is an empty collection."""
        if not self.path.exists():
            return []

        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
            songs = json.loads(raw)
            if not isinstance(songs, list):
                raise ValueError(
                    f"expected a JSON array, got {type(songs).__name__}"
                )
        except (OSError, ValueError) as e:
            if self.fail_open:
                logger.warning(
                    "⚠️ Could not read songs file {} ({}) — treating it as empty",
                    self.path,
                    e,
                )
                return []
            logger.error("❌ Could not read songs file {}: {}", self.path, e)
            raise StoreUnavailableError("Failed to load songs") from e

        return songs

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------
    async def save(self, songs: List[Dict[str, Any]]) -> None:
        """Overwrite the songs file with ``songs`` (write to .tmp, then rename)."""
        tmp_path = self.path.with_name(f"{self.path.name}.{uuid.uuid4().hex}.tmp")
        payload = json.dumps(songs, indent=2, ensure_ascii=False)

        try:
            await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("❌ Failed to write songs file {}: {}", self.path, e)
            if tmp_path.exists():
                await aiofiles.os.remove(tmp_path)
            raise StoreUnavailableError("Failed to save songs") from e

        logger.debug("💾 Saved {} songs to {}", len(songs), self.path)

    @asynccontextmanager
    async def write_lock(self):
        """
        Serialize load → mutate → save cycles of writers in this process.

        A no-op when ``serialize_writes`` is off, in which case concurrent
        writers can overwrite each other's changes (last save wins).
        """
        if not self.serialize_writes:
            yield
            return
        if self._write_lock is None:
            self._write_lock = asyncio.Lock()
        async with self._write_lock:
            yield

    # ------------------------------------------------------------------
    # Identifiers
    # ------------------------------------------------------------------
    @staticmethod
    def next_id(songs: List[Dict[str, Any]]) -> int:
        """``max(id) + 1``, or 1 for an empty collection."""
        if not songs:
            return 1
        return max(int(song.get("id", 0)) for song in songs) + 1
