"""
Songbook - Payload & Result Models

Request bodies are explicit pydantic models with one optional slot per
editable field.  They deliberately carry no length or range constraints:
those rules live in ``songbook.services.validators`` so that every failing
rule can be reported in one response instead of pydantic's first-error style.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict

from songbook.config import EDITABLE_SONG_FIELDS


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a single field rule."""

    valid: bool
    message: Optional[str] = None


class SongPayload(BaseModel):
    """Fields a client may send for a song. Unknown keys (``id``, ``plays``...) are dropped."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    artist: Optional[str] = None
    year: Optional[Union[int, str]] = None
    genre: Optional[str] = None
    duration: Optional[str] = None

    def supplied(self) -> Dict[str, Any]:
        """Return the editable fields that were present in the body and not null."""
        return {
            name: getattr(self, name)
            for name in EDITABLE_SONG_FIELDS
            if name in self.model_fields_set and getattr(self, name) is not None
        }


class SongCreate(SongPayload):
    pass


class SongUpdate(SongPayload):
    pass


@dataclass
class SongQuery:
    """Options for listing songs (mirrors the ``GET /api/songs`` query string)."""

    artist: Optional[str] = None
    genre: Optional[str] = None
    limit: Optional[Union[int, str]] = None
    sort: str = "id"
    order: str = "asc"


@dataclass
class QueryResult:
    data: List[Dict[str, Any]]
    total: int
    filters: Dict[str, Any] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.data)
