"""
Songbook - Error Taxonomy

Domain exceptions raised by the service layer.  Each carries the HTTP status
it maps to; ``songbook.main`` registers a single handler that renders them as
``{"success": false, "error": ..., "details": [...]}``.
"""

from typing import Any, Dict, List, Optional


class SongbookError(Exception):
    """Base class for every error the API reports to a client."""

    status_code = 500
    error = "Internal server error"

    def __init__(self, error: Optional[str] = None):
        if error is not None:
            self.error = error
        super().__init__(self.error)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.error}


class ValidationFailure(SongbookError):
    """One or more field rules failed. ``details`` lists every message."""

    status_code = 400
    error = "Validation failed"

    def __init__(self, details: List[str], error: Optional[str] = None):
        self.details = list(details)
        super().__init__(error)

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["details"] = self.details
        return body


class ConflictError(SongbookError):
    status_code = 409
    error = "This song already exists in your collection"


class NotFoundError(SongbookError):
    status_code = 404
    error = "Song not found"


class StoreUnavailableError(SongbookError):
    """The songs file could not be read (fail-open disabled) or written."""

    status_code = 500
    error = "Song storage is unavailable"
