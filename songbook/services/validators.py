"""
Songbook - Field Validators

Each validator is a pure function of one raw value returning a
``ValidationResult``.  They do not depend on each other, so the batch
helpers below can run them in any order and collect every failing message
before a write is rejected.
"""

import re
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from songbook.config import (
    ARTIST_MAX_LENGTH,
    EDITABLE_SONG_FIELDS,
    GENRE_MAX_LENGTH,
    MIN_YEAR,
    TITLE_MAX_LENGTH,
)
from songbook.models import ValidationResult
from songbook.services.duration import validate_duration

_YEAR_PATTERN = re.compile(r"^\d+$")


def current_year() -> int:
    return datetime.now().year


def parse_year(value: Any) -> Optional[int]:
    """Interpret an int or digit string as a year; anything else gives None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _YEAR_PATTERN.match(value.strip()):
        return int(value.strip())
    return None


def is_blank_year(value: Any) -> bool:
    """True for the values that mean "no year given" (None, "" or 0)."""
    if value is None or value == "":
        return True
    return isinstance(value, int) and not isinstance(value, bool) and value == 0


# ---------------------------------------------------------------------------
# Single-field rules
# ---------------------------------------------------------------------------
def _validate_required_text(
    value: Any, max_length: int, required_msg: str, too_long_msg: str
) -> ValidationResult:
    if not isinstance(value, str) or not value.strip():
        return ValidationResult(False, required_msg)
    if len(value) > max_length:
        return ValidationResult(False, too_long_msg)
    return ValidationResult(True)


def validate_title(title: Any) -> ValidationResult:
    return _validate_required_text(
        title,
        TITLE_MAX_LENGTH,
        "Song title is required",
        f"Song title must not exceed {TITLE_MAX_LENGTH} characters",
    )


def validate_artist(artist: Any) -> ValidationResult:
    return _validate_required_text(
        artist,
        ARTIST_MAX_LENGTH,
        "Artist is required",
        f"Artist name must not exceed {ARTIST_MAX_LENGTH} characters",
    )


def validate_year(year: Any) -> ValidationResult:
    """
    Year is optional.  When given it must be a whole number between
    ``MIN_YEAR`` and the current year, evaluated at call time.
    """
    if is_blank_year(year):
        return ValidationResult(True)

    latest = current_year()
    parsed = parse_year(year)
    if parsed is None or parsed < MIN_YEAR or parsed > latest:
        return ValidationResult(
            False, f"Release year must be a number between {MIN_YEAR} and {latest}"
        )
    return ValidationResult(True)


def validate_genre(genre: Any) -> ValidationResult:
    if genre and len(genre) > GENRE_MAX_LENGTH:
        return ValidationResult(
            False, f"Genre must not exceed {GENRE_MAX_LENGTH} characters"
        )
    return ValidationResult(True)


FIELD_VALIDATORS: Dict[str, Callable[[Any], ValidationResult]] = {
    "title": validate_title,
    "artist": validate_artist,
    "year": validate_year,
    "genre": validate_genre,
    "duration": validate_duration,
}


# ---------------------------------------------------------------------------
# Batch validation
# ---------------------------------------------------------------------------
def validate_song_fields(fields: Dict[str, Any], partial: bool = False) -> List[str]:
    """
    Run the field rules and return every failing message.

    With ``partial=False`` all five rules run, missing fields counting as
    absent.  With ``partial=True`` only the fields present in ``fields`` are
    checked, as for a PUT.
    """
    errors: List[str] = []
    for name in EDITABLE_SONG_FIELDS:
        if partial and name not in fields:
            continue
        result = FIELD_VALIDATORS[name](fields.get(name))
        if not result.valid:
            errors.append(result.message or f"Invalid {name}")
    return errors
