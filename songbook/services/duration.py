"""
Songbook - Duration Codec

Durations travel as ``mm:ss`` or ``hh:mm:ss`` strings.  Sorting and
statistics never compare those strings directly; they go through
``to_seconds`` first.
"""

import re
from typing import Any

from songbook.models import ValidationResult

DURATION_PATTERN = re.compile(r"^([0-5]?\d):([0-5]?\d)(?::([0-5]?\d))?$")

FORMAT_MESSAGE = (
    "Duration must be in mm:ss or hh:mm:ss format (for example 3:45 or 1:23:45)"
)
MM_SS_RANGE_MESSAGE = "Minutes and seconds must be between 0 and 59"
HH_MM_SS_RANGE_MESSAGE = "Hours, minutes and seconds must be between 0 and 59"


def validate_duration(duration: Any) -> ValidationResult:
    """
    Check a duration string.

    Empty or missing values are accepted (the caller fills in a default).
    The pattern is matched first; only then is every component
    range-checked to 0-59.
    """
    if not duration:
        return ValidationResult(True)

    if not isinstance(duration, str) or not DURATION_PATTERN.match(duration):
        return ValidationResult(False, FORMAT_MESSAGE)

    parts = [int(p) for p in duration.split(":")]
    if any(p > 59 for p in parts):
        if len(parts) == 2:
            return ValidationResult(False, MM_SS_RANGE_MESSAGE)
        return ValidationResult(False, HH_MM_SS_RANGE_MESSAGE)

    return ValidationResult(True)


def to_seconds(duration: Any) -> int:
    """Convert ``m:ss`` / ``h:mm:ss`` into total seconds (0 for anything else)."""
    if not isinstance(duration, str):
        return 0
    try:
        parts = [int(p) for p in duration.split(":")]
    except ValueError:
        return 0

    if len(parts) == 2:
        minutes, seconds = parts
        return minutes * 60 + seconds
    if len(parts) == 3:
        hours, minutes, seconds = parts
        return hours * 3600 + minutes * 60 + seconds
    return 0


def format_seconds(total_seconds: int) -> str:
    """Render seconds as ``m:ss``, or ``h:mm:ss`` once there is a full hour."""
    hours, remainder = divmod(int(total_seconds), 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"
