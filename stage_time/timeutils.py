"""Time validation utilities."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from stage_time.errors import TimestampParseError


def require_aware(dt: datetime, source: str | Path | None = None) -> datetime:
    """Return dt unchanged if it is timezone-aware.

    Raises:
        TimestampParseError: If dt is naive (no offset in the file).
    """

    if dt.tzinfo is None or dt.utcoffset() is None:
        raise TimestampParseError(
            f"time {dt.isoformat()} has no timezone offset",
            source=source,
        )
    return dt
