"""Error types raised while attributing track time to stages."""

from __future__ import annotations

from pathlib import Path


class StageTimeError(Exception):
    """Base class for every fatal error of a run.

    Attributes:
        source: File or directory the error refers to, if any.
    """

    def __init__(self, message: str, source: str | Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = Path(source) if source is not None else None

    def __str__(self) -> str:
        if self.source is None:
            return self.message
        return f"{self.source}: {self.message}"


class DirectoryNotFoundError(StageTimeError):
    """The input directory does not exist."""


class FileOpenError(StageTimeError):
    """A directory entry cannot be opened for reading."""


class TrackParseError(StageTimeError):
    """File contents are not a valid GPX document."""


class MissingTrackError(StageTimeError):
    """The document contains no track."""


class MissingSegmentError(StageTimeError):
    """The first track contains no segment."""


class MissingTimestampError(StageTimeError):
    """A track point has no usable time."""


class TimestampParseError(StageTimeError):
    """A track point time is not a timezone-aware instant."""


class DistanceComputationError(StageTimeError):
    """Geodesic distance between two coordinates cannot be computed."""


class RenderError(StageTimeError):
    """The report table cannot be written."""
