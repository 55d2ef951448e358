"""Data models for stages, track points and per-stage durations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Final


@dataclass(frozen=True, slots=True)
class Stage:
    """A named point of interest on the festival ground.

    Attributes:
        name: Display name, used as the grouping key of the report.
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
    """

    name: str
    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class TrackPoint:
    """A single recorded GPS fix.

    Attributes:
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        time: Recording instant. None if the file carries no (parseable) time.
        time_text: Raw time text the reader could not parse, if any.
    """

    latitude: float
    longitude: float
    time: datetime | None
    time_text: str | None = None


@dataclass(frozen=True, slots=True)
class StageDuration:
    """One report row: total time attributed to a stage."""

    stage: str
    duration: timedelta

    @property
    def total_seconds(self) -> float:
        return self.duration.total_seconds()


DEFAULT_GPX_DIR: Final[str] = "gpx"
