"""Nearest-stage attribution of elapsed track time."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, Sequence

from stage_time.errors import MissingTimestampError, TimestampParseError
from stage_time.geo import geodesic_m
from stage_time.gpx_io import list_track_files, read_track_points
from stage_time.models import Stage, TrackPoint
from stage_time.stages import STAGES
from stage_time.timeutils import require_aware

logger = logging.getLogger(__name__)


def nearest_stage(latitude: float, longitude: float, stages: Sequence[Stage] = STAGES) -> str:
    """Return the name of the stage closest to a coordinate.

    Brute force over all stages. On an exact tie the stage listed first wins.

    Args:
        latitude: Latitude in degrees.
        longitude: Longitude in degrees.
        stages: Candidate stages, in tie-break order.

    Raises:
        ValueError: If stages is empty.
        DistanceComputationError: If a distance cannot be computed.
    """

    best: Stage | None = None
    best_m = 0.0
    for stage in stages:
        d = geodesic_m(latitude, longitude, stage.latitude, stage.longitude)
        # strict comparison keeps the first minimum
        if best is None or d < best_m:
            best = stage
            best_m = d
    if best is None:
        raise ValueError("no stages to compare against")
    return best.name


def accumulate_points(
    points: Iterable[TrackPoint],
    durations: dict[str, timedelta],
    *,
    stages: Sequence[Stage] = STAGES,
    source: str | Path | None = None,
) -> timedelta:
    """Add the intervals between consecutive points of one segment to durations.

    Each interval is credited to the stage nearest the later point of the pair.
    The first point only seeds the previous timestamp. Negative intervals
    (clock jumps, out-of-order points) are added unchanged.

    Args:
        points: Points of a single segment, in recording order.
        durations: Accumulator, updated in place.
        stages: Candidate stages.
        source: File the points come from, used in messages.

    Returns:
        Total time added by this call.

    Raises:
        MissingTimestampError: If a point has no time.
        TimestampParseError: If a point time is malformed or has no timezone offset.
        DistanceComputationError: If nearest-stage lookup fails.
    """

    prev_time: datetime | None = None
    added = timedelta(0)
    for index, pt in enumerate(points):
        stage = nearest_stage(pt.latitude, pt.longitude, stages)
        if pt.time is None:
            if pt.time_text is not None:
                raise TimestampParseError(
                    f"track point #{index} has unparseable time {pt.time_text!r}",
                    source=source,
                )
            raise MissingTimestampError(f"track point #{index} has no time", source=source)
        cur_time = require_aware(pt.time, source)

        if prev_time is not None:
            delta = cur_time - prev_time
            if delta < timedelta(0):
                logger.warning(
                    "%s: track point #%s is %s earlier than the previous one",
                    source,
                    index,
                    -delta,
                )
            durations[stage] = durations.get(stage, timedelta(0)) + delta
            added += delta

        prev_time = cur_time
    return added


def accumulate_file(
    path: str | Path,
    durations: dict[str, timedelta],
    *,
    stages: Sequence[Stage] = STAGES,
) -> timedelta:
    """Read one GPX file and add its intervals to durations."""

    points = read_track_points(path)
    added = accumulate_points(points, durations, stages=stages, source=path)
    logger.debug("%s: %s points, %s attributed", path, len(points), added)
    return added


def attribute_paths(paths: Iterable[str | Path], *, stages: Sequence[Stage] = STAGES) -> dict[str, timedelta]:
    """Attribute the time of every file, in the given order.

    The first error aborts the whole run.

    Returns:
        Stage name -> accumulated duration, in first-attribution order.
    """

    durations: dict[str, timedelta] = {}
    for path in paths:
        logger.debug("processing %s", path)
        accumulate_file(path, durations, stages=stages)
    return durations


def attribute_directory(directory: str | Path, *, stages: Sequence[Stage] = STAGES) -> dict[str, timedelta]:
    """Attribute the time of every file directly inside directory."""

    return attribute_paths(list_track_files(directory), stages=stages)
