"""GPX input utilities for the track log directory."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Sequence

import gpxpy
import gpxpy.gpx

from stage_time.errors import (
    DirectoryNotFoundError,
    FileOpenError,
    MissingSegmentError,
    MissingTrackError,
    TrackParseError,
)
from stage_time.models import TrackPoint

logger = logging.getLogger(__name__)

_XML_ENCODING = re.compile(rb"""^\s*<\?xml[^>]*?\sencoding\s*=\s*["']([A-Za-z0-9._-]+)["']""")


def list_track_files(directory: str | Path) -> list[Path]:
    """List every entry directly inside the track directory.

    No extension filtering is done, and entries come back in whatever order the
    filesystem yields them.

    Raises:
        DirectoryNotFoundError: If directory does not exist.
    """

    d = Path(directory)
    if not d.is_dir():
        raise DirectoryNotFoundError("track directory not found", source=d)
    paths = list(d.iterdir())
    logger.debug("found %s entries in %s", len(paths), d)
    return paths


def read_gpx_text(path: str | Path) -> str:
    """Read a GPX file and decode it using the encoding its XML declaration names.

    Files without a declaration are decoded as UTF-8.

    Raises:
        FileOpenError: If the file cannot be read.
        TrackParseError: If the bytes cannot be decoded.
    """

    p = Path(path)
    try:
        with p.open("rb") as f:
            data = f.read()
    except OSError as exc:
        raise FileOpenError(f"cannot open file: {exc.strerror or exc}", source=p) from exc

    m = _XML_ENCODING.match(data)
    encoding = m.group(1).decode("ascii") if m else "utf-8-sig"
    try:
        return data.decode(encoding)
    except (LookupError, UnicodeDecodeError) as exc:
        raise TrackParseError(f"cannot decode file as {encoding}: {exc}", source=p) from exc


def parse_gpx(text: str, source: str | Path | None = None) -> gpxpy.gpx.GPX:
    """Parse GPX text.

    Raises:
        TrackParseError: If the text is not a GPX document.
    """

    try:
        return gpxpy.parse(text)
    except (gpxpy.gpx.GPXException, ValueError) as exc:
        raise TrackParseError(f"not a valid GPX document: {exc}", source=source) from exc


def read_gpx(path: str | Path) -> gpxpy.gpx.GPX:
    """Open and parse one GPX file."""

    return parse_gpx(read_gpx_text(path), source=path)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def first_segment_time_texts(text: str) -> list[str | None]:
    """Raw <time> text of each point in the first segment of the first track.

    gpxpy turns a malformed time into None; the raw text tells a malformed time
    apart from a missing one.
    """

    try:
        root = ET.fromstring(text)
    except ET.ParseError:
        return []
    trk = next((el for el in root if _local(el.tag) == "trk"), None)
    if trk is None:
        return []
    seg = next((el for el in trk if _local(el.tag) == "trkseg"), None)
    if seg is None:
        return []

    texts: list[str | None] = []
    for pt in seg:
        if _local(pt.tag) != "trkpt":
            continue
        time_el = next((el for el in pt if _local(el.tag) == "time"), None)
        value = time_el.text.strip() if time_el is not None and time_el.text else ""
        texts.append(value or None)
    return texts


def first_segment_points(
    gpx: gpxpy.gpx.GPX,
    source: str | Path | None = None,
    time_texts: Sequence[str | None] = (),
) -> list[TrackPoint]:
    """Extract the points of the first segment of the first track.

    Args:
        gpx: Parsed GPX document.
        source: Path used in error messages.
        time_texts: Raw <time> text per point, kept on points gpxpy could not time.

    Returns:
        Points in file order.

    Raises:
        MissingTrackError: If the document has no track.
        MissingSegmentError: If the first track has no segment.
    """

    if not gpx.tracks:
        raise MissingTrackError("GPX file does not contain a track", source=source)
    track = gpx.tracks[0]
    if not track.segments:
        raise MissingSegmentError("GPX track does not contain a segment", source=source)
    segment = track.segments[0]

    if len(gpx.tracks) > 1 or len(track.segments) > 1:
        logger.debug(
            "%s: using first of %s track(s) / %s segment(s)",
            source,
            len(gpx.tracks),
            len(track.segments),
        )

    if len(time_texts) != len(segment.points):
        time_texts = [None] * len(segment.points)
    return [
        TrackPoint(
            latitude=pt.latitude,
            longitude=pt.longitude,
            time=pt.time,
            time_text=raw if pt.time is None else None,
        )
        for pt, raw in zip(segment.points, time_texts)
    ]


def read_track_points(path: str | Path) -> list[TrackPoint]:
    """Read the first track segment of a GPX file."""

    text = read_gpx_text(path)
    gpx = parse_gpx(text, source=path)
    return first_segment_points(gpx, source=path, time_texts=first_segment_time_texts(text))
