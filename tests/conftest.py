from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

import pytest

# (lat, lon, time text or None)
PointSpec = tuple[float, float, str | None]

_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">\n'


def gpx_text(tracks: Sequence[Sequence[Sequence[PointSpec]]]) -> str:
    """Build a GPX document: tracks -> segments -> points."""

    parts = [_HEADER]
    for track in tracks:
        parts.append("  <trk>\n")
        for segment in track:
            parts.append("    <trkseg>\n")
            for lat, lon, time in segment:
                parts.append(f'      <trkpt lat="{lat}" lon="{lon}">')
                if time is not None:
                    parts.append(f"<time>{time}</time>")
                parts.append("</trkpt>\n")
            parts.append("    </trkseg>\n")
        parts.append("  </trk>\n")
    parts.append("</gpx>\n")
    return "".join(parts)


@pytest.fixture
def gpx_dir(tmp_path: Path) -> Path:
    d = tmp_path / "gpx"
    d.mkdir()
    return d


@pytest.fixture
def write_gpx(gpx_dir: Path) -> Callable[..., Path]:
    """Write a single-track, single-segment GPX file (or a custom layout via tracks=)."""

    def _write(name: str, points: Sequence[PointSpec] = (), *, tracks=None) -> Path:
        layout = tracks if tracks is not None else [[list(points)]]
        p = gpx_dir / name
        p.write_text(gpx_text(layout), encoding="utf-8")
        return p

    return _write
