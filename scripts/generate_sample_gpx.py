from __future__ import annotations

import argparse
import random
from datetime import datetime, timedelta, timezone
from pathlib import Path

import gpxpy.gpx

from stage_time.stages import STAGES


def generate_track(
    *,
    points: int,
    seed: int,
    start: datetime,
) -> gpxpy.gpx.GPX:
    """Generate one fake festival track hopping between stages."""

    rng = random.Random(seed)
    cur = start
    stage = rng.choice(STAGES)

    gpx = gpxpy.gpx.GPX()
    track = gpxpy.gpx.GPXTrack(name=f"sample-{seed}")
    segment = gpxpy.gpx.GPXTrackSegment()
    track.segments.append(segment)
    gpx.tracks.append(track)

    for _ in range(points):
        # Occasionally wander off to another stage
        if rng.random() < 0.05:
            stage = rng.choice(STAGES)

        # Mostly stand in front of the current stage, small jitter
        lat = stage.latitude + rng.uniform(-0.0002, 0.0002)
        lon = stage.longitude + rng.uniform(-0.0002, 0.0002)

        # Time step: usually 10-60 seconds, sometimes a longer gap
        if rng.random() < 0.02:
            cur = cur + timedelta(minutes=rng.uniform(5, 20))
        else:
            cur = cur + timedelta(seconds=rng.uniform(10, 60))

        segment.points.append(gpxpy.gpx.GPXTrackPoint(latitude=lat, longitude=lon, time=cur))

    return gpx


def main() -> int:
    p = argparse.ArgumentParser(description="Generate fake GPX tracks for demo/testing (privacy-safe).")
    p.add_argument("--out-dir", type=str, default="gpx", help="Output directory")
    p.add_argument("--files", type=int, default=3, help="Number of GPX files")
    p.add_argument("--points", type=int, default=500, help="Points per file")
    p.add_argument("--seed", type=int, default=42, help="Random seed (reproducible)")
    p.add_argument(
        "--start",
        type=str,
        default="2025-06-27T14:00:00+02:00",
        help="Start time of the first track, with offset",
    )
    args = p.parse_args()

    start = datetime.fromisoformat(args.start)
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    for i in range(args.files):
        gpx = generate_track(points=args.points, seed=args.seed + i, start=start + timedelta(days=i))
        out_path = out_dir / f"track_{i + 1:02d}.gpx"
        out_path.write_text(gpx.to_xml(), encoding="utf-8")
        print(f"Generated: {out_path} (points={args.points}, seed={args.seed + i})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
