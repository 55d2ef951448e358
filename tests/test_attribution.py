from datetime import datetime, timedelta, timezone

import pytest

from stage_time.attribution import (
    accumulate_points,
    attribute_directory,
    attribute_paths,
    nearest_stage,
)
from stage_time.errors import (
    DirectoryNotFoundError,
    DistanceComputationError,
    MissingSegmentError,
    MissingTimestampError,
    MissingTrackError,
    TimestampParseError,
)
from stage_time.models import Stage, TrackPoint
from stage_time.stages import STAGES, stage_by_name

T0 = datetime(2025, 6, 27, 20, 0, tzinfo=timezone.utc)


def _at(name: str, time: datetime | None) -> TrackPoint:
    s = stage_by_name(name)
    return TrackPoint(latitude=s.latitude, longitude=s.longitude, time=time)


@pytest.mark.parametrize("stage", STAGES, ids=lambda s: s.name)
def test_point_on_stage_is_that_stage(stage):
    assert nearest_stage(stage.latitude, stage.longitude) == stage.name


def test_point_near_stage():
    s = stage_by_name("Palapa")
    assert nearest_stage(s.latitude + 0.00005, s.longitude - 0.00005) == "Palapa"


def test_equidistant_stages_first_listed_wins():
    first = Stage("first", 53.31, 12.74)
    second = Stage("second", 53.31, 12.74)
    assert nearest_stage(53.3, 12.7, [first, second]) == "first"
    assert nearest_stage(53.3, 12.7, [second, first]) == "second"


def test_nearest_stage_needs_stages():
    with pytest.raises(ValueError):
        nearest_stage(53.3, 12.7, [])


def test_interval_goes_to_later_point_stage():
    points = [
        _at("HPTTRSN", T0),
        _at("HPTTRSN", T0 + timedelta(minutes=5)),
        _at("Panne Eichel", T0 + timedelta(minutes=8)),
    ]
    durations: dict[str, timedelta] = {}

    added = accumulate_points(points, durations)

    assert durations == {"HPTTRSN": timedelta(minutes=5), "Panne Eichel": timedelta(minutes=3)}
    assert added == timedelta(minutes=8)


def test_first_point_contributes_nothing():
    durations: dict[str, timedelta] = {}
    accumulate_points([_at("Casino", T0)], durations)
    assert durations == {}


def test_accumulates_into_existing_totals():
    durations = {"Casino": timedelta(minutes=1)}
    accumulate_points([_at("Casino", T0), _at("Casino", T0 + timedelta(seconds=30))], durations)
    assert durations == {"Casino": timedelta(minutes=1, seconds=30)}


def test_negative_interval_is_kept(caplog):
    durations: dict[str, timedelta] = {}
    points = [
        _at("Rootsbase", T0),
        _at("Rootsbase", T0 - timedelta(minutes=2)),
    ]
    with caplog.at_level("WARNING"):
        accumulate_points(points, durations, source="late.gpx")
    assert durations == {"Rootsbase": timedelta(minutes=-2)}
    assert "earlier than the previous one" in caplog.text


def test_zero_interval_creates_entry():
    durations: dict[str, timedelta] = {}
    accumulate_points([_at("Palapa", T0), _at("Palapa", T0)], durations)
    assert durations == {"Palapa": timedelta(0)}


def test_missing_time_aborts():
    with pytest.raises(MissingTimestampError):
        accumulate_points([_at("Casino", T0), _at("Casino", None)], {})


def test_naive_time_aborts():
    with pytest.raises(TimestampParseError):
        accumulate_points([_at("Casino", datetime(2025, 6, 27, 20, 0))], {})


def test_offsets_are_compared_as_instants():
    cest = timezone(timedelta(hours=2))
    points = [
        _at("Casino", T0),
        _at("Casino", datetime(2025, 6, 27, 22, 10, tzinfo=cest)),
    ]
    durations: dict[str, timedelta] = {}
    accumulate_points(points, durations)
    assert durations == {"Casino": timedelta(minutes=10)}


def _gpx_point(name: str, time: str | None):
    s = stage_by_name(name)
    return (s.latitude, s.longitude, time)


def test_files_do_not_share_intervals(write_gpx, gpx_dir):
    write_gpx(
        "a.gpx",
        [_gpx_point("Casino", "2025-06-27T20:00:00Z"), _gpx_point("Casino", "2025-06-27T20:04:00Z")],
    )
    write_gpx(
        "b.gpx",
        [_gpx_point("Casino", "2025-06-28T20:00:00Z"), _gpx_point("Casino", "2025-06-28T20:06:00Z")],
    )

    durations = attribute_directory(gpx_dir)

    assert durations == {"Casino": timedelta(minutes=10)}


def test_only_first_track_and_segment_count(write_gpx, gpx_dir):
    first = [_gpx_point("Casino", "2025-06-27T20:00:00Z"), _gpx_point("Casino", "2025-06-27T20:01:00Z")]
    ignored = [_gpx_point("Palapa", "2025-06-27T21:00:00Z"), _gpx_point("Palapa", "2025-06-27T23:00:00Z")]
    write_gpx("multi.gpx", tracks=[[first, ignored], [ignored]])

    assert attribute_directory(gpx_dir) == {"Casino": timedelta(minutes=1)}


def test_file_without_track_aborts(write_gpx, gpx_dir):
    write_gpx("empty.gpx", tracks=[])
    with pytest.raises(MissingTrackError):
        attribute_directory(gpx_dir)


def test_track_without_segment_aborts(write_gpx, gpx_dir):
    write_gpx("noseg.gpx", tracks=[[]])
    with pytest.raises(MissingSegmentError):
        attribute_directory(gpx_dir)


def test_first_error_aborts_whole_run(write_gpx):
    good = write_gpx(
        "good.gpx",
        [_gpx_point("Casino", "2025-06-27T20:00:00Z"), _gpx_point("Casino", "2025-06-27T20:04:00Z")],
    )
    bad = write_gpx("bad.gpx", tracks=[])
    with pytest.raises(MissingTrackError) as info:
        attribute_paths([good, bad])
    assert info.value.source == bad


def test_gpx_point_without_time_aborts(write_gpx, gpx_dir):
    write_gpx("notime.gpx", [_gpx_point("Casino", None)])
    with pytest.raises(MissingTimestampError):
        attribute_directory(gpx_dir)


def test_missing_directory(tmp_path):
    with pytest.raises(DirectoryNotFoundError):
        attribute_directory(tmp_path / "nope")


def test_empty_directory(gpx_dir):
    assert attribute_directory(gpx_dir) == {}


def test_invalid_coordinate_aborts_walk():
    points = [_at("Casino", T0), TrackPoint(latitude=95.0, longitude=12.7, time=T0 + timedelta(minutes=1))]
    durations: dict[str, timedelta] = {}
    with pytest.raises(DistanceComputationError):
        accumulate_points(points, durations)
    assert durations == {}


def test_invalid_coordinate_in_file_aborts_run(write_gpx, gpx_dir):
    write_gpx(
        "far_north.gpx",
        [_gpx_point("Casino", "2025-06-27T20:00:00Z"), (95.0, 12.7, "2025-06-27T20:01:00Z")],
    )
    with pytest.raises(DistanceComputationError):
        attribute_directory(gpx_dir)
