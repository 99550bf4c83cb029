import pytest

from schedsim.errors import SimulationError
from schedsim.models import ProcessDescriptor, ProcessRecord, Segment, SegmentKind
from schedsim.timeline import build_segments, build_timeline

W = SegmentKind.WAITING
R = SegmentKind.RUNNING


def _rec(pid=1, arrival=0, burst=4):
    return ProcessRecord(ProcessDescriptor(pid, f"P{pid}", arrival, burst))


def test_single_run_gives_two_segments():
    rec = _rec(arrival=2, burst=3)
    rec.run(5, 3)
    rec.complete(8)
    assert build_segments(rec) == [Segment(2, 5, W), Segment(5, 8, R)]


def test_zero_length_initial_wait_is_kept():
    rec = _rec(arrival=0, burst=2)
    rec.run(0, 2)
    rec.complete(2)
    segments = build_segments(rec)
    assert segments[0] == Segment(0, 0, W)
    assert segments[0].duration == 0


def test_wait_run_wait_run():
    rec = _rec(arrival=1, burst=4)
    rec.run(1, 1)
    rec.run(2, 1)
    rec.run(5, 2)
    rec.complete(7)
    assert build_segments(rec) == [
        Segment(1, 1, W),
        Segment(1, 3, R),
        Segment(3, 5, W),
        Segment(5, 7, R),
    ]


def test_segments_cover_arrival_to_completion():
    rec = _rec(arrival=3, burst=3)
    rec.run(4, 1)
    rec.run(6, 2)
    rec.complete(8)
    segments = build_segments(rec)
    assert segments[0].start == rec.arrival_time
    assert segments[-1].end == rec.completion_time
    assert all(a.end == b.start for a, b in zip(segments, segments[1:]))
    assert sum(s.duration for s in segments if s.kind is W) == rec.waiting_time


def test_unfinished_record_has_no_timeline():
    rec = _rec()
    rec.run(0, 1)
    with pytest.raises(SimulationError):
        build_timeline([rec])


def test_record_write_once_fields():
    rec = _rec(arrival=2, burst=2)
    assert rec.response_time == -1
    assert rec.waiting_time is None

    with pytest.raises(SimulationError):
        rec.run(1, 1)
    rec.run(3, 1)
    with pytest.raises(SimulationError):
        rec.complete(4)
    rec.run(6, 1)
    assert rec.response_time == 1
    rec.complete(7)
    assert (rec.turnaround_time, rec.waiting_time) == (5, 3)
    with pytest.raises(SimulationError):
        rec.complete(7)
    with pytest.raises(SimulationError):
        rec.run(7, 1)
