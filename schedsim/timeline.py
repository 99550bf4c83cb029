from __future__ import annotations

from typing import Dict, Iterable, List

from .errors import SimulationError
from .models import ProcessRecord, Segment, SegmentKind


def build_segments(rec: ProcessRecord) -> List[Segment]:
    """
    Turn the run intervals recorded for one process into waiting/running
    segments covering [arrival, completion).

    The first segment is always the initial wait, even when it is empty, so
    a process that ran in one piece gets exactly two segments.
    """
    if rec.completion_time is None:
        raise SimulationError(f"process {rec.pid} has no completion time")

    segments: List[Segment] = []
    cursor = rec.arrival_time

    for start, end in rec.slices:
        if start > cursor or not segments:
            segments.append(Segment(cursor, start, SegmentKind.WAITING))
        if segments[-1].kind is SegmentKind.RUNNING and segments[-1].end == start:
            segments[-1] = Segment(segments[-1].start, end, SegmentKind.RUNNING)
        else:
            segments.append(Segment(start, end, SegmentKind.RUNNING))
        cursor = end

    if cursor != rec.completion_time:
        raise SimulationError(
            f"process {rec.pid} timeline ends at {cursor}, completion is {rec.completion_time}"
        )
    return segments


def build_timeline(records: Iterable[ProcessRecord]) -> Dict[int, List[Segment]]:
    return {rec.pid: build_segments(rec) for rec in records}
