from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ExecutionSlice, SegmentKind, SimulationResult

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _label(pid: int) -> str:
    return f"P{pid}"


def render_gantt(slices: List[ExecutionSlice]) -> str:
    """
    Plain-text Gantt chart of the CPU lane.
    """
    if not slices:
        return "(no execution)"

    slices = sorted(slices, key=lambda s: (s.start, s.end))

    line = "|"
    labels = " "
    time_marks = "0"
    last_time = 0

    for sl in slices:
        idle_gap = sl.start - last_time
        if idle_gap > 0:
            line += "." * idle_gap
            labels += " " * idle_gap
            last_time = sl.start
            time_marks += f"{last_time:>3}"

        width = max(1, sl.duration)
        line += "=" * width
        labels += _label(sl.pid)[:width].ljust(width)
        last_time = sl.end
        time_marks += f"{last_time:>3}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


class _Palette:
    def __init__(self) -> None:
        self._by_pid: Dict[int, str] = {}

    def __call__(self, pid: int) -> str:
        if pid not in self._by_pid:
            self._by_pid[pid] = COLORS[len(self._by_pid) % len(COLORS)]
        return self._by_pid[pid]


def build_rich_gantt(slices: List[ExecutionSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    slices = sorted(slices, key=lambda s: (s.start, s.end))
    pid_color = _Palette()

    timeline = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for sl in slices:
        idle_gap = sl.start - last_time
        if idle_gap > 0:
            timeline.append(" " * idle_gap)
            labels.append(" " * idle_gap)
            last_time = sl.start
            time_marks += f"{last_time:>3}"

        width = max(1, sl.duration)
        timeline.append(" " * width, style=f"on {pid_color(sl.pid)}")
        labels.append(_label(sl.pid)[:width].ljust(width), style="bold")

        last_time = sl.end
        time_marks += f"{last_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks


def build_rich_timeline(result: SimulationResult) -> Table:
    """
    One row per process: dim cells while it waits, colored cells while it
    runs, blank before arrival and after completion.
    """
    pid_color = _Palette()
    makespan = max((r.completion_time or 0) for r in result.records) if result.records else 0

    table = Table(title="Process timeline", show_header=True, header_style="bold")
    table.add_column("Process")
    table.add_column("".join(str(t % 10) for t in range(makespan)) or "-", no_wrap=True)

    for rec in result.records:
        row = Text(" " * rec.arrival_time)
        for seg in result.timeline.get(rec.pid, []):
            if seg.kind is SegmentKind.WAITING:
                row.append("." * seg.duration, style="dim")
            else:
                row.append(" " * seg.duration, style=f"on {pid_color(rec.pid)}")
        table.add_row(f"{_label(rec.pid)} {rec.name}", row)

    return table
