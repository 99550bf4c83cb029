from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .errors import ConfigurationError, SimulationError


class Algorithm(str, Enum):
    FCFS = "fcfs"
    ROUND_ROBIN = "round_robin"
    PRIORITY = "priority"
    SJF_PREEMPTIVE = "sjf_preemptive"
    PRIORITY_PREEMPTIVE = "priority_preemptive"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def preemptive(self) -> bool:
        return self in (Algorithm.ROUND_ROBIN, Algorithm.SJF_PREEMPTIVE, Algorithm.PRIORITY_PREEMPTIVE)

    @classmethod
    def parse(cls, value: "Algorithm | str") -> "Algorithm":
        """
        Accept an Algorithm member, its value, or one of the short aliases
        used on the command line (rr, sjf, srtf, ...).
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ConfigurationError(f"Unknown algorithm '{value}'") from None


_LABELS = {
    Algorithm.FCFS: "FCFS",
    Algorithm.ROUND_ROBIN: "Round Robin",
    Algorithm.PRIORITY: "Priority (non-preemptive)",
    Algorithm.SJF_PREEMPTIVE: "SJF (preemptive)",
    Algorithm.PRIORITY_PREEMPTIVE: "Priority (preemptive)",
}

_ALIASES = {
    "fifo": "fcfs",
    "rr": "round_robin",
    "sjf": "sjf_preemptive",
    "srtf": "sjf_preemptive",
    "prio": "priority",
    "prio_preemptive": "priority_preemptive",
}


@dataclass(frozen=True)
class ProcessDescriptor:
    id: int
    name: str
    arrival_time: int
    burst_time: int
    priority: int = 0


class SegmentKind(str, Enum):
    WAITING = "waiting"
    RUNNING = "running"


@dataclass(frozen=True)
class Segment:
    """
    One stretch of a process's life between arrival and completion.
    """

    start: int
    end: int
    kind: SegmentKind

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class ExecutionSlice:
    """
    One contiguous dispatch of the CPU to a process.
    """

    pid: int
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass
class ProcessRecord:
    """
    Working state of one process during a single simulation run.

    Completion metrics stay None and response_time stays -1 until the
    engine writes them; each is written at most once.
    """

    descriptor: ProcessDescriptor
    remaining_time: int = field(init=False)
    start_time: Optional[int] = None
    response_time: int = -1
    completion_time: Optional[int] = None
    waiting_time: Optional[int] = None
    turnaround_time: Optional[int] = None
    slices: List[Tuple[int, int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.remaining_time = self.descriptor.burst_time

    @property
    def pid(self) -> int:
        return self.descriptor.id

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def arrival_time(self) -> int:
        return self.descriptor.arrival_time

    @property
    def burst_time(self) -> int:
        return self.descriptor.burst_time

    @property
    def priority(self) -> int:
        return self.descriptor.priority

    @property
    def finished(self) -> bool:
        return self.remaining_time == 0

    def run(self, start: int, duration: int) -> int:
        """
        Execute for ``duration`` units from ``start`` and return the new clock.
        The first call fixes start and response time.
        """
        if start < self.arrival_time:
            raise SimulationError(f"process {self.pid} dispatched at {start} before arrival {self.arrival_time}")
        if duration <= 0 or duration > self.remaining_time:
            raise SimulationError(
                f"process {self.pid} cannot run {duration} units with {self.remaining_time} remaining"
            )
        if self.slices and start < self.slices[-1][1]:
            raise SimulationError(f"process {self.pid} dispatched at {start}, clock went backwards")

        if self.response_time == -1:
            self.start_time = start
            self.response_time = start - self.arrival_time

        end = start + duration
        if self.slices and self.slices[-1][1] == start:
            # Back-to-back runs merge into one interval.
            self.slices[-1] = (self.slices[-1][0], end)
        else:
            self.slices.append((start, end))
        self.remaining_time -= duration
        return end

    def complete(self, clock: int) -> None:
        if self.completion_time is not None:
            raise SimulationError(f"process {self.pid} completed twice")
        if self.remaining_time != 0:
            raise SimulationError(f"process {self.pid} completed with {self.remaining_time} units left")

        self.completion_time = clock
        self.turnaround_time = clock - self.arrival_time
        self.waiting_time = self.turnaround_time - self.burst_time


@dataclass
class SimulationResult:
    """
    Outcome of one run.

    ``records`` keeps the order the descriptors were supplied in; use
    ``completion_order`` for the order processes finished.
    """

    algorithm: Algorithm
    quantum: Optional[int]
    records: List[ProcessRecord] = field(default_factory=list)
    timeline: Dict[int, List[Segment]] = field(default_factory=dict)
    slices: List[ExecutionSlice] = field(default_factory=list)

    @property
    def completion_order(self) -> List[int]:
        finished = sorted(self.records, key=lambda r: (r.completion_time, r.pid))
        return [r.pid for r in finished]

    def record(self, pid: int) -> ProcessRecord:
        for rec in self.records:
            if rec.pid == pid:
                return rec
        raise KeyError(pid)
