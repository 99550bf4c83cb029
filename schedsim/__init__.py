"""
schedsim package.

A deterministic, single-CPU simulator for classical process scheduling
disciplines (FCFS, Round Robin, Priority, preemptive SJF / Priority) that
reports per-process waiting, turnaround and response times together with a
timeline for Gantt charts.
"""

from .algorithms import run_schedule
from .errors import ConfigurationError, SchedulerError, SimulationError
from .models import (
    Algorithm,
    ExecutionSlice,
    ProcessDescriptor,
    ProcessRecord,
    Segment,
    SegmentKind,
    SimulationResult,
)

__all__ = [
    "Algorithm",
    "ConfigurationError",
    "ExecutionSlice",
    "ProcessDescriptor",
    "ProcessRecord",
    "SchedulerError",
    "Segment",
    "SegmentKind",
    "SimulationError",
    "SimulationResult",
    "run_schedule",
]
