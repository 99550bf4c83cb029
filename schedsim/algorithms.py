from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional

from .errors import ConfigurationError, SimulationError
from .models import Algorithm, ExecutionSlice, ProcessDescriptor, ProcessRecord, SimulationResult
from .ready_queue import (
    ArrivalFeed,
    RankingPolicy,
    ReadyQueue,
    fifo_order,
    priority_order,
    priority_preemptive_order,
    shortest_remaining_order,
)
from .timeline import build_timeline

logger = logging.getLogger(__name__)


def _horizon(records: List[ProcessRecord]) -> int:
    # Nothing can still be running after the last arrival plus all the work.
    return max(r.arrival_time for r in records) + sum(r.burst_time for r in records)


def _check_clock(clock: int, horizon: int) -> None:
    if clock > horizon:
        raise SimulationError(f"simulated clock {clock} passed horizon {horizon}")


def _finish(rec: ProcessRecord, clock: int) -> None:
    rec.complete(clock)
    logger.debug(
        "t=%d: process %d done (waiting=%d, turnaround=%d, response=%d)",
        clock,
        rec.pid,
        rec.waiting_time,
        rec.turnaround_time,
        rec.response_time,
    )


def schedule_fcfs(records: List[ProcessRecord], quantum: Optional[int] = None) -> List[ExecutionSlice]:
    """
    First-Come First-Serve (non-preemptive).

    Processes run in (arrival, id) order, each to completion.
    """
    time = 0
    slices: List[ExecutionSlice] = []

    for rec in sorted(records, key=fifo_order):
        if time < rec.arrival_time:
            time = rec.arrival_time

        start_time = time
        time = rec.run(start_time, rec.burst_time)
        slices.append(ExecutionSlice(pid=rec.pid, start=start_time, end=time))
        _finish(rec, time)

    return slices


def schedule_rr(records: List[ProcessRecord], quantum: Optional[int] = None) -> List[ExecutionSlice]:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while a slice is running are queued ahead of the
    process that was just preempted.
    """
    if quantum is None or quantum <= 0:
        raise ConfigurationError("Round Robin requires a positive quantum")

    horizon = _horizon(records)
    arrivals = ArrivalFeed(records)
    ready = ReadyQueue()
    slices: List[ExecutionSlice] = []
    time = 0

    while arrivals or ready:
        arrivals.admit_until(time, ready)

        if not ready:
            logger.debug("t=%d: cpu idle", time)
            time += 1
            _check_clock(time, horizon)
            continue

        rec = ready.take_next()
        run_time = min(quantum, rec.remaining_time)
        slice_start = time
        time = rec.run(slice_start, run_time)
        _check_clock(time, horizon)
        slices.append(ExecutionSlice(pid=rec.pid, start=slice_start, end=time))
        logger.debug("t=%d: process %d ran [%d, %d)", time, rec.pid, slice_start, time)

        arrivals.admit_until(time, ready)

        if rec.remaining_time > 0:
            ready.requeue(rec)
        else:
            _finish(rec, time)

    return slices


def schedule_priority(records: List[ProcessRecord], quantum: Optional[int] = None) -> List[ExecutionSlice]:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. The ready set is
    re-ranked after every dispatch; ties go to the earlier arrival, then
    the smaller id.
    """
    horizon = _horizon(records)
    arrivals = ArrivalFeed(records)
    ready = ReadyQueue()
    slices: List[ExecutionSlice] = []
    time = 0

    while arrivals or ready:
        arrivals.admit_until(time, ready)

        if not ready:
            logger.debug("t=%d: cpu idle", time)
            time += 1
            _check_clock(time, horizon)
            continue

        ready.reorder(priority_order)
        rec = ready.take_next()

        start_time = time
        time = rec.run(start_time, rec.burst_time)
        _check_clock(time, horizon)
        slices.append(ExecutionSlice(pid=rec.pid, start=start_time, end=time))
        _finish(rec, time)

    return slices


def schedule_preemptive(records: List[ProcessRecord], ranking: RankingPolicy) -> List[ExecutionSlice]:
    """
    Unit-tick preemptive scheduling.

    Every tick the ready set is re-ranked with ``ranking`` and the best
    process runs for one time unit, so a newly arrived or shorter process
    takes the CPU at the next tick boundary.
    """
    horizon = _horizon(records)
    arrivals = ArrivalFeed(records)
    ready = ReadyQueue()
    slices: List[ExecutionSlice] = []
    time = 0

    arrivals.admit_until(time, ready)

    while arrivals or ready:
        if not ready:
            logger.debug("t=%d: cpu idle", time)
            time += 1
            _check_clock(time, horizon)
            arrivals.admit_until(time, ready)
            continue

        rec = ready.take_next(ranking)
        tick_start = time
        time = rec.run(tick_start, 1)
        _check_clock(time, horizon)

        last = slices[-1] if slices else None
        if last is not None and last.pid == rec.pid and last.end == tick_start:
            slices[-1] = ExecutionSlice(pid=rec.pid, start=last.start, end=time)
        else:
            if last is not None:
                logger.debug("t=%d: process %d takes the cpu from %d", tick_start, rec.pid, last.pid)
            slices.append(ExecutionSlice(pid=rec.pid, start=tick_start, end=time))

        arrivals.admit_until(time, ready)

        if rec.remaining_time > 0:
            ready.requeue(rec)
        else:
            _finish(rec, time)

    return slices


def schedule_sjf_preemptive(records: List[ProcessRecord], quantum: Optional[int] = None) -> List[ExecutionSlice]:
    """
    Shortest Remaining Time First (preemptive SJF).

    Ties on remaining time go to the higher priority (smaller value), then
    the earlier arrival, then the smaller id.
    """
    return schedule_preemptive(records, shortest_remaining_order)


def schedule_priority_preemptive(
    records: List[ProcessRecord], quantum: Optional[int] = None
) -> List[ExecutionSlice]:
    """
    Preemptive priority; ties fall back to remaining time, arrival, id.
    """
    return schedule_preemptive(records, priority_preemptive_order)


ALGORITHMS: Dict[Algorithm, Callable[..., List[ExecutionSlice]]] = {
    Algorithm.FCFS: schedule_fcfs,
    Algorithm.ROUND_ROBIN: schedule_rr,
    Algorithm.PRIORITY: schedule_priority,
    Algorithm.SJF_PREEMPTIVE: schedule_sjf_preemptive,
    Algorithm.PRIORITY_PREEMPTIVE: schedule_priority_preemptive,
}


def validate_batch(descriptors: Iterable[ProcessDescriptor]) -> List[ProcessDescriptor]:
    batch = list(descriptors)
    if not batch:
        raise ConfigurationError("No processes to schedule")

    seen = set()
    for d in batch:
        if d.id < 1:
            raise ConfigurationError(f"Process id must be >= 1, got {d.id}")
        if d.id in seen:
            raise ConfigurationError(f"Duplicate process id {d.id}")
        seen.add(d.id)
        if d.arrival_time < 0:
            raise ConfigurationError(f"Process {d.id} has negative arrival time {d.arrival_time}")
        if d.burst_time <= 0:
            raise ConfigurationError(f"Process {d.id} must have a positive burst time, got {d.burst_time}")
    return batch


def run_schedule(
    descriptors: Iterable[ProcessDescriptor],
    algorithm: Algorithm | str,
    quantum: Optional[int] = None,
) -> SimulationResult:
    """
    Simulate ``descriptors`` under ``algorithm`` and return a fresh result.

    ``quantum`` is required for round robin and ignored otherwise. The
    returned records are in the order the descriptors were given.
    """
    algo = Algorithm.parse(algorithm)
    batch = validate_batch(descriptors)

    if algo is Algorithm.ROUND_ROBIN:
        if quantum is None or quantum <= 0:
            raise ConfigurationError("Round Robin requires a positive quantum (use --quantum)")
    else:
        if quantum is not None:
            logger.debug("quantum %s ignored by %s", quantum, algo.label)
        quantum = None

    records = [ProcessRecord(d) for d in batch]
    slices = ALGORITHMS[algo](records, quantum=quantum)

    unfinished = [r.pid for r in records if r.completion_time is None]
    if unfinished:
        raise SimulationError(f"{algo.label} left processes unfinished: {unfinished}")

    result = SimulationResult(
        algorithm=algo,
        quantum=quantum,
        records=records,
        timeline=build_timeline(records),
        slices=slices,
    )
    logger.info(
        "%s scheduled %d processes, makespan %d",
        algo.label,
        len(records),
        max(r.completion_time for r in records),
    )
    return result
