from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .errors import SimulationError
from .models import ProcessRecord

logger = logging.getLogger(__name__)

RankingPolicy = Callable[[ProcessRecord], Tuple[int, ...]]


def fifo_order(rec: ProcessRecord) -> Tuple[int, ...]:
    return (rec.arrival_time, rec.pid)


def priority_order(rec: ProcessRecord) -> Tuple[int, ...]:
    """Lower priority value first, then earlier arrival, then id."""
    return (rec.priority, rec.arrival_time, rec.pid)


def shortest_remaining_order(rec: ProcessRecord) -> Tuple[int, ...]:
    """Least remaining work first; ties go to higher priority, arrival, id."""
    return (rec.remaining_time, rec.priority, rec.arrival_time, rec.pid)


def priority_preemptive_order(rec: ProcessRecord) -> Tuple[int, ...]:
    return (rec.priority, rec.remaining_time, rec.arrival_time, rec.pid)


class ReadyQueue:
    """
    Arrived, unfinished processes eligible for dispatch.

    Members are tracked by pid; ``_order`` holds pids and ``_members`` maps a
    pid to its record, so the queue never depends on where records live.
    """

    def __init__(self) -> None:
        self._order: List[int] = []
        self._members: Dict[int, ProcessRecord] = {}

    def __len__(self) -> int:
        return len(self._order)

    def __bool__(self) -> bool:
        return bool(self._order)

    def __contains__(self, pid: object) -> bool:
        return pid in self._members

    def __iter__(self) -> Iterator[ProcessRecord]:
        return (self._members[pid] for pid in self._order)

    def admit(self, rec: ProcessRecord, clock: int) -> None:
        if rec.arrival_time > clock:
            raise SimulationError(f"process {rec.pid} admitted at {clock} before arrival {rec.arrival_time}")
        self.requeue(rec)

    def requeue(self, rec: ProcessRecord) -> None:
        """Append a record at the back of the queue."""
        if rec.finished:
            raise SimulationError(f"finished process {rec.pid} cannot be queued")
        if rec.pid in self._members:
            raise SimulationError(f"process {rec.pid} is already queued")
        self._order.append(rec.pid)
        self._members[rec.pid] = rec

    def peek(self, policy: Optional[RankingPolicy] = None) -> Optional[ProcessRecord]:
        idx = self._select(policy)
        return None if idx is None else self._members[self._order[idx]]

    def take_next(self, policy: Optional[RankingPolicy] = None) -> ProcessRecord:
        """
        Pop the front of the queue, or the best-ranked member when a policy
        is given.
        """
        idx = self._select(policy)
        if idx is None:
            raise SimulationError("take_next() on an empty ready queue")
        pid = self._order.pop(idx)
        return self._members.pop(pid)

    def reorder(self, policy: RankingPolicy) -> None:
        # sorted() is stable, so members with equal keys keep queue order.
        self._order.sort(key=lambda pid: policy(self._members[pid]))

    def _select(self, policy: Optional[RankingPolicy]) -> Optional[int]:
        if not self._order:
            return None
        if policy is None:
            return 0
        return min(range(len(self._order)), key=lambda i: policy(self._members[self._order[i]]))


class ArrivalFeed:
    """
    Processes that have not arrived yet, in (arrival, id) order.
    """

    def __init__(self, records: List[ProcessRecord]) -> None:
        self._pending = sorted(records, key=fifo_order)
        self._next = 0

    def __bool__(self) -> bool:
        return self._next < len(self._pending)

    def admit_until(self, clock: int, queue: ReadyQueue) -> int:
        """Move every process with arrival <= clock into ``queue``."""
        admitted = 0
        while self._next < len(self._pending) and self._pending[self._next].arrival_time <= clock:
            rec = self._pending[self._next]
            queue.admit(rec, clock)
            logger.debug("t=%d: process %d admitted", clock, rec.pid)
            self._next += 1
            admitted += 1
        return admitted
