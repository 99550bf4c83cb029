import pytest

from schedsim.errors import SimulationError
from schedsim.models import ProcessDescriptor, ProcessRecord
from schedsim.ready_queue import (
    ArrivalFeed,
    ReadyQueue,
    priority_order,
    shortest_remaining_order,
)


def _rec(pid, arrival=0, burst=3, priority=0):
    return ProcessRecord(ProcessDescriptor(pid, f"P{pid}", arrival, burst, priority))


def test_take_next_is_fifo_without_policy():
    q = ReadyQueue()
    for pid in (3, 1, 2):
        q.admit(_rec(pid), clock=0)
    assert [q.take_next().pid for _ in range(3)] == [3, 1, 2]
    assert not q


def test_take_next_with_policy_picks_best_ranked():
    q = ReadyQueue()
    q.admit(_rec(1, burst=5, priority=1), clock=0)
    q.admit(_rec(2, burst=2, priority=3), clock=0)
    q.admit(_rec(3, burst=2, priority=2), clock=0)
    assert q.peek(shortest_remaining_order).pid == 3
    assert q.take_next(shortest_remaining_order).pid == 3
    assert q.take_next(priority_order).pid == 1
    assert len(q) == 1


def test_reorder_is_stable_and_in_place():
    q = ReadyQueue()
    q.admit(_rec(1, priority=2), clock=0)
    q.admit(_rec(2, priority=1), clock=0)
    q.admit(_rec(3, priority=2), clock=0)
    q.reorder(priority_order)
    assert [r.pid for r in q] == [2, 1, 3]


def test_members_tracked_by_pid():
    q = ReadyQueue()
    rec = _rec(7)
    q.admit(rec, clock=0)
    assert 7 in q
    assert q.take_next() is rec
    assert 7 not in q


def test_admit_rejects_future_finished_and_duplicate_records():
    q = ReadyQueue()
    with pytest.raises(SimulationError):
        q.admit(_rec(1, arrival=5), clock=4)

    done = _rec(2, burst=1)
    done.run(0, 1)
    with pytest.raises(SimulationError):
        q.admit(done, clock=1)

    rec = _rec(3)
    q.admit(rec, clock=0)
    with pytest.raises(SimulationError):
        q.requeue(rec)


def test_take_next_on_empty_queue():
    with pytest.raises(SimulationError):
        ReadyQueue().take_next()


def test_arrival_feed_admits_in_arrival_then_id_order():
    recs = [_rec(3, arrival=2), _rec(1, arrival=0), _rec(2, arrival=2), _rec(4, arrival=9)]
    feed = ArrivalFeed(recs)
    q = ReadyQueue()

    assert feed.admit_until(0, q) == 1
    assert feed.admit_until(2, q) == 2
    assert [r.pid for r in q] == [1, 2, 3]
    assert feed
    assert feed.admit_until(9, q) == 1
    assert not feed
