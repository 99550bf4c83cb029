from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .models import ProcessRecord, SimulationResult


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


def compute_system_metrics(result: SimulationResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization from a finished run.
    """
    if not result.records:
        return SystemMetrics(cpu_busy_time=0, idle_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)

    makespan = max(r.completion_time for r in result.records)
    cpu_busy_time = sum(slice_.duration for slice_ in result.slices)

    throughput = len(result.records) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=makespan - cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )


def summarize_records(records: List[ProcessRecord]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not records:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    n = len(records)
    return {
        "avg_waiting": sum(r.waiting_time for r in records) / n,
        "avg_turnaround": sum(r.turnaround_time for r in records) / n,
        "avg_response": sum(r.response_time for r in records) / n,
    }
