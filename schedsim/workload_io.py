from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List, Mapping, Optional

from .errors import ConfigurationError
from .models import ProcessDescriptor


def load_workload(path: str | Path) -> List[ProcessDescriptor]:
    """
    Load a workload from a JSON or CSV file into a list of ProcessDescriptor
    objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ConfigurationError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[ProcessDescriptor]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Invalid JSON workload {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise ConfigurationError("JSON workload must be a list of process objects")

    return [_descriptor_from_mapping(entry, index) for index, entry in enumerate(raw, start=1)]


def _load_csv(path: Path) -> List[ProcessDescriptor]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return [_descriptor_from_mapping(row, index) for index, row in enumerate(reader, start=1)]


def _optional(mapping: Mapping, key: str):
    value = mapping.get(key)
    return None if value in (None, "") else value


def _descriptor_from_mapping(mapping, index: int) -> ProcessDescriptor:
    try:
        pid_val = _optional(mapping, "id")
        pid = int(pid_val) if pid_val is not None else index
        arrival_time = int(mapping["arrival_time"])
        burst_time = int(mapping["burst_time"])
        priority_val = _optional(mapping, "priority")
        priority = int(priority_val) if priority_val is not None else 0
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid process entry: {mapping!r}") from exc

    name = _optional(mapping, "name")
    return ProcessDescriptor(
        id=pid,
        name=str(name) if name is not None else f"Process {pid}",
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )


def _split_ints(text: str, label: str) -> List[int]:
    fields = [part.strip() for part in text.split(",")]
    try:
        return [int(part) for part in fields if part]
    except ValueError:
        raise ConfigurationError(f"{label} must be comma-separated integers, got {text!r}") from None


def parse_fields(arrivals: str, bursts: str, priorities: Optional[str] = None) -> List[ProcessDescriptor]:
    """
    Build descriptors from comma-separated form fields such as
    ``arrivals="0,1,3,5"`` and ``bursts="9,2,5,6"``. Processes are numbered
    from 1 in field order.
    """
    arrival_times = _split_ints(arrivals, "arrival times")
    burst_times = _split_ints(bursts, "burst times")
    prios = _split_ints(priorities, "priorities") if priorities else [0] * len(arrival_times)

    if not (len(arrival_times) == len(burst_times) == len(prios)):
        raise ConfigurationError(
            f"Field counts differ: {len(arrival_times)} arrival times, "
            f"{len(burst_times)} burst times, {len(prios)} priorities"
        )

    return [
        ProcessDescriptor(id=i, name=f"Process {i}", arrival_time=at, burst_time=bt, priority=pr)
        for i, (at, bt, pr) in enumerate(zip(arrival_times, burst_times, prios), start=1)
    ]
