from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, List, Sequence

from .models import Process

logger = logging.getLogger(__name__)

# Column order of header-less CSV workloads: id, burst, arrival[, priority].
POSITIONAL_FIELDS = ("pid", "burst_time", "arrival_time", "priority")


class WorkloadError(ValueError):
    """Raised when a workload file cannot be turned into a valid process list."""


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    CSV files may either carry a ``pid,arrival_time,burst_time,priority``
    header or be bare rows of ``id,burst,arrival[,priority]``.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise WorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    validate_processes(processes)
    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, Iterable) or isinstance(raw, (str, dict)):
        raise WorkloadError("JSON workload must be a list of process objects")

    processes: List[Process] = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise WorkloadError(f"Invalid process entry: {entry!r}")
        processes.append(_process_from_mapping(entry))

    return processes


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        rows = [row for row in csv.reader(f) if any(cell.strip() for cell in row)]

    if not rows:
        return []

    header = [cell.strip().lower() for cell in rows[0]]
    if "pid" in header:
        return [_process_from_mapping(dict(zip(header, row))) for row in rows[1:]]

    processes: List[Process] = []
    for row in rows:
        if len(row) not in (3, 4):
            raise WorkloadError(f"Expected 3 or 4 columns (id, burst, arrival[, priority]), got {row!r}")
        processes.append(_process_from_mapping(dict(zip(POSITIONAL_FIELDS, row))))
    return processes


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"]).strip()
        arrival_time = int(mapping["arrival_time"])
        burst_time = int(mapping["burst_time"])
    except (KeyError, TypeError, ValueError) as exc:
        raise WorkloadError(f"Invalid process entry: {mapping!r}") from exc

    priority_val = mapping.get("priority")
    if isinstance(priority_val, str):
        priority_val = priority_val.strip()
    try:
        priority = int(priority_val) if priority_val not in (None, "") else 0
    except (TypeError, ValueError) as exc:
        raise WorkloadError(f"Invalid priority in process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )


def validate_processes(processes: Sequence[Process]) -> None:
    """
    Reject workloads the scheduling engine does not accept.
    """
    seen: set[str] = set()
    for p in processes:
        if not p.pid:
            raise WorkloadError(f"Process has an empty id: {p!r}")
        if p.pid in seen:
            raise WorkloadError(f"Duplicate process id '{p.pid}'")
        if p.arrival_time < 0:
            raise WorkloadError(f"Process '{p.pid}' has negative arrival time {p.arrival_time}")
        if p.burst_time <= 0:
            raise WorkloadError(f"Process '{p.pid}' must have a positive burst time, got {p.burst_time}")
        seen.add(p.pid)
