from __future__ import annotations

import logging
from typing import Callable, Dict, List, Sequence

from .gantt import compact_slices
from .metrics import build_rows, compute_stats, last_completion, rows_from_timeline
from .models import Process, ScheduleResult, ScheduleRow, TimeSlice
from .policies import HIGHEST_PRIORITY, ROUND_ROBIN, SHORTEST_REMAINING, Policy
from .simulation import simulate

logger = logging.getLogger(__name__)


def _build_result(
    name: str,
    title: str,
    rows: List[ScheduleRow],
    timeline: List[TimeSlice],
) -> ScheduleResult:
    finished_at = last_completion(timeline)
    result = ScheduleResult(
        algorithm=name,
        title=title,
        rows=rows,
        timeline=timeline,
        stats=compute_stats(rows, finished_at),
    )
    logger.info("%s: %d slices, last completion at t=%d", name, len(timeline), finished_at)
    return result


def schedule_fcfs(processes: Sequence[Process]) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive).

    Processes are served back-to-back in the order given; input order is the
    arrival order. If the CPU is idle when a process arrives, its wait is 0
    and service starts at its arrival time.
    """
    clock = 0
    timeline: List[TimeSlice] = []
    completions: Dict[str, int] = {}

    for p in processes:
        waiting_time = max(0, clock - p.arrival_time)
        start_time = p.arrival_time + waiting_time
        stop_time = start_time + p.burst_time

        timeline.append(TimeSlice(pid=p.pid, start_time=start_time, stop_time=stop_time))
        completions[p.pid] = p.burst_time + p.arrival_time + waiting_time

        clock = stop_time

    return _build_result("fcfs", "First-come, first-serve", build_rows(processes, completions), timeline)


def _schedule_preemptive(name: str, title: str, processes: Sequence[Process], policy: Policy) -> ScheduleResult:
    raw = simulate(processes, policy)
    timeline = compact_slices(raw)
    logger.debug("%s: compacted %d unit slices into %d", name, len(raw), len(timeline))
    return _build_result(name, title, rows_from_timeline(processes, timeline), timeline)


def schedule_sjf(processes: Sequence[Process]) -> ScheduleResult:
    """
    Shortest Job First with preemption (shortest remaining time).

    Every time unit the ready process with the least remaining burst runs;
    ties go to the process that entered the ready queue first.
    """
    return _schedule_preemptive("sjf", "Shortest-job-first", processes, SHORTEST_REMAINING)


def schedule_priority(processes: Sequence[Process]) -> ScheduleResult:
    """
    Preemptive priority scheduling.

    Lower numeric priority value means higher priority. Re-evaluated every
    time unit; ties go to the process that entered the ready queue first.
    """
    return _schedule_preemptive("priority", "Priority", processes, HIGHEST_PRIORITY)


def schedule_rr(processes: Sequence[Process]) -> ScheduleResult:
    """
    Round Robin with a quantum of one time unit.

    A newly arrived process jumps to the head of the ready queue; the process
    that just ran goes to the tail.
    """
    return _schedule_preemptive("rr", "Round-robin", processes, ROUND_ROBIN)


ALGORITHMS: Dict[str, Callable[[Sequence[Process]], ScheduleResult]] = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "priority": schedule_priority,
    "rr": schedule_rr,
}

DEFAULT_ORDER = tuple(ALGORITHMS)


def run_algorithm(name: str, processes: Sequence[Process]) -> ScheduleResult:
    """
    Dispatch to the requested algorithm by its short name.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    if not processes:
        logger.warning("%s: empty workload, nothing to schedule", name)

    return ALGORITHMS[name](processes)


def run_all(processes: Sequence[Process], names: Sequence[str] = DEFAULT_ORDER) -> List[ScheduleResult]:
    """
    Run several algorithms, one after the other, on the same workload.
    """
    return [run_algorithm(name, processes) for name in names]
