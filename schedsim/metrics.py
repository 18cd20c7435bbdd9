from __future__ import annotations

from typing import List, Mapping, Sequence

from .models import Process, ScheduleRow, ScheduleStats, TimeSlice


def exit_time(pid: str, slices: Sequence[TimeSlice]) -> int:
    """
    Completion time of ``pid``: the latest stop among its slices (0 if it never ran).
    """
    return max((sl.stop_time for sl in slices if sl.pid == pid), default=0)


def last_completion(slices: Sequence[TimeSlice]) -> int:
    return max((sl.stop_time for sl in slices), default=0)


def build_rows(processes: Sequence[Process], completions: Mapping[str, int]) -> List[ScheduleRow]:
    """
    Derive one schedule row per process, in input order, from completion times.
    """
    rows: List[ScheduleRow] = []
    for p in processes:
        completion_time = completions[p.pid]
        turnaround_time = completion_time - p.arrival_time
        waiting_time = turnaround_time - p.burst_time
        rows.append(
            ScheduleRow(
                pid=p.pid,
                priority=p.priority,
                burst_time=p.burst_time,
                arrival_time=p.arrival_time,
                waiting_time=waiting_time,
                turnaround_time=turnaround_time,
                completion_time=completion_time,
            )
        )
    return rows


def rows_from_timeline(processes: Sequence[Process], slices: Sequence[TimeSlice]) -> List[ScheduleRow]:
    completions = {p.pid: exit_time(p.pid, slices) for p in processes}
    return build_rows(processes, completions)


def compute_stats(rows: Sequence[ScheduleRow], finished_at: int) -> ScheduleStats:
    """
    Average waiting/turnaround time and throughput for one run.

    ``finished_at`` is the last completion time of the run. An empty run
    yields all-zero statistics instead of dividing by zero.
    """
    if not rows:
        return ScheduleStats(
            process_count=len(rows), avg_waiting=0.0, avg_turnaround=0.0, throughput=0.0, last_completion=0
        )

    n = len(rows)
    return ScheduleStats(
        process_count=n,
        avg_waiting=sum(r.waiting_time for r in rows) / n,
        avg_turnaround=sum(r.turnaround_time for r in rows) / n,
        throughput=n / finished_at if finished_at > 0 else 0.0,
        last_completion=finished_at,
    )
