"""
CPU scheduling simulator.

Simulates FCFS, preemptive shortest-job-first, preemptive priority and
round-robin scheduling over a fixed workload and reports the Gantt schedule
together with waiting, turnaround and throughput figures.
"""

from .algorithms import ALGORITHMS, run_algorithm, run_all
from .models import Process, ScheduleResult, ScheduleRow, ScheduleStats, TimeSlice

__all__ = [
    "ALGORITHMS",
    "Process",
    "ScheduleResult",
    "ScheduleRow",
    "ScheduleStats",
    "TimeSlice",
    "cli",
    "run_algorithm",
    "run_all",
]
