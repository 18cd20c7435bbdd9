from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass
class TimeSlice:
    """
    One contiguous interval during which a single process held the CPU.

    ``stop_time`` is exclusive.
    """

    pid: str
    start_time: int
    stop_time: int

    @property
    def duration(self) -> int:
        return self.stop_time - self.start_time


@dataclass
class ScheduleRow:
    pid: str
    priority: int
    burst_time: int
    arrival_time: int
    waiting_time: int
    turnaround_time: int
    completion_time: int


@dataclass
class ScheduleStats:
    process_count: int
    avg_waiting: float
    avg_turnaround: float
    throughput: float
    last_completion: int


@dataclass
class ScheduleResult:
    algorithm: str
    title: str
    rows: List[ScheduleRow] = field(default_factory=list)
    timeline: List[TimeSlice] = field(default_factory=list)
    stats: ScheduleStats = field(
        default_factory=lambda: ScheduleStats(
            process_count=0, avg_waiting=0.0, avg_turnaround=0.0, throughput=0.0, last_completion=0
        )
    )

    @property
    def is_empty(self) -> bool:
        return not self.rows
