from __future__ import annotations

from dataclasses import dataclass
from itertools import islice
from typing import Callable, Sequence

from .models import Process


@dataclass
class RunState:
    """
    Mutable per-simulation view of a process.

    Only ``remaining`` changes while the simulation runs; the wrapped
    ``Process`` stays untouched so the caller's records can be reused by the
    next algorithm.
    """

    process: Process
    remaining: int

    @classmethod
    def from_process(cls, process: Process) -> "RunState":
        return cls(process=process, remaining=process.burst_time)

    @property
    def pid(self) -> str:
        return self.process.pid

    @property
    def finished(self) -> bool:
        return self.remaining <= 0


Selector = Callable[[Sequence[RunState]], RunState]


def _first_minimum(ready: Sequence[RunState], key: Callable[[RunState], int]) -> RunState:
    # Only a strictly smaller value replaces the best, so ties go to the
    # entry nearest the head of the queue.
    best = ready[0]
    best_value = key(best)
    for state in islice(ready, 1, None):
        value = key(state)
        if value < best_value:
            best, best_value = state, value
    return best


def shortest_remaining(ready: Sequence[RunState]) -> RunState:
    """
    Pick the ready process with the least remaining burst time.
    """
    return _first_minimum(ready, lambda s: s.remaining)


def highest_priority(ready: Sequence[RunState]) -> RunState:
    """
    Pick the ready process with the lowest priority value.

    A priority of 0 (the default when a workload omits it) is a real, top
    priority, so workloads without priorities tie everywhere and fall back to
    queue order.
    """
    return _first_minimum(ready, lambda s: s.process.priority)


def queue_head(ready: Sequence[RunState]) -> RunState:
    return ready[0]


@dataclass(frozen=True)
class Policy:
    """
    How the simulation loop admits, selects and requeues processes.

    - ``select`` chooses the process that runs for the next time unit.
    - ``admit_to_front`` pushes each new arrival ahead of every waiting
      process instead of appending it.
    - ``rotate`` moves the process that just ran from the head to the tail
      whenever more than one process is ready.
    """

    name: str
    select: Selector
    admit_to_front: bool = False
    rotate: bool = False


SHORTEST_REMAINING = Policy(name="shortest-remaining", select=shortest_remaining)
HIGHEST_PRIORITY = Policy(name="highest-priority", select=highest_priority)
ROUND_ROBIN = Policy(name="round-robin", select=queue_head, admit_to_front=True, rotate=True)
