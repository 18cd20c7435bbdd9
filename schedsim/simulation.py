from __future__ import annotations

import logging
from collections import defaultdict, deque
from enum import Enum
from typing import Deque, Dict, List, Optional, Sequence

from .models import Process, TimeSlice
from .policies import Policy, RunState

logger = logging.getLogger(__name__)

TIME_UNIT = 1


class SimulationError(RuntimeError):
    """Raised when the time-stepped loop cannot make progress."""


class SimulationState(Enum):
    PRIMING = "priming"
    RUNNING = "running"
    DRAINED = "drained"


class Simulation:
    """
    Discrete-time CPU simulation shared by the preemptive algorithms.

    Every call to ``step`` covers one time unit:

    1. admit processes whose arrival time equals the clock,
    2. let the policy pick one ready process and run it for one unit,
    3. rotate the queue (round-robin only),
    4. retire processes with no remaining burst,
    5. advance the clock.

    The loop drains once nothing is ready and nothing is left to arrive. A
    unit with an empty ready queue but pending arrivals is idle and emits no
    slice. The clock can never legitimately pass ``last arrival + total
    burst``; reaching that bound raises ``SimulationError``.
    """

    def __init__(self, processes: Sequence[Process], policy: Policy) -> None:
        self.policy = policy
        self.clock = 0
        self.ready: Deque[RunState] = deque()
        self.slices: List[TimeSlice] = []
        self.state = SimulationState.PRIMING

        self._arrivals: Dict[int, List[Process]] = defaultdict(list)
        for p in processes:
            self._arrivals[p.arrival_time].append(p)
        self._pending = len(processes)

        self.last_arrival = max((p.arrival_time for p in processes), default=0)
        self.time_limit = self.last_arrival + sum(p.burst_time for p in processes)

        if not processes:
            self._transition(SimulationState.DRAINED)

    def _transition(self, new_state: SimulationState) -> None:
        logger.debug("%s: %s -> %s at t=%d", self.policy.name, self.state.value, new_state.value, self.clock)
        self.state = new_state

    def _admit(self) -> None:
        arrivals = self._arrivals.pop(self.clock, [])
        for p in arrivals:
            state = RunState.from_process(p)
            if self.policy.admit_to_front:
                self.ready.appendleft(state)
            else:
                self.ready.append(state)
            self._pending -= 1
            logger.debug("t=%d: admitted %s (burst %d)", self.clock, p.pid, p.burst_time)

    def _execute(self) -> TimeSlice:
        chosen = self.policy.select(self.ready)
        slice_ = TimeSlice(pid=chosen.pid, start_time=self.clock, stop_time=self.clock + TIME_UNIT)
        self.slices.append(slice_)
        if chosen.remaining > 0:
            chosen.remaining -= TIME_UNIT

        if self.policy.rotate and len(self.ready) > 1:
            # The policy always runs the head, so one left rotation moves it
            # to the tail.
            self.ready.rotate(-1)

        logger.debug("t=%d: ran %s (%d left)", self.clock, chosen.pid, chosen.remaining)
        return slice_

    def step(self) -> Optional[TimeSlice]:
        """
        Advance the simulation by one time unit.

        Returns the slice emitted for this unit, or ``None`` if the CPU idled.
        """
        if self.state is SimulationState.DRAINED:
            raise SimulationError("Simulation has already drained")
        if self.clock >= self.time_limit:
            raise SimulationError(
                f"{self.policy.name} simulation exceeded {self.time_limit} time units "
                f"with {len(self.ready)} ready and {self._pending} pending processes"
            )

        self._admit()
        if self.state is SimulationState.PRIMING:
            self._transition(SimulationState.RUNNING)

        slice_: Optional[TimeSlice] = None
        if self.ready:
            slice_ = self._execute()
        else:
            logger.debug("t=%d: idle", self.clock)

        self.ready = deque(s for s in self.ready if not s.finished)
        self.clock += TIME_UNIT

        if not self.ready and self._pending == 0:
            self._transition(SimulationState.DRAINED)

        return slice_

    def run(self) -> List[TimeSlice]:
        """
        Step until drained and return the raw one-unit slices in time order.
        """
        while self.state is not SimulationState.DRAINED:
            self.step()
        return self.slices


def simulate(processes: Sequence[Process], policy: Policy) -> List[TimeSlice]:
    return Simulation(processes, policy).run()
