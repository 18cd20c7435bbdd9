from __future__ import annotations

from typing import Dict, List, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import TimeSlice


def compact_slices(slices: Sequence[TimeSlice]) -> List[TimeSlice]:
    """
    Merge consecutive slices of the same process into one interval.

    Input slices must be in time order. A slice is folded into its
    predecessor only when both belong to the same process and touch
    (the predecessor stops where the slice starts), so idle gaps survive.
    The input slices are not modified.
    """
    compacted: List[TimeSlice] = []
    for sl in slices:
        if compacted:
            last = compacted[-1]
            if last.pid == sl.pid and last.stop_time == sl.start_time:
                last.stop_time = sl.stop_time
                continue
        compacted.append(TimeSlice(pid=sl.pid, start_time=sl.start_time, stop_time=sl.stop_time))
    return compacted


def render_gantt(slices: List[TimeSlice]) -> str:
    """
    Plain-text Gantt chart: a bar of centred process ids followed by the
    tab-separated slice boundaries. An idle gap gets its own "-" cell
    bounded by the previous stop and the next start.
    """
    if not slices:
        return "Gantt schedule\n(no execution)"

    labels: List[str] = []
    marks: List[int] = [slices[0].start_time]
    for sl in slices:
        if sl.start_time > marks[-1]:
            labels.append("-")
            marks.append(sl.start_time)
        labels.append(sl.pid)
        marks.append(sl.stop_time)

    bar = "|"
    for label in labels:
        padding = " " * ((8 - len(label)) // 2)
        bar += f"{padding}{label}{padding}|"

    return "\n".join(["Gantt schedule", bar, "\t".join(str(m) for m in marks)])


def build_rich_gantt(slices: List[TimeSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt schedule")
        return panel, ""

    slices = sorted(slices, key=lambda s: (s.start_time, s.stop_time))

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = str(slices[0].start_time)
    last_time = slices[0].start_time

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            timeline.append(" " * idle_gap)
            labels.append(" " * idle_gap)
            last_time = sl.start_time
            time_marks += f"{last_time:>3}"

        width = max(1, sl.duration)

        timeline.append(" " * width, style=f"on {pid_color(sl.pid)}")
        labels.append(sl.pid[:width].ljust(width), style="bold")

        last_time = sl.stop_time
        time_marks += f"{last_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt schedule")
    return panel, time_marks
