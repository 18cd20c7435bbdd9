from schedsim.gantt import build_rich_gantt, compact_slices, render_gantt
from schedsim.models import TimeSlice


def _units(*pids_at):
    return [TimeSlice(pid, t, t + 1) for pid, t in pids_at]


def test_compact_merges_consecutive_runs():
    raw = _units(("A", 0), ("A", 1), ("B", 2), ("A", 3), ("A", 4))
    compacted = compact_slices(raw)
    assert compacted == [TimeSlice("A", 0, 2), TimeSlice("B", 2, 3), TimeSlice("A", 3, 5)]


def test_compact_keeps_idle_gap():
    raw = _units(("A", 0), ("A", 2))
    assert compact_slices(raw) == [TimeSlice("A", 0, 1), TimeSlice("A", 2, 3)]


def test_compact_does_not_modify_input():
    raw = _units(("A", 0), ("A", 1))
    compact_slices(raw)
    assert raw == [TimeSlice("A", 0, 1), TimeSlice("A", 1, 2)]


def test_compact_preserves_total_duration():
    raw = _units(("A", 0), ("B", 1), ("B", 2), ("C", 3), ("A", 4), ("A", 5))
    assert sum(s.duration for s in compact_slices(raw)) == len(raw)


def test_compact_empty():
    assert compact_slices([]) == []


def test_render_gantt_plain():
    text = render_gantt([TimeSlice("1", 0, 5), TimeSlice("2", 5, 7)])
    assert text.splitlines() == ["Gantt schedule", "|   1   |   2   |", "0\t5\t7"]


def test_render_gantt_empty():
    assert "(no execution)" in render_gantt([])


def test_rich_gantt_time_marks():
    panel, marks = build_rich_gantt([TimeSlice("A", 0, 2), TimeSlice("B", 4, 5)])
    assert panel.title == "Gantt schedule"
    assert marks.split() == ["0", "2", "4", "5"]


def test_rich_gantt_empty():
    _, marks = build_rich_gantt([])
    assert marks == ""


def test_render_gantt_marks_idle_gap():
    text = render_gantt([TimeSlice("A", 0, 2), TimeSlice("B", 4, 5)])
    assert text.splitlines() == ["Gantt schedule", "|   A   |   -   |   B   |", "0\t2\t4\t5"]
