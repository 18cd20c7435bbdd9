from schedsim.metrics import build_rows, compute_stats, exit_time, last_completion, rows_from_timeline
from schedsim.models import Process, TimeSlice


def _timeline():
    return [TimeSlice("A", 0, 2), TimeSlice("B", 2, 3), TimeSlice("A", 3, 5)]


def test_exit_time_uses_last_slice():
    assert exit_time("A", _timeline()) == 5
    assert exit_time("B", _timeline()) == 3
    assert exit_time("missing", _timeline()) == 0


def test_last_completion():
    assert last_completion(_timeline()) == 5
    assert last_completion([]) == 0


def test_rows_follow_input_order():
    procs = [
        Process("B", arrival_time=1, burst_time=1, priority=7),
        Process("A", arrival_time=0, burst_time=4),
    ]
    rows = rows_from_timeline(procs, _timeline())
    assert [r.pid for r in rows] == ["B", "A"]
    assert (rows[0].completion_time, rows[0].turnaround_time, rows[0].waiting_time) == (3, 2, 1)
    assert (rows[1].completion_time, rows[1].turnaround_time, rows[1].waiting_time) == (5, 5, 1)
    assert rows[0].priority == 7


def test_compute_stats():
    procs = [
        Process("A", arrival_time=0, burst_time=5),
        Process("B", arrival_time=0, burst_time=2),
        Process("C", arrival_time=0, burst_time=1),
    ]
    rows = build_rows(procs, {"A": 5, "B": 7, "C": 8})
    stats = compute_stats(rows, 8)
    assert stats.avg_waiting == 4.0
    assert stats.avg_turnaround == 20 / 3
    assert stats.throughput == 0.375
    assert stats.last_completion == 8


def test_compute_stats_empty():
    stats = compute_stats([], 0)
    assert stats.process_count == 0
    assert stats.avg_waiting == stats.avg_turnaround == stats.throughput == 0.0
