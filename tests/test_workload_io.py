from pathlib import Path

import pytest

from schedsim.models import Process
from schedsim.workload_io import WorkloadError, load_workload, validate_processes


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[0].priority == 1
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_csv_with_header(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[0].burst_time == 3
    assert procs[1].priority == 0


def test_load_headerless_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0,2\n2,9,1\n\n3,6,3,1\n")
    procs = load_workload(p)
    assert procs == [
        Process("1", arrival_time=0, burst_time=5, priority=2),
        Process("2", arrival_time=1, burst_time=9, priority=0),
        Process("3", arrival_time=3, burst_time=6, priority=1),
    ]


def test_load_empty_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("")
    assert load_workload(p) == []


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("1,2,3\n")
    with pytest.raises(WorkloadError):
        load_workload(p)


@pytest.mark.parametrize(
    "content",
    [
        "1,abc,0\n",
        "1,5\n",
        "1,5,0,2,9\n",
        "1,5,0,high\n",
    ],
)
def test_malformed_csv_rows(tmp_path: Path, content):
    p = tmp_path / "w.csv"
    p.write_text(content)
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_invalid_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid": "A"}')
    with pytest.raises(WorkloadError):
        load_workload(p)


@pytest.mark.parametrize(
    "procs",
    [
        [Process("A", 0, 3), Process("A", 1, 2)],
        [Process("A", 0, 0)],
        [Process("A", -1, 2)],
        [Process("", 0, 2)],
    ],
)
def test_validation_rejects(procs):
    with pytest.raises(WorkloadError):
        validate_processes(procs)


def test_workload_error_is_value_error():
    assert issubclass(WorkloadError, ValueError)
