from pathlib import Path

import pytest

from schedsim.errors import ConfigurationError
from schedsim.models import ProcessDescriptor
from schedsim.workload_io import load_workload, parse_fields


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"id":1,"name":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], ProcessDescriptor)
    assert procs[0] == ProcessDescriptor(1, "A", 0, 3, 1)
    assert procs[1].id == 2
    assert procs[1].name == "Process 2"
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("id,name,arrival_time,burst_time,priority\n1,A,0,3,1\n2,B,1,2,\n")
    procs = load_workload(p)
    assert procs[0].name == "A"
    assert procs[1].id == 2
    assert procs[1].priority == 0


def test_load_rejects_bad_entries(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("id,arrival_time,burst_time\n1,zero,3\n")
    with pytest.raises(ConfigurationError):
        load_workload(p)

    j = tmp_path / "w.json"
    j.write_text('{"arrival_time": 0}')
    with pytest.raises(ConfigurationError):
        load_workload(j)

    with pytest.raises(ConfigurationError):
        load_workload(tmp_path / "w.txt")


def test_parse_fields():
    procs = parse_fields("0,1,3,5", "9,2,5,6", "1,2,3,4")
    assert [p.id for p in procs] == [1, 2, 3, 4]
    assert procs[2] == ProcessDescriptor(3, "Process 3", 3, 5, 3)


def test_parse_fields_defaults_priority_and_ignores_spaces():
    procs = parse_fields(" 0, 2 ", "4 ,1")
    assert [(p.arrival_time, p.burst_time, p.priority) for p in procs] == [(0, 4, 0), (2, 1, 0)]


@pytest.mark.parametrize(
    "arrivals, bursts, priorities",
    [
        ("0,1", "3", None),
        ("0,1", "3,4", "1"),
        ("0,x", "3,4", None),
    ],
)
def test_parse_fields_errors(arrivals, bursts, priorities):
    with pytest.raises(ConfigurationError):
        parse_fields(arrivals, bursts, priorities)
