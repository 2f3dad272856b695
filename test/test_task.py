#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#
import json
import threading

import pytest

from ricrob.args import parse_flags
from ricrob.coordinate import Coordinate
from ricrob.errors import InvalidRobotPositionError, TaskStateError
from ricrob.symbols import Robot
from ricrob.task import JsonLineWriter, Move, Task, TaskState


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def exit_codes(monkeypatch):
    codes = []
    monkeypatch.setattr("ricrob.task.os._exit", codes.append)
    return codes


@pytest.fixture
def task(stream, clock) -> Task:
    return Task(parse_flags([], environ={}), stream=stream, solver="bfs", clock=clock)


def _records(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_created(task):
    assert task.state is TaskState.CREATED
    assert task.duration() == 0
    assert task.args.robots.yellow == Coordinate(0, 0)


def test_level(task, stream):
    task.level(3, states=1200)
    task.level(4)
    records = _records(stream)
    assert task.state is TaskState.RUNNING
    assert [r["msg"] for r in records] == ["progress", "progress"]
    assert records[0]["level"] == 3
    assert records[0]["states"] == 1200
    assert records[0]["solver"] == "bfs"
    assert records[0]["severity"] == "INFO"
    assert "time" in records[0]


def test_progress(task, stream):
    task.progress(0)
    task.progress(42.5)
    assert task.percent == 42.5
    assert _records(stream)[-1]["percent"] == 42.5


@pytest.mark.parametrize("percent", [-1, 100.5, 1000])
def test_progress_out_of_range(task, percent):
    with pytest.raises(ValueError):
        task.progress(percent)
    assert task.state is TaskState.CREATED


def test_result(task, stream, clock):
    clock.now += 1.25
    moves = [
        Move(to=Coordinate(0, 5), robot=Robot.YELLOW),
        Move(to=Coordinate(9, 5), robot=Robot.SILVER),
    ]
    task.result(moves, level=2)
    (record,) = _records(stream)
    assert record["msg"] == "result"
    assert record["duration"] == 1250
    assert record["level"] == 2
    assert record["moves"] == [
        {"to": {"x": 0, "y": 5}, "robot": "yellowRobot"},
        {"to": {"x": 9, "y": 5}, "robot": "silverRobot"},
    ]
    assert task.state is TaskState.COMPLETED


def test_extra_fields_do_not_override(task, stream):
    task.result([], duration=-5)
    assert _records(stream)[0]["duration"] == 0


def test_extra_fields_keep_record_header(task, stream):
    task.level(2, msg="deeper", time=1.5, severity="DEBUG", solver="other", nodes=7)
    task.result([], msg="found", time=1.5, severity="DEBUG", solver="other")
    for record, kind in zip(_records(stream), ["progress", "result"]):
        assert record["msg"] == kind
        assert record["severity"] == "INFO"
        assert record["solver"] == "bfs"
        assert isinstance(record["time"], str)
    assert _records(stream)[0]["nodes"] == 7


def test_exit(task, stream, clock, exit_codes):
    task.level(1)
    clock.now += 0.5
    task.exit(RuntimeError("search space exhausted"))
    assert exit_codes == [1]
    record = _records(stream)[-1]
    assert record == {
        "time": record["time"],
        "severity": "ERROR",
        "msg": "exit",
        "solver": "bfs",
        "duration": 500,
        "err": "search space exhausted",
    }
    assert task.state is TaskState.ABORTED


def test_exit_from_worker_thread(task, stream, exit_codes):
    worker = threading.Thread(target=task.exit, args=("boom",))
    worker.start()
    worker.join()
    assert exit_codes == [1]
    assert _records(stream)[-1]["err"] == "boom"


def test_exit_not_absorbed_by_caller(task, exit_codes):
    try:
        task.exit("boom")
    except BaseException:
        pytest.fail("exit raised instead of terminating the process")
    assert exit_codes == [1]


@pytest.mark.parametrize("finish", ["result", "exit"])
def test_no_events_after_terminal_state(task, finish, exit_codes):
    if finish == "result":
        task.result([])
    else:
        task.exit("failed")
    with pytest.raises(TaskStateError):
        task.level(1)
    with pytest.raises(TaskStateError):
        task.result([])
    with pytest.raises(TaskStateError):
        task.exit("again")


def test_from_flags(stream):
    task = Task.from_flags(["-ry", "4,4"], environ={}, stream=stream, solver="bfs")
    assert task.args.robots.yellow == Coordinate(4, 4)
    with pytest.raises(InvalidRobotPositionError):
        Task.from_flags(["-ry", "8,8"], environ={})


def test_independent_tasks(stream, clock):
    first = Task(parse_flags([], environ={}), stream=stream, solver="a", clock=clock)
    second = Task(parse_flags([], environ={}), stream=stream, solver="b", clock=clock)
    first.result([])
    second.level(1)
    assert second.state is TaskState.RUNNING
    assert [r["solver"] for r in _records(stream)] == ["a", "b"]


def test_json_line_writer(stream):
    writer = JsonLineWriter(stream, solver="x")
    writer.write("INFO", "progress", {"at": Coordinate(1, 2)}, robot=Robot.RED)
    (record,) = _records(stream)
    assert record["at"] == {"x": 1, "y": 2}
    assert record["robot"] == "redRobot"
    with pytest.raises(TypeError):
        writer.write("INFO", "progress", value=object())
