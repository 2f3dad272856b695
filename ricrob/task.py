#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#

from __future__ import annotations

import json
import os
import sys
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, TextIO, Union

from ricrob.args import Args, parse_flags
from ricrob.board import BoardFactory, GridBoard
from ricrob.coordinate import Coordinate
from ricrob.errors import TaskStateError
from ricrob.symbols import Robot


@dataclass(frozen=True)
class Move:
    """A single move of a robot to its stop position."""

    to: Coordinate
    robot: Robot

    def to_dict(self) -> Dict[str, Any]:
        return {"to": self.to.to_dict(), "robot": str(self.robot)}


# A solution of a game as ordered list of robot moves
Moves = List[Move]


def _json_default(obj):
    if isinstance(obj, (Move, Coordinate)):
        return obj.to_dict()
    if isinstance(obj, Enum):
        return str(obj)
    if isinstance(obj, BaseException):
        return str(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class JsonLineWriter:
    """
    Writer of structured records, one json object per line.

    Every record carries the time, the severity, the message and the ``attrs`` bound at
    creation. Caller ``extra`` fields never replace these or the event ``fields``.

    Args:
        stream (TextIO): where records are written
        **attrs: fields added to every record

    """

    def __init__(self, stream: TextIO, **attrs):
        self.stream = stream
        self.attrs = attrs

    def write(
        self,
        severity: str,
        msg: str,
        extra: Optional[Mapping[str, Any]] = None,
        **fields,
    ):
        record = {
            "time": datetime.now(timezone.utc).isoformat(),
            "severity": severity,
            "msg": msg,
            **self.attrs,
        }
        if extra is not None:
            for key, value in extra.items():
                record.setdefault(key, value)
        record.update(fields)
        self.stream.write(json.dumps(record, default=_json_default) + "\n")
        self.stream.flush()


class TaskState(Enum):
    CREATED = "created"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskState.COMPLETED, TaskState.ABORTED)


class Task:
    """
    A solver run on validated :class:`~ricrob.args.Args`.

    The task reports progress, the result or a fatal error as json records to ``stream``.
    After :meth:`result` or :meth:`exit` no further events can be reported.

    Args:
        args (Args): the validated task arguments
        stream (TextIO, optional): where records are written, defaults to ``sys.stdout``
        solver (str, optional): the solver name added to every record, defaults to ``sys.argv[0]``
        clock (callable): monotonic clock in seconds used to measure the run duration

    """

    def __init__(
        self,
        args: Args,
        stream: Optional[TextIO] = None,
        solver: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.args = args
        self.writer = JsonLineWriter(
            stream if stream is not None else sys.stdout,
            solver=solver if solver is not None else sys.argv[0],
        )
        self.clock = clock
        self.start = clock()
        self.state = TaskState.CREATED
        self.percent = 0

    @staticmethod
    def from_flags(
        argv: Optional[Sequence[str]] = None,
        environ: Optional[Mapping[str, str]] = None,
        board_factory: BoardFactory = GridBoard.from_tiles,
        **kwargs,
    ) -> Task:
        """
        Create a task with arguments parsed from the command line.

        Args:
            argv (list of str, optional): the arguments without program name, defaults to ``sys.argv[1:]``
            environ (Mapping[str, str], optional): the environment, defaults to ``os.environ``
            board_factory (BoardFactory): builds the board lookup used to check the robots
            **kwargs: passed to :class:`Task`

        """
        if argv is None:
            argv = sys.argv[1:]
        args = parse_flags(
            argv, prog=sys.argv[0], environ=environ, board_factory=board_factory
        )
        return Task(args, **kwargs)

    def duration(self) -> int:
        """Milliseconds since the task was created."""
        return int((self.clock() - self.start) * 1000)

    def _advance(self, state: TaskState):
        if self.state.is_terminal:
            raise TaskStateError(
                f"task already {self.state.value}, cannot become {state.value}"
            )
        self.state = state

    def level(self, level: int, **extra):
        """Report the search level reached, with optional solver information."""
        self._advance(TaskState.RUNNING)
        self.writer.write("INFO", "progress", extra, level=level)

    def progress(self, percent: Union[int, float], **extra):
        """Report the progress in percent, with optional solver information."""
        if not 0 <= percent <= 100:
            raise ValueError(f"progress percent must be in [0, 100], got {percent}")
        self._advance(TaskState.RUNNING)
        self.percent = percent
        self.writer.write("INFO", "progress", extra, percent=percent)

    def result(self, moves: Moves, **extra):
        """Report the solution of the task. This ends the task."""
        self._advance(TaskState.COMPLETED)
        self.writer.write(
            "INFO", "result", extra, duration=self.duration(), moves=list(moves)
        )

    def exit(self, err: Union[BaseException, str]):
        """
        Report a fatal error and terminate the process with status 1.

        The process ends at once, also when called from a worker thread. Cleanup handlers
        and ``finally`` blocks do not run.
        """
        self._advance(TaskState.ABORTED)
        self.writer.write("ERROR", "exit", duration=self.duration(), err=str(err))
        os._exit(1)
