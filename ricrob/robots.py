#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from ricrob.board import BoardFactory, GridBoard
from ricrob.coordinate import Coordinate
from ricrob.errors import (
    DuplicateRobotPositionError,
    InvalidRobotPositionError,
    RobotOnSymbolError,
)
from ricrob.params import (
    BLUE_ROBOT,
    GREEN_ROBOT,
    Parameters,
    RED_ROBOT,
    SILVER_ROBOT,
    YELLOW_ROBOT,
)
from ricrob.symbols import Robot
from ricrob.tiles import Tiles


@dataclass(frozen=True)
class Robots:
    """
    The start coordinates of the robots.

    The silver robot is optional, :attr:`Coordinate.NONE` keeps it out of play.
    """

    yellow: Coordinate
    red: Coordinate
    green: Coordinate
    blue: Coordinate
    silver: Coordinate = Coordinate.NONE

    @property
    def has_silver(self) -> bool:
        return self.silver != Coordinate.NONE

    def active(self) -> Iterator[Tuple[Robot, Coordinate]]:
        """The robots in play in check order: yellow, red, green, blue and silver."""
        yield Robot.YELLOW, self.yellow
        yield Robot.RED, self.red
        yield Robot.GREEN, self.green
        yield Robot.BLUE, self.blue
        if self.has_silver:
            yield Robot.SILVER, self.silver

    def check(
        self,
        tiles: Tiles,
        check_robot_on_symbol: bool,
        board_factory: BoardFactory = GridBoard.from_tiles,
    ):
        """
        Validates the robot positions against the board built from ``tiles``.

        Args:
            tiles (Tiles): the checked tiles of the board
            check_robot_on_symbol (bool): reject robots starting on a symbol field
            board_factory (BoardFactory): builds the board lookup from the tiles

        Raises:
            InvalidRobotPositionError: if a robot is off the board or in the center block
            RobotOnSymbolError: if ``check_robot_on_symbol`` is set and a robot sits on a symbol
            DuplicateRobotPositionError: if two robots share a position

        """
        board = board_factory(tiles)
        claimed = set()
        for _, coordinate in self.active():
            if not board.is_valid_coordinate(coordinate.x, coordinate.y):
                raise InvalidRobotPositionError(coordinate)
            if check_robot_on_symbol:
                field = board.field(coordinate.x, coordinate.y)
                if field.has_symbol:
                    raise RobotOnSymbolError(coordinate, field.symbol, field.color)
            if coordinate in claimed:
                raise DuplicateRobotPositionError(coordinate)
            claimed.add(coordinate)

    @staticmethod
    def from_parameters(parameters: Parameters) -> Robots:
        """Read the robot positions from ``parameters``. The result is not checked."""
        return Robots(
            yellow=parameters.coordinate(YELLOW_ROBOT),
            red=parameters.coordinate(RED_ROBOT),
            green=parameters.coordinate(GREEN_ROBOT),
            blue=parameters.coordinate(BLUE_ROBOT),
            silver=parameters.coordinate(SILVER_ROBOT),
        )
