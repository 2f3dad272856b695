#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#

import pytest
from conftest import FakeBoard

from ricrob.board import Field, GridBoard
from ricrob.coordinate import Coordinate
from ricrob.errors import (
    DuplicateRobotPositionError,
    InvalidRobotPositionError,
    RobotOnSymbolError,
)
from ricrob.params import Parameters, QuerySource
from ricrob.robots import Robots
from ricrob.symbols import Robot


def _robots(*coordinates, silver=Coordinate.NONE):
    return Robots(*(Coordinate(x, y) for x, y in coordinates), silver=silver)


@pytest.fixture
def default_robots() -> Robots:
    return _robots((0, 0), (1, 0), (2, 0), (3, 0))


@pytest.mark.parametrize("check_robot_on_symbol", [True, False])
def test_default_robots(default_tiles, default_robots, check_robot_on_symbol):
    default_robots.check(default_tiles, check_robot_on_symbol)


def test_has_silver(default_robots):
    assert not default_robots.has_silver
    assert [robot for robot, _ in default_robots.active()] == [
        Robot.YELLOW,
        Robot.RED,
        Robot.GREEN,
        Robot.BLUE,
    ]
    robots = _robots((0, 0), (1, 0), (2, 0), (3, 0), silver=Coordinate(4, 0))
    assert robots.has_silver
    assert list(robots.active())[-1] == (Robot.SILVER, Coordinate(4, 0))


@pytest.mark.parametrize("check_robot_on_symbol", [True, False])
@pytest.mark.parametrize(
    "position", [(-1, 0), (0, -1), (16, 0), (0, 16), (7, 7), (7, 8), (8, 7), (8, 8)]
)
def test_off_board_or_center(default_tiles, position, check_robot_on_symbol):
    robots = _robots(position, (1, 0), (2, 0), (3, 0))
    with pytest.raises(InvalidRobotPositionError, match="center field"):
        robots.check(default_tiles, check_robot_on_symbol)


def test_next_to_center_is_valid(default_tiles):
    _robots((6, 7), (7, 6), (9, 8), (8, 9)).check(default_tiles, True)


def test_silver_off_board(default_tiles):
    robots = _robots((0, 0), (1, 0), (2, 0), (3, 0), silver=Coordinate(-1, 5))
    with pytest.raises(InvalidRobotPositionError) as excinfo:
        robots.check(default_tiles, True)
    assert excinfo.value.coordinate == Coordinate(-1, 5)


@pytest.mark.parametrize(
    "robots",
    [
        _robots((0, 1), (0, 2), (0, 3), (0, 2)),
        _robots((0, 0), (1, 0), (2, 0), (3, 0), silver=Coordinate(0, 0)),
    ],
)
def test_duplicate_position(default_tiles, robots):
    with pytest.raises(DuplicateRobotPositionError, match="duplicate robot position"):
        robots.check(default_tiles, False)


def test_robot_on_symbol(default_tiles, symbol_board_factory):
    robots = _robots((0, 0), (1, 1), (2, 0), (3, 0))
    with pytest.raises(RobotOnSymbolError, match="sits on symbol star color red"):
        robots.check(default_tiles, True, symbol_board_factory)
    robots.check(default_tiles, False, symbol_board_factory)


def test_robot_on_cosmic_symbol(default_tiles, symbol_board_factory):
    robots = _robots((0, 0), (1, 0), (2, 0), (3, 0), silver=Coordinate(5, 3))
    with pytest.raises(RobotOnSymbolError, match="cosmic color None"):
        robots.check(default_tiles, True, symbol_board_factory)


def test_symbol_checked_before_duplicate(default_tiles, symbol_board_factory):
    robots = _robots((1, 1), (1, 1), (2, 0), (3, 0))
    with pytest.raises(RobotOnSymbolError):
        robots.check(default_tiles, True, symbol_board_factory)
    with pytest.raises(DuplicateRobotPositionError):
        robots.check(default_tiles, False, symbol_board_factory)


def test_board_factory_gets_tiles_and_check_order(default_tiles):
    boards = []

    def factory(tiles):
        boards.append(FakeBoard(tiles))
        return boards[-1]

    robots = _robots((4, 4), (3, 3), (2, 2), (1, 1), silver=Coordinate(0, 0))
    robots.check(default_tiles, True, factory)
    assert boards[0].tiles == default_tiles
    assert boards[0].calls == [(4, 4), (3, 3), (2, 2), (1, 1), (0, 0)]


def test_fake_board_geometry(default_tiles):
    valid = {(20, 20), (21, 21), (22, 22), (23, 23)}
    robots = _robots(*sorted(valid))
    robots.check(default_tiles, True, lambda tiles: FakeBoard(tiles, valid=valid))
    with pytest.raises(InvalidRobotPositionError):
        robots.check(default_tiles, True, GridBoard.from_tiles)


def test_grid_board_field_outside_board():
    board = GridBoard()
    assert board.field(300, 0) is Field.EMPTY
    assert board.field(7, 8) is Field.EMPTY


def test_from_parameters(defaults):
    parameters = Parameters(QuerySource({"rs": ["5,5"], "ry": ["-1,0"]}), defaults)
    robots = Robots.from_parameters(parameters)
    assert robots == _robots((-1, 0), (1, 0), (2, 0), (3, 0), silver=Coordinate(5, 5))
