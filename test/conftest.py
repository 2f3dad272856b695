#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#
import io

import pytest

from ricrob.board import Field, GridBoard
from ricrob.coordinate import Coordinate
from ricrob.params import ParametersConfig
from ricrob.symbols import Color, Symbol
from ricrob.tiles import Tiles

# Fields carrying a symbol on the fake board
SYMBOL_FIELDS = {
    Coordinate(1, 1): Field(Symbol.STAR, Color.RED),
    Coordinate(5, 3): Field(Symbol.COSMIC),
}


class FakeBoard:
    """Board with a configurable valid area, independent of any tile geometry."""

    def __init__(self, tiles, valid=None, fields=None):
        self.tiles = tiles
        self.valid = valid
        self.fields = fields if fields is not None else {}
        self.calls = []

    def is_valid_coordinate(self, x, y):
        self.calls.append((x, y))
        if self.valid is None:
            return True
        return (x, y) in self.valid

    def field(self, x, y):
        return self.fields.get(Coordinate(x, y), Field.EMPTY)


@pytest.fixture
def default_tiles() -> Tiles:
    return Tiles(top_left="A1F", top_right="A2F", bottom_left="A4F", bottom_right="A3F")


@pytest.fixture
def symbol_board_factory():
    return lambda tiles: GridBoard(fields=SYMBOL_FIELDS)


@pytest.fixture
def defaults():
    return ParametersConfig.get_from_yaml().as_defaults()


@pytest.fixture
def stream():
    return io.StringIO()
