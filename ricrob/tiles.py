#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ricrob.errors import DuplicateTileError, InvalidTileError
from ricrob.params import (
    BOTTOM_LEFT_TILE,
    BOTTOM_RIGHT_TILE,
    Parameters,
    TOP_LEFT_TILE,
    TOP_RIGHT_TILE,
)

TILE_SETS = ("A", "B")
TILE_NUMBERS = ("1", "2", "3", "4")
TILE_SIDES = ("F", "B")


def is_valid_tile(tile: str) -> bool:
    """A tile code is the set id, the tile number and the side facing up, like ``A1F``."""
    return (
        isinstance(tile, str)
        and len(tile) == 3
        and tile[0] in TILE_SETS
        and tile[1] in TILE_NUMBERS
        and tile[2] in TILE_SIDES
    )


@dataclass(frozen=True)
class Tiles:
    """
    The four quadrant tiles of a board.

    Args:
        top_left (str): code of the top left tile
        top_right (str): code of the top right tile
        bottom_left (str): code of the bottom left tile
        bottom_right (str): code of the bottom right tile

    """

    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str

    def as_list(self) -> List[str]:
        return [self.top_left, self.top_right, self.bottom_left, self.bottom_right]

    def check(self):
        """
        Validates the tiles.

        Raises:
            InvalidTileError: if a code is not a valid tile code
            DuplicateTileError: if a tile is used more than once

        """
        seen = set()
        for tile in self.as_list():
            if not is_valid_tile(tile):
                raise InvalidTileError(tile)
            if tile in seen:
                raise DuplicateTileError(tile)
            seen.add(tile)

    @staticmethod
    def from_parameters(parameters: Parameters) -> Tiles:
        """Read the tiles from ``parameters`` and check them."""
        tiles = Tiles(
            top_left=parameters.string(TOP_LEFT_TILE),
            top_right=parameters.string(TOP_RIGHT_TILE),
            bottom_left=parameters.string(BOTTOM_LEFT_TILE),
            bottom_right=parameters.string(BOTTOM_RIGHT_TILE),
        )
        tiles.check()
        return tiles
