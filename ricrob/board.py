#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#
"""
The board lookups the task validation depends on.

The geometry of the real tiles (walls and symbol fields) belongs to the solver, the
validation only needs the :class:`Board` capability, so any implementation (or a fake in
tests) can be injected through a :data:`BoardFactory`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Mapping, Optional, Protocol, TYPE_CHECKING

from ricrob.coordinate import Coordinate
from ricrob.symbols import Color, Symbol

if TYPE_CHECKING:
    from ricrob.tiles import Tiles

BOARD_SIZE = 16
CENTER = (7, 8)


@dataclass(frozen=True)
class Field:
    """The content of a board field: an optional symbol and its color."""

    symbol: Optional[Symbol] = None
    color: Optional[Color] = None

    EMPTY: ClassVar[Field]

    @property
    def has_symbol(self) -> bool:
        return self.symbol is not None


Field.EMPTY = Field()


class Board(Protocol):
    def is_valid_coordinate(self, x: int, y: int) -> bool:
        """True if ``(x, y)`` lies on the board and outside the center block."""
        ...

    def field(self, x: int, y: int) -> Field:
        ...


BoardFactory = Callable[["Tiles"], Board]


class GridBoard:
    """
    A square board of ``size`` x ``size`` fields with a forbidden center block.

    Args:
        size (int): the number of fields per side
        center (tuple of int): the rows (and columns) of the center block
        fields (Mapping[Coordinate, Field], optional): the symbol fields of the board

    """

    def __init__(
        self,
        size: int = BOARD_SIZE,
        center=CENTER,
        fields: Optional[Mapping[Coordinate, Field]] = None,
    ):
        self.size = size
        self.center = tuple(center)
        self.fields = dict(fields) if fields is not None else {}

    @classmethod
    def from_tiles(cls, tiles: Tiles) -> GridBoard:
        """
        Default :data:`BoardFactory`: the board geometry without symbol fields.

        The symbol layout of a tile is solver data, hosts that enforce the robot on symbol
        check against real tiles inject a factory that knows it.
        """
        return cls()

    def in_center(self, x: int, y: int) -> bool:
        return x in self.center and y in self.center

    def is_valid_coordinate(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size and not self.in_center(x, y)

    def field(self, x: int, y: int) -> Field:
        if not self.is_valid_coordinate(x, y):
            return Field.EMPTY
        return self.fields.get(Coordinate(x, y), Field.EMPTY)
