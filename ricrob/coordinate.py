#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, Dict

from ricrob.errors import InvalidCoordinateError

# Coordinates travel as signed 8-bit integers
COORDINATE_MIN = -128
COORDINATE_MAX = 127

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_component(axis: str, field: str, text: str) -> int:
    if _INTEGER.fullmatch(field) is None:
        raise InvalidCoordinateError(
            f"invalid {axis} coordinate {text} - {field!r} is not an integer"
        )
    return _check_range(axis, int(field), text)


def _check_range(axis: str, value: int, text: str) -> int:
    if not COORDINATE_MIN <= value <= COORDINATE_MAX:
        raise InvalidCoordinateError(
            f"invalid {axis} coordinate {text} - {value} out of range "
            f"[{COORDINATE_MIN}, {COORDINATE_MAX}]"
        )
    return value


@dataclass(frozen=True)
class Coordinate:
    """
    A two dimensional board coordinate. Both components fit into a signed byte.

    The canonical text form is ``"x,y"``, which :meth:`Coordinate.parse` reads back.

    Args:
        x (int): the column
        y (int): the row

    """

    x: int
    y: int

    NONE: ClassVar[Coordinate]

    def __post_init__(self):
        _check_range("x", self.x, str(self))
        _check_range("y", self.y, str(self))

    @staticmethod
    def parse(text: str) -> Coordinate:
        """
        Parse a coordinate from its ``"x,y"`` text form.

        Raises:
            InvalidCoordinateError: if the text does not hold exactly two integer fields
                or a field does not fit into a signed byte.

        """
        fields = text.split(",")
        if len(fields) != 2:
            raise InvalidCoordinateError(f"invalid coordinate format: {text}")
        return Coordinate(
            x=_parse_component("x", fields[0], text),
            y=_parse_component("y", fields[1], text),
        )

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y}

    def __str__(self):
        return f"{self.x},{self.y}"


# Marks an optional robot that is not in play
Coordinate.NONE = Coordinate(-1, -1)
