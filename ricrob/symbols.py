#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ricrob.errors import (
    InvalidColorError,
    InvalidRobotError,
    InvalidSymbolError,
    TaskArgsError,
)


class _Token(Enum):
    """
    Enum whose values are the canonical string tokens of its members.

    ``str(member)`` returns the token and :meth:`parse` maps a token back to its member.
    """

    @classmethod
    def parse(cls, token: str):
        try:
            return cls(token)
        except ValueError:
            raise cls._invalid(token) from None

    @classmethod
    def _invalid(cls, token: str) -> TaskArgsError:
        return TaskArgsError(f"invalid {cls.__name__.lower()} {token}")

    def __str__(self):
        return self.value


class Symbol(_Token):
    """The target symbols of the board."""

    PYRAMID = "pyramid"
    STAR = "star"
    MOON = "moon"
    SATURN = "saturn"
    COSMIC = "cosmic"

    @classmethod
    def _invalid(cls, token: str) -> TaskArgsError:
        return InvalidSymbolError(token)

    @property
    def needs_color(self) -> bool:
        """The cosmic symbol matches any robot, every other symbol belongs to a color."""
        return self is not Symbol.COSMIC


class Color(_Token):
    YELLOW = "yellow"
    RED = "red"
    GREEN = "green"
    BLUE = "blue"

    @classmethod
    def _invalid(cls, token: str) -> TaskArgsError:
        return InvalidColorError(token)


class Robot(_Token):
    YELLOW = "yellowRobot"
    RED = "redRobot"
    GREEN = "greenRobot"
    BLUE = "blueRobot"
    SILVER = "silverRobot"

    @classmethod
    def _invalid(cls, token: str) -> TaskArgsError:
        return InvalidRobotError(token)


@dataclass(frozen=True)
class Target:
    """
    The target of a task: a symbol and, unless the symbol is cosmic, its color.

    Args:
        symbol (Symbol): the target symbol
        color (Color, optional): the target color, ``None`` for the cosmic symbol

    """

    symbol: Symbol
    color: Optional[Color] = None

    def __post_init__(self):
        if self.symbol.needs_color and self.color is None:
            raise InvalidColorError(f"<missing> (symbol {self.symbol} needs a color)")
        if not self.symbol.needs_color and self.color is not None:
            # A color on the cosmic symbol carries no meaning
            object.__setattr__(self, "color", None)

    @staticmethod
    def parse(symbol_token: str, color_token: Optional[str] = None) -> Target:
        symbol = Symbol.parse(symbol_token)
        if not symbol.needs_color:
            return Target(symbol)
        if color_token is None:
            raise InvalidColorError(f"<missing> (symbol {symbol} needs a color)")
        return Target(symbol, Color.parse(color_token))

    def __str__(self):
        if self.color is None:
            return str(self.symbol)
        return f"{self.color}{self.symbol.value.capitalize()}"
