#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#

from __future__ import annotations

import sys
import warnings
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence
from urllib.parse import parse_qs, urlsplit

from ricrob.board import BoardFactory, GridBoard
from ricrob.params import (
    BLUE_ROBOT,
    BOTTOM_LEFT_TILE,
    BOTTOM_RIGHT_TILE,
    CHECK_ROBOT_ON_SYMBOL,
    GREEN_ROBOT,
    ParameterSource,
    Parameters,
    ParametersConfig,
    parse_command_line,
    QuerySource,
    RED_ROBOT,
    SILVER_ROBOT,
    TARGET_COLOR,
    TARGET_SYMBOL,
    TOP_LEFT_TILE,
    TOP_RIGHT_TILE,
    YELLOW_ROBOT,
)
from ricrob.robots import Robots
from ricrob.symbols import Color, Symbol, Target
from ricrob.tiles import Tiles


def _flag(name: str) -> str:
    return f"-{name}"


@dataclass(frozen=True)
class Args:
    """
    The validated arguments of a solver task.

    Instances are only created by :func:`build_args` (or its :func:`parse_flags` and
    :func:`parse_url` front ends), which guarantees that the tiles, robots and target are
    consistent with each other.

    Args:
        tiles (Tiles): the board tiles
        robots (Robots): the robot start positions
        target (Target): the target symbol and color
        check_robot_on_symbol (bool): whether robots starting on a symbol were rejected

    """

    tiles: Tiles
    robots: Robots
    target: Target
    check_robot_on_symbol: bool = True

    @property
    def target_symbol(self) -> Symbol:
        return self.target.symbol

    @property
    def target_color(self) -> Optional[Color]:
        return self.target.color

    def cmd_args(self) -> List[str]:
        """The command line arguments that reproduce these args in a solver process."""
        # fmt: off
        args = [
            _flag(TOP_LEFT_TILE), self.tiles.top_left,
            _flag(TOP_RIGHT_TILE), self.tiles.top_right,
            _flag(BOTTOM_LEFT_TILE), self.tiles.bottom_left,
            _flag(BOTTOM_RIGHT_TILE), self.tiles.bottom_right,
            _flag(YELLOW_ROBOT), str(self.robots.yellow),
            _flag(RED_ROBOT), str(self.robots.red),
            _flag(GREEN_ROBOT), str(self.robots.green),
            _flag(BLUE_ROBOT), str(self.robots.blue),
            _flag(SILVER_ROBOT), str(self.robots.silver),
            _flag(TARGET_SYMBOL), str(self.target.symbol),
        ]
        # fmt: on
        if self.target.color is not None:
            args += [_flag(TARGET_COLOR), str(self.target.color)]
        args.append(
            f"{_flag(CHECK_ROBOT_ON_SYMBOL)}={str(self.check_robot_on_symbol).lower()}"
        )
        return args

    def to_dict(self) -> Dict[str, Any]:
        return {
            TOP_LEFT_TILE: self.tiles.top_left,
            TOP_RIGHT_TILE: self.tiles.top_right,
            BOTTOM_LEFT_TILE: self.tiles.bottom_left,
            BOTTOM_RIGHT_TILE: self.tiles.bottom_right,
            YELLOW_ROBOT: str(self.robots.yellow),
            RED_ROBOT: str(self.robots.red),
            GREEN_ROBOT: str(self.robots.green),
            BLUE_ROBOT: str(self.robots.blue),
            SILVER_ROBOT: str(self.robots.silver),
            TARGET_SYMBOL: str(self.target.symbol),
            TARGET_COLOR: None if self.target.color is None else str(self.target.color),
            CHECK_ROBOT_ON_SYMBOL: self.check_robot_on_symbol,
        }


def build_args(
    source: ParameterSource,
    board_factory: BoardFactory = GridBoard.from_tiles,
    defaults: Optional[Mapping[str, Optional[str]]] = None,
) -> Args:
    """
    Build and validate :class:`Args` from a parameter source.

    This is the only place arguments are validated, whatever path they come from.
    The first violated rule raises and no :class:`Args` is returned.

    Args:
        source (ParameterSource): the raw parameter values
        board_factory (BoardFactory): builds the board lookup used to check the robots
        defaults (Mapping[str, str], optional): the raw parameter defaults. If None, they are
            loaded from ``ricrob/conf/task/default.yaml``

    Returns:
        the validated :class:`Args`

    Raises:
        TaskArgsError: on the first invalid parameter

    """
    if defaults is None:
        defaults = ParametersConfig.get_from_yaml().as_defaults()
    parameters = Parameters(source, defaults)

    tiles = Tiles.from_parameters(parameters)
    check_robot_on_symbol = parameters.boolean(CHECK_ROBOT_ON_SYMBOL)
    robots = Robots.from_parameters(parameters)
    robots.check(tiles, check_robot_on_symbol, board_factory)

    symbol = Symbol.parse(parameters.string(TARGET_SYMBOL))
    color_token = parameters.string(TARGET_COLOR)
    if not symbol.needs_color and color_token:
        warnings.warn(
            f"target color {color_token} is ignored for target symbol {symbol}"
        )
    target = Target.parse(str(symbol), color_token)

    return Args(
        tiles=tiles,
        robots=robots,
        target=target,
        check_robot_on_symbol=check_robot_on_symbol,
    )


def parse_flags(
    argv: Optional[Sequence[str]] = None,
    prog: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    board_factory: BoardFactory = GridBoard.from_tiles,
) -> Args:
    """
    Build :class:`Args` from command line flags.

    Unset flags fall back to the ``RICROB_<NAME>`` environment variables, then to the
    defaults.

    Args:
        argv (list of str, optional): the command line arguments without the program name,
            defaults to ``sys.argv[1:]``
        prog (str, optional): the program name shown in the usage message
        environ (Mapping[str, str], optional): the environment, defaults to ``os.environ``
        board_factory (BoardFactory): builds the board lookup used to check the robots

    """
    if argv is None:
        argv = sys.argv[1:]
    return build_args(parse_command_line(argv, prog, environ), board_factory)


def parse_url(url: str, board_factory: BoardFactory = GridBoard.from_tiles) -> Args:
    """
    Build :class:`Args` from the query of ``url``.

    ``url`` is either a full URL or a bare query string. Missing parameters take their
    default, the environment is never consulted.
    """
    parts = urlsplit(url)
    if "?" in url or parts.scheme or parts.netloc or url.startswith("/"):
        query = parts.query
    else:
        query = url
    return build_args(
        QuerySource(parse_qs(query, keep_blank_values=True)), board_factory
    )
