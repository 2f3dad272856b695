#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#
"""
Parameter surface shared by the command line, URL query and hydra paths.

Every path is reduced to a :class:`ParameterSource`, so a single validation routine
(:func:`ricrob.args.build_args`) consumes all of them.
"""

from __future__ import annotations

import argparse
import os
import re
from dataclasses import asdict, dataclass, fields, MISSING
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from ricrob.coordinate import Coordinate
from ricrob.errors import InvalidBoolError
from ricrob.utils import _read_yaml_config, CONF_DIR

ENV_PREFIX = "RICROB_"

TOP_LEFT_TILE = "ttl"
TOP_RIGHT_TILE = "ttr"
BOTTOM_LEFT_TILE = "tbl"
BOTTOM_RIGHT_TILE = "tbr"

YELLOW_ROBOT = "ry"
RED_ROBOT = "rr"
GREEN_ROBOT = "rg"
BLUE_ROBOT = "rb"
SILVER_ROBOT = "rs"

TARGET_SYMBOL = "ts"
TARGET_COLOR = "tc"
CHECK_ROBOT_ON_SYMBOL = "crs"

_HELP = {
    TOP_LEFT_TILE: "top left tile",
    TOP_RIGHT_TILE: "top right tile",
    BOTTOM_LEFT_TILE: "bottom left tile",
    BOTTOM_RIGHT_TILE: "bottom right tile",
    YELLOW_ROBOT: "yellow robot position x,y",
    RED_ROBOT: "red robot position x,y",
    GREEN_ROBOT: "green robot position x,y",
    BLUE_ROBOT: "blue robot position x,y",
    SILVER_ROBOT: "silver robot position x,y (-1,-1: no silver robot)",
    TARGET_SYMBOL: "target symbol (pyramid|star|moon|saturn|cosmic)",
    TARGET_COLOR: "target color (yellow|red|green|blue) - leave empty for symbol cosmic",
    CHECK_ROBOT_ON_SYMBOL: "check if robots sit on symbol",
}

_TRUE = frozenset(("1", "t", "T", "TRUE", "true", "True"))
_FALSE = frozenset(("0", "f", "F", "FALSE", "false", "False"))

_NEGATIVE_VALUE = re.compile(r"-[0-9]")


@dataclass
class ParametersConfig:
    """
    Schema of the task parameters.

    The default values are loaded from ``ricrob/conf/task/default.yaml``, this class only
    validates their types.
    """

    ttl: str = MISSING
    ttr: str = MISSING
    tbl: str = MISSING
    tbr: str = MISSING
    ry: str = MISSING
    rr: str = MISSING
    rg: str = MISSING
    rb: str = MISSING
    rs: str = MISSING
    ts: str = MISSING
    tc: Optional[str] = MISSING
    crs: bool = MISSING

    @staticmethod
    def get_from_yaml(path: Optional[str] = None) -> ParametersConfig:
        """
        Load the parameter defaults from yaml

        Args:
            path (str, optional): The full path of the yaml file to load from.
                If None, it will default to ``ricrob/conf/task/default.yaml``

        Returns:
            the loaded :class:`~ricrob.params.ParametersConfig`
        """
        if path is None:
            path = str((CONF_DIR / "task" / "default.yaml").resolve())
        return ParametersConfig(**_read_yaml_config(path))

    def as_defaults(self) -> Dict[str, Optional[str]]:
        """The defaults in their raw text form, as every source returns them."""
        return {name: _to_text(value) for name, value in asdict(self).items()}


PARAMETER_NAMES = tuple(f.name for f in fields(ParametersConfig))


def env_var(name: str) -> str:
    return ENV_PREFIX + name.upper()


def usage(name: str, text: str) -> str:
    return f"{text} (environment variable {env_var(name)})"


def resolve(
    flag_value: Optional[str], env_value: Optional[str], default: Optional[str]
) -> Optional[str]:
    """
    Resolve a parameter value with the precedence flag > environment > default.

    ``None`` means "not given" at every level.
    """
    if flag_value is not None:
        return flag_value
    if env_value is not None:
        return env_value
    return default


def parse_bool(name: str, text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise InvalidBoolError(name, text)


def _to_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ParameterSource(Protocol):
    def get(self, name: str, default: Optional[str]) -> Optional[str]:
        """Return the raw value of parameter ``name`` or ``default`` if it is not set."""
        ...


class FlagSource:
    """
    Command line flags with environment variable fallback.

    Args:
        namespace (argparse.Namespace): flags parsed by :func:`make_parser`, unset flags are ``None``
        environ (Mapping[str, str], optional): the environment, defaults to a snapshot of ``os.environ``

    """

    def __init__(
        self,
        namespace: argparse.Namespace,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.namespace = namespace
        self.environ = dict(os.environ if environ is None else environ)

    def get(self, name: str, default: Optional[str]) -> Optional[str]:
        return resolve(
            getattr(self.namespace, name, None), self.environ.get(env_var(name)), default
        )


class QuerySource:
    """
    URL query parameters. Only the first value of a repeated parameter counts.

    Args:
        query (Mapping[str, Sequence[str]]): the query as returned by :func:`urllib.parse.parse_qs`

    """

    def __init__(self, query: Mapping[str, Sequence[str]]):
        self.query = query

    def get(self, name: str, default: Optional[str]) -> Optional[str]:
        values = self.query.get(name)
        return resolve(values[0] if values else None, None, default)


class ConfigSource:
    """A hydra ``DictConfig`` (or any mapping) holding the parameters as keys."""

    def __init__(self, cfg: Mapping[str, Any]):
        self.cfg = cfg

    def get(self, name: str, default: Optional[str]) -> Optional[str]:
        return resolve(_to_text(self.cfg.get(name)), None, default)


class Parameters:
    """
    Typed access to a :class:`ParameterSource` falling back to ``defaults``.

    Args:
        source (ParameterSource): where the values come from
        defaults (Mapping[str, Optional[str]]): the raw default of each parameter

    """

    def __init__(self, source: ParameterSource, defaults: Mapping[str, Optional[str]]):
        self.source = source
        self.defaults = defaults

    def string(self, name: str) -> Optional[str]:
        return self.source.get(name, self.defaults.get(name))

    def coordinate(self, name: str) -> Coordinate:
        return Coordinate.parse(self.string(name))

    def boolean(self, name: str) -> bool:
        return parse_bool(name, self.string(name))


def make_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    """
    Build the command line parser.

    All flags default to ``None`` so that :class:`FlagSource` can tell an unset flag from
    a given one and fall back to the environment.
    """
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Solver task parameters.",
        allow_abbrev=False,
    )
    for name in PARAMETER_NAMES:
        if name == CHECK_ROBOT_ON_SYMBOL:
            parser.add_argument(
                f"-{name}",
                dest=name,
                nargs="?",
                const="true",
                default=None,
                metavar="BOOL",
                help=usage(name, _HELP[name]),
            )
        else:
            parser.add_argument(
                f"-{name}", dest=name, default=None, help=usage(name, _HELP[name])
            )
    return parser


def _attach_negative_values(argv: Sequence[str]) -> List[str]:
    # argparse reads "-1,0" as an unknown flag, so glue it to its flag as "-ry=-1,0"
    flags = {f"-{name}" for name in PARAMETER_NAMES if name != CHECK_ROBOT_ON_SYMBOL}
    joined = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if (
            arg in flags
            and i + 1 < len(argv)
            and _NEGATIVE_VALUE.match(argv[i + 1]) is not None
        ):
            joined.append(f"{arg}={argv[i + 1]}")
            i += 2
            continue
        joined.append(arg)
        i += 1
    return joined


def parse_command_line(
    argv: Sequence[str],
    prog: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> FlagSource:
    """Parse ``argv`` (without the program name) into a :class:`FlagSource`."""
    namespace = make_parser(prog).parse_args(_attach_negative_values(argv))
    return FlagSource(namespace, environ)
