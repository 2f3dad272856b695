#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#


__version__ = "0.1.0"

import importlib.util

from ricrob.args import Args, build_args, parse_flags, parse_url
from ricrob.board import Board, Field, GridBoard
from ricrob.coordinate import Coordinate
from ricrob.robots import Robots
from ricrob.symbols import Color, Robot, Symbol, Target
from ricrob.task import Move, Moves, Task
from ricrob.tiles import Tiles

_has_hydra = importlib.util.find_spec("hydra") is not None

if _has_hydra:

    def _load_hydra_schemas():
        from hydra.core.config_store import ConfigStore

        from ricrob.params import ParametersConfig

        # Create instance to load hydra schemas
        cs = ConfigStore.instance()
        # Load task parameters schema
        cs.store(name="parameters_config", group="task", node=ParametersConfig)

    _load_hydra_schemas()
