#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#
from dataclasses import is_dataclass

from omegaconf import DictConfig, OmegaConf

from ricrob.args import Args, build_args
from ricrob.board import BoardFactory, GridBoard
from ricrob.params import ConfigSource, ParametersConfig


def load_parameters_config_from_hydra(cfg: DictConfig) -> ParametersConfig:
    """Returns a :class:`~ricrob.params.ParametersConfig` from hydra config.

    Args:
        cfg (DictConfig): the task config dictionary from hydra

    Returns:
        :class:`~ricrob.params.ParametersConfig`

    """
    cfg_checked = OmegaConf.to_object(cfg)
    if is_dataclass(cfg_checked):
        return cfg_checked
    return ParametersConfig(**cfg_checked)


def load_args_from_hydra(
    cfg: DictConfig, board_factory: BoardFactory = GridBoard.from_tiles
) -> Args:
    """Creates validated :class:`~ricrob.args.Args` from hydra config.

    The composed task config holds every parameter, so it also serves as the defaults.

    Args:
        cfg (DictConfig): the task config dictionary from hydra
        board_factory (BoardFactory): builds the board lookup used to check the robots

    Returns:
        :class:`~ricrob.args.Args`

    """
    parameters_config = load_parameters_config_from_hydra(cfg)
    return build_args(
        ConfigSource(cfg), board_factory, defaults=parameters_config.as_defaults()
    )
