#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#

import hydra
from omegaconf import DictConfig, OmegaConf

from ricrob.hydra_config import load_args_from_hydra


@hydra.main(version_base=None, config_path="conf", config_name="config")
def hydra_task(cfg: DictConfig) -> None:
    """Validates the task parameters loaded from hydra.

    This function is decorated as ``@hydra.main`` and is called by running

    .. code-block:: console

       python ricrob/run.py task.ts=star task.tc=red 'task.ry="4,4"'

    It prints the loaded config and the solver command line arguments.

    Args:
        cfg (DictConfig): the hydra config dictionary

    """
    print("\nLoaded config:\n")
    print(OmegaConf.to_yaml(cfg))

    args = load_args_from_hydra(cfg.task)
    print("Solver arguments:")
    print(" ".join(args.cmd_args()))


if __name__ == "__main__":
    hydra_task()
