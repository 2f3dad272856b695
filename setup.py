#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#
import pathlib

from setuptools import find_packages, setup


def get_version():
    """Gets the ricrob version."""
    path = CWD / "ricrob" / "__init__.py"
    content = path.read_text()

    for line in content.splitlines():
        if line.startswith("__version__"):
            return line.strip().split()[-1].strip().strip('"')
    raise RuntimeError("bad version data in __init__.py")


CWD = pathlib.Path(__file__).absolute().parent

setup(
    name="ricrob",
    version=get_version(),
    description="Validated task parameters for tile board robot solvers",
    install_requires=["hydra-core", "omegaconf", "pyyaml"],
    extras_require={
        "tests": ["pytest"],
    },
    packages=find_packages(include=["ricrob", "ricrob.*"]),
    include_package_data=True,
    package_data={"ricrob": ["conf/*.yaml", "conf/*/*.yaml"]},
)
