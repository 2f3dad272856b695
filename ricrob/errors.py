#  Copyright (c) Meta Platforms, Inc. and affiliates.
#
#  This source code is licensed under the license found in the
#  LICENSE file in the root directory of this source tree.
#


class TaskArgsError(ValueError):
    """Base class of all task argument errors."""


class InvalidCoordinateError(TaskArgsError):
    pass


class InvalidSymbolError(TaskArgsError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"invalid symbol {token}")


class InvalidColorError(TaskArgsError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"invalid color {token}")


class InvalidRobotError(TaskArgsError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"invalid robot {token}")


class InvalidBoolError(TaskArgsError):
    def __init__(self, name: str, token: str):
        self.token = token
        super().__init__(f"invalid boolean value {token} for parameter {name}")


class InvalidTileError(TaskArgsError):
    def __init__(self, tile: str):
        self.tile = tile
        super().__init__(f"invalid tile {tile}")


class DuplicateTileError(TaskArgsError):
    def __init__(self, tile: str):
        self.tile = tile
        super().__init__(f"duplicate tile {tile}")


class InvalidRobotPositionError(TaskArgsError):
    def __init__(self, coordinate):
        self.coordinate = coordinate
        super().__init__(f"invalid robot coordinates {coordinate} - center field")


class RobotOnSymbolError(TaskArgsError):
    def __init__(self, coordinate, symbol, color):
        self.coordinate = coordinate
        self.symbol = symbol
        self.color = color
        super().__init__(f"robot {coordinate} sits on symbol {symbol} color {color}")


class DuplicateRobotPositionError(TaskArgsError):
    def __init__(self, coordinate):
        self.coordinate = coordinate
        super().__init__(f"duplicate robot position {coordinate}")


class TaskStateError(RuntimeError):
    def __init__(
        self,
        message="task already finished, no further events can be reported",
    ):
        self.message = message
        super().__init__(self.message)
