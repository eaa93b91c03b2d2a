"""
Command set and dispatcher.
Translates abstract bot commands into mutations on a Game.
"""

from enum import Enum
from typing import Iterable, List

from .game import Game
from ..exceptions import InvalidMoveException


class Command(Enum):
    """Every input the bot can issue."""
    NONE = 0
    MOVE_LEFT = 1
    MOVE_RIGHT = 2
    SOFT_DROP = 3
    ROTATE_CW = 4
    ROTATE_CCW = 5
    ROTATE_180 = 6
    HOLD = 7
    HARD_DROP = 8


# Indexed by the number of clockwise quarter turns
ROTATIONS = (Command.NONE, Command.ROTATE_CW, Command.ROTATE_180, Command.ROTATE_CCW)

CommandList = List[Command]

_ACTIVE_OPERATIONS = {
    Command.MOVE_LEFT: Game.active_left,
    Command.MOVE_RIGHT: Game.active_right,
    Command.SOFT_DROP: Game.active_drop,
    Command.ROTATE_CW: Game.active_cw,
    Command.ROTATE_CCW: Game.active_ccw,
    Command.ROTATE_180: Game.active_180,
}


def execute(game: Game, command: Command) -> bool:
    """
    Applies one command to the game in place.

    Moves and rotations return whether they were legal. HOLD, HARD_DROP and
    NONE always succeed; a hard drop whose next piece cannot spawn ends the game.
    """
    if command is Command.NONE:
        return True
    if command in _ACTIVE_OPERATIONS:
        return _ACTIVE_OPERATIONS[command](game)
    if command is Command.HOLD:
        game.hold()
        return True
    if command is Command.HARD_DROP:
        game.game_over = not game.hard_drop()
        return True
    raise InvalidMoveException(f"Unknown command: {command!r}")


def execute_all(game: Game, commands: Iterable[Command]):
    """Replays a command list, ignoring individual results."""
    for command in commands:
        execute(game, command)
