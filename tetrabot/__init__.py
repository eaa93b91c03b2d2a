# tetrabot - A heuristic Tetris placement bot
# __init__.py for the tetrabot package

from .core import Board, Piece, Game, GameData, Command, execute
from .ai import Bot, Player, Weights, Curve
from .exceptions import GameOverException, InvalidMoveException, InvalidWeightsException

__version__ = "0.1.0"
