"""
Core module for tetrabot.
Contains the game substrate (board, pieces, game rules) and the command dispatcher.
"""

from .board import Board
from .pieces import Piece, PieceFactory, make_piece
from .game import Game, GameData
from .commands import Command, ROTATIONS, execute, execute_all

__all__ = ['Board', 'Piece', 'PieceFactory', 'make_piece', 'Game', 'GameData',
           'Command', 'ROTATIONS', 'execute', 'execute_all']
