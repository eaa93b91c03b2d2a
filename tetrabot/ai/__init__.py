"""
AI module for tetrabot.
Contains the weight curves, the heuristic evaluator, the placement bot and the player loop.
"""

from .weights import Curve, Weights, load_weights
from .evaluation import score_board, score_game, score_versus
from .players import Player
from .bot import Bot

__all__ = ['Curve', 'Weights', 'load_weights', 'score_board', 'score_game',
           'score_versus', 'Player', 'Bot']
