"""
Board evaluation functions for tetrabot.
Scores are penalties: lower is better.
"""

from typing import Tuple

from ..core.board import Board
from ..core.game import Game, GameData
from ..core.pieces import Piece
from .weights import Weights


def score_game(game: Game, weights: Weights, placement: Piece) -> Tuple[float, float]:
    """
    Scores the board that results from locking `placement` on the game's board.
    Returns (board_score, versus_score); the versus term is a placeholder
    held at zero until deeper search can supply a prospective value.
    """
    versus_score = 0.0
    return score_board(game.board.with_piece(placement), weights), versus_score


def score_board(board: Board, weights: Weights) -> float:
    return (get_holes_and_cell_covered_score(board, weights)
            + get_height_score(board, weights)
            + get_height_differences_score(board, weights))


def score_versus(game_data: GameData, weights: Weights) -> float:
    """Situational score from the combo, back-to-back, attack and clear counters."""
    combo_score = weights.combo_weight.eval(game_data.combo)
    b2b = weights.b2b_weight.eval(game_data.b2b)
    attack = weights.damage_weight.eval(game_data.last_sent)
    clear = weights.clear_weight.eval(game_data.last_cleared)

    return combo_score + b2b + attack + clear


def get_height_differences_score(board: Board, weights: Weights) -> float:
    adjacent_score = sum(
        weights.adjacent_height_differences_weight.eval(diff)
        for diff in board.get_adjacent_height_differences()
    )
    total_score = weights.total_height_difference_weight.eval(board.get_max_height_difference())

    return adjacent_score + total_score


def get_height_score(board: Board, weights: Weights) -> float:
    return weights.height_weight.eval(board.get_max_height())


def get_holes_and_cell_covered_score(board: Board, weights: Weights) -> float:
    holes_total, holes_weighted, covered = board.holes_cell_covered()

    score = 0.0
    score += weights.num_hole_total_weight.eval(holes_total)
    score += weights.num_hole_weighted_weight.eval(holes_weighted)
    score += weights.cell_covered_weight.eval(covered)
    return score
