"""
Heuristic placement bot.

For the active piece the bot tries every rotation state, then every column
reachable by repeated left or right shifts, scores the board each resting
placement would leave, and plays the lowest scoring one.
"""

import logging
import math
from typing import List, Optional, Tuple

from ..core.commands import Command, CommandList, ROTATIONS, execute
from ..core.game import Game
from ..core.pieces import Piece, NUM_ROTATE_STATES
from .evaluation import score_game
from .players import Player
from .weights import Weights

logger = logging.getLogger(__name__)

MoveList = List[CommandList]
PlacementList = List[Piece]
ScoreList = List[Tuple[float, float]]


class Bot(Player):
    """Plays its own Game by minimising the heuristic score of each placement."""

    def __init__(self, game: Optional[Game] = None, weights: Optional[Weights] = None):
        self.game = game if game is not None else Game()
        self.weight = weights or Weights()

    def __str__(self):
        return str(self.game)

    def get_game(self) -> Game:
        return self.game

    def get_next_move(self) -> CommandList:
        deep_moves, _, deep_scores = self.move_placement_score(3, self.weight.clone())
        totals = [board + versus for board, versus in deep_scores]

        min_score = math.inf
        action = []
        for moves, score in zip(deep_moves, totals):
            if score < min_score:
                min_score = score
                action = moves

        logger.debug("%d candidates, best score %.3f: %s",
                     len(deep_moves), min_score, [c.name for c in action])
        return action + [Command.HARD_DROP]

    # move gen

    def move_placement_score(self, depth: int, weights: Weights) -> Tuple[MoveList, PlacementList, ScoreList]:
        """
        Enumerates candidates on a clone of the live game.
        Only the active piece is searched; `depth` is reserved for look-ahead.
        """
        if depth > 1:
            logger.debug("look-ahead depth %d requested, searching depth 1", depth)
        dummy = self.game.clone()
        return Bot.move_placement_score_1d(dummy, weights)

    @staticmethod
    def move_placement_score_1d(game: Game, weights: Weights) -> Tuple[MoveList, PlacementList, ScoreList]:
        return Bot.trivial(game, False, weights)

    @staticmethod
    def trivial(game: Game, hold: bool, weights: Weights) -> Tuple[MoveList, PlacementList, ScoreList]:
        """
        Depth-1 enumeration on a sandbox game. Each rotation state starts from
        its own snapshot of the sandbox and each shift direction from its own
        snapshot of the rotated piece, so attempts never leak into each other.
        Candidates come out rotation-major, then left before right, then by distance.
        """
        moves, placements, scores = [], [], []

        if hold:
            execute(game, Command.HOLD)

        for direction in range(NUM_ROTATE_STATES):
            rotated = game.clone()
            if not rotated.active_rotate_direction(direction):
                continue

            if hold:
                base_move = [Command.HOLD, ROTATIONS[direction]]
            else:
                base_move = [ROTATIONS[direction]]

            Bot.trivial_extend_direction(moves, placements, scores,
                                         list(base_move), Command.MOVE_LEFT, rotated.clone(), weights)
            Bot.trivial_extend_direction(moves, placements, scores,
                                         list(base_move), Command.MOVE_RIGHT, rotated.clone(), weights)

        return moves, placements, scores

    @staticmethod
    def trivial_extend_direction(moves: MoveList, placements: PlacementList, scores: ScoreList,
                                 base_move: CommandList, command: Command,
                                 game: Game, weights: Weights):
        # Shifts stay at spawn height; each candidate ends with one SOFT_DROP.
        while execute(game, command):
            base_move.append(command)

            piece = game.ret_active_piece_drop()
            scores.append(score_game(game, weights, piece))
            placements.append(piece)
            moves.append(base_move + [Command.SOFT_DROP])
