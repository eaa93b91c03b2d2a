"""
Tests for the heuristic placement bot: enumeration, replay and selection.
"""

import unittest
import numpy as np

from tetrabot.ai.bot import Bot
from tetrabot.ai.evaluation import score_game
from tetrabot.ai.weights import Curve, Weights
from tetrabot.core.commands import Command, execute_all
from tetrabot.core.game import Game


def weights_with(default: float = 0.0, **slopes) -> Weights:
    config = {name: Curve.linear(default) for name in Weights.curve_names()}
    config.update({name: Curve.linear(slope) for name, slope in slopes.items()})
    return Weights(**config)


class TestEnumeration(unittest.TestCase):
    """Test the depth-1 candidate generator."""

    def setUp(self):
        self.game = Game(seed=3)
        self.game.set_active_piece('T')

    def test_t_candidates_on_empty_board(self):
        """Seven columns for flat states, eight for upright ones."""
        moves, placements, scores = Bot.trivial(self.game.clone(), False, Weights())
        self.assertEqual(len(moves), 30)
        self.assertEqual(len(placements), 30)
        self.assertEqual(len(scores), 30)

        self.assertEqual(moves[0], [Command.NONE, Command.MOVE_LEFT, Command.SOFT_DROP])
        counts = [sum(1 for m in moves if m[0] == rotation)
                  for rotation in (Command.NONE, Command.ROTATE_CW,
                                   Command.ROTATE_180, Command.ROTATE_CCW)]
        self.assertEqual(counts, [7, 8, 7, 8])

    def test_candidate_order(self):
        """Rotation-major, left before right, nearest shift first."""
        moves, _, _ = Bot.trivial(self.game.clone(), False, Weights())
        flat = moves[:7]
        self.assertEqual([m.count(Command.MOVE_LEFT) for m in flat], [1, 2, 3, 4, 0, 0, 0])
        self.assertEqual([m.count(Command.MOVE_RIGHT) for m in flat], [0, 0, 0, 0, 1, 2, 3])

    def test_unshifted_spawn_column_is_not_a_candidate(self):
        _, placements, _ = Bot.trivial(self.game.clone(), False, Weights())
        flat_columns = [p.x for p in placements if p.rotation_state == 0]
        self.assertNotIn(4, flat_columns)

    def test_replaying_moves_reproduces_placement(self):
        moves, placements, _ = Bot.trivial(self.game.clone(), False, Weights())
        for move, placement in zip(moves, placements):
            replay = self.game.clone()
            execute_all(replay, move)
            self.assertEqual(replay.ret_active_piece_drop(), placement)

    def test_scores_match_their_placements(self):
        weights = Weights()
        _, placements, scores = Bot.trivial(self.game.clone(), False, weights)
        for placement, score in zip(placements, scores):
            self.assertEqual(score_game(self.game, weights, placement), score)

    def test_placements_rest_on_the_floor(self):
        _, placements, _ = Bot.trivial(self.game.clone(), False, Weights())
        for placement in placements:
            lowest = max(r for r, _ in placement.get_block_positions())
            self.assertEqual(lowest, 23)

    def test_enumeration_leaves_sandbox_alone(self):
        sandbox = self.game.clone()
        Bot.trivial(sandbox, False, Weights())
        self.assertEqual(sandbox.active_piece.pose(), (4, 2, 0))

    def test_hold_candidates_use_the_next_piece(self):
        upcoming = self.game.next_pieces_queue[0].name
        moves, placements, _ = Bot.trivial(self.game.clone(), True, Weights())
        self.assertTrue(moves)
        self.assertTrue(all(m[0] == Command.HOLD for m in moves))
        self.assertTrue(all(p.name == upcoming for p in placements))

    def test_tall_wall_column_stays_reachable(self):
        """A vertical I passes over an 18-high column 9 and lands on top of it."""
        self.game.board.grid[6:24, 9] = 1
        self.game.set_active_piece('I')

        moves, placements, _ = Bot.trivial(self.game.clone(), False, Weights())
        upright = [(m, p) for m, p in zip(moves, placements) if m[0] == Command.ROTATE_CW]
        columns = [p.x + 2 for _, p in upright]
        self.assertEqual(sorted(columns), [0, 1, 2, 3, 4, 6, 7, 8, 9])

        move, placement = upright[columns.index(9)]
        self.assertEqual(placement.y, 2)
        replay = self.game.clone()
        execute_all(replay, move)
        self.assertEqual(replay.ret_active_piece_drop(), placement)

    def test_shifts_happen_at_spawn_height(self):
        """A flat T slides over a ledge starting at row 4 on the right."""
        self.game.board.grid[4:24, 8:10] = 1

        moves, placements, _ = Bot.trivial(self.game.clone(), False, Weights())
        flat_right = [p.x for m, p in zip(moves, placements)
                      if m[0] == Command.NONE and Command.MOVE_RIGHT in m]
        self.assertEqual(flat_right, [5, 6, 7])

        for move, placement in zip(moves, placements):
            self.assertEqual(move.count(Command.SOFT_DROP), 1)
            self.assertEqual(move[-1], Command.SOFT_DROP)
            replay = self.game.clone()
            execute_all(replay, move)
            self.assertEqual(replay.ret_active_piece_drop(), placement)

    def test_fully_blocked_piece_has_no_candidates(self):
        grid = np.ones_like(self.game.board.grid)
        for r, c in self.game.active_piece.get_block_positions():
            grid[r, c] = 0
        self.game.board.grid = grid

        bot = Bot(self.game, Weights())
        self.assertEqual(bot.move_placement_score(1, Weights()), ([], [], []))
        self.assertEqual(bot.get_next_move(), [Command.HARD_DROP])


class TestBot(unittest.TestCase):
    """Test move selection on the live game."""

    def test_default_construction(self):
        bot = Bot()
        self.assertIsInstance(bot.get_game(), Game)
        self.assertEqual(bot.weight, Weights())

    def test_ties_pick_first_candidate(self):
        game = Game(seed=3)
        game.set_active_piece('T')
        bot = Bot(game, weights_with(0.0))
        self.assertEqual(bot.get_next_move(),
                         [Command.NONE, Command.MOVE_LEFT, Command.SOFT_DROP, Command.HARD_DROP])

    def test_next_move_is_lowest_total(self):
        game = Game(seed=8)
        game.board.grid[20:24, 0:3] = 1
        game.board.grid[22:24, 5:7] = 1
        game.board.grid[21, 8] = 1
        game.board.grid[23, 8:10] = 1
        game.set_active_piece('L')
        bot = Bot(game)

        moves, _, scores = bot.move_placement_score(1, bot.weight)
        totals = [board + versus for board, versus in scores]
        self.assertGreater(len(set(totals)), 1)

        best = totals.index(min(totals))
        self.assertEqual(bot.get_next_move()[:-1], moves[best])

    def test_next_move_ends_with_hard_drop(self):
        bot = Bot(Game(seed=5))
        move = bot.get_next_move()
        self.assertEqual(move[-1], Command.HARD_DROP)
        self.assertEqual(move.count(Command.HARD_DROP), 1)

    def test_get_next_move_does_not_touch_game(self):
        game = Game(seed=5)
        bot = Bot(game)
        pose = game.active_piece.pose()
        bot.get_next_move()
        self.assertEqual(game.active_piece.pose(), pose)
        self.assertEqual(game.pieces_placed, 0)
        self.assertEqual(np.count_nonzero(game.board.grid), 0)

    def test_fills_the_well(self):
        """With holes expensive the I goes straight down the open left column."""
        game = Game(seed=2)
        for col in range(1, 10):
            height = 2 if col % 2 == 1 and col < 9 else 3
            game.board.grid[24 - height:, col] = 1
        game.set_active_piece('I')

        bot = Bot(game, weights_with(num_hole_total_weight=100.0, height_weight=1.0))
        self.assertTrue(bot.make_move())

        self.assertEqual(game.pieces_placed, 1)
        self.assertEqual(game.lines_cleared_total, 2)
        self.assertNotEqual(game.board.grid[22, 0], 0)
        self.assertNotEqual(game.board.grid[23, 0], 0)
        self.assertEqual(np.count_nonzero(game.board.grid), 7)

    def test_plays_many_pieces(self):
        bot = Bot(Game(seed=11))
        made = bot.make_n_moves(25)
        self.assertEqual(made, 25)
        self.assertFalse(bot.get_game().game_over)
        self.assertEqual(bot.get_game().pieces_placed, 25)

    def test_str_shows_game(self):
        bot = Bot(Game(seed=1))
        self.assertEqual(str(bot), str(bot.get_game()))


if __name__ == '__main__':
    unittest.main()
