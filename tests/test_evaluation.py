import unittest

from tetrabot.ai.evaluation import (score_board, score_game, score_versus, get_height_score,
                                    get_height_differences_score, get_holes_and_cell_covered_score)
from tetrabot.ai.weights import Curve, Weights
from tetrabot.core.board import Board
from tetrabot.core.game import Game, GameData
from tetrabot.core.pieces import make_piece


def weights_with(default: float = 0.0, **slopes) -> Weights:
    """Weights where every curve is linear with slope `default` unless overridden."""
    config = {name: Curve.linear(default) for name in Weights.curve_names()}
    config.update({name: Curve.linear(slope) for name, slope in slopes.items()})
    return Weights(**config)


class TestBoardScore(unittest.TestCase):

    def test_empty_board_scores_zero(self):
        self.assertEqual(score_board(Board(), Weights()), 0.0)

    def test_feature_terms(self):
        # Column 0: hole under two cells; column 3: three holes under one cell
        board = Board()
        board.grid[[20, 21, 23], 0] = 1
        board.grid[[19, 23], 3] = 1
        weights = weights_with(1.0)

        self.assertEqual(get_holes_and_cell_covered_score(board, weights), 4 + 5 + 3)
        self.assertEqual(get_height_score(board, weights), 5)
        self.assertEqual(get_height_differences_score(board, weights), (4 + 5 + 5) + 5)
        self.assertEqual(score_board(board, weights), 36)

    def test_repeatable(self):
        board = Board()
        board.grid[18:24, [0, 2, 5]] = 3
        board.grid[21, 1] = 4
        first = score_board(board, Weights())
        for _ in range(5):
            self.assertEqual(score_board(board.copy(), Weights()), first)

    def test_holes_cost_more_with_default_weights(self):
        flat = Board()
        flat.grid[23, 0:4] = 1
        holed = Board()
        holed.grid[22, 0:4] = 1
        self.assertLess(score_board(flat, Weights()), score_board(holed, Weights()))


class TestGameScore(unittest.TestCase):
    """A stack on columns 1-8, two rows high, and an I placed two ways."""

    def setUp(self):
        self.game = Game(seed=0)
        self.game.board.grid[22:24, 1:9] = 1

        self.vertical = make_piece('I')
        self.vertical.rotate(1)
        self.vertical.x, self.vertical.y = -2, 20  # fills column 0, rows 20-23

        self.horizontal = make_piece('I')
        self.horizontal.x, self.horizontal.y = 0, 20  # lies on the stack, row 21

    def test_score_is_pair_with_zero_versus_term(self):
        board_score, versus_score = score_game(self.game, Weights(), self.vertical)
        self.assertEqual(versus_score, 0.0)
        self.assertIsInstance(board_score, float)

    def test_board_is_not_modified(self):
        before = self.game.board.grid.copy()
        score_game(self.game, Weights(), self.horizontal)
        self.assertTrue((self.game.board.grid == before).all())

    def test_hole_averse_weights_prefer_vertical(self):
        weights = weights_with(num_hole_total_weight=100.0, height_weight=1.0)
        vertical, _ = score_game(self.game, weights, self.vertical)
        horizontal, _ = score_game(self.game, weights, self.horizontal)
        self.assertEqual(vertical, 4.0)
        self.assertEqual(horizontal, 203.0)

    def test_height_averse_weights_prefer_horizontal(self):
        weights = weights_with(height_weight=100.0)
        vertical, _ = score_game(self.game, weights, self.vertical)
        horizontal, _ = score_game(self.game, weights, self.horizontal)
        self.assertEqual(vertical, 400.0)
        self.assertEqual(horizontal, 300.0)

    def test_line_clears_are_scored_after_clearing(self):
        self.game.board.grid[22:24, 9] = 1
        board_score, _ = score_game(self.game, weights_with(1.0), self.vertical)
        # Only the top half of the I is left: height 2 next to empty columns
        self.assertEqual(board_score, 2 + 2 + 2)


class TestVersusScore(unittest.TestCase):

    def test_default_weights_reward_counters(self):
        data = GameData(combo=2, b2b=1, last_sent=3, last_cleared=2)
        self.assertAlmostEqual(score_versus(data, Weights()), -2.0 - 1.5 - 3.0 - 1.0)

    def test_idle_counters_score_zero(self):
        self.assertEqual(score_versus(GameData(), Weights()), 0.0)


if __name__ == '__main__':
    unittest.main()
