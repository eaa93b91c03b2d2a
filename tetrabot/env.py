# tetrabot - A heuristic Tetris placement bot
# env.py - Gymnasium environment driven by single bot Commands.

import gymnasium as gym
from gymnasium import spaces
import numpy as np

from .core.board import Board
from .core.commands import Command, execute
from .core.game import Game
from .core.pieces import Piece


class TetrisEnv(gym.Env):
    """
    A Tetris environment whose actions are the bot's Commands.

    Action Space:
    Discrete, one action per Command (NONE, MOVE_LEFT, ..., HARD_DROP). Each
    step goes through the same dispatcher the bot replays its plans with.

    Observation Space:
    - board: visible grid, 0 empty and 1-7 piece ids
    - active_piece_id / hold_piece_id: 0 for none, 1-7 otherwise
    - combo / b2b: situational counters

    Reward: lines cleared by the step, a small survival bonus, and a
    penalty when the step tops out.
    """
    metadata = {'render_modes': ['ansi'], 'render_fps': 30}

    ACTIONS = list(Command)
    SURVIVAL_REWARD = 0.01
    TOP_OUT_PENALTY = -10.0

    def __init__(self, width=10, height=20, hidden_rows=4, num_next_pieces=5, render_mode=None):
        super().__init__()

        self.board_width = width
        self.board_height = height
        self.hidden_rows = hidden_rows
        self.num_next_pieces = num_next_pieces
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(len(self.ACTIONS))
        self.observation_space = spaces.Dict({
            "board": spaces.Box(low=0, high=7, shape=(height, width), dtype=np.uint8),
            "active_piece_id": spaces.Discrete(8),
            "hold_piece_id": spaces.Discrete(8),
            "combo": spaces.Box(low=0, high=np.inf, shape=(1,), dtype=np.float32),
            "b2b": spaces.Box(low=0, high=np.inf, shape=(1,), dtype=np.float32),
        })

        self.game = self._new_game(None)

    def _new_game(self, seed) -> Game:
        return Game(self.board_width, self.board_height, self.hidden_rows,
                    self.num_next_pieces, seed=seed)

    @staticmethod
    def _get_piece_id(piece: Piece | None) -> int:
        if piece is None:
            return 0
        return Board.name_to_id(piece.name)

    def _get_observation(self):
        return {
            "board": self.game.board.get_board_state().astype(np.uint8),
            "active_piece_id": self._get_piece_id(self.game.active_piece),
            "hold_piece_id": self._get_piece_id(self.game.hold_piece),
            "combo": np.array([self.game.data.combo], dtype=np.float32),
            "b2b": np.array([self.game.data.b2b], dtype=np.float32),
        }

    def _get_info(self, legal=True):
        return {
            "legal": legal,
            "lines_cleared": self.game.lines_cleared_total,
            "pieces_placed": self.game.pieces_placed,
            "last_sent": self.game.data.last_sent,
        }

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        self.game = self._new_game(int(self.np_random.integers(0, 2**31 - 1)))
        return self._get_observation(), self._get_info()

    def step(self, action):
        if self.game.game_over:
            return self._get_observation(), 0.0, True, False, self._get_info(legal=False)

        command = self.ACTIONS[int(action)]
        pieces_before = self.game.pieces_placed
        legal = execute(self.game, command)

        reward = 0.0
        if self.game.pieces_placed > pieces_before:
            reward += float(self.game.data.last_cleared)

        terminated = self.game.game_over
        if terminated:
            reward += self.TOP_OUT_PENALTY
        else:
            reward += self.SURVIVAL_REWARD

        return self._get_observation(), reward, terminated, False, self._get_info(legal)

    def render(self):
        if self.render_mode == 'ansi':
            return str(self.game)
        return None
