# tetrabot - A heuristic Tetris placement bot
# game.py - The Game aggregate: board, active/held pieces, queue and the
# situational counters (combo, back-to-back, attack) the bot reads.

import copy
from dataclasses import dataclass

from .board import Board
from .pieces import Piece, PieceFactory, make_piece, NUM_ROTATE_STATES
from ..exceptions import GameOverException

# Lines sent for 1-4 line clears, before combo and back-to-back bonuses
ATTACK_TABLE = {0: 0, 1: 0, 2: 1, 3: 2, 4: 4}


@dataclass
class GameData:
    """Situational counters updated on every lock."""
    combo: int = 0
    b2b: int = 0
    last_sent: int = 0
    last_cleared: int = 0


class Game:
    """
    A single-player Tetris game with modern rules: 7-bag, SRS kicks,
    hold once per piece, combo and back-to-back tracking.

    Every mutator reports legality as a bool. The bot clones a Game with
    `clone()` to simulate commands without touching the live one.
    """

    def __init__(self, width: int = 10, height: int = 20, hidden_rows: int = 4,
                 num_next_pieces: int = 5, seed: int | None = None):
        self.board = Board(width, height, hidden_rows)
        self.piece_factory = PieceFactory(seed)
        self.num_next_pieces = num_next_pieces

        self.active_piece: Piece | None = None
        self.hold_piece: Piece | None = None
        self.can_hold = True  # Can only hold once per piece

        self.next_pieces_queue = []
        self._fill_next_pieces_queue()

        self.data = GameData()
        self.lines_cleared_total = 0
        self.pieces_placed = 0
        self.game_over = False

        self._spawn_new_piece()

    def _fill_next_pieces_queue(self):
        while len(self.next_pieces_queue) < self.num_next_pieces:
            self.next_pieces_queue.append(self.piece_factory.next_piece())

    def _spawn(self, piece: Piece) -> bool:
        self.active_piece = piece
        try:
            return self.board.spawn_piece(piece)
        except GameOverException:
            self.game_over = True
            return False

    def _spawn_new_piece(self) -> bool:
        piece = self.next_pieces_queue.pop(0)
        self._fill_next_pieces_queue()
        self.can_hold = True
        return self._spawn(piece)

    def set_active_piece(self, name: str) -> bool:
        """Replaces the active piece with a freshly spawned `name` piece."""
        self.can_hold = True
        return self._spawn(make_piece(name))

    def _can_act(self) -> bool:
        return self.active_piece is not None and not self.game_over

    # --- active piece mutators ---

    def active_left(self) -> bool:
        return self._can_act() and self.board.move_piece(self.active_piece, -1, 0)

    def active_right(self) -> bool:
        return self._can_act() and self.board.move_piece(self.active_piece, 1, 0)

    def active_drop(self) -> bool:
        """Soft drop: one row down."""
        return self._can_act() and self.board.move_piece(self.active_piece, 0, 1)

    def active_cw(self) -> bool:
        return self._can_act() and self.board.rotate_piece(self.active_piece, 1)

    def active_ccw(self) -> bool:
        return self._can_act() and self.board.rotate_piece(self.active_piece, -1)

    def active_180(self) -> bool:
        return self._can_act() and self.board.rotate_piece(self.active_piece, 2)

    def active_rotate_direction(self, direction: int) -> bool:
        """
        Rotates the active piece by `direction` clockwise quarter turns
        using the single matching rotation (CW, 180 or CCW).
        Direction 0 leaves the piece alone and always succeeds.
        """
        direction %= NUM_ROTATE_STATES
        if direction == 0:
            return self._can_act()
        if direction == 1:
            return self.active_cw()
        if direction == 2:
            return self.active_180()
        return self.active_ccw()

    def hold(self) -> bool:
        """Swaps the active piece with the held one (or the next piece on first hold)."""
        if not self._can_act() or not self.can_hold:
            return False

        held = self.active_piece
        held.reset_rotation()
        if self.hold_piece is None:
            self.hold_piece = held
            self._spawn_new_piece()
        else:
            self.hold_piece, incoming = held, self.hold_piece
            self._spawn(incoming)

        self.can_hold = False
        return True

    def hard_drop(self) -> bool:
        """
        Drops and locks the active piece, then spawns the next one.
        Returns False if no new piece could be spawned.
        """
        if not self._can_act():
            return False

        rest = self.board.drop_position(self.active_piece)
        lines_cleared = self.board.lock_piece(rest)
        self.active_piece = None
        self.pieces_placed += 1
        self._update_counters(lines_cleared)

        return self._spawn_new_piece()

    def _update_counters(self, lines_cleared: int):
        data = self.data
        data.last_cleared = lines_cleared
        if lines_cleared == 0:
            data.combo = 0
            data.last_sent = 0
            return

        self.lines_cleared_total += lines_cleared
        data.combo += 1
        if lines_cleared == 4:
            data.b2b += 1
        else:
            data.b2b = 0

        attack = ATTACK_TABLE.get(lines_cleared, 4) + max(0, data.combo - 1)
        if data.b2b > 1:
            attack += 1
        data.last_sent = attack

    # --- accessors ---

    def ret_active_piece_drop(self) -> Piece | None:
        """Resting placement of the active piece, without locking it."""
        if self.active_piece is None:
            return None
        return self.board.drop_position(self.active_piece)

    def clone(self) -> 'Game':
        return copy.deepcopy(self)

    def __str__(self):
        result = []
        hold_name = self.hold_piece.name if self.hold_piece else "-"
        next_names = "".join(p.name for p in self.next_pieces_queue)
        result.append(f"Hold: {hold_name}  Next: {next_names}")
        result.append(f"Lines: {self.lines_cleared_total}  Pieces: {self.pieces_placed}")
        result.append(f"Combo: {self.data.combo}  B2B: {self.data.b2b}  Sent: {self.data.last_sent}")
        result.extend(self.board.render_rows(self.active_piece))
        if self.game_over:
            result.append("--- GAME OVER ---")
        return "\n".join(result)
