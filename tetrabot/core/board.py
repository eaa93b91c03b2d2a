# tetrabot - A heuristic Tetris placement bot
# board.py - Playfield grid: collisions, spawning, kicked rotations, locking
# and the structural features read by the evaluator.

import numpy as np
from .pieces import Piece, PIECE_NAMES, get_wall_kicks
from ..exceptions import GameOverException


class Board:
    """
    The playfield.
    `grid` is a (hidden_rows + height, width) numpy array holding 0 for empty
    cells and the 1-7 id of the piece that locked there. Row 0 is the top of
    the hidden spawn buffer; the visible playfield is the bottom `height` rows.
    """
    def __init__(self, width: int = 10, height: int = 20, hidden_rows: int = 4):
        self.width = width
        self.height = height  # Visible rows
        self.hidden_rows = hidden_rows
        self.total_height = height + hidden_rows

        self.grid = np.zeros((self.total_height, width), dtype=int)

        self.spawn_pos_y = max(0, hidden_rows - 2)

    def is_valid_position(self, piece: Piece, offset_x: int = 0, offset_y: int = 0) -> bool:
        """True if every block of `piece`, shifted by the offset, is in bounds and on an empty cell."""
        for row, col in piece.get_block_positions():
            row += offset_y
            col += offset_x
            if not (0 <= col < self.width and 0 <= row < self.total_height):
                return False
            if self.grid[row, col]:
                return False
        return True

    def _place_at_spawn(self, piece: Piece) -> bool:
        # I and O are centred on their own widths, the rest on a 3-wide box
        if piece.name == 'I':
            piece.x = self.width // 2 - 2
        elif piece.name == 'O':
            piece.x = self.width // 2 - 1
        else:
            piece.x = self.width // 2 - piece.get_bounding_box_size()[1] // 2
        piece.y = self.spawn_pos_y

        # Up to two rows of upward nudge before a block out
        for dy in (0, -1, -2):
            if self.is_valid_position(piece, offset_y=dy):
                piece.y += dy
                return True
        return False

    def spawn_piece(self, piece: Piece) -> bool:
        """
        Puts `piece` in spawn orientation at the spawn location.
        Raises GameOverException if the spawn area is blocked.
        """
        piece.reset_rotation()

        if not self._place_at_spawn(piece):
            raise GameOverException(f"Cannot spawn {piece.name}: spawn area blocked")
        return True

    def move_piece(self, piece: Piece, dx: int, dy: int) -> bool:
        """Shifts the piece by (dx, dy) unless that collides. Returns whether it moved."""
        if not self.is_valid_position(piece, offset_x=dx, offset_y=dy):
            return False
        piece.x += dx
        piece.y += dy
        return True

    def rotate_piece(self, piece: Piece, direction: int) -> bool:
        """
        Rotates the piece by `direction` quarter turns (1 CW, -1 CCW, 2 half turn),
        trying each kick offset in order.
        On failure the piece keeps its previous pose and False is returned.
        """
        start_state = piece.rotation_state

        piece.rotate(direction)
        for kick_dx, kick_dy in get_wall_kicks(piece.name, start_state, piece.rotation_state):
            # Kick tables count y upwards, grid rows grow downwards
            if self.is_valid_position(piece, offset_x=kick_dx, offset_y=-kick_dy):
                piece.x += kick_dx
                piece.y -= kick_dy
                return True

        piece.rotate(start_state - piece.rotation_state)
        return False

    def drop_position(self, piece: Piece) -> Piece:
        """Returns a copy of the piece moved down to where it would rest."""
        ghost = piece.copy()
        while self.is_valid_position(ghost, offset_y=1):
            ghost.y += 1
        return ghost

    def lock_piece(self, piece: Piece) -> int:
        """Stamps the piece's id into the grid, then clears full rows. Returns rows cleared."""
        piece_id = self.name_to_id(piece.name)
        for row, col in piece.get_block_positions():
            if 0 <= row < self.total_height and 0 <= col < self.width:
                self.grid[row, col] = piece_id

        return self._clear_lines()

    def _clear_lines(self) -> int:
        full = np.all(self.grid != 0, axis=1)
        lines_cleared = int(full.sum())

        if lines_cleared:
            # Surviving rows keep their order and sink to the bottom
            self.grid = np.vstack((np.zeros((lines_cleared, self.width), dtype=int), self.grid[~full]))

        return lines_cleared

    def copy(self) -> 'Board':
        board = Board.__new__(Board)
        board.__dict__.update(self.__dict__)
        board.grid = self.grid.copy()
        return board

    def with_piece(self, piece: Piece) -> 'Board':
        """Returns a copy of the board with the piece locked and lines cleared."""
        board = self.copy()
        board.lock_piece(piece)
        return board

    # --- structural features ---

    def get_column_heights(self) -> np.ndarray:
        filled = self.grid != 0
        first = filled.argmax(axis=0)
        return np.where(filled.any(axis=0), self.total_height - first, 0)

    def get_max_height(self) -> int:
        return int(self.get_column_heights().max())

    def get_adjacent_height_differences(self) -> list[int]:
        """Absolute height difference of each neighbouring column pair, left to right."""
        return np.abs(np.diff(self.get_column_heights())).tolist()

    def get_max_height_difference(self) -> int:
        heights = self.get_column_heights()
        return int(heights.max() - heights.min())

    def holes_cell_covered(self) -> tuple[int, int, int]:
        """
        Returns (holes, weighted_holes, covered_cells).

        A hole is an empty cell with at least one filled cell above it in its
        column. Each hole weighs as many points as there are filled cells above
        it. Covered cells are the filled cells sitting above a hole.
        """
        filled = self.grid != 0
        filled_above = np.cumsum(filled, axis=0)
        holes = ~filled & (filled_above > 0)
        holes_below = np.cumsum(holes[::-1], axis=0)[::-1]

        holes_total = int(holes.sum())
        holes_weighted = int(filled_above[holes].sum())
        covered = int((filled & (holes_below > 0)).sum())
        return holes_total, holes_weighted, covered

    def get_board_state(self, include_hidden_rows=False) -> np.ndarray:
        """A copy of the grid, visible rows only unless `include_hidden_rows`."""
        start = 0 if include_hidden_rows else self.hidden_rows
        return self.grid[start:].copy()

    @staticmethod
    def name_to_id(name: str) -> int:
        return PIECE_NAMES.index(name) + 1

    def render_rows(self, piece: Piece | None = None) -> list[str]:
        cells = [["█" if v else "·" for v in row] for row in self.grid[self.hidden_rows:]]
        if piece is not None:
            for r, c in piece.get_block_positions():
                r -= self.hidden_rows
                if 0 <= r < self.height and 0 <= c < self.width:
                    cells[r][c] = "○"
        return ["".join(row) for row in cells]

    def __str__(self):
        return "\n".join(self.render_rows())

    def __repr__(self):
        return f"Board(width={self.width}, height={self.height}, max_height={self.get_max_height()})"
