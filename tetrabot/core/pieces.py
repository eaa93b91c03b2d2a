# tetrabot - A heuristic Tetris placement bot
# pieces.py - Defines Tetrominoes, rotations (SRS), kick tables and piece generation

import copy
import random

NUM_ROTATE_STATES = 4


class Piece:
    """
    A tetromino with a pose on the board.
    (x, y) is the top-left corner of the current rotation matrix in grid
    coordinates; rows grow downwards.
    """
    def __init__(self, shape_name: str, rotations: list[list[list[int]]]):
        self.name = shape_name
        self.rotations = rotations  # NUM_ROTATE_STATES matrices, spawn orientation first
        self.rotation_state = 0
        self.shape = rotations[0]
        self.x = 0
        self.y = 0

    def rotate(self, direction: int):
        """
        Turns the matrix by `direction` clockwise quarter turns, no collision checks.
        1 is clockwise, -1 counter-clockwise, 2 a half turn.
        """
        self.rotation_state = (self.rotation_state + direction) % NUM_ROTATE_STATES
        self.shape = self.rotations[self.rotation_state]

    def reset_rotation(self):
        self.rotation_state = 0
        self.shape = self.rotations[0]

    def get_block_positions(self) -> list[tuple[int, int]]:
        """Grid (row, col) of each block at the current pose."""
        return [(self.y + r, self.x + c)
                for r, cells in enumerate(self.shape)
                for c, cell in enumerate(cells) if cell]

    def get_bounding_box_size(self) -> tuple[int, int]:
        return len(self.shape), len(self.shape[0])

    def copy(self) -> 'Piece':
        # Rotation matrices are shared module data, only the pose is copied.
        return copy.copy(self)

    def __deepcopy__(self, memo):
        return self.copy()

    def pose(self) -> tuple[int, int, int]:
        return self.x, self.y, self.rotation_state

    def __eq__(self, other):
        if not isinstance(other, Piece):
            return False
        return self.name == other.name and self.pose() == other.pose()

    def __hash__(self):
        return hash((self.name, self.x, self.y, self.rotation_state))

    def __repr__(self):
        return f"Piece({self.name}, x={self.x}, y={self.y}, r={self.rotation_state})"


# SRS rotation matrices per tetromino, spawn orientation first (1 = block).
TETROMINOES = {
    'I': [
        [[0,0,0,0], [1,1,1,1], [0,0,0,0], [0,0,0,0]],
        [[0,0,1,0], [0,0,1,0], [0,0,1,0], [0,0,1,0]],
        [[0,0,0,0], [0,0,0,0], [1,1,1,1], [0,0,0,0]],
        [[0,1,0,0], [0,1,0,0], [0,1,0,0], [0,1,0,0]],
    ],
    'O': [
        [[1,1], [1,1]],
        [[1,1], [1,1]],
        [[1,1], [1,1]],
        [[1,1], [1,1]],
    ],
    'T': [
        [[0,1,0], [1,1,1], [0,0,0]],
        [[0,1,0], [0,1,1], [0,1,0]],
        [[0,0,0], [1,1,1], [0,1,0]],
        [[0,1,0], [1,1,0], [0,1,0]],
    ],
    'S': [
        [[0,1,1], [1,1,0], [0,0,0]],
        [[0,1,0], [0,1,1], [0,0,1]],
        [[0,0,0], [0,1,1], [1,1,0]],
        [[1,0,0], [1,1,0], [0,1,0]],
    ],
    'Z': [
        [[1,1,0], [0,1,1], [0,0,0]],
        [[0,0,1], [0,1,1], [0,1,0]],
        [[0,0,0], [1,1,0], [0,1,1]],
        [[0,1,0], [1,1,0], [1,0,0]],
    ],
    'J': [
        [[1,0,0], [1,1,1], [0,0,0]],
        [[0,1,1], [0,1,0], [0,1,0]],
        [[0,0,0], [1,1,1], [0,0,1]],
        [[0,1,0], [0,1,0], [1,1,0]],
    ],
    'L': [
        [[0,0,1], [1,1,1], [0,0,0]],
        [[0,1,0], [0,1,0], [0,1,1]],
        [[0,0,0], [1,1,1], [1,0,0]],
        [[1,1,0], [0,1,0], [0,1,0]],
    ],
}

PIECE_NAMES = list(TETROMINOES.keys())

# SRS kick offsets per (from_state, to_state), see tetris.wiki/Super_Rotation_System
# (offset_col, offset_row) with positive rows pointing up.
JLSTZ_WALL_KICKS = {
    (0, 1): [(0,0), (-1,0), (-1,+1), (0,-2), (-1,-2)],
    (1, 0): [(0,0), (+1,0), (+1,-1), (0,+2), (+1,+2)],
    (1, 2): [(0,0), (+1,0), (+1,-1), (0,+2), (+1,+2)],
    (2, 1): [(0,0), (-1,0), (-1,+1), (0,-2), (-1,-2)],
    (2, 3): [(0,0), (+1,0), (+1,+1), (0,-2), (+1,-2)],
    (3, 2): [(0,0), (-1,0), (-1,-1), (0,+2), (-1,+2)],
    (3, 0): [(0,0), (-1,0), (-1,-1), (0,+2), (-1,+2)],
    (0, 3): [(0,0), (+1,0), (+1,+1), (0,-2), (+1,-2)],
}

I_WALL_KICKS = {
    (0, 1): [(0,0), (-2,0), (+1,0), (-2,-1), (+1,+2)],
    (1, 0): [(0,0), (+2,0), (-1,0), (+2,+1), (-1,-2)],
    (1, 2): [(0,0), (-1,0), (+2,0), (-1,+2), (+2,-1)],
    (2, 1): [(0,0), (+1,0), (-2,0), (+1,-2), (-2,+1)],
    (2, 3): [(0,0), (+2,0), (-1,0), (+2,+1), (-1,-2)],
    (3, 2): [(0,0), (-2,0), (+1,0), (-2,-1), (+1,+2)],
    (3, 0): [(0,0), (+1,0), (-2,0), (+1,-2), (-2,+1)],
    (0, 3): [(0,0), (-1,0), (+2,0), (-1,+2), (+2,-1)],
}

# Half turn kicks, shared by every piece but O.
HALF_TURN_KICKS = {
    (0, 2): [(0,0), (0,+1), (+1,+1), (-1,+1), (+1,0), (-1,0)],
    (2, 0): [(0,0), (0,-1), (-1,-1), (+1,-1), (-1,0), (+1,0)],
    (1, 3): [(0,0), (+1,0), (+1,+2), (+1,+1), (0,+2), (0,+1)],
    (3, 1): [(0,0), (-1,0), (-1,+2), (-1,+1), (0,+2), (0,+1)],
}


def get_wall_kicks(name: str, from_state: int, to_state: int) -> list[tuple[int, int]]:
    """Kick offsets to try, in order, for a rotation between two states."""
    if name == 'O':
        return [(0, 0)]
    key = (from_state, to_state)
    if key in HALF_TURN_KICKS:
        return HALF_TURN_KICKS[key]
    table = I_WALL_KICKS if name == 'I' else JLSTZ_WALL_KICKS
    return table.get(key, [(0, 0)])


def make_piece(name: str) -> Piece:
    return Piece(name, TETROMINOES[name])


class PieceFactory:
    """
    7-bag randomizer: every run of seven pieces holds each shape once.
    """
    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)
        self.bag = []
        self._refill_bag()

    def _refill_bag(self):
        self.bag = list(PIECE_NAMES)
        self.rng.shuffle(self.bag)

    def next_piece(self) -> Piece:
        if not self.bag:
            self._refill_bag()
        return make_piece(self.bag.pop(0))
