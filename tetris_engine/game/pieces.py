"""
Tetromino definitions: per-rotation cell offsets, colors, and spawn anchors.

Every piece is described relative to an anchor cell (its "center"). For each
of the four rotation states the table lists the four (dcol, drow) offsets of
the piece's blocks from that anchor. The tables are looked up, never derived
by rotating a matrix: the pivot of each piece is irregular (the O-piece never
moves, the I-piece flips around a fixed cell), and only the tables reproduce
that behaviour.

Coordinate convention:
  - Positions are (col, row) pairs.
  - On the board, row 0 is the top and row increases downward.
  - Column 0 is the left edge and column increases rightward.

Diagrams below use ``c`` for the anchor and 0/2/3 for the remaining blocks,
in the order they appear in the offset tables.
"""

from __future__ import annotations

import enum

Position = tuple[int, int]


class PieceType(enum.IntEnum):
    """The seven tetrominoes. The value doubles as the block id on the board."""
    I = 1
    O = 2
    S = 3
    Z = 4
    J = 5
    L = 6
    T = 7


class RotationState(enum.IntEnum):
    """Orientation of a piece, cycling UP -> RIGHT -> DOWN -> LEFT -> UP."""
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


class Direction(enum.Enum):
    """Translation directions with their (dcol, drow) deltas."""
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    DOWN = (0, 1)


# =============================================================================
# Piece Colors (RGB)
# =============================================================================

COLOR_LIGHT_BLUE = (102, 224, 255)  # I
COLOR_YELLOW     = (255, 224, 0)    # O
COLOR_GREEN      = (0, 200, 0)      # S
COLOR_RED        = (220, 0, 0)      # Z
COLOR_BLUE       = (0, 0, 255)      # J
COLOR_ORANGE     = (255, 165, 0)    # L
COLOR_PURPLE     = (128, 0, 128)    # T

# =============================================================================
# Tetromino Definitions
# =============================================================================
# Rotation order: [UP, RIGHT, DOWN, LEFT]
# "spawn" is the anchor (col, row) a freshly drawn piece starts at, facing UP.

I_PIECE: dict = {
    "name": "I",
    "color": COLOR_LIGHT_BLUE,
    "spawn": (4, 1),
    #   0    0 c 2 3    3    3 2 c 0
    #   c               2
    #   2               c
    #   3               0
    "rotations": (
        ((0, -1), (0, 0), (0, 1), (0, 2)),
        ((-1, 0), (0, 0), (1, 0), (2, 0)),
        ((0, 1), (0, 0), (0, -1), (0, -2)),
        ((1, 0), (0, 0), (-1, 0), (-2, 0)),
    ),
}

O_PIECE: dict = {
    "name": "O",
    "color": COLOR_YELLOW,
    "spawn": (5, 0),
    #   0 c
    #   3 2
    # All four rotation states are identical.
    "rotations": (
        ((-1, 0), (0, 0), (0, 1), (-1, 1)),
        ((-1, 0), (0, 0), (0, 1), (-1, 1)),
        ((-1, 0), (0, 0), (0, 1), (-1, 1)),
        ((-1, 0), (0, 0), (0, 1), (-1, 1)),
    ),
}

S_PIECE: dict = {
    "name": "S",
    "color": COLOR_GREEN,
    "spawn": (4, 0),
    #     c 0     3
    #   3 2       2 c
    #               0
    "rotations": (
        ((1, 0), (0, 0), (0, 1), (-1, 1)),
        ((0, 1), (0, 0), (-1, 0), (-1, -1)),
        ((1, 0), (0, 0), (0, 1), (-1, 1)),
        ((0, 1), (0, 0), (-1, 0), (-1, -1)),
    ),
}

Z_PIECE: dict = {
    "name": "Z",
    "color": COLOR_RED,
    "spawn": (4, 0),
    #   0 c       0
    #     2 3   2 c
    #           3
    "rotations": (
        ((-1, 0), (0, 0), (0, 1), (1, 1)),
        ((0, -1), (0, 0), (-1, 0), (-1, 1)),
        ((-1, 0), (0, 0), (0, 1), (1, 1)),
        ((0, -1), (0, 0), (-1, 0), (-1, 1)),
    ),
}

J_PIECE: dict = {
    "name": "J",
    "color": COLOR_BLUE,
    "spawn": (5, 1),
    #     0   3       2 3   0 c 2
    #     c   2 c 0   c         3
    #   3 2           0
    "rotations": (
        ((0, -1), (0, 0), (0, 1), (-1, 1)),
        ((1, 0), (0, 0), (-1, 0), (-1, -1)),
        ((0, 1), (0, 0), (0, -1), (1, -1)),
        ((-1, 0), (0, 0), (1, 0), (1, 1)),
    ),
}

L_PIECE: dict = {
    "name": "L",
    "color": COLOR_ORANGE,
    "spawn": (4, 1),
    #   0     2 c 0   3 2       3
    #   c     3         c   0 c 2
    #   2 3             0
    "rotations": (
        ((0, -1), (0, 0), (0, 1), (1, 1)),
        ((1, 0), (0, 0), (-1, 0), (-1, 1)),
        ((0, 1), (0, 0), (0, -1), (-1, -1)),
        ((-1, 0), (0, 0), (1, 0), (1, -1)),
    ),
}

T_PIECE: dict = {
    "name": "T",
    "color": COLOR_PURPLE,
    "spawn": (4, 1),
    #     3     0               2
    #   0 c 2   c 3   2 c 0   3 c
    #           2       3       0
    "rotations": (
        ((-1, 0), (0, 0), (1, 0), (0, -1)),
        ((0, -1), (0, 0), (0, 1), (1, 0)),
        ((1, 0), (0, 0), (-1, 0), (0, 1)),
        ((0, 1), (0, 0), (0, -1), (-1, 0)),
    ),
}

PIECE_DEFS: dict[PieceType, dict] = {
    PieceType.I: I_PIECE,
    PieceType.O: O_PIECE,
    PieceType.S: S_PIECE,
    PieceType.Z: Z_PIECE,
    PieceType.J: J_PIECE,
    PieceType.L: L_PIECE,
    PieceType.T: T_PIECE,
}

# Ordered list of all piece types
PIECE_TYPES: list[PieceType] = list(PieceType)


def get_offsets(piece_type: PieceType, rotation: RotationState) -> tuple[Position, ...]:
    """Return the four (dcol, drow) offsets of a piece type in a rotation state."""
    return PIECE_DEFS[piece_type]["rotations"][rotation]


class Tetromino:
    """The active, falling piece.

    Holds only a type, a rotation state and the anchor cell. Movement and
    rotation do not check the board; callers test the candidate positions
    with ``Board.has_conflict`` first.

    Attributes:
        piece_type: Which of the seven tetrominoes this is.
        rotation: Current rotation state.
        col: Anchor column.
        row: Anchor row.
    """

    def __init__(
        self,
        piece_type: PieceType,
        rotation: RotationState = RotationState.UP,
        col: int | None = None,
        row: int | None = None,
    ) -> None:
        spawn_col, spawn_row = PIECE_DEFS[piece_type]["spawn"]
        self.piece_type = piece_type
        self.rotation = rotation
        self.col = spawn_col if col is None else col
        self.row = spawn_row if row is None else row

    @classmethod
    def spawn(cls, piece_type: PieceType) -> Tetromino:
        """Create a piece of the given type at its spawn anchor, facing UP."""
        return cls(piece_type, RotationState.UP)

    @property
    def color(self) -> tuple[int, int, int]:
        return PIECE_DEFS[self.piece_type]["color"]

    @property
    def piece_id(self) -> int:
        return int(self.piece_type)

    def absolute_positions(self, rotation: RotationState | None = None) -> list[Position]:
        """Return the board cells covered by this piece.

        Args:
            rotation: Rotation state to evaluate; defaults to the current one.

        Returns:
            List of four (col, row) positions.
        """
        if rotation is None:
            rotation = self.rotation
        return [
            (self.col + dcol, self.row + drow)
            for dcol, drow in get_offsets(self.piece_type, rotation)
        ]

    def translated_positions(self, direction: Direction) -> list[Position]:
        """Return the cells this piece would cover after ``translate(direction)``."""
        dcol, drow = direction.value
        return [(col + dcol, row + drow) for col, row in self.absolute_positions()]

    def translate(self, direction: Direction) -> None:
        dcol, drow = direction.value
        self.col += dcol
        self.row += drow

    def next_rotation_state(self) -> RotationState:
        return RotationState((self.rotation + 1) % 4)

    def rotate(self) -> None:
        self.rotation = self.next_rotation_state()

    def __repr__(self) -> str:
        return (
            f"Tetromino({self.piece_type.name}, {self.rotation.name}, "
            f"col={self.col}, row={self.row})"
        )
