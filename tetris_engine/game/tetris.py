"""
Game orchestrator: the state machine behind a single game session.

This module ties the Board and the Tetromino definitions into a game that
advances one Command at a time: gravity ticks move the active piece down
and lock it when it rests, player commands shift or rotate it when the
target cells are free, and completed lines are cleared for one point each.
"""

from __future__ import annotations

import collections
import dataclasses
import enum
import logging
import random

import numpy as np

from tetris_engine.game.board import Board
from tetris_engine.game.pieces import (
    PIECE_TYPES,
    Direction,
    PieceType,
    Position,
    Tetromino,
)


class Command(enum.Enum):
    """Everything the engine can be asked to do."""
    ROTATE = "rotate"
    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"
    TICK = "tick"
    IGNORED = "ignored"


class GameState(enum.Enum):
    RUNNING = "running"
    OVER = "over"


class TickResult(enum.Enum):
    """Outcome of a gravity tick."""
    CONTINUE = "continue"
    GAME_OVER = "game_over"


# Movement commands -> translation direction
MOVE_DIRECTIONS: dict[Command, Direction] = {
    Command.LEFT: Direction.LEFT,
    Command.RIGHT: Direction.RIGHT,
    Command.DOWN: Direction.DOWN,
}

RANDOMIZERS = ("uniform", "bag")

# Number of piece types kept in the supply queue
SUPPLY_SIZE = 3


@dataclasses.dataclass(frozen=True)
class Snapshot:
    """Read-only view of a game for renderers.

    Attributes:
        grid: Copy of the locked blocks, shape (height, width), 0 = empty.
        piece_cells: Absolute (col, row) cells of the active piece.
        piece_id: Block id of the active piece (its PieceType value).
        piece_color: RGB color of the active piece.
        score: Lines cleared so far.
        state: RUNNING or OVER.
    """
    grid: np.ndarray
    piece_cells: tuple[Position, ...]
    piece_id: int
    piece_color: tuple[int, int, int]
    score: int
    state: GameState

    @property
    def height(self) -> int:
        return self.grid.shape[0]

    @property
    def width(self) -> int:
        return self.grid.shape[1]

    def cell_id(self, col: int, row: int) -> int:
        """Return the block id shown at (col, row), active piece included."""
        if (col, row) in self.piece_cells:
            return self.piece_id
        return int(self.grid[row, col])


class TetrisGame:
    """One game session: board, active piece, supply queue and score.

    Attributes:
        board: The game board.
        score: Lines cleared since the game started.
        state: RUNNING until a lock sequence finds no room, then OVER.
        current_piece: The falling Tetromino.
        supply: Upcoming piece types; never empty.
    """

    def __init__(
        self,
        board_width: int = 10,
        board_height: int = 20,
        rng: random.Random | None = None,
        randomizer: str = "uniform",
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize a new game and spawn the first piece.

        Args:
            board_width: Board width in columns.
            board_height: Board height in rows.
            rng: Random source for the piece supply; a fresh unseeded
                ``random.Random`` when omitted.
            randomizer: "uniform" draws every piece independently, "bag"
                deals the seven types in shuffled batches of seven.
            logger: Logger for engine events; defaults to this module's.

        Raises:
            ValueError: If the randomizer name is unknown.
        """
        if randomizer not in RANDOMIZERS:
            raise ValueError(
                f"Unknown randomizer {randomizer!r}, expected one of {RANDOMIZERS}"
            )
        self._log = logger or logging.getLogger(__name__)
        self._rng = rng or random.Random()
        self._randomizer = randomizer
        self._bag: list[PieceType] = []

        self.board = Board(board_width, board_height, logger=self._log)
        self.score: int = 0
        self.state: GameState = GameState.RUNNING
        self.supply: collections.deque[PieceType] = collections.deque()
        for _ in range(SUPPLY_SIZE):
            self._supply_piece()
        self.current_piece: Tetromino = self._next_piece()

    @property
    def game_over(self) -> bool:
        return self.state is GameState.OVER

    def process(self, command: Command) -> TickResult:
        """Apply one command from the arbiter queue.

        TICK goes to apply_tick, movement and rotation to apply_move.
        Once the game is over nothing is processed any more.

        Args:
            command: Any command except IGNORED.

        Returns:
            GAME_OVER if the game has ended, CONTINUE otherwise.
        """
        if self.game_over:
            self._log.debug("game is over, dropping %s", command)
            return TickResult.GAME_OVER
        if command is Command.TICK:
            return self.apply_tick()
        self.apply_move(command)
        return TickResult.CONTINUE

    def apply_tick(self) -> TickResult:
        """Advance gravity by one step.

        Moves the active piece down one row if it can. Otherwise the piece is
        resting and the lock sequence runs: game-over check, lock, line clear,
        spawn of the next piece.

        Returns:
            CONTINUE, or GAME_OVER if the resting piece itself overlaps the
            board (there was never room for it).
        """
        piece = self.current_piece
        if not self.board.has_conflict(piece.translated_positions(Direction.DOWN)):
            piece.translate(Direction.DOWN)
            return TickResult.CONTINUE

        self._log.debug("cannot move %s down, locking", piece)
        return self._lock_sequence()

    def apply_move(self, command: Command) -> bool:
        """Try to shift or rotate the active piece.

        A blocked move is dropped silently; there are no wall kicks.

        Args:
            command: LEFT, RIGHT, DOWN or ROTATE.

        Returns:
            True if the piece moved, False if the move was blocked.

        Raises:
            ValueError: For TICK or IGNORED, which never reach this method.
        """
        piece = self.current_piece
        if command is Command.ROTATE:
            candidates = piece.absolute_positions(piece.next_rotation_state())
            if self.board.has_conflict(candidates):
                return False
            piece.rotate()
            return True

        direction = MOVE_DIRECTIONS.get(command)
        if direction is None:
            raise ValueError(f"{command} is not a movement command")
        if self.board.has_conflict(piece.translated_positions(direction)):
            return False
        piece.translate(direction)
        return True

    def snapshot(self) -> Snapshot:
        """Return a read-only view of the board and the active piece."""
        piece = self.current_piece
        return Snapshot(
            grid=self.board.get_grid(),
            piece_cells=tuple(piece.absolute_positions()),
            piece_id=piece.piece_id,
            piece_color=piece.color,
            score=self.score,
            state=self.state,
        )

    def _lock_sequence(self) -> TickResult:
        """Lock the resting piece, clear lines and spawn the next piece.

        Returns:
            GAME_OVER if the piece cannot be placed where it stands,
            CONTINUE otherwise.
        """
        piece = self.current_piece
        positions = piece.absolute_positions()
        if self.board.has_conflict(positions):
            self._log.info("no room for %s, game over (score %d)", piece, self.score)
            self.state = GameState.OVER
            return TickResult.GAME_OVER

        self.board.lock(positions, piece.piece_id)
        lines = self.board.clear_completed_lines()
        if lines:
            self._log.debug("cleared %d line(s)", lines)
        self.score += lines
        self.current_piece = self._next_piece()
        self._log.debug("spawned %s", self.current_piece)
        return TickResult.CONTINUE

    def _next_piece(self) -> Tetromino:
        """Take the next type off the supply queue and spawn it."""
        piece_type = self.supply.popleft()
        self._supply_piece()
        return Tetromino.spawn(piece_type)

    def _supply_piece(self) -> None:
        """Append one piece type to the supply queue."""
        if self._randomizer == "bag":
            self.supply.append(self._next_from_bag())
        else:
            self.supply.append(self._rng.choice(PIECE_TYPES))

    def _fill_bag(self) -> None:
        """Refill the 7-bag with a shuffled copy of all 7 piece types."""
        bag = list(PIECE_TYPES)
        self._rng.shuffle(bag)
        self._bag = bag

    def _next_from_bag(self) -> PieceType:
        if not self._bag:
            self._fill_bag()
        return self._bag.pop()
