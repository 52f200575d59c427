"""
Board logic for a fixed-size Tetris grid (10x20 by default).

The board is a 2D numpy array (height x width) of int8 values:
  - 0 = empty cell
  - 1-7 = id of the piece type that left the block (used for coloring)

Row 0 is the top of the board. There is no hidden buffer zone: a piece that
reaches above row 0 is simply out of bounds.
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from tetris_engine.game.pieces import Position


class Board:
    """Locked blocks, collision detection and line clearing.

    Attributes:
        width: Number of columns (default 10).
        height: Number of rows (default 20).
        grid: 2D numpy array of shape (height, width), dtype int8.
    """

    def __init__(
        self,
        width: int = 10,
        height: int = 20,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize an empty board.

        Args:
            width: Number of columns.
            height: Number of rows.
            logger: Logger for conflict diagnostics; defaults to this module's.
        """
        self.width = width
        self.height = height
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)
        self._log = logger or logging.getLogger(__name__)

    def has_conflict(self, positions: Iterable[Position]) -> bool:
        """Check whether any of the given cells is unavailable.

        A cell conflicts if it lies outside the board (0 <= col < width,
        0 <= row < height) or is already occupied by a locked block. This is
        the only legality test used for movement, rotation and game over.

        Args:
            positions: Candidate (col, row) cells.

        Returns:
            True if at least one cell conflicts, False otherwise.
        """
        for col, row in positions:
            if col < 0 or col >= self.width:
                self._log.debug("col is out of the board: %s", (col, row))
                return True
            if row < 0 or row >= self.height:
                self._log.debug("row is out of the board: %s", (col, row))
                return True
            if self.grid[row, col] != 0:
                self._log.debug(
                    "board has a block at %s (id %d)", (col, row), self.grid[row, col]
                )
                return True
        return False

    def lock(self, positions: Iterable[Position], piece_id: int) -> None:
        """Write a piece's blocks onto the board.

        The caller must have checked the positions with has_conflict first;
        locking into an occupied cell is a programming error.

        Args:
            positions: The (col, row) cells of the piece.
            piece_id: Block id to store (the piece type's value).
        """
        for col, row in positions:
            assert self.grid[row, col] == 0, f"cell {(col, row)} is already occupied"
            self.grid[row, col] = piece_id

    def clear_completed_lines(self) -> int:
        """Remove all fully filled rows and shift everything above them down.

        Rows are judged on the board as it is before any shifting, so a row
        that moves down never gets counted twice.

        Returns:
            The number of lines cleared.
        """
        full_rows = np.all(self.grid != 0, axis=1)
        lines_cleared = int(full_rows.sum())
        if lines_cleared == 0:
            return 0

        remaining = self.grid[~full_rows]
        empty_rows = np.zeros((lines_cleared, self.width), dtype=np.int8)
        self.grid = np.vstack([empty_rows, remaining])
        return lines_cleared

    def get_grid(self) -> np.ndarray:
        """Return a copy of the board grid.

        Returns:
            A numpy array of shape (height, width), dtype int8.
        """
        return self.grid.copy()

    def reset(self) -> None:
        """Clear the entire board, setting all cells to 0."""
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)
