"""Game logic: pieces, board, and game orchestrator."""

from tetris_engine.game.pieces import (
    PIECE_DEFS,
    PIECE_TYPES,
    Direction,
    PieceType,
    RotationState,
    Tetromino,
)
from tetris_engine.game.board import Board
from tetris_engine.game.tetris import Command, GameState, Snapshot, TetrisGame, TickResult

__all__ = [
    "PIECE_DEFS",
    "PIECE_TYPES",
    "Direction",
    "PieceType",
    "RotationState",
    "Tetromino",
    "Board",
    "Command",
    "GameState",
    "Snapshot",
    "TetrisGame",
    "TickResult",
]
