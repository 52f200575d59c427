"""Shared fixtures: games with a scripted piece supply."""

from __future__ import annotations

import pytest

from tetris_engine.game.pieces import PieceType
from tetris_engine.game.tetris import TetrisGame


class ScriptedRandom:
    """Stands in for random.Random: deals piece types in a fixed order."""

    def __init__(self, types):
        self.types = list(types)

    def choice(self, seq):
        if self.types:
            return self.types.pop(0)
        return seq[-1]

    def shuffle(self, seq):
        pass


@pytest.fixture
def make_game():
    """Build a 10x20 game whose pieces come out in the given order."""
    def _make(*types: PieceType, **kwargs) -> TetrisGame:
        return TetrisGame(rng=ScriptedRandom(types), **kwargs)
    return _make


@pytest.fixture
def t_game(make_game):
    """A game that starts with a T-piece and then deals O-pieces."""
    return make_game(PieceType.T, PieceType.O, PieceType.O, PieceType.O)
