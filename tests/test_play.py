"""End-to-end sessions: arbiter threads feeding the game loop."""

from __future__ import annotations

from tetris_engine.arbiter import CommandArbiter
from tetris_engine.game.tetris import Command, GameState
from tetris_engine.play import build_game, play, run_session


class RecordingRenderer:
    def __init__(self):
        self.snapshots = []
        self.closed = False

    def render(self, snapshot):
        self.snapshots.append(snapshot)

    def close(self):
        self.closed = True


class EmptySource:
    def __init__(self):
        self.closed = False

    def retrieve(self):
        return None

    def close(self):
        self.closed = True


def test_session_ends_on_game_over(t_game):
    t_game.board.grid[1:, :9] = 1
    source = EmptySource()
    arbiter = CommandArbiter(source=source, tick_interval=0.01)
    arbiter.submit(Command.LEFT)
    recorder = RecordingRenderer()

    score = run_session(t_game, arbiter, [recorder])

    assert score == 0
    assert t_game.state is GameState.OVER
    assert arbiter.stopped
    assert source.closed
    # Initial view, the LEFT, then the game-ending TICK
    assert len(recorder.snapshots) == 3
    assert recorder.snapshots[0].state is GameState.RUNNING
    assert recorder.snapshots[-1].state is GameState.OVER


def test_play_runs_a_whole_game():
    recorder = RecordingRenderer()
    config = {"tick_interval_ms": 1, "seed": 11, "board_height": 8}

    score = play(config, source=EmptySource(), renderers=[recorder])

    # Pieces fall straight down the middle, so no line is ever completed
    assert score == 0
    assert recorder.closed
    assert recorder.snapshots[-1].state is GameState.OVER
    assert recorder.snapshots[-1].grid.shape == (8, 10)


def test_build_game_from_config():
    game = build_game({"board_width": 12, "board_height": 22, "seed": 5, "randomizer": "bag"})
    assert game.board.grid.shape == (22, 12)
    again = build_game({"seed": 5, "randomizer": "bag"})
    assert game.current_piece.piece_type == again.current_piece.piece_type
