"""
Session runner: wires a game, the command arbiter and renderers together.

The loop runs on the calling thread and is the only code that touches the
game. It blocks for the next command, applies it, pushes a fresh snapshot
to every renderer and stops the producers once the game is over.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Iterable

from tetris_engine.arbiter import CommandArbiter
from tetris_engine.commands import CommandSource, StdinCommandSource
from tetris_engine.game.tetris import TetrisGame, TickResult
from tetris_engine.renderer import Renderer, create_renderer

logger = logging.getLogger(__name__)


def build_game(config: dict[str, Any], log: logging.Logger | None = None) -> TetrisGame:
    """Create a TetrisGame from config keys.

    Args:
        config: Config dict loaded from engine.yaml.
        log: Logger handed to the game; defaults to the engine's own.
    """
    return TetrisGame(
        board_width=config.get("board_width", 10),
        board_height=config.get("board_height", 20),
        rng=random.Random(config.get("seed")),
        randomizer=config.get("randomizer", "uniform"),
        logger=log,
    )


def run_session(
    game: TetrisGame,
    arbiter: CommandArbiter,
    renderers: Iterable[Renderer] = (),
    log: logging.Logger | None = None,
) -> int:
    """Consume commands until the game is over.

    Args:
        game: A fresh game.
        arbiter: An arbiter that has not been started yet.
        renderers: Receive a snapshot at start and after every command.
        log: Logger for the loop; defaults to this module's.

    Returns:
        The final score.
    """
    log = log or logger
    renderers = list(renderers)

    def refresh_view() -> None:
        snapshot = game.snapshot()
        for renderer in renderers:
            renderer.render(snapshot)

    log.info("game started")
    refresh_view()
    arbiter.start()
    try:
        while True:
            command = arbiter.get_command()
            log.debug("new command = %s", command)
            result = game.process(command)
            refresh_view()
            if result is TickResult.GAME_OVER:
                break
    finally:
        arbiter.stop()

    log.info("game over, score %d", game.score)
    return game.score


def play(
    config: dict[str, Any],
    source: CommandSource | None = None,
    renderers: list[Renderer] | None = None,
) -> int:
    """Run a full game in manual play mode.

    Commands are read from ``source`` (stdin by default), one per line:
      - a: move left
      - d: move right
      - s: move down
      - w: rotate
    Gravity ticks every ``tick_interval_ms`` milliseconds.

    Args:
        config: Config dict loaded from engine.yaml.
        source: Player command source; defaults to stdin.
        renderers: Renderers to use; built from ``config["renderers"]`` when
            omitted.

    Returns:
        The final score.
    """
    if renderers is None:
        cell_size = config.get("cell_size", 30)
        renderers = [
            create_renderer(name, cell_size=cell_size)
            for name in config.get("renderers", ["emoji"])
        ]

    game = build_game(config)
    arbiter = CommandArbiter(
        source=source or StdinCommandSource(),
        tick_interval=config.get("tick_interval_ms", 1500) / 1000.0,
    )
    try:
        return run_session(game, arbiter, renderers)
    finally:
        for renderer in renderers:
            renderer.close()
