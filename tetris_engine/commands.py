"""
Player input: raw text to Command classification and the stdin input source.

One command per line. Only the first character counts:
  - a: move left
  - s: move down
  - d: move right
  - w: rotate
Anything else, including a blank line, is IGNORED and never reaches the
engine.
"""

from __future__ import annotations

import logging
import sys
from typing import Protocol, TextIO

from tetris_engine.game.tetris import Command


# ── Key mapping for manual play ──────────────────────────────────────────
KEY_MAP: dict[str, Command] = {
    "a": Command.LEFT,
    "s": Command.DOWN,
    "d": Command.RIGHT,
    "w": Command.ROTATE,
}


def classify(line: str) -> Command:
    """Map one line of raw input to a Command."""
    line = line.rstrip("\r\n")
    if not line.strip():
        return Command.IGNORED
    return KEY_MAP.get(line[0], Command.IGNORED)


class CommandSource(Protocol):
    """Anything the arbiter can pull player commands from."""

    def retrieve(self) -> Command | None:
        """Block until the next command; None when input is exhausted."""
        ...

    def close(self) -> None:
        ...


class StdinCommandSource:
    """Reads commands line by line from a text stream (stdin by default)."""

    def __init__(self, stream: TextIO | None = None, logger: logging.Logger | None = None) -> None:
        self._stream = stream or sys.stdin
        self._log = logger or logging.getLogger(__name__)
        self._closed = False

    def retrieve(self) -> Command | None:
        if self._closed:
            return None
        line = self._stream.readline()
        if not line:
            self._log.debug("input stream exhausted")
            return None
        command = classify(line)
        self._log.debug("input command = %s", command)
        return command

    def close(self) -> None:
        # Never close the process's stdin; just stop handing out commands.
        self._closed = True
