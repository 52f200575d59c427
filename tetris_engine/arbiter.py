"""
Command arbiter: merges gravity ticks and player input into one queue.

Two daemon threads produce, one consumer (the session loop) takes:
  - The tick thread wakes every ``tick_interval`` seconds and enqueues a
    TICK only if the queue is empty at that moment. A pending player command
    therefore always suppresses the next tick, and ticks never pile up.
  - The input thread blocks on the command source and enqueues every
    classified command except IGNORED.

The queue is the only shared object; neither producer touches the game.
Commands come out strictly in the order they went in.
"""

from __future__ import annotations

import logging
import queue as queue_mod
import threading

from tetris_engine.commands import CommandSource
from tetris_engine.game.tetris import Command

DEFAULT_TICK_INTERVAL = 1.5  # seconds


class CommandArbiter:
    """Single-consumer, multi-producer command queue with a gravity timer.

    Attributes:
        tick_interval: Seconds between tick checks.
        queue: Unbounded FIFO of pending commands.
    """

    def __init__(
        self,
        source: CommandSource | None = None,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        logger: logging.Logger | None = None,
    ) -> None:
        """Create an idle arbiter; call start() to launch the producers.

        Args:
            source: Where player commands come from. Without one only ticks
                are produced.
            tick_interval: Seconds between tick checks.
            logger: Logger for producer decisions; defaults to this module's.
        """
        self.tick_interval = tick_interval
        self.queue: queue_mod.Queue[Command] = queue_mod.Queue()
        self._source = source
        self._log = logger or logging.getLogger(__name__)
        self._stop_event = threading.Event()
        self._tick_thread: threading.Thread | None = None
        self._input_thread: threading.Thread | None = None

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> None:
        """Start the tick thread and, if there is a source, the input thread."""
        if self._tick_thread is not None:
            raise RuntimeError("arbiter already started")
        self._tick_thread = threading.Thread(
            target=self._tick_loop, name="tick-producer", daemon=True
        )
        self._tick_thread.start()
        if self._source is not None:
            self._input_thread = threading.Thread(
                target=self._input_loop, name="input-producer", daemon=True
            )
            self._input_thread.start()

    def stop(self) -> None:
        """Stop both producers. Safe to call more than once.

        The tick thread is joined. The input thread may be blocked reading
        its source; it is a daemon and exits at its next read or with the
        process.
        """
        if self._stop_event.is_set():
            return
        self._stop_event.set()
        if self._source is not None:
            self._source.close()
        if self._tick_thread is not None:
            self._tick_thread.join(timeout=5)
        self._log.debug("arbiter stopped")

    def tick_once(self) -> bool:
        """Enqueue a TICK if, and only if, the queue is currently empty.

        Returns:
            True if a TICK was enqueued.
        """
        if self.queue.empty():
            self._log.debug("ticktimer: queue is empty, putting TICK")
            self.queue.put(Command.TICK)
            return True
        self._log.debug("ticktimer: %d command(s) pending, skipping", self.queue.qsize())
        return False

    def submit(self, command: Command) -> bool:
        """Enqueue a player command. IGNORED is dropped.

        Returns:
            True if the command was enqueued.
        """
        if command is Command.IGNORED:
            return False
        self.queue.put(command)
        return True

    def get_command(self, timeout: float | None = None) -> Command:
        """Block until the next command is available and return it.

        Raises:
            queue.Empty: If ``timeout`` elapses first.
        """
        return self.queue.get(timeout=timeout)

    def _tick_loop(self) -> None:
        while not self._stop_event.is_set():
            self.tick_once()
            self._stop_event.wait(self.tick_interval)

    def _input_loop(self) -> None:
        while not self._stop_event.is_set():
            command = self._source.retrieve()
            if command is None:
                self._log.debug("input source exhausted, input producer exiting")
                break
            if self._stop_event.is_set():
                break
            self.submit(command)
