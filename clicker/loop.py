from __future__ import annotations

import codecs
import logging
import os
import select
import sys
import time
from typing import Callable, TextIO

from clicker.commands import CommandInterpreter
from clicker.display import CLEAR_SCREEN, render_screen
from clicker.runtime import GameRuntime

logger = logging.getLogger(__name__)


class GameLoop:
    """Single-threaded driver: a fixed-period tick plus a line reader.

    Ticks and commands never overlap. ``run`` waits on stdin with a timeout
    equal to the time left before the next tick, so each command or tick runs
    to completion before the next event is looked at.
    """

    def __init__(
        self,
        runtime: GameRuntime,
        interpreter: CommandInterpreter | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        interval: float | None = None,
        clock: Callable[[], float] = time.monotonic,
        wait_readable: Callable[[TextIO, float], bool] | None = None,
        read_chunk: Callable[[TextIO], str | None] | None = None,
    ) -> None:
        self.runtime = runtime
        self.interpreter = interpreter or CommandInterpreter(runtime)
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.interval = interval if interval is not None else runtime.definition.config.tick_interval
        self.clock = clock
        self.wait_readable = wait_readable or _select_readable
        self.read_chunk = read_chunk or _FdReader()

        self.running = False
        self.status = ""
        self._pending = ""
        self._last_tick = clock()

    def run(self) -> None:
        """Block until quit or end of input."""
        self.running = True
        self._last_tick = self.clock()
        next_tick = self._last_tick + self.interval
        self.redraw()

        while self.running:
            timeout = max(0.0, next_tick - self.clock())
            if self.wait_readable(self.stdin, timeout):
                self._read_input()
                if not self.running:
                    break

            now = self.clock()
            if now >= next_tick:
                self.tick()
                next_tick = now + self.interval

    def _read_input(self) -> None:
        """Handle every complete line in the next chunk; a chunk may carry several."""
        chunk = self.read_chunk(self.stdin)
        if chunk is None:
            if self._pending.strip():
                line, self._pending = self._pending, ""
                self.handle_line(line)
            if self.running:
                logger.info("End of input, stopping")
                self.stop()
            return

        self._pending += chunk
        while self.running and "\n" in self._pending:
            line, self._pending = self._pending.split("\n", 1)
            self.handle_line(line)

    def tick(self) -> float:
        """Credit production for the real time since the previous tick, then redraw."""
        now = self.clock()
        elapsed = now - self._last_tick
        self._last_tick = now
        self.runtime.tick(elapsed)
        self.redraw()
        return elapsed

    def handle_line(self, line: str) -> None:
        result = self.interpreter.handle(line)
        self.status = result.message
        if result.quit:
            self.stop()
            self.stdout.write(result.message + "\n")
            self.stdout.flush()
        else:
            self.redraw()

    def stop(self) -> None:
        self.running = False

    def redraw(self) -> None:
        self.stdout.write(CLEAR_SCREEN + render_screen(self.runtime, self.status) + "\n")
        self.stdout.flush()


def _select_readable(stream: TextIO, timeout: float) -> bool:
    ready, _, _ = select.select([stream], [], [], timeout)
    return bool(ready)


class _FdReader:
    """Reads the bytes already waiting on a stream's descriptor.

    ``select`` only sees the descriptor, so nothing may sit in Python's own
    stdin buffer between waits; reading raw bytes keeps the two in step.
    """

    def __init__(self, size: int = 4096) -> None:
        self.size = size
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def __call__(self, stream: TextIO) -> str | None:
        """Decoded text, or None at end of input."""
        data = os.read(stream.fileno(), self.size)
        if not data:
            return None
        return self._decoder.decode(data)
