"""Tests for loop module."""
import io
import os

import pytest

from clicker.commands import FAREWELL, CommandInterpreter
from clicker.display import CLEAR_SCREEN
from clicker.loop import GameLoop, _FdReader
from clicker.runtime import GameRuntime


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class IdleThenReady:
    """Lets *idle* timeouts elapse on the fake clock, then reports input ready."""

    def __init__(self, clock: FakeClock, idle: int) -> None:
        self.clock = clock
        self.idle = idle
        self.calls = 0

    def __call__(self, stream, timeout: float) -> bool:
        if self.calls < self.idle:
            self.calls += 1
            self.clock.now += timeout + 0.001
            return False
        return True


class ReadyOnce:
    """Input is ready on the first wait only; later waits just let time pass."""

    def __init__(self, clock: FakeClock, max_idle: int = 50) -> None:
        self.clock = clock
        self.max_idle = max_idle
        self.calls = 0

    def __call__(self, stream, timeout: float) -> bool:
        self.calls += 1
        if self.calls == 1:
            return True
        assert self.calls <= self.max_idle, "lines left unread after the first chunk"
        self.clock.now += timeout + 0.001
        return False


def _chunks(*parts):
    pending = list(parts)
    return lambda stream: pending.pop(0)


def _make_loop(
    lines: str, clock=None, wait_readable=None, runtime=None, tmp_path=None, read_chunk=None
):
    runtime = runtime or GameRuntime()
    save_path = str(tmp_path / "save.json") if tmp_path else None
    return GameLoop(
        runtime,
        CommandInterpreter(runtime, save_path=save_path),
        stdin=io.StringIO(lines),
        stdout=io.StringIO(),
        clock=clock or FakeClock(),
        wait_readable=wait_readable or (lambda stream, timeout: True),
        read_chunk=read_chunk or (lambda stream: stream.read() or None),
    )


def test_commands_then_quit():
    loop = _make_loop("c\nc\nq\nc\n")
    loop.run()
    assert not loop.running
    assert loop.runtime.state.points == 2
    out = loop.stdout.getvalue()
    assert out.startswith(CLEAR_SCREEN)
    assert out.rstrip().endswith(FAREWELL)


def test_end_of_input_stops():
    loop = _make_loop("c\n")
    loop.run()
    assert not loop.running
    assert loop.runtime.state.points == 1


def test_status_shown_after_command():
    loop = _make_loop("9\nq\n")
    loop.run()
    assert "Unknown command. Try again." in loop.stdout.getvalue()


def test_tick_uses_wall_clock():
    clock = FakeClock(100.0)
    rt = GameRuntime()
    rt.state.buildings[1].count = 2  # 2 points per second
    loop = _make_loop("", clock=clock, runtime=rt)

    clock.now = 102.5
    elapsed = loop.tick()

    assert elapsed == pytest.approx(2.5)
    assert rt.state.points == pytest.approx(5.0)
    assert rt.state.total_points_earned == pytest.approx(5.0)


def test_tick_credits_long_pause_in_full():
    clock = FakeClock(0.0)
    rt = GameRuntime()
    rt.state.buildings[1].count = 1
    loop = _make_loop("", clock=clock, runtime=rt)

    clock.now = 3600.0
    loop.tick()
    assert rt.state.points == pytest.approx(3600.0)


def test_tick_redraws():
    loop = _make_loop("")
    loop.tick()
    assert loop.stdout.getvalue().count(CLEAR_SCREEN) == 1


def test_run_ticks_between_commands():
    clock = FakeClock()
    rt = GameRuntime()
    rt.state.buildings[1].count = 1
    loop = _make_loop("q\n", clock=clock, runtime=rt, wait_readable=IdleThenReady(clock, 5))

    loop.run()

    # Every idle wait ended past the deadline, so each produced one tick
    assert rt.state.points == pytest.approx(clock.now)
    assert clock.now == pytest.approx(5 * 0.101)
    # initial draw + five ticks
    assert loop.stdout.getvalue().count(CLEAR_SCREEN) == 6


def test_interval_from_config():
    loop = _make_loop("")
    assert loop.interval == pytest.approx(0.1)


def test_quit_does_not_save(tmp_path):
    loop = _make_loop("c\nq\n", tmp_path=tmp_path)
    loop.run()
    assert not (tmp_path / "save.json").exists()


def test_every_line_of_one_chunk_is_handled():
    clock = FakeClock()
    loop = _make_loop("c\nc\nq\n", clock=clock, wait_readable=ReadyOnce(clock))
    loop.run()
    assert not loop.running
    assert loop.runtime.state.points == 2
    assert loop.stdout.getvalue().rstrip().endswith(FAREWELL)


def test_line_split_across_chunks():
    loop = _make_loop("", read_chunk=_chunks("c\nc", "\nq\n"))
    loop.run()
    assert loop.runtime.state.points == 2
    assert loop.status == FAREWELL


def test_unterminated_last_line_runs_at_end_of_input():
    loop = _make_loop("", read_chunk=_chunks("c\nc", None))
    loop.run()
    assert not loop.running
    assert loop.runtime.state.points == 2


def test_fd_reader_returns_everything_waiting():
    read_fd, write_fd = os.pipe()
    with os.fdopen(read_fd, "r") as stream:
        reader = _FdReader()
        os.write(write_fd, b"c\n1\nq\n")
        assert reader(stream) == "c\n1\nq\n"

        # A character split across writes comes back whole
        os.write(write_fd, b"\xd9")
        assert reader(stream) == ""
        os.write(write_fd, b"\xa3\n")
        assert reader(stream) == "\u0663\n"

        os.close(write_fd)
        assert reader(stream) is None
