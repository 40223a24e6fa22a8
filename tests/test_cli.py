"""Tests for cli module."""
import pytest

from clicker import cli
from clicker.loop import GameLoop


def test_parser_defaults_to_play():
    args = cli.build_parser().parse_args([])
    assert args.command is None


def test_parser_simulate():
    args = cli.build_parser().parse_args(
        ["simulate", "--strategy", "greedy_roi", "--cps", "4", "--duration", "30"]
    )
    assert args.command == "simulate"
    assert args.strategy == "greedy_roi"
    assert args.cps == 4.0
    assert args.duration == 30.0


def test_build_strategy():
    assert cli.build_strategy("greedy_roi", 0).describe() == "GreedyROI"
    assert cli.build_strategy("greedy_cheapest", 2).describe() == "GreedyCheapest (2 CPS)"


def test_simulate_prints_report(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["simulate", "--cps", "5", "--duration", "30"])
    assert exc_info.value.code == 0
    out = capsys.readouterr().out
    assert "Clicker Simulation Report" in out
    assert "Cursor" in out


def test_play_loads_then_runs(tmp_path, monkeypatch):
    seen = {}

    def fake_run(self):
        seen["status"] = self.status
        seen["save_path"] = self.interpreter.save_path

    monkeypatch.setattr(GameLoop, "run", fake_run)
    save_file = str(tmp_path / "save.json")
    code = cli.play(save_file=save_file, log_file=str(tmp_path / "clicker.log"))

    assert code == 0
    assert seen["status"] == "No save found."
    assert seen["save_path"] == save_file


def test_play_without_load(tmp_path, monkeypatch):
    seen = {}
    monkeypatch.setattr(GameLoop, "run", lambda self: seen.setdefault("status", self.status))
    cli.play(save_file=str(tmp_path / "s.json"), log_file=str(tmp_path / "l.log"), load=False)
    assert seen["status"] == ""


def test_main_play_exit_code(tmp_path, monkeypatch):
    monkeypatch.setattr(GameLoop, "run", lambda self: None)
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 0
