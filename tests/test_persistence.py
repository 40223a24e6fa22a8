"""Tests for persistence module."""
import json

import pytest

from clicker.definition import default_definition
from clicker.persistence import (
    SaveFileError,
    load_game,
    restore,
    save_game,
    snapshot,
    validate_snapshot,
)
from clicker.runtime import GameRuntime
from clicker.state import GameState


def _played_state() -> GameState:
    defn = default_definition()
    state = GameState(defn)
    state.points = 1234.5678
    state.total_points_earned = 98765.4321
    state.buildings[0].count = 12
    state.buildings[1].count = 3
    state.buildings[0].upgrades[0].purchased = True
    state.buildings[2].upgrades[1].purchased = True
    return state


def test_round_trip(tmp_path):
    defn = default_definition()
    state = _played_state()
    path = tmp_path / "save.json"

    save_game(state, defn, path)
    loaded = load_game(defn, path)

    assert loaded is not None
    assert loaded.points == state.points
    assert loaded.total_points_earned == state.total_points_earned
    assert loaded.click_power == state.click_power
    assert [b.count for b in loaded.buildings] == [12, 3, 0]
    assert [[u.purchased for u in b.upgrades] for b in loaded.buildings] == [
        [True, False],
        [False, False],
        [False, True],
    ]


def test_save_stamps_last_saved(tmp_path):
    defn = default_definition()
    state = GameState(defn)
    path = tmp_path / "save.json"
    save_game(state, defn, path, clock=lambda: 1700000000.25)

    assert state.last_saved == 1700000000.25
    data = json.loads(path.read_text())
    assert data["lastSaved"] == 1700000000250


def test_save_is_indented_json(tmp_path):
    defn = default_definition()
    path = tmp_path / "save.json"
    save_game(GameState(defn), defn, path)
    text = path.read_text()
    assert text.startswith("{\n  ")
    data = json.loads(text)
    assert set(data) == {"points", "totalPointsEarned", "clickPower", "buildings", "lastSaved"}
    cursor = data["buildings"][0]
    assert cursor["name"] == "Cursor"
    assert cursor["baseCost"] == 15
    assert cursor["upgrades"][0]["productionMultiplier"] == 2


def test_save_overwrites(tmp_path):
    defn = default_definition()
    path = tmp_path / "save.json"
    state = GameState(defn)
    save_game(state, defn, path)
    state.points = 42
    save_game(state, defn, path)
    assert load_game(defn, path).points == 42
    assert not (tmp_path / "save.json.tmp").exists()


def test_save_into_missing_directory_raises(tmp_path):
    defn = default_definition()
    with pytest.raises(OSError):
        save_game(GameState(defn), defn, tmp_path / "nope" / "save.json")


def test_load_missing_file(tmp_path):
    assert load_game(default_definition(), tmp_path / "missing.json") is None


def test_load_corrupt_json(tmp_path):
    path = tmp_path / "save.json"
    path.write_text("{ not json")
    with pytest.raises(SaveFileError) as exc_info:
        load_game(default_definition(), path)
    assert "not valid JSON" in str(exc_info.value)


def test_load_wrong_shape(tmp_path):
    path = tmp_path / "save.json"
    path.write_text(json.dumps({"points": "lots", "buildings": []}))
    with pytest.raises(SaveFileError) as exc_info:
        load_game(default_definition(), path)
    problems = exc_info.value.problems
    assert any("'points' must be a finite number" in p for p in problems)
    assert any("totalPointsEarned" in p for p in problems)
    assert any("expected 3 buildings" in p for p in problems)


def test_load_integer_fields_and_ms_timestamp(tmp_path):
    """Whole-number points and a millisecond lastSaved load as floats."""
    defn = default_definition()
    data = snapshot(GameState(defn), defn)
    data["points"] = 7
    data["clickPower"] = 1
    data["buildings"][1]["count"] = 4
    data["lastSaved"] = 1700000000000
    path = tmp_path / "clicker-save.json"
    path.write_text(json.dumps(data, indent=2))

    state = load_game(defn, path)
    assert state.points == 7.0
    assert state.buildings[1].count == 4
    assert state.last_saved == 1700000000.0


def test_validate_snapshot_non_object():
    assert validate_snapshot([1, 2], default_definition()) == [
        "top level must be an object, got list"
    ]


def test_validate_snapshot_rejects_bad_counts_and_flags():
    defn = default_definition()
    data = snapshot(GameState(defn), defn)
    data["buildings"][0]["count"] = -1
    data["buildings"][1]["count"] = 2.5
    data["buildings"][2]["upgrades"][0]["purchased"] = "yes"
    data["buildings"][2]["name"] = "Mill"
    problems = validate_snapshot(data, defn)
    assert len(problems) == 4


def test_validate_snapshot_rejects_negative_points():
    defn = default_definition()
    data = snapshot(GameState(defn), defn)
    data["points"] = -5
    assert validate_snapshot(data, defn) == ["state: 'points' must be >= 0.0, got -5"]


def test_restore_builds_new_state():
    defn = default_definition()
    original = _played_state()
    restored = restore(snapshot(original, defn), defn)
    assert restored is not original
    assert restored.points == original.points


def test_runtime_load_keeps_state_on_corrupt_file(tmp_path):
    path = tmp_path / "save.json"
    path.write_text("[]")
    rt = GameRuntime()
    rt.click()
    before = rt.state
    with pytest.raises(SaveFileError):
        rt.load(path)
    assert rt.state is before
    assert rt.state.points == 1


def test_runtime_load_missing_keeps_fresh_state(tmp_path):
    rt = GameRuntime()
    before = rt.state
    assert rt.load(tmp_path / "missing.json") is False
    assert rt.state is before
    assert rt.state.points == 0
    assert [b.count for b in rt.state.buildings] == [0, 0, 0]


def test_runtime_save_then_load(tmp_path):
    path = tmp_path / "save.json"
    rt = GameRuntime()
    for _ in range(30):
        rt.click()
    rt.buy_building(0)
    rt.save(path)

    other = GameRuntime()
    assert other.load(path)
    assert other.state.points == rt.state.points
    assert other.state.buildings[0].count == 1


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_load_rejects_non_finite_points(tmp_path, bad):
    defn = default_definition()
    data = snapshot(GameState(defn), defn)
    data["points"] = bad
    path = tmp_path / "save.json"
    path.write_text(json.dumps(data))

    rt = GameRuntime(defn)
    before = rt.state
    with pytest.raises(SaveFileError) as exc_info:
        rt.load(path)
    assert any("'points' must be a finite number" in p for p in exc_info.value.problems)
    assert rt.state is before
    assert not rt.buy_building(2).success
    assert rt.state.buildings[2].count == 0


def test_failed_save_leaves_state_and_no_tmp_file(tmp_path, monkeypatch):
    defn = default_definition()
    state = GameState(defn)
    state.last_saved = 5.0
    path = tmp_path / "save.json"

    def fail_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("clicker.persistence.os.replace", fail_replace)
    with pytest.raises(OSError, match="disk full"):
        save_game(state, defn, path, clock=lambda: 1700000000.0)

    assert state.last_saved == 5.0
    assert not path.exists()
    assert not (tmp_path / "save.json.tmp").exists()
