"""Save-file reading and writing.

The document keeps the classic camelCase layout so older saves stay readable::

    {
      "points": 12.5,
      "totalPointsEarned": 40.0,
      "clickPower": 1,
      "buildings": [
        {"name": "Cursor", "count": 2, "baseCost": 15, "baseProduction": 0.1,
         "upgrades": [{"name": "Faster Clicking", "purchased": false, ...}]}
      ],
      "lastSaved": 1700000000000
    }

Static fields (costs, production, descriptions) are written for readability but
on load they must agree with the current GameDefinition by name; the values
that are restored are the runtime ones: points, counts and purchased flags.
"""
from __future__ import annotations

import json
import logging
import math
import os
import time
from pathlib import Path
from typing import Any, Callable

from clicker.definition import GameDefinition
from clicker.state import GameState

logger = logging.getLogger(__name__)


class SaveFileError(ValueError):
    """Raised when a save file exists but cannot be turned into a GameState."""

    def __init__(self, path: str | Path, problems: list[str]) -> None:
        self.path = str(path)
        self.problems = problems
        super().__init__(
            f"Invalid save file {self.path}:\n"
            + "\n".join(f"  - {p}" for p in problems)
        )


def snapshot(state: GameState, definition: GameDefinition) -> dict[str, Any]:
    """Build the JSON-ready document for a state."""
    buildings = []
    for bdef, bstate in zip(definition.buildings, state.buildings):
        buildings.append({
            "name": bdef.name,
            "count": bstate.count,
            "baseCost": bdef.base_cost,
            "baseProduction": bdef.base_production,
            "upgrades": [
                {
                    "name": udef.name,
                    "purchased": ustate.purchased,
                    "cost": udef.cost,
                    "productionMultiplier": udef.production_multiplier,
                    "description": udef.description,
                }
                for udef, ustate in zip(bdef.upgrades, bstate.upgrades)
            ],
        })
    return {
        "points": state.points,
        "totalPointsEarned": state.total_points_earned,
        "clickPower": state.click_power,
        "buildings": buildings,
        "lastSaved": int(state.last_saved * 1000),
    }


def _is_number(value: Any) -> bool:
    # json accepts NaN and Infinity literals; neither is a valid amount
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _check_number(
    data: dict[str, Any], key: str, where: str, errors: list[str], minimum: float | None = 0.0
) -> None:
    if key not in data:
        errors.append(f"{where}: missing {key!r}")
        return
    value = data[key]
    if not _is_number(value):
        errors.append(f"{where}: {key!r} must be a finite number, got {value!r}")
    elif minimum is not None and value < minimum:
        errors.append(f"{where}: {key!r} must be >= {minimum}, got {value}")


def _check_buildings(
    raw: Any, definition: GameDefinition, errors: list[str]
) -> None:
    if not isinstance(raw, list):
        errors.append("'buildings' must be a list")
        return
    if len(raw) != len(definition.buildings):
        errors.append(
            f"expected {len(definition.buildings)} buildings, found {len(raw)}"
        )
        return

    for i, (entry, bdef) in enumerate(zip(raw, definition.buildings)):
        where = f"buildings[{i}]"
        if not isinstance(entry, dict):
            errors.append(f"{where}: must be an object")
            continue
        if entry.get("name") != bdef.name:
            errors.append(
                f"{where}: name {entry.get('name')!r} does not match {bdef.name!r}"
            )
        count = entry.get("count")
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            errors.append(f"{where}: 'count' must be a non-negative integer")

        upgrades = entry.get("upgrades")
        if not isinstance(upgrades, list) or len(upgrades) != len(bdef.upgrades):
            errors.append(
                f"{where}: expected {len(bdef.upgrades)} upgrades"
            )
            continue
        for j, (uentry, udef) in enumerate(zip(upgrades, bdef.upgrades)):
            uwhere = f"{where}.upgrades[{j}]"
            if not isinstance(uentry, dict):
                errors.append(f"{uwhere}: must be an object")
                continue
            if uentry.get("name") != udef.name:
                errors.append(
                    f"{uwhere}: name {uentry.get('name')!r} does not match {udef.name!r}"
                )
            if not isinstance(uentry.get("purchased"), bool):
                errors.append(f"{uwhere}: 'purchased' must be true or false")


def validate_snapshot(data: Any, definition: GameDefinition) -> list[str]:
    """Check a parsed document against the definition. Returns problems found."""
    if not isinstance(data, dict):
        return [f"top level must be an object, got {type(data).__name__}"]

    errors: list[str] = []
    _check_number(data, "points", "state", errors)
    _check_number(data, "totalPointsEarned", "state", errors)
    _check_number(data, "clickPower", "state", errors)
    _check_number(data, "lastSaved", "state", errors, minimum=None)
    if "buildings" not in data:
        errors.append("state: missing 'buildings'")
    else:
        _check_buildings(data["buildings"], definition, errors)
    return errors


def restore(data: dict[str, Any], definition: GameDefinition, path: str | Path = "<memory>") -> GameState:
    """Build a fresh GameState from a document. Raises SaveFileError on problems."""
    problems = validate_snapshot(data, definition)
    if problems:
        raise SaveFileError(path, problems)

    state = GameState(definition)
    state.points = float(data["points"])
    state.total_points_earned = float(data["totalPointsEarned"])
    state.click_power = float(data["clickPower"])
    state.last_saved = data["lastSaved"] / 1000.0
    for bstate, entry in zip(state.buildings, data["buildings"]):
        bstate.count = entry["count"]
        for ustate, uentry in zip(bstate.upgrades, entry["upgrades"]):
            ustate.purchased = uentry["purchased"]
    return state


def save_game(
    state: GameState,
    definition: GameDefinition,
    path: str | Path,
    clock: Callable[[], float] = time.time,
) -> Path:
    """Stamp last_saved and write the whole state, replacing any prior file."""
    path = Path(path)
    saved_at = clock()
    data = snapshot(state, definition)
    data["lastSaved"] = int(saved_at * 1000)

    tmp = path.with_name(path.name + ".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
    state.last_saved = saved_at

    logger.info("Game saved to %s", path)
    return path


def load_game(definition: GameDefinition, path: str | Path) -> GameState | None:
    """Read a save file.

    Returns None when no file exists. Raises SaveFileError when the file is
    unreadable or does not fit the definition; nothing is applied in that case.
    """
    path = Path(path)
    if not path.exists():
        logger.info("No save found at %s", path)
        return None

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SaveFileError(path, [f"not valid JSON: {e}"]) from e

    state = restore(data, definition, path)
    logger.info("Game loaded from %s", path)
    return state
