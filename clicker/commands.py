from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from clicker.formatting import format_number
from clicker.persistence import SaveFileError
from clicker.purchase import PurchaseFailure, PurchaseResult
from clicker.runtime import GameRuntime

logger = logging.getLogger(__name__)

_PURCHASE_RE = re.compile(r"^([1-9][0-9]*)([a-z])?$", re.ASCII)

FAREWELL = "Thanks for playing!"
UNKNOWN = "Unknown command. Try again."


@dataclass(frozen=True)
class CommandResult:
    """What the loop should show, and whether it should stop."""

    message: str = ""
    quit: bool = False


class CommandInterpreter:
    """Maps one line of player input to a runtime action."""

    def __init__(self, runtime: GameRuntime, save_path: str | None = None) -> None:
        self.runtime = runtime
        self.save_path = save_path or runtime.definition.config.save_path

    def handle(self, line: str) -> CommandResult:
        command = line.strip().lower()

        if command == "c":
            self.runtime.click()
            return CommandResult()
        if command == "s":
            return self._save()
        if command == "l":
            return self._load()
        if command == "q":
            return CommandResult(FAREWELL, quit=True)

        match = _PURCHASE_RE.match(command)
        if match:
            return self._purchase(match.group(1), match.group(2))
        return CommandResult(UNKNOWN)

    # ── Helpers ──────────────────────────────────────────────────────

    def _purchase(self, number: str, letter: str | None) -> CommandResult:
        buildings = self.runtime.definition.buildings
        building_index = int(number) - 1
        if not 0 <= building_index < len(buildings):
            return CommandResult(UNKNOWN)

        if letter is None:
            result = self.runtime.buy_building(building_index)
            if result.success:
                return CommandResult(f"Purchased a {result.name}!")
            return CommandResult(_failure_message(result))

        upgrade_index = ord(letter) - ord("a")
        if upgrade_index >= len(buildings[building_index].upgrades):
            return CommandResult(UNKNOWN)
        result = self.runtime.buy_upgrade(building_index, upgrade_index)
        if result.success:
            return CommandResult(f"Upgrade purchased: {result.name}!")
        return CommandResult(_failure_message(result))

    def _save(self) -> CommandResult:
        try:
            self.runtime.save(self.save_path)
        except OSError as e:
            logger.error("Save to %s failed: %s", self.save_path, e)
            return CommandResult(f"Save failed: {e}")
        return CommandResult("Game saved!")

    def _load(self) -> CommandResult:
        try:
            loaded = self.runtime.load(self.save_path)
        except SaveFileError as e:
            logger.error("%s", e)
            return CommandResult("Error loading save file; current game kept.")
        except OSError as e:
            logger.error("Could not read %s: %s", self.save_path, e)
            return CommandResult(f"Error loading save file: {e}")
        if not loaded:
            return CommandResult("No save found.")
        return CommandResult("Game loaded!")


def _failure_message(result: PurchaseResult) -> str:
    if result.reason is PurchaseFailure.ALREADY_PURCHASED:
        return f"{result.name} is already purchased!"
    return f"Not enough points! {result.name} costs {format_number(result.cost)} points."
