from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clicker.definition import GameDefinition


@dataclass
class UpgradeState:
    """Mutable runtime state for an upgrade."""

    purchased: bool = False


@dataclass
class BuildingState:
    """Mutable runtime state for a building."""

    count: int = 0
    upgrades: list[UpgradeState] = field(default_factory=list)


class GameState:
    """Mutable runtime container holding all player progress."""

    def __init__(self, definition: GameDefinition) -> None:
        self.points: float = 0.0
        self.total_points_earned: float = 0.0
        self.click_power: float = definition.config.click_power
        self.last_saved: float = time.time()
        self.buildings: list[BuildingState] = [
            BuildingState(upgrades=[UpgradeState() for _ in bdef.upgrades])
            for bdef in definition.buildings
        ]

    def earn(self, amount: float) -> None:
        """Credit points; lifetime total only ever grows."""
        self.points += amount
        if amount > 0:
            self.total_points_earned += amount
