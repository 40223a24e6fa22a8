from __future__ import annotations

import logging
from pathlib import Path

from clicker import economy
from clicker.definition import GameDefinition, default_definition
from clicker.persistence import load_game, save_game
from clicker.purchase import (
    PurchaseFailure,
    PurchaseKind,
    PurchaseOption,
    PurchaseResult,
)
from clicker.state import GameState

logger = logging.getLogger(__name__)


class GameRuntime:
    """Authoritative game logic processor. Owns the live GameState."""

    def __init__(
        self,
        definition: GameDefinition | None = None,
        state: GameState | None = None,
    ) -> None:
        if definition is None:
            definition = default_definition()
        errors = definition.validate()
        if errors:
            raise ValueError(
                "Invalid GameDefinition:\n" + "\n".join(f"  - {e}" for e in errors)
            )

        self.definition = definition
        self.state = state if state is not None else GameState(definition)

    # ── Core loop ────────────────────────────────────────────────────

    def tick(self, delta: float) -> float:
        """Advance passive production by *delta* seconds. Returns points earned."""
        earned = self.total_production() * delta
        if earned:
            self.state.earn(earned)
        return earned

    # ── Player actions ───────────────────────────────────────────────

    def click(self) -> float:
        """Manual click. Returns the amount added."""
        value = self.state.click_power
        self.state.earn(value)
        return value

    def buy_building(self, index: int) -> PurchaseResult:
        """Attempt to buy one unit of a building (0-based index)."""
        bdef = self.definition.get_building(index)
        bstate = self.state.buildings[index]
        cost = economy.building_cost(bdef, bstate)

        if not self.state.points >= cost:
            return PurchaseResult(
                success=False,
                name=bdef.name,
                cost=cost,
                reason=PurchaseFailure.INSUFFICIENT_FUNDS,
            )

        self.state.points -= cost
        bstate.count += 1
        logger.debug("Bought %s #%d for %s", bdef.name, bstate.count, cost)
        return PurchaseResult(success=True, name=bdef.name, cost=cost)

    def buy_upgrade(self, building_index: int, upgrade_index: int) -> PurchaseResult:
        """Attempt to buy a one-time upgrade (0-based indices)."""
        udef = self.definition.get_upgrade(building_index, upgrade_index)
        ustate = self.state.buildings[building_index].upgrades[upgrade_index]

        if ustate.purchased:
            return PurchaseResult(
                success=False,
                name=udef.name,
                cost=udef.cost,
                reason=PurchaseFailure.ALREADY_PURCHASED,
            )
        if not self.state.points >= udef.cost:
            return PurchaseResult(
                success=False,
                name=udef.name,
                cost=udef.cost,
                reason=PurchaseFailure.INSUFFICIENT_FUNDS,
            )

        self.state.points -= udef.cost
        ustate.purchased = True
        logger.debug("Bought upgrade %s for %s", udef.name, udef.cost)
        return PurchaseResult(success=True, name=udef.name, cost=udef.cost)

    # ── Persistence ──────────────────────────────────────────────────

    def save(self, path: str | Path | None = None) -> Path:
        """Write the whole state to disk. OSError propagates."""
        return save_game(self.state, self.definition, path or self.definition.config.save_path)

    def load(self, path: str | Path | None = None) -> bool:
        """Replace the state wholesale from disk.

        Returns False when no save exists. Raises SaveFileError (state left
        untouched) when the file is corrupt.
        """
        loaded = load_game(self.definition, path or self.definition.config.save_path)
        if loaded is None:
            return False
        self.state = loaded
        return True

    def new_game(self) -> None:
        self.state = GameState(self.definition)

    # ── Queries ──────────────────────────────────────────────────────

    def get_state(self) -> GameState:
        """Return live reference to game state."""
        return self.state

    def building_cost(self, index: int) -> float:
        return economy.building_cost(
            self.definition.get_building(index), self.state.buildings[index]
        )

    def building_production(self, index: int) -> float:
        return economy.building_production(
            self.definition.get_building(index), self.state.buildings[index]
        )

    def total_production(self) -> float:
        return economy.total_production(self.definition, self.state)

    def available_purchases(self) -> list[PurchaseOption]:
        """Every building, plus every upgrade not yet purchased."""
        options: list[PurchaseOption] = []
        points = self.state.points
        for i, (bdef, bstate) in enumerate(zip(self.definition.buildings, self.state.buildings)):
            cost = economy.building_cost(bdef, bstate)
            mult = economy.building_multiplier(bdef, bstate)
            options.append(
                PurchaseOption(
                    kind=PurchaseKind.BUILDING,
                    building_index=i,
                    upgrade_index=None,
                    name=bdef.name,
                    cost=cost,
                    production_gain=bdef.base_production * mult,
                    affordable=points >= cost,
                )
            )
            current = economy.building_production(bdef, bstate)
            for j, (udef, ustate) in enumerate(zip(bdef.upgrades, bstate.upgrades)):
                if ustate.purchased:
                    continue
                options.append(
                    PurchaseOption(
                        kind=PurchaseKind.UPGRADE,
                        building_index=i,
                        upgrade_index=j,
                        name=udef.name,
                        cost=udef.cost,
                        production_gain=current * (udef.production_multiplier - 1.0),
                        affordable=points >= udef.cost,
                    )
                )
        return options

    def purchase(self, option: PurchaseOption) -> PurchaseResult:
        """Buy whatever a PurchaseOption points at."""
        if option.kind is PurchaseKind.BUILDING:
            return self.buy_building(option.building_index)
        return self.buy_upgrade(option.building_index, option.upgrade_index)

    def compute_time_to_afford(self, cost: float) -> float | None:
        """Seconds until *cost* is affordable at the current rate. None if never."""
        if self.state.points >= cost:
            return 0.0
        rate = self.total_production()
        if rate <= 0:
            return None
        return (cost - self.state.points) / rate
