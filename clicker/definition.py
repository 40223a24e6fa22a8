from __future__ import annotations

import string
from dataclasses import dataclass, field

from clicker.cost_scaling import CostScaling

# Upgrade labels run "a".."z" within a building
MAX_UPGRADES_PER_BUILDING = len(string.ascii_lowercase)


@dataclass(frozen=True)
class UpgradeDef:
    """Static definition of a one-time production multiplier."""

    name: str
    cost: float
    production_multiplier: float
    description: str = ""


@dataclass(frozen=True)
class BuildingDef:
    """Static definition of a purchasable producer."""

    name: str
    base_cost: float
    base_production: float
    upgrades: tuple[UpgradeDef, ...] = ()
    cost_scaling: CostScaling = field(
        default_factory=CostScaling.exponential, compare=False, repr=False
    )


@dataclass
class GameConfig:
    """Top-level game configuration."""

    name: str = "Terminal Clicker Game"
    tick_rate: int = 10
    click_power: float = 1.0
    save_path: str = "clicker-save.json"

    @property
    def tick_interval(self) -> float:
        return 1.0 / self.tick_rate


@dataclass
class GameDefinition:
    """Complete static definition of a clicker game."""

    config: GameConfig = field(default_factory=GameConfig)
    buildings: list[BuildingDef] = field(default_factory=list)

    def get_building(self, index: int) -> BuildingDef:
        if not 0 <= index < len(self.buildings):
            raise IndexError(f"Building index out of range: {index}")
        return self.buildings[index]

    def get_upgrade(self, building_index: int, upgrade_index: int) -> UpgradeDef:
        bdef = self.get_building(building_index)
        if not 0 <= upgrade_index < len(bdef.upgrades):
            raise IndexError(
                f"Upgrade index out of range for {bdef.name!r}: {upgrade_index}"
            )
        return bdef.upgrades[upgrade_index]

    def validate(self) -> list[str]:
        """Check for common definition errors. Returns list of error messages."""
        errors: list[str] = []

        if self.config.tick_rate <= 0:
            errors.append(f"tick_rate must be positive, got {self.config.tick_rate}")
        if self.config.click_power < 0:
            errors.append(
                f"click_power must be non-negative, got {self.config.click_power}"
            )
        if not self.buildings:
            errors.append("Game has no buildings")

        seen: set[str] = set()
        for b in self.buildings:
            if not b.name:
                errors.append("Building with empty name")
            if b.name in seen:
                errors.append(f"Duplicate building name: {b.name!r}")
            seen.add(b.name)

            if b.base_cost <= 0:
                errors.append(f"Building {b.name!r} has non-positive base_cost")
            if b.base_production < 0:
                errors.append(f"Building {b.name!r} has negative base_production")
            if len(b.upgrades) > MAX_UPGRADES_PER_BUILDING:
                errors.append(
                    f"Building {b.name!r} has {len(b.upgrades)} upgrades "
                    f"(max {MAX_UPGRADES_PER_BUILDING})"
                )

            for u in b.upgrades:
                if u.cost < 0:
                    errors.append(f"Upgrade {u.name!r} on {b.name!r} has negative cost")
                if u.production_multiplier <= 0:
                    errors.append(
                        f"Upgrade {u.name!r} on {b.name!r} has non-positive multiplier"
                    )

        return errors


def _doubling_and_tripling(
    plural: str, first: tuple[str, float], second: tuple[str, float]
) -> tuple[UpgradeDef, ...]:
    return (
        UpgradeDef(
            name=first[0],
            cost=first[1],
            production_multiplier=2,
            description=f"Double the production of {plural}",
        ),
        UpgradeDef(
            name=second[0],
            cost=second[1],
            production_multiplier=3,
            description=f"Triple the production of {plural}",
        ),
    )


def default_definition() -> GameDefinition:
    """The stock game: Cursor, Farm and Factory with two upgrades each."""
    return GameDefinition(
        config=GameConfig(),
        buildings=[
            BuildingDef(
                name="Cursor",
                base_cost=15,
                base_production=0.1,
                upgrades=_doubling_and_tripling(
                    "Cursors", ("Faster Clicking", 100), ("Auto Clicker", 500)
                ),
            ),
            BuildingDef(
                name="Farm",
                base_cost=100,
                base_production=1,
                upgrades=_doubling_and_tripling(
                    "Farms", ("Fertilizer", 1000), ("Irrigation", 5000)
                ),
            ),
            BuildingDef(
                name="Factory",
                base_cost=1100,
                base_production=8,
                upgrades=_doubling_and_tripling(
                    "Factories", ("Assembly Line", 12000), ("Automation", 60000)
                ),
            ),
        ],
    )
