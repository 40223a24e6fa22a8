from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class PurchaseFailure(Enum):
    INSUFFICIENT_FUNDS = auto()
    ALREADY_PURCHASED = auto()


class PurchaseKind(Enum):
    BUILDING = auto()
    UPGRADE = auto()


@dataclass(frozen=True)
class PurchaseResult:
    """Outcome of a buy attempt."""

    success: bool
    name: str = ""
    cost: float = 0.0
    reason: PurchaseFailure | None = None


@dataclass(frozen=True)
class PurchaseOption:
    """Read-only snapshot of something the player could buy right now."""

    kind: PurchaseKind
    building_index: int
    upgrade_index: int | None
    name: str
    cost: float
    production_gain: float
    affordable: bool

    @property
    def label(self) -> str:
        return command_label(self.building_index, self.upgrade_index)


def command_label(building_index: int, upgrade_index: int | None = None) -> str:
    """Command label, e.g. "2" for a building or "2b" for its second upgrade."""
    label = str(building_index + 1)
    if upgrade_index is not None:
        label += chr(ord("a") + upgrade_index)
    return label
