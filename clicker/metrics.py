from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clicker.state import GameState


@dataclass
class PointsSnapshot:
    time: float
    points: float
    production: float
    total_earned: float


@dataclass
class PurchaseEvent:
    time: float
    label: str
    name: str
    cost_paid: float
    points_after: float


class MetricsCollector:
    """Records snapshots and purchases during a simulation."""

    def __init__(self, snapshot_interval: float = 1.0) -> None:
        self.snapshot_interval = snapshot_interval
        self._last_snapshot_time: float = -float("inf")

        self.snapshots: list[PointsSnapshot] = []
        self.purchases: list[PurchaseEvent] = []

    def record_tick(self, state: GameState, time: float, production: float) -> None:
        if time - self._last_snapshot_time < self.snapshot_interval:
            return
        self._last_snapshot_time = time
        self.snapshots.append(
            PointsSnapshot(
                time=time,
                points=state.points,
                production=production,
                total_earned=state.total_points_earned,
            )
        )

    def record_purchase(
        self, state: GameState, time: float, label: str, name: str, cost: float
    ) -> None:
        self.purchases.append(
            PurchaseEvent(
                time=time,
                label=label,
                name=name,
                cost_paid=cost,
                points_after=state.points,
            )
        )
