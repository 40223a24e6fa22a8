from __future__ import annotations

from dataclasses import dataclass, field

from clicker.metrics import MetricsCollector, PointsSnapshot, PurchaseEvent


@dataclass
class SimulationReport:
    """Container for simulation results and derived metrics."""

    strategy_description: str = ""
    outcome: str = ""
    total_time: float = 0.0
    final_points: float = 0.0
    final_production: float = 0.0
    final_total_earned: float = 0.0

    # Raw metrics
    snapshots: list[PointsSnapshot] = field(default_factory=list)
    purchases: list[PurchaseEvent] = field(default_factory=list)

    # Derived metrics
    first_purchase_times: dict[str, float] = field(default_factory=dict)
    purchase_gaps: list[float] = field(default_factory=list)
    max_purchase_gap: float = 0.0
    mean_purchase_gap: float = 0.0
    purchases_per_minute: float = 0.0

    def points_series(self) -> list[tuple[float, float]]:
        """Return (time, points) series."""
        return [(s.time, s.points) for s in self.snapshots]

    def production_series(self) -> list[tuple[float, float]]:
        """Return (time, production rate) series."""
        return [(s.time, s.production) for s in self.snapshots]


def build_report(
    collector: MetricsCollector,
    strategy_description: str,
    outcome: str,
    total_time: float,
    final_points: float = 0.0,
    final_production: float = 0.0,
    final_total_earned: float = 0.0,
) -> SimulationReport:
    """Build a SimulationReport from collected metrics."""
    first_times: dict[str, float] = {}
    for p in collector.purchases:
        first_times.setdefault(p.name, p.time)

    # Purchase gaps
    purchase_gaps: list[float] = []
    purchase_times = sorted(p.time for p in collector.purchases)
    if purchase_times:
        purchase_gaps.append(purchase_times[0])  # gap from t=0 to first purchase
        for i in range(1, len(purchase_times)):
            purchase_gaps.append(purchase_times[i] - purchase_times[i - 1])

    max_gap = max(purchase_gaps) if purchase_gaps else 0.0
    mean_gap = (sum(purchase_gaps) / len(purchase_gaps)) if purchase_gaps else 0.0
    ppm = (len(collector.purchases) / total_time * 60.0) if total_time > 0 else 0.0

    return SimulationReport(
        strategy_description=strategy_description,
        outcome=outcome,
        total_time=total_time,
        final_points=final_points,
        final_production=final_production,
        final_total_earned=final_total_earned,
        snapshots=collector.snapshots,
        purchases=collector.purchases,
        first_purchase_times=first_times,
        purchase_gaps=purchase_gaps,
        max_purchase_gap=max_gap,
        mean_purchase_gap=mean_gap,
        purchases_per_minute=ppm,
    )
