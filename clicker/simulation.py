from __future__ import annotations

import math

from clicker.definition import GameDefinition
from clicker.metrics import MetricsCollector
from clicker.report import SimulationReport, build_report
from clicker.runtime import GameRuntime
from clicker.strategy import Strategy

MAX_TICKS = 10_000_000
# Safety valve against a strategy that keeps choosing in one tick
MAX_PURCHASES_PER_TICK = 10_000


class Simulation:
    """Orchestrates a headless run of a game definition under a strategy."""

    def __init__(
        self,
        definition: GameDefinition,
        strategy: Strategy,
        duration: float,
        tick_resolution: float = 1.0,
    ) -> None:
        if tick_resolution <= 0:
            raise ValueError(f"tick_resolution must be positive, got {tick_resolution}")

        self.definition = definition
        self.strategy = strategy
        self.duration = duration
        self.tick_resolution = tick_resolution

        self.runtime = GameRuntime(definition)
        self.collector = MetricsCollector(snapshot_interval=tick_resolution)
        self.time_elapsed = 0.0

    def run(self) -> SimulationReport:
        state = self.runtime.get_state()
        tick_count = 0

        while self.time_elapsed < self.duration:
            tick_count += 1
            if tick_count > MAX_TICKS:
                return self._build_report("Max ticks reached")

            # 1. Passive production
            self.runtime.tick(self.tick_resolution)
            self.time_elapsed += self.tick_resolution

            # 2. Manual clicks
            for _ in range(self.strategy.get_clicks(state, self.tick_resolution)):
                self.runtime.click()

            # 3. Purchases, until the strategy wants to wait
            self._buy_while_possible()

            # 4. Record metrics
            self.collector.record_tick(
                state, self.time_elapsed, self.runtime.total_production()
            )

            if math.isnan(state.points) or math.isinf(state.points):
                return self._build_report("Aborted: NaN/Inf detected")

        return self._build_report("Duration reached")

    def _buy_while_possible(self) -> None:
        state = self.runtime.get_state()
        for _ in range(MAX_PURCHASES_PER_TICK):
            choice = self.strategy.decide(state, self.runtime.available_purchases())
            if choice is None:
                return
            result = self.runtime.purchase(choice)
            if not result.success:
                return
            self.collector.record_purchase(
                state, self.time_elapsed, choice.label, result.name, result.cost
            )

    def _build_report(self, outcome: str) -> SimulationReport:
        state = self.runtime.get_state()
        return build_report(
            collector=self.collector,
            strategy_description=self.strategy.describe(),
            outcome=outcome,
            total_time=self.time_elapsed,
            final_points=state.points,
            final_production=self.runtime.total_production(),
            final_total_earned=state.total_points_earned,
        )
