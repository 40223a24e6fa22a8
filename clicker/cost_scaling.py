from __future__ import annotations

import math
from typing import Callable


class CostScaling:
    """Determines how a building's price changes with purchase count."""

    def __init__(self, fn: Callable[[float, int], float]) -> None:
        self._fn = fn

    def compute(self, base_cost: float, current_count: int) -> float:
        return self._fn(base_cost, current_count)

    @classmethod
    def fixed(cls) -> CostScaling:
        """Cost never changes."""
        return cls(lambda base, _count: float(base))

    @classmethod
    def exponential(cls, growth_rate: float = 1.15) -> CostScaling:
        """Cost = floor(base * growth_rate^count)."""
        gr = growth_rate  # capture

        def _compute(base: float, count: int) -> float:
            return float(math.floor(base * gr ** count))

        return cls(_compute)
