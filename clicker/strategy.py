from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from clicker.purchase import PurchaseOption

if TYPE_CHECKING:
    from clicker.state import GameState


@dataclass
class ClickProfile:
    """Configures manual clicking for strategies."""

    clicks_per_second: float = 0.0

    def get_clicks(self, duration: float) -> int:
        """Return number of whole clicks for the given duration."""
        return max(0, int(self.clicks_per_second * duration))


class Strategy(ABC):
    """Base class for simulation strategies."""

    def __init__(self, click_profile: ClickProfile | None = None) -> None:
        self.click_profile = click_profile

    @abstractmethod
    def decide(
        self, state: GameState, options: list[PurchaseOption]
    ) -> PurchaseOption | None:
        """Return the option to buy now, or None to keep saving."""
        ...

    def get_clicks(self, state: GameState, duration: float) -> int:
        """Return clicks during this tick. Override or use click_profile."""
        if self.click_profile:
            return self.click_profile.get_clicks(duration)
        return 0

    @abstractmethod
    def describe(self) -> str: ...

    def _describe_clicks(self) -> str:
        if self.click_profile and self.click_profile.clicks_per_second > 0:
            return f" ({self.click_profile.clicks_per_second:g} CPS)"
        return ""


class GreedyCheapest(Strategy):
    """Buy the cheapest affordable option first."""

    def decide(
        self, state: GameState, options: list[PurchaseOption]
    ) -> PurchaseOption | None:
        affordable = [o for o in options if o.affordable]
        if not affordable:
            return None
        return min(affordable, key=lambda o: o.cost)

    def describe(self) -> str:
        return "GreedyCheapest" + self._describe_clicks()


class GreedyROI(Strategy):
    """Buy the affordable option with the best production gain per point spent."""

    def decide(
        self, state: GameState, options: list[PurchaseOption]
    ) -> PurchaseOption | None:
        affordable = [o for o in options if o.affordable]
        if not affordable:
            return None

        def score(o: PurchaseOption) -> tuple[float, float]:
            # Ties, including zero-gain options, go to the cheapest
            roi = o.production_gain / o.cost if o.cost > 0 else float("inf")
            return (roi, -o.cost)

        return max(affordable, key=score)

    def describe(self) -> str:
        return "GreedyROI" + self._describe_clicks()
