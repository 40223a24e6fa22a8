from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clicker.report import SimulationReport

_SUFFIXES: list[tuple[float, str]] = [
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
]

# Wide enough to quantize any finite float without InvalidOperation
_FIXED_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)
_ONE_DECIMAL = Decimal("0.1")
_TWO_DECIMALS = Decimal("0.01")


def _fixed(value: float, places: Decimal) -> str:
    """Fixed-point text with exact ties rounded away from zero (1.125 -> 1.13)."""
    if not math.isfinite(value):
        return str(value)
    return f"{Decimal(value).quantize(places, context=_FIXED_CONTEXT):f}"


def format_number(value: float) -> str:
    """Abbreviate a non-negative magnitude: 999.5, 1.50K, 2.00M, 3.10B."""
    for threshold, suffix in _SUFFIXES:
        if value >= threshold:
            return _fixed(value / threshold, _TWO_DECIMALS) + suffix
    return _fixed(value, _ONE_DECIMAL)


def format_text_report(report: SimulationReport) -> str:
    """Format a simulation report for console output."""
    lines: list[str] = []

    lines.append("=" * 30 + " Clicker Simulation Report " + "=" * 30)
    lines.append(f"Strategy: {report.strategy_description}")
    lines.append(f"Result: {report.outcome} at {report.total_time:.1f}s")
    lines.append(
        f"Final: {format_number(report.final_points)} points, "
        f"{format_number(report.final_production)} per second, "
        f"{format_number(report.final_total_earned)} earned"
    )
    lines.append("")

    # First purchase of each item
    if report.first_purchase_times:
        lines.append("FIRST PURCHASES:")
        for name, t in sorted(report.first_purchase_times.items(), key=lambda kv: kv[1]):
            lines.append(f"  * {name:.<30s} {t:.1f}s")
        lines.append("")

    lines.append("PURCHASES:")
    lines.append(f"  Total: {len(report.purchases)}")
    lines.append(f"  Rate: {report.purchases_per_minute:.1f}/min")
    lines.append(f"  Max gap: {report.max_purchase_gap:.1f}s")
    lines.append(f"  Mean gap: {report.mean_purchase_gap:.1f}s")

    return "\n".join(lines)
