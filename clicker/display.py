from __future__ import annotations

from typing import TYPE_CHECKING

from clicker.formatting import format_number
from clicker.purchase import command_label

if TYPE_CHECKING:
    from clicker.runtime import GameRuntime

# Erase the whole screen, then move the cursor home
CLEAR_SCREEN = "\033[2J\033[H"

LEGEND = [
    "C - Click for points",
    "1-{n} - Buy building (number corresponds to the building)",
    "{upgrades} - Buy upgrade",
    "S - Save game",
    "L - Load game",
    "Q - Quit game",
]


def _legend(runtime: GameRuntime) -> list[str]:
    buildings = runtime.definition.buildings
    labels = [
        command_label(i, j)
        for i, bdef in enumerate(buildings)
        for j in range(len(bdef.upgrades))
    ]
    return [
        line.format(n=len(buildings), upgrades=", ".join(labels))
        for line in LEGEND
    ]


def render_screen(runtime: GameRuntime, status: str = "") -> str:
    """Return the full status screen as text."""
    definition = runtime.definition
    state = runtime.get_state()
    lines: list[str] = []

    title = definition.config.name.upper()
    lines.append(f"=== {title} ===")
    lines.append(
        f"Points: {format_number(state.points)} "
        f"({format_number(runtime.total_production())} per second)"
    )
    lines.append(f"Total earned: {format_number(state.total_points_earned)}")

    lines.append("")
    lines.append("=== BUILDINGS ===")
    for i, (bdef, bstate) in enumerate(zip(definition.buildings, state.buildings)):
        lines.append(
            f"{i + 1}. {bdef.name}: {bstate.count} | "
            f"Cost: {format_number(runtime.building_cost(i))} points | "
            f"Producing: {format_number(runtime.building_production(i))} per second"
        )

    lines.append("")
    lines.append("=== UPGRADES ===")
    for i, (bdef, bstate) in enumerate(zip(definition.buildings, state.buildings)):
        for j, (udef, ustate) in enumerate(zip(bdef.upgrades, bstate.upgrades)):
            if ustate.purchased:
                continue
            lines.append(
                f"{command_label(i, j)}. {bdef.name} - {udef.name}: "
                f"{format_number(udef.cost)} points | {udef.description}"
            )

    lines.append("")
    lines.append("=== COMMANDS ===")
    lines.extend(_legend(runtime))

    if status:
        lines.append("")
        lines.append(status)

    return "\n".join(lines)
