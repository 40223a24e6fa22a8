from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clicker.definition import BuildingDef, GameDefinition
    from clicker.state import BuildingState, GameState


def building_cost(bdef: BuildingDef, bstate: BuildingState) -> float:
    """Price of the next unit at the current count."""
    return bdef.cost_scaling.compute(bdef.base_cost, bstate.count)


def building_multiplier(bdef: BuildingDef, bstate: BuildingState) -> float:
    """Product of the multipliers of all purchased upgrades."""
    mult = 1.0
    for udef, ustate in zip(bdef.upgrades, bstate.upgrades):
        if ustate.purchased:
            mult *= udef.production_multiplier
    return mult


def building_production(bdef: BuildingDef, bstate: BuildingState) -> float:
    """Points per second produced by all units of one building."""
    return bstate.count * bdef.base_production * building_multiplier(bdef, bstate)


def total_production(definition: GameDefinition, state: GameState) -> float:
    """Points per second across every building."""
    return sum(
        building_production(bdef, bstate)
        for bdef, bstate in zip(definition.buildings, state.buildings)
    )
