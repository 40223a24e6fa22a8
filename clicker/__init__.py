# clicker: Terminal Idle Clicker Game & Balance Simulation

from clicker.cost_scaling import CostScaling
from clicker.definition import (
    BuildingDef,
    GameConfig,
    GameDefinition,
    UpgradeDef,
    default_definition,
)
from clicker.state import BuildingState, GameState, UpgradeState
from clicker.economy import (
    building_cost,
    building_multiplier,
    building_production,
    total_production,
)
from clicker.purchase import (
    PurchaseFailure,
    PurchaseKind,
    PurchaseOption,
    PurchaseResult,
)
from clicker.persistence import SaveFileError, load_game, save_game
from clicker.runtime import GameRuntime
from clicker.formatting import format_number, format_text_report
from clicker.display import render_screen
from clicker.commands import CommandInterpreter, CommandResult
from clicker.loop import GameLoop
from clicker.strategy import ClickProfile, GreedyCheapest, GreedyROI, Strategy
from clicker.metrics import MetricsCollector
from clicker.simulation import Simulation
from clicker.report import SimulationReport, build_report

__all__ = [
    # Cost
    "CostScaling",
    # Definition
    "BuildingDef",
    "GameConfig",
    "GameDefinition",
    "UpgradeDef",
    "default_definition",
    # State
    "BuildingState",
    "GameState",
    "UpgradeState",
    # Economy
    "building_cost",
    "building_multiplier",
    "building_production",
    "total_production",
    # Purchases
    "PurchaseFailure",
    "PurchaseKind",
    "PurchaseOption",
    "PurchaseResult",
    # Persistence
    "SaveFileError",
    "load_game",
    "save_game",
    # Runtime
    "GameRuntime",
    # Terminal
    "format_number",
    "render_screen",
    "CommandInterpreter",
    "CommandResult",
    "GameLoop",
    # Simulation
    "ClickProfile",
    "GreedyCheapest",
    "GreedyROI",
    "Strategy",
    "MetricsCollector",
    "Simulation",
    "SimulationReport",
    "build_report",
    "format_text_report",
]
