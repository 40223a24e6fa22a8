"""MCP server wrapping GameRuntime for interactive AI playtesting."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from mcp.server.fastmcp import FastMCP

from clicker.commands import CommandInterpreter
from clicker.definition import GameDefinition
from clicker.persistence import SaveFileError
from clicker.purchase import PurchaseResult
from clicker.runtime import GameRuntime

# Maximum seconds per wait() call (24 hours)
_MAX_WAIT = 86400
# Maximum clicks per click() call
_MAX_CLICKS = 1000


@dataclass
class _GameHolder:
    """Holds the active game definition and runtime."""

    definition: GameDefinition
    runtime: GameRuntime
    save_path: str | None = None
    interpreter: CommandInterpreter = field(init=False)

    def __post_init__(self) -> None:
        self.interpreter = CommandInterpreter(self.runtime, self.save_path)


def _result_dict(result: PurchaseResult) -> dict[str, Any]:
    out: dict[str, Any] = {
        "success": result.success,
        "name": result.name,
        "cost": round(result.cost, 2),
    }
    if result.reason is not None:
        out["reason"] = result.reason.name.lower()
    return out


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_game_info(holder: _GameHolder) -> dict[str, Any]:
    defn = holder.definition
    return {
        "name": defn.config.name,
        "click_power": defn.config.click_power,
        "buildings": [
            {
                "number": i + 1,
                "name": b.name,
                "base_cost": b.base_cost,
                "base_production": b.base_production,
                "upgrades": [
                    {
                        "name": u.name,
                        "cost": u.cost,
                        "production_multiplier": u.production_multiplier,
                        "description": u.description,
                    }
                    for u in b.upgrades
                ],
            }
            for i, b in enumerate(defn.buildings)
        ],
    }


def _tool_get_game_state(holder: _GameHolder) -> dict[str, Any]:
    runtime = holder.runtime
    state = runtime.get_state()
    buildings = []
    for i, (bdef, bstate) in enumerate(zip(holder.definition.buildings, state.buildings)):
        buildings.append({
            "name": bdef.name,
            "count": bstate.count,
            "cost": round(runtime.building_cost(i), 2),
            "production": round(runtime.building_production(i), 4),
            "upgrades_purchased": [u.purchased for u in bstate.upgrades],
        })
    return {
        "points": round(state.points, 2),
        "total_points_earned": round(state.total_points_earned, 2),
        "production": round(runtime.total_production(), 4),
        "click_power": state.click_power,
        "buildings": buildings,
    }


def _tool_get_available_purchases(holder: _GameHolder) -> dict[str, Any]:
    result = []
    for opt in holder.runtime.available_purchases():
        time_to_afford = holder.runtime.compute_time_to_afford(opt.cost)
        result.append({
            "command": opt.label,
            "kind": opt.kind.name.lower(),
            "name": opt.name,
            "cost": round(opt.cost, 2),
            "production_gain": round(opt.production_gain, 4),
            "affordable": opt.affordable,
            "time_to_afford": round(time_to_afford, 2) if time_to_afford is not None else None,
        })
    return {"purchases": result}


def _tool_click(holder: _GameHolder, count: int = 1) -> dict[str, Any]:
    if count < 1:
        return {"error": "Count must be at least 1"}
    if count > _MAX_CLICKS:
        return {"error": f"Count cannot exceed {_MAX_CLICKS}"}

    total = 0.0
    for _ in range(count):
        total += holder.runtime.click()
    return {
        "clicks": count,
        "total_earned": round(total, 2),
        "new_balance": round(holder.runtime.get_state().points, 2),
    }


def _tool_buy_building(holder: _GameHolder, number: int) -> dict[str, Any]:
    if not 1 <= number <= len(holder.definition.buildings):
        return {"error": f"Unknown building number: {number}"}
    return _result_dict(holder.runtime.buy_building(number - 1))


def _tool_buy_upgrade(holder: _GameHolder, number: int, slot: str) -> dict[str, Any]:
    if not 1 <= number <= len(holder.definition.buildings):
        return {"error": f"Unknown building number: {number}"}
    slot = slot.strip().lower()
    bdef = holder.definition.buildings[number - 1]
    index = ord(slot) - ord("a") if len(slot) == 1 else -1
    if not 0 <= index < len(bdef.upgrades):
        return {"error": f"Unknown upgrade slot for {bdef.name}: {slot!r}"}
    return _result_dict(holder.runtime.buy_upgrade(number - 1, index))


def _tool_command(holder: _GameHolder, line: str) -> dict[str, Any]:
    result = holder.interpreter.handle(line)
    # Quitting ends a terminal session; here it only acknowledges
    return {"message": result.message, "quit": result.quit}


def _tool_wait(holder: _GameHolder, seconds: float) -> dict[str, Any]:
    if not math.isfinite(seconds):
        return {"error": "Seconds must be a finite number"}
    if seconds <= 0:
        return {"error": "Seconds must be positive"}
    if seconds > _MAX_WAIT:
        return {"error": f"Cannot wait more than {_MAX_WAIT} seconds (24h) per call"}

    earned = holder.runtime.tick(seconds)
    state = holder.runtime.get_state()
    return {
        "waited": seconds,
        "earned": round(earned, 2),
        "points": round(state.points, 2),
        "production": round(holder.runtime.total_production(), 4),
    }


def _tool_save(holder: _GameHolder) -> dict[str, Any]:
    try:
        path = holder.runtime.save(holder.save_path)
    except OSError as e:
        return {"success": False, "error": str(e)}
    return {"success": True, "path": str(path)}


def _tool_load(holder: _GameHolder) -> dict[str, Any]:
    try:
        loaded = holder.runtime.load(holder.save_path)
    except SaveFileError as e:
        return {"success": False, "error": "corrupt save", "problems": e.problems}
    except OSError as e:
        return {"success": False, "error": str(e)}
    if not loaded:
        return {"success": False, "error": "no save found"}
    return {"success": True}


def _tool_new_game(holder: _GameHolder) -> dict[str, Any]:
    holder.runtime.new_game()
    return {"success": True, "message": "Game reset to initial state"}


# ── Server factory ──────────────────────────────────────────────────


def create_server(definition: GameDefinition, save_path: str | None = None) -> FastMCP:
    """Create an MCP server wrapping a GameRuntime for the given definition."""
    holder = _GameHolder(
        definition=definition,
        runtime=GameRuntime(definition),
        save_path=save_path,
    )

    mcp = FastMCP(
        name=f"Clicker: {definition.config.name}",
    )

    @mcp.tool()
    def get_game_info() -> dict[str, Any]:
        """Get static game overview: buildings, base costs, upgrades."""
        return _tool_get_game_info(holder)

    @mcp.tool()
    def get_game_state() -> dict[str, Any]:
        """Get current points, production, building counts and purchased upgrades."""
        return _tool_get_game_state(holder)

    @mcp.tool()
    def get_available_purchases() -> dict[str, Any]:
        """Get every building and unpurchased upgrade with cost and time-to-afford."""
        return _tool_get_available_purchases(holder)

    @mcp.tool()
    def click(count: int = 1) -> dict[str, Any]:
        """Click N times (max 1000). Returns total earned."""
        return _tool_click(holder, count)

    @mcp.tool()
    def buy_building(number: int) -> dict[str, Any]:
        """Buy one building by its 1-based number."""
        return _tool_buy_building(holder, number)

    @mcp.tool()
    def buy_upgrade(number: int, slot: str) -> dict[str, Any]:
        """Buy an upgrade: building number plus slot letter ("a", "b", ...)."""
        return _tool_buy_upgrade(holder, number, slot)

    @mcp.tool()
    def command(line: str) -> dict[str, Any]:
        """Send a raw terminal command such as "c", "2", "1a", "s" or "l"."""
        return _tool_command(holder, line)

    @mcp.tool()
    def wait(seconds: float) -> dict[str, Any]:
        """Advance game time by the given seconds (max 86400)."""
        return _tool_wait(holder, seconds)

    @mcp.tool()
    def save() -> dict[str, Any]:
        """Write the game to the save file."""
        return _tool_save(holder)

    @mcp.tool()
    def load() -> dict[str, Any]:
        """Replace the game with the save file contents."""
        return _tool_load(holder)

    @mcp.tool()
    def new_game() -> dict[str, Any]:
        """Reset the game to initial state."""
        return _tool_new_game(holder)

    return mcp
