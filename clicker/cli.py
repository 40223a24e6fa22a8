from __future__ import annotations

import argparse
import logging
import sys

from clicker.commands import FAREWELL, CommandInterpreter
from clicker.definition import default_definition
from clicker.formatting import format_text_report
from clicker.loop import GameLoop
from clicker.runtime import GameRuntime
from clicker.simulation import Simulation
from clicker.strategy import ClickProfile, GreedyCheapest, GreedyROI, Strategy

logger = logging.getLogger(__name__)

LOG_FILE = "clicker.log"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clicker",
        description="Terminal Clicker: an idle game for the terminal",
    )
    sub = parser.add_subparsers(dest="command")

    play = sub.add_parser("play", help="Play the game (default)")
    play.add_argument("--save-file", default=None, help="Save file path")
    play.add_argument(
        "--log-file", default=LOG_FILE, help=f"Log file path (default: {LOG_FILE})"
    )
    play.add_argument(
        "--no-load", action="store_true", help="Start fresh instead of loading the save"
    )

    sim = sub.add_parser("simulate", help="Run a headless balance simulation")
    sim.add_argument(
        "--strategy",
        default="greedy_cheapest",
        choices=["greedy_cheapest", "greedy_roi"],
        help="Strategy to use (default: greedy_cheapest)",
    )
    sim.add_argument("--cps", type=float, default=0.0, help="Clicks per second")
    sim.add_argument(
        "--duration", type=float, default=3600, help="Simulated time (s)"
    )
    sim.add_argument(
        "--tick-resolution", type=float, default=1.0, help="Seconds per tick"
    )
    sim.add_argument("--plot", default=None, help="Plot output path (PNG)")

    return parser


def build_strategy(name: str, cps: float) -> Strategy:
    click_profile = ClickProfile(clicks_per_second=cps) if cps > 0 else None
    if name == "greedy_roi":
        return GreedyROI(click_profile=click_profile)
    return GreedyCheapest(click_profile=click_profile)


def play(save_file: str | None = None, log_file: str = LOG_FILE, load: bool = True) -> int:
    """Run the interactive game until the player quits. Returns the exit code."""
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.FileHandler(log_file, mode="a", encoding="utf-8")],
    )
    logger.info("--- Game Start ---")

    runtime = GameRuntime(default_definition())
    interpreter = CommandInterpreter(runtime, save_path=save_file)
    loop = GameLoop(runtime, interpreter)

    if load:
        # Same path as the "l" command, so the outcome shows in the status line
        loop.status = interpreter.handle("l").message
    try:
        loop.run()
    except KeyboardInterrupt:
        print("\n" + FAREWELL)
    logger.info("--- Game End ---")
    return 0


def simulate(args: argparse.Namespace) -> int:
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
    strategy = build_strategy(args.strategy, args.cps)
    sim = Simulation(
        definition=default_definition(),
        strategy=strategy,
        duration=args.duration,
        tick_resolution=args.tick_resolution,
    )
    report = sim.run()
    print(format_text_report(report))

    if args.plot:
        from clicker.visualization import plot_simulation
        plot_simulation(report, args.plot)
        print(f"\nPlot saved to {args.plot}")
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None or args.command == "play":
        code = play(
            save_file=getattr(args, "save_file", None),
            log_file=getattr(args, "log_file", LOG_FILE),
            load=not getattr(args, "no_load", False),
        )
    else:
        code = simulate(args)
    sys.exit(code)
