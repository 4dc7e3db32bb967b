#!/usr/bin/env python3
"""
PWR Simulator - Headless CLI

Runs a simulation session without a display and prints the resulting plant
state. Useful for checking a tuning file or reproducing a trip transient.

Examples:
  # Ten wall seconds at full power
  python pwr_sim.py run --duration 10

  # Trip after 2 seconds and export the trend history
  python pwr_sim.py run --duration 10 --scram-at 2 --csv trend.csv

  # Show the effective configuration
  python pwr_sim.py show-config --config my_tuning.yaml
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pwr_simulator.exceptions import PWRSimulatorError
from pwr_simulator.simulator.config import DEFAULT_CONFIG_PATH, SimulationConfig, load_config
from pwr_simulator.simulator.core.sim import ControlAction, ReactorSimulator
from pwr_simulator.simulator.state.interfaces import REACTOR_STATE_VARIABLES

console = Console()


def build_simulator(config_path: Optional[str], frame_rate: Optional[float] = None,
                    seed: Optional[int] = None) -> ReactorSimulator:
    """Create a session from a YAML file (or the packaged defaults) plus CLI overrides"""
    constants, config = load_config(config_path or DEFAULT_CONFIG_PATH)
    overrides = config.to_dict()
    if frame_rate is not None:
        overrides["frame_rate"] = frame_rate
    if seed is not None:
        overrides["seed"] = seed
    return ReactorSimulator(constants=constants, config=SimulationConfig.from_dict(overrides))


def state_table(sim: ReactorSimulator) -> Table:
    """Rich table of the current plant state"""
    table = Table(title=f"Plant State at {sim.sim_clock}")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Unit", style="dim")

    snapshot = sim.snapshot()
    for name, variable in REACTOR_STATE_VARIABLES.items():
        value = snapshot[name]
        if isinstance(value, float):
            text = f"{value:,.2f}"
        else:
            text = str(value)
        style = "red" if not variable.is_in_range(value) else None
        table.add_row(variable.description, text, variable.unit, style=style)
    return table


def run_command(args: argparse.Namespace) -> int:
    sim = build_simulator(args.config, frame_rate=args.frame_rate, seed=args.seed)
    frame_dt = sim.config.nominal_dt

    if args.rod_step:
        sim.queue_action(ControlAction.ROD_NUDGE, args.rod_step)

    frames = int(round(args.duration / frame_dt))
    scram_frame = None if args.scram_at is None else int(round(args.scram_at / frame_dt))

    with console.status("Running simulation..."):
        for frame in range(frames):
            if frame == scram_frame:
                sim.queue_action(ControlAction.SCRAM)
            sim.tick(frame_dt)

    console.print(state_table(sim))
    console.print(Panel(sim.scram_system.get_safety_status_summary(sim.state).rstrip(),
                        title="Safety", border_style="red" if sim.state.is_scram else "green"))

    if args.csv:
        rows = sim.history.export_to_csv(args.csv)
        console.print(f"Exported {rows} trend samples to {args.csv}")
    return 0


def show_config_command(args: argparse.Namespace) -> int:
    constants, config = load_config(args.config or DEFAULT_CONFIG_PATH)

    for title, values in (("Physics", constants.to_dict()), ("Simulation", config.to_dict())):
        table = Table(title=title)
        table.add_column("Setting", style="cyan")
        table.add_column("Value", justify="right")
        for key, value in values.items():
            table.add_row(key, str(value))
        console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="PWR Simulator - headless CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1],
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    # Also accepted after the sub-command; SUPPRESS keeps the top-level value when absent
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--verbose", "-v", action="store_true", default=argparse.SUPPRESS,
                        help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", parents=[common], help="Run a headless session")
    run_parser.add_argument("--duration", type=float, default=10.0, help="Wall seconds to simulate (default: 10)")
    run_parser.add_argument("--frame-rate", type=float, help="Physics ticks per second")
    run_parser.add_argument("--seed", type=int, help="Random seed for reproducible noise")
    run_parser.add_argument("--config", help="YAML configuration file")
    run_parser.add_argument("--scram-at", type=float, help="Trip the reactor after this many wall seconds")
    run_parser.add_argument("--rod-step", type=int, default=0, help="Rod nudge (steps) applied before the first tick")
    run_parser.add_argument("--csv", help="Export the trend history to this CSV file")

    config_parser = subparsers.add_parser("show-config", parents=[common], help="Show the effective configuration")
    config_parser.add_argument("--config", help="YAML configuration file")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "run":
            return run_command(args)
        if args.command == "show-config":
            return show_config_command(args)
    except KeyboardInterrupt:
        console.print("\nOperation cancelled by user")
        return 1
    except PWRSimulatorError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1
    return 1


if __name__ == "__main__":
    sys.exit(main())
