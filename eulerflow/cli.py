"""Command line entry point that runs a named flow scenario."""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from .burgers import solve, write_csv
from .output import write_field, write_fields, write_mask
from .scenarios import Scenario, Simulation, get_scenario, scenario_names
from .schemes import Scheme

__all__ = ["build_parser", "main"]

_BURGERS = "burgers"
_DEFAULT = "corner-obstacle"


def build_parser() -> argparse.ArgumentParser:
    """Parser for the scenario name and the settings that may be overridden."""
    parser = argparse.ArgumentParser(
        prog="eulerflow", description="Run a compressible flow simulation."
    )
    parser.add_argument(
        "scenario",
        nargs="?",
        default=_DEFAULT,
        choices=scenario_names() + (_BURGERS,),
        help=f"set-up to run (default: {_DEFAULT})",
    )
    parser.add_argument("--nx", type=int, help="number of cells along x")
    parser.add_argument("--ny", type=int, help="number of cells along y")
    parser.add_argument("--t-end", type=float, dest="t_end", help="end time")
    parser.add_argument("--dt", type=float, help="fixed time step (burgers only)")
    parser.add_argument("--output-dir", dest="output_dir", help="directory for output files")
    return parser


def _configured(args: argparse.Namespace) -> Scenario:
    scenario = get_scenario(args.scenario)
    changes = {
        name: value
        for name, value in (("nx", args.nx), ("ny", args.ny), ("t_end", args.t_end),
                            ("output_dir", args.output_dir))
        if value is not None
    }
    return dataclasses.replace(scenario, **changes)


def _run_burgers(args: argparse.Namespace) -> None:
    nx = 4096 if args.nx is None else args.nx
    dt = 1.0e-4 if args.dt is None else args.dt
    t_end = 0.4 if args.t_end is None else args.t_end
    folder = Path(args.output_dir or ".")
    if dt > 0.0:
        print(f"Max step is {t_end / dt:f}")
    result = solve(nx, dt, t_end)
    folder.mkdir(parents=True, exist_ok=True)
    write_csv(folder / "output.csv", result.x, result.u)


def _run_scenario(scenario: Scenario) -> None:
    folder = Path(scenario.output_dir)
    folder.mkdir(parents=True, exist_ok=True)
    simulation = Simulation(scenario)

    mask = simulation.mask
    if mask is not None:
        write_mask(folder / "bound.txt", mask)
    initial = simulation.state
    for name in scenario.initial_fields:
        write_field(folder / f"{name}-0.txt", getattr(initial, name))

    if scenario.scheme is Scheme.LAX_FRIEDRICHS:
        print("Running Lax-Friedrich's Scheme")
    else:
        print("Running McMormick Scheme\n")

    for report in simulation.run():
        if report.step % scenario.report_every == 0:
            print(report)

    print(f"Simulation ended at step {simulation.steps:d} at time {simulation.time:f} ")
    write_fields(folder, simulation.state)


def main(argv=None) -> int:
    """Run the chosen scenario and write its fields; returns the exit status."""
    args = build_parser().parse_args(argv)
    try:
        if args.scenario == _BURGERS:
            _run_burgers(args)
        else:
            _run_scenario(_configured(args))
    except ValueError as error:
        print(f"eulerflow: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())