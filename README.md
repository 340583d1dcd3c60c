# eulerflow

Explicit finite-difference solvers for the two-dimensional compressible Euler
equations on a uniform grid over a domain one unit wide, plus a small solver
for one-dimensional linear advection of a step profile.

Features:

- MacCormack predictor–corrector scheme with artificial viscosity
- Lax–Friedrichs scheme
- Zero-gradient (outflow) boundaries on all four sides
- Solid internal obstacles given as boolean masks: half-planes, ramps and
  circles. Inside an obstacle the momentum is held at zero.
- Time step chosen from the CFL number and the fastest signal speed
- Fields written as plain whitespace-separated text, one grid row per line

## Installation

```
pip install .
```

To include the test dependencies:

```
pip install .[test]
```

## Command line

```
eulerflow [scenario] [--nx N] [--ny N] [--t-end T] [--dt DT] [--output-dir DIR]
```

The scenario defaults to `corner-obstacle`. The built-in scenarios are:

| name               | set-up                                                         |
|--------------------|----------------------------------------------------------------|
| `shock-tube`       | Sod shock tube, 64x64 grid, MacCormack                         |
| `shock-tube-lf`    | Sod shock tube, 256x4 strip, Lax–Friedrichs                    |
| `oblique-shock`    | Mach 4 stream striking a circular cylinder in the middle       |
| `ramp-flow`        | Mach 2 stream under a wall sloping at 15 degrees, flat past x = 0.6 |
| `corner-obstacle`  | Mach 2 stream with a quarter-disc obstacle in the lower-left corner |
| `burgers`          | 1D linear advection of a step profile                          |

For example:

```
eulerflow shock-tube
eulerflow oblique-shock --nx 128 --ny 128 --output-dir results
eulerflow burgers --nx 512 --t-end 0.1
eulerflow --help
```

`--nx`, `--ny`, `--t-end` and `--output-dir` override the scenario's settings;
`--dt` sets the fixed time step and applies to `burgers` only. Progress lines
are printed every few steps.

Files written into the output directory (`.` by default, `output` for
`corner-obstacle`):

- `bound.txt` – the obstacle mask as 0/1, when the scenario has an obstacle
- `rho-0.txt`, `p-0.txt` – initial fields, for the scenarios that record them
- `rho.txt`, `p.txt`, `u.txt`, `v.txt` – final density, pressure and velocities
- `output.csv` – `x,u` pairs, for `burgers`

Invalid settings are reported on standard error and the command exits with
status 1.

## Library use

```python
from eulerflow.scenarios import Simulation, get_scenario, scenario_names
from eulerflow.output import write_fields

print(scenario_names())
simulation = Simulation(get_scenario("oblique-shock"))
for report in simulation.run():
    if report.step % 25 == 0:
        print(report)
write_fields("output", simulation.state)
```

`Simulation.run()` yields a `StepReport` (step, time, max_speed, dt) for every
step until the scenario's end time; `Simulation.step()` advances a single step.
`Simulation.state` gives the current primitive fields as a `FlowState`.
Scenarios are frozen dataclasses, so settings can be changed with
`dataclasses.replace(scenario, nx=128, ny=128)`.

The building blocks are also available one at a time:

- `eulerflow.state` – `FlowState`, conversion between primitive and conserved
  variables, `fluxes`, `max_signal_speed`, `time_step` and
  `artificial_viscosity`.
- `eulerflow.schemes` – `maccormack_step`, `lax_friedrichs_step`,
  `apply_outflow_boundaries` and the `Scheme` enum.
- `eulerflow.obstacles` – `grid_coordinates`, `half_plane_mask`, `ramp_mask`
  and `circle_mask`.
- `eulerflow.output` – `format_field`, `format_mask`, `write_field`,
  `write_mask`, `write_fields` and `read_field`.
- `eulerflow.burgers` – `initial_condition`, `advance`, `solve` and
  `write_csv` for linear advection.

```python
from eulerflow.burgers import solve, write_csv

result = solve(nx=512, dt=1.0e-4, t_end=0.1)
write_csv("output.csv", result.x, result.u)
```

## Limitations

The package does not plot or visualise results; it only writes the fields as
text files for other tools to read.