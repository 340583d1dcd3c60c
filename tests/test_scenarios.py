from dataclasses import replace

import numpy as np
import pytest

from eulerflow.schemes import Scheme
from eulerflow.state import FlowState, time_step
from eulerflow.scenarios import (
    Scenario,
    Simulation,
    StepReport,
    corner_obstacle,
    get_scenario,
    oblique_shock,
    ramp_flow,
    scenario_names,
    shock_tube,
    shock_tube_lax_friedrichs,
)


def _uniform(x, y, gamma):
    return FlowState(np.ones_like(x), np.full_like(x, 0.3), np.full_like(x, 0.2), np.ones_like(x))


def _uniform_scenario(scheme):
    return Scenario(
        name="uniform", nx=12, ny=10, cfl=0.5, t_end=0.02, gamma=1.4,
        visc_fac=0.25, scheme=scheme, initial=_uniform,
    )


def test_names_round_trip():
    names = scenario_names()
    assert len(names) == 5
    for name in names:
        assert get_scenario(name).name == name


def test_unknown_scenario_raises():
    with pytest.raises(ValueError):
        get_scenario("no-such-flow")


def test_shock_tube_settings_follow_source():
    sc = shock_tube()
    assert (sc.nx, sc.ny, sc.cfl, sc.t_end, sc.gamma) == (64, 64, 0.5, 0.2, 1.4)
    assert sc.scheme is Scheme.MACCORMACK
    assert sc.mask() is None
    lf = shock_tube_lax_friedrichs()
    assert (lf.nx, lf.ny, lf.cfl, lf.t_end) == (256, 4, 0.25, 0.1)
    assert lf.scheme is Scheme.LAX_FRIEDRICHS


def test_dx_is_inverse_of_nx():
    sc = replace(shock_tube(), nx=32, ny=8)
    assert sc.dx == pytest.approx(1.0 / 32)


def test_shock_tube_initial_state():
    state = replace(shock_tube(), nx=16, ny=4).initial_state()
    assert state.shape == (4, 16)
    assert np.all(state.rho[:, :8] == 1.0)
    assert np.all(state.rho[:, 8:] == 0.125)
    assert np.all(state.p[:, 8:] == 0.1)
    assert np.all(state.u == 0.0)


def test_oblique_mask_blocks_centre_only():
    mask = replace(oblique_shock(), nx=32, ny=32).mask()
    assert mask[16, 16]
    assert not mask[0, 0]
    assert not mask[31, 31]


def test_corner_mask_blocks_origin():
    mask = replace(corner_obstacle(), nx=32, ny=32).mask()
    assert mask[0, 0]
    assert not mask[16, 16]


def test_ramp_initial_state_has_two_regions():
    sc = replace(ramp_flow(), nx=32, ny=32)
    state = sc.initial_state()
    assert set(np.unique(state.rho)) == {0.5, 1.0}
    assert state.rho[0, 0] == 1.0
    assert state.rho[31, 31] == 0.5


def test_invalid_grid_rejected():
    with pytest.raises(ValueError):
        replace(shock_tube(), nx=2)


def test_invalid_report_interval_rejected():
    with pytest.raises(ValueError):
        replace(shock_tube(), report_every=0)


def test_initial_time_step_from_signal_speed():
    sc = replace(shock_tube(), nx=16, ny=16)
    sim = Simulation(sc)
    expected = time_step(sc.cfl, sc.dx, sc.initial_state().max_signal_speed(sc.gamma))
    assert sim.dt == pytest.approx(expected)
    assert sim.time == 0.0


def test_first_report_time_equals_new_dt():
    sim = Simulation(replace(shock_tube(), nx=16, ny=16))
    report = sim.step()
    assert report.step == 1
    assert report.time == pytest.approx(report.dt)
    assert report.dt == pytest.approx(time_step(0.5, 1 / 16, report.max_speed))


def test_run_reaches_end_time_with_increasing_steps():
    sc = replace(shock_tube(), nx=16, ny=16, t_end=0.02)
    sim = Simulation(sc)
    reports = list(sim.run())
    assert reports
    assert [r.step for r in reports] == list(range(1, len(reports) + 1))
    assert reports[-1].time >= sc.t_end
    assert all(r.time < sc.t_end for r in reports[:-1])


def test_zero_end_time_runs_no_steps():
    sim = Simulation(replace(shock_tube(), nx=8, ny=8, t_end=0.0))
    assert list(sim.run()) == []


@pytest.mark.parametrize("scheme", [Scheme.MACCORMACK, Scheme.LAX_FRIEDRICHS])
def test_uniform_flow_stays_uniform(scheme):
    sim = Simulation(_uniform_scenario(scheme))
    list(sim.run())
    state = sim.state
    assert np.allclose(state.rho, 1.0)
    assert np.allclose(state.u, 0.3)
    assert np.allclose(state.v, 0.2)
    assert np.allclose(state.p, 1.0)


def test_shock_tube_stays_uniform_across_rows():
    sim = Simulation(replace(shock_tube(), nx=16, ny=8, t_end=0.02))
    list(sim.run())
    rho = sim.state.rho
    assert np.allclose(rho, rho[0])


def test_blocked_cells_have_no_momentum():
    sim = Simulation(replace(oblique_shock(), nx=24, ny=24, t_end=0.01))
    sim.step()
    inner = np.zeros_like(sim.mask)
    inner[1:-1, 1:-1] = sim.mask[1:-1, 1:-1]
    assert inner.any()
    assert np.all(sim.conserved[1][inner] == 0.0)
    assert np.all(sim.conserved[2][inner] == 0.0)


def test_report_formatting():
    text = str(StepReport(step=25, time=0.5, max_speed=2.0, dt=0.25))
    assert text == "t = 0.500000, step = 25 , maxV = 2.000000, dt = 0.250000"