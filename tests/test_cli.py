import numpy as np
import pytest

from eulerflow.cli import build_parser, main
from eulerflow.output import read_field


def test_parser_defaults_to_corner_obstacle():
    args = build_parser().parse_args([])
    assert args.scenario == "corner-obstacle"
    assert args.nx is None
    assert args.t_end is None


def test_parser_rejects_unknown_scenario():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["no-such-flow"])


def test_shock_tube_run_writes_fields(tmp_path, capsys):
    status = main(["shock-tube", "--nx", "8", "--ny", "8", "--t-end", "0.01",
                   "--output-dir", str(tmp_path)])
    assert status == 0
    out = capsys.readouterr().out
    assert out.startswith("Running McMormick Scheme")
    assert "Simulation ended at step" in out.splitlines()[-1]
    for name in ("rho", "p", "u", "v"):
        field = read_field(tmp_path / f"{name}.txt")
        assert field.shape == (8, 8)
    assert not (tmp_path / "bound.txt").exists()


def test_lax_friedrichs_run_writes_initial_fields(tmp_path, capsys):
    status = main(["shock-tube-lf", "--nx", "16", "--t-end", "0.01",
                   "--output-dir", str(tmp_path)])
    assert status == 0
    assert capsys.readouterr().out.startswith("Running Lax-Friedrich's Scheme")
    rho0 = read_field(tmp_path / "rho-0.txt")
    assert rho0.shape == (4, 16)
    assert rho0[0, 0] == 1.0
    assert rho0[0, -1] == 0.125
    assert (tmp_path / "p-0.txt").exists()


def test_corner_obstacle_writes_mask(tmp_path):
    status = main(["corner-obstacle", "--nx", "16", "--ny", "16", "--t-end", "0.005",
                   "--output-dir", str(tmp_path)])
    assert status == 0
    bound = read_field(tmp_path / "bound.txt")
    assert bound.shape == (16, 16)
    assert bound[0, 0] == 1
    assert bound[-1, -1] == 0
    assert set(np.unique(bound)) <= {0.0, 1.0}
    assert (tmp_path / "rho-0.txt").exists()


def test_negative_end_time_is_reported(tmp_path, capsys):
    status = main(["shock-tube", "--t-end", "-1", "--output-dir", str(tmp_path)])
    assert status == 1
    assert "end time" in capsys.readouterr().err


def test_burgers_run_writes_csv(tmp_path, capsys):
    status = main(["burgers", "--nx", "16", "--dt", "0.03125", "--t-end", "0.125",
                   "--output-dir", str(tmp_path)])
    assert status == 0
    assert capsys.readouterr().out.strip() == "Max step is 4.000000"
    lines = (tmp_path / "output.csv").read_text().splitlines()
    assert len(lines) == 16
    assert lines[0].startswith("0.000000,")


def test_burgers_rejects_bad_time_step(tmp_path):
    status = main(["burgers", "--nx", "16", "--dt", "0", "--output-dir", str(tmp_path)])
    assert status == 1
    assert not (tmp_path / "output.csv").exists()