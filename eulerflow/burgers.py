"""Linear advection of a step profile with a MacCormack scheme on a 1D grid."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np

from .state import artificial_viscosity

__all__ = [
    "AdvectionResult",
    "advance",
    "initial_condition",
    "solve",
    "write_csv",
]

# Advection speed; the flux is this times the advected quantity.
_SPEED = 1.0
_VISC_FAC = 0.5


@dataclass(frozen=True)
class AdvectionResult:
    """Final profile of an advection run together with its solver settings."""

    x: np.ndarray
    u: np.ndarray
    steps: int
    courant: float
    viscosity: float


def initial_condition(nx: int):
    """Return (x, u) for a unit step: u is 1.0 on the left half and 0.1 on the right."""
    if nx < 1:
        raise ValueError(f"number of cells must be positive, got {nx}")
    index = np.arange(nx)
    x = index * (1.0 / nx)
    u = np.where(index < nx // 2, 1.0, 0.1)
    return x, u


def _second_difference(field: np.ndarray) -> np.ndarray:
    return field[2:] + field[:-2] - 2.0 * field[1:-1]


def advance(u, dt: float, dx: float, nu: float) -> np.ndarray:
    """Advance the profile one step: predictor, corrector, then anti-diffusion.

    The two end cells are held at their values.
    """
    field = np.array(u, dtype=float)
    if field.ndim != 1 or field.size < 3:
        raise ValueError(f"expected a 1D profile of at least 3 cells, got shape {field.shape}")
    if not dx > 0.0:
        raise ValueError(f"grid spacing must be positive, got {dx}")
    ratio = dt / dx

    flux = _SPEED * field
    predicted = field.copy()
    predicted[1:-1] = (
        field[1:-1] - ratio * (flux[2:] - flux[1:-1]) + nu * _second_difference(field)
    )

    predicted_flux = _SPEED * predicted
    smoothing = nu * _second_difference(predicted)
    updated = field.copy()
    updated[1:-1] = (
        0.5 * (field[1:-1] + predicted[1:-1])
        - 0.5 * ratio * (predicted_flux[1:-1] - predicted_flux[:-2])
        + smoothing
    )
    updated[1:-1] -= smoothing
    return updated


def solve(nx: int = 4096, dt: float = 1.0e-4, t_end: float = 0.4) -> AdvectionResult:
    """Advect the step profile for ``int(t_end / dt)`` steps."""
    if nx < 3:
        raise ValueError(f"grid must have at least 3 cells, got {nx}")
    if not dt > 0.0:
        raise ValueError(f"time step must be positive, got {dt}")
    if t_end < 0.0:
        raise ValueError(f"end time must not be negative, got {t_end}")
    dx = 1.0 / nx
    courant = _SPEED * dt / dx
    nu = artificial_viscosity(_VISC_FAC, courant)
    x, u = initial_condition(nx)
    steps = int(t_end / dt)
    for _ in range(steps):
        u = advance(u, dt, dx, nu)
    return AdvectionResult(x=x, u=u, steps=steps, courant=courant, viscosity=nu)


def write_csv(path, x, u) -> Path:
    """Write ``x,u`` pairs with six decimals, one per line."""
    xs = np.asarray(x, dtype=float)
    us = np.asarray(u, dtype=float)
    if xs.ndim != 1 or us.ndim != 1 or xs.shape != us.shape:
        raise ValueError(f"x and u must be 1D of equal length, got {xs.shape} and {us.shape}")
    target = Path(path)
    target.write_text("".join(f"{a:f},{b:f}\n" for a, b in zip(xs, us)))
    return target