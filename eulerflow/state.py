"""Primitive and conserved variables of the two-dimensional Euler equations."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

__all__ = [
    "FlowState",
    "artificial_viscosity",
    "conserved_from_primitive",
    "fluxes",
    "max_signal_speed",
    "primitive_from_conserved",
    "time_step",
]


def _check_gamma(gamma: float) -> None:
    if gamma <= 1.0:
        raise ValueError(f"adiabatic index must exceed 1, got {gamma}")


def _as_fields(*fields):
    arrays = [np.asarray(field, dtype=float) for field in fields]
    return np.broadcast_arrays(*arrays)


def conserved_from_primitive(rho, u, v, p, gamma: float) -> np.ndarray:
    """Stack density, x/y momentum and total energy into shape (4, ny, nx)."""
    _check_gamma(gamma)
    rho, u, v, p = _as_fields(rho, u, v, p)
    energy = p / (gamma - 1.0) + 0.5 * rho * (u * u + v * v)
    return np.stack([rho, rho * u, rho * v, energy])


def primitive_from_conserved(conserved, gamma: float):
    """Return (rho, u, v, p) recovered from a (4, ny, nx) conserved array."""
    _check_gamma(gamma)
    data = np.asarray(conserved, dtype=float)
    if data.ndim < 1 or data.shape[0] != 4:
        raise ValueError("conserved variables must have a leading axis of length 4")
    rho = data[0].copy()
    with np.errstate(divide="ignore", invalid="ignore"):
        u = data[1] / data[0]
        v = data[2] / data[0]
    p = (data[3] - 0.5 * rho * (u * u + v * v)) * (gamma - 1.0)
    return rho, u, v, p


def fluxes(rho, u, v, p, gamma: float):
    """Return the x- and y-direction flux arrays, each of shape (4, ny, nx)."""
    _check_gamma(gamma)
    rho, u, v, p = _as_fields(rho, u, v, p)
    total = p / (gamma - 1.0) + p + 0.5 * rho * (u * u + v * v)
    fx = np.stack([rho * u, rho * u * u + p, rho * v * u, u * total])
    fy = np.stack([rho * v, rho * u * v, rho * v * v + p, v * total])
    return fx, fy


def max_signal_speed(rho, u, v, p, gamma: float) -> float:
    """Largest of the sound speeds and flow speeds over the grid.

    Cells where either quantity is undefined are ignored; the result is
    never below zero.
    """
    rho, u, v, p = _as_fields(rho, u, v, p)
    with np.errstate(divide="ignore", invalid="ignore"):
        sound = np.sqrt(gamma * p / rho)
    speed = np.hypot(u, v)
    best = 0.0
    for values in (sound, speed):
        flat = values.ravel()
        if flat.size:
            best = max(best, float(np.fmax.reduce(flat, initial=0.0)))
    return best


def time_step(cfl: float, dx: float, max_speed: float) -> float:
    """Time step allowed by the Courant condition."""
    if not max_speed > 0.0:
        raise ValueError(f"maximum signal speed must be positive, got {max_speed}")
    return cfl * dx / max_speed


def artificial_viscosity(visc_fac: float, cfl: float) -> float:
    """Artificial viscosity coefficient for the given scale factor and CFL number."""
    return visc_fac * (1.0 - cfl * cfl) / 6.0


@dataclass
class FlowState:
    """Primitive fields on a (ny, nx) grid."""

    rho: np.ndarray
    u: np.ndarray
    v: np.ndarray
    p: np.ndarray

    def __post_init__(self) -> None:
        fields = [np.array(f, dtype=float) for f in (self.rho, self.u, self.v, self.p)]
        shapes = {f.shape for f in fields}
        if len(shapes) != 1:
            raise ValueError(f"primitive fields differ in shape: {sorted(shapes)}")
        self.rho, self.u, self.v, self.p = fields

    @property
    def shape(self) -> tuple:
        return self.rho.shape

    def conserved(self, gamma: float) -> np.ndarray:
        """Conserved variables of this state."""
        return conserved_from_primitive(self.rho, self.u, self.v, self.p, gamma)

    @classmethod
    def from_conserved(cls, conserved, gamma: float) -> "FlowState":
        """Build a state from a (4, ny, nx) conserved array."""
        return cls(*primitive_from_conserved(conserved, gamma))

    def max_signal_speed(self, gamma: float) -> float:
        """Largest sound or flow speed in this state."""
        return max_signal_speed(self.rho, self.u, self.v, self.p, gamma)