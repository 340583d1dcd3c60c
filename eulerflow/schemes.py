"""Finite-difference update steps for the conserved Euler variables."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

import numpy as np

from .state import fluxes, primitive_from_conserved

__all__ = [
    "Scheme",
    "apply_outflow_boundaries",
    "lax_friedrichs_step",
    "maccormack_step",
]


class Scheme(Enum):
    """Available time-stepping schemes."""

    MACCORMACK = "maccormack"
    LAX_FRIEDRICHS = "lax-friedrichs"


_INNER = (slice(None), slice(1, -1), slice(1, -1))


def _validated(conserved, minimum: int = 3) -> np.ndarray:
    data = np.array(conserved, dtype=float)
    if data.ndim != 3 or data.shape[0] != 4:
        raise ValueError(f"expected an array of shape (4, ny, nx), got {data.shape}")
    if data.shape[1] < minimum or data.shape[2] < minimum:
        raise ValueError(f"grid must be at least {minimum}x{minimum}, got {data.shape[1:]}")
    return data


def _blocked_cells(mask, grid_shape) -> np.ndarray:
    if mask is None:
        return np.zeros(grid_shape, dtype=bool)
    blocked = np.asarray(mask).astype(bool)
    if blocked.shape != grid_shape:
        raise ValueError(f"mask shape {blocked.shape} does not match grid {grid_shape}")
    return blocked


def _laplacian(field: np.ndarray) -> np.ndarray:
    centre = field[_INNER]
    along_x = field[:, 1:-1, 2:] + field[:, 1:-1, :-2] - 2.0 * centre
    along_y = field[:, 2:, 1:-1] + field[:, :-2, 1:-1] - 2.0 * centre
    return along_x + along_y


def _hold_blocked(update: np.ndarray, previous: np.ndarray, blocked: np.ndarray) -> np.ndarray:
    """Keep density and energy from before in blocked cells and stop the flow there."""
    result = np.where(blocked, previous, update)
    result[1:3, blocked] = 0.0
    return result


def apply_outflow_boundaries(conserved) -> np.ndarray:
    """Copy the first interior column and row onto each edge of the grid."""
    data = _validated(conserved, minimum=2)
    data[:, :, 0] = data[:, :, 1]
    data[:, :, -1] = data[:, :, -2]
    data[:, 0, :] = data[:, 1, :]
    data[:, -1, :] = data[:, -2, :]
    return data


def maccormack_step(conserved, predicted, dt: float, dx: float, nu: float, gamma: float, mask):
    """Advance one MacCormack predictor-corrector step with artificial viscosity.

    Cells marked in ``mask`` are solid: their momentum is zeroed and their
    density and energy keep the values they had. ``predicted`` is the
    predictor array from the previous step (ones when ``None``); blocked
    cells carry their predictor density and energy over from it.
    Returns ``(conserved, predicted)`` for the new step.
    """
    current = _validated(conserved)
    if predicted is None:
        stage = np.ones_like(current)
    else:
        stage = _validated(predicted)
        if stage.shape != current.shape:
            raise ValueError("predicted and conserved arrays differ in shape")
    blocked = _blocked_cells(mask, current.shape[1:])[1:-1, 1:-1]
    ratio = dt / dx

    fx, fy = fluxes(*primitive_from_conserved(current, gamma), gamma)
    forward = (
        current[_INNER]
        - ratio * (fx[:, 1:-1, 2:] - fx[_INNER])
        - ratio * (fy[:, 2:, 1:-1] - fy[_INNER])
        + nu * _laplacian(current)
    )
    stage[_INNER] = _hold_blocked(forward, stage[_INNER], blocked)
    stage = apply_outflow_boundaries(stage)

    fxp, fyp = fluxes(*primitive_from_conserved(stage, gamma), gamma)
    backward = (
        0.5 * (current[_INNER] + stage[_INNER])
        - 0.5 * ratio * (fxp[_INNER] - fxp[:, 1:-1, :-2])
        - 0.5 * ratio * (fyp[_INNER] - fyp[:, :-2, 1:-1])
        + nu * _laplacian(stage)
    )
    updated = current.copy()
    updated[_INNER] = _hold_blocked(backward, current[_INNER], blocked)
    return apply_outflow_boundaries(updated), stage


@lru_cache(maxsize=8)
def _decay_matrix(length: int) -> np.ndarray:
    offsets = np.arange(length)
    lags = np.clip(offsets[:, None] - offsets[None, :], 0, None)
    matrix = np.tril(0.25 ** lags.astype(float))
    matrix.setflags(write=False)
    return matrix


def lax_friedrichs_step(conserved, dt: float, dx: float, gamma: float) -> np.ndarray:
    """Advance one Lax-Friedrichs step.

    The grid is swept in place, row by row from the bottom and left to right
    within a row, so each cell averages over its left and lower neighbours as
    already updated in this sweep and its right and upper neighbours as they
    were. Fluxes all come from the state at the start of the step.
    """
    current = _validated(conserved)
    fx, fy = fluxes(*primitive_from_conserved(current, gamma), gamma)
    half_ratio = 0.5 * dt / dx
    decay = _decay_matrix(current.shape[2] - 2)
    updated = current.copy()
    for row in range(1, current.shape[1] - 1):
        # Each cell is a quarter of its updated left neighbour plus this term,
        # a linear recurrence solved at once with the decay matrix.
        drive = (
            0.25 * (current[:, row, 2:] + updated[:, row - 1, 1:-1] + current[:, row + 1, 1:-1])
            - half_ratio * (fx[:, row, 2:] - fx[:, row, :-2])
            - half_ratio * (fy[:, row + 1, 1:-1] - fy[:, row - 1, 1:-1])
        )
        drive[:, 0] += 0.25 * current[:, row, 0]
        updated[:, row, 1:-1] = drive @ decay.T
    return apply_outflow_boundaries(updated)