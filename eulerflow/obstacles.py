"""Masks marking solid cells inside the computational grid."""

from __future__ import annotations

import math

import numpy as np

__all__ = [
    "circle_mask",
    "grid_coordinates",
    "half_plane_mask",
    "ramp_mask",
]

# The ramp's sloped face passes through this point.
_RAMP_X0 = 0.25
_RAMP_Y0 = 1.0


def _check_grid(nx: int, ny: int, dx: float) -> None:
    if nx < 1 or ny < 1:
        raise ValueError(f"grid dimensions must be positive, got nx={nx}, ny={ny}")
    if not dx > 0.0:
        raise ValueError(f"grid spacing must be positive, got {dx}")


def grid_coordinates(nx: int, ny: int, dx: float):
    """Return (x, y) cell coordinates, each of shape (ny, nx), with x[j, i] = i*dx."""
    _check_grid(nx, ny, dx)
    columns = np.arange(nx, dtype=float) * dx
    rows = np.arange(ny, dtype=float) * dx
    x, y = np.meshgrid(columns, rows)
    return x, y


def half_plane_mask(nx: int, ny: int, dx: float, angle: float, x0: float, y0: float) -> np.ndarray:
    """Cells strictly above the line through (x0, y0) inclined at ``angle`` radians."""
    x, y = grid_coordinates(nx, ny, dx)
    return (y - y0) - math.tan(angle) * (x - x0) > 0.0


def ramp_mask(nx: int, ny: int, dx: float, angle: float, x_break: float) -> np.ndarray:
    """A wall sloping at ``angle`` from (0.25, 1.0) that runs flat beyond ``x_break``."""
    x, y = grid_coordinates(nx, ny, dx)
    slope = math.tan(angle)
    sloped = ((y - _RAMP_Y0) - slope * (x - _RAMP_X0) > 0.0) & (x < x_break)
    flat = (x >= x_break) & (y > _RAMP_Y0 + slope * (x_break - _RAMP_X0))
    return sloped | flat


def circle_mask(nx: int, ny: int, dx: float, cx: float, cy: float, radius: float) -> np.ndarray:
    """Cells strictly inside the circle of ``radius`` centred on (cx, cy)."""
    if radius < 0.0:
        raise ValueError(f"radius must not be negative, got {radius}")
    x, y = grid_coordinates(nx, ny, dx)
    return (y - cy) ** 2 + (x - cx) ** 2 < radius * radius