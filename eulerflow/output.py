"""Plain-text output of grid fields, one grid row per line."""

from __future__ import annotations

from pathlib import Path

import numpy as np

__all__ = [
    "format_field",
    "format_mask",
    "read_field",
    "write_field",
    "write_fields",
    "write_mask",
]

_FIELD_FILES = ("rho", "p", "u", "v")


def _as_grid(values, dtype) -> np.ndarray:
    grid = np.asarray(values, dtype=dtype)
    if grid.ndim != 2:
        raise ValueError(f"expected a two-dimensional grid, got {grid.ndim} dimensions")
    return grid


def format_field(field) -> str:
    """Render a 2D float field with six decimals, each value followed by a space."""
    grid = _as_grid(field, float)
    return "".join("".join(f"{value:f} " for value in row) + "\n" for row in grid)


def format_mask(mask) -> str:
    """Render a 2D mask as 0/1 integers, each followed by a space."""
    grid = _as_grid(mask, bool).astype(int)
    return "".join("".join(f"{value:d} " for value in row) + "\n" for row in grid)


def write_field(path, field) -> Path:
    """Write a float field to ``path``, replacing any existing file."""
    target = Path(path)
    target.write_text(format_field(field))
    return target


def write_mask(path, mask) -> Path:
    """Write a mask to ``path``, replacing any existing file."""
    target = Path(path)
    target.write_text(format_mask(mask))
    return target


def write_fields(directory, state) -> dict:
    """Write density, pressure and both velocities of ``state`` into ``directory``.

    Returns a mapping from field name to the file written.
    """
    folder = Path(directory)
    folder.mkdir(parents=True, exist_ok=True)
    return {
        name: write_field(folder / f"{name}.txt", getattr(state, name))
        for name in _FIELD_FILES
    }


def read_field(path) -> np.ndarray:
    """Read a field written by :func:`write_field` or :func:`write_mask`."""
    rows = [line.split() for line in Path(path).read_text().splitlines() if line.strip()]
    if not rows:
        raise ValueError(f"{path} holds no data")
    widths = {len(row) for row in rows}
    if len(widths) != 1:
        raise ValueError(f"{path} has rows of differing length")
    try:
        return np.array([[float(value) for value in row] for row in rows])
    except ValueError as error:
        raise ValueError(f"{path} holds a value that is not a number") from error