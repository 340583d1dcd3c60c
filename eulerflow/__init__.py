"""Finite-difference solvers for the compressible Euler equations and linear advection."""

__version__ = "0.1.0"
__all__ = ["state", "schemes", "obstacles", "output", "scenarios", "burgers", "cli"]