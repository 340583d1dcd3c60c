[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eulerflow"
version = "0.1.0"
description = "Finite-difference solvers for the 2D compressible Euler equations and 1D linear advection"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["cfd", "euler equations", "maccormack", "lax-friedrichs", "shock tube", "finite difference"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
eulerflow = "eulerflow.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["eulerflow"]

[tool.pytest.ini_options]
addopts = "-ra"
