"""Experiment runners."""

from .run_one import run_experiment, load_points
from .run_grid import run_grid
