"""Core types, errors, registry, and utilities."""

from .types import Point, DistanceFn, ClusterResult, RunResult, ExperimentResult
from .errors import (
    MedoidsError,
    InvalidArgumentError,
    PointNotFoundError,
    AsymmetricDistanceError,
)
from .registry import Registry, get_registry
from .random import set_seed, get_rng, get_seed
