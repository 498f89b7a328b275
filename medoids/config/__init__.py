"""Experiment configuration."""

from .schema import (
    DataConfig,
    DistanceConfig,
    ClusteringConfig,
    ExperimentConfig,
    load_config,
    save_config,
    validate_config,
)
