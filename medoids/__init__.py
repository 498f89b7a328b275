"""
medoids: k-medoid clustering for arbitrary data types.

Provides a dissimilarity cache, a PAM-style medoid optimizer, distance
functions, evaluation metrics, and a config-driven experiment runner.
"""

__version__ = "0.1.0"

from .core.types import Point, ClusterResult, RunResult, ExperimentResult
from .core.errors import (
    MedoidsError,
    InvalidArgumentError,
    PointNotFoundError,
    AsymmetricDistanceError,
)
from .core.registry import Registry, get_registry
from .dissimilarity import DissimilarityCache, build_cache, get_distance
from .clustering import KMedoidsClusterer, k_medoids, cluster

from . import dissimilarity
from . import clustering
from . import metrics
from . import config
from . import runner
