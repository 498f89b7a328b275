"""Clustering algorithms."""

from .base import BaseClusterer
from .kmedoids import (
    KMedoidsClusterer,
    k_medoids,
    refine,
    cluster,
    choose_initial_medoids,
    nearest_medoid,
    assign_clusters,
    choose_medoid,
    step,
    total_cost,
    reseed_medoids,
)
