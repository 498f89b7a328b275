"""Evaluation metrics for medoid clusterings."""

from .clustering import compute_clustering_metrics, compute_b3_metrics, adjusted_rand_index
from .cost import compute_cost_metrics, compute_silhouette, cluster_costs
from .sanity import run_sanity_checks
