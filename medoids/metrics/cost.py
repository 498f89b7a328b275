"""Internal quality of a medoid clustering: cost and silhouette."""

from typing import Dict, List, Sequence

import numpy as np

from ..core.types import Point
from ..dissimilarity.cache import DissimilarityCache


def cluster_costs(
    clusters: Sequence[Sequence[Point]],
    medoids: Sequence[Point],
    cache: DissimilarityCache,
) -> List[float]:
    """Sum of member-to-medoid dissimilarities for each cluster."""
    return [
        float(sum(cache.lookup(x, medoid) for x in members))
        for members, medoid in zip(clusters, medoids)
    ]


def compute_silhouette(
    clusters: Sequence[Sequence[Point]],
    cache: DissimilarityCache,
) -> float:
    """
    Mean silhouette width over all points.

    Members of singleton clusters score 0. With fewer than two clusters the
    silhouette is undefined and 0.0 is returned.
    """
    if len(clusters) < 2:
        return 0.0

    scores = []
    for i, members in enumerate(clusters):
        for x in members:
            if len(members) == 1:
                scores.append(0.0)
                continue
            a = (cache.sum_of_dissimilarities(x, members)) / (len(members) - 1)
            b = min(
                np.mean([cache.lookup(x, y) for y in other])
                for j, other in enumerate(clusters)
                if j != i and other
            )
            denom = max(a, b)
            scores.append(0.0 if denom == 0 else (b - a) / denom)

    return float(np.mean(scores)) if scores else 0.0


def compute_cost_metrics(
    clusters: Sequence[Sequence[Point]],
    medoids: Sequence[Point],
    cache: DissimilarityCache,
) -> Dict[str, object]:
    """
    Summarize a clustering against its dissimilarity cache.

    Returns:
        Dict with total and per-cluster cost, cluster sizes, and mean
        silhouette.
    """
    costs = cluster_costs(clusters, medoids, cache)
    return {
        "total_cost": float(sum(costs)),
        "cluster_costs": costs,
        "cluster_sizes": [len(c) for c in clusters],
        "n_clusters": len(clusters),
        "silhouette": compute_silhouette(clusters, cache),
    }
