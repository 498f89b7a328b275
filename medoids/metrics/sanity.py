"""Sanity checks for clustering output."""

from collections import Counter
from typing import Dict, List, Optional, Sequence

from ..core.types import Point


def run_sanity_checks(
    points: Sequence[Point],
    clusters: List[List[Point]],
    medoids: Optional[List[Point]] = None,
    k: Optional[int] = None,
) -> Dict[str, bool]:
    """
    Run sanity checks on a clustering.

    Catches issues like:
    - Empty output or empty clusters
    - Points assigned twice or not at all
    - Medoids that are not members of their own cluster

    Args:
        points: The points that were clustered.
        clusters: Clusters produced for them.
        medoids: Medoid of each cluster, aligned with ``clusters``.
        k: Requested number of clusters.

    Returns:
        Dict of check names to pass/fail booleans, plus ``all_passed``.
        ``has_k_clusters`` is informational and excluded from ``all_passed``
        since medoid collapse legitimately yields fewer clusters.
    """
    checks = {}

    checks["clusters_not_empty"] = len(clusters) > 0
    checks["no_empty_clusters"] = all(len(c) > 0 for c in clusters)

    expected = Counter(points)
    assigned = Counter()
    for c in clusters:
        assigned.update(c)
    checks["covers_all_points"] = set(assigned) == set(expected)
    checks["no_duplicate_members"] = all(
        count <= expected[p] for p, count in assigned.items()
    )

    if medoids is not None:
        checks["medoids_aligned"] = len(medoids) == len(clusters)
        checks["medoids_in_own_cluster"] = all(
            m in c for m, c in zip(medoids, clusters)
        )
        checks["medoids_distinct"] = len(set(medoids)) == len(medoids)

    checks["all_passed"] = all(checks.values())

    if k is not None:
        checks["has_k_clusters"] = len(clusters) == k

    return checks
