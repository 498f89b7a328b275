"""Shared types for points, distances, and clustering results."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, List, Optional

Point = Hashable
DistanceFn = Callable[[Any, Any], float]


@dataclass
class ClusterResult:
    """Output of a clusterer: groups of points plus optional representatives."""
    clusters: List[List[Point]]
    medoids: Optional[List[Point]] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def n_clusters(self) -> int:
        return len(self.clusters)

    def labels(self) -> Dict[Point, int]:
        """Map each point to the index of its cluster."""
        return {
            point: cluster_id
            for cluster_id, members in enumerate(self.clusters)
            for point in members
        }


@dataclass
class RunResult:
    """
    Outcome of a single k-medoids run.

    Attributes:
        clusters: Point groups, one per surviving medoid.
        medoids: Medoid of each cluster, aligned with ``clusters``.
        n_iter: Number of refinement steps applied.
        converged: False when an iteration cap stopped the run.
        cost: Total dissimilarity of every point to its medoid.
        history: Cost of the medoid set after each step.
        n_distance_calls: Real calls made to the distance function.
    """
    clusters: List[List[Point]]
    medoids: List[Point]
    n_iter: int
    converged: bool
    cost: float
    history: List[float] = field(default_factory=list)
    n_distance_calls: int = 0

    def labels(self, points: List[Point]) -> List[int]:
        """Cluster index of every point in ``points``, in order."""
        lookup = {
            point: cluster_id
            for cluster_id, members in enumerate(self.clusters)
            for point in members
        }
        return [lookup[p] for p in points]

    def to_cluster_result(self) -> ClusterResult:
        return ClusterResult(
            clusters=self.clusters,
            medoids=self.medoids,
            metadata={
                "n_iter": self.n_iter,
                "converged": self.converged,
                "cost": self.cost,
                "history": list(self.history),
                "n_distance_calls": self.n_distance_calls,
            },
        )


@dataclass
class ExperimentResult:
    """Metrics and metadata from one configured clustering run."""
    cost: Dict[str, Any] = field(default_factory=dict)
    clustering: Dict[str, float] = field(default_factory=dict)
    sanity_checks: Dict[str, bool] = field(default_factory=dict)
    run: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into a single dict, prefixing metric groups."""
        row = {}
        for prefix, values in (
            ("cost", self.cost),
            ("clustering", self.clustering),
            ("run", self.run),
        ):
            for key, value in values.items():
                row[f"{prefix}_{key}"] = value
        row["sanity_all_passed"] = self.sanity_checks.get("all_passed", False)
        row.update({k: v for k, v in self.metadata.items() if k != "config"})
        return row
