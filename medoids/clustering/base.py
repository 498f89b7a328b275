"""Base clusterer interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..core.types import ClusterResult, DistanceFn, Point


class BaseClusterer(ABC):
    """
    Abstract base class for point clusterers.

    Clusterers partition a collection of points using a pairwise
    dissimilarity function.
    """

    def __init__(self, name: str, **kwargs):
        self.name = name
        self.params = kwargs

    @abstractmethod
    def cluster(
        self,
        points: Sequence[Point],
        distance_fn: Optional[DistanceFn] = None,
    ) -> ClusterResult:
        """
        Cluster points.

        Args:
            points: Hashable points to partition.
            distance_fn: Dissimilarity function; clusterers may fall back
                to a configured default when None.

        Returns:
            ClusterResult with clusters and, where defined, medoids.
        """
        raise NotImplementedError
