"""
k-medoids clustering (Partitioning Around Medoids).

The optimizer alternates two moves until the medoid set reaches a fixed
point: assign every point to its nearest medoid, then replace each
cluster's medoid with the member that has the lowest sum of
dissimilarities to the rest of the cluster.

Medoid sets are frozensets and are replaced wholesale on each step. When
two medoids end up sharing one cluster the set shrinks, and it never grows
back on its own (see ``reseed`` for the opt-in alternative).

Ties are broken by input order: the earliest point in the input sequence
wins, both when picking a nearest medoid and when picking a new medoid.
"""

import logging
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence, Union

import numpy as np

from .base import BaseClusterer
from ..core.errors import InvalidArgumentError
from ..core.random import RandomSource, resolve_rng
from ..core.registry import get_registry
from ..core.types import ClusterResult, DistanceFn, Point, RunResult
from ..dissimilarity.cache import DissimilarityCache
from ..dissimilarity.distances import get_distance

logger = logging.getLogger(__name__)

MedoidSet = FrozenSet[Point]


def _distinct(points: Sequence[Point]) -> List[Point]:
    return list(dict.fromkeys(points))


def _in_input_order(medoids: MedoidSet, cache: DissimilarityCache) -> List[Point]:
    return sorted(medoids, key=cache.index_of)


def validate_arguments(points: Sequence[Point], k, max_iter=None):
    """Reject arguments no clustering run can satisfy."""
    n_distinct = len(_distinct(points))
    if n_distinct == 0:
        raise InvalidArgumentError("points must not be empty")
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidArgumentError(f"k must be an integer, got {k!r}")
    if k <= 0:
        raise InvalidArgumentError(f"k must be positive, got {k}")
    if k > n_distinct:
        raise InvalidArgumentError(
            f"k={k} exceeds the number of distinct points ({n_distinct})"
        )
    if max_iter is not None:
        if isinstance(max_iter, bool) or not isinstance(max_iter, (int, np.integer)):
            raise InvalidArgumentError(f"max_iter must be an integer or None, got {max_iter!r}")
        if max_iter <= 0:
            raise InvalidArgumentError(f"max_iter must be positive, got {max_iter}")


def choose_initial_medoids(
    points: Sequence[Point],
    k: int,
    rng: RandomSource = None,
) -> MedoidSet:
    """Pick ``k`` distinct points uniformly at random (shuffle, then take)."""
    distinct = _distinct(points)
    order = resolve_rng(rng).permutation(len(distinct))
    return frozenset(distinct[i] for i in order[:k])


def nearest_medoid(x: Point, medoids: MedoidSet, cache: DissimilarityCache) -> Point:
    """The medoid closest to ``x``; earliest in input order on ties."""
    return min(_in_input_order(medoids, cache), key=lambda m: cache.lookup(x, m))


def assign_clusters(
    points: Sequence[Point],
    medoids: MedoidSet,
    cache: DissimilarityCache,
) -> Dict[Point, List[Point]]:
    """
    Group points by nearest medoid.

    Keys are ordered by their first member's position in ``points`` and
    members keep input order. A medoid that is not the nearest medoid of
    any point, itself included, gets no entry.
    """
    ordered = _in_input_order(medoids, cache)
    clusters: Dict[Point, List[Point]] = {}
    for x in points:
        medoid = min(ordered, key=lambda m: cache.lookup(x, m))
        clusters.setdefault(medoid, []).append(x)
    return clusters


def choose_medoid(group: Sequence[Point], cache: DissimilarityCache) -> Point:
    """The member of ``group`` with the lowest sum of dissimilarities."""
    return min(group, key=lambda x: cache.sum_of_dissimilarities(x, group))


def step(
    points: Sequence[Point],
    medoids: MedoidSet,
    cache: DissimilarityCache,
) -> MedoidSet:
    """Compute the next medoid set from the current one."""
    clusters = assign_clusters(points, medoids, cache)
    return frozenset(choose_medoid(group, cache) for group in clusters.values())


def total_cost(
    points: Sequence[Point],
    medoids: MedoidSet,
    cache: DissimilarityCache,
) -> float:
    """Sum over clusters of each member's dissimilarity to its medoid."""
    return sum(
        cache.lookup(x, medoid)
        for medoid, group in assign_clusters(points, medoids, cache).items()
        for x in group
    )


def reseed_medoids(
    points: Sequence[Point],
    medoids: MedoidSet,
    k: int,
    cache: DissimilarityCache,
) -> MedoidSet:
    """
    Grow a collapsed medoid set back to ``k`` members.

    Each free slot goes to the non-medoid point farthest from its nearest
    medoid, earliest in input order on ties.
    """
    chosen = set(medoids)
    candidates = [p for p in _distinct(points) if p not in chosen]
    while len(chosen) < k and candidates:
        current = frozenset(chosen)
        farthest = max(
            candidates,
            key=lambda p: cache.lookup(p, nearest_medoid(p, current, cache)),
        )
        chosen.add(farthest)
        candidates.remove(farthest)
    return frozenset(chosen)


def k_medoids(
    points: Sequence[Point],
    distance_fn: DistanceFn,
    k: int,
    max_iter: Optional[int] = None,
    rng: RandomSource = None,
    reseed: bool = False,
    validate_symmetry: bool = False,
) -> RunResult:
    """
    Cluster ``points`` into at most ``k`` groups around medoids.

    Args:
        points: Hashable points. Repeated points are clustered independently
            but share one cache entry.
        distance_fn: Symmetric dissimilarity ``(x, y) -> number``.
        k: Number of initial medoids, 1 <= k <= number of distinct points.
        max_iter: Optional cap on refinement steps. When reached, the last
            medoid set is used and the result reports ``converged=False``.
        rng: Seed or numpy Generator for the initial medoids. Defaults to the
            global generator from ``core.random``.
        reseed: Refill medoid slots lost to collapse so k clusters survive.
        validate_symmetry: Check ``d(x, y) == d(y, x)`` while caching.

    Returns:
        RunResult with clusters, their medoids, and convergence details.

    Raises:
        InvalidArgumentError: If ``points`` is empty or ``k``/``max_iter``
            are out of range. Raised before ``distance_fn`` is called.
    """
    points = list(points)
    validate_arguments(points, k, max_iter)

    cache = DissimilarityCache.build(points, distance_fn, validate_symmetry)
    return refine(points, cache, k, max_iter=max_iter, rng=rng, reseed=reseed)


def refine(
    points: Sequence[Point],
    cache: DissimilarityCache,
    k: int,
    max_iter: Optional[int] = None,
    rng: RandomSource = None,
    reseed: bool = False,
) -> RunResult:
    """
    Iterate from random initial medoids to a fixed point over a prebuilt cache.

    Same arguments and result as :func:`k_medoids`; every point must be
    in ``cache``.
    """
    points = list(points)
    validate_arguments(points, k, max_iter)
    medoids = choose_initial_medoids(points, k, rng)

    history: List[float] = []
    n_iter = 0
    converged = False

    while max_iter is None or n_iter < max_iter:
        next_medoids = step(points, medoids, cache)
        if reseed and len(next_medoids) < k:
            logger.debug("Medoid set collapsed to %d, reseeding", len(next_medoids))
            next_medoids = reseed_medoids(points, next_medoids, k, cache)
        n_iter += 1
        history.append(total_cost(points, next_medoids, cache))
        logger.debug(
            "Iteration %d: %d medoids, cost %.6g", n_iter, len(next_medoids), history[-1]
        )
        if next_medoids == medoids:
            converged = True
            break
        medoids = next_medoids

    if converged:
        logger.debug("Converged after %d iterations", n_iter)
    else:
        logger.warning(
            "k-medoids stopped after max_iter=%d iterations without converging", max_iter
        )

    clusters = assign_clusters(points, medoids, cache)
    return RunResult(
        clusters=list(clusters.values()),
        medoids=list(clusters.keys()),
        n_iter=n_iter,
        converged=converged,
        cost=total_cost(points, medoids, cache),
        history=history,
        n_distance_calls=cache.n_calls,
    )


def cluster(points: Sequence[Point], distance_fn: DistanceFn, k: int) -> List[List[Point]]:
    """Partition ``points`` into clusters; the plain entry point."""
    return k_medoids(points, distance_fn, k).clusters


class KMedoidsClusterer(BaseClusterer):
    """
    k-medoids over arbitrary hashable points.

    Works with any dissimilarity, metric or not, since medoids are always
    input points.
    """

    def __init__(
        self,
        k: int,
        distance: Union[str, Callable] = "euclidean",
        max_iter: Optional[int] = None,
        reseed: bool = False,
        seed: Optional[int] = None,
        validate_symmetry: bool = False,
        **kwargs
    ):
        """
        Initialize k-medoids clusterer.

        Args:
            k: Number of clusters to start from.
            distance: Registered distance name or a callable.
            max_iter: Optional cap on refinement steps.
            reseed: Keep k clusters by refilling collapsed medoid slots.
            seed: Seed for the initial medoids; None uses the global RNG.
            validate_symmetry: Reject asymmetric distance functions.
        """
        super().__init__("kmedoids", **kwargs)
        self.k = k
        self.distance = distance
        self.max_iter = max_iter
        self.reseed = reseed
        self.seed = seed
        self.validate_symmetry = validate_symmetry
        self.last_run: Optional[RunResult] = None

    def cluster(
        self,
        points: Sequence[Point],
        distance_fn: Optional[DistanceFn] = None,
    ) -> ClusterResult:
        """Run k-medoids with ``distance_fn`` or the configured distance."""
        fn = distance_fn if distance_fn is not None else get_distance(self.distance)
        self.last_run = k_medoids(
            points,
            fn,
            self.k,
            max_iter=self.max_iter,
            rng=self.seed,
            reseed=self.reseed,
            validate_symmetry=self.validate_symmetry,
        )
        return self.last_run.to_cluster_result()


get_registry("clusterers").register("kmedoids", KMedoidsClusterer)
