"""
Pairwise dissimilarity cache.

Every unordered pair of points is computed once. Both orderings of a pair
resolve to the same canonical slot, keyed by the first-appearance index of
each point in the input sequence.
"""

import logging
import math
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from ..core.errors import AsymmetricDistanceError, PointNotFoundError
from ..core.types import DistanceFn, Point

logger = logging.getLogger(__name__)


class DissimilarityCache:
    """
    Read-only table of dissimilarities between a fixed set of points.

    Build it with :meth:`build`; lookups for points outside the original set
    raise :class:`PointNotFoundError`.
    """

    def __init__(
        self,
        points: List[Point],
        values: Dict[Tuple[int, int], float],
        n_calls: int = 0,
    ):
        self._points = list(points)
        self._index = {p: i for i, p in enumerate(self._points)}
        self._values = values
        self.n_calls = n_calls

    @classmethod
    def build(
        cls,
        points: Iterable[Point],
        distance_fn: DistanceFn,
        validate_symmetry: bool = False,
    ) -> "DissimilarityCache":
        """
        Compute the dissimilarity of every pair of points.

        Args:
            points: Points to cache. Repeated points share one entry.
            distance_fn: Callable ``(x, y) -> number``, assumed symmetric.
            validate_symmetry: Also evaluate ``distance_fn(y, x)`` for every
                off-diagonal pair and raise if the two values differ.

        Returns:
            A cache holding n * (n + 1) / 2 computed values for n distinct
            points. Self-pairs are computed too, never assumed zero.
        """
        distinct = list(dict.fromkeys(points))
        values: Dict[Tuple[int, int], float] = {}
        n_calls = 0

        for i, x in enumerate(distinct):
            for j in range(i, len(distinct)):
                y = distinct[j]
                value = distance_fn(x, y)
                n_calls += 1
                if validate_symmetry and i != j:
                    backward = distance_fn(y, x)
                    if not math.isclose(value, backward, rel_tol=1e-9, abs_tol=1e-12):
                        raise AsymmetricDistanceError(x, y, value, backward)
                values[(i, j)] = value

        logger.debug(
            "Built dissimilarity cache for %d points with %d distance calls",
            len(distinct), n_calls,
        )
        return cls(distinct, values, n_calls)

    @property
    def points(self) -> List[Point]:
        """Distinct cached points in first-appearance order."""
        return list(self._points)

    def index_of(self, x: Point) -> int:
        try:
            return self._index[x]
        except KeyError:
            raise PointNotFoundError(x) from None

    def lookup(self, x: Point, y: Point) -> float:
        """Dissimilarity between ``x`` and ``y``."""
        i = self.index_of(x)
        j = self.index_of(y)
        if i > j:
            i, j = j, i
        return self._values[(i, j)]

    def sum_of_dissimilarities(self, x: Point, group: Iterable[Point]) -> float:
        """
        Total dissimilarity from ``x`` to the members of ``group``.

        The self-term ``d(x, x)`` is subtracted exactly once whether or not
        ``x`` belongs to ``group``.
        """
        return sum(self.lookup(x, y) for y in group) - self.lookup(x, x)

    def to_matrix(self) -> np.ndarray:
        """Dense symmetric matrix in :attr:`points` order."""
        n = len(self._points)
        matrix = np.zeros((n, n), dtype=float)
        for (i, j), value in self._values.items():
            matrix[i, j] = value
            matrix[j, i] = value
        return matrix

    def __getitem__(self, pair: Tuple[Point, Point]) -> float:
        x, y = pair
        return self.lookup(x, y)

    def __contains__(self, x: Point) -> bool:
        return x in self._index

    def __len__(self) -> int:
        return len(self._points)

    def __repr__(self) -> str:
        return f"DissimilarityCache(n_points={len(self._points)}, n_calls={self.n_calls})"


def build_cache(
    points: Sequence[Point],
    distance_fn: DistanceFn,
    validate_symmetry: bool = False,
) -> DissimilarityCache:
    """Build a :class:`DissimilarityCache` for ``points``."""
    return DissimilarityCache.build(points, distance_fn, validate_symmetry)


def dissimilarity(x: Point, y: Point, cache: DissimilarityCache) -> float:
    """Look up the dissimilarity of ``x`` and ``y`` in ``cache``."""
    return cache.lookup(x, y)


def dissimilarity_sum(x: Point, group: Iterable[Point], cache: DissimilarityCache) -> float:
    """Sum of dissimilarities from ``x`` to the other members of ``group``."""
    return cache.sum_of_dissimilarities(x, group)
