"""Built-in distance functions, registered by name."""

from typing import Callable, Sequence, Union

import numpy as np

from ..core.registry import get_registry
from ..core.types import DistanceFn

registry = get_registry("distances")


def _as_vector(x) -> np.ndarray:
    return np.atleast_1d(np.asarray(x, dtype=float))


@registry.register("euclidean")
def euclidean(x, y) -> float:
    """L2 distance between two equal-length sequences (or scalars)."""
    return float(np.linalg.norm(_as_vector(x) - _as_vector(y)))


@registry.register("manhattan")
def manhattan(x, y) -> float:
    """L1 distance."""
    return float(np.sum(np.abs(_as_vector(x) - _as_vector(y))))


@registry.register("chebyshev")
def chebyshev(x, y) -> float:
    """L-infinity distance."""
    return float(np.max(np.abs(_as_vector(x) - _as_vector(y))))


@registry.register("cosine")
def cosine(x, y) -> float:
    """
    One minus cosine similarity.

    Zero vectors have no direction; their distance to anything is 1.0.
    """
    a = _as_vector(x)
    b = _as_vector(y)
    denom = np.linalg.norm(a) * np.linalg.norm(b)
    if denom == 0:
        return 1.0
    return float(1.0 - np.dot(a, b) / denom)


@registry.register("absolute")
def absolute(x, y) -> float:
    return abs(x - y)


@registry.register("hamming")
def hamming(x: Sequence, y: Sequence) -> int:
    """Number of positions at which two equal-length sequences differ."""
    if len(x) != len(y):
        raise ValueError(f"hamming distance needs equal lengths, got {len(x)} and {len(y)}")
    return sum(1 for a, b in zip(x, y) if a != b)


@registry.register("levenshtein")
def levenshtein(x: str, y: str) -> int:
    """Edit distance (insertions, deletions, substitutions)."""
    if len(x) < len(y):
        x, y = y, x
    previous = list(range(len(y) + 1))
    for i, cx in enumerate(x, start=1):
        current = [i]
        for j, cy in enumerate(y, start=1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (cx != cy),
            ))
        previous = current
    return previous[-1]


def get_distance(distance: Union[str, Callable]) -> DistanceFn:
    """Resolve a registered distance name, or pass a callable through."""
    if callable(distance):
        return distance
    return registry.get(distance)
