"""Tests for the dissimilarity cache."""

import itertools

import numpy as np
import pytest

from medoids.core.errors import AsymmetricDistanceError, PointNotFoundError
from medoids.dissimilarity.cache import (
    DissimilarityCache,
    build_cache,
    dissimilarity,
    dissimilarity_sum,
)


def test_one_call_per_unordered_pair(counting):
    """Each unordered pair, self-pairs included, hits the distance function once."""
    points = [1, 2, 3, 4]
    fn = counting(lambda x, y: abs(x - y))

    cache = DissimilarityCache.build(points, fn)

    assert len(fn.calls) == 10
    assert cache.n_calls == 10
    unordered = {frozenset(call) for call in fn.calls}
    assert len(unordered) == 10

    for x, y in itertools.product(points, points):
        assert cache.lookup(x, y) == cache.lookup(y, x)
        assert cache.lookup(x, y) == abs(x - y)

    assert len(fn.calls) == 10


def test_first_ordering_is_the_one_computed(counting):
    fn = counting(lambda x, y: x - y)
    cache = build_cache(["a", "b"], lambda x, y: f"{x}{y}")

    assert cache.lookup("a", "b") == "ab"
    assert cache.lookup("b", "a") == "ab"

    numeric = DissimilarityCache.build([1, 2], fn)
    assert (1, 2) in fn.calls
    assert (2, 1) not in fn.calls
    assert numeric.lookup(2, 1) == -1


def test_self_pairs_are_computed():
    cache = DissimilarityCache.build([1, 2], lambda x, y: 5 if x == y else abs(x - y))

    assert cache.lookup(1, 1) == 5
    assert cache[2, 2] == 5


def test_sum_subtracts_self_term_once():
    cache = DissimilarityCache.build(
        [0, 1, 3], lambda x, y: 5 if x == y else abs(x - y)
    )

    # 5 + 1 + 3 - 5
    assert cache.sum_of_dissimilarities(0, [0, 1, 3]) == 4
    # x outside the group still loses d(x, x)
    assert cache.sum_of_dissimilarities(0, [1, 3]) == -1
    assert dissimilarity_sum(3, [0, 1, 3], cache) == 3 + 2


def test_sum_matches_lookups():
    points = ["p", "q", "r", "s"]
    table = {
        frozenset(("p", "q")): 2.0,
        frozenset(("p", "r")): 7.5,
        frozenset(("p", "s")): 1.0,
        frozenset(("q", "r")): 3.0,
        frozenset(("q", "s")): 4.0,
        frozenset(("r", "s")): 6.0,
    }
    cache = build_cache(points, lambda x, y: 0.0 if x == y else table[frozenset((x, y))])

    for x in points:
        for group in (points, points[:2], ["r", "s"]):
            expected = sum(dissimilarity(x, y, cache) for y in group) - cache.lookup(x, x)
            assert cache.sum_of_dissimilarities(x, group) == pytest.approx(expected)


def test_unknown_point_raises():
    cache = DissimilarityCache.build([1, 2], lambda x, y: abs(x - y))

    with pytest.raises(PointNotFoundError):
        cache.lookup(1, 3)

    with pytest.raises(KeyError) as excinfo:
        cache[3, 1]
    assert excinfo.value.point == 3
    assert "not part of the dissimilarity cache" in str(excinfo.value)


def test_asymmetric_distance_is_accepted_silently():
    cache = DissimilarityCache.build([1, 2, 4], lambda x, y: x - y)

    assert cache.lookup(1, 4) == -3
    assert cache.lookup(4, 1) == -3


def test_validate_symmetry_rejects_asymmetric_distance():
    with pytest.raises(AsymmetricDistanceError) as excinfo:
        DissimilarityCache.build([1, 2], lambda x, y: x - y, validate_symmetry=True)

    assert excinfo.value.forward == -1
    assert excinfo.value.backward == 1
    assert isinstance(excinfo.value, ValueError)


def test_validate_symmetry_accepts_symmetric_distance(counting):
    fn = counting(lambda x, y: abs(x - y))
    cache = DissimilarityCache.build([1, 2, 3], fn, validate_symmetry=True)

    assert cache.n_calls == 6
    # three extra reverse-order calls for the off-diagonal pairs
    assert len(fn.calls) == 9


def test_repeated_points_share_entries(counting):
    fn = counting(lambda x, y: abs(x - y))
    cache = DissimilarityCache.build([1, 1, 2], fn)

    assert len(cache) == 2
    assert cache.points == [1, 2]
    assert len(fn.calls) == 3
    assert 1 in cache
    assert 5 not in cache


def test_to_matrix():
    cache = DissimilarityCache.build([0, 1, 3], lambda x, y: abs(x - y))
    matrix = cache.to_matrix()

    assert matrix.shape == (3, 3)
    np.testing.assert_array_equal(matrix, matrix.T)
    np.testing.assert_array_equal(
        matrix, np.array([[0, 1, 3], [1, 0, 2], [3, 2, 0]], dtype=float)
    )
