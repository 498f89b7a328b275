"""Tests for built-in distance functions."""

import math

import pytest

from medoids.core.registry import get_registry
from medoids.dissimilarity.distances import (
    absolute,
    chebyshev,
    cosine,
    euclidean,
    get_distance,
    hamming,
    levenshtein,
    manhattan,
)


def test_vector_distances():
    assert euclidean((0, 0), (3, 4)) == pytest.approx(5.0)
    assert manhattan((0, 0), (3, 4)) == pytest.approx(7.0)
    assert chebyshev((0, 0), (3, 4)) == pytest.approx(4.0)
    assert euclidean(2, 5) == pytest.approx(3.0)


def test_cosine():
    assert cosine((1, 0), (0, 1)) == pytest.approx(1.0)
    assert cosine((1, 1), (2, 2)) == pytest.approx(0.0, abs=1e-12)
    assert cosine((0, 0), (1, 2)) == 1.0


def test_absolute():
    assert absolute(3, 10) == 7
    assert absolute(10, 3) == 7


def test_hamming():
    assert hamming("karolin", "kathrin") == 3
    assert hamming((1, 0, 1), (1, 1, 1)) == 1

    with pytest.raises(ValueError):
        hamming("ab", "abc")


def test_levenshtein():
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein("", "abc") == 3
    assert levenshtein("flaw", "lawn") == 2
    assert levenshtein("same", "same") == 0


def test_distances_are_symmetric():
    pairs = [((0, 1, 2), (4, -1, 0)), ((1.5, 2.5), (-3.0, 0.25))]
    for fn in (euclidean, manhattan, chebyshev, cosine):
        for x, y in pairs:
            assert math.isclose(fn(x, y), fn(y, x))
    assert levenshtein("abcde", "xbd") == levenshtein("xbd", "abcde")


def test_registry_lookup():
    registry = get_registry("distances")

    for name in ("euclidean", "manhattan", "chebyshev", "cosine",
                 "absolute", "hamming", "levenshtein"):
        assert name in registry

    assert get_distance("manhattan") is manhattan


def test_get_distance_passes_callables_through():
    fn = lambda x, y: 0  # noqa: E731
    assert get_distance(fn) is fn


def test_get_distance_unknown_name():
    with pytest.raises(KeyError, match="Available"):
        get_distance("no-such-distance")
