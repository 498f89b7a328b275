"""Dissimilarity caching and distance functions."""

from .cache import DissimilarityCache, build_cache, dissimilarity, dissimilarity_sum
from .distances import (
    euclidean,
    manhattan,
    chebyshev,
    cosine,
    absolute,
    hamming,
    levenshtein,
    get_distance,
)
