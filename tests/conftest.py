"""Shared fixtures for the test suite."""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


class CountingDistance:
    """Wraps a distance function and records every call."""

    def __init__(self, fn):
        self.fn = fn
        self.calls = []

    def __call__(self, x, y):
        self.calls.append((x, y))
        return self.fn(x, y)


@pytest.fixture
def counting():
    return CountingDistance


@pytest.fixture
def line_points():
    """Four labelled points on a line at 0, 1, 10, 11."""
    positions = {"A": 0, "B": 1, "C": 10, "D": 11}
    return list(positions), lambda x, y: abs(positions[x] - positions[y])
