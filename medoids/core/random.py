"""
Random state management for reproducible medoid initialization.

Initial medoids are drawn from get_rng() unless a caller passes its own
generator or seed.
"""

import random
from typing import Optional, Union

import numpy as np

_global_seed: int = 42
_global_rng: Optional[np.random.Generator] = None

RandomSource = Union[None, int, np.random.Generator]


def set_seed(seed: int = 42):
    """Set the global random seed for reproducibility."""
    global _global_seed, _global_rng
    _global_seed = seed
    _global_rng = np.random.default_rng(seed)
    random.seed(seed)


def get_rng() -> np.random.Generator:
    """Get the global random number generator."""
    global _global_rng
    if _global_rng is None:
        set_seed(_global_seed)
    return _global_rng


def get_seed() -> int:
    """Get the current global seed."""
    return _global_seed


def resolve_rng(source: RandomSource = None) -> np.random.Generator:
    """
    Turn a seed, a generator, or None into a generator.

    None falls back to the global generator; an int builds a fresh,
    independent generator seeded with it.
    """
    if source is None:
        return get_rng()
    if isinstance(source, np.random.Generator):
        return source
    return np.random.default_rng(source)


set_seed(42)
