"""Shared pytest fixtures for dtwengine tests."""

import numpy as np
import pytest

from dtwengine.core.dtw import DTW
from dtwengine.models import DTWParams


@pytest.fixture
def engine():
    """Engine with early abandoning enabled (the default)."""
    return DTW()


@pytest.fixture
def exhaustive_engine():
    """Engine that never abandons, whatever the cutoff."""
    return DTW(early_abandon=False)


@pytest.fixture
def random_pairs():
    """Ten pairs of unequal-length random walks.

    Returns a list of ``(first, second)`` tuples.
    """
    rng = np.random.default_rng(42)
    pairs = []
    for _ in range(10):
        n, m = rng.integers(1, 25, size=2)
        first = np.cumsum(rng.normal(0, 1, n))
        second = np.cumsum(rng.normal(0, 1, m))
        pairs.append((first, second))
    return pairs


@pytest.fixture
def default_params():
    """Parameters for a pruning engine with a finite default cutoff."""
    return DTWParams(early_abandon=True, cutoff=2.5)
