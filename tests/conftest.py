"""
Pytest configuration and shared fixtures.

This file is automatically discovered by pytest and provides fixtures
available to all test modules.
"""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded random generator so tests are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def two_clusters():
    """
    Two well-separated clusters in 10 dimensions.

    20 points around the origin and 20 around [10, ..., 10]. Returns the
    data matrix and the cluster id of each row.
    """
    gen = np.random.default_rng(7)
    a = gen.standard_normal((20, 10)) * 0.5
    b = 10.0 + gen.standard_normal((20, 10)) * 0.5
    X = np.vstack([a, b])
    labels = np.array([0] * 20 + [1] * 20)
    return X, labels


@pytest.fixture
def line_data():
    """Points lying exactly on a line through [1, 2, 3, 4, 5]."""
    direction = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
    t = np.linspace(-3.0, 3.0, 15)
    return t[:, None] * direction[None, :] + np.array([2.0, -1.0, 0.5, 0.0, 3.0])
