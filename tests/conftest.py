"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from pycollinear import Dataset, RandomStream, generate_correlated, pca, simulate_response


@pytest.fixture
def stream():
    """Seeded random stream for reproducible tests."""
    return RandomStream(42)


@pytest.fixture
def rng():
    """Plain numpy generator for building fixtures by hand."""
    return np.random.default_rng(42)


@pytest.fixture
def simple_dataset(rng):
    """Three independent predictors, low noise, known coefficients."""
    n = 100
    X = rng.standard_normal((n, 3))
    beta_true = np.array([1.0, -2.0, 0.5])
    y = 4.0 + X @ beta_true + rng.standard_normal(n) * 0.1
    ds = Dataset.from_arrays(A=X[:, 0], B=X[:, 1], C=X[:, 2], Y=y, response='Y')
    return ds, 4.0, beta_true


@pytest.fixture
def correlated_dataset(stream):
    """X2 = X1 + Uniform(0, 10), X1 ~ Uniform(0, 50), Y = 3 X1 + 3 X2 + N(0, 5)."""
    return generate_correlated(100, stream, 10.0, 5.0, coefficients=(3.0, 3.0))


@pytest.fixture
def nearly_collinear_dataset(stream):
    """X2 = X1 + Uniform(0, 0.5): strongly correlated but not exactly."""
    return generate_correlated(60, stream, 0.5, 2.0, coefficients=(1.0, 1.0))


@pytest.fixture
def orthogonal_dataset():
    """Principal components of a correlated pair, with Y = 3 PC1 + 3 PC2 + N(0, 5)."""
    stream = RandomStream(1979)
    base = generate_correlated(100, stream, 10.0, 1.0, coefficients=(1.0, 1.0))
    rotated = pca(base, ['X1', 'X2'])
    return simulate_response(rotated, {'PC1': 3.0, 'PC2': 3.0}, stream, 5.0)


@pytest.fixture
def collinear_dataset(rng):
    """X3 = X1 + X2 exactly (perfect collinearity)."""
    n = 50
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    x3 = x1 + x2
    y = x1 - x2 + rng.standard_normal(n)
    return Dataset.from_arrays(X1=x1, X2=x2, X3=x3, Y=y, response='Y')
