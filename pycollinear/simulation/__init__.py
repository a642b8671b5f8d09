"""
Reproducible synthetic data.

Public API:
    RandomStream(seed)                                   -> seeded deviates
    generate_linear(n, seed, slope=...)                  -> Dataset (X, Y)
    generate_correlated(n, seed, base_spread, noise_sd,
                        coefficients=...)                -> Dataset (X1, X2, Y)
    simulate_response(dataset, coefficients, stream, noise_sd) -> Dataset

Example:
    >>> from pycollinear.simulation import RandomStream, generate_correlated
    >>> stream = RandomStream(1979)
    >>> ds = generate_correlated(20, stream, 10.0, 5.0, coefficients=(3, 3))
"""

from pycollinear.simulation.stream import RandomStream
from pycollinear.simulation.generators import (
    generate_correlated,
    generate_linear,
    simulate_response,
)

__all__ = [
    "RandomStream",
    "generate_correlated",
    "generate_linear",
    "simulate_response",
]
