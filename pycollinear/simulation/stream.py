"""
Seeded random stream.

Every random draw in the package comes from an explicit RandomStream
instance; nothing touches numpy's global generator. Two streams built
from the same seed produce identical values for identical call sequences.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pycollinear.core.exceptions import InvalidInputError
from pycollinear.core.validation import check_positive_int


class RandomStream:
    """
    Reproducible source of uniform and normal deviates.

    Backed by numpy's PCG64 Generator (``np.random.default_rng(seed)``).

    Example:
        >>> stream = RandomStream(1979)
        >>> x = stream.uniform(0, 50, 20)
        >>> e = stream.normal(0, 1, 20)
    """

    def __init__(self, seed: int):
        if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
            raise InvalidInputError(
                f"seed: expected an integer, got {type(seed).__name__} {seed!r}"
            )
        if seed < 0:
            raise InvalidInputError(f"seed: must be non-negative, got {seed}")
        self._seed = int(seed)
        self._rng = np.random.default_rng(self._seed)

    @property
    def seed(self) -> int:
        return self._seed

    def uniform(self, low: float, high: float, n: int) -> NDArray[np.floating[Any]]:
        """n draws from Uniform[low, high)."""
        n = check_positive_int(n, 'n')
        if not np.isfinite(low) or not np.isfinite(high) or low >= high:
            raise InvalidInputError(
                f"uniform: need finite low < high, got low={low}, high={high}"
            )
        return self._rng.uniform(low, high, n)

    def normal(self, mean: float, sd: float, n: int) -> NDArray[np.floating[Any]]:
        """n draws from Normal(mean, sd²). sd = 0 returns the constant mean."""
        n = check_positive_int(n, 'n')
        if not np.isfinite(mean) or not np.isfinite(sd) or sd < 0:
            raise InvalidInputError(
                f"normal: need finite mean and sd >= 0, got mean={mean}, sd={sd}"
            )
        return self._rng.normal(mean, sd, n)

    def __repr__(self) -> str:
        return f"RandomStream(seed={self._seed})"


def as_stream(seed: 'int | RandomStream') -> RandomStream:
    """Use an injected stream as-is, or build a fresh one from an integer seed."""
    if isinstance(seed, RandomStream):
        return seed
    return RandomStream(seed)
