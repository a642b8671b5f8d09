"""
Common data types for principal component analysis.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True, eq=False)
class PCAParams:
    """
    Parameter payload for a principal component transform.

    Eigen-pairs are ordered by descending eigenvalue. Column j of
    `loadings` is the eigenvector that defines component j.
    """
    predictors: tuple[str, ...]
    component_names: tuple[str, ...]
    eigenvalues: NDArray[np.floating[Any]]
    loadings: NDArray[np.floating[Any]]
    means: NDArray[np.floating[Any]]
    scales: NDArray[np.floating[Any]]
    scores: NDArray[np.floating[Any]]
