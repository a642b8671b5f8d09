"""
Principal component transform.

Used here purely as an orthogonalization tool: the components of a set of
correlated predictors have zero sample covariance, so sequential sums of
squares over them do not depend on term order.

Algorithm:
    1. Centre each predictor (and divide by its SD when scale=True)
    2. Sample covariance S = Z'Z / (n - 1)
    3. Symmetric eigen-decomposition S = V Λ V', eigenvalues descending
    4. Scores T = Z V; cov(T) = Λ is diagonal
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pycollinear.core.compute.tolerances import PSD_TOLERANCE
from pycollinear.core.exceptions import DegenerateInputError


def covariance(Z: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """Sample covariance of already-centred columns."""
    n = Z.shape[0]
    S = (Z.T @ Z) / (n - 1)
    return (S + S.T) / 2.0


def eigen_decompose(
    S: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Eigen-decomposition of a covariance matrix, descending eigenvalues.

    Eigenvector signs are fixed so that each vector's largest-magnitude
    entry is positive, making the transform deterministic.

    Raises:
        DegenerateInputError: If S is not positive semi-definite within
            PSD_TOLERANCE (relative to the largest eigenvalue)
    """
    eigenvalues, eigenvectors = np.linalg.eigh(S)

    order = np.argsort(eigenvalues)[::-1]
    eigenvalues = eigenvalues[order]
    eigenvectors = eigenvectors[:, order]

    largest = float(eigenvalues[0]) if eigenvalues.size else 0.0
    smallest = float(eigenvalues[-1]) if eigenvalues.size else 0.0
    if largest <= 0.0 or smallest < -PSD_TOLERANCE * largest:
        raise DegenerateInputError(
            f"Covariance matrix is not positive semi-definite "
            f"(eigenvalues in [{smallest:.6g}, {largest:.6g}])",
            matrix_name='covariance',
            min_eigenvalue=smallest,
        )
    # Round-off can leave tiny negatives on a singular covariance
    eigenvalues = np.clip(eigenvalues, 0.0, None)

    pivots = np.argmax(np.abs(eigenvectors), axis=0)
    signs = np.sign(eigenvectors[pivots, np.arange(eigenvectors.shape[1])])
    signs[signs == 0] = 1.0
    eigenvectors = eigenvectors * signs

    return eigenvalues, eigenvectors


def pca_transform(
    X: NDArray[np.floating[Any]],
    *,
    scale: bool,
) -> tuple[
    NDArray[np.floating[Any]],
    NDArray[np.floating[Any]],
    NDArray[np.floating[Any]],
    NDArray[np.floating[Any]],
    NDArray[np.floating[Any]],
]:
    """
    Project the columns of X onto their principal axes.

    Returns:
        (scores, eigenvalues, loadings, means, scales)

    Raises:
        DegenerateInputError: If a column is constant with scale=True, or
            the covariance is not PSD
    """
    means = X.mean(axis=0)
    Z = X - means

    if scale:
        scales = Z.std(axis=0, ddof=1)
        if np.any(scales == 0):
            raise DegenerateInputError(
                f"Cannot scale constant predictor columns {np.where(scales == 0)[0].tolist()}",
                matrix_name='X',
                min_eigenvalue=0.0,
            )
        Z = Z / scales
    else:
        scales = np.ones(X.shape[1])

    eigenvalues, loadings = eigen_decompose(covariance(Z))
    scores = Z @ loadings

    return scores, eigenvalues, loadings, means, scales
