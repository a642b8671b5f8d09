"""
Cholesky least squares on the cross-product matrix.

Solves the normal equations X'X β = X'y through X'X = LL'. Cheaper than
QR for tall X but squares the condition number, so near-collinear designs
lose roughly twice as many digits.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import LinAlgError, cho_solve, cholesky

from pycollinear.core.compute.linalg._common import (
    LeastSquaresResult,
    dependent_columns,
    raise_rank_deficient,
)


def cholesky_cpu(XtX: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]] | None:
    """
    Lower Cholesky factor of a symmetric matrix, or None if it is not
    numerically positive definite.
    """
    try:
        return cholesky(XtX, lower=True)
    except LinAlgError:
        return None


def cholesky_solve_cpu(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    column_names: tuple[str, ...] | None = None,
) -> LeastSquaresResult:
    """
    Solve least squares via Cholesky decomposition of X'X.

    L[j, j]² is the squared length of the part of column j orthogonal to
    columns 0..j-1, the same quantity QR exposes as R[j, j].

    Raises:
        SingularDesignError: If X is rank-deficient
    """
    p = X.shape[1]
    XtX = X.T @ X
    Xty = X.T @ y
    norms = np.linalg.norm(X, axis=0)

    L = cholesky_cpu(XtX)
    if L is None:
        # Factorization broke down; locate the dependent columns with QR
        from pycollinear.core.compute.linalg.qr import qr_cpu
        qr_result = qr_cpu(X)
        dependent = qr_result.dependent or (p - 1,)
        raise_rank_deficient(X, p - len(dependent), dependent, column_names)

    dependent = dependent_columns(np.abs(np.diag(L)), norms)
    if dependent:
        raise_rank_deficient(X, p - len(dependent), dependent, column_names)

    factor = (L, True)
    beta = cho_solve(factor, Xty)
    xtx_inverse = cho_solve(factor, np.eye(p))

    return LeastSquaresResult(
        coefficients=beta,
        xtx_inverse=xtx_inverse,
        rank=p,
        method='cholesky',
    )


class CholeskySolver:
    """Least squares capability backed by Cholesky of the cross-product."""

    @property
    def name(self) -> str:
        return 'cholesky'

    def rank(self, X: NDArray[np.floating[Any]]) -> int:
        L = cholesky_cpu(X.T @ X)
        if L is None:
            from pycollinear.core.compute.linalg.qr import qr_cpu
            return qr_cpu(X).rank
        dependent = dependent_columns(np.abs(np.diag(L)), np.linalg.norm(X, axis=0))
        return X.shape[1] - len(dependent)

    def solve(
        self,
        X: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
        column_names: tuple[str, ...] | None = None,
    ) -> LeastSquaresResult:
        return cholesky_solve_cpu(X, y, column_names)
