"""
QR decomposition least squares.

The reference solver. Works on X directly, so its accuracy depends on
cond(X) rather than cond(X'X).
"""

from dataclasses import dataclass
from typing import Any, Literal

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from pycollinear.core.compute.linalg._common import (
    LeastSquaresResult,
    dependent_columns,
    raise_rank_deficient,
)


@dataclass(frozen=True)
class QRResult:
    """
    Householder factors of a design matrix together with its rank.

    Attributes:
        Q: Columns spanning the column space of X (n x min(n, p))
        R: Upper triangular factor (min(n, p) x p)
        rank: p minus the number of dependent columns
        dependent: Indices of columns linearly dependent on earlier ones
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    rank: int
    dependent: tuple[int, ...]


def qr_cpu(
    X: NDArray[np.floating[Any]],
    mode: Literal['reduced', 'complete'] = 'reduced'
) -> QRResult:
    """
    Factor X = QR with numpy (LAPACK geqrf) and diagnose its rank.

    Without pivoting, |R[j, j]| is the length of the part of column j that
    is orthogonal to columns 0..j-1, so comparing it with ||X[:, j]|| finds
    exactly the columns that are linear combinations of earlier ones.

    Args:
        X: Design matrix (n x p)
        mode: Passed through to numpy.linalg.qr

    Returns:
        QRResult with Q, R, numerical rank and dependent column indices
    """
    Q, R = np.linalg.qr(X, mode=mode)
    p = X.shape[1]

    k = min(X.shape)
    pivots = np.zeros(p, dtype=np.float64)
    pivots[:k] = np.abs(np.diag(R))[:k]
    dependent = dependent_columns(pivots, np.linalg.norm(X, axis=0))

    return QRResult(Q=Q, R=R, rank=p - len(dependent), dependent=dependent)


def qr_solve_cpu(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    column_names: tuple[str, ...] | None = None,
) -> LeastSquaresResult:
    """
    Solve least squares via QR decomposition.

    With X = QR:
        β = R⁻¹ Q'y
        (X'X)⁻¹ = R⁻¹ R⁻ᵀ

    Args:
        X: Design matrix (n x p), n >= p
        y: Response (n,)
        column_names: Column labels used in the error message

    Returns:
        LeastSquaresResult with coefficients and (X'X)⁻¹

    Raises:
        SingularDesignError: If X is rank-deficient
    """
    p = X.shape[1]
    factors = qr_cpu(X)

    if factors.rank < p:
        raise_rank_deficient(X, factors.rank, factors.dependent, column_names)

    R = factors.R[:p, :p]
    beta = solve_triangular(R, (factors.Q.T @ y)[:p], lower=False)

    R_inv = solve_triangular(R, np.eye(p), lower=False)
    xtx_inverse = R_inv @ R_inv.T

    return LeastSquaresResult(
        coefficients=beta,
        xtx_inverse=xtx_inverse,
        rank=p,
        method='qr',
    )


class QRSolver:
    """Least squares capability backed by Householder QR."""

    @property
    def name(self) -> str:
        return 'qr'

    def rank(self, X: NDArray[np.floating[Any]]) -> int:
        return qr_cpu(X).rank

    def solve(
        self,
        X: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
        column_names: tuple[str, ...] | None = None,
    ) -> LeastSquaresResult:
        return qr_solve_cpu(X, y, column_names)
