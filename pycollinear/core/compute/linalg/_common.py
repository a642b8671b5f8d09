"""
Shared pieces of the least squares solvers: the result type and the
rank-deficiency check both factorizations use.
"""

from dataclasses import dataclass
from typing import Any, NoReturn

import numpy as np
from numpy.typing import NDArray

from pycollinear.core.compute.tolerances import RANK_TOLERANCE
from pycollinear.core.exceptions import SingularDesignError


@dataclass(frozen=True)
class LeastSquaresResult:
    """
    Solution of min_β ||y - Xβ||² for full-rank X.

    Attributes:
        coefficients: β (p,)
        xtx_inverse: (X'X)⁻¹ (p x p), scaled by σ² to get Var(β)
        rank: Numerical rank of X (always p here)
        method: Factorization used ('qr' or 'cholesky')
    """
    coefficients: NDArray[np.floating[Any]]
    xtx_inverse: NDArray[np.floating[Any]]
    rank: int
    method: str


def dependent_columns(
    pivots: NDArray[np.floating[Any]],
    column_norms: NDArray[np.floating[Any]],
) -> tuple[int, ...]:
    """
    Indices of columns whose pivot is negligible relative to the column norm.

    A zero column is always dependent.
    """
    dependent = []
    for j, (pivot, norm) in enumerate(zip(pivots, column_norms)):
        if norm == 0.0 or pivot <= RANK_TOLERANCE * norm:
            dependent.append(j)
    return tuple(dependent)


def raise_rank_deficient(
    X: NDArray[np.floating[Any]],
    rank: int,
    dependent: tuple[int, ...],
    column_names: tuple[str, ...] | None,
) -> NoReturn:
    """Raise SingularDesignError describing which columns are aliased."""
    p = X.shape[1]
    if column_names is not None:
        aliased = tuple(column_names[j] for j in dependent)
    else:
        aliased = tuple(f"column {j}" for j in dependent)

    with np.errstate(divide='ignore', invalid='ignore'):
        cond = float(np.linalg.cond(X))

    raise SingularDesignError(
        f"Design matrix is rank-deficient: rank={rank}, expected={p}. "
        f"Linearly dependent on earlier columns: {list(aliased)}. "
        f"This indicates perfect multicollinearity.",
        matrix_name='X',
        condition_number=cond,
        rank=rank,
        expected_rank=p,
        aliased=aliased,
    )
