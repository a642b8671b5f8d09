"""
CPU backends for linear regression.

Both backends run the same statistics on top of a pluggable least squares
capability (LinearAlgebra). QR is the reference; Cholesky on X'X is the
cheaper alternative for well-conditioned designs.
"""

from typing import Any

import numpy as np
from scipy import stats as sp_stats

from pycollinear.core.compute.linalg import CholeskySolver, QRSolver
from pycollinear.core.compute.timing import Timer
from pycollinear.core.compute.tolerances import ILL_CONDITIONED_THRESHOLD
from pycollinear.core.protocols import LinearAlgebra
from pycollinear.core.result import Result
from pycollinear.regression.design import RegressionDesign
from pycollinear.regression.solution import LinearParams


class CPUBackend:
    """
    Ordinary least squares on the CPU.

    Implements the Backend protocol for RegressionDesign -> LinearParams.
    """

    def __init__(self, linalg: LinearAlgebra):
        self._linalg = linalg

    @property
    def name(self) -> str:
        return f'cpu_{self._linalg.name}'

    def solve(self, design: RegressionDesign) -> Result[LinearParams]:
        """
        Solve OLS and compute inference statistics.

        Algorithm:
            1. Factorize and solve for β, (X'X)⁻¹ (raises on rank deficiency)
            2. Residuals, RSS, TSS
            3. σ² = RSS / (n - p); SE = sqrt(σ² diag((X'X)⁻¹))
            4. t = β / SE; p = 2 P(T_{n-p} > |t|)

        Raises:
            SingularDesignError: If X is rank-deficient
        """
        timer = Timer()
        timer.start()
        warnings: list[str] = []

        X = design.X
        y = design.y
        n, p = design.n, design.p
        df_residual = n - p

        with timer.section('solve'):
            ls = self._linalg.solve(X, y, design.term_names)
            coefficients = ls.coefficients

        with timer.section('residuals'):
            fitted_values = X @ coefficients
            residuals = y - fitted_values

        with timer.section('statistics'):
            rss = float(residuals @ residuals)
            tss = float(np.sum((y - np.mean(y)) ** 2))

            sigma_sq = rss / df_residual
            standard_errors = np.sqrt(sigma_sq * np.diag(ls.xtx_inverse))

            if rss == 0.0:
                # Exact fit: SE = 0 and t is undefined
                warnings.append(
                    "perfect fit: residual sum of squares is zero, "
                    "t statistics and p-values are undefined (NaN)"
                )
                t_statistics = np.full(p, np.nan)
                p_values = np.full(p, np.nan)
            else:
                t_statistics = coefficients / standard_errors
                p_values = 2.0 * sp_stats.t.sf(np.abs(t_statistics), df_residual)

        with timer.section('diagnostics'):
            condition_number = float(np.linalg.cond(X))
        if condition_number > ILL_CONDITIONED_THRESHOLD:
            warnings.append(
                f"design is ill-conditioned (condition number {condition_number:.3g}); "
                f"coefficients and standard errors are unstable"
            )

        timer.stop()

        params = LinearParams(
            coefficients=coefficients,
            standard_errors=standard_errors,
            t_statistics=t_statistics,
            p_values=p_values,
            residuals=residuals,
            fitted_values=fitted_values,
            xtx_inverse=ls.xtx_inverse,
            rss=rss,
            tss=tss,
            rank=ls.rank,
            df_residual=df_residual,
        )

        info: dict[str, Any] = {
            'method': ls.method,
            'rank': ls.rank,
            'terms': design.term_names,
            'response': design.response_name,
            'condition_number': condition_number,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings),
        )


class CPUQRBackend(CPUBackend):
    """
    CPU backend using QR decomposition of X.

    The reference implementation; matches R's lm() to machine precision
    on full-rank designs.
    """

    def __init__(self):
        super().__init__(QRSolver())


class CPUCholeskyBackend(CPUBackend):
    """CPU backend using Cholesky decomposition of X'X."""

    def __init__(self):
        super().__init__(CholeskySolver())
