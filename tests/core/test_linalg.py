"""
Tests for the least squares kernels (QR reference, Cholesky alternative).
"""

import numpy as np
import pytest

from pycollinear.core.compute.linalg import (
    CholeskySolver,
    QRSolver,
    cholesky_cpu,
    cholesky_solve_cpu,
    qr_cpu,
    qr_solve_cpu,
)
from pycollinear.core.compute.tolerances import (
    CPU_FP64,
    CPU_FP64_ILL_CONDITIONED,
    select_tolerance,
)
from pycollinear.core.exceptions import SingularDesignError
from pycollinear.core.protocols import LinearAlgebra


@pytest.fixture
def design(rng):
    n = 60
    X = np.column_stack([np.ones(n), rng.standard_normal((n, 3))])
    y = X @ np.array([1.0, 2.0, -1.0, 0.5]) + rng.standard_normal(n) * 0.3
    return X, y


class TestQR:

    def test_matches_lstsq(self, design):
        X, y = design
        result = qr_solve_cpu(X, y)
        expected, *_ = np.linalg.lstsq(X, y, rcond=None)
        np.testing.assert_allclose(result.coefficients, expected, rtol=CPU_FP64.rtol)
        assert result.rank == 4
        assert result.method == 'qr'

    def test_xtx_inverse(self, design):
        X, y = design
        result = qr_solve_cpu(X, y)
        np.testing.assert_allclose(
            result.xtx_inverse, np.linalg.inv(X.T @ X), rtol=1e-8, atol=1e-12
        )

    def test_rank(self, design):
        X, _ = design
        assert qr_cpu(X).rank == 4
        assert qr_cpu(X).dependent == ()

    def test_duplicate_column(self, design):
        X, y = design
        X_dup = np.column_stack([X, X[:, 1]])
        with pytest.raises(SingularDesignError) as excinfo:
            qr_solve_cpu(X_dup, y, ('(Intercept)', 'A', 'B', 'C', 'A_copy'))
        err = excinfo.value
        assert err.rank == 4
        assert err.expected_rank == 5
        assert err.aliased == ('A_copy',)
        assert err.matrix_name == 'X'

    def test_exact_linear_combination(self, design):
        X, y = design
        X_comb = np.column_stack([X, X[:, 1] + 2.0 * X[:, 2]])
        with pytest.raises(SingularDesignError, match="rank-deficient"):
            qr_solve_cpu(X_comb, y)

    def test_zero_column(self, design):
        X, y = design
        X_zero = np.column_stack([X, np.zeros(X.shape[0])])
        with pytest.raises(SingularDesignError) as excinfo:
            qr_solve_cpu(X_zero, y)
        assert excinfo.value.aliased == ('column 4',)


class TestCholesky:

    def test_matches_qr(self, design):
        X, y = design
        chol = cholesky_solve_cpu(X, y)
        qr = qr_solve_cpu(X, y)
        np.testing.assert_allclose(chol.coefficients, qr.coefficients, rtol=1e-9)
        np.testing.assert_allclose(chol.xtx_inverse, qr.xtx_inverse, rtol=1e-8, atol=1e-12)
        assert chol.method == 'cholesky'

    def test_factor(self, design):
        X, _ = design
        XtX = X.T @ X
        L = cholesky_cpu(XtX)
        np.testing.assert_allclose(L @ L.T, XtX, rtol=1e-12, atol=1e-10)

    def test_factor_fails_on_indefinite(self):
        assert cholesky_cpu(np.array([[1.0, 2.0], [2.0, 1.0]])) is None

    def test_zero_column(self, design):
        X, y = design
        X_zero = np.column_stack([X, np.zeros(X.shape[0])])
        with pytest.raises(SingularDesignError):
            cholesky_solve_cpu(X_zero, y)

    def test_duplicate_column(self, design):
        X, y = design
        X_dup = np.column_stack([X, X[:, 2]])
        with pytest.raises(SingularDesignError):
            cholesky_solve_cpu(X_dup, y)


class TestSolvers:

    @pytest.mark.parametrize("solver", [QRSolver(), CholeskySolver()])
    def test_protocol(self, solver):
        assert isinstance(solver, LinearAlgebra)

    @pytest.mark.parametrize("solver", [QRSolver(), CholeskySolver()])
    def test_rank(self, solver, design):
        X, _ = design
        assert solver.rank(X) == 4
        assert solver.rank(np.column_stack([X, X[:, 3]])) == 4

    def test_names(self):
        assert QRSolver().name == 'qr'
        assert CholeskySolver().name == 'cholesky'


class TestTolerances:

    def test_select(self):
        assert select_tolerance(False) is CPU_FP64
        assert select_tolerance(True) is CPU_FP64_ILL_CONDITIONED
