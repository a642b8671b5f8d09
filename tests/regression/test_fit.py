"""
Tests for ordinary least squares.

Inference statistics are checked against direct formulas and scipy's
distributions; QR and Cholesky backends must agree on well-conditioned
designs.
"""

import numpy as np
import pytest
from scipy import stats

from pycollinear import Dataset, ModelSpec, fit
from pycollinear.core.compute.linalg import QRSolver
from pycollinear.core.compute.tolerances import (
    CPU_FP64,
    CPU_FP64_ILL_CONDITIONED,
    select_tolerance,
)
from pycollinear.core.exceptions import (
    InvalidInputError,
    SingularDesignError,
    UnknownTermError,
)
from pycollinear.core.model_spec import INTERCEPT
from pycollinear.core.protocols import Backend
from pycollinear.regression import CoefficientRow, RegressionDesign, resolve_backend_name
from pycollinear.regression.backends.cpu import CPUCholeskyBackend, CPUQRBackend


# ═══════════════════════════════════════════════════════════════════════
# Design
# ═══════════════════════════════════════════════════════════════════════


class TestDesign:

    def test_intercept_first_in_spec_order(self, simple_dataset):
        ds, _, _ = simple_dataset
        design = RegressionDesign.build(ds, ModelSpec.of('C', 'A'))
        assert design.term_names == (INTERCEPT, 'C', 'A')
        assert design.X.shape == (100, 3)
        np.testing.assert_array_equal(design.X[:, 0], np.ones(100))
        np.testing.assert_array_equal(design.X[:, 1], ds['C'])
        np.testing.assert_array_equal(design.y, ds['Y'])
        assert design.n == 100
        assert design.p == 3
        assert design.response_name == 'Y'

    def test_no_residual_df(self):
        ds = Dataset.from_arrays(A=[1.0, 2.0], Y=[1.0, 3.0], response='Y')
        with pytest.raises(InvalidInputError, match="degrees of freedom"):
            RegressionDesign.build(ds, ModelSpec.of('A'))


# ═══════════════════════════════════════════════════════════════════════
# Estimates and inference
# ═══════════════════════════════════════════════════════════════════════


class TestFit:

    def test_recovers_coefficients(self, simple_dataset):
        ds, intercept, beta = simple_dataset
        result = fit(ds, ['A', 'B', 'C'])
        np.testing.assert_allclose(result.coefficients, [intercept, *beta], atol=0.05)
        assert result.term_names == (INTERCEPT, 'A', 'B', 'C')
        assert result.r_squared > 0.99

    def test_matches_lstsq(self, simple_dataset):
        ds, _, _ = simple_dataset
        result = fit(ds, ['A', 'B', 'C'])
        X = np.column_stack([np.ones(100), ds.matrix(['A', 'B', 'C'])])
        expected, *_ = np.linalg.lstsq(X, ds['Y'], rcond=None)
        np.testing.assert_allclose(result.coefficients, expected, rtol=CPU_FP64.rtol)

    def test_inference_formulas(self, simple_dataset):
        ds, _, _ = simple_dataset
        result = fit(ds, ['A', 'B', 'C'])
        X = np.column_stack([np.ones(100), ds.matrix(['A', 'B', 'C'])])
        y = ds['Y']
        resid = y - X @ result.coefficients
        df = 100 - 4
        sigma2 = resid @ resid / df
        se = np.sqrt(sigma2 * np.diag(np.linalg.inv(X.T @ X)))
        t = result.coefficients / se
        p = 2 * stats.t.sf(np.abs(t), df)

        assert result.df_residual == df
        np.testing.assert_allclose(result.residuals, resid, atol=1e-12)
        np.testing.assert_allclose(result.sigma_squared, sigma2, rtol=1e-10)
        np.testing.assert_allclose(result.standard_errors, se, rtol=1e-8)
        np.testing.assert_allclose(result.t_statistics, t, rtol=1e-8)
        np.testing.assert_allclose(result.p_values, p, rtol=1e-5, atol=1e-300)
        np.testing.assert_allclose(result.vcov, sigma2 * np.linalg.inv(X.T @ X), rtol=1e-8, atol=1e-15)

    def test_sums_of_squares(self, simple_dataset):
        ds, _, _ = simple_dataset
        result = fit(ds, ['A', 'B'])
        y = ds['Y']
        tss = np.sum((y - y.mean()) ** 2)
        np.testing.assert_allclose(result.tss, tss, rtol=1e-12)
        np.testing.assert_allclose(result.rss, result.residuals @ result.residuals, rtol=1e-12)
        np.testing.assert_allclose(result.explained_ss, tss - result.rss, rtol=1e-12)
        np.testing.assert_allclose(
            result.fitted_values + result.residuals, y, atol=1e-12
        )

    def test_overall_f(self, simple_dataset):
        ds, _, _ = simple_dataset
        result = fit(ds, ['A', 'B', 'C'])
        f_expected = (result.explained_ss / 3) / (result.rss / 96)
        np.testing.assert_allclose(result.f_statistic, f_expected, rtol=1e-12)
        np.testing.assert_allclose(
            result.f_p_value, stats.f.sf(f_expected, 3, 96), rtol=1e-6, atol=1e-300
        )

    def test_adjusted_r_squared(self, simple_dataset):
        ds, _, _ = simple_dataset
        result = fit(ds, ['A'])
        expected = 1 - (1 - result.r_squared) * 99 / 98
        np.testing.assert_allclose(result.adjusted_r_squared, expected, rtol=1e-12)

    def test_residual_std_error(self, simple_dataset):
        ds, _, _ = simple_dataset
        result = fit(ds, ['A', 'B', 'C'])
        np.testing.assert_allclose(
            result.residual_std_error, np.sqrt(result.rss / 96), rtol=1e-12
        )

    def test_confint(self, simple_dataset):
        ds, _, _ = simple_dataset
        result = fit(ds, ['A'])
        ci = result.confint(0.95)
        q = stats.t.ppf(0.975, 98)
        assert ci.shape == (2, 2)
        np.testing.assert_allclose(ci[:, 0], result.coefficients - q * result.standard_errors)
        np.testing.assert_allclose(ci[:, 1], result.coefficients + q * result.standard_errors)

    def test_confint_bad_level(self, simple_dataset):
        ds, _, _ = simple_dataset
        with pytest.raises(ValueError):
            fit(ds, ['A']).confint(1.5)

    def test_intercept_only(self, simple_dataset):
        ds, _, _ = simple_dataset
        result = fit(ds, [])
        np.testing.assert_allclose(result.coefficients, [ds['Y'].mean()], rtol=1e-12)
        np.testing.assert_allclose(result.rss, result.tss, rtol=1e-12)
        assert result.f_statistic is None
        assert result.f_p_value is None

    def test_explicit_response(self, simple_dataset):
        ds, _, _ = simple_dataset
        result = fit(ds, ModelSpec.of('B', response='A'))
        assert result.response_name == 'A'
        assert result.term_names == (INTERCEPT, 'B')


class TestCoefficientTable:

    def test_rows(self, simple_dataset):
        ds, _, _ = simple_dataset
        result = fit(ds, ['A', 'B'])
        table = result.coefficient_table()
        assert len(table) == 3
        assert all(isinstance(row, CoefficientRow) for row in table)
        assert [row.term for row in table] == [INTERCEPT, 'A', 'B']
        assert table[1].estimate == pytest.approx(result.coefficients[1])
        assert table[1].p_value == pytest.approx(result.p_values[1])

    def test_lookup(self, simple_dataset):
        ds, _, _ = simple_dataset
        result = fit(ds, ['A', 'B'])
        assert result.coefficient('B').estimate == pytest.approx(result.coefficients[2])
        with pytest.raises(UnknownTermError):
            result.coefficient('C')

    def test_summary(self, simple_dataset):
        ds, _, _ = simple_dataset
        text = fit(ds, ['A', 'B']).summary()
        assert "Y ~ A + B" in text
        assert "(Intercept)" in text
        assert "R-squared" in text
        assert "Backend: cpu_qr" in text


# ═══════════════════════════════════════════════════════════════════════
# Backends
# ═══════════════════════════════════════════════════════════════════════


class TestBackends:

    def test_backends_satisfy_protocol(self):
        assert isinstance(CPUQRBackend(), Backend)
        assert isinstance(CPUCholeskyBackend(), Backend)

    @pytest.mark.parametrize(
        "choice, expected",
        [('auto', 'cpu_qr'), ('cpu_cholesky', 'cpu_cholesky'), (QRSolver(), 'cpu_qr')],
    )
    def test_resolve_backend_name(self, choice, expected):
        assert resolve_backend_name(choice) == expected

    @pytest.mark.parametrize("choice", ['auto', 'qr', 'cpu_qr'])
    def test_qr_names(self, simple_dataset, choice):
        ds, _, _ = simple_dataset
        result = fit(ds, ['A'], backend=choice)
        assert result.backend_name == 'cpu_qr'
        assert result.info['method'] == 'qr'

    def test_cholesky_matches_qr(self, simple_dataset):
        ds, _, _ = simple_dataset
        qr = fit(ds, ['A', 'B', 'C'], backend='qr')
        chol = fit(ds, ['A', 'B', 'C'], backend='cholesky')
        assert chol.backend_name == 'cpu_cholesky'
        np.testing.assert_allclose(chol.coefficients, qr.coefficients, rtol=1e-9)
        np.testing.assert_allclose(chol.standard_errors, qr.standard_errors, rtol=1e-8)
        np.testing.assert_allclose(chol.rss, qr.rss, rtol=1e-8)

    def test_linear_algebra_instance(self, simple_dataset):
        ds, _, _ = simple_dataset
        result = fit(ds, ['A'], backend=QRSolver())
        assert result.backend_name == 'cpu_qr'

    def test_unknown_backend(self, simple_dataset):
        ds, _, _ = simple_dataset
        with pytest.raises(ValueError, match="Unknown backend"):
            fit(ds, ['A'], backend='gpu')

    def test_timing_and_info(self, simple_dataset):
        ds, _, _ = simple_dataset
        result = fit(ds, ['A', 'B'])
        assert 'total_seconds' in result.timing
        assert result.info['rank'] == 3
        assert result.info['terms'] == (INTERCEPT, 'A', 'B')
        assert result.info['condition_number'] >= 1.0


# ═══════════════════════════════════════════════════════════════════════
# Failure modes
# ═══════════════════════════════════════════════════════════════════════


class TestFailures:

    @pytest.mark.parametrize("backend", ['qr', 'cholesky'])
    def test_duplicated_column(self, simple_dataset, backend):
        ds, _, _ = simple_dataset
        ds = ds.with_columns(A_copy=ds['A'])
        with pytest.raises(SingularDesignError) as excinfo:
            fit(ds, ['A', 'B', 'A_copy'], backend=backend)
        assert excinfo.value.expected_rank == 4
        assert 'A_copy' in excinfo.value.aliased

    def test_exact_collinearity(self, collinear_dataset):
        with pytest.raises(SingularDesignError) as excinfo:
            fit(collinear_dataset, ['X1', 'X2', 'X3'])
        assert excinfo.value.aliased == ('X3',)
        assert excinfo.value.rank == 3

    def test_unknown_term(self, simple_dataset):
        ds, _, _ = simple_dataset
        with pytest.raises(UnknownTermError):
            fit(ds, ['A', 'Z'])

    def test_duplicate_terms(self, simple_dataset):
        ds, _, _ = simple_dataset
        with pytest.raises(InvalidInputError, match="duplicate"):
            fit(ds, ['A', 'A'])

    def test_no_response(self):
        ds = Dataset.from_arrays(A=[1.0, 2.0, 3.0, 4.0])
        with pytest.raises(InvalidInputError, match="No response"):
            fit(ds, ['A'])

    def test_saturated(self):
        ds = Dataset.from_arrays(A=[1.0, 2.0, 4.0], B=[0.0, 1.0, 0.0], Y=[1.0, 2.0, 2.0], response='Y')
        with pytest.raises(InvalidInputError, match="degrees of freedom"):
            fit(ds, ['A', 'B'])


# ═══════════════════════════════════════════════════════════════════════
# Warnings
# ═══════════════════════════════════════════════════════════════════════


class TestWarnings:

    def test_clean_fit_has_no_warnings(self, simple_dataset):
        ds, _, _ = simple_dataset
        assert fit(ds, ['A', 'B', 'C']).warnings == ()

    def test_perfect_fit(self):
        x = np.array([0.0, 1.0, 2.0, 3.0, 4.0])
        ds = Dataset.from_arrays(X=x, Y=np.array([2.0, 4.0, 6.0, 8.0, 10.0]), response='Y')
        result = fit(ds, ['X'])
        np.testing.assert_allclose(result.coefficients, [2.0, 2.0], atol=1e-12)
        if result.rss == 0.0:
            assert any("perfect fit" in w for w in result.warnings)
            assert np.all(np.isnan(result.t_statistics))
            assert "NA" in result.summary()
        assert result.r_squared == pytest.approx(1.0)

    def test_ill_conditioned(self, rng):
        n = 50
        x1 = rng.uniform(0.0, 50.0, n)
        x2 = x1 + rng.uniform(0.0, 1e-3, n)
        y = x1 + x2 + rng.standard_normal(n)
        ds = Dataset.from_arrays(X1=x1, X2=x2, Y=y, response='Y')
        result = fit(ds, ['X1', 'X2'])
        assert any("ill-conditioned" in w for w in result.warnings)
        assert result.info['condition_number'] > 1e4

    def test_ill_conditioned_matches_lstsq(self, rng):
        n = 60
        x1 = rng.uniform(0.0, 50.0, n)
        x2 = x1 + rng.uniform(0.0, 1e-3, n)
        y = 2.0 * x1 + 3.0 * x2 + 1e-3 * rng.standard_normal(n)
        ds = Dataset.from_arrays(X1=x1, X2=x2, Y=y, response='Y')
        result = fit(ds, ['X1', 'X2'])

        tol = select_tolerance(any("ill-conditioned" in w for w in result.warnings))
        assert tol is CPU_FP64_ILL_CONDITIONED
        X = np.column_stack([np.ones(n), x1, x2])
        expected, *_ = np.linalg.lstsq(X, y, rcond=None)
        np.testing.assert_allclose(result.coefficients, expected, rtol=tol.rtol, atol=tol.atol)
