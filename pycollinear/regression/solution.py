"""
Regression solution types.

Contains the parameter payload and the user-facing FitResult wrapper.
"""

from dataclasses import dataclass
from typing import Any, NamedTuple

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pycollinear.core.exceptions import UnknownTermError
from pycollinear.core.result import Result
from pycollinear.regression.design import RegressionDesign


@dataclass(frozen=True, eq=False)
class LinearParams:
    """
    Parameter payload for linear regression.

    This is the immutable data computed by backends. Arrays are aligned
    with RegressionDesign.term_names (intercept first).
    """
    coefficients: NDArray[np.floating[Any]]
    standard_errors: NDArray[np.floating[Any]]
    t_statistics: NDArray[np.floating[Any]]
    p_values: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    xtx_inverse: NDArray[np.floating[Any]]
    rss: float
    tss: float
    rank: int
    df_residual: int


class CoefficientRow(NamedTuple):
    """One line of the coefficient table."""
    term: str
    estimate: float
    std_error: float
    t_value: float
    p_value: float


@dataclass(frozen=True, eq=False)
class FitResult:
    """
    Ordinary least squares fit returned by fit().

    Coefficient arrays are aligned with term_names, intercept first.
    Model-level quantities (R-squared, overall F, residual variance) are
    derived lazily from the RSS and TSS of the payload.
    """
    _result: Result[LinearParams]
    _design: RegressionDesign

    @property
    def term_names(self) -> tuple[str, ...]:
        return self._design.term_names

    @property
    def response_name(self) -> str:
        return self._design.response_name

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.coefficients

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        """SE(β) = sqrt(diag(σ² (X'X)⁻¹))"""
        return self._result.params.standard_errors

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        return self._result.params.t_statistics

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-sided p-values from Student's t with df_residual degrees of freedom."""
        return self._result.params.p_values

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def tss(self) -> float:
        return self._result.params.tss

    @property
    def explained_ss(self) -> float:
        return self.tss - self.rss

    @property
    def r_squared(self) -> float:
        if self.tss == 0:
            return 1.0 if self.rss == 0 else 0.0
        return 1.0 - (self.rss / self.tss)

    @property
    def adjusted_r_squared(self) -> float:
        n = self._design.n
        p = self._result.params.rank
        if self.tss == 0:
            return self.r_squared
        return 1.0 - (1.0 - self.r_squared) * (n - 1) / (n - p)

    @property
    def residual_std_error(self) -> float:
        return float(np.sqrt(self.rss / self.df_residual))

    @property
    def sigma_squared(self) -> float:
        """Residual variance estimate RSS / df."""
        return self.rss / self.df_residual

    @property
    def f_statistic(self) -> float | None:
        """Overall F statistic against the intercept-only model (None without predictors)."""
        k = self._design.p - 1
        if k == 0 or self.rss == 0:
            return None
        return (self.explained_ss / k) / self.sigma_squared

    @property
    def f_p_value(self) -> float | None:
        f_val = self.f_statistic
        if f_val is None:
            return None
        return float(sp_stats.f.sf(f_val, self._design.p - 1, self.df_residual))

    @property
    def vcov(self) -> NDArray[np.floating[Any]]:
        """Estimated covariance matrix of the coefficients, σ² (X'X)⁻¹."""
        return self.sigma_squared * self._result.params.xtx_inverse

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def n_observations(self) -> int:
        return self._design.n

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def confint(self, level: float = 0.95) -> NDArray[np.floating[Any]]:
        """
        Confidence intervals for the coefficients.

        Returns:
            (p x 2) array of [lower, upper], rows aligned with term_names
        """
        if not 0.0 < level < 1.0:
            raise ValueError(f"level must be in (0, 1), got {level}")
        q = sp_stats.t.ppf(0.5 + level / 2.0, self.df_residual)
        half = q * self.standard_errors
        return np.column_stack([self.coefficients - half, self.coefficients + half])

    def coefficient_table(self) -> tuple[CoefficientRow, ...]:
        """Estimate, SE, t and p for every term, intercept first."""
        return tuple(
            CoefficientRow(
                term=term,
                estimate=float(b),
                std_error=float(se),
                t_value=float(t),
                p_value=float(pv),
            )
            for term, b, se, t, pv in zip(
                self.term_names,
                self.coefficients,
                self.standard_errors,
                self.t_statistics,
                self.p_values,
            )
        )

    def coefficient(self, term: str) -> CoefficientRow:
        """Coefficient table row for one term ('(Intercept)' for the intercept)."""
        for row in self.coefficient_table():
            if row.term == term:
                return row
        raise UnknownTermError(
            f"'{term}' is not a term of this model. Terms: {list(self.term_names)}",
            term=term,
            available=self.term_names,
        )

    def summary(self) -> str:
        """Model fit statistics followed by the coefficient table."""
        d = self._design
        rule = "-" * 74
        out = [
            f"Least squares fit of {d.spec}",
            f"  n = {d.n}, rank = {self.rank}, residual df = {self.df_residual}",
            f"  R-squared {self.r_squared:.6f}    adjusted {self.adjusted_r_squared:.6f}",
            f"  sigma {self.residual_std_error:.6f}",
        ]
        if self.f_statistic is not None:
            out.append(
                f"  F({d.p - 1}, {self.df_residual}) = {self.f_statistic:.4f}, "
                f"p = {self.f_p_value:.4e}"
            )
        out += [rule, _COEF_HEADER, rule]
        out += [_format_coefficient(row) for row in self.coefficient_table()]
        out += [rule, _STARS_LEGEND, f"Backend: {self.backend_name}"]
        if self.timing:
            out.append(f"Elapsed: {self.timing.get('total_seconds', 0.0):.4f}s")
        out += [f"Warning: {message}" for message in self.warnings]
        return "\n".join(out)

    def __repr__(self) -> str:
        return (
            f"FitResult(n={self._design.n}, terms={list(self.term_names)}, "
            f"r_squared={self.r_squared:.4f})"
        )


def _significance_stars(p: float | None) -> str:
    if p is None or np.isnan(p):
        return ''
    for cutoff, stars in _STAR_CUTOFFS:
        if p < cutoff:
            return stars
    return ''


_COEF_HEADER = (
    f"{'':<16} {'Estimate':>14} {'Std. Error':>12} {'t value':>10} {'Pr(>|t|)':>12}"
)
_STARS_LEGEND = "Significance: *** < 0.001 < ** < 0.01 < * < 0.05 < . < 0.1"
_STAR_CUTOFFS = ((0.001, '***'), (0.01, '**'), (0.05, '*'), (0.1, '.'))


def _format_coefficient(row: CoefficientRow) -> str:
    lead = f"{row.term:<16} {row.estimate:14.6f} {row.std_error:12.6f}"
    if np.isnan(row.t_value):
        return f"{lead} {'NA':>10} {'NA':>12}"
    return f"{lead} {row.t_value:10.3f} {row.p_value:12.4e} {_significance_stars(row.p_value)}"
