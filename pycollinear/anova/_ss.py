"""
Sequential (Type I) sums of squares.

Works by fitting the nested models through regression.fit() and comparing
residual sums of squares. No new solver math, just model comparisons.

    SS(term_i) = RSS(terms 1..i-1) - RSS(terms 1..i)

Shared variance between correlated terms goes to whichever is listed
first. That order dependence is the quantity being demonstrated, so it is
reproduced faithfully and never corrected.
"""

from scipy import stats as sp_stats

from pycollinear.anova._common import RESIDUALS, AnovaTableRow
from pycollinear.core.compute.timing import Timer
from pycollinear.core.dataset import Dataset
from pycollinear.core.model_spec import ModelSpec
from pycollinear.core.protocols import LinearAlgebra
from pycollinear.regression import BackendChoice, fit


def _fit_rss(
    dataset: Dataset,
    spec: ModelSpec,
    backend: BackendChoice | LinearAlgebra,
) -> float:
    """RSS of one nested model; with no terms this is the total SS."""
    return fit(dataset, spec, backend=backend).rss


def _compute_f_and_p(
    ss: float,
    df: int,
    rss_error: float,
    df_error: int,
) -> tuple[float | None, float | None]:
    """F = (ss / df) / (rss_error / df_error) and its upper-tail p-value."""
    if df <= 0 or df_error <= 0 or rss_error <= 0:
        return None, None

    ms = ss / df
    ms_error = rss_error / df_error

    f_val = ms / ms_error
    p_val = float(sp_stats.f.sf(f_val, df, df_error))
    return f_val, p_val


def compute_ss_type1(
    dataset: Dataset,
    spec: ModelSpec,
    *,
    timer: Timer,
    backend: BackendChoice | LinearAlgebra = 'qr',
) -> tuple[list[AnovaTableRow], list[float]]:
    """
    Add the terms one at a time and record how much each lowers the RSS.

    Terms enter in ModelSpec order; each contributes one column and one degree
    of freedom. Matches R's anova(lm(y ~ x1 + x2)).

    Returns:
        (rows, rss_path): table rows (terms then Residuals) and the RSS of
        each nested model from intercept-only to the full model
    """
    n = dataset.n_observations
    rss_path: list[float] = []

    with timer.section('fit_intercept'):
        rss_prev = _fit_rss(dataset, spec.prefix(0), backend)
    rss_path.append(rss_prev)

    ss_terms: list[float] = []
    for i in range(1, spec.k + 1):
        with timer.section('fit_nested'):
            rss_current = _fit_rss(dataset, spec.prefix(i), backend)
        ss_terms.append(rss_prev - rss_current)
        rss_path.append(rss_current)
        rss_prev = rss_current

    rss_full = rss_prev
    df_residual = n - (spec.k + 1)
    ms_residual = rss_full / df_residual

    rows: list[AnovaTableRow] = []
    for term, ss_term in zip(spec.terms, ss_terms):
        f_val, p_val = _compute_f_and_p(ss_term, 1, rss_full, df_residual)
        rows.append(AnovaTableRow(
            term=term,
            df=1,
            sum_sq=ss_term,
            mean_sq=ss_term,
            f_value=f_val,
            p_value=p_val,
        ))

    rows.append(AnovaTableRow(
        term=RESIDUALS,
        df=df_residual,
        sum_sq=rss_full,
        mean_sq=ms_residual,
        f_value=None,
        p_value=None,
    ))

    return rows, rss_path
