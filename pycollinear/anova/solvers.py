"""
Sequential ANOVA solver dispatch.

Public API:
    sequential_anova(dataset, model_spec, ...) -> AnovaTable
    sequential_anova_orderings(dataset, model_spec, ...) -> OrderingComparison
"""

from collections.abc import Iterable
from itertools import permutations
from math import factorial

from pycollinear.anova._common import RESIDUALS, AnovaParams
from pycollinear.anova._ss import compute_ss_type1
from pycollinear.anova.solution import AnovaTable, OrderingComparison
from pycollinear.core.compute.timing import Timer
from pycollinear.core.dataset import Dataset
from pycollinear.core.exceptions import InvalidInputError
from pycollinear.core.model_spec import ModelSpec
from pycollinear.core.result import Result
from pycollinear.core.protocols import LinearAlgebra
from pycollinear.regression.design import RegressionDesign
from pycollinear.regression.solvers import BackendChoice, resolve_backend_name

MAX_ORDERING_TERMS = 6


def sequential_anova(
    dataset: Dataset,
    model_spec: ModelSpec | Iterable[str],
    *,
    backend: BackendChoice | LinearAlgebra = 'qr',
) -> AnovaTable:
    """
    Type I (sequential) analysis of variance.

    For i = 1..k, fits the nested model with the first i terms (plus
    intercept) and attributes RSS(i-1) - RSS(i) to term i, with one degree
    of freedom. The final row is the full model's residual SS with
    n - (k + 1) degrees of freedom.

    F(term) = SS(term) / MS(residual), p from F(1, residual df).

    Variance shared by correlated predictors is attributed entirely to the
    one listed first in model_spec. Reordering model_spec moves that
    attribution but leaves the explained and total SS unchanged.

    Args:
        dataset: Dataset holding the predictors and the response
        model_spec: ModelSpec, or an iterable of predictor names (order matters)
        backend: Least squares method for regression.fit(), a name or a
            LinearAlgebra instance

    Returns:
        AnovaTable with term rows in model order followed by Residuals

    Raises:
        InvalidInputError: If model_spec has duplicate names or leaves no
            residual degrees of freedom
        UnknownTermError: If model_spec names a column the dataset lacks
        SingularDesignError: If any nested design is rank-deficient

    Examples:
        >>> table = sequential_anova(ds, ['X1', 'X2'])
        >>> table.sum_sq          # {'X1': ..., 'X2': ...}
        >>> print(table.summary())
    """
    spec = ModelSpec.coerce(model_spec)
    solver_name = resolve_backend_name(backend)

    # Validate the full model up front: names, response, residual df
    design = RegressionDesign.build(dataset, spec)

    timer = Timer()
    timer.start()
    rows, rss_path = compute_ss_type1(dataset, spec, timer=timer, backend=backend)

    residual_row = rows[-1]
    total_ss = rss_path[0]
    eta_sq: dict[str, float] = {}
    partial_eta_sq: dict[str, float] = {}
    for row in rows:
        if row.term != RESIDUALS:
            eta_sq[row.term] = row.sum_sq / total_ss if total_ss > 0 else 0.0
            partial_eta_sq[row.term] = (
                row.sum_sq / (row.sum_sq + residual_row.sum_sq)
                if (row.sum_sq + residual_row.sum_sq) > 0 else 0.0
            )
    timer.stop()

    warnings: list[str] = []
    if residual_row.sum_sq <= 0:
        warnings.append(
            "residual sum of squares is zero: F statistics and p-values are undefined"
        )

    params = AnovaParams(
        table=tuple(rows),
        terms=spec.terms,
        response=design.response_name,
        n_obs=design.n,
        total_ss=total_ss,
        rss_path=tuple(rss_path),
        residual_df=residual_row.df,
        residual_ss=residual_row.sum_sq,
        residual_ms=residual_row.mean_sq,
        eta_squared=eta_sq,
        partial_eta_squared=partial_eta_sq,
    )

    result = Result(
        params=params,
        info={
            'ss_type': 1,
            'order': spec.terms,
            'n_fits': sum(timer.calls().values()),
        },
        timing=timer.result(),
        backend_name=solver_name,
        warnings=tuple(warnings),
    )

    return AnovaTable(_result=result)


def sequential_anova_orderings(
    dataset: Dataset,
    model_spec: ModelSpec | Iterable[str],
    *,
    backend: BackendChoice | LinearAlgebra = 'qr',
    max_terms: int = MAX_ORDERING_TERMS,
) -> OrderingComparison:
    """
    Sequential ANOVA under every order of the model's terms.

    Makes the order dependence explicit: for correlated predictors the
    per-term SS swings between orders while the explained SS stays put.
    Orders are enumerated lexicographically from the given order, which
    always comes first.

    Args:
        dataset: Dataset holding the predictors and the response
        model_spec: ModelSpec, or an iterable of predictor names
        backend: Least squares method for regression.fit(), a name or a
            LinearAlgebra instance
        max_terms: Refuse models with more terms (k! orders are fitted)

    Raises:
        InvalidInputError: If the model has no terms or more than max_terms
        (plus everything sequential_anova() raises)
    """
    spec = ModelSpec.coerce(model_spec)
    if spec.k == 0:
        raise InvalidInputError("sequential_anova_orderings needs at least one term")
    if spec.k > max_terms:
        raise InvalidInputError(
            f"{spec.k} terms give {factorial(spec.k)} orders; "
            f"raise max_terms (currently {max_terms}) to allow this"
        )

    tables = {
        order: sequential_anova(dataset, spec.reordered(order), backend=backend)
        for order in permutations(spec.terms)
    }
    return OrderingComparison(tables=tables)
