"""
Variance inflation factors by auxiliary regression.

    VIF_j = 1 / (1 - R²_j)

where R²_j comes from regressing predictor j on all the other predictors
(with intercept) through regression.fit(). Since 1 - R²_j = RSS_j / TSS_j,
the factor is computed as TSS_j / RSS_j to avoid cancellation.
"""

from pycollinear.core.compute.tolerances import PERFECT_COLLINEARITY_TOLERANCE
from pycollinear.core.dataset import Dataset
from pycollinear.core.exceptions import PerfectCollinearityError, SingularDesignError
from pycollinear.core.model_spec import ModelSpec
from pycollinear.core.protocols import LinearAlgebra
from pycollinear.regression import BackendChoice, fit


def auxiliary_r_squared(
    dataset: Dataset,
    predictor: str,
    others: tuple[str, ...],
    backend: BackendChoice | LinearAlgebra,
) -> tuple[float, float]:
    """
    Regress `predictor` on `others` and return (R², VIF).

    Raises:
        PerfectCollinearityError: If R² = 1 within tolerance, the predictor
            is constant, or the other predictors are themselves exactly
            collinear
    """
    spec = ModelSpec(others, response=predictor)
    try:
        aux = fit(dataset, spec, backend=backend)
    except SingularDesignError as e:
        raise PerfectCollinearityError(
            f"VIF of '{predictor}' is undefined: the other predictors are exactly "
            f"collinear ({list(e.aliased)} linearly dependent on earlier columns)",
            predictor=predictor,
        ) from e

    if aux.tss == 0:
        raise PerfectCollinearityError(
            f"VIF of '{predictor}' is undefined: the predictor is constant "
            f"and therefore collinear with the intercept",
            predictor=predictor,
            r_squared=1.0,
        )

    r_squared = aux.r_squared
    unexplained = aux.rss / aux.tss
    if unexplained <= PERFECT_COLLINEARITY_TOLERANCE:
        raise PerfectCollinearityError(
            f"VIF of '{predictor}' is undefined: it is an exact linear combination "
            f"of {list(others)} (auxiliary R² = {r_squared:.15f})",
            predictor=predictor,
            r_squared=r_squared,
        )

    return r_squared, max(1.0, 1.0 / unexplained)
