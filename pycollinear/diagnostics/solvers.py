"""
Collinearity diagnostics dispatch.

Public API:
    vif(dataset, predictor_names, ...) -> VIFVector
    correlation_matrix(dataset, predictor_names) -> ndarray
    condition_number(dataset, predictor_names, ...) -> float
"""

from __future__ import annotations

import warnings
from collections.abc import Iterable
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pycollinear.core.compute.timing import Timer
from pycollinear.core.compute.tolerances import VIF_WARNING_THRESHOLD
from pycollinear.core.dataset import Dataset
from pycollinear.core.exceptions import InvalidInputError, UnknownTermError
from pycollinear.core.protocols import LinearAlgebra
from pycollinear.core.result import Result
from pycollinear.core.validation import check_unique_names
from pycollinear.diagnostics._common import VIFParams
from pycollinear.diagnostics._vif import auxiliary_r_squared
from pycollinear.diagnostics.solution import VIFVector
from pycollinear.regression.solvers import BackendChoice, resolve_backend_name


def vif(
    dataset: Dataset,
    predictor_names: Iterable[str],
    *,
    threshold: float | None = VIF_WARNING_THRESHOLD,
    backend: BackendChoice | LinearAlgebra = 'qr',
) -> VIFVector:
    """
    Variance inflation factors.

    For each predictor j, regress it on all the other predictors (with
    intercept) and compute VIF_j = 1 / (1 - R²_j). Predictors that are
    exactly mutually uncorrelated, such as principal components, all get
    VIF = 1.

    Args:
        dataset: Dataset holding the predictors
        predictor_names: Predictors of the model being diagnosed
        threshold: Emit a RuntimeWarning for VIF above this (None disables)
        backend: Least squares method for regression.fit(), a name or a
            LinearAlgebra instance

    Returns:
        VIFVector mapping predictor -> VIF

    Raises:
        PerfectCollinearityError: If some predictor is an exact linear
            combination of the others (VIF infinite)
        UnknownTermError: If a name is not a column
        InvalidInputError: If names are duplicated or empty

    Example:
        >>> v = vif(ds, ['X1', 'X2'])
        >>> print(v.summary())
    """
    names = check_unique_names(predictor_names, 'predictor_names')
    if not names:
        raise InvalidInputError("vif needs at least one predictor")
    solver_name = resolve_backend_name(backend)
    missing = [name for name in names if name not in dataset]
    if missing:
        raise UnknownTermError(
            f"Predictors {missing} are not columns of the dataset. "
            f"Available: {list(dataset.columns)}",
            term=missing[0],
            available=dataset.columns,
        )

    timer = Timer()
    timer.start()
    values: dict[str, float] = {}
    r_squared: dict[str, float] = {}
    for name in names:
        others = tuple(other for other in names if other != name)
        with timer.section('auxiliary_fits'):
            r_squared[name], values[name] = auxiliary_r_squared(
                dataset, name, others, backend
            )
    timer.stop()

    flagged: tuple[str, ...] = ()
    messages: list[str] = []
    if threshold is not None:
        flagged = tuple(name for name in names if values[name] > threshold)
        for name in flagged:
            message = (
                f"VIF of '{name}' is {values[name]:.2f} (> {threshold:g}): its "
                f"coefficient variance is inflated by collinearity"
            )
            messages.append(message)
            warnings.warn(message, RuntimeWarning, stacklevel=2)

    params = VIFParams(
        vif=values,
        r_squared=r_squared,
        threshold=threshold,
        flagged=flagged,
    )
    result = Result(
        params=params,
        info={
            'method': 'auxiliary_regression',
            'predictors': names,
            'n_fits': timer.calls().get('auxiliary_fits', 0),
        },
        timing=timer.result(),
        backend_name=solver_name,
        warnings=tuple(messages),
    )
    return VIFVector(_result=result)


def correlation_matrix(
    dataset: Dataset,
    predictor_names: Iterable[str],
) -> NDArray[np.floating[Any]]:
    """
    Pearson correlation matrix of the named predictors, in the given order.

    Raises:
        InvalidInputError: If a predictor is constant (correlation undefined)
    """
    names = check_unique_names(predictor_names, 'predictor_names')
    X = dataset.matrix(names)
    sd = X.std(axis=0, ddof=1)
    if np.any(sd == 0):
        constant = [names[j] for j in np.where(sd == 0)[0]]
        raise InvalidInputError(f"Correlation undefined for constant predictors {constant}")
    return np.corrcoef(X, rowvar=False).reshape(len(names), len(names))


def condition_number(
    dataset: Dataset,
    predictor_names: Iterable[str],
    *,
    scale: bool = True,
) -> float:
    """
    2-norm condition number of the design matrix [1, X].

    With scale=True (default) each column is first scaled to unit length,
    the convention of Belsley, Kuh & Welsch, so the number reflects
    collinearity rather than units.
    """
    names = check_unique_names(predictor_names, 'predictor_names')
    X = np.column_stack([np.ones(dataset.n_observations), dataset.matrix(names)])
    if scale:
        norms = np.linalg.norm(X, axis=0)
        norms[norms == 0] = 1.0
        X = X / norms
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.linalg.cond(X))
