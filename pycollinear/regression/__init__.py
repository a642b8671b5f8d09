"""
Ordinary least squares.

Public API:
    fit(dataset, model_spec, ...) -> FitResult

The fit() function is the only entry point. It handles:
    - Input validation
    - Design construction
    - Backend selection
    - Result wrapping

Example:
    >>> from pycollinear.regression import fit
    >>> result = fit(ds, ['X1', 'X2'])
    >>> result.coefficient('X1').p_value
    >>> print(result.summary())
"""

from pycollinear.regression.design import RegressionDesign
from pycollinear.regression.solution import CoefficientRow, FitResult, LinearParams
from pycollinear.regression.solvers import BackendChoice, fit, resolve_backend_name

__all__ = [
    "fit",
    "resolve_backend_name",
    "BackendChoice",
    "RegressionDesign",
    "FitResult",
    "LinearParams",
    "CoefficientRow",
]
