"""
fit(): ordinary least squares on a Dataset, with a choice of solver.
"""

from collections.abc import Iterable
from typing import Literal

from pycollinear.core.dataset import Dataset
from pycollinear.core.model_spec import ModelSpec
from pycollinear.core.protocols import Backend, LinearAlgebra
from pycollinear.regression.backends.cpu import (
    CPUBackend,
    CPUCholeskyBackend,
    CPUQRBackend,
)
from pycollinear.regression.design import RegressionDesign
from pycollinear.regression.solution import FitResult, LinearParams


BackendChoice = Literal['auto', 'qr', 'cholesky', 'cpu_qr', 'cpu_cholesky']


def fit(
    dataset: Dataset,
    model_spec: ModelSpec | Iterable[str],
    *,
    backend: BackendChoice | LinearAlgebra = 'auto',
) -> FitResult:
    """
    Fit a linear model with intercept by ordinary least squares.

    Solves:
        min_β ||y - Xβ||²,  X = [1, x_1, ..., x_k] in model_spec order

    Args:
        dataset: Dataset holding the predictors and the response
        model_spec: ModelSpec, or an iterable of predictor names
        backend: Least squares method:
            - 'auto' / 'qr' / 'cpu_qr': QR decomposition of X (reference)
            - 'cholesky' / 'cpu_cholesky': Cholesky decomposition of X'X
            - any LinearAlgebra implementation

    Returns:
        FitResult with coefficients, standard errors, t-statistics,
        p-values and summary methods

    Raises:
        UnknownTermError: If a term or the response is not a column
        InvalidInputError: If names are duplicated, there is no response,
            or the residual degrees of freedom would be <= 0
        SingularDesignError: If the design matrix is rank-deficient

    Example:
        >>> from pycollinear import generate_linear, fit
        >>> ds = generate_linear(20, 1979, slope=0.5)
        >>> result = fit(ds, ['X'])
        >>> print(result.summary())
    """
    # names are checked here, the numerical code downstream trusts them
    design = RegressionDesign.build(dataset, ModelSpec.coerce(model_spec))
    solved = _get_backend(backend).solve(design)
    return FitResult(_result=solved, _design=design)


def resolve_backend_name(backend: BackendChoice | LinearAlgebra) -> str:
    """
    Name fit() reports for this backend choice, e.g. 'cpu_qr' for 'auto'.

    Raises:
        ValueError: For an unrecognized name
    """
    return _get_backend(backend).name


def _get_backend(
    choice: BackendChoice | LinearAlgebra,
) -> Backend[RegressionDesign, LinearParams]:
    """
    Map a backend name (or a LinearAlgebra object) to a CPU backend.

    Raises:
        ValueError: For an unrecognized name
    """
    if isinstance(choice, LinearAlgebra):
        return CPUBackend(choice)

    factories = {
        'auto': CPUQRBackend,
        'qr': CPUQRBackend,
        'cpu_qr': CPUQRBackend,
        'cholesky': CPUCholeskyBackend,
        'cpu_cholesky': CPUCholeskyBackend,
    }
    if choice not in factories:
        raise ValueError(
            f"Unknown backend: {choice!r}; expected one of {sorted(factories)}"
        )
    return factories[choice]()
