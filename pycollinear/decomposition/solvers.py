"""
Orthogonalizer dispatch.

Public API:
    pca(dataset, predictor_names, ...) -> Dataset
    principal_components(dataset, predictor_names, ...) -> PCASolution
"""

from collections.abc import Iterable

from pycollinear.core.compute.timing import Timer
from pycollinear.core.compute.tolerances import PSD_TOLERANCE
from pycollinear.core.dataset import Dataset
from pycollinear.core.exceptions import DegenerateInputError, InvalidInputError
from pycollinear.core.result import Result
from pycollinear.core.validation import check_unique_names
from pycollinear.decomposition._common import PCAParams
from pycollinear.decomposition.pca import pca_transform
from pycollinear.decomposition.solution import PCASolution


def principal_components(
    dataset: Dataset,
    predictor_names: Iterable[str],
    *,
    scale: bool = False,
    prefix: str = 'PC',
) -> PCASolution:
    """
    Principal component transform of a set of predictors.

    Args:
        dataset: Dataset holding the predictors
        predictor_names: At least two predictor columns
        scale: Standardize predictors first (correlation-matrix PCA)
        prefix: Component column names are f"{prefix}1", f"{prefix}2", ...

    Returns:
        PCASolution with eigenvalues, loadings, scores and the dataset
        augmented with the component columns

    Raises:
        DegenerateInputError: Fewer than two predictors, or a covariance
            matrix that is not positive semi-definite
        UnknownTermError: A name is not a column
        InvalidInputError: Duplicate names, or component names that are
            already columns of the dataset
    """
    names = check_unique_names(predictor_names, 'predictor_names')
    if len(names) < 2:
        raise DegenerateInputError(
            f"PCA needs at least 2 predictors to orthogonalize, got {len(names)}: {list(names)}",
            matrix_name='X',
        )

    X = dataset.matrix(names)
    component_names = tuple(f"{prefix}{i + 1}" for i in range(len(names)))
    clashes = [c for c in component_names if c in dataset]
    if clashes:
        raise InvalidInputError(
            f"Component names {clashes} would overwrite existing columns; "
            f"choose another prefix"
        )

    timer = Timer()
    timer.start()
    with timer.section('eigen_decomposition'):
        scores, eigenvalues, loadings, means, scales = pca_transform(X, scale=scale)
    timer.stop()

    augmented = dataset.with_columns(
        **{name: scores[:, j] for j, name in enumerate(component_names)}
    )

    warnings: list[str] = []
    cutoff = PSD_TOLERANCE * float(eigenvalues[0])
    zero = [c for c, ev in zip(component_names, eigenvalues) if ev <= cutoff]
    if zero:
        warnings.append(
            f"components {zero} have zero variance: the predictors are linearly dependent"
        )

    params = PCAParams(
        predictors=names,
        component_names=component_names,
        eigenvalues=eigenvalues,
        loadings=loadings,
        means=means,
        scales=scales,
        scores=scores,
    )
    result = Result(
        params=params,
        info={'method': 'eigh', 'scale': scale},
        timing=timer.result(),
        backend_name='cpu_eigh',
        warnings=tuple(warnings),
    )
    return PCASolution(_result=result, _dataset=augmented)


def pca(
    dataset: Dataset,
    predictor_names: Iterable[str],
    *,
    scale: bool = False,
    prefix: str = 'PC',
) -> Dataset:
    """
    Orthogonalize predictors: return `dataset` with columns PC1, PC2, ...

    The new columns have (numerically) zero pairwise sample covariance and
    are ordered by descending variance. See principal_components() for the
    eigenvalues and loadings.

    Example:
        >>> ds = pca(generate_correlated(20, 1979, coefficients=(1, 1)), ['X1', 'X2'])
        >>> ds.columns   # ('X1', 'X2', 'Y', 'PC1', 'PC2')
    """
    return principal_components(
        dataset, predictor_names, scale=scale, prefix=prefix
    ).dataset
