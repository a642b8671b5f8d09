"""
Input validation for pycollinear.

Validators raise at the boundary (Dataset construction, ModelSpec
construction, the public entry points) so that the numerical code can
trust its inputs. Every message names the offending column or argument
and shows the value that was rejected.
"""

from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycollinear.core.exceptions import DimensionError, InvalidInputError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Convert to a floating numpy array, refusing anything non-numeric.

    Booleans are refused too: a 0/1 indicator must be passed as numbers.

    Raises:
        InvalidInputError: For object, string, datetime or bool data
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise InvalidInputError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise InvalidInputError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )
    if result.dtype == np.bool_ or not np.issubdtype(result.dtype, np.number):
        raise InvalidInputError(f"{name}: non-numeric dtype {result.dtype}, expected numbers")

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)
    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Raises:
        InvalidInputError: If any value is NaN or infinite
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise InvalidInputError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Raises:
        DimensionError: If a column is not one-dimensional
    """
    if array.ndim != 1:
        raise DimensionError(
            f"{name}: a column must be 1D, got {array.ndim}D with shape {array.shape}"
        )


def check_column(values: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """
    Validate one dataset column and return a read-only float64 copy.

    Raises:
        InvalidInputError: Non-numeric or non-finite values
        DimensionError: Not one-dimensional
    """
    arr = check_array(values, name)
    check_1d(arr, name)
    check_finite(arr, name)
    column = np.array(arr, dtype=np.float64, copy=True)
    column.setflags(write=False)
    return column


def check_consistent_length(columns: Mapping[str, NDArray[np.floating[Any]]]) -> int:
    """
    Verify every column has the same number of rows.

    Returns:
        The common length

    Raises:
        DimensionError: Listing each column's length when they differ
    """
    lengths = {name: arr.shape[0] for name, arr in columns.items()}
    if len(set(lengths.values())) > 1:
        details = ", ".join(f"{name}={n}" for name, n in lengths.items())
        raise DimensionError(f"Inconsistent lengths: {details}")
    return next(iter(lengths.values()), 0)


def check_min_samples(n: int, min_samples: int, name: str) -> None:
    """
    Raises:
        InvalidInputError: If n < min_samples
    """
    if n < min_samples:
        raise InvalidInputError(
            f"{name}: requires at least {min_samples} observations, got {n}"
        )


def check_unique_names(names: Iterable[str], name: str) -> tuple[str, ...]:
    """
    Materialize a sequence of column names, rejecting repeats.

    Returns:
        The names as a tuple, order preserved

    Raises:
        InvalidInputError: If a name is repeated or is not a string
    """
    result = tuple(names)
    for item in result:
        if not isinstance(item, str):
            raise InvalidInputError(
                f"{name}: names must be strings, got {type(item).__name__} {item!r}"
            )
    duplicates = sorted({item for item in result if result.count(item) > 1})
    if duplicates:
        raise InvalidInputError(f"{name}: duplicate names {duplicates}")
    return result


def check_positive_int(value: Any, name: str, minimum: int = 1) -> int:
    """
    Accept Python or numpy integers (not bool) no smaller than minimum.

    Raises:
        InvalidInputError: Otherwise
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidInputError(
            f"{name}: expected an integer, got {type(value).__name__} {value!r}"
        )
    if value < minimum:
        raise InvalidInputError(f"{name}: must be >= {minimum}, got {value}")
    return int(value)
