"""
Dataset: the immutable column store every computation consumes.

A Dataset is an ordered set of named numeric columns of equal length,
one of which may be designated the response. It does not know whether
it will be regressed, orthogonalized or diagnosed; it just provides data.

Usage:
    from pycollinear import Dataset

    ds = Dataset.from_arrays(X1=x1, X2=x2, Y=y, response='Y')
    ds = Dataset.from_dataframe(df, response='Y')

    ds.columns          # ('X1', 'X2', 'Y')
    ds.predictor_names  # ('X1', 'X2')
    ds['X1']            # read-only float64 array
    ds2 = ds.with_columns(X3=ds['X1'] * 2)
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, NamedTuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycollinear.core.exceptions import InvalidInputError, UnknownTermError
from pycollinear.core.validation import (
    check_column,
    check_consistent_length,
    check_min_samples,
)

if TYPE_CHECKING:
    import pandas as pd


MIN_OBSERVATIONS = 2


class Observation(NamedTuple):
    """One row of a Dataset: predictor values plus the response value."""
    values: Mapping[str, float]
    response: float | None


@dataclass(frozen=True, eq=False)
class Dataset:
    """
    Immutable, ordered collection of equal-length numeric columns.

    Construct via the factory classmethods, not directly. Every "modifying"
    method returns a new Dataset; stored arrays are read-only.
    """
    _columns: Mapping[str, NDArray[np.floating[Any]]]
    _response: str | None = None
    _metadata: Mapping[str, Any] = field(default_factory=dict)

    # === Column Access ===

    @property
    def columns(self) -> tuple[str, ...]:
        """All column names, in insertion order."""
        return tuple(self._columns)

    @property
    def predictor_names(self) -> tuple[str, ...]:
        """Every column except the response."""
        return tuple(k for k in self._columns if k != self._response)

    @property
    def response_name(self) -> str | None:
        return self._response

    @property
    def response(self) -> NDArray[np.floating[Any]]:
        """
        The response column.

        Raises:
            InvalidInputError: If no response has been designated
        """
        if self._response is None:
            raise InvalidInputError(
                "Dataset has no response column. Use with_response(name) "
                "or pass response= to the constructor."
            )
        return self._columns[self._response]

    def __getitem__(self, key: str) -> NDArray[np.floating[Any]]:
        """
        Access a named column.

        Raises:
            UnknownTermError: If key not found, listing available columns
        """
        if key not in self._columns:
            raise UnknownTermError(
                f"Dataset has no column '{key}'. Available: {list(self.columns)}",
                term=key,
                available=self.columns,
            )
        return self._columns[key]

    def __contains__(self, key: object) -> bool:
        return key in self._columns

    def __len__(self) -> int:
        return self.n_observations

    def matrix(self, names: tuple[str, ...] | list[str]) -> NDArray[np.floating[Any]]:
        """Stack the named columns, in the given order, into an (n x k) matrix."""
        if len(names) == 0:
            return np.empty((self.n_observations, 0), dtype=np.float64)
        return np.column_stack([self[name] for name in names])

    def observations(self) -> Iterator[Observation]:
        """Iterate rows as (predictor mapping, response value) pairs."""
        predictors = self.predictor_names
        response = self._columns[self._response] if self._response else None
        for i in range(self.n_observations):
            values = {name: float(self._columns[name][i]) for name in predictors}
            yield Observation(
                values=MappingProxyType(values),
                response=float(response[i]) if response is not None else None,
            )

    # === Properties ===

    @property
    def n_observations(self) -> int:
        """Number of rows."""
        return self._metadata['n_observations']

    @property
    def metadata(self) -> dict[str, Any]:
        """Provenance metadata (source, generator settings, ...)."""
        return dict(self._metadata)

    # === Derivation ===

    def with_columns(self, **columns: ArrayLike) -> Dataset:
        """
        Return a new Dataset with columns added (or replaced).

        Replacing the response column keeps it designated as the response.
        """
        merged: dict[str, Any] = dict(self._columns)
        merged.update(columns)
        return Dataset._build(merged, self._response, self._metadata)

    def with_response(self, name: str) -> Dataset:
        """Return a new Dataset with `name` designated as the response."""
        if name not in self._columns:
            raise UnknownTermError(
                f"Dataset has no column '{name}'. Available: {list(self.columns)}",
                term=name,
                available=self.columns,
            )
        return Dataset._build(dict(self._columns), name, self._metadata)

    def select(self, names: tuple[str, ...] | list[str]) -> Dataset:
        """Return a new Dataset restricted to the named columns (plus response)."""
        keep = [n for n in names]
        if self._response is not None and self._response not in keep:
            keep.append(self._response)
        return Dataset._build({n: self[n] for n in keep}, self._response, self._metadata)

    # === Factory Methods ===

    @classmethod
    def from_arrays(
        cls,
        *,
        response: str | None = None,
        metadata: Mapping[str, Any] | None = None,
        **columns: ArrayLike,
    ) -> Dataset:
        """
        Construct from named 1D array-likes.

        Example:
            >>> Dataset.from_arrays(X=[1, 2, 3], Y=[2, 4, 7], response='Y')
        """
        meta = {'source': 'arrays'}
        if metadata:
            meta.update(metadata)
        return cls._build(columns, response, meta)

    @classmethod
    def from_mapping(
        cls,
        columns: Mapping[str, ArrayLike],
        *,
        response: str | None = None,
    ) -> Dataset:
        """Construct from a mapping of column name -> values (order preserved)."""
        return cls._build(dict(columns), response, {'source': 'mapping'})

    @classmethod
    def from_dataframe(cls, df: 'pd.DataFrame', *, response: str | None = None) -> Dataset:
        """Construct from a pandas DataFrame; every column must be numeric."""
        columns = {str(col): df[col].to_numpy() for col in df.columns}
        return cls._build(columns, response, {'source': 'dataframe'})

    def to_dataframe(self) -> 'pd.DataFrame':
        """Export to a pandas DataFrame (requires pandas)."""
        import pandas as pd
        return pd.DataFrame({name: np.array(arr) for name, arr in self._columns.items()})

    @classmethod
    def _build(
        cls,
        columns: Mapping[str, Any],
        response: str | None,
        metadata: Mapping[str, Any] | None,
    ) -> Dataset:
        """Internal builder with validation."""
        if not columns:
            raise InvalidInputError("Dataset requires at least one column")

        storage: dict[str, NDArray[np.floating[Any]]] = {}
        for name, values in columns.items():
            if not isinstance(name, str) or not name:
                raise InvalidInputError(f"Column names must be non-empty strings, got {name!r}")
            storage[name] = check_column(values, name)

        n = check_consistent_length(storage)
        check_min_samples(n, MIN_OBSERVATIONS, 'Dataset')

        if response is not None and response not in storage:
            raise UnknownTermError(
                f"Response '{response}' is not a column. Available: {list(storage)}",
                term=response,
                available=tuple(storage),
            )

        meta = dict(metadata or {})
        meta['n_observations'] = n

        return cls(
            _columns=MappingProxyType(storage),
            _response=response,
            _metadata=MappingProxyType(meta),
        )

    def __repr__(self) -> str:
        return (
            f"Dataset(n={self.n_observations}, columns={list(self.columns)}, "
            f"response={self._response!r})"
        )
