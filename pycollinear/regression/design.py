"""
Regression Design.

Design takes a Dataset and a ModelSpec and builds X (intercept column plus
one column per term, in ModelSpec order) and y. It knows it's building a
regression; the Dataset doesn't.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pycollinear.core.dataset import Dataset
from pycollinear.core.exceptions import InvalidInputError
from pycollinear.core.model_spec import ModelSpec


@dataclass(frozen=True, eq=False)
class RegressionDesign:
    """
    Design matrix and response for one linear model.

    Immutable after construction. Built via RegressionDesign.build().
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _p: int
    _spec: ModelSpec
    _response: str

    @classmethod
    def build(cls, dataset: Dataset, spec: ModelSpec) -> RegressionDesign:
        """
        Build the design for `spec` over `dataset`.

        Raises:
            UnknownTermError: If a term or the response is not a column
            InvalidInputError: If there is no response, or the residual
                degrees of freedom n - (k + 1) would be <= 0
        """
        spec.check_against(dataset)
        response = spec.resolve_response(dataset)

        n = dataset.n_observations
        p = spec.k + 1
        if n - p <= 0:
            raise InvalidInputError(
                f"Residual degrees of freedom must be positive: n={n} observations, "
                f"{p} terms including the intercept gives df={n - p}"
            )

        X = np.column_stack([np.ones(n, dtype=np.float64), dataset.matrix(spec.terms)])
        y = np.asarray(dataset[response], dtype=np.float64)

        return cls(
            _X=X,
            _y=y,
            _n=n,
            _p=p,
            _spec=ModelSpec(spec.terms, response),
            _response=response,
        )

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x p), intercept column first."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of columns, including the intercept."""
        return self._p

    @property
    def spec(self) -> ModelSpec:
        return self._spec

    @property
    def response_name(self) -> str:
        return self._response

    @property
    def term_names(self) -> tuple[str, ...]:
        """Column labels, '(Intercept)' first."""
        return self._spec.term_names
