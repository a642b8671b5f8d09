"""
User-facing principal component solution.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pycollinear.core.dataset import Dataset
from pycollinear.core.result import Result
from pycollinear.decomposition._common import PCAParams


@dataclass(frozen=True, eq=False)
class PCASolution:
    """
    Principal components of a predictor set.

    Produced by principal_components(). `dataset` is the input dataset
    with the component columns appended.
    """
    _result: Result[PCAParams]
    _dataset: Dataset

    @property
    def dataset(self) -> Dataset:
        return self._dataset

    @property
    def predictors(self) -> tuple[str, ...]:
        return self._result.params.predictors

    @property
    def component_names(self) -> tuple[str, ...]:
        return self._result.params.component_names

    @property
    def eigenvalues(self) -> NDArray[np.floating[Any]]:
        """Variance of each component, descending."""
        return self._result.params.eigenvalues

    @property
    def loadings(self) -> NDArray[np.floating[Any]]:
        """(p x p) eigenvectors; column j defines component j."""
        return self._result.params.loadings

    @property
    def scores(self) -> NDArray[np.floating[Any]]:
        """(n x p) component values."""
        return self._result.params.scores

    @property
    def explained_variance_ratio(self) -> NDArray[np.floating[Any]]:
        total = float(np.sum(self.eigenvalues))
        return self.eigenvalues / total

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def transform(self, dataset: Dataset) -> NDArray[np.floating[Any]]:
        """Project another dataset's predictor columns onto these components."""
        p = self._result.params
        Z = (dataset.matrix(p.predictors) - p.means) / p.scales
        return Z @ p.loadings

    def summary(self) -> str:
        lines = [
            "Principal Components",
            "=" * 60,
            f"Predictors: {', '.join(self.predictors)}",
            f"Scaled: {self.info.get('scale', False)}",
            "",
            f"{'Component':<12} {'Variance':>14} {'Proportion':>12} {'Cumulative':>12}",
            "-" * 60,
        ]
        cumulative = np.cumsum(self.explained_variance_ratio)
        for name, var, prop, cum in zip(
            self.component_names, self.eigenvalues,
            self.explained_variance_ratio, cumulative,
        ):
            lines.append(f"{name:<12} {var:>14.4f} {prop:>12.4f} {cum:>12.4f}")
        lines.append("")
        lines.append("Loadings:")
        header = f"{'':<12}" + "".join(f"{c:>12}" for c in self.component_names)
        lines.append(header)
        for i, name in enumerate(self.predictors):
            lines.append(
                f"{name:<12}" + "".join(f"{v:>12.4f}" for v in self.loadings[i])
            )
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PCASolution(predictors={list(self.predictors)}, "
            f"components={list(self.component_names)})"
        )
