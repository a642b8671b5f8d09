"""
User-facing VIF result.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from pycollinear.core.result import Result
from pycollinear.diagnostics._common import VIFParams


@dataclass(frozen=True, eq=False)
class VIFVector(Mapping[str, float]):
    """
    Variance inflation factor per predictor.

    Behaves as a read-only mapping predictor -> VIF (>= 1; 1 means no
    collinearity-induced inflation).

    Example:
        >>> v = vif(ds, ['X1', 'X2'])
        >>> v['X1']
        >>> dict(v)
    """
    _result: Result[VIFParams]

    def __getitem__(self, predictor: str) -> float:
        return self._result.params.vif[predictor]

    def __iter__(self) -> Iterator[str]:
        return iter(self._result.params.vif)

    def __len__(self) -> int:
        return len(self._result.params.vif)

    @property
    def r_squared(self) -> dict[str, float]:
        """Auxiliary R² of each predictor regressed on the others."""
        return dict(self._result.params.r_squared)

    @property
    def tolerance(self) -> dict[str, float]:
        """1 / VIF = 1 - R²."""
        return {name: 1.0 / v for name, v in self._result.params.vif.items()}

    @property
    def threshold(self) -> float | None:
        return self._result.params.threshold

    @property
    def flagged(self) -> tuple[str, ...]:
        """Predictors whose VIF exceeds the threshold."""
        return self._result.params.flagged

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        lines = [
            "Variance Inflation Factors",
            "=" * 52,
            f"{'Predictor':<16} {'VIF':>10} {'Tolerance':>10} {'Aux R^2':>12}",
            "-" * 52,
        ]
        tolerance = self.tolerance
        r2 = self.r_squared
        for name, v in self.items():
            mark = ' *' if name in self.flagged else ''
            lines.append(
                f"{name:<16} {v:>10.4f} {tolerance[name]:>10.4f} {r2[name]:>12.6f}{mark}"
            )
        lines.append("-" * 52)
        if self.threshold is not None:
            lines.append(f"* VIF > {self.threshold:g}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        body = ", ".join(f"{k}={v:.4f}" for k, v in self.items())
        return f"VIFVector({body})"
