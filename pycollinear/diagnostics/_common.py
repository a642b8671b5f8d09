"""
Common data types for collinearity diagnostics.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class VIFParams:
    """
    Parameter payload for variance inflation factors.

    All mappings are keyed by predictor name, in input order.
    """
    vif: dict[str, float]
    r_squared: dict[str, float]     # auxiliary R² of each predictor on the others
    threshold: float | None
    flagged: tuple[str, ...]        # predictors with VIF above threshold
