"""
Common data types for sequential ANOVA.

Contains the frozen parameter payloads that go inside Result[P] envelopes.
Each payload is a pure data container with no computation.
"""

from dataclasses import dataclass

RESIDUALS = 'Residuals'


@dataclass(frozen=True)
class AnovaTableRow:
    """One row of an ANOVA table (one term or residuals)."""
    term: str
    df: int
    sum_sq: float
    mean_sq: float
    f_value: float | None    # None for Residuals row
    p_value: float | None    # None for Residuals row


@dataclass(frozen=True)
class AnovaParams:
    """
    Parameter payload for a Type I (sequential) ANOVA.

    The term rows appear in model order; the last row is Residuals.
    """
    table: tuple[AnovaTableRow, ...]
    terms: tuple[str, ...]
    response: str
    n_obs: int
    total_ss: float                       # corrected SS of the response
    rss_path: tuple[float, ...]           # RSS of the nested models, intercept-only first
    residual_df: int
    residual_ss: float
    residual_ms: float
    eta_squared: dict[str, float]         # term -> SS / total SS
    partial_eta_squared: dict[str, float]  # term -> SS / (SS + residual SS)
