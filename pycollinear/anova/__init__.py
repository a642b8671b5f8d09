"""
Sequential (Type I) Analysis of Variance.

Public API:
    sequential_anova(dataset, model_spec, ...) -> AnovaTable
    sequential_anova_orderings(dataset, model_spec, ...) -> OrderingComparison
"""

from pycollinear.anova.solvers import (
    sequential_anova,
    sequential_anova_orderings,
)
from pycollinear.anova.solution import AnovaTable, OrderingComparison
from pycollinear.anova._common import AnovaTableRow

__all__ = [
    "sequential_anova",
    "sequential_anova_orderings",
    "AnovaTable",
    "AnovaTableRow",
    "OrderingComparison",
]
