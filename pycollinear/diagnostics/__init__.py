"""
Collinearity diagnostics.

Public API:
    vif(dataset, predictor_names, ...) -> VIFVector
    correlation_matrix(dataset, predictor_names) -> ndarray
    condition_number(dataset, predictor_names, ...) -> float
"""

from pycollinear.diagnostics.solvers import (
    condition_number,
    correlation_matrix,
    vif,
)
from pycollinear.diagnostics.solution import VIFVector

__all__ = [
    "vif",
    "correlation_matrix",
    "condition_number",
    "VIFVector",
]
