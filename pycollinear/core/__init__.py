"""
Core infrastructure for pycollinear.

Shared abstractions used by every domain sub-package (simulation,
decomposition, regression, anova, diagnostics).

Key components:
    dataset: Dataset column store and Observation rows
    model_spec: ModelSpec (ordered terms, implicit intercept)
    protocols: LinearAlgebra, Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, least squares kernels
"""

from pycollinear.core.dataset import Dataset, Observation
from pycollinear.core.model_spec import INTERCEPT, ModelSpec
from pycollinear.core.protocols import Backend, LinearAlgebra
from pycollinear.core.result import Result
from pycollinear.core.exceptions import (
    PyCollinearError,
    ValidationError,
    InvalidInputError,
    DimensionError,
    UnknownTermError,
    NumericalError,
    SingularDesignError,
    DegenerateInputError,
    PerfectCollinearityError,
)

__all__ = [
    # Data
    "Dataset",
    "Observation",
    "ModelSpec",
    "INTERCEPT",
    # Protocols
    "Backend",
    "LinearAlgebra",
    # Result
    "Result",
    # Exceptions
    "PyCollinearError",
    "ValidationError",
    "InvalidInputError",
    "DimensionError",
    "UnknownTermError",
    "NumericalError",
    "SingularDesignError",
    "DegenerateInputError",
    "PerfectCollinearityError",
]
