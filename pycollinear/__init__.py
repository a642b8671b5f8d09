"""
pycollinear: reproducible demonstrations of order-dependent inference
under collinearity.

Sequential (Type I) sums of squares attribute the variance that correlated
predictors share to whichever one enters the model first. This package
generates controlled synthetic data, fits OLS models, decomposes their
variance sequentially, orthogonalizes predictors by PCA, and diagnoses
collinearity with variance inflation factors, so the effect can be shown
numerically and reproduced bit for bit.

Submodules:
    simulation: RandomStream and synthetic dataset generators
    decomposition: Principal component orthogonalization
    regression: Ordinary least squares
    anova: Sequential sums of squares
    diagnostics: VIF, correlation, condition number

Example:
    >>> from pycollinear import RandomStream, generate_correlated, sequential_anova
    >>> ds = generate_correlated(20, RandomStream(1979), 10.0, 5.0, coefficients=(3, 3))
    >>> sequential_anova(ds, ['X1', 'X2']).sum_sq
    >>> sequential_anova(ds, ['X2', 'X1']).sum_sq
"""

__version__ = "0.1.0"

from pycollinear.core import (
    Dataset,
    ModelSpec,
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
from pycollinear.simulation import (
    RandomStream,
    generate_correlated,
    generate_linear,
    simulate_response,
)
from pycollinear.decomposition import pca, principal_components, PCASolution
from pycollinear.regression import fit, FitResult
from pycollinear.anova import (
    sequential_anova,
    sequential_anova_orderings,
    AnovaTable,
    OrderingComparison,
)
from pycollinear.diagnostics import (
    vif,
    correlation_matrix,
    condition_number,
    VIFVector,
)

__all__ = [
    "__version__",
    # Data model
    "Dataset",
    "ModelSpec",
    # Simulation
    "RandomStream",
    "generate_correlated",
    "generate_linear",
    "simulate_response",
    # Orthogonalization
    "pca",
    "principal_components",
    "PCASolution",
    # Regression
    "fit",
    "FitResult",
    # Sequential ANOVA
    "sequential_anova",
    "sequential_anova_orderings",
    "AnovaTable",
    "OrderingComparison",
    # Diagnostics
    "vif",
    "correlation_matrix",
    "condition_number",
    "VIFVector",
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
