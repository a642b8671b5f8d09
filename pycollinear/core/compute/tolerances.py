"""
Numerical tolerances.

Single home for every threshold the package compares against:
- rank detection in the least squares factorizations
- positive semi-definiteness of covariance matrices
- perfect collinearity in the auxiliary VIF regressions
- comparison tiers used by the test suite

Change a threshold here, never inline.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Double precision on well-conditioned problems
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision, well conditioned',
)

# Double precision on ill-conditioned problems (cond > 1e4), e.g. X2 = X1 + tiny noise
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-6,
    atol=1e-8,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned (cond > 1e4)',
)

# A pivot |R[j, j]| below RANK_TOLERANCE * ||X[:, j]|| marks column j as
# linearly dependent on the columns before it. Same default as R's lm().
RANK_TOLERANCE = 1e-7

# Smallest eigenvalue allowed below zero, relative to the largest, before a
# covariance matrix is rejected as not positive semi-definite.
PSD_TOLERANCE = 1e-10

# 1 - R² at or below this counts as R² = 1 in the auxiliary VIF regression.
PERFECT_COLLINEARITY_TOLERANCE = 1e-10

# Condition number above which a design counts as ill-conditioned.
ILL_CONDITIONED_THRESHOLD = 1e4

# Conventional VIF level above which collinearity is flagged.
VIF_WARNING_THRESHOLD = 10.0


def select_tolerance(is_ill_conditioned: bool = False) -> ToleranceTier:
    """Select the comparison tier for a problem of the given conditioning."""
    if is_ill_conditioned:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64
