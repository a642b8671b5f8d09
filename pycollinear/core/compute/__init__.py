"""
Shared numeric infrastructure for pycollinear.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Numerical thresholds and comparison tiers
    linalg: Least squares kernels (QR, Cholesky)
"""

from pycollinear.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
