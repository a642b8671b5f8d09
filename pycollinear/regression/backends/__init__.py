"""
Computational backends for linear regression.
"""

from pycollinear.regression.backends.cpu import (
    CPUBackend,
    CPUCholeskyBackend,
    CPUQRBackend,
)

__all__ = [
    "CPUBackend",
    "CPUQRBackend",
    "CPUCholeskyBackend",
]
