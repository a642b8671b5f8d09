"""
Linear algebra kernels for pycollinear.

All least squares in the package goes through the LinearAlgebra protocol
(see pycollinear.core.protocols), so the factorization can be swapped
without touching the statistics built on top of it.

Submodules:
    qr: Householder QR on X (reference)
    cholesky: Cholesky on X'X
"""

from pycollinear.core.compute.linalg._common import LeastSquaresResult
from pycollinear.core.compute.linalg.cholesky import (
    CholeskySolver,
    cholesky_cpu,
    cholesky_solve_cpu,
)
from pycollinear.core.compute.linalg.qr import (
    QRResult,
    QRSolver,
    qr_cpu,
    qr_solve_cpu,
)

__all__ = [
    "LeastSquaresResult",
    # QR decomposition
    "QRResult",
    "QRSolver",
    "qr_cpu",
    "qr_solve_cpu",
    # Cholesky decomposition
    "CholeskySolver",
    "cholesky_cpu",
    "cholesky_solve_cpu",
]
