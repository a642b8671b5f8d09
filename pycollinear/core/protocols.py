"""
Core protocols for pycollinear.

These define structural interfaces that implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so
that any numeric library can back a capability without inheriting from
our classes.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Type-safe: use generics to preserve type information through pipelines
"""

from typing import Any, Protocol, TypeVar, runtime_checkable

import numpy as np
from numpy.typing import NDArray

from pycollinear.core.compute.linalg import LeastSquaresResult
from pycollinear.core.result import Result

# Type variables for generic payloads
P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class LinearAlgebra(Protocol):
    """
    Least squares capability used by the regression backends.

    Implementations: QRSolver (reference), CholeskySolver.
    """

    @property
    def name(self) -> str:
        """Factorization identifier, e.g. 'qr'."""
        ...

    def rank(self, X: NDArray[np.floating[Any]]) -> int:
        """Numerical column rank of X."""
        ...

    def solve(
        self,
        X: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
        column_names: tuple[str, ...] | None = None,
    ) -> LeastSquaresResult:
        """
        Solve min_β ||y - Xβ||².

        Raises:
            SingularDesignError: If X is rank-deficient
        """
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a domain-specific design and produces a
    domain-specific parameter payload wrapped in a Result. Backends are
    stateless; all configuration happens at construction time.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}', e.g. 'cpu_qr', 'cpu_cholesky'
        """
        ...

    def solve(self, design: D) -> Result[P]:
        """
        Execute the statistical computation.

        Raises:
            NumericalError: If numerical issues prevent solution
            ValidationError: If design is invalid for this backend
        """
        ...
