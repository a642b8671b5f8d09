"""
Exception hierarchy for pycollinear.

All exceptions inherit from PyCollinearError so callers can catch any
library-specific failure in one place. Two branches:

    ValidationError   - the inputs are malformed (lengths, names, n < 2)
    NumericalError    - the inputs are well-formed but the computation is
                        undefined (rank deficiency, perfect collinearity)

Numerical exceptions carry the diagnosis as attributes (which columns are
aliased, which predictor has an infinite VIF) so callers can react without
parsing the message. A wrapped exception is always chained with `from`.
"""


class PyCollinearError(Exception):
    """Base exception for all pycollinear errors."""
    pass


class ValidationError(PyCollinearError):
    """
    The caller passed something malformed; nothing was computed.
    """
    pass


class InvalidInputError(ValidationError):
    """
    Malformed dataset or argument.

    Raised for mismatched column lengths, fewer than two observations,
    non-finite values, duplicate term names, or a residual degrees of
    freedom that would be zero or negative.
    """
    pass


class DimensionError(InvalidInputError):
    """
    A column is not one-dimensional, or columns differ in length.
    """
    pass


class UnknownTermError(InvalidInputError):
    """
    A model term references a column the dataset does not have.

    Attributes:
        term: The offending name
        available: Column names the dataset does have
    """

    def __init__(
        self,
        message: str,
        term: str | None = None,
        available: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.term = term
        self.available = available


class NumericalError(PyCollinearError):
    """
    The inputs are valid but the requested quantity does not exist for them.
    """
    pass


class SingularDesignError(NumericalError):
    """
    Design matrix is rank-deficient.

    Raised by the least squares fit when the columns of the design matrix
    are (numerically) linearly dependent, e.g. a duplicated predictor.

    Attributes:
        matrix_name: Which matrix was factorized ('X' for the design)
        condition_number: 2-norm condition number of that matrix
        rank: Numerical rank found
        expected_rank: Number of columns, intercept included
        aliased: Names of the columns found to be linearly dependent
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None,
        aliased: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank
        self.aliased = aliased


class DegenerateInputError(NumericalError):
    """
    Orthogonalization is not possible.

    Raised when fewer than two predictors are supplied to the principal
    component transform, or when their covariance matrix is not positive
    semi-definite within tolerance.

    Attributes:
        matrix_name: 'covariance' or 'X'
        min_eigenvalue: Smallest eigenvalue of the covariance, when computed
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        min_eigenvalue: float | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.min_eigenvalue = min_eigenvalue


class PerfectCollinearityError(NumericalError):
    """
    Variance inflation factor is undefined.

    Raised when a predictor is an exact linear combination of the others,
    so the auxiliary regression has R² = 1 and VIF = 1 / (1 - R²) is infinite.

    Attributes:
        predictor: The predictor whose VIF is undefined
        r_squared: Auxiliary R², if it could be computed
    """

    def __init__(
        self,
        message: str,
        predictor: str | None = None,
        r_squared: float | None = None,
    ):
        super().__init__(message)
        self.predictor = predictor
        self.r_squared = r_squared
