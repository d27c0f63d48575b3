"""
Exception hierarchy for pysymeig.

All exceptions inherit from PySymEigError so callers can catch any
library-specific failure in one place. Domain code raises the most specific
class available.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Errors are raised before any result is published
"""


class PySymEigError(Exception):
    """Base exception for all pysymeig errors."""
    pass


class ValidationError(PySymEigError):
    """
    Input validation failed.

    Raised when user-provided inputs (matrices, right-hand sides,
    configuration values) fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when a matrix is not square, or when a right-hand side passed to
    solve() does not match the dimension of the decomposed matrix.
    """
    pass


class IndexOutOfRangeError(ValidationError, IndexError):
    """
    Eigenvalue or eigenvector index outside [0, n).

    Also an IndexError, so generic sequence-handling code keeps working.

    Attributes:
        index: The offending index
        size: Number of available eigenpairs
    """

    def __init__(self, message: str, index: int, size: int):
        super().__init__(message)
        self.index = index
        self.size = size


class NumericalError(PySymEigError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised by solve() and inverse() when the smallest-magnitude eigenvalue
    falls below the non-singularity threshold.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Spectral condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (the matrix dimension)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class ConvergenceError(PySymEigError):
    """
    Iterative algorithm failed to converge.

    Raised when the implicit QL iteration exceeds its sweep cap for one
    eigenvalue or meets non-finite tridiagonal entries. The LAPACK backend
    raises it when eigh reports failure.

    Attributes:
        iterations: Number of sweeps performed on the failing block
        final_change: Magnitude of the last non-negligible off-diagonal entry
        reason: Why convergence failed ('max_sweeps', 'non_finite', 'lapack')
        threshold: The split threshold that was not met
        block: Half-open (start, stop) row range of the active block
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None,
        block: tuple[int, int] | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
        self.block = block
