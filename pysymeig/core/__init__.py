"""
Core infrastructure for pysymeig.

This module provides the shared abstractions and utilities used by the
eigen-decomposition domain package.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Precision constants, tolerance tiers, timing
"""

from pysymeig.core.result import Result
from pysymeig.core.exceptions import (
    PySymEigError,
    ValidationError,
    DimensionError,
    IndexOutOfRangeError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PySymEigError",
    "ValidationError",
    "DimensionError",
    "IndexOutOfRangeError",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
]
