"""
Input validation utilities for pysymeig.

Validators fail fast and loud: they raise immediately with a message naming
the parameter and the offending value instead of silently correcting input.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import operator

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pysymeig.core.exceptions import (
    ValidationError,
    DimensionError,
    IndexOutOfRangeError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like (nested lists, tuples, objects implementing
    ``__array__``). Rejects inputs that end up with object or otherwise
    non-numeric dtype. Complex input is rejected as well: only real
    symmetric matrices are supported.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray of dtype float64 (a new array when conversion happened)

    Raises:
        ValidationError: If input cannot be converted to a real numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype}, expected real data"
        )

    if not np.issubdtype(result.dtype, np.number) and result.dtype != np.bool_:
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if result.dtype != np.float64:
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_square(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify a 2D array is square.

    Args:
        array: 2D array to check
        name: Parameter name for error messages

    Raises:
        DimensionError: If the array is not 2D or rows != columns
    """
    check_2d(array, name)
    rows, cols = array.shape
    if rows != cols:
        raise DimensionError(
            f"{name}: expected square matrix, got shape {array.shape}"
        )


def check_symmetric(
    array: NDArray[np.floating[Any]],
    name: str,
    rtol: float,
) -> float:
    """
    Verify a square matrix is symmetric up to a relative tolerance.

    The tolerance is relative to the largest absolute entry, so the check
    does not depend on the scale of the matrix.

    Args:
        array: Square array to check
        name: Parameter name for error messages
        rtol: Allowed asymmetry relative to max |a_ij|

    Returns:
        The largest absolute asymmetry max |a_ij - a_ji| (0.0 if exact)

    Raises:
        ValidationError: If the asymmetry exceeds rtol * max |a_ij|
    """
    if array.size == 0:
        return 0.0

    asymmetry = float(np.max(np.abs(array - array.T)))
    scale = float(np.max(np.abs(array)))
    if asymmetry > rtol * scale:
        i, j = np.unravel_index(np.argmax(np.abs(array - array.T)), array.shape)
        raise ValidationError(
            f"{name}: not symmetric, |a[{i},{j}] - a[{j},{i}]| = {asymmetry:.3g} "
            f"exceeds {rtol:.1e} * max|a| = {rtol * scale:.3g}"
        )
    return asymmetry


def check_index(index: Any, size: int, name: str) -> int:
    """
    Verify an index lies in [0, size).

    Negative indices are rejected rather than wrapped: eigenpairs are
    addressed by rank, and -1 is never a meaningful rank.

    Args:
        index: Integer-like index
        size: Number of valid positions
        name: Parameter name for error messages

    Returns:
        The index as a plain int

    Raises:
        ValidationError: If index is not an integer
        IndexOutOfRangeError: If index is outside [0, size)
    """
    if isinstance(index, (bool, np.bool_)):
        raise ValidationError(f"{name}: expected an integer index, got {index!r}")
    try:
        i = operator.index(index)
    except TypeError as e:
        raise ValidationError(
            f"{name}: expected an integer index, got {type(index).__name__}"
        ) from e

    if not 0 <= i < size:
        raise IndexOutOfRangeError(
            f"{name}: index {i} out of range [0, {size})",
            index=i,
            size=size,
        )
    return i
