"""
Eigen-decomposition design and configuration.

SymmetricDesign wraps a validated, symmetric, finite matrix. It is the only
way input reaches a backend: everything past this boundary trusts its data.

DecompositionConfig carries the knobs that influence convergence (split
tolerances, sweep cap). It is immutable and passed explicitly into every
decomposition, so two decompositions never share mutable defaults.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, replace
from typing import Any, Literal
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysymeig.core.exceptions import ValidationError
from pysymeig.core.compute.precision import EPSILON_64
from pysymeig.core.validation import (
    check_array,
    check_finite,
    check_square,
    check_symmetric,
)


Triangle = Literal['full', 'upper', 'lower']

DEFAULT_MAX_SWEEPS = 30
DEFAULT_SYMMETRY_RTOL = 1e-10


@dataclass(frozen=True)
class DecompositionConfig:
    """
    Convergence configuration for one decomposition.

    An off-diagonal entry e[i] of the tridiagonal matrix is negligible, and
    the matrix splits there, when

        |e[i]| <= max(absolute_split_tolerance,
                      relative_split_tolerance * (|d[i]| + |d[i+1]|))

    Attributes:
        relative_split_tolerance: Relative part of the split criterion
        absolute_split_tolerance: Absolute floor of the split criterion (0.0
            leaves a purely relative test; exact zeros still split)
        max_sweeps: QL sweeps allowed per eigenvalue before giving up
        compute_vectors: Accumulate eigenvectors (False gives eigenvalues only)
    """
    relative_split_tolerance: float = EPSILON_64
    absolute_split_tolerance: float = 0.0
    max_sweeps: int = DEFAULT_MAX_SWEEPS
    compute_vectors: bool = True

    def __post_init__(self) -> None:
        for name in ('relative_split_tolerance', 'absolute_split_tolerance'):
            value = getattr(self, name)
            if not isinstance(value, (int, float, np.floating, np.integer)) or isinstance(value, bool):
                raise ValidationError(f"{name}: expected a real number, got {value!r}")
            if not math.isfinite(value) or value < 0:
                raise ValidationError(f"{name}: must be finite and >= 0, got {value}")
        if isinstance(self.max_sweeps, bool) or not isinstance(self.max_sweeps, (int, np.integer)):
            raise ValidationError(f"max_sweeps: expected an integer, got {self.max_sweeps!r}")
        if self.max_sweeps < 1:
            raise ValidationError(f"max_sweeps: must be >= 1, got {self.max_sweeps}")

    def with_relative_split_tolerance(self, tolerance: float) -> DecompositionConfig:
        """Copy of this config with a new relative split tolerance."""
        return replace(self, relative_split_tolerance=tolerance)

    def with_absolute_split_tolerance(self, tolerance: float) -> DecompositionConfig:
        """Copy of this config with a new absolute split tolerance."""
        return replace(self, absolute_split_tolerance=tolerance)

    def split_threshold(self, d_i: float, d_next: float) -> float:
        """Threshold below which the off-diagonal between d_i and d_next is negligible."""
        # Scaled term by term: |d_i| + |d_next| can overflow near the top of the range
        rel = self.relative_split_tolerance
        return max(self.absolute_split_tolerance, rel * abs(d_i) + rel * abs(d_next))

    def as_info(self) -> dict[str, Any]:
        """Flat dict for Result.info."""
        return {
            'relative_split_tolerance': float(self.relative_split_tolerance),
            'absolute_split_tolerance': float(self.absolute_split_tolerance),
            'max_sweeps': int(self.max_sweeps),
        }


@dataclass(frozen=True)
class SymmetricDesign:
    """
    Validated symmetric matrix ready for decomposition.

    Immutable after construction; the stored matrix is a private read-only
    copy, so later changes to the caller's array have no effect.

    Construction:
        SymmetricDesign.from_array(A)                    # full matrix, must be symmetric
        SymmetricDesign.from_array(A, triangle='upper')  # lower triangle ignored
        SymmetricDesign.from_array(A, triangle='lower')  # upper triangle ignored
    """
    _A: NDArray[np.floating[Any]]
    _n: int
    _triangle: Triangle
    _asymmetry: float
    _warnings: tuple[str, ...] = ()

    @classmethod
    def from_array(
        cls,
        A: ArrayLike,
        *,
        triangle: Triangle = 'full',
        symmetry_rtol: float = DEFAULT_SYMMETRY_RTOL,
        name: str = 'A',
    ) -> SymmetricDesign:
        """
        Build a design from any array-like.

        Args:
            A: Square matrix
            triangle: Which part of A to read:
                - 'full': A must be symmetric up to symmetry_rtol * max|A|;
                  a tolerated asymmetry is averaged away with a warning
                - 'upper': mirror the upper triangle (lower is never read)
                - 'lower': mirror the lower triangle (upper is never read)
            symmetry_rtol: Relative asymmetry tolerated in 'full' mode
            name: Parameter name for error messages

        Returns:
            SymmetricDesign

        Raises:
            ValidationError: Non-numeric, non-finite, or asymmetric input
            DimensionError: Input is not a square 2D matrix
        """
        arr = check_array(A, name)
        check_square(arr, name)

        asymmetry = 0.0
        notes: list[str] = []
        if triangle == 'upper':
            sym = np.triu(arr) + np.triu(arr, 1).T
        elif triangle == 'lower':
            sym = np.tril(arr) + np.tril(arr, -1).T
        elif triangle == 'full':
            check_finite(arr, name)
            asymmetry = check_symmetric(arr, name, symmetry_rtol)
            if asymmetry > 0.0:
                sym = 0.5 * (arr + arr.T)
                message = (
                    f"{name}: asymmetric by up to {asymmetry:.3g}; "
                    f"symmetrized as (A + A.T) / 2"
                )
                warnings.warn(message, UserWarning, stacklevel=2)
                notes.append(message)
            else:
                sym = np.array(arr, dtype=np.float64, copy=True)
        else:
            raise ValueError(f"Unknown triangle: {triangle!r}")

        check_finite(sym, name)
        sym.setflags(write=False)

        return cls(
            _A=sym,
            _n=sym.shape[0],
            _triangle=triangle,
            _asymmetry=asymmetry,
            _warnings=tuple(notes),
        )

    # === Properties ===

    @property
    def A(self) -> NDArray[np.floating[Any]]:
        """Symmetric matrix (n x n), read-only."""
        return self._A

    @property
    def n(self) -> int:
        """Matrix dimension."""
        return self._n

    @property
    def triangle(self) -> Triangle:
        return self._triangle

    @property
    def asymmetry(self) -> float:
        """Largest |a_ij - a_ji| removed on read (0.0 for exact input)."""
        return self._asymmetry

    @property
    def symmetrized(self) -> bool:
        return self._asymmetry > 0.0

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._warnings

    @property
    def norm(self) -> float:
        """Frobenius norm of A."""
        return float(np.linalg.norm(self._A)) if self._n else 0.0

    def matches(self, other: SymmetricDesign) -> bool:
        """True when both designs hold the same matrix."""
        return self._n == other._n and bool(np.array_equal(self._A, other._A))
