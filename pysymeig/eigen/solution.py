"""
Eigen-decomposition solution types.

Contains the immutable parameter payload produced by backends and the
user-facing solution wrapper that derives determinant, inverse,
non-singularity, and linear solves from A = V D V'.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysymeig.core.result import Result
from pysymeig.core.exceptions import DimensionError, SingularMatrixError
from pysymeig.core.compute.precision import EPSILON_64
from pysymeig.core.compute.tolerances import NON_SINGULARITY
from pysymeig.core.validation import check_array, check_finite, check_index

if TYPE_CHECKING:
    from pysymeig.eigen.design import SymmetricDesign


# Condition number above which A is flagged ill-conditioned: half the digits are gone
ILL_CONDITIONED = 1.0 / np.sqrt(EPSILON_64)


def _ill_conditioned_message(condition: float) -> str:
    return (
        f"A is ill-conditioned (condition number {condition:.3g}); "
        f"solutions may be inaccurate"
    )


@dataclass(frozen=True)
class EigenParams:
    """
    Parameter payload for a symmetric eigen-decomposition.

    This is the immutable data computed by backends. All arrays are
    read-only.

    Attributes:
        eigenvalues: Eigenvalues in descending order (n,)
        eigenvectors: V, unit eigenvectors as columns, same order (n x n)
        eigenvectors_t: V' (n x n)
        determinant: Product of the eigenvalues (inf or 0.0 when the product
            leaves the float64 range)
        non_singular: min|lambda| > non_singular_threshold
        non_singular_threshold: n * max|lambda| * eps
    """
    eigenvalues: NDArray[np.floating[Any]]
    eigenvectors: NDArray[np.floating[Any]]
    eigenvectors_t: NDArray[np.floating[Any]]
    determinant: float
    non_singular: bool
    non_singular_threshold: float

    @classmethod
    def from_eigenpairs(
        cls,
        eigenvalues: NDArray[np.floating[Any]],
        eigenvectors: NDArray[np.floating[Any]],
    ) -> EigenParams:
        """
        Build the payload from eigenpairs already sorted descending.

        Copies its inputs and freezes the copies.
        """
        values = np.array(eigenvalues, dtype=np.float64, copy=True)
        vectors = np.array(eigenvectors, dtype=np.float64, copy=True)
        vectors_t = np.ascontiguousarray(vectors.T)
        for arr in (values, vectors, vectors_t):
            arr.setflags(write=False)

        n = len(values)
        magnitudes = np.abs(values)
        largest = float(magnitudes.max()) if n else 0.0
        threshold = NON_SINGULARITY.tolerance(n, largest) if n else 0.0
        non_singular = n == 0 or bool(magnitudes.min() > threshold)
        with np.errstate(over='ignore', under='ignore'):
            determinant = float(np.prod(values))

        return cls(
            eigenvalues=values,
            eigenvectors=vectors,
            eigenvectors_t=vectors_t,
            determinant=determinant,
            non_singular=non_singular,
            non_singular_threshold=threshold,
        )

    @property
    def condition_number(self) -> float:
        """Spectral condition number max|lambda| / min|lambda| (inf if singular)."""
        if len(self.eigenvalues) == 0:
            return 1.0
        magnitudes = np.abs(self.eigenvalues)
        smallest = float(magnitudes.min())
        if smallest == 0.0:
            return float('inf')
        return float(magnitudes.max()) / smallest

    def conditioning_warnings(self) -> tuple[str, ...]:
        """
        Notes for Result.warnings about the conditioning of A.

        A non-singular matrix whose condition number exceeds ILL_CONDITIONED
        gets one note; solve() repeats it through warnings.warn.
        """
        condition = self.condition_number
        if self.non_singular and condition > ILL_CONDITIONED:
            return (_ill_conditioned_message(condition),)
        return ()


@dataclass
class EigenSolution:
    """
    User-facing eigen-decomposition results.

    Wraps the backend Result and provides accessors for eigenpairs, the
    factor matrices V, D, V', and the spectral linear algebra built on
    them (determinant, inverse, solve).

    The wrapped payload is immutable; the only state held here is the lazily
    built D, which is the same matrix however many times it is requested.
    """
    _result: Result[EigenParams]
    _design: 'SymmetricDesign'

    # Cached computations
    _D: NDArray[np.floating[Any]] | None = None

    @property
    def params(self) -> EigenParams:
        return self._result.params

    @property
    def design(self) -> 'SymmetricDesign':
        """The validated input the decomposition was computed from."""
        return self._design

    @property
    def n(self) -> int:
        """Matrix dimension."""
        return len(self.params.eigenvalues)

    # === Eigenpairs ===

    @property
    def eigenvalues(self) -> NDArray[np.floating[Any]]:
        """Copy of the eigenvalues, descending."""
        return self.params.eigenvalues.copy()

    def eigenvalue(self, i: int) -> float:
        """
        The i-th largest eigenvalue.

        Raises:
            IndexOutOfRangeError: If i is outside [0, n)
        """
        i = check_index(i, self.n, 'i')
        return float(self.params.eigenvalues[i])

    def eigenvector(self, i: int) -> NDArray[np.floating[Any]]:
        """
        Copy of the unit eigenvector for eigenvalue(i) (column i of V).

        Raises:
            IndexOutOfRangeError: If i is outside [0, n)
        """
        i = check_index(i, self.n, 'i')
        return self.params.eigenvectors[:, i].copy()

    # === Factor matrices ===

    @property
    def V(self) -> NDArray[np.floating[Any]]:
        """Eigenvectors as columns (n x n), read-only."""
        return self.params.eigenvectors

    @property
    def Vt(self) -> NDArray[np.floating[Any]]:
        """Transpose of V (n x n), read-only."""
        return self.params.eigenvectors_t

    @property
    def D(self) -> NDArray[np.floating[Any]]:
        """Diagonal matrix of eigenvalues (n x n), read-only, built on first access."""
        if self._D is None:
            D = np.diag(self.params.eigenvalues)
            D.setflags(write=False)
            self._D = D
        return self._D

    def reconstruct(self) -> NDArray[np.floating[Any]]:
        """V D V' (equals A up to rounding)."""
        return (self.V * self.params.eigenvalues) @ self.Vt

    # === Derived quantities ===

    @property
    def determinant(self) -> float:
        """Product of all eigenvalues."""
        return self.params.determinant

    @property
    def is_non_singular(self) -> bool:
        """True iff min|lambda| exceeds n * max|lambda| * eps."""
        return self.params.non_singular

    @property
    def non_singular_threshold(self) -> float:
        return self.params.non_singular_threshold

    @property
    def rank(self) -> int:
        """Number of eigenvalues above the non-singularity threshold."""
        magnitudes = np.abs(self.params.eigenvalues)
        return int(np.sum(magnitudes > self.params.non_singular_threshold))

    @property
    def condition_number(self) -> float:
        """Spectral condition number max|lambda| / min|lambda| (inf if singular)."""
        return self.params.condition_number

    # === Linear algebra ===

    def solve(self, b: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Solve A x = b.

        Computed as x = V D^-1 V' b: y = V' b, row i of y divided by
        lambda_i, x = V y.

        Args:
            b: Right-hand side, vector (n,) or matrix (n x k). Any array-like.

        Returns:
            x with the same shape as b

        Raises:
            ValidationError: If b is not numeric or not finite
            DimensionError: If b is not 1D/2D or its leading dimension != n
            SingularMatrixError: If A is singular (see is_non_singular)
        """
        b_arr = check_array(b, 'b')
        if b_arr.ndim not in (1, 2):
            raise DimensionError(
                f"b: expected 1D or 2D array, got {b_arr.ndim}D with shape {b_arr.shape}"
            )
        if b_arr.shape[0] != self.n:
            raise DimensionError(
                f"b: leading dimension {b_arr.shape[0]} does not match "
                f"matrix dimension {self.n}"
            )
        check_finite(b_arr, 'b')

        if not self.is_non_singular:
            raise SingularMatrixError(
                f"A is singular: min|eigenvalue| = "
                f"{float(np.abs(self.params.eigenvalues).min()):.3g} <= threshold "
                f"{self.non_singular_threshold:.3g}",
                matrix_name='A',
                condition_number=self.condition_number,
                rank=self.rank,
                expected_rank=self.n,
            )

        condition = self.condition_number
        if condition > ILL_CONDITIONED:
            warnings.warn(
                _ill_conditioned_message(condition),
                UserWarning,
                stacklevel=2,
            )

        values = self.params.eigenvalues
        y = self.Vt @ b_arr
        if y.ndim == 1:
            y /= values
        else:
            y /= values[:, np.newaxis]
        return self.V @ y

    def inverse(self) -> NDArray[np.floating[Any]]:
        """
        A^-1 = V D^-1 V'.

        Raises:
            SingularMatrixError: If A is singular
        """
        return self.solve(np.eye(self.n))

    # === Passthroughs ===

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Plain-text summary of the decomposition."""
        lines = [
            "Symmetric Eigen-decomposition",
            "=" * 60,
            f"Dimension: {self.n}",
            f"Triangle read: {self._design.triangle}",
            f"Determinant: {self.determinant:.6g}",
            f"Non-singular: {self.is_non_singular}",
            f"Condition number: {self.condition_number:.6g}",
            f"QL sweeps: {self.info.get('sweeps', 'NA')}",
        ]
        if self._design.symmetrized:
            lines.append(f"Asymmetry removed: {self._design.asymmetry:.3g}")
        lines += [
            "",
            "Eigenvalues:",
            "-" * 60,
        ]
        for i, value in enumerate(self.params.eigenvalues):
            lines.append(f"  lambda[{i}]: {value:20.12g}")

        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for warning in self.warnings:
            lines.append(f"Warning: {warning}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"EigenSolution(n={self.n}, determinant={self.determinant:.6g}, "
            f"non_singular={self.is_non_singular})"
        )
