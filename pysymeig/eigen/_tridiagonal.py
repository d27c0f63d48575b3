"""
Householder reduction of a symmetric matrix to tridiagonal form.

Computes T = Q' A Q with T symmetric tridiagonal. Q is never formed: each
elimination step stores one Reflection record (H = I - 2 w w' acting on
the leading coordinates), and the records are replayed on demand to apply
Q or Q' to vectors and matrices.

Rows are eliminated from the bottom up. Step i zeroes A[i, :i-1] with a
reflection on coordinates 0..i-1, leaving A[i, i-1] as the off-diagonal
entry e[i-1]:

    for i = n-1 down to 2:
        x = A[i, :i]
        H x = alpha * e_{i-1}
        A[:i, :i] <- H A[:i, :i] H

So A = Q T Q' with Q = H_{n-1} H_{n-2} ... H_2.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pysymeig.core.exceptions import DimensionError


@dataclass(frozen=True)
class Reflection:
    """
    One Householder reflection H = I - 2 w w' on coordinates [0, size).

    Attributes:
        size: Number of leading coordinates the reflection acts on
        vector: Unit vector w of length ``size``
    """
    size: int
    vector: NDArray[np.floating[Any]]

    def apply(self, x: NDArray[np.floating[Any]]) -> None:
        """Apply H in place to the leading ``size`` rows of x (vector or matrix)."""
        w = self.vector
        head = x[:self.size]
        if head.ndim == 1:
            head -= (2.0 * (w @ head)) * w
        else:
            head -= 2.0 * np.outer(w, w @ head)


@dataclass(frozen=True)
class TridiagonalForm:
    """
    Tridiagonal form T = Q' A Q of a symmetric matrix.

    Attributes:
        diagonal: Main diagonal of T (n,)
        off_diagonal: Sub/super-diagonal of T (n-1,), e[i] couples i and i+1
        reflections: Reflection records in elimination order (rows n-1 .. 2)
    """
    diagonal: NDArray[np.floating[Any]]
    off_diagonal: NDArray[np.floating[Any]]
    reflections: tuple[Reflection, ...]

    @property
    def n(self) -> int:
        return len(self.diagonal)

    def matrix(self) -> NDArray[np.floating[Any]]:
        """Dense T (for diagnostics and tests)."""
        return (
            np.diag(self.diagonal)
            + np.diag(self.off_diagonal, 1)
            + np.diag(self.off_diagonal, -1)
        )

    def apply_q(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """
        Compute Q x without forming Q.

        Args:
            x: Vector (n,) or matrix (n, k)

        Returns:
            New array Q x, same shape as x
        """
        out = self._working_copy(x)
        for reflection in reversed(self.reflections):
            reflection.apply(out)
        return out

    def apply_qt(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """Compute Q' x without forming Q."""
        out = self._working_copy(x)
        for reflection in self.reflections:
            reflection.apply(out)
        return out

    def _working_copy(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        out = np.array(x, dtype=np.float64, copy=True)
        if out.ndim not in (1, 2) or out.shape[0] != self.n:
            raise DimensionError(
                f"x: expected leading dimension {self.n}, got shape {out.shape}"
            )
        return out


def _householder_vector(
    x: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], float]:
    """
    Unit vector w with (I - 2 w w') x = alpha * e_last.

    x is scaled by max|x| first so squaring cannot overflow or underflow.
    The sign of alpha is opposite to x[-1], which avoids cancellation when
    forming w.

    Returns:
        (w, alpha) with alpha already rescaled to the magnitude of x
    """
    scale = float(np.max(np.abs(x)))
    u = x / scale
    sigma = float(np.sqrt(u @ u))
    last = float(u[-1])
    alpha = -sigma if last >= 0.0 else sigma

    v = u.copy()
    v[-1] -= alpha
    # ||v||^2 = 2 sigma (sigma + |last|) > 0
    v /= np.sqrt(2.0 * sigma * (sigma + abs(last)))
    return v, alpha * scale


def tridiagonalize(
    A: NDArray[np.floating[Any]],
    *,
    keep_reflections: bool = True,
) -> TridiagonalForm:
    """
    Reduce a symmetric matrix to tridiagonal form.

    A must be exactly symmetric. It is copied and never modified.

    Args:
        A: Symmetric matrix (n x n)
        keep_reflections: Store reflection records. Eigenvalue-only callers
            pass False and get an empty ``reflections`` tuple.

    Returns:
        TridiagonalForm with diagonal, off-diagonal and reflection records
    """
    work = np.array(A, dtype=np.float64, copy=True)
    n = work.shape[0]
    off = np.zeros(max(n - 1, 0), dtype=np.float64)
    reflections: list[Reflection] = []

    for i in range(n - 1, 1, -1):
        x = work[i, :i]
        if not np.any(x[:-1]):
            # Row already reduced
            off[i - 1] = x[-1]
            continue

        w, alpha = _householder_vector(x)
        off[i - 1] = alpha

        # Two-sided update H B H = B - 2 w q' - 2 q w' with q = p - (w'p) w, p = B w
        block = work[:i, :i]
        p = block @ w
        q = p - (w @ p) * w
        block -= 2.0 * (np.outer(w, q) + np.outer(q, w))

        if keep_reflections:
            reflections.append(Reflection(size=i, vector=w))

    if n >= 2:
        off[0] = work[1, 0]

    diagonal = np.diag(work).copy()
    diagonal.setflags(write=False)
    off.setflags(write=False)

    return TridiagonalForm(
        diagonal=diagonal,
        off_diagonal=off,
        reflections=tuple(reflections),
    )
