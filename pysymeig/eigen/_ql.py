"""
Implicit-shift QL iteration for symmetric tridiagonal matrices.

Given the diagonal d and off-diagonal e of T, computes the eigenvalues of T
and, optionally, the orthogonal matrix Z whose columns are the eigenvectors
of T (T = Z diag(lambda) Z').

Algorithm:
    for l = 0 .. n-1:
        repeat:
            m = first index >= l with e[m] negligible (or n-1)
            if m == l: d[l] has converged, move on
            shift from the 2x2 at the top of the active block d[l..m]
            chase the bulge from row m-1 up to l with Givens rotations,
            accumulating each rotation into Z

An off-diagonal e[i] is negligible when

    |e[i]| <= max(absolute_split_tolerance,
                  relative_split_tolerance * (|d[i]| + |d[i+1]|))

which splits T into independent unreduced blocks. Each eigenvalue gets at
most ``max_sweeps`` sweeps; running out is a ConvergenceError, never a
truncated result.

A matrix whose largest entry lies outside [SCALE_MIN, SCALE_MAX] is scaled by
a power of two before iterating, and the eigenvalues are scaled back after.
The absolute split tolerance is scaled with it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysymeig.core.exceptions import ConvergenceError, DimensionError
from pysymeig.core.compute.precision import EPSILON_64
from pysymeig.core.validation import check_1d
from pysymeig.eigen.design import DecompositionConfig


_FLOAT_MAX = float(np.finfo(np.float64).max)

# Safe range for the largest entry of T during the iteration
SCALE_MAX = math.sqrt(_FLOAT_MAX) / 3.0
SCALE_MIN = math.sqrt(float(np.finfo(np.float64).tiny)) / EPSILON_64 ** 2


@dataclass(frozen=True)
class TridiagonalEigenResult:
    """
    Eigen-decomposition of a tridiagonal matrix.

    Attributes:
        eigenvalues: Eigenvalues in the order blocks converged (unsorted)
        eigenvectors: Z (n x n), columns are eigenvectors of T; None when
            vectors were not requested
        sweeps: Total number of QL sweeps performed
        n_blocks: Number of unreduced blocks T split into before iterating
    """
    eigenvalues: NDArray[np.floating[Any]]
    eigenvectors: NDArray[np.floating[Any]] | None
    sweeps: int
    n_blocks: int


def _negligible(e_i: float, d_i: float, d_next: float, config: DecompositionConfig) -> bool:
    # NaN compares False, so a NaN entry is never negligible
    return abs(e_i) <= config.split_threshold(d_i, d_next)


def split_blocks(
    diagonal: ArrayLike,
    off_diagonal: ArrayLike,
    config: DecompositionConfig | None = None,
) -> list[tuple[int, int]]:
    """
    Partition a tridiagonal matrix at negligible off-diagonal entries.

    Args:
        diagonal: d (n,)
        off_diagonal: e (n-1,)
        config: Split tolerances (defaults to DecompositionConfig())

    Returns:
        Half-open (start, stop) row ranges of the unreduced blocks, in order
    """
    config = config or DecompositionConfig()
    d = np.asarray(diagonal, dtype=np.float64)
    e = np.asarray(off_diagonal, dtype=np.float64)
    n = len(d)

    blocks = []
    start = 0
    for i in range(n - 1):
        if _negligible(e[i], d[i], d[i + 1], config):
            blocks.append((start, i + 1))
            start = i + 1
    if n:
        blocks.append((start, n))
    return blocks


def _scale_exponent(d: NDArray[np.floating[Any]], e: NDArray[np.floating[Any]]) -> int:
    """Power of two that brings max(|d|, |e|) to about 1, or 0 when it is in range."""
    norm = max(float(np.abs(d).max(initial=0.0)), float(np.abs(e).max(initial=0.0)))
    if norm == 0.0 or SCALE_MIN <= norm <= SCALE_MAX:
        return 0
    return -math.frexp(norm)[1]


def _scaled_config(config: DecompositionConfig, exponent: int) -> DecompositionConfig:
    with np.errstate(over='ignore'):
        floor = float(np.ldexp(config.absolute_split_tolerance, exponent))
    return replace(config, absolute_split_tolerance=min(floor, _FLOAT_MAX))


def _ql_sweep(
    d: NDArray[np.floating[Any]],
    e: NDArray[np.floating[Any]],
    z: NDArray[np.floating[Any]] | None,
    l: int,
    m: int,
) -> None:
    """One implicit QL sweep on the active block d[l..m], in place."""
    g = (d[l + 1] - d[l]) / (2.0 * e[l])
    r = math.hypot(g, 1.0)
    g = d[m] - d[l] + e[l] / (g + math.copysign(r, g))
    s = c = 1.0
    p = 0.0

    for i in range(m - 1, l - 1, -1):
        f = s * e[i]
        b = c * e[i]
        r = math.hypot(f, g)
        e[i + 1] = r
        if r == 0.0:
            # Underflow: undo the pending shift and let the caller rescan
            d[i + 1] -= p
            e[m] = 0.0
            return
        s = f / r
        c = g / r
        g = d[i + 1] - p
        r = (d[i] - g) * s + 2.0 * c * b
        p = s * r
        d[i + 1] = g + p
        g = c * r - b

        if z is not None:
            z_i = z[:, i].copy()
            z[:, i] = c * z_i - s * z[:, i + 1]
            z[:, i + 1] = s * z_i + c * z[:, i + 1]

    d[l] -= p
    e[l] = g
    e[m] = 0.0


def tridiagonal_eigen(
    diagonal: ArrayLike,
    off_diagonal: ArrayLike,
    config: DecompositionConfig | None = None,
) -> TridiagonalEigenResult:
    """
    Eigenvalues (and eigenvectors) of a symmetric tridiagonal matrix.

    Args:
        diagonal: d (n,)
        off_diagonal: e (n-1,), e[i] couples rows i and i+1
        config: Split tolerances, sweep cap, and whether to compute vectors

    Returns:
        TridiagonalEigenResult with unsorted eigenvalues

    Raises:
        DimensionError: If either input is not 1D, or
            len(off_diagonal) != len(diagonal) - 1
        ConvergenceError: If an eigenvalue needs more than max_sweeps sweeps,
            or the input is not finite
    """
    config = config or DecompositionConfig()
    d = np.array(diagonal, dtype=np.float64, copy=True)
    off = np.asarray(off_diagonal, dtype=np.float64)
    check_1d(d, 'diagonal')
    check_1d(off, 'off_diagonal')
    n = len(d)

    if len(off) != max(n - 1, 0):
        raise DimensionError(
            f"off_diagonal: expected length {max(n - 1, 0)}, got {len(off)}"
        )
    if not (np.all(np.isfinite(d)) and np.all(np.isfinite(off))):
        raise ConvergenceError(
            "QL iteration cannot converge on non-finite tridiagonal entries",
            iterations=0,
            reason='non_finite',
        )

    e = np.zeros(n, dtype=np.float64)
    e[:n - 1] = off
    exponent = _scale_exponent(d, e)
    if exponent:
        d = np.ldexp(d, exponent)
        e = np.ldexp(e, exponent)
        config = _scaled_config(config, exponent)

    z = np.eye(n) if config.compute_vectors else None
    n_blocks = len(split_blocks(d, e[:n - 1], config))

    total_sweeps = 0
    for l in range(n):
        sweeps = 0
        while True:
            m = l
            while m < n - 1 and not _negligible(e[m], d[m], d[m + 1], config):
                m += 1
            if m == l:
                break
            if sweeps >= config.max_sweeps:
                raise ConvergenceError(
                    f"QL iteration did not converge for eigenvalue {l} "
                    f"(block rows {l}..{m}) after {sweeps} sweeps",
                    iterations=sweeps,
                    final_change=float(np.ldexp(abs(e[l]), -exponent)),
                    reason='max_sweeps',
                    threshold=float(
                        np.ldexp(config.split_threshold(d[l], d[l + 1]), -exponent)
                    ),
                    block=(l, m + 1),
                )
            sweeps += 1
            _ql_sweep(d, e, z, l, m)
        total_sweeps += sweeps

    if exponent:
        d = np.ldexp(d, -exponent)

    return TridiagonalEigenResult(
        eigenvalues=d,
        eigenvectors=z,
        sweeps=total_sweeps,
        n_blocks=n_blocks,
    )
