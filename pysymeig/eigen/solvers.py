"""
Solver dispatch for symmetric eigen-decomposition.

This module provides the public entry points decompose() and eigenvalues(),
backend selection, and EigenDecomposer, a driver that caches the solution
for the matrix it last decomposed.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Literal
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysymeig.eigen.design import DecompositionConfig, SymmetricDesign, Triangle
from pysymeig.eigen.solution import EigenSolution
from pysymeig.eigen.backends.cpu import CPUQLBackend
from pysymeig.eigen._tridiagonal import tridiagonalize
from pysymeig.eigen._ql import tridiagonal_eigen
from pysymeig.eigen._transform import sort_descending


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_ql', 'lapack', 'cpu_lapack']


def decompose(
    A: ArrayLike | SymmetricDesign,
    *,
    config: DecompositionConfig | None = None,
    backend: BackendChoice = 'auto',
    triangle: Triangle = 'full',
) -> EigenSolution:
    """
    Eigen-decomposition A = V D V' of a real symmetric matrix.

    This is the primary public API. Input validation, design construction,
    backend selection, and result wrapping all happen here.

    Args:
        A: Square symmetric matrix (any array-like) or a SymmetricDesign
        config: Split tolerances and sweep cap; defaults to DecompositionConfig()
        backend: Computational backend to use:
            - 'auto' / 'cpu' / 'cpu_ql': Householder + implicit QL
            - 'lapack' / 'cpu_lapack': scipy.linalg.eigh (ignores config)
        triangle: Which part of A to read ('full', 'upper', 'lower');
            ignored when A is already a SymmetricDesign

    Returns:
        EigenSolution with eigenpairs, V, D, V', determinant, solve, inverse

    Raises:
        ValidationError: If A is not numeric, not finite, or not symmetric
        DimensionError: If A is not square
        ConvergenceError: If the QL iteration exceeds its sweep cap

    Example:
        >>> import numpy as np
        >>> from pysymeig.eigen import decompose
        >>>
        >>> A = np.array([[3.0, 2.0, 4.0], [2.0, 0.0, 2.0], [4.0, 2.0, 3.0]])
        >>> solution = decompose(A)
        >>> solution.eigenvalues  # 8, -1, -1 up to rounding
        >>> x = solution.solve([1.0, 2.0, 3.0])
    """
    # === Construct Design ===
    # This is the boundary - validate here, trust everywhere else
    design = _as_design(A, triangle)

    # === Select Backend ===
    backend_impl = _get_backend(backend, config)

    # === Solve ===
    result = backend_impl.solve(design)

    # === Wrap and Return ===
    return EigenSolution(_result=result, _design=design)


def eigenvalues(
    A: ArrayLike | SymmetricDesign,
    *,
    config: DecompositionConfig | None = None,
    triangle: Triangle = 'full',
) -> NDArray[np.floating[Any]]:
    """
    Eigenvalues of a real symmetric matrix, in descending order.

    Skips everything only eigenvectors need: no reflection records are
    kept, no rotations are accumulated, and nothing is back-transformed.

    Args:
        A: Square symmetric matrix or SymmetricDesign
        config: Split tolerances and sweep cap (compute_vectors is ignored)
        triangle: Which part of A to read

    Returns:
        Eigenvalues (n,), descending

    Raises:
        ValidationError, DimensionError, ConvergenceError: as for decompose()
    """
    design = _as_design(A, triangle)
    config = replace(config or DecompositionConfig(), compute_vectors=False)

    form = tridiagonalize(design.A, keep_reflections=False)
    result = tridiagonal_eigen(form.diagonal, form.off_diagonal, config)
    values, _ = sort_descending(result.eigenvalues)
    return values


class EigenDecomposer:
    """
    Decomposition driver with a one-entry cache.

    Holds the configuration and backend for a series of decompositions and
    remembers the last solution. Decomposing the same matrix again returns
    the cached solution; decomposing a different matrix discards the cache
    before any work starts, and publishes the new solution only if the
    decomposition succeeds.

    Usage:
        decomposer = EigenDecomposer(DecompositionConfig(max_sweeps=50))
        solution = decomposer.decompose(A)
        decomposer.decompose(A) is solution   # True, served from cache
        decomposer.decompose(B)               # replaces the cached solution

    Configuration is fixed per driver. To decompose with other tolerances,
    build another driver (or call decompose() with a different config).
    """

    def __init__(
        self,
        config: DecompositionConfig | None = None,
        *,
        backend: BackendChoice = 'auto',
        triangle: Triangle = 'full',
    ):
        self._config = config or DecompositionConfig()
        self._backend = _get_backend(backend, self._config)
        self._triangle = triangle
        self._design: SymmetricDesign | None = None
        self._solution: EigenSolution | None = None

    @property
    def config(self) -> DecompositionConfig:
        return self._config

    @property
    def backend_name(self) -> str:
        return self._backend.name

    @property
    def has_solution(self) -> bool:
        return self._solution is not None

    @property
    def solution(self) -> EigenSolution:
        """
        The cached solution.

        Raises:
            RuntimeError: If nothing has been decomposed yet
        """
        if self._solution is None:
            raise RuntimeError("EigenDecomposer.solution accessed before decompose()")
        return self._solution

    def decompose(self, A: ArrayLike | SymmetricDesign) -> EigenSolution:
        """
        Decompose A, reusing the cached solution when A is unchanged.

        Raises:
            ValidationError, DimensionError: Before the cache is touched
            ConvergenceError: After the previous solution was discarded
        """
        design = _as_design(A, self._triangle)
        if self._solution is not None and self._design is not None and self._design.matches(design):
            return self._solution

        self.clear()
        result = self._backend.solve(design)
        solution = EigenSolution(_result=result, _design=design)

        self._design = design
        self._solution = solution
        return solution

    def clear(self) -> None:
        """Drop the cached solution."""
        self._design = None
        self._solution = None

    def __repr__(self) -> str:
        return (
            f"EigenDecomposer(backend={self.backend_name!r}, "
            f"has_solution={self.has_solution})"
        )


def _as_design(A: ArrayLike | SymmetricDesign, triangle: Triangle) -> SymmetricDesign:
    if isinstance(A, SymmetricDesign):
        return A
    return SymmetricDesign.from_array(A, triangle=triangle)


def _get_backend(choice: BackendChoice, config: DecompositionConfig | None):
    """
    Select and instantiate the appropriate backend.

    Args:
        choice: User's backend preference
        config: Convergence configuration for the QL backend

    Returns:
        Backend instance ready to solve

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_ql'):
        return CPUQLBackend(config)

    elif choice in ('lapack', 'cpu_lapack'):
        from pysymeig.eigen.backends.lapack import LAPACKBackend
        return LAPACKBackend()

    else:
        raise ValueError(f"Unknown backend: {choice!r}")
