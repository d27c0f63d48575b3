"""
Symmetric eigen-decomposition.

Computes A = V D V' for a real symmetric matrix A, with eigenvalues in
descending order on the diagonal of D and unit eigenvectors as the
columns of V, and derives determinant, inverse, and linear solves from it.

Public API:
    decompose(A, ...) -> EigenSolution
    eigenvalues(A, ...) -> ndarray
    EigenDecomposer: driver caching the last solution

Example:
    >>> from pysymeig.eigen import decompose
    >>> solution = decompose(A)
    >>> solution.eigenvalues
    >>> x = solution.solve(b)
"""

from pysymeig.eigen.design import DecompositionConfig, SymmetricDesign
from pysymeig.eigen.solution import EigenSolution, EigenParams
from pysymeig.eigen.solvers import decompose, eigenvalues, EigenDecomposer

__all__ = [
    "decompose",
    "eigenvalues",
    "EigenDecomposer",
    "DecompositionConfig",
    "SymmetricDesign",
    "EigenSolution",
    "EigenParams",
]
