"""
pysymeig: eigen-decomposition of real symmetric matrices.

Householder tridiagonalization followed by implicit-shift QL iteration,
with determinant, inverse, and linear solves derived from A = V D V'.

Submodules:
    core: Exceptions, result envelope, validation, precision and timing
    eigen: Decomposition API, solution types, backends
"""

__version__ = "0.1.0"

from pysymeig import eigen
from pysymeig.eigen import (
    decompose,
    eigenvalues,
    EigenDecomposer,
    DecompositionConfig,
    EigenSolution,
)

__all__ = [
    "__version__",
    "eigen",
    "decompose",
    "eigenvalues",
    "EigenDecomposer",
    "DecompositionConfig",
    "EigenSolution",
]
