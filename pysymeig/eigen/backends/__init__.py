"""
Eigen-decomposition backends.

Available backends:
    CPUQLBackend: Householder tridiagonalization + implicit QL (reference)
    LAPACKBackend: scipy.linalg.eigh, reordered to the library conventions
"""

from pysymeig.eigen.backends.cpu import CPUQLBackend
from pysymeig.eigen.backends.lapack import LAPACKBackend

__all__ = [
    "CPUQLBackend",
    "LAPACKBackend",
]
