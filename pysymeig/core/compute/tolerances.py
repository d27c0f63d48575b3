"""
Tolerance tiers for numerical validation.

Backward-stable symmetric eigensolvers produce errors proportional to
n * ||A|| * eps. The tiers below fix the proportionality factor for the
different checks the library and its test-suite perform:

- RECONSTRUCTION: ||V D V' - A|| relative to ||A||
- ORTHOGONALITY: ||V'V - I||
- EIGENVALUE: |lambda - lambda_ref| relative to ||A||
- NON_SINGULARITY: eigenvalue magnitude below which a matrix is singular
"""

from dataclasses import dataclass

from pysymeig.core.compute.precision import EPSILON_64


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification: tol = factor * n * scale * eps."""
    factor: float
    name: str
    description: str

    def tolerance(self, n: int, scale: float = 1.0) -> float:
        """Absolute tolerance for an n x n problem of magnitude ``scale``."""
        return scaled_tolerance(n, scale, self.factor)


RECONSTRUCTION = ToleranceTier(
    factor=64.0,
    name='reconstruction',
    description='||V D Vt - A||_F <= tol(n, ||A||_F)',
)

ORTHOGONALITY = ToleranceTier(
    factor=64.0,
    name='orthogonality',
    description='||Vt V - I||_F <= tol(n, 1)',
)

EIGENVALUE = ToleranceTier(
    factor=16.0,
    name='eigenvalue',
    description='|lambda - lambda_ref| <= tol(n, ||A||_2)',
)

# Smallest |lambda| must exceed n * max|lambda| * eps to count as non-singular
NON_SINGULARITY = ToleranceTier(
    factor=1.0,
    name='non_singularity',
    description='min|lambda| > n * max|lambda| * eps',
)


def scaled_tolerance(n: int, scale: float, factor: float = 1.0) -> float:
    """
    Tolerance scaling with problem size and magnitude.

    Args:
        n: Matrix dimension (values below 1 are treated as 1)
        scale: Magnitude of the problem, typically a matrix norm
        factor: Safety factor of the tier

    Returns:
        factor * max(n, 1) * scale * eps
    """
    return factor * max(n, 1) * scale * EPSILON_64
