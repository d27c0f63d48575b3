"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


def random_orthogonal(n, rng):
    """Random orthogonal n x n matrix (Haar distributed)."""
    q, r = np.linalg.qr(rng.standard_normal((n, n)))
    # Sign fix on diag(R) makes the distribution uniform
    return q * np.sign(np.diag(r))


def symmetric_with_spectrum(eigenvalues, rng):
    """V0 diag(eigenvalues) V0' for a random orthogonal V0, exactly symmetric."""
    eigenvalues = np.asarray(eigenvalues, dtype=np.float64)
    v0 = random_orthogonal(len(eigenvalues), rng)
    A = (v0 * eigenvalues) @ v0.T
    return 0.5 * (A + A.T)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def ref_values():
    """Clustered spectrum: three values within 2e-3 of each other."""
    return np.array([2.003, 2.002, 2.001, 1.001, 1.000, 0.001])


@pytest.fixture
def ref_matrix(ref_values, rng):
    """6x6 symmetric matrix with spectrum ref_values."""
    return symmetric_with_spectrum(ref_values, rng)


@pytest.fixture
def solve_matrix():
    """6x6 SPD system with integer solution columns; determinant 184041."""
    A = np.array([
        [91,  5, 29, 32, 40, 14],
        [ 5, 34, -1,  0,  2, -1],
        [29, -1, 12,  9, 21,  8],
        [32,  0,  9, 14,  9,  0],
        [40,  2, 21,  9, 51, 19],
        [14, -1,  8,  0, 19, 14],
    ], dtype=np.float64)
    b = np.array([
        [1561, 269, 188],
        [  69, -21,  70],
        [ 739, 108,  63],
        [ 324,  86,  59],
        [1624, 194, 107],
        [ 796,  69,  36],
    ], dtype=np.float64)
    x_ref = np.array([
        [ 1,  2, 1],
        [ 2, -1, 2],
        [ 4,  2, 3],
        [ 8, -1, 0],
        [16,  2, 0],
        [32, -1, 0],
    ], dtype=np.float64)
    return A, b, x_ref


@pytest.fixture
def random_symmetric(rng):
    """Factory for dense random symmetric matrices."""
    def _make(n):
        B = rng.standard_normal((n, n))
        return 0.5 * (B + B.T)
    return _make


@pytest.fixture
def make_symmetric(rng):
    """Factory: symmetric matrix with a prescribed spectrum."""
    def _make(eigenvalues):
        return symmetric_with_spectrum(eigenvalues, rng)
    return _make


@pytest.fixture
def make_orthogonal(rng):
    """Factory: random orthogonal matrix of a given size."""
    def _make(n):
        return random_orthogonal(n, rng)
    return _make
