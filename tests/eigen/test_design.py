"""
Tests for SymmetricDesign and DecompositionConfig.

Validates:
    - Config validation, copy-with methods, immutability
    - Triangle modes: full (symmetry checked), upper, lower
    - Symmetrization warning for tolerated asymmetry
    - Stored matrix is a private read-only copy
"""

import warnings
from dataclasses import FrozenInstanceError

import numpy as np
import pytest

from pysymeig.core.compute.precision import EPSILON_64
from pysymeig.core.exceptions import DimensionError, ValidationError
from pysymeig.eigen.design import DecompositionConfig, SymmetricDesign


# ═══════════════════════════════════════════════════════════════════════
# DecompositionConfig
# ═══════════════════════════════════════════════════════════════════════


class TestDecompositionConfig:

    def test_defaults(self):
        config = DecompositionConfig()
        assert config.relative_split_tolerance == EPSILON_64
        assert config.absolute_split_tolerance == 0.0
        assert config.max_sweeps == 30
        assert config.compute_vectors is True

    @pytest.mark.parametrize("value", [-1e-10, float('nan'), float('inf')])
    def test_invalid_relative_tolerance(self, value):
        with pytest.raises(ValidationError, match="relative_split_tolerance"):
            DecompositionConfig(relative_split_tolerance=value)

    @pytest.mark.parametrize("value", ["1e-13", None, True])
    def test_non_numeric_absolute_tolerance(self, value):
        with pytest.raises(ValidationError, match="absolute_split_tolerance"):
            DecompositionConfig(absolute_split_tolerance=value)

    @pytest.mark.parametrize("value", [0, -5, 2.5, True])
    def test_invalid_max_sweeps(self, value):
        with pytest.raises(ValidationError, match="max_sweeps"):
            DecompositionConfig(max_sweeps=value)

    def test_zero_tolerances_allowed(self):
        config = DecompositionConfig(
            relative_split_tolerance=0.0, absolute_split_tolerance=0.0
        )
        assert config.split_threshold(1.0, 1.0) == 0.0

    def test_with_methods_copy(self):
        config = DecompositionConfig()
        relaxed = config.with_absolute_split_tolerance(1e-13)
        assert relaxed.absolute_split_tolerance == 1e-13
        assert config.absolute_split_tolerance == 0.0
        tighter = config.with_relative_split_tolerance(1e-20)
        assert tighter.relative_split_tolerance == 1e-20
        assert tighter.max_sweeps == config.max_sweeps

    def test_with_methods_validate(self):
        with pytest.raises(ValidationError):
            DecompositionConfig().with_relative_split_tolerance(-1.0)

    def test_frozen(self):
        config = DecompositionConfig()
        with pytest.raises(FrozenInstanceError):
            config.max_sweeps = 100

    def test_split_threshold(self):
        config = DecompositionConfig(
            relative_split_tolerance=1e-3, absolute_split_tolerance=1e-2
        )
        assert config.split_threshold(1.0, -2.0) == pytest.approx(1e-2)
        assert config.split_threshold(10.0, -20.0) == pytest.approx(3e-2)

    def test_split_threshold_near_overflow(self):
        threshold = DecompositionConfig().split_threshold(1.5e308, -1.5e308)
        assert np.isfinite(threshold)
        assert threshold == pytest.approx(2.0 * EPSILON_64 * 1.5e308)

    def test_default_threshold_purely_relative(self):
        config = DecompositionConfig()
        assert config.split_threshold(0.0, 0.0) == 0.0
        assert config.split_threshold(1e-310, 1e-310) < 1e-310

    def test_as_info(self):
        info = DecompositionConfig(max_sweeps=12).as_info()
        assert info == {
            'relative_split_tolerance': EPSILON_64,
            'absolute_split_tolerance': 0.0,
            'max_sweeps': 12,
        }


# ═══════════════════════════════════════════════════════════════════════
# SymmetricDesign: full matrix
# ═══════════════════════════════════════════════════════════════════════


class TestFullTriangle:

    def test_exact_symmetric_no_warning(self):
        A = np.array([[2.0, 1.0], [1.0, 3.0]])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            design = SymmetricDesign.from_array(A)
        assert design.n == 2
        assert not design.symmetrized
        assert design.warnings == ()
        np.testing.assert_array_equal(design.A, A)

    def test_tolerated_asymmetry_symmetrized(self):
        A = np.array([[2.0, 1.0], [1.0 + 1e-12, 3.0]])
        with pytest.warns(UserWarning, match="symmetrized"):
            design = SymmetricDesign.from_array(A)
        assert design.symmetrized
        assert design.asymmetry > 0.0
        assert len(design.warnings) == 1
        np.testing.assert_array_equal(design.A, design.A.T)

    def test_asymmetric_rejected(self):
        with pytest.raises(ValidationError, match="not symmetric"):
            SymmetricDesign.from_array([[1.0, 2.0], [3.0, 4.0]])

    def test_custom_symmetry_rtol(self):
        A = [[1.0, 2.0], [2.1, 4.0]]
        with pytest.warns(UserWarning):
            design = SymmetricDesign.from_array(A, symmetry_rtol=0.1)
        assert design.A[0, 1] == pytest.approx(2.05)

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="non-finite"):
            SymmetricDesign.from_array([[1.0, np.nan], [np.nan, 1.0]])

    def test_not_square(self):
        with pytest.raises(DimensionError):
            SymmetricDesign.from_array(np.zeros((2, 3)))

    def test_not_2d(self):
        with pytest.raises(DimensionError):
            SymmetricDesign.from_array(np.zeros(4))
        with pytest.raises(DimensionError):
            SymmetricDesign.from_array(np.zeros((2, 2, 2)))

    def test_non_numeric(self):
        with pytest.raises(ValidationError):
            SymmetricDesign.from_array([["a", "b"], ["b", "a"]])

    def test_name_in_messages(self):
        with pytest.raises(ValidationError, match="covariance"):
            SymmetricDesign.from_array([[1.0, 2.0], [3.0, 4.0]], name="covariance")

    def test_unknown_triangle(self):
        with pytest.raises(ValueError, match="Unknown triangle"):
            SymmetricDesign.from_array(np.eye(2), triangle='diagonal')

    def test_empty_matrix(self):
        design = SymmetricDesign.from_array(np.zeros((0, 0)))
        assert design.n == 0
        assert design.norm == 0.0

    def test_integer_input(self):
        design = SymmetricDesign.from_array([[2, 1], [1, 2]])
        assert design.A.dtype == np.float64


# ═══════════════════════════════════════════════════════════════════════
# SymmetricDesign: upper / lower
# ═══════════════════════════════════════════════════════════════════════


class TestHalfTriangles:

    def test_upper_ignores_lower(self):
        A = np.array([
            [1.0, 2.0, 3.0],
            [np.nan, 4.0, 5.0],
            [np.nan, np.nan, 6.0],
        ])
        design = SymmetricDesign.from_array(A, triangle='upper')
        expected = np.array([[1.0, 2.0, 3.0], [2.0, 4.0, 5.0], [3.0, 5.0, 6.0]])
        np.testing.assert_array_equal(design.A, expected)
        assert design.triangle == 'upper'

    def test_lower_ignores_upper(self):
        A = np.array([
            [1.0, 99.0, 99.0],
            [2.0, 4.0, 99.0],
            [3.0, 5.0, 6.0],
        ])
        design = SymmetricDesign.from_array(A, triangle='lower')
        expected = np.array([[1.0, 2.0, 3.0], [2.0, 4.0, 5.0], [3.0, 5.0, 6.0]])
        np.testing.assert_array_equal(design.A, expected)

    def test_nan_in_read_triangle_rejected(self):
        A = np.array([[1.0, np.nan], [0.0, 1.0]])
        with pytest.raises(ValidationError):
            SymmetricDesign.from_array(A, triangle='upper')

    def test_half_triangle_never_warns(self):
        A = np.array([[1.0, 2.0], [7.0, 1.0]])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            design = SymmetricDesign.from_array(A, triangle='upper')
        assert not design.symmetrized


# ═══════════════════════════════════════════════════════════════════════
# Storage
# ═══════════════════════════════════════════════════════════════════════


class TestStorage:

    def test_read_only(self):
        design = SymmetricDesign.from_array(np.eye(3))
        with pytest.raises(ValueError):
            design.A[0, 0] = 5.0

    def test_private_copy(self):
        A = np.eye(3)
        design = SymmetricDesign.from_array(A)
        A[0, 0] = 42.0
        assert design.A[0, 0] == 1.0
        assert A.flags.writeable

    def test_norm(self):
        design = SymmetricDesign.from_array([[3.0, 0.0], [0.0, 4.0]])
        assert design.norm == pytest.approx(5.0)

    def test_matches(self):
        a = SymmetricDesign.from_array(np.eye(2))
        b = SymmetricDesign.from_array(np.eye(2))
        c = SymmetricDesign.from_array(2 * np.eye(2))
        d = SymmetricDesign.from_array(np.eye(3))
        assert a.matches(b)
        assert not a.matches(c)
        assert not a.matches(d)

    def test_frozen(self):
        design = SymmetricDesign.from_array(np.eye(2))
        with pytest.raises(FrozenInstanceError):
            design._n = 3
