"""
Shared compute infrastructure for pysymeig.

IMPORTANT: This is NOT where backends live. Those go in eigen/backends/.
This module contains shared NUMERIC infrastructure.

Submodules:
    precision: Machine epsilon
    tolerances: Tolerance tiers scaled by dimension and norm
    timing: Execution timing utilities
"""

from pysymeig.core.compute.precision import EPSILON_64
from pysymeig.core.compute.timing import Timer, timed
from pysymeig.core.compute.tolerances import ToleranceTier, scaled_tolerance

__all__ = [
    # Precision
    "EPSILON_64",
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "ToleranceTier",
    "scaled_tolerance",
]
