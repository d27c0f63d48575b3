"""
Numerical precision constants.

Machine epsilon is the constant the split criterion and the
non-singularity test are built from.
"""

import numpy as np


# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16
