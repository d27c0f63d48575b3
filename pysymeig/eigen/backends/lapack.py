"""
LAPACK reference backend.

Delegates to scipy.linalg.eigh (LAPACK syevr) and reorders the result to
match the library's conventions: descending eigenvalues, unit eigenvectors
as columns. Used to cross-check the QL backend and as a drop-in alternative
for large matrices.
"""

from typing import Any
import numpy as np
from scipy import linalg

from pysymeig.core.result import Result
from pysymeig.core.exceptions import ConvergenceError
from pysymeig.core.compute.timing import timed
from pysymeig.eigen.design import SymmetricDesign
from pysymeig.eigen.solution import EigenParams
from pysymeig.eigen._transform import sort_descending


class LAPACKBackend:
    """
    CPU backend using LAPACK through SciPy.

    Split tolerances do not apply: LAPACK picks its own deflation criteria.
    """

    @property
    def name(self) -> str:
        return 'cpu_lapack'

    def solve(self, design: SymmetricDesign) -> Result[EigenParams]:
        """
        Decompose the design matrix with scipy.linalg.eigh.

        Raises:
            ConvergenceError: If LAPACK reports that the iteration failed
        """
        with timed() as timer:
            with timer.section('eigh'):
                if design.n:
                    try:
                        values, vectors = linalg.eigh(design.A)
                    except linalg.LinAlgError as e:
                        raise ConvergenceError(
                            f"LAPACK eigh failed: {e}",
                            iterations=0,
                            reason='lapack',
                        ) from e
                else:
                    values, vectors = np.zeros(0), np.zeros((0, 0))

            with timer.section('sort'):
                # eigh returns ascending order; reversing first keeps ties stable
                values, vectors = sort_descending(values[::-1], vectors[:, ::-1])
                params = EigenParams.from_eigenpairs(values, vectors)

        info: dict[str, Any] = {
            'method': 'lapack_eigh',
            'n': design.n,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=design.warnings + params.conditioning_warnings(),
        )
