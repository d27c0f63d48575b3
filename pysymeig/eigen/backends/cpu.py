"""
CPU backend: Householder tridiagonalization + implicit QL.

This is the library's own eigensolver. It runs in three timed phases:

    1. tridiagonalize:  A -> (d, e, reflections), T = Q' A Q
    2. ql_iteration:    T -> (lambda, Z), T = Z diag(lambda) Z'
    3. back_transform:  V = Q Z, eigenpairs sorted by descending lambda
"""

from dataclasses import replace
from typing import Any

from pysymeig.core.result import Result
from pysymeig.core.compute.timing import Timer
from pysymeig.eigen.design import SymmetricDesign, DecompositionConfig
from pysymeig.eigen.solution import EigenParams
from pysymeig.eigen._tridiagonal import tridiagonalize
from pysymeig.eigen._ql import tridiagonal_eigen
from pysymeig.eigen._transform import assemble_eigenpairs


class CPUQLBackend:
    """
    CPU backend using Householder reduction and implicit-shift QL.

    Backends are stateless: the convergence configuration is fixed at
    construction and each solve() works on its own copies of the data.
    """

    def __init__(self, config: DecompositionConfig | None = None):
        self._config = (config or DecompositionConfig())

    @property
    def name(self) -> str:
        return 'cpu_ql'

    @property
    def config(self) -> DecompositionConfig:
        return self._config

    def solve(self, design: SymmetricDesign) -> Result[EigenParams]:
        """
        Decompose the design matrix.

        Args:
            design: Validated symmetric design

        Returns:
            Result containing EigenParams

        Raises:
            ConvergenceError: If the QL iteration exceeds its sweep cap
        """
        # Vectors are always accumulated here: EigenParams needs V
        config = self._config
        if not config.compute_vectors:
            config = replace(config, compute_vectors=True)

        timer = Timer()
        timer.start()

        with timer.section('tridiagonalize'):
            form = tridiagonalize(design.A)

        with timer.section('ql_iteration'):
            tridiagonal = tridiagonal_eigen(form.diagonal, form.off_diagonal, config)

        with timer.section('back_transform'):
            values, vectors = assemble_eigenpairs(
                form, tridiagonal.eigenvalues, tridiagonal.eigenvectors
            )
            params = EigenParams.from_eigenpairs(values, vectors)

        timer.stop()

        info: dict[str, Any] = {
            'method': 'householder_ql',
            'n': design.n,
            'sweeps': tridiagonal.sweeps,
            'n_blocks': tridiagonal.n_blocks,
            'n_reflections': len(form.reflections),
            **config.as_info(),
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=design.warnings + params.conditioning_warnings(),
        )
