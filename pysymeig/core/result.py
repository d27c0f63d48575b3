"""
Generic result container for pysymeig computations.

The Result class is the envelope every backend returns. Backends agree on
the envelope and differ only in the payload and the metadata they record.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (sweeps, reflections, tolerances)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) so a result can be shared read-only
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for a decomposition.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (eigenvalues, eigenvectors, ...)
        info: Structured metadata (method, sweeps, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=EigenParams(...),
        ...     info={'method': 'householder_ql', 'sweeps': 9},
        ...     timing={'total_seconds': 0.001, 'ql_iteration': 0.0004},
        ...     backend_name='cpu_ql'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
