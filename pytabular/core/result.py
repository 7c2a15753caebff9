"""
Generic result container for pytabular solvers.

Every regression backend returns its fitted parameters wrapped in the same
envelope, so timing, convergence metadata and non-fatal warnings are read
the same way regardless of the model.

Design decisions:
    - Generic over parameter payload P
    - info dict for flexible metadata (converged, iterations, ridge)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True)
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for a solver run.

    Attributes:
        params: Model-specific parameters (coefficients, rate/scale, ...)
        info: Structured metadata (method, convergence, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> # Direct method (no convergence notion)
        >>> Result(
        ...     params=LinearParams(coefficients=w),
        ...     info={'method': 'normal_equation', 'ridge': 0.0},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_normal_equation'
        ... )

        >>> # Iterative method
        >>> Result(
        ...     params=ExponentialParams(k=0.5, c=3.0),
        ...     info={'method': 'gauss_newton', 'converged': True, 'iterations': 7},
        ...     timing={'total_seconds': 0.002, 'iterations': 0.0018},
        ...     backend_name='cpu_gauss_newton'
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

    @property
    def converged(self) -> bool:
        """Convergence flag from info; direct methods always count as converged."""
        return bool(self.info.get('converged', True))
