"""
Core protocols for pytabular.

Backends are described structurally (Protocol) rather than nominally so a
solver can be swapped for any object with a ``name`` and a ``solve``.
"""

from typing import Protocol, TypeVar, runtime_checkable

from pytabular.core.result import Result

D = TypeVar('D')  # Design type
P = TypeVar('P')  # Parameter payload type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for solver backends.

    A backend takes a validated design and produces a parameter payload
    wrapped in a Result. Backends are stateless apart from the numerical
    settings given at construction time.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_normal_equation', 'cpu_gauss_newton'
        """
        ...

    def solve(self, design: D) -> Result[P]:
        """
        Execute the fit.

        Raises:
            ConvergenceError: If the iteration produces unusable parameters
            NumericalError: If a required inverse does not exist
            ValidationError: If design is invalid for this backend
        """
        ...
