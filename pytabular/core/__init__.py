"""
Core infrastructure for pytabular.

Shared abstractions used by the frame, pipeline, sampling and regression
subpackages.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, linear algebra kernel
"""

from pytabular.core.protocols import Backend
from pytabular.core.result import Result
from pytabular.core.exceptions import (
    PyTabularError,
    ValidationError,
    DimensionError,
    SchemaError,
    ColumnTypeError,
    NullValueError,
    ParameterError,
    LookupMissError,
    ColumnNotFoundError,
    RowNotFoundError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyTabularError",
    "ValidationError",
    "DimensionError",
    "SchemaError",
    "ColumnTypeError",
    "NullValueError",
    "ParameterError",
    "LookupMissError",
    "ColumnNotFoundError",
    "RowNotFoundError",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
]
