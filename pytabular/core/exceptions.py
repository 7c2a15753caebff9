"""
Exception hierarchy for pytabular.

All exceptions inherit from PyTabularError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyTabularError(Exception):
    """Base exception for all pytabular errors."""
    pass


class ValidationError(PyTabularError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array or matrix dimensions are incorrect or inconsistent.

    Raised when shapes don't match expected dimensions, when rows of a
    matrix have different lengths, or when multiple inputs disagree on
    their number of observations.
    """
    pass


class SchemaError(ValidationError):
    """
    A row or column insert violates the frame schema.

    Raised for length mismatches, missing or extra row keys, duplicate
    column names and use of the reserved identifier column name.
    """
    pass


class ColumnTypeError(ValidationError):
    """
    Operation is not defined for the column's type tag.

    Attributes:
        column: Name of the offending column, if known
        dtype: Type tag of the offending column or value, if known
    """

    def __init__(
        self,
        message: str,
        column: str | None = None,
        dtype: object | None = None,
    ):
        super().__init__(message)
        self.column = column
        self.dtype = dtype


class NullValueError(ValidationError):
    """
    A null cell was found where a dense numeric value is required.

    Attributes:
        column: Name of the column holding the null cell
        row: Identifier of the first null row found
    """

    def __init__(self, message: str, column: str | None = None, row: int | None = None):
        super().__init__(message)
        self.column = column
        self.row = row


class ParameterError(ValidationError):
    """
    A configuration parameter is outside its admissible range.

    Attributes:
        parameter: Name of the offending parameter
        value: The rejected value
    """

    def __init__(self, message: str, parameter: str | None = None, value: object = None):
        super().__init__(message)
        self.parameter = parameter
        self.value = value


class LookupMissError(PyTabularError, LookupError):
    """A column or row lookup referenced something that does not exist."""
    pass


class ColumnNotFoundError(LookupMissError, KeyError):
    """
    Column name is not present in the frame.

    Attributes:
        column: The missing column name
    """

    def __init__(self, column: str):
        super().__init__(f"column {column!r} does not exist")
        self.column = column

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class RowNotFoundError(LookupMissError, IndexError):
    """
    Row identifier is outside the frame.

    Attributes:
        row: The missing row identifier
        n_rows: Number of rows in the frame
    """

    def __init__(self, row: int, n_rows: int):
        super().__init__(f"row {row} does not exist (frame has {n_rows} rows)")
        self.row = row
        self.n_rows = n_rows


class NumericalError(PyTabularError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular.

    Raised by Gauss-Jordan inversion when a column contains no usable
    pivot after reduction.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_column: Column at which no non-zero pivot was found
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_column: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_column = pivot_column


class ConvergenceError(PyTabularError):
    """
    Iterative algorithm failed to converge.

    Raised when an iterative method (Gauss-Newton) produces unusable
    parameters, e.g. when the iterates overflow to non-finite values.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final parameter change
        reason: Why convergence failed (e.g., 'max_iterations', 'diverging')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
