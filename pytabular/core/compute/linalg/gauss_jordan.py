"""
Gauss-Jordan matrix inversion.

This is the only inversion routine in pytabular; both regression solvers
go through it.
"""

import logging

import numpy as np

from pytabular.core.exceptions import DimensionError, SingularMatrixError
from pytabular.core.compute.linalg.matrix import Matrix
from pytabular.core.compute.tolerances import PIVOT_TOL

logger = logging.getLogger(__name__)


def inverse(a: Matrix, pivot_tol: float = PIVOT_TOL, name: str = "matrix") -> Matrix:
    """
    Invert a square matrix by Gauss-Jordan elimination with row pivoting.

    For each pivot column the rows at and below the diagonal are scanned
    top-down for the first entry with |x| > pivot_tol. That row is swapped
    into pivot position (in both the working copy and the accumulating
    identity), scaled so the pivot is 1, and used to clear the pivot column
    from every other row.

    Args:
        a: Square matrix to invert
        pivot_tol: Largest magnitude still treated as a zero pivot
        name: Description of the matrix for error messages

    Returns:
        The inverse as a new Matrix

    Raises:
        DimensionError: If a is not square
        SingularMatrixError: If some column has no usable pivot
    """
    n, m = a.shape
    if n != m:
        raise DimensionError(f"inverse: {name} must be square, got shape {a.shape}")

    work = a.to_numpy()
    inv = np.eye(n)

    for col in range(n):
        candidates = np.flatnonzero(np.abs(work[col:, col]) > pivot_tol)
        if candidates.size == 0:
            raise SingularMatrixError(
                f"{name} is singular: column {col} is entirely zero after reduction",
                matrix_name=name,
                pivot_column=col,
            )
        pivot = col + int(candidates[0])
        if pivot != col:
            work[[col, pivot]] = work[[pivot, col]]
            inv[[col, pivot]] = inv[[pivot, col]]

        scale = work[col, col]
        work[col] /= scale
        inv[col] /= scale

        factors = work[:, col].copy()
        factors[col] = 0.0
        work -= np.outer(factors, work[col])
        inv -= np.outer(factors, inv[col])

    logger.debug("inverted %s of size %d", name, n)
    return Matrix(inv)
