"""
Linear algebra kernel for pytabular.

Dense, immutable vectors and matrices backed by NumPy float64 arrays,
plus the operations the solvers need: multiplication, transposition,
identity construction, diagonal shifts and Gauss-Jordan inversion.

Submodules:
    vector: RowVector
    matrix: Matrix, multiply, transpose, identity, add_to_diagonal
    gauss_jordan: inverse
"""

from pytabular.core.compute.linalg.vector import RowVector
from pytabular.core.compute.linalg.matrix import (
    Matrix,
    add_to_diagonal,
    identity,
    multiply,
    transpose,
)
from pytabular.core.compute.linalg.gauss_jordan import inverse

__all__ = [
    "RowVector",
    "Matrix",
    "add_to_diagonal",
    "identity",
    "inverse",
    "multiply",
    "transpose",
]
