"""
Tests for the linear algebra kernel.

Validates:
    - Matrix / RowVector construction, immutability and shape errors
    - multiply / transpose / identity / add_to_diagonal
    - Gauss-Jordan inverse: known inverse, pivoting, singular detection,
      inverse(inverse(A)) ≈ A and A·inverse(A) ≈ I
"""

import numpy as np
import pytest

from pytabular.core.exceptions import DimensionError, SingularMatrixError
from pytabular.core.compute.linalg import (
    Matrix,
    RowVector,
    add_to_diagonal,
    identity,
    inverse,
    multiply,
    transpose,
)


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestMatrixConstruction:

    def test_from_rows(self):
        m = Matrix([[1, 2, 3], [4, 5, 6]])
        assert m.shape == (2, 3)
        assert m[1, 2] == 6.0

    def test_ragged_rows_rejected(self):
        with pytest.raises(DimensionError, match="different lengths"):
            Matrix([[1.0, 2.0], [3.0]])

    def test_flat_input_rejected(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            Matrix(np.array([1.0, 2.0]))

    def test_empty(self):
        assert Matrix([]).shape == (0, 0)

    def test_storage_is_read_only(self):
        source = np.eye(2)
        m = Matrix(source)
        source[0, 0] = 99.0
        assert m[0, 0] == 1.0
        copy = m.to_numpy()
        copy[0, 0] = 5.0
        assert m[0, 0] == 1.0

    def test_from_columns(self):
        m = Matrix.from_columns([[1.0, 2.0], [3.0, 4.0]])
        assert m == Matrix([[1.0, 3.0], [2.0, 4.0]])

    def test_from_columns_length_mismatch(self):
        with pytest.raises(DimensionError):
            Matrix.from_columns([[1.0, 2.0], [3.0]])

    def test_column_vector(self):
        assert Matrix.column_vector([1.0, 2.0]).shape == (2, 1)

    def test_row_and_column_access(self):
        m = Matrix([[1.0, 2.0], [3.0, 4.0]])
        assert m.row(1) == RowVector([3.0, 4.0])
        assert m.column(0).tolist() == [1.0, 3.0]

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Matrix([[1.0]]))


class TestRowVector:

    def test_arithmetic(self):
        a = RowVector([1.0, 2.0, 2.0])
        b = RowVector([1.0, 0.0, 1.0])
        assert a.add(b) == RowVector([2.0, 2.0, 3.0])
        assert a.subtract(b) == RowVector([0.0, 2.0, 1.0])
        assert a.scale(2.0) == RowVector([2.0, 4.0, 4.0])
        assert a.dot(b) == 3.0
        assert a.norm() == 3.0

    def test_length_mismatch(self):
        with pytest.raises(DimensionError, match="dot"):
            RowVector([1.0]).dot(RowVector([1.0, 2.0]))

    def test_zeros(self):
        assert RowVector.zeros(3).tolist() == [0.0, 0.0, 0.0]


# ═══════════════════════════════════════════════════════════════════════
# Products and shapes
# ═══════════════════════════════════════════════════════════════════════


class TestAlgebra:

    def test_multiply(self):
        a = Matrix([[1.0, 2.0], [3.0, 4.0]])
        b = Matrix([[5.0], [6.0]])
        assert multiply(a, b) == Matrix([[17.0], [39.0]])
        assert (a @ b) == multiply(a, b)

    def test_multiply_dimension_mismatch(self):
        with pytest.raises(DimensionError, match="inner dimensions"):
            multiply(Matrix([[1.0, 2.0]]), Matrix([[1.0, 2.0]]))

    def test_transpose(self):
        m = Matrix([[1.0, 2.0, 3.0]])
        assert transpose(m) == Matrix([[1.0], [2.0], [3.0]])
        assert m.T.T == m

    def test_identity(self):
        assert identity(2) == Matrix([[1.0, 0.0], [0.0, 1.0]])

    def test_add_to_diagonal(self):
        m = Matrix([[1.0, 2.0], [3.0, 4.0]])
        assert add_to_diagonal(m, 0.5) == Matrix([[1.5, 2.0], [3.0, 4.5]])

    def test_add_to_diagonal_requires_square(self):
        with pytest.raises(DimensionError, match="square"):
            add_to_diagonal(Matrix([[1.0, 2.0]]), 1.0)


# ═══════════════════════════════════════════════════════════════════════
# Gauss-Jordan inverse
# ═══════════════════════════════════════════════════════════════════════


class TestInverse:

    def test_known_inverse(self):
        a = Matrix([[1.0, 3.0, 5.0], [2.0, 4.0, 6.0], [2.0, 3.0, 1.0]])
        expected = np.linalg.inv(a.to_numpy())
        np.testing.assert_allclose(inverse(a).to_numpy(), expected, rtol=1e-12, atol=1e-12)

    def test_requires_row_swap(self):
        a = Matrix([[0.0, 1.0], [1.0, 0.0]])
        assert inverse(a) == a

    def test_product_is_identity(self, rng):
        a = Matrix(rng.standard_normal((5, 5)) + 5 * np.eye(5))
        assert multiply(a, inverse(a)).allclose(identity(5), atol=1e-10)

    def test_double_inverse(self, rng):
        a = Matrix(rng.standard_normal((4, 4)) + 4 * np.eye(4))
        assert inverse(inverse(a)).allclose(a, atol=1e-10)

    def test_singular_raises(self):
        a = Matrix([[1.0, 2.0], [2.0, 4.0]])
        with pytest.raises(SingularMatrixError, match="entirely zero") as info:
            inverse(a, name="X'X")
        assert info.value.matrix_name == "X'X"
        assert info.value.pivot_column == 1

    def test_zero_column_raises_at_first_pivot(self):
        a = Matrix([[0.0, 1.0], [0.0, 2.0]])
        with pytest.raises(SingularMatrixError) as info:
            inverse(a)
        assert info.value.pivot_column == 0

    def test_non_square_rejected(self):
        with pytest.raises(DimensionError, match="square"):
            inverse(Matrix([[1.0, 2.0]]))

    def test_pivot_tolerance(self):
        a = Matrix([[1e-12, 0.0], [0.0, 1.0]])
        inverse(a)
        with pytest.raises(SingularMatrixError):
            inverse(a, pivot_tol=1e-10)

    def test_input_unchanged(self):
        a = Matrix([[2.0, 1.0], [1.0, 3.0]])
        before = a.to_numpy()
        inverse(a)
        np.testing.assert_array_equal(a.to_numpy(), before)
