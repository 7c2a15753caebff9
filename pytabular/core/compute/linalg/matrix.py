"""
Dense immutable matrix and its basic algebra.

Matrix is a thin, read-only wrapper around a 2D float64 NumPy array. All
solvers exchange data through it; operations never modify their inputs.
"""

from typing import Any, Iterable, Iterator, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pytabular.core.exceptions import DimensionError
from pytabular.core.compute.linalg.vector import RowVector


class Matrix:
    """
    Rectangular matrix of float64 values.

    Construction accepts a sequence of equal-length rows or a 2D array.
    Ragged rows raise DimensionError.

    Equality (==) is exact elementwise; use allclose() for numerical
    comparison.
    """

    __slots__ = ('_data',)

    def __init__(self, rows: Sequence[Sequence[float]] | NDArray[Any]):
        if isinstance(rows, Matrix):
            data = rows._data.copy()
        else:
            if not isinstance(rows, np.ndarray):
                rows = list(rows)
                if len(rows) == 0:
                    rows = np.empty((0, 0))
                else:
                    lengths = {len(row) for row in rows}
                    if len(lengths) > 1:
                        raise DimensionError(
                            f"Matrix: rows have different lengths {sorted(lengths)}"
                        )
            try:
                data = np.array(rows, dtype=np.float64)
            except (ValueError, TypeError) as e:
                raise DimensionError(f"Matrix: cannot build a 2D array: {e}") from e
        if data.ndim != 2:
            raise DimensionError(
                f"Matrix: expected 2D input, got {data.ndim}D with shape {data.shape}"
            )
        data.setflags(write=False)
        self._data = data

    @classmethod
    def from_columns(cls, columns: Sequence[Iterable[float]], n_rows: int | None = None) -> 'Matrix':
        """
        Build a matrix whose j-th column is columns[j].

        n_rows fixes the row count when there are no columns.
        """
        cols = [np.asarray(list(c), dtype=np.float64) for c in columns]
        if not cols:
            return cls(np.empty((n_rows or 0, 0)))
        lengths = {c.shape[0] for c in cols}
        if len(lengths) > 1:
            raise DimensionError(
                f"Matrix.from_columns: columns have different lengths {sorted(lengths)}"
            )
        return cls(np.column_stack(cols))

    @classmethod
    def column_vector(cls, values: ArrayLike) -> 'Matrix':
        """Build an n x 1 matrix from a flat sequence."""
        arr = np.asarray(values, dtype=np.float64)
        if arr.ndim != 1:
            raise DimensionError(
                f"Matrix.column_vector: expected flat input, got shape {arr.shape}"
            )
        return cls(arr.reshape(-1, 1))

    @property
    def shape(self) -> tuple[int, int]:
        return (self._data.shape[0], self._data.shape[1])

    @property
    def n_rows(self) -> int:
        return self._data.shape[0]

    @property
    def n_cols(self) -> int:
        return self._data.shape[1]

    @property
    def T(self) -> 'Matrix':
        return transpose(self)

    def __len__(self) -> int:
        return self.n_rows

    def __getitem__(self, index: tuple[int, int]) -> float:
        i, j = index
        return float(self._data[i, j])

    def __iter__(self) -> Iterator[RowVector]:
        return (RowVector(row) for row in self._data)

    def __matmul__(self, other: 'Matrix') -> 'Matrix':
        if not isinstance(other, Matrix):
            return NotImplemented
        return multiply(self, other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.all(self._data == other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()})"

    def row(self, i: int) -> RowVector:
        return RowVector(self._data[i])

    def column(self, j: int) -> RowVector:
        return RowVector(self._data[:, j])

    def allclose(self, other: 'Matrix', rtol: float = 1e-9, atol: float = 1e-12) -> bool:
        """Elementwise comparison within tolerance; False on shape mismatch."""
        return self.shape == other.shape and bool(
            np.allclose(self._data, other._data, rtol=rtol, atol=atol)
        )

    def to_numpy(self) -> NDArray[np.float64]:
        """Return a writable copy of the values."""
        return self._data.copy()

    def tolist(self) -> list[list[float]]:
        return self._data.tolist()


def multiply(a: Matrix, b: Matrix) -> Matrix:
    """
    Dense matrix product a @ b.

    Raises:
        DimensionError: If a.n_cols != b.n_rows
    """
    if a.n_cols != b.n_rows:
        raise DimensionError(
            f"multiply: inner dimensions differ, {a.shape} x {b.shape}"
        )
    return Matrix(a._data @ b._data)


def transpose(a: Matrix) -> Matrix:
    return Matrix(a._data.T)


def identity(n: int) -> Matrix:
    """n x n identity matrix."""
    if n < 0:
        raise DimensionError(f"identity: size must be >= 0, got {n}")
    return Matrix(np.eye(n))


def add_to_diagonal(a: Matrix, value: float) -> Matrix:
    """
    Return a + value * I.

    Used to add the ridge penalty to a normal matrix.

    Raises:
        DimensionError: If a is not square
    """
    if a.n_rows != a.n_cols:
        raise DimensionError(f"add_to_diagonal: matrix must be square, got {a.shape}")
    data = a.to_numpy()
    data[np.diag_indices_from(data)] += value
    return Matrix(data)
