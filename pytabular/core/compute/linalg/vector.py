"""
Immutable 1-D vector of floats.

Rows and columns pulled out of a Matrix are handed out as RowVectors so
callers cannot write through to the matrix storage.
"""

from typing import Any, Iterable, Iterator

import numpy as np
from numpy.typing import NDArray

from pytabular.core.exceptions import DimensionError


class RowVector:
    """
    Fixed-length sequence of float64 values.

    The underlying array is read-only; every operation returns a new
    vector.
    """

    __slots__ = ('_data',)

    def __init__(self, values: Iterable[float] | NDArray[Any]):
        data = np.array(values, dtype=np.float64)
        if data.ndim != 1:
            raise DimensionError(
                f"RowVector: expected 1D input, got shape {data.shape}"
            )
        data.setflags(write=False)
        self._data = data

    @classmethod
    def zeros(cls, n: int) -> 'RowVector':
        return cls(np.zeros(n))

    def __len__(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RowVector):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(np.all(self._data == other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"RowVector({self._data.tolist()})"

    def _check_same_length(self, other: 'RowVector', op: str) -> None:
        if len(self) != len(other):
            raise DimensionError(
                f"{op}: vector lengths differ ({len(self)} vs {len(other)})"
            )

    def add(self, other: 'RowVector') -> 'RowVector':
        self._check_same_length(other, "add")
        return RowVector(self._data + other._data)

    def subtract(self, other: 'RowVector') -> 'RowVector':
        self._check_same_length(other, "subtract")
        return RowVector(self._data - other._data)

    def scale(self, factor: float) -> 'RowVector':
        return RowVector(self._data * factor)

    def dot(self, other: 'RowVector') -> float:
        self._check_same_length(other, "dot")
        return float(np.dot(self._data, other._data))

    def norm(self) -> float:
        """Euclidean length."""
        return float(np.linalg.norm(self._data))

    def to_numpy(self) -> NDArray[np.float64]:
        """Return a writable copy of the values."""
        return self._data.copy()

    def tolist(self) -> list[float]:
        return self._data.tolist()
