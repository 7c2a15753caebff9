"""
Regression design.

RegressionDesign holds a validated feature matrix X (n x p) and response
y (n x 1) as kernel Matrices. It is the single validation boundary for
both solvers: backends trust what they receive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pytabular.core.exceptions import DimensionError
from pytabular.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_consistent_length,
    check_finite,
    check_min_samples,
)
from pytabular.core.compute.linalg import Matrix


@dataclass(frozen=True)
class RegressionDesign:
    """
    Feature matrix and response for a regression fit.

    Construction:
        RegressionDesign.build(X, y)

    X may be a Matrix or any 2D array-like (a flat sequence is read as a
    single feature column). y may be an n x 1 Matrix or a flat array-like.
    """
    _X: Matrix
    _y: Matrix
    _n: int
    _p: int

    @classmethod
    def build(cls, X: Matrix | ArrayLike, y: Matrix | ArrayLike) -> RegressionDesign:
        """
        Validate inputs and build the design.

        Raises:
            ValidationError: For non-numeric or non-finite input, or no rows
            DimensionError: For mismatched row counts or a y with more than
                one column
        """
        X_arr = _as_array(X, 'X')
        y_arr = _as_array(y, 'y')

        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)
        if y_arr.ndim == 2:
            if y_arr.shape[1] != 1:
                raise DimensionError(
                    f"y: expected a single response column, got shape {y_arr.shape}"
                )
            y_arr = y_arr.ravel()

        check_2d(X_arr, 'X')
        check_1d(y_arr, 'y')
        check_finite(X_arr, 'X')
        check_finite(y_arr, 'y')
        check_consistent_length(X_arr, y_arr, names=('X', 'y'))
        check_min_samples(X_arr, 1, 'X')

        n, p = X_arr.shape
        return cls(_X=Matrix(X_arr), _y=Matrix.column_vector(y_arr), _n=n, _p=p)

    # === Properties ===

    @property
    def X(self) -> Matrix:
        """Feature matrix (n x p), without a bias column."""
        return self._X

    @property
    def y(self) -> Matrix:
        """Response as an n x 1 matrix."""
        return self._y

    @property
    def y_values(self) -> NDArray[np.floating[Any]]:
        """Response as a flat array (copy)."""
        return self._y.to_numpy().ravel()

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of features."""
        return self._p

    def with_bias_column(self) -> Matrix:
        """X with a trailing column of ones (n x (p + 1))."""
        return Matrix(np.column_stack([self._X.to_numpy(), np.ones(self._n)]))


def _as_array(value: Matrix | ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    if isinstance(value, Matrix):
        return value.to_numpy()
    return check_array(value, name)
