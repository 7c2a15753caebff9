"""
Prediction error metrics.

All metrics take (predictions, labels) of equal length. Either argument may
be a flat array-like, an (n, 1) array or an n x 1 Matrix.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pytabular.core.exceptions import DimensionError, ValidationError
from pytabular.core.compute.linalg import Matrix
from pytabular.core.validation import check_array, check_consistent_length, check_finite


def _as_vector(values: Matrix | ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    arr = values.to_numpy() if isinstance(values, Matrix) else check_array(values, name)
    if arr.ndim == 2 and arr.shape[1] == 1:
        arr = arr.ravel()
    if arr.ndim != 1:
        raise DimensionError(f"{name}: expected a flat vector, got shape {arr.shape}")
    check_finite(arr, name)
    return arr


def _pair(
    predictions: Matrix | ArrayLike, labels: Matrix | ArrayLike
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    pred = _as_vector(predictions, 'predictions')
    true = _as_vector(labels, 'labels')
    check_consistent_length(pred, true, names=('predictions', 'labels'))
    if true.shape[0] == 0:
        raise ValidationError("labels: at least one observation is required")
    return pred, true


def mse(predictions: Matrix | ArrayLike, labels: Matrix | ArrayLike) -> float:
    """Mean squared error, mean((label - prediction)²)."""
    pred, true = _pair(predictions, labels)
    return float(np.mean((true - pred) ** 2))


def rmse(predictions: Matrix | ArrayLike, labels: Matrix | ArrayLike) -> float:
    """Root mean squared error, sqrt(mse)."""
    return float(np.sqrt(mse(predictions, labels)))


def r_squared(predictions: Matrix | ArrayLike, labels: Matrix | ArrayLike) -> float:
    """
    Coefficient of determination, 1 - RSS / TSS.

    Constant labels give 1.0 for a perfect fit and 0.0 otherwise.
    """
    pred, true = _pair(predictions, labels)
    rss = float(np.sum((true - pred) ** 2))
    tss = float(np.sum((true - np.mean(true)) ** 2))
    if tss == 0:
        return 1.0 if rss == 0 else 0.0
    return 1.0 - rss / tss
