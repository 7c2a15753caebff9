"""
Regression solution types.

Contains the parameter payloads and user-facing solution wrappers for
both models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pytabular.core.exceptions import DimensionError
from pytabular.core.result import Result
from pytabular.core.validation import check_array, check_finite
from pytabular.core.compute.linalg import Matrix

if TYPE_CHECKING:
    from pytabular.regression.design import RegressionDesign


def _features(X: Matrix | ArrayLike, p: int) -> NDArray[np.floating[Any]]:
    """Prediction input as an (m x p) array."""
    arr = X.to_numpy() if isinstance(X, Matrix) else check_array(X, 'X')
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1) if p == 1 else arr.reshape(1, -1)
    if arr.ndim != 2 or arr.shape[1] != p:
        raise DimensionError(
            f"X: model was fitted on {p} feature(s), got input of shape {arr.shape}"
        )
    check_finite(arr, 'X')
    return arr


# =====================================================================
# Ridge regression
# =====================================================================

@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for ridge regression.

    coefficients holds one weight per feature followed by the bias.
    """
    coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    rss: float
    tss: float
    ridge: float


@dataclass
class LinearSolution:
    """
    User-facing ridge regression results.

    Wraps the backend Result and provides accessors and prediction.
    """
    _result: Result[LinearParams]
    _design: 'RegressionDesign'

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """Weights followed by the bias (length p + 1)."""
        return self._result.params.coefficients

    @property
    def weights(self) -> NDArray[np.floating[Any]]:
        return self._result.params.coefficients[:-1]

    @property
    def bias(self) -> float:
        return float(self._result.params.coefficients[-1])

    @property
    def ridge(self) -> float:
        return self._result.params.ridge

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def tss(self) -> float:
        return self._result.params.tss

    @property
    def r_squared(self) -> float:
        if self.tss == 0:
            return 1.0 if self.rss == 0 else 0.0
        return 1.0 - (self.rss / self.tss)

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def predict(self, X: Matrix | ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Predictions sum(weight * feature) + bias, one per row of X.

        Raises:
            DimensionError: If X does not have p feature columns
        """
        arr = _features(X, self._design.p)
        return arr @ self.weights + self.bias

    def summary(self) -> str:
        """Generate a plain-text summary."""
        lines = [
            "Ridge Regression Results",
            "=" * 60,
            f"Observations: {self._design.n}",
            f"Features: {self._design.p}",
            f"Ridge: {self.ridge:g}",
            f"R-squared: {self.r_squared:.6f}",
            f"RSS: {self.rss:.6f}",
            "",
            "Coefficients:",
            "-" * 60,
        ]
        for i, w in enumerate(self.weights):
            lines.append(f"  w[{i}]: {w:14.6f}")
        lines.append(f"  bias: {self.bias:14.6f}")
        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self._design.n}, p={self._design.p}, "
            f"ridge={self.ridge:g}, r_squared={self.r_squared:.4f})"
        )


# =====================================================================
# Exponential regression
# =====================================================================

@dataclass(frozen=True)
class ExponentialParams:
    """Parameter payload for the model y = c * exp(-k * x)."""
    k: float
    c: float
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    rss: float
    iterations: int
    converged: bool
    final_change: float


@dataclass
class ExponentialSolution:
    """User-facing exponential regression results."""
    _result: Result[ExponentialParams]
    _design: 'RegressionDesign'

    @property
    def k(self) -> float:
        """Decay rate."""
        return self._result.params.k

    @property
    def c(self) -> float:
        """Scale (value at x = 0)."""
        return self._result.params.c

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def iterations(self) -> int:
        return self._result.params.iterations

    @property
    def converged(self) -> bool:
        return self._result.params.converged

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def predict(self, x: Matrix | ArrayLike) -> NDArray[np.floating[Any]]:
        """c * exp(-k * x) for each value of the single feature."""
        arr = _features(x, 1)[:, 0]
        return self.c * np.exp(-self.k * arr)

    def summary(self) -> str:
        lines = [
            "Exponential Regression Results (y = c * exp(-k * x))",
            "=" * 60,
            f"Observations: {self._design.n}",
            f"k: {self.k:.6f}",
            f"c: {self.c:.6f}",
            f"RSS: {self.rss:.6f}",
            f"Iterations: {self.iterations}",
            f"Converged: {self.converged}",
        ]
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ExponentialSolution(n={self._design.n}, k={self.k:.6g}, "
            f"c={self.c:.6g}, converged={self.converged})"
        )
