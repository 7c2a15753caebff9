"""
Stateful estimator wrappers.

LinearRegression and ExponentialRegression keep their settings and the
last fitted solution, for the fit-then-predict style of use:

    model = LinearRegression(ridge=25.0).fit(X_train, y_train)
    predictions = model.predict(X_test)
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pytabular.core.exceptions import ValidationError
from pytabular.core.compute.linalg import Matrix
from pytabular.core.compute.tolerances import CONVERGENCE_TOL, MAX_ITERATIONS
from pytabular.core.validation import check_non_negative
from pytabular.regression.solution import ExponentialSolution, LinearSolution
from pytabular.regression.solvers import fit_exponential, fit_linear


class LinearRegression:
    """
    Ridge regression estimator.

    Args:
        ridge: L2 penalty, >= 0
    """

    def __init__(self, ridge: float = 0.0):
        self.ridge = check_non_negative(ridge, 'ridge')
        self._solution: LinearSolution | None = None

    @property
    def solution(self) -> LinearSolution:
        if self._solution is None:
            raise ValidationError("LinearRegression: call fit() before using the model")
        return self._solution

    @property
    def weights(self) -> NDArray[np.floating[Any]]:
        return self.solution.weights

    @property
    def bias(self) -> float:
        return self.solution.bias

    def fit(self, X: Matrix | ArrayLike, y: Matrix | ArrayLike) -> LinearRegression:
        self._solution = fit_linear(X, y, ridge=self.ridge)
        return self

    def predict(self, X: Matrix | ArrayLike) -> NDArray[np.floating[Any]]:
        return self.solution.predict(X)

    def __repr__(self) -> str:
        return f"LinearRegression(ridge={self.ridge:g})"


class ExponentialRegression:
    """
    Estimator for y = c * exp(-k * x), fitted by Gauss-Newton.

    Args:
        initial: Starting (k, c)
        tol: Convergence tolerance on the parameter change
        max_iter: Hard cap on iterations
        step_size: Scale of each Gauss-Newton step, in (0, 1]
    """

    def __init__(
        self,
        initial: tuple[float, float] = (1.0, 1.0),
        tol: float = CONVERGENCE_TOL,
        max_iter: int = MAX_ITERATIONS,
        step_size: float = 1.0,
    ):
        self.initial = initial
        self.tol = tol
        self.max_iter = max_iter
        self.step_size = step_size
        self._solution: ExponentialSolution | None = None

    @property
    def solution(self) -> ExponentialSolution:
        if self._solution is None:
            raise ValidationError("ExponentialRegression: call fit() before using the model")
        return self._solution

    @property
    def k(self) -> float:
        return self.solution.k

    @property
    def c(self) -> float:
        return self.solution.c

    def fit(self, x: Matrix | ArrayLike, y: Matrix | ArrayLike) -> ExponentialRegression:
        self._solution = fit_exponential(
            x, y,
            initial=self.initial,
            tol=self.tol,
            max_iter=self.max_iter,
            step_size=self.step_size,
        )
        return self

    def predict(self, x: Matrix | ArrayLike) -> NDArray[np.floating[Any]]:
        return self.solution.predict(x)

    def __repr__(self) -> str:
        return (
            f"ExponentialRegression(initial={self.initial}, tol={self.tol:g}, "
            f"max_iter={self.max_iter}, step_size={self.step_size:g})"
        )
