"""
Solver entry points for regression.

This module provides fit_linear() and fit_exponential() (public API):
input validation, backend construction and result wrapping.
"""

from __future__ import annotations

from numpy.typing import ArrayLike

from pytabular.core.compute.linalg import Matrix
from pytabular.core.compute.tolerances import CONVERGENCE_TOL, MAX_ITERATIONS
from pytabular.regression.design import RegressionDesign
from pytabular.regression.solution import ExponentialSolution, LinearSolution
from pytabular.regression.backends.cpu import NormalEquationBackend
from pytabular.regression.backends.cpu_gauss_newton import GaussNewtonBackend


def fit_linear(
    X: Matrix | ArrayLike,
    y: Matrix | ArrayLike,
    *,
    ridge: float = 0.0,
) -> LinearSolution:
    """
    Fit a ridge regression model with a bias term.

    Solves
        min_w ||y - X1 w||² + ridge * ||w||²,   X1 = [X | 1]
    through the normal equation w = (X1'X1 + ridge*I)^-1 X1'y. The
    penalty applies to the bias as well.

    Args:
        X: Feature matrix (n x p), without a bias column
        y: Response (n,) or (n x 1)
        ridge: L2 penalty, >= 0 (0 gives ordinary least squares)

    Returns:
        LinearSolution with weights, bias, diagnostics and predict()

    Raises:
        ValidationError: If inputs are invalid
        DimensionError: If X and y have inconsistent dimensions
        ParameterError: If ridge < 0
        SingularMatrixError: If X1'X1 + ridge*I is singular

    Example:
        >>> import numpy as np
        >>> from pytabular.regression import fit_linear
        >>>
        >>> X = np.random.randn(100, 2)
        >>> y = X @ [3.0, -2.0] + 5.0
        >>>
        >>> result = fit_linear(X, y)
        >>> result.weights, result.bias
        >>> print(result.summary())
    """
    backend = NormalEquationBackend(ridge=ridge)
    design = RegressionDesign.build(X, y)
    result = backend.solve(design)
    return LinearSolution(_result=result, _design=design)


def fit_exponential(
    x: Matrix | ArrayLike,
    y: Matrix | ArrayLike,
    *,
    initial: tuple[float, float] = (1.0, 1.0),
    tol: float = CONVERGENCE_TOL,
    max_iter: int = MAX_ITERATIONS,
    step_size: float = 1.0,
) -> ExponentialSolution:
    """
    Fit y = c * exp(-k * x) by Gauss-Newton.

    Args:
        x: Single feature, flat (n,) or (n x 1)
        y: Response (n,) or (n x 1)
        initial: Starting (k, c)
        tol: Stop once every parameter moves less than this
        max_iter: Hard cap on iterations; hitting it leaves
            converged=False and records a warning
        step_size: Scale of each step, in (0, 1]; 1 is plain Gauss-Newton

    Returns:
        ExponentialSolution with k, c, diagnostics and predict()

    Raises:
        ValidationError: If inputs are invalid
        DimensionError: If x has more than one column or lengths differ
        ParameterError: For invalid solver settings
        SingularMatrixError: If J'J is singular at some iterate
        ConvergenceError: If the iterates become non-finite
    """
    backend = GaussNewtonBackend(
        initial=initial, tol=tol, max_iter=max_iter, step_size=step_size,
    )
    design = RegressionDesign.build(x, y)
    result = backend.solve(design)
    return ExponentialSolution(_result=result, _design=design)
