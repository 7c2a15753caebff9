"""
Regression models.

Ridge regression solved by the normal equation and the exponential model
y = c * exp(-k * x) fitted by Gauss-Newton. Both go through the
Gauss-Jordan inverse of the core linear algebra kernel.

Public API:
    fit_linear(X, y, *, ridge=0.0) -> LinearSolution
    fit_exponential(x, y, *, initial=(1.0, 1.0), ...) -> ExponentialSolution
    LinearRegression, ExponentialRegression (fit/predict estimators)

Example:
    >>> from pytabular.regression import fit_linear
    >>> result = fit_linear(X, y, ridge=25.0)
    >>> print(result.weights, result.bias)
    >>> print(result.summary())
"""

from pytabular.regression.design import RegressionDesign
from pytabular.regression.solution import (
    ExponentialParams,
    ExponentialSolution,
    LinearParams,
    LinearSolution,
)
from pytabular.regression.solvers import fit_exponential, fit_linear
from pytabular.regression.estimators import ExponentialRegression, LinearRegression

__all__ = [
    "fit_linear",
    "fit_exponential",
    "LinearRegression",
    "ExponentialRegression",
    "RegressionDesign",
    "LinearSolution",
    "LinearParams",
    "ExponentialSolution",
    "ExponentialParams",
]
