"""
Normal-equation backend for ridge regression.

Solves w = (X'X + ridge * I)^-1 X'y on X augmented with a trailing column
of ones, entirely through the Gauss-Jordan kernel. The ridge term is added
to every diagonal entry, the bias included.
"""

from typing import Any
import numpy as np

from pytabular.core.result import Result
from pytabular.core.compute.timing import Timer
from pytabular.core.compute.linalg import add_to_diagonal, inverse, multiply, transpose
from pytabular.core.validation import check_non_negative
from pytabular.regression.design import RegressionDesign
from pytabular.regression.solution import LinearParams


class NormalEquationBackend:
    """
    CPU backend solving the (ridge) normal equation.

    Implements the Backend protocol for RegressionDesign -> LinearParams.

    Args:
        ridge: L2 penalty added to the diagonal of X'X, >= 0
    """

    def __init__(self, ridge: float = 0.0):
        self.ridge = check_non_negative(ridge, 'ridge')

    @property
    def name(self) -> str:
        return 'cpu_normal_equation'

    def solve(self, design: RegressionDesign) -> Result[LinearParams]:
        """
        Solve the ridge normal equation.

        Algorithm:
            1. Append a bias column: X1 = [X | 1]
            2. Form A = X1'X1 + ridge * I
            3. Invert A by Gauss-Jordan
            4. w = A^-1 X1'y; the last entry of w is the bias

        Raises:
            SingularMatrixError: If A has no inverse (e.g. collinear
                features with ridge = 0)
        """
        timer = Timer()
        timer.start()

        X1 = design.with_bias_column()
        y = design.y

        with timer.section('normal_matrix'):
            X1t = transpose(X1)
            normal = add_to_diagonal(multiply(X1t, X1), self.ridge)

        with timer.section('inverse'):
            normal_inv = inverse(normal, name="X'X + ridge*I")

        with timer.section('solve'):
            coefficients = multiply(normal_inv, multiply(X1t, y)).column(0).to_numpy()

        with timer.section('residuals'):
            fitted_values = X1.to_numpy() @ coefficients
            y_values = design.y_values
            residuals = y_values - fitted_values

        with timer.section('statistics'):
            rss = float(residuals @ residuals)
            tss = float(np.sum((y_values - np.mean(y_values)) ** 2))

        timer.stop()

        params = LinearParams(
            coefficients=coefficients,
            residuals=residuals,
            fitted_values=fitted_values,
            rss=rss,
            tss=tss,
            ridge=self.ridge,
        )

        info: dict[str, Any] = {
            'method': 'normal_equation',
            'ridge': self.ridge,
            'n_features': design.p,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
