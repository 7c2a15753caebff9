"""
Gauss-Newton backend for exponential regression.

Fits y = c * exp(-k * x) to a single feature by nonlinear least squares.

Algorithm:
    Start from (k, c) = initial
    For iteration 1..max_iter:
        e  = exp(-k * x)
        r  = y - c * e                       # residuals
        J  = [dr/dk, dr/dc] = [c * x * e, -e]
        delta = (J'J)^-1 J'r                 # Gauss-Jordan inverse
        (k, c) -= step_size * delta
        Check: max |step_size * delta| < tol

step_size = 1 is the plain (unscaled) Gauss-Newton step; smaller values
give the damped variant.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pytabular.core.exceptions import ConvergenceError, DimensionError, ParameterError
from pytabular.core.result import Result
from pytabular.core.compute.timing import Timer
from pytabular.core.compute.tolerances import CONVERGENCE_TOL, MAX_ITERATIONS
from pytabular.core.compute.linalg import Matrix, inverse, multiply, transpose
from pytabular.core.validation import check_positive_int
from pytabular.regression.design import RegressionDesign
from pytabular.regression.solution import ExponentialParams


class GaussNewtonBackend:
    """
    CPU backend using Gauss-Newton iterations.

    Implements the Backend protocol for RegressionDesign -> ExponentialParams.

    Args:
        initial: Starting (k, c)
        tol: Stop once every parameter moves less than this
        max_iter: Hard cap on iterations
        step_size: Scale applied to each Gauss-Newton step, in (0, 1]
    """

    def __init__(
        self,
        initial: tuple[float, float] = (1.0, 1.0),
        tol: float = CONVERGENCE_TOL,
        max_iter: int = MAX_ITERATIONS,
        step_size: float = 1.0,
    ):
        k0, c0 = (float(v) for v in initial)
        if not (np.isfinite(k0) and np.isfinite(c0)):
            raise ParameterError(
                f"initial: starting values must be finite, got {initial}",
                parameter='initial', value=initial,
            )
        if not tol > 0:
            raise ParameterError(f"tol: must be > 0, got {tol}", parameter='tol', value=tol)
        if not 0 < step_size <= 1:
            raise ParameterError(
                f"step_size: must be in (0, 1], got {step_size}",
                parameter='step_size', value=step_size,
            )
        self.initial = (k0, c0)
        self.tol = float(tol)
        self.max_iter = check_positive_int(max_iter, 'max_iter')
        self.step_size = float(step_size)

    @property
    def name(self) -> str:
        return 'cpu_gauss_newton'

    def solve(self, design: RegressionDesign) -> Result[ExponentialParams]:
        """
        Run Gauss-Newton to fit k and c.

        Returns a result with converged=False and a warning when max_iter
        is reached first.

        Raises:
            DimensionError: If the design has more than one feature
            SingularMatrixError: If J'J is singular at some iterate
            ConvergenceError: If the iterates become non-finite
        """
        if design.p != 1:
            raise DimensionError(
                f"X: exponential regression takes a single feature column, got {design.p}"
            )

        timer = Timer()
        timer.start()

        x = design.X.column(0).to_numpy()
        y = design.y_values
        k, c = self.initial

        warnings_list: list[str] = []
        converged = False
        change = float('inf')
        iteration = 0

        with timer.section('iterations'):
            for iteration in range(1, self.max_iter + 1):
                delta = self._step(x, y, k, c)
                k -= delta[0]
                c -= delta[1]

                if not (np.isfinite(k) and np.isfinite(c)):
                    raise ConvergenceError(
                        f"Gauss-Newton diverged at iteration {iteration} (k={k}, c={c})",
                        iterations=iteration,
                        final_change=change,
                        reason='diverging',
                        threshold=self.tol,
                    )

                change = float(np.max(np.abs(delta)))
                if change < self.tol:
                    converged = True
                    break

        if not converged:
            warnings_list.append(
                f"Gauss-Newton did not converge in {self.max_iter} iterations "
                f"(last change={change:.3e}, tol={self.tol:.1e})"
            )

        with timer.section('residuals'):
            fitted_values = c * np.exp(-k * x)
            residuals = y - fitted_values
            rss = float(residuals @ residuals)

        timer.stop()

        params = ExponentialParams(
            k=float(k),
            c=float(c),
            residuals=residuals,
            fitted_values=fitted_values,
            rss=rss,
            iterations=iteration,
            converged=converged,
            final_change=change,
        )

        info: dict[str, Any] = {
            'method': 'gauss_newton',
            'converged': converged,
            'iterations': iteration,
            'initial': self.initial,
            'step_size': self.step_size,
            'tol': self.tol,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def _step(
        self, x: NDArray[np.floating[Any]], y: NDArray[np.floating[Any]], k: float, c: float
    ) -> NDArray[np.floating[Any]]:
        """step_size * (J'J)^-1 J'r at the current (k, c)."""
        e = np.exp(-k * x)
        r = Matrix.column_vector(y - c * e)
        J = Matrix.from_columns([c * x * e, -e])
        Jt = transpose(J)
        JtJ_inv = inverse(multiply(Jt, J), name="J'J")
        delta = multiply(JtJ_inv, multiply(Jt, r)).column(0).to_numpy()
        return self.step_size * delta
