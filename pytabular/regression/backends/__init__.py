"""
Regression backends.

    cpu: NormalEquationBackend (ridge regression)
    cpu_gauss_newton: GaussNewtonBackend (exponential regression)
"""

from pytabular.regression.backends.cpu import NormalEquationBackend
from pytabular.regression.backends.cpu_gauss_newton import GaussNewtonBackend

__all__ = [
    "NormalEquationBackend",
    "GaussNewtonBackend",
]
