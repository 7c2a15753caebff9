"""
Model evaluation metrics.

Usage:
    from pytabular.inference import rmse

    rmse(model.predict(X_test), y_test)
"""

from pytabular.inference.metrics import mse, r_squared, rmse

__all__ = [
    "mse",
    "rmse",
    "r_squared",
]
