"""
pytabular: tabular data preparation and regression.

Loads delimited records into a typed columnar frame, prepares features
with a composable transformer pipeline, splits rows by stratified
sampling, and fits ridge and exponential regressions through a small
dense linear algebra kernel.

Submodules:
    frame: Typed columnar store and readers
    pipeline: Imputer, OneHotEncoder, StandardScalar, PolynomialFeatures, composites
    sampling: Stratified train/test splitting
    regression: Ridge (normal equation) and exponential (Gauss-Newton) models
    inference: MSE / RMSE / R² metrics
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from pytabular import frame
from pytabular import pipeline
from pytabular import sampling
from pytabular import regression
from pytabular import inference

__all__ = [
    "__version__",
    "frame",
    "pipeline",
    "sampling",
    "regression",
    "inference",
]
