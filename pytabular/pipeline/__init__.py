"""
Preprocessing pipeline.

Transformers share one contract, transform(frame, columns) -> Frame, and
never modify their input.

Usage:
    from pytabular.pipeline import (
        CategoricalPipeline, ColumnTransformer, Imputer,
        NumericalPipeline, OneHotEncoder, StandardScalar,
    )

    transformer = ColumnTransformer(
        NumericalPipeline([Imputer(), StandardScalar()]),
        CategoricalPipeline([OneHotEncoder(drop=True)]),
    )
    X = transformer.transform(frame)
"""

from pytabular.pipeline.base import Transformer
from pytabular.pipeline.imputers import Imputer, ImputerStrategy
from pytabular.pipeline.encoders import NULL_CATEGORY, OneHotEncoder
from pytabular.pipeline.scalers import StandardScalar
from pytabular.pipeline.features import PolynomialFeatures
from pytabular.pipeline.composite import (
    CategoricalPipeline,
    ColumnTransformer,
    NumericalPipeline,
    Pipeline,
)

__all__ = [
    "Transformer",
    "Imputer",
    "ImputerStrategy",
    "NULL_CATEGORY",
    "OneHotEncoder",
    "StandardScalar",
    "PolynomialFeatures",
    "Pipeline",
    "NumericalPipeline",
    "CategoricalPipeline",
    "ColumnTransformer",
]
