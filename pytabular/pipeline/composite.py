"""
Composite transformers.

NumericalPipeline and CategoricalPipeline chain transformers over a column
list; ColumnTransformer routes every TEXT column through the categorical
pipeline and every FLOAT column through the numerical one, then flattens
the result to a dense design matrix.

Usage:
    transformer = ColumnTransformer(
        numerical=NumericalPipeline([Imputer('median'), StandardScalar()]),
        categorical=CategoricalPipeline([OneHotEncoder()]),
    )
    X = transformer.transform(features)
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from pytabular.core.compute.linalg import Matrix
from pytabular.frame import ID_COLUMN, Frame
from pytabular.pipeline.base import Transformer, check_columns_exist

logger = logging.getLogger(__name__)


class Pipeline(Transformer):
    """
    Ordered chain of transformers applied to the same column list.

    Args:
        transformers: Steps, applied first to last
    """

    def __init__(self, transformers: Iterable[Transformer] = ()):
        steps = list(transformers)
        for step in steps:
            if not isinstance(step, Transformer):
                raise TypeError(
                    f"pipeline steps must be Transformer instances, got {type(step).__name__}"
                )
        self.steps: tuple[Transformer, ...] = tuple(steps)

    def transform(self, frame: Frame, columns: Sequence[str]) -> Frame:
        names = check_columns_exist(frame, columns)
        out = frame.copy()
        for step in self.steps:
            out = step.transform(out, names)
        return out

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self.steps)!r})"


class NumericalPipeline(Pipeline):
    """Pipeline over numeric (FLOAT) columns."""


class CategoricalPipeline(Pipeline):
    """
    Pipeline over categorical (TEXT) columns.

    Source columns still present after the last step are removed, so only
    the encoded columns survive.
    """

    def transform(self, frame: Frame, columns: Sequence[str]) -> Frame:
        names = check_columns_exist(frame, columns)
        out = frame.copy()
        for step in self.steps:
            # encoders consume their source columns, later steps see the rest
            out = step.transform(out, [n for n in names if n in out])
        return out.drop_columns(n for n in names if n in out)


class ColumnTransformer:
    """
    Apply a categorical and a numerical pipeline by column type.

    Column lists are taken from the input frame before either pipeline
    runs, so indicator columns created by the categorical pipeline are
    not passed to the numerical one.

    Args:
        numerical: Pipeline for FLOAT columns
        categorical: Pipeline for TEXT columns
    """

    def __init__(
        self,
        numerical: NumericalPipeline | None = None,
        categorical: CategoricalPipeline | None = None,
    ):
        self.numerical = numerical if numerical is not None else NumericalPipeline()
        self.categorical = categorical if categorical is not None else CategoricalPipeline()

    def transform_frame(self, frame: Frame) -> Frame:
        """Transformed frame, before flattening."""
        categorical = frame.categorical_columns()
        numerical = frame.numeric_columns()
        logger.debug(
            "column transformer: %d categorical, %d numerical columns",
            len(categorical), len(numerical),
        )
        out = self.categorical.transform(frame, categorical)
        return self.numerical.transform(out, numerical)

    def transform(self, frame: Frame) -> Matrix:
        """Transformed frame as a dense matrix, identifier excluded."""
        return self.transform_frame(frame).as_matrix(include_id=False)

    def feature_names(self, frame: Frame) -> list[str]:
        """Names of the matrix columns transform() produces for frame."""
        return [c for c in self.transform_frame(frame).columns if c != ID_COLUMN]

    def __repr__(self) -> str:
        return f"ColumnTransformer(numerical={self.numerical!r}, categorical={self.categorical!r})"
