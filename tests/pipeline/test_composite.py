"""
Tests for pipelines and the ColumnTransformer.
"""

import numpy as np
import pytest

from pytabular.core.exceptions import ColumnTypeError, NullValueError
from pytabular.frame import ID_COLUMN, Float, Frame
from pytabular.pipeline import (
    CategoricalPipeline,
    ColumnTransformer,
    Imputer,
    NumericalPipeline,
    OneHotEncoder,
    Pipeline,
    PolynomialFeatures,
    StandardScalar,
)


def _housing_transformer():
    return ColumnTransformer(
        numerical=NumericalPipeline([Imputer("median"), StandardScalar()]),
        categorical=CategoricalPipeline([OneHotEncoder(drop=True)]),
    )


class TestPipeline:

    def test_steps_applied_in_order(self, housing):
        pipeline = NumericalPipeline([Imputer(), PolynomialFeatures(2)])
        out = pipeline.transform(housing, ["total_rooms"])
        assert out.cell("total_rooms^2", 2) == Float(2091.0 ** 2)

    def test_order_matters(self, housing):
        pipeline = NumericalPipeline([PolynomialFeatures(2), Imputer()])
        # powers are computed before the nulls are filled
        with pytest.raises(NullValueError):
            pipeline.transform(housing, ["total_rooms"])

    def test_empty_pipeline_copies(self, mixed_frame):
        out = Pipeline().transform(mixed_frame, ["a"])
        assert out is not mixed_frame
        assert out.columns == mixed_frame.columns

    def test_rejects_non_transformers(self):
        with pytest.raises(TypeError, match="Transformer"):
            Pipeline([Imputer(), "scale"])

    def test_repr(self):
        assert repr(NumericalPipeline([Imputer()])) == "NumericalPipeline([Imputer(strategy='median')])"


class TestCategoricalPipeline:

    def test_sources_removed_without_encoder(self, mixed_frame):
        out = CategoricalPipeline().transform(mixed_frame, ["cat"])
        assert out.columns == [ID_COLUMN, "a"]

    def test_encoder_output(self, mixed_frame):
        out = CategoricalPipeline([OneHotEncoder()]).transform(mixed_frame, ["cat"])
        assert out.columns == [ID_COLUMN, "a", "x", "y", "z"]

    def test_imputer_then_encoder(self, housing):
        # Imputer leaves text columns alone, the encoder still sees the column
        pipeline = CategoricalPipeline([Imputer(), OneHotEncoder()])
        out = pipeline.transform(housing, ["ocean_proximity"])
        assert "null" in out
        assert "ocean_proximity" not in out


class TestColumnTransformer:

    def test_feature_names(self, housing):
        names = _housing_transformer().feature_names(housing)
        assert names == [
            "median_income", "total_rooms", "median_house_value",
            "<1H OCEAN", "INLAND", "NEAR BAY",
        ]

    def test_matrix_shape_and_scaling(self, housing):
        X = _housing_transformer().transform(housing).to_numpy()
        assert X.shape == (10, 6)
        assert np.all(np.isfinite(X))
        np.testing.assert_allclose(X[:, :3].mean(axis=0), 0.0, atol=1e-12)
        np.testing.assert_allclose(X[:, :3].std(axis=0, ddof=1), 1.0, rtol=1e-12)

    def test_indicators_not_scaled(self, housing):
        X = _housing_transformer().transform(housing).to_numpy()
        assert set(np.unique(X[:, 3:])) <= {0.0, 1.0}
        # the row with a null category is the dropped reference
        np.testing.assert_array_equal(X[8, 3:], [0.0, 0.0, 0.0])

    def test_input_unchanged(self, housing):
        before = housing.copy()
        _housing_transformer().transform(housing)
        assert housing.columns == before.columns
        assert list(housing.iter_columns()) == list(before.iter_columns())

    def test_mixed_frame_with_drop(self, mixed_frame):
        transformer = ColumnTransformer(
            categorical=CategoricalPipeline([OneHotEncoder(drop=True)]),
        )
        X = transformer.transform(mixed_frame)
        np.testing.assert_array_equal(
            X.to_numpy(),
            [[1.0, 1.0, 0.0], [2.0, 1.0, 0.0], [3.0, 0.0, 1.0], [4.0, 0.0, 0.0]],
        )

    def test_default_pipelines_drop_text(self, mixed_frame):
        X = ColumnTransformer().transform(mixed_frame)
        assert X.shape == (4, 1)

    def test_unimputed_nulls_fail_flattening(self, housing):
        transformer = ColumnTransformer(
            categorical=CategoricalPipeline([OneHotEncoder()]),
        )
        with pytest.raises(NullValueError, match="null"):
            transformer.transform(housing)

    def test_numeric_only_frame(self):
        frame = Frame.from_dict({"a": [1.0, 2.0, 3.0]})
        X = ColumnTransformer(numerical=NumericalPipeline([StandardScalar()])).transform(frame)
        np.testing.assert_allclose(X.column(0).tolist(), [-1.0, 0.0, 1.0])

    def test_text_in_numerical_pipeline_rejected(self, mixed_frame):
        with pytest.raises(ColumnTypeError):
            NumericalPipeline([StandardScalar()]).transform(mixed_frame, ["cat"])
