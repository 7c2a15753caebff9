"""
Tests for the columnar Frame.

Validates:
    - Schema enforcement on column and row inserts
    - Identifier column invariants through projections and removals
    - Float-only aggregates (median, mean, std) and their edge cases
    - value_frequencies, quantile_bins, divide_columns
    - as_matrix flattening rules
"""

import math

import numpy as np
import pytest

from pytabular.core.exceptions import (
    ColumnNotFoundError,
    ColumnTypeError,
    NullValueError,
    ParameterError,
    RowNotFoundError,
    SchemaError,
    ValidationError,
)
from pytabular.core.compute.linalg import Matrix
from pytabular.frame import (
    ID_COLUMN,
    NULL,
    ColumnType,
    Float,
    Frame,
    Id,
    Text,
)


def _floats(*values):
    return [NULL if v is None else Float(v) for v in values]


# ═══════════════════════════════════════════════════════════════════════
# Construction and schema
# ═══════════════════════════════════════════════════════════════════════


class TestSchema:

    def test_new_frame_has_only_identifier(self):
        frame = Frame()
        assert frame.columns == [ID_COLUMN]
        assert len(frame) == 0
        assert frame.dtype(ID_COLUMN) is ColumnType.ID

    def test_insert_row_assigns_identifiers(self):
        frame = Frame()
        frame.insert_column("a", [], ColumnType.FLOAT)
        frame.insert_column("b", [], ColumnType.TEXT)
        frame.insert_row({"a": Float(1.0), "b": Text("x")})
        frame.insert_row({"a": NULL, "b": NULL})
        assert frame.n_rows == 2
        assert frame.get_column(ID_COLUMN).values == (Id(0), Id(1))
        assert frame.cell("a", 1) is NULL

    def test_insert_column_length_mismatch(self, mixed_frame):
        with pytest.raises(SchemaError, match="expected 4 values, got 2"):
            mixed_frame.insert_column("b", _floats(1.0, 2.0), ColumnType.FLOAT)

    def test_insert_reserved_name(self, mixed_frame):
        with pytest.raises(SchemaError, match="reserved"):
            mixed_frame.insert_column(ID_COLUMN, _floats(1, 2, 3, 4), ColumnType.FLOAT)

    def test_insert_id_type_rejected(self, mixed_frame):
        with pytest.raises(SchemaError, match="type ID"):
            mixed_frame.insert_column("b", [Id(i) for i in range(4)], ColumnType.ID)

    def test_insert_duplicate_name(self, mixed_frame):
        with pytest.raises(SchemaError, match="already exists"):
            mixed_frame.insert_column("a", _floats(1, 2, 3, 4), ColumnType.FLOAT)

    def test_insert_column_wrong_cell_type(self, mixed_frame):
        with pytest.raises(ColumnTypeError, match="row 2"):
            mixed_frame.insert_column(
                "b", [Float(1.0), Float(2.0), Text("x"), NULL], ColumnType.FLOAT
            )

    def test_insert_row_missing_key(self, mixed_frame):
        with pytest.raises(SchemaError, match=r"missing \['cat'\]"):
            mixed_frame.insert_row({"a": Float(1.0)})

    def test_insert_row_extra_key(self, mixed_frame):
        with pytest.raises(SchemaError, match=r"unexpected \['ids'\]"):
            mixed_frame.insert_row({"a": Float(1.0), "cat": Text("x"), ID_COLUMN: Id(9)})

    def test_insert_row_type_mismatch_leaves_frame_unchanged(self, mixed_frame):
        with pytest.raises(ColumnTypeError):
            mixed_frame.insert_row({"a": Text("oops"), "cat": Text("x")})
        assert mixed_frame.n_rows == 4
        assert all(len(c.values) == 4 for c in mixed_frame.iter_columns())

    def test_insert_row_null_always_allowed(self, mixed_frame):
        mixed_frame.insert_row({"a": NULL, "cat": NULL})
        assert mixed_frame.n_rows == 5

    def test_from_dict_infers_types(self, mixed_frame):
        assert mixed_frame.dtypes() == {
            ID_COLUMN: ColumnType.ID, "a": ColumnType.FLOAT, "cat": ColumnType.TEXT,
        }
        assert mixed_frame.numeric_columns() == ["a"]
        assert mixed_frame.categorical_columns() == ["cat"]

    def test_from_dict_length_mismatch(self):
        with pytest.raises(SchemaError, match="different lengths"):
            Frame.from_dict({"a": [1.0], "b": [1.0, 2.0]})

    def test_get_column_missing(self, mixed_frame):
        with pytest.raises(ColumnNotFoundError, match="'price'"):
            mixed_frame.get_column("price")

    def test_get_column_by_position(self, mixed_frame):
        column = mixed_frame.get_column_by_position(2)
        assert column.name == "cat"
        assert column.dtype is ColumnType.TEXT
        with pytest.raises(ColumnNotFoundError):
            mixed_frame.get_column_by_position(3)

    def test_cell_out_of_range(self, mixed_frame):
        with pytest.raises(RowNotFoundError):
            mixed_frame.cell("a", 4)

    def test_row(self, mixed_frame):
        assert mixed_frame.row(2) == {ID_COLUMN: Id(2), "a": Float(3.0), "cat": Text("y")}


# ═══════════════════════════════════════════════════════════════════════
# Coercion, removal, projection
# ═══════════════════════════════════════════════════════════════════════


class TestMutation:

    def test_widen_to_text(self):
        frame = Frame.from_dict({"a": [1.0, None, 2.5]})
        frame.widen_to_text("a")
        assert frame.dtype("a") is ColumnType.TEXT
        assert frame.get_column("a").values == (Text("1"), NULL, Text("2.5"))

    def test_remove_column_preserves_order(self):
        frame = Frame.from_dict({"a": [1.0], "b": [2.0], "c": [3.0], "d": [4.0]})
        frame.remove_column("b")
        assert frame.columns == [ID_COLUMN, "a", "c", "d"]
        assert frame.position("d") == 3
        assert frame.get_column_by_position(2).name == "c"

    def test_remove_identifier_rejected(self, mixed_frame):
        with pytest.raises(SchemaError):
            mixed_frame.remove_column(ID_COLUMN)

    def test_remove_missing(self, mixed_frame):
        with pytest.raises(ColumnNotFoundError):
            mixed_frame.remove_column("nope")

    def test_drop_columns_returns_copy(self, mixed_frame):
        dropped = mixed_frame.drop_columns(["cat"])
        assert dropped.columns == [ID_COLUMN, "a"]
        assert "cat" in mixed_frame

    def test_copy_is_independent(self, mixed_frame):
        copy = mixed_frame.copy()
        copy.replace_column("a", _floats(0, 0, 0, 0))
        assert mixed_frame.cell("a", 0) == Float(1.0)

    def test_replace_column_keeps_position(self, mixed_frame):
        mixed_frame.replace_column("a", _floats(9, 9, 9, 9))
        assert mixed_frame.columns == [ID_COLUMN, "a", "cat"]
        assert mixed_frame.cell("a", 3) == Float(9.0)

    def test_project_columns_order(self):
        frame = Frame.from_dict({"a": [1.0, 2.0], "b": [3.0, 4.0], "c": ["x", "y"]})
        projected = frame.project_columns(["c", "a", ID_COLUMN])
        assert projected.columns == [ID_COLUMN, "c", "a"]
        assert projected.get_column("a").values == (Float(1.0), Float(2.0))

    def test_project_rows_renumbers(self, mixed_frame):
        subset = mixed_frame.project_rows([3, 1])
        assert subset.n_rows == 2
        assert subset.get_column(ID_COLUMN).values == (Id(0), Id(1))
        assert subset.get_column("cat").values == (Text("z"), Text("x"))
        assert subset.dtypes() == mixed_frame.dtypes()

    def test_project_rows_out_of_range(self, mixed_frame):
        with pytest.raises(RowNotFoundError, match="row 4"):
            mixed_frame.project_rows([0, 4])


# ═══════════════════════════════════════════════════════════════════════
# Aggregates
# ═══════════════════════════════════════════════════════════════════════


class TestAggregates:

    def test_median_odd(self):
        frame = Frame.from_dict({"a": [3.0, 1.0, 2.0]})
        assert frame.median("a") == 2.0

    def test_median_even_averages_middle(self):
        frame = Frame.from_dict({"a": [4.0, 1.0, 3.0, 2.0]})
        assert frame.median("a") == 2.5

    def test_median_skips_nulls(self):
        frame = Frame.from_dict({"a": [None, 5.0, 1.0, None, 3.0]})
        assert frame.median("a") == 3.0

    def test_mean_and_std(self):
        frame = Frame.from_dict({"a": [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]})
        assert frame.mean("a") == 5.0
        assert math.isclose(frame.std("a"), math.sqrt(32.0 / 7.0))
        assert math.isclose(frame.std("a", mean=5.0), frame.std("a"))

    def test_std_of_constant_column(self):
        frame = Frame.from_dict({"a": [1.5, 1.5, 1.5]})
        assert frame.std("a") == 0.0

    def test_median_between_min_and_max(self, rng):
        values = rng.normal(size=37).tolist()
        frame = Frame.from_dict({"a": values})
        assert min(values) <= frame.median("a") <= max(values)

    def test_aggregate_on_text_rejected(self, mixed_frame):
        with pytest.raises(ColumnTypeError, match="median"):
            mixed_frame.median("cat")
        with pytest.raises(ColumnTypeError):
            mixed_frame.mean(ID_COLUMN)

    def test_all_null_column(self):
        frame = Frame.from_dict({"a": [None, None]}, dtypes={"a": ColumnType.FLOAT})
        with pytest.raises(ValidationError, match="no non-null"):
            frame.median("a")

    def test_std_needs_two_values(self):
        frame = Frame.from_dict({"a": [1.0, None]})
        with pytest.raises(ValidationError, match="at least 2"):
            frame.std("a")


class TestValueFrequencies:

    def test_sorted_ascending_by_count(self):
        frame = Frame.from_dict({"c": ["b", "a", "b", "c", "b", "a"]})
        assert frame.value_frequencies("c") == [
            (Text("c"), 1), (Text("a"), 2), (Text("b"), 3),
        ]

    def test_tolerant_grouping(self):
        frame = Frame.from_dict({"a": [1.0, 1.00001, 2.0]})
        frequencies = frame.value_frequencies("a")
        assert [count for _, count in frequencies] == [1, 2]

    def test_nulls_grouped(self):
        frame = Frame.from_dict({"c": ["x", None, None]})
        assert frame.value_frequencies("c") == [(Text("x"), 1), (NULL, 2)]


class TestQuantileBins:

    def test_equal_groups(self):
        frame = Frame.from_dict({"a": [5.0, 1.0, 4.0, 2.0, 3.0, 6.0]})
        bins = frame.quantile_bins("a", 3)
        assert [b.id for b in bins] == list(range(6))
        assert [b.bin for b in bins] == [2, 0, 1, 0, 1, 2]

    def test_last_group_smaller(self):
        frame = Frame.from_dict({"a": [float(v) for v in range(7)]})
        bins = frame.quantile_bins("a", 3)
        # ceil(7 / 3) = 3 rows per bin
        assert [b.bin for b in bins] == [0, 0, 0, 1, 1, 1, 2]

    def test_indices_in_range_and_monotone(self, rng):
        values = rng.normal(size=50).tolist()
        frame = Frame.from_dict({"a": values})
        bins = frame.quantile_bins("a", 7)
        assert all(0 <= b.bin < 7 for b in bins)
        for first in bins:
            for second in bins:
                if first.bin < second.bin:
                    assert values[first.id] <= values[second.id]

    def test_ties_follow_stable_sort(self):
        frame = Frame.from_dict({"a": [1.0, 1.0, 1.0, 1.0]})
        assert [b.bin for b in frame.quantile_bins("a", 2)] == [0, 0, 1, 1]

    def test_single_bin(self, mixed_frame):
        assert {b.bin for b in mixed_frame.quantile_bins("a", 1)} == {0}

    def test_zero_bins_rejected(self, mixed_frame):
        with pytest.raises(ParameterError, match="k"):
            mixed_frame.quantile_bins("a", 0)


class TestDivideColumns:

    def test_divide(self):
        frame = Frame.from_dict({"rooms": [6.0, 9.0, 4.0], "households": [2.0, 3.0, 8.0]})
        assert frame.divide_columns("rooms", "households") == [Float(3.0), Float(3.0), Float(0.5)]

    def test_null_numerator_raises(self):
        frame = Frame.from_dict({"rooms": [6.0, None, 4.0], "households": [2.0, 1.0, 1.0]})
        with pytest.raises(NullValueError, match="rooms") as info:
            frame.divide_columns("rooms", "households")
        assert info.value.column == "rooms"
        assert info.value.row == 1

    def test_null_denominator_raises(self):
        frame = Frame.from_dict({"rooms": [6.0, 5.0], "households": [2.0, None]})
        with pytest.raises(NullValueError, match="households") as info:
            frame.divide_columns("rooms", "households")
        assert info.value.row == 1

    def test_zero_denominator_is_ieee(self):
        frame = Frame.from_dict({"rooms": [6.0, -3.0, 0.0], "households": [0.0, 0.0, 0.0]})
        quotient = [v.value for v in frame.divide_columns("rooms", "households")]
        assert math.isinf(quotient[0]) and quotient[0] > 0
        assert math.isinf(quotient[1]) and quotient[1] < 0
        assert math.isnan(quotient[2])

    def test_divide_text_rejected(self, mixed_frame):
        with pytest.raises(ColumnTypeError, match="not numeric"):
            mixed_frame.divide_columns("a", "cat")


# ═══════════════════════════════════════════════════════════════════════
# Export
# ═══════════════════════════════════════════════════════════════════════


class TestAsMatrix:

    def test_float_columns_in_order(self):
        frame = Frame.from_dict({"b": [1.0, 2.0], "a": [3.0, 4.0]})
        assert frame.as_matrix() == Matrix([[1.0, 3.0], [2.0, 4.0]])

    def test_include_identifier(self):
        frame = Frame.from_dict({"a": [3.0, 4.0]})
        assert frame.as_matrix(include_id=True) == Matrix([[0.0, 3.0], [1.0, 4.0]])

    def test_text_column_rejected(self, mixed_frame):
        with pytest.raises(ColumnTypeError, match="encode"):
            mixed_frame.as_matrix()

    def test_null_rejected(self):
        frame = Frame.from_dict({"a": [1.0, None]})
        with pytest.raises(NullValueError, match="row 1"):
            frame.as_matrix()

    def test_empty_frame(self):
        frame = Frame.from_dict({"a": []}, dtypes={"a": ColumnType.FLOAT})
        assert frame.as_matrix().shape == (0, 1)


class TestPandas:

    def test_to_pandas(self):
        pd = pytest.importorskip("pandas")
        frame = Frame.from_dict({"a": [1.0, None], "c": ["x", None]})
        df = frame.to_pandas()
        assert list(df.columns) == [ID_COLUMN, "a", "c"]
        assert df["ids"].tolist() == [0, 1]
        assert np.isnan(df["a"].iloc[1])
        assert df["c"].iloc[1] is None
        assert isinstance(df, pd.DataFrame)
