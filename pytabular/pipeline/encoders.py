"""
Categorical encoders.
"""

from __future__ import annotations

from typing import Final, Sequence

from pytabular.core.exceptions import ColumnTypeError, SchemaError, ValidationError
from pytabular.frame import ColumnType, Float, Frame, Null, Text
from pytabular.pipeline.base import Transformer, check_columns_exist

NULL_CATEGORY: Final = "null"

_ONE = Float(1.0)
_ZERO = Float(0.0)


class OneHotEncoder(Transformer):
    """
    One FLOAT indicator column per distinct category of a TEXT column.

    Null cells form their own category labelled NULL_CATEGORY; a column
    that holds both Null cells and the literal text "null" is rejected.
    Indicator columns are named after their category, added in lexical
    order, and the source columns are removed. Two encoded columns that
    share a label would produce the same indicator name; that raises
    SchemaError unless prefix is set.

    Args:
        drop: Omit the lexically-last category (reference category), so
            rows of that category are all-zero
        prefix: Name indicators "<column>_<category>" instead
    """

    def __init__(self, drop: bool = False, prefix: bool = False):
        self.drop = drop
        self.prefix = prefix

    def indicator_name(self, column: str, category: str) -> str:
        return f"{column}_{category}" if self.prefix else category

    def categories(self, frame: Frame, column: str) -> list[str]:
        """Sorted category labels of a TEXT column, after the drop rule."""
        return self._categories(self._labels(frame, column))

    def _categories(self, labels: list[str]) -> list[str]:
        categories = sorted(set(labels))
        if self.drop and categories:
            categories.pop()
        return categories

    def _labels(self, frame: Frame, column: str) -> list[str]:
        col = frame.get_column(column)
        if col.dtype is not ColumnType.TEXT:
            raise ColumnTypeError(
                f"OneHotEncoder: column {column!r} has type {col.dtype.value}, expected text",
                column=column, dtype=col.dtype,
            )
        has_null = any(isinstance(v, Null) for v in col.values)
        if has_null and any(isinstance(v, Text) and v.value == NULL_CATEGORY for v in col.values):
            raise ValidationError(
                f"OneHotEncoder: column {column!r} has null cells and a "
                f"{NULL_CATEGORY!r} category"
            )
        return [NULL_CATEGORY if isinstance(v, Null) else v.value for v in col.values]  # type: ignore[attr-defined]

    def transform(self, frame: Frame, columns: Sequence[str]) -> Frame:
        names = check_columns_exist(frame, columns)
        out = frame.copy()
        for name in names:
            labels = self._labels(frame, name)
            for category in self._categories(labels):
                indicator = self.indicator_name(name, category)
                if indicator in out:
                    raise SchemaError(
                        f"OneHotEncoder: indicator {indicator!r} for column {name!r} "
                        f"clashes with an existing column"
                    )
                out.insert_column(
                    indicator,
                    [_ONE if label == category else _ZERO for label in labels],
                    ColumnType.FLOAT,
                )
        for name in names:
            out.remove_column(name)
        return out

    def __repr__(self) -> str:
        return f"OneHotEncoder(drop={self.drop}, prefix={self.prefix})"
