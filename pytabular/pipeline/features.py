"""
Feature expansion.
"""

from __future__ import annotations

from typing import Sequence

from pytabular.core.exceptions import ColumnTypeError, NullValueError
from pytabular.core.validation import check_positive_int
from pytabular.frame import ColumnType, Float, Frame, Null
from pytabular.pipeline.base import Transformer, check_columns_exist


class PolynomialFeatures(Transformer):
    """
    Append powers 2..degree of each named FLOAT column.

    New columns are named "<column>^<exponent>" and inserted after the
    existing ones; the source column is kept. degree=1 is a no-op.

    Args:
        degree: Highest exponent, >= 1
    """

    def __init__(self, degree: int):
        self.degree = check_positive_int(degree, "degree")

    def transform(self, frame: Frame, columns: Sequence[str]) -> Frame:
        names = check_columns_exist(frame, columns)
        out = frame.copy()
        for name in names:
            dtype = frame.dtype(name)
            if dtype is not ColumnType.FLOAT:
                raise ColumnTypeError(
                    f"PolynomialFeatures: column {name!r} has type {dtype.value}, expected float",
                    column=name, dtype=dtype,
                )
            values = frame.get_column(name).values
            base: list[float] = []
            for row, value in enumerate(values):
                if isinstance(value, Null):
                    raise NullValueError(
                        f"PolynomialFeatures: column {name!r} has a null at row {row}; impute first",
                        column=name, row=row,
                    )
                base.append(value.value)  # type: ignore[attr-defined]
            for exponent in range(2, self.degree + 1):
                out.insert_column(
                    f"{name}^{exponent}",
                    [Float(v ** exponent) for v in base],
                    ColumnType.FLOAT,
                )
        return out

    def __repr__(self) -> str:
        return f"PolynomialFeatures(degree={self.degree})"
