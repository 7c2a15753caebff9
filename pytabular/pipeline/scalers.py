"""
Feature scaling.
"""

from __future__ import annotations

import warnings
from typing import Sequence

from pytabular.core.exceptions import ColumnTypeError, NullValueError
from pytabular.frame import ID_COLUMN, ColumnType, Float, Frame, Null
from pytabular.pipeline.base import Transformer, check_columns_exist


class StandardScalar(Transformer):
    """
    Standardise FLOAT columns to zero mean and unit sample variance.

    Each cell becomes (value - mean) / std with the sample (n - 1)
    standard deviation. The identifier column is skipped if named.
    Columns must be imputed first. A constant column is only centred and
    a RuntimeWarning is issued.
    """

    def transform(self, frame: Frame, columns: Sequence[str]) -> Frame:
        names = check_columns_exist(frame, columns)
        out = frame.copy()
        for name in names:
            if name == ID_COLUMN:
                continue
            dtype = frame.dtype(name)
            if dtype is not ColumnType.FLOAT:
                raise ColumnTypeError(
                    f"StandardScalar: column {name!r} has type {dtype.value}, expected float",
                    column=name, dtype=dtype,
                )
            values = frame.get_column(name).values
            for row, value in enumerate(values):
                if isinstance(value, Null):
                    raise NullValueError(
                        f"StandardScalar: column {name!r} has a null at row {row}; impute first",
                        column=name, row=row,
                    )
            mean = frame.mean(name)
            std = frame.std(name, mean=mean)
            if std == 0.0:
                warnings.warn(
                    f"StandardScalar: column {name!r} is constant; centring without scaling",
                    RuntimeWarning,
                    stacklevel=2,
                )
                std = 1.0
            out.replace_column(
                name, [Float((v.value - mean) / std) for v in values]  # type: ignore[attr-defined]
            )
        return out
