"""
Missing-value imputation.
"""

from __future__ import annotations

from typing import Callable, Literal, Sequence

from pytabular.core.exceptions import ColumnTypeError, ParameterError
from pytabular.frame import ColumnType, Float, Frame, Null
from pytabular.pipeline.base import Transformer, check_columns_exist

ImputerStrategy = Literal['median', 'mean']

_STRATEGIES: dict[str, Callable[[Frame, str], float]] = {
    'median': Frame.median,
    'mean': Frame.mean,
}


class Imputer(Transformer):
    """
    Replace Null cells of FLOAT columns with a column statistic.

    The statistic is computed once per column from its non-null cells.
    TEXT columns pass through untouched; naming the identifier column is
    an error.

    Args:
        strategy: 'median' (default) or 'mean'
    """

    def __init__(self, strategy: ImputerStrategy = 'median'):
        if strategy not in _STRATEGIES:
            valid = ', '.join(sorted(_STRATEGIES))
            raise ParameterError(
                f"Unknown imputer strategy: {strategy!r}. Valid strategies: {valid}",
                parameter='strategy', value=strategy,
            )
        self.strategy = strategy

    def transform(self, frame: Frame, columns: Sequence[str]) -> Frame:
        names = check_columns_exist(frame, columns)
        statistic = _STRATEGIES[self.strategy]
        out = frame.copy()
        for name in names:
            dtype = frame.dtype(name)
            if dtype is ColumnType.TEXT:
                continue
            if dtype is not ColumnType.FLOAT:
                raise ColumnTypeError(
                    f"Imputer: column {name!r} has type {dtype.value} and cannot be imputed",
                    column=name, dtype=dtype,
                )
            values = frame.get_column(name).values
            if not any(isinstance(v, Null) for v in values):
                continue
            fill = Float(statistic(frame, name))
            out.replace_column(name, [fill if isinstance(v, Null) else v for v in values])
        return out

    def __repr__(self) -> str:
        return f"Imputer(strategy={self.strategy!r})"
