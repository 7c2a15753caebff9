"""
Columnar frame.

A Frame is an arena of column buffers addressed by position, with a
name -> position index on top. Every frame carries a synthetic identifier
column (ID_COLUMN) holding Id(0..n_rows) in row order; it cannot be
inserted, removed or replaced by callers.

Mutating methods (insert_column, insert_row, remove_column,
replace_column, widen_to_text) change the frame in place. Everything that
returns a Frame returns a new one; transformers work on copies so their
input is never touched.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Final, Iterable, Iterator, Mapping, NamedTuple, Sequence, TYPE_CHECKING

import numpy as np

from pytabular.core.exceptions import (
    ColumnNotFoundError,
    ColumnTypeError,
    NullValueError,
    RowNotFoundError,
    SchemaError,
    ValidationError,
)
from pytabular.core.validation import check_positive_int
from pytabular.core.compute.linalg import Matrix
from pytabular.frame.values import (
    NULL,
    ColumnType,
    Float,
    Id,
    Null,
    Text,
    Value,
    as_float,
    to_value,
)

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)

ID_COLUMN: Final = "ids"


class Column(NamedTuple):
    """Read-only view of one column."""
    name: str
    dtype: ColumnType
    values: tuple[Value, ...]


class BinAssignment(NamedTuple):
    """Quantile bin of one row: identifier, cell value and 0-based bin index."""
    id: int
    value: Value
    bin: int


@dataclass
class _ColumnBuffer:
    name: str
    dtype: ColumnType
    values: list[Value] = field(default_factory=list)

    def copy(self) -> '_ColumnBuffer':
        return _ColumnBuffer(self.name, self.dtype, list(self.values))


class Frame:
    """
    Typed columnar table.

    Invariants:
        - every column holds exactly n_rows cells
        - exactly one ID column, named ID_COLUMN, at position 0, holding
          Id(0), Id(1), ... in row order
        - cells fit their column's type tag (Null fits FLOAT and TEXT)

    Examples:
        >>> frame = Frame()
        >>> frame.insert_column("a", [], ColumnType.FLOAT)
        >>> frame.insert_row({"a": Float(1.5)})
        >>> frame.get_column("a").values
        (Float(value=1.5),)
    """

    def __init__(self) -> None:
        self._columns: list[_ColumnBuffer] = [_ColumnBuffer(ID_COLUMN, ColumnType.ID)]
        self._index: dict[str, int] = {ID_COLUMN: 0}
        self._n_rows = 0

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Sequence[Any]],
        dtypes: Mapping[str, ColumnType] | None = None,
    ) -> 'Frame':
        """
        Build a frame from column name -> sequence of cells.

        Cells may be Value instances or plain Python objects (see
        to_value). Column types are taken from dtypes when given, otherwise
        a column is TEXT if it holds any Text cell and FLOAT if not.
        """
        frame = cls()
        lengths = {name: len(col) for name, col in data.items()}
        if len(set(lengths.values())) > 1:
            raise SchemaError(f"columns have different lengths: {lengths}")
        n = next(iter(lengths.values()), 0)
        frame._columns[0].values = [Id(i) for i in range(n)]
        frame._n_rows = n
        dtypes = dtypes or {}
        for name, col in data.items():
            cells = [to_value(v) for v in col]
            if name in dtypes:
                dtype = dtypes[name]
            elif any(isinstance(c, Text) for c in cells):
                dtype = ColumnType.TEXT
            else:
                dtype = ColumnType.FLOAT
            frame.insert_column(name, cells, dtype)
        return frame

    def copy(self) -> 'Frame':
        """Deep copy of the column buffers (cells themselves are immutable)."""
        new = Frame.__new__(Frame)
        new._columns = [c.copy() for c in self._columns]
        new._index = dict(self._index)
        new._n_rows = self._n_rows
        return new

    # ------------------------------------------------------------------
    # shape and lookup
    # ------------------------------------------------------------------

    @property
    def n_rows(self) -> int:
        return self._n_rows

    @property
    def n_columns(self) -> int:
        """Number of columns, identifier included."""
        return len(self._columns)

    @property
    def columns(self) -> list[str]:
        """Column names in position order, identifier first."""
        return [c.name for c in self._columns]

    def __len__(self) -> int:
        return self._n_rows

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __repr__(self) -> str:
        return f"Frame(n_rows={self._n_rows}, columns={self.columns})"

    def _buffer(self, name: str) -> _ColumnBuffer:
        try:
            return self._columns[self._index[name]]
        except KeyError:
            raise ColumnNotFoundError(name) from None

    def dtype(self, name: str) -> ColumnType:
        return self._buffer(name).dtype

    def dtypes(self) -> dict[str, ColumnType]:
        return {c.name: c.dtype for c in self._columns}

    def position(self, name: str) -> int:
        """Position of a column in the listing order."""
        self._buffer(name)
        return self._index[name]

    def get_column(self, name: str) -> Column:
        buf = self._buffer(name)
        return Column(buf.name, buf.dtype, tuple(buf.values))

    def get_column_by_position(self, position: int) -> Column:
        if not 0 <= position < len(self._columns):
            raise ColumnNotFoundError(f"<position {position}>")
        buf = self._columns[position]
        return Column(buf.name, buf.dtype, tuple(buf.values))

    def iter_columns(self) -> Iterator[Column]:
        for buf in self._columns:
            yield Column(buf.name, buf.dtype, tuple(buf.values))

    def cell(self, name: str, row: int) -> Value:
        buf = self._buffer(name)
        self._check_row(row)
        return buf.values[row]

    def row(self, row: int) -> dict[str, Value]:
        """All cells of one row keyed by column name."""
        self._check_row(row)
        return {buf.name: buf.values[row] for buf in self._columns}

    def _check_row(self, row: int) -> None:
        if isinstance(row, bool) or not isinstance(row, (int, np.integer)):
            raise RowNotFoundError(row, self._n_rows)
        if not 0 <= row < self._n_rows:
            raise RowNotFoundError(row, self._n_rows)

    def numeric_columns(self) -> list[str]:
        """Names of FLOAT columns in position order."""
        return [c.name for c in self._columns if c.dtype is ColumnType.FLOAT]

    def categorical_columns(self) -> list[str]:
        """Names of TEXT columns in position order."""
        return [c.name for c in self._columns if c.dtype is ColumnType.TEXT]

    # ------------------------------------------------------------------
    # schema changes
    # ------------------------------------------------------------------

    def _check_cells(self, name: str, values: Sequence[Value], dtype: ColumnType) -> None:
        for row, value in enumerate(values):
            if not isinstance(value, Value):
                raise ColumnTypeError(
                    f"column {name!r}, row {row}: expected a cell Value, "
                    f"got {type(value).__name__}",
                    column=name, dtype=dtype,
                )
            if not dtype.accepts(value):
                raise ColumnTypeError(
                    f"column {name!r}, row {row}: {value!r} does not fit "
                    f"column type {dtype.value}",
                    column=name, dtype=dtype,
                )

    def insert_column(self, name: str, values: Sequence[Value], dtype: ColumnType) -> None:
        """
        Append a column.

        Raises:
            SchemaError: If the length differs from n_rows, the name is
                reserved or taken, or dtype is ID
            ColumnTypeError: If a cell does not fit dtype
        """
        if name == ID_COLUMN:
            raise SchemaError(f"column name {ID_COLUMN!r} is reserved for row identifiers")
        if dtype is ColumnType.ID:
            raise SchemaError(f"column {name!r}: type ID is reserved for {ID_COLUMN!r}")
        if name in self._index:
            raise SchemaError(f"column {name!r} already exists")
        values = list(values)
        if len(values) != self._n_rows:
            raise SchemaError(
                f"column {name!r}: expected {self._n_rows} values, got {len(values)}"
            )
        self._check_cells(name, values, dtype)
        self._index[name] = len(self._columns)
        self._columns.append(_ColumnBuffer(name, dtype, values))

    def insert_row(self, values_by_column: Mapping[str, Value]) -> None:
        """
        Append one row.

        The mapping must name every non-identifier column exactly once.
        The identifier is assigned automatically. Nothing is written unless
        the whole row validates.

        Raises:
            SchemaError: On missing or extra keys
            ColumnTypeError: If a cell does not fit its column
        """
        declared = {c.name for c in self._columns[1:]}
        given = set(values_by_column)
        missing = declared - given
        extra = given - declared
        if missing or extra:
            raise SchemaError(
                f"row keys do not match columns: missing {sorted(missing)}, "
                f"unexpected {sorted(extra)}"
            )
        for buf in self._columns[1:]:
            self._check_cells(buf.name, [values_by_column[buf.name]], buf.dtype)

        self._columns[0].values.append(Id(self._n_rows))
        for buf in self._columns[1:]:
            buf.values.append(values_by_column[buf.name])
        self._n_rows += 1

    def remove_column(self, name: str) -> None:
        """
        Drop a column in place; the remaining columns keep their order.

        Raises:
            SchemaError: For the identifier column
            ColumnNotFoundError: If absent
        """
        if name == ID_COLUMN:
            raise SchemaError(f"column {ID_COLUMN!r} cannot be removed")
        self._buffer(name)
        del self._columns[self._index[name]]
        self._index = {c.name: i for i, c in enumerate(self._columns)}

    def drop_columns(self, names: Iterable[str]) -> 'Frame':
        """Copy of the frame without the named columns."""
        new = self.copy()
        for name in names:
            new.remove_column(name)
        return new

    def replace_column(
        self,
        name: str,
        values: Sequence[Value],
        dtype: ColumnType | None = None,
    ) -> None:
        """
        Swap a column's cells in place, keeping its position.

        dtype defaults to the column's current type.
        """
        if name == ID_COLUMN:
            raise SchemaError(f"column {ID_COLUMN!r} cannot be replaced")
        buf = self._buffer(name)
        dtype = buf.dtype if dtype is None else dtype
        if dtype is ColumnType.ID:
            raise SchemaError(f"column {name!r}: type ID is reserved for {ID_COLUMN!r}")
        values = list(values)
        if len(values) != self._n_rows:
            raise SchemaError(
                f"column {name!r}: expected {self._n_rows} values, got {len(values)}"
            )
        self._check_cells(name, values, dtype)
        buf.values = values
        buf.dtype = dtype

    def widen_to_text(self, name: str) -> None:
        """
        Coerce a FLOAT column to TEXT in place.

        Every Float cell is replaced by its textual form; Null stays Null.
        TEXT columns are left alone.
        """
        buf = self._buffer(name)
        if buf.dtype is ColumnType.TEXT:
            return
        if buf.dtype is not ColumnType.FLOAT:
            raise ColumnTypeError(
                f"column {name!r}: only FLOAT columns can be widened to text",
                column=name, dtype=buf.dtype,
            )
        buf.values = [
            Text(v.to_text()) if isinstance(v, Float) else v for v in buf.values
        ]
        buf.dtype = ColumnType.TEXT
        logger.debug("column %r widened from float to text", name)

    # ------------------------------------------------------------------
    # projections
    # ------------------------------------------------------------------

    def project_columns(self, names: Iterable[str]) -> 'Frame':
        """
        New frame holding the identifier plus the named columns, in the
        requested order.
        """
        new = Frame()
        new._columns[0].values = [Id(i) for i in range(self._n_rows)]
        new._n_rows = self._n_rows
        for name in names:
            if name == ID_COLUMN:
                continue
            buf = self._buffer(name)
            new.insert_column(buf.name, buf.values, buf.dtype)
        return new

    def project_rows(self, ids: Iterable[int]) -> 'Frame':
        """
        New frame holding the rows with the given identifiers, in the
        given order. Identifiers of the result are renumbered 0..len(ids).

        Raises:
            RowNotFoundError: If an identifier is out of range
        """
        ids = list(ids)
        for row in ids:
            self._check_row(row)
        new = Frame.__new__(Frame)
        new._columns = [_ColumnBuffer(ID_COLUMN, ColumnType.ID, [Id(i) for i in range(len(ids))])]
        for buf in self._columns[1:]:
            new._columns.append(_ColumnBuffer(buf.name, buf.dtype, [buf.values[i] for i in ids]))
        new._index = dict(self._index)
        new._n_rows = len(ids)
        return new

    # ------------------------------------------------------------------
    # aggregates
    # ------------------------------------------------------------------

    def _float_cells(self, name: str, operation: str) -> np.ndarray:
        buf = self._buffer(name)
        if buf.dtype is not ColumnType.FLOAT:
            raise ColumnTypeError(
                f"{operation}: column {name!r} has type {buf.dtype.value}, expected float",
                column=name, dtype=buf.dtype,
            )
        return np.array(
            [v.value for v in buf.values if isinstance(v, Float)], dtype=np.float64
        )

    def median(self, name: str) -> float:
        """Median of the non-null cells; even counts average the middle two."""
        cells = np.sort(self._float_cells(name, "median"))
        n = cells.shape[0]
        if n == 0:
            raise ValidationError(f"median: column {name!r} has no non-null values")
        mid = n // 2
        if n % 2 == 0:
            return float((cells[mid - 1] + cells[mid]) / 2.0)
        return float(cells[mid])

    def mean(self, name: str) -> float:
        """Arithmetic mean of the non-null cells."""
        cells = self._float_cells(name, "mean")
        if cells.shape[0] == 0:
            raise ValidationError(f"mean: column {name!r} has no non-null values")
        return float(np.mean(cells))

    def std(self, name: str, mean: float | None = None) -> float:
        """
        Sample standard deviation (n - 1 denominator) of the non-null cells.

        A precomputed mean may be passed to skip recomputing it.
        """
        cells = self._float_cells(name, "std")
        n = cells.shape[0]
        if n < 2:
            raise ValidationError(
                f"std: column {name!r} needs at least 2 non-null values, got {n}"
            )
        if mean is None:
            mean = float(np.mean(cells))
        return math.sqrt(float(np.sum((cells - mean) ** 2)) / (n - 1))

    def value_frequencies(self, name: str) -> list[tuple[Value, int]]:
        """
        Distinct values of a column with their counts, ascending by count.

        Cells are grouped by value equality: after sorting, a cell joins the
        current group when it equals the group's first member. Ties in
        count keep value order.
        """
        cells = sorted(self._buffer(name).values)
        groups: list[tuple[Value, int]] = []
        for cell in cells:
            if groups and groups[-1][0] == cell:
                first, count = groups[-1]
                groups[-1] = (first, count + 1)
            else:
                groups.append((cell, 1))
        groups.sort(key=lambda g: g[1])
        return groups

    def quantile_bins(self, name: str, k: int) -> list[BinAssignment]:
        """
        Assign every row of a column to one of k quantile bins.

        Rows are stable-sorted by value and cut into contiguous groups of
        ceil(n_rows / k); the last group may be smaller, and fewer than k
        groups are produced when n_rows is not a multiple. The result is
        in identifier order.

        Raises:
            ParameterError: If k < 1
        """
        k = check_positive_int(k, "k")
        values = self._buffer(name).values
        n = len(values)
        if n == 0:
            return []
        bin_size = math.ceil(n / k)
        order = sorted(range(n), key=values.__getitem__)
        bins = [0] * n
        for rank, row in enumerate(order):
            bins[row] = rank // bin_size
        return [BinAssignment(row, values[row], bins[row]) for row in range(n)]

    def divide_columns(self, numerator: str, denominator: str) -> list[Value]:
        """
        Elementwise numerator / denominator in identifier order.

        Division follows IEEE float semantics: a zero denominator gives
        +/-inf, and 0 / 0 gives NaN.

        Raises:
            ColumnTypeError: If either column is TEXT
            NullValueError: If either operand is Null
        """
        num = self._buffer(numerator)
        den = self._buffer(denominator)
        operands = []
        for buf in (num, den):
            if buf.dtype is ColumnType.TEXT:
                raise ColumnTypeError(
                    f"divide_columns: column {buf.name!r} is not numeric",
                    column=buf.name, dtype=buf.dtype,
                )
            for row, value in enumerate(buf.values):
                if isinstance(value, Null):
                    raise NullValueError(
                        f"divide_columns: column {buf.name!r} has a null at row {row}; impute first",
                        column=buf.name, row=row,
                    )
            operands.append(np.array([as_float(v) for v in buf.values], dtype=np.float64))
        with np.errstate(divide='ignore', invalid='ignore'):
            quotient = operands[0] / operands[1]
        return [Float(float(q)) for q in quotient]

    # ------------------------------------------------------------------
    # export
    # ------------------------------------------------------------------

    def as_matrix(self, include_id: bool = False) -> Matrix:
        """
        Dense matrix of all FLOAT columns (and the identifier if requested)
        in position order, one row per data row.

        Raises:
            ColumnTypeError: If any TEXT column remains
            NullValueError: If a selected cell is Null
        """
        selected: list[_ColumnBuffer] = []
        for buf in self._columns:
            if buf.dtype is ColumnType.TEXT:
                raise ColumnTypeError(
                    f"as_matrix: column {buf.name!r} is text; encode it first",
                    column=buf.name, dtype=buf.dtype,
                )
            if buf.dtype is ColumnType.ID and not include_id:
                continue
            selected.append(buf)

        data = np.empty((self._n_rows, len(selected)), dtype=np.float64)
        for j, buf in enumerate(selected):
            for i, value in enumerate(buf.values):
                if isinstance(value, Null):
                    raise NullValueError(
                        f"as_matrix: column {buf.name!r} has a null at row {i}; impute first",
                        column=buf.name, row=i,
                    )
                data[i, j] = as_float(value)
        return Matrix(data)

    def to_pandas(self) -> 'pd.DataFrame':
        """
        Convert to a pandas DataFrame (requires pandas).

        Nulls become None in text columns and NaN in numeric ones.
        """
        import pandas as pd

        data: dict[str, Any] = {}
        for buf in self._columns:
            if buf.dtype is ColumnType.TEXT:
                data[buf.name] = pd.Series(
                    [None if v.is_null else v.value for v in buf.values],  # type: ignore[attr-defined]
                    dtype=object,
                )
            elif buf.dtype is ColumnType.ID:
                data[buf.name] = pd.Series(
                    [v.value for v in buf.values], dtype=np.int64  # type: ignore[attr-defined]
                )
            else:
                data[buf.name] = pd.Series(
                    [np.nan if v.is_null else v.value for v in buf.values],  # type: ignore[attr-defined]
                    dtype=np.float64,
                )
        return pd.DataFrame(data, columns=self.columns)
