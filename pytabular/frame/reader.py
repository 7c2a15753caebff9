"""
Building frames from delimited text and from pandas.

The reader consumes an iterable of text lines: the first line holds the
column names, every following line one record. All columns start out as
FLOAT. An empty field is stored as Null; a field that does not parse as a
number permanently widens its column to TEXT (earlier cells are rewritten
as their textual form). Fields are kept as read: surrounding whitespace
is tolerated by the numeric parse but never trimmed from text.

A blank line in a one-column file is a record holding a single empty
field, so it reads as Null. With a wider header a blank line has no
fields at all and is skipped.
"""

import csv
import logging
import os
from typing import Iterable, TYPE_CHECKING

import numpy as np

from pytabular.core.exceptions import SchemaError, ValidationError
from pytabular.core.validation import check_positive_int
from pytabular.frame.frame import Frame, ID_COLUMN
from pytabular.frame.values import NULL, ColumnType, Float, Text, Value

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


def _parse_cell(field: str, dtype: ColumnType) -> Value | None:
    """Parsed cell, or None when a FLOAT column must be widened first."""
    if field == "":
        return NULL
    if dtype is ColumnType.TEXT:
        return Text(field)
    try:
        return Float(float(field))
    except ValueError:
        return None


def frame_from_lines(lines: Iterable[str], row_limit: int | None = None) -> Frame:
    """
    Build a frame from comma-separated text lines.

    Args:
        lines: Header line followed by record lines (newlines optional)
        row_limit: Stop after this many records

    Returns:
        Frame with one column per header field

    Raises:
        ValidationError: If there is no header line
        SchemaError: If a record has the wrong number of fields, or the
            header repeats a name or uses the reserved identifier name
        ParameterError: If row_limit < 1
    """
    if row_limit is not None:
        row_limit = check_positive_int(row_limit, "row_limit")

    reader = csv.reader(lines)
    header: list[str] = []
    while not header:
        try:
            header = [name.strip() for name in next(reader)]
        except StopIteration:
            raise ValidationError("frame_from_lines: input has no header line") from None

    frame = Frame()
    for name in header:
        frame.insert_column(name, [], ColumnType.FLOAT)

    n_records = 0
    for record in reader:
        if row_limit is not None and n_records >= row_limit:
            break
        if not record:
            if len(header) > 1:
                continue
            record = [""]
        if len(record) != len(header):
            raise SchemaError(
                f"record {n_records + 1}: expected {len(header)} fields, got {len(record)}"
            )
        row: dict[str, Value] = {}
        for name, field in zip(header, record):
            cell = _parse_cell(field, frame.dtype(name))
            if cell is None:
                logger.debug("record %d: %r is not numeric", n_records + 1, field)
                frame.widen_to_text(name)
                cell = Text(field)
            row[name] = cell
        frame.insert_row(row)
        n_records += 1

    logger.debug(
        "read %d records, %d float and %d text columns",
        n_records, len(frame.numeric_columns()), len(frame.categorical_columns()),
    )
    return frame


def read_csv(path: str | os.PathLike[str], row_limit: int | None = None) -> Frame:
    """Read a comma-separated file; see frame_from_lines."""
    with open(path, newline="", encoding="utf-8") as handle:
        return frame_from_lines(handle, row_limit=row_limit)


def frame_from_dataframe(df: 'pd.DataFrame') -> Frame:
    """
    Construct a Frame from a pandas DataFrame.

    Numeric columns become FLOAT, all others TEXT; NaN and None become
    Null. A column named like the identifier column is skipped.
    """
    import pandas as pd

    data: dict[str, list[Value]] = {}
    dtypes: dict[str, ColumnType] = {}
    for col in df.columns:
        name = str(col)
        if name == ID_COLUMN:
            continue
        series = df[col]
        if pd.api.types.is_numeric_dtype(series.dtype) and not pd.api.types.is_bool_dtype(series.dtype):
            values = series.to_numpy(dtype=np.float64, na_value=np.nan)
            data[name] = [NULL if np.isnan(v) else Float(float(v)) for v in values]
            dtypes[name] = ColumnType.FLOAT
        else:
            data[name] = [
                NULL if pd.isna(v) else Text(str(v)) for v in series.tolist()
            ]
            dtypes[name] = ColumnType.TEXT
    return Frame.from_dict(data, dtypes=dtypes) if data else _empty_rows(len(df))


def _empty_rows(n_rows: int) -> Frame:
    frame = Frame()
    for _ in range(n_rows):
        frame.insert_row({})
    return frame
