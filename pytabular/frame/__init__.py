"""
Typed columnar data store.

Usage:
    from pytabular.frame import read_csv

    frame = read_csv("housing.csv", row_limit=1000)
    frame.median("total_bedrooms")
    frame.value_frequencies("ocean_proximity")
"""

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
from pytabular.frame.frame import ID_COLUMN, BinAssignment, Column, Frame
from pytabular.frame.reader import frame_from_dataframe, frame_from_lines, read_csv

__all__ = [
    # Values
    "NULL",
    "ColumnType",
    "Float",
    "Id",
    "Null",
    "Text",
    "Value",
    "as_float",
    "to_value",
    # Frame
    "ID_COLUMN",
    "BinAssignment",
    "Column",
    "Frame",
    # Readers
    "frame_from_dataframe",
    "frame_from_lines",
    "read_csv",
]
