"""
Cell values and column type tags.

A frame cell is one of four variants:

    Null   missing value (singleton NULL)
    Float  double-precision number
    Text   string
    Id     row identifier (only in the identifier column)

Equality between numeric cells is tolerant (|a - b| <= VALUE_EPSILON)
while ordering is exact, so sorting stays a strict total order. Null
equals only Null and sorts below everything. Comparing Text with a
numeric cell raises ColumnTypeError rather than returning False.

Because equality is tolerant, values are deliberately unhashable; group
them by sorting instead of through a dict.
"""

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from pytabular.core.exceptions import ColumnTypeError
from pytabular.core.compute.tolerances import VALUE_EPSILON


class ColumnType(Enum):
    """Type tag carried by every column."""
    FLOAT = 'float'
    TEXT = 'text'
    ID = 'id'

    def accepts(self, value: 'Value') -> bool:
        """True if a cell of this variant may be stored in a column of this type."""
        if isinstance(value, Null):
            return self is not ColumnType.ID
        return value.dtype is self


class Value:
    """Base class of all cell variants."""

    __slots__ = ()

    dtype: ClassVar[ColumnType | None] = None

    @property
    def is_null(self) -> bool:
        return False

    def _check_comparable(self, other: 'Value') -> None:
        if isinstance(self, Null) or isinstance(other, Null):
            return
        if isinstance(self, Text) != isinstance(other, Text):
            raise ColumnTypeError(
                f"cannot compare {self!r} with {other!r}",
                dtype=other.dtype,
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        self._check_comparable(other)
        if isinstance(self, Null) or isinstance(other, Null):
            return isinstance(self, Null) and isinstance(other, Null)
        if isinstance(self, Text):
            return self.value == other.value  # type: ignore[attr-defined]
        return abs(self.value - other.value) <= VALUE_EPSILON  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def _order(self, other: object) -> int | None:
        # -1, 0, 1 under the exact total order; None for foreign types
        if not isinstance(other, Value):
            return None
        self._check_comparable(other)
        self_null, other_null = isinstance(self, Null), isinstance(other, Null)
        if self_null or other_null:
            return int(other_null and not self_null) - int(self_null and not other_null)
        a, b = self.value, other.value  # type: ignore[attr-defined]
        return (a > b) - (a < b)

    def __lt__(self, other: object) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order < 0

    def __le__(self, other: object) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order <= 0

    def __gt__(self, other: object) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order > 0

    def __ge__(self, other: object) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order >= 0


@dataclass(frozen=True, eq=False, repr=False)
class Null(Value):
    """Missing cell."""

    @property
    def is_null(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "NULL"


NULL = Null()


@dataclass(frozen=True, eq=False)
class Float(Value):
    value: float

    dtype: ClassVar[ColumnType | None] = ColumnType.FLOAT

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, numbers.Real):
            raise ColumnTypeError(
                f"Float: expected a real number, got {type(self.value).__name__}",
                dtype=ColumnType.FLOAT,
            )
        object.__setattr__(self, 'value', float(self.value))

    def to_text(self) -> str:
        """Render as text; integral values drop the fractional part (3.0 -> '3')."""
        if math.isfinite(self.value) and self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)


@dataclass(frozen=True, eq=False)
class Text(Value):
    value: str

    dtype: ClassVar[ColumnType | None] = ColumnType.TEXT

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ColumnTypeError(
                f"Text: expected str, got {type(self.value).__name__}",
                dtype=ColumnType.TEXT,
            )


@dataclass(frozen=True, eq=False)
class Id(Value):
    value: int

    dtype: ClassVar[ColumnType | None] = ColumnType.ID


def as_float(value: Value) -> float:
    """
    Numeric payload of a Float or Id cell.

    Raises:
        ColumnTypeError: For Text and Null cells
    """
    if isinstance(value, (Float, Id)):
        return float(value.value)
    raise ColumnTypeError(f"{value!r} has no numeric value", dtype=value.dtype)


def to_value(obj: Any) -> Value:
    """
    Wrap a plain Python object as a cell.

    None and NaN become NULL, str becomes Text, real numbers become Float.
    Existing Value instances pass through.
    """
    if isinstance(obj, Value):
        return obj
    if obj is None:
        return NULL
    if isinstance(obj, str):
        return Text(obj)
    if isinstance(obj, numbers.Real) and not isinstance(obj, bool):
        if math.isnan(obj):
            return NULL
        return Float(obj)
    raise ColumnTypeError(f"cannot store {type(obj).__name__} in a frame cell")
