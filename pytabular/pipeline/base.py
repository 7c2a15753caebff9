"""
Transformer base class.

Every preprocessing step implements one operation,

    transform(frame, columns) -> Frame

which returns a new frame and never modifies its input.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from pytabular.core.exceptions import ColumnNotFoundError
from pytabular.frame import Frame


class Transformer(ABC):
    """Abstract preprocessing step over named frame columns."""

    @abstractmethod
    def transform(self, frame: Frame, columns: Sequence[str]) -> Frame:
        """
        Apply the step to the named columns.

        Args:
            frame: Input frame (left unchanged)
            columns: Names of the columns to process

        Returns:
            New frame
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def check_columns_exist(frame: Frame, columns: Sequence[str]) -> list[str]:
    """
    Verify every name is a column of frame.

    Returns:
        The names as a list, in the given order

    Raises:
        ColumnNotFoundError: For the first missing name
    """
    names = list(columns)
    for name in names:
        if name not in frame:
            raise ColumnNotFoundError(name)
    return names
