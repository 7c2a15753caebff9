"""
Stratified train/test splitting.

Rows are grouped into strata by their quantile bins on one or more
columns, and each stratum contributes the same share of its rows to the
test set. Selection is positional: within a stratum, every
int(1 / test_size)-th row (positions 0, d, 2d, ...) goes to test. With
random_state set, each stratum is shuffled by a seeded NumPy generator
before that selection, which is still reproducible for a fixed seed.

The divisor is truncated, so any test_size in (0.5, 1) gives divisor 1 and
sends every row to test, exactly like 1.0; such a value triggers a
RuntimeWarning.
"""

from __future__ import annotations

import logging
import numbers
import warnings
from typing import NamedTuple, Sequence

import numpy as np

from pytabular.core.exceptions import ParameterError
from pytabular.core.validation import check_fraction, check_positive_int
from pytabular.frame import Frame

logger = logging.getLogger(__name__)


class Split(NamedTuple):
    """Row identifiers of the two partitions, each in ascending order."""
    train: list[int]
    test: list[int]


class StratifiedShuffleSplit:
    """
    Stratified positional train/test split.

    Args:
        test_size: Target test fraction, in (0, 1]
        stratify_by: (column, bin count) pairs; at least one, bin counts >= 1
        random_state: Optional integer seed; None keeps strata in
            identifier order

    Raises:
        ParameterError: On an invalid test_size, empty stratify_by, a bin
            count below 1, or a non-integer random_state

    Examples:
        >>> splitter = StratifiedShuffleSplit(0.2, [("median_income", 5)])
        >>> train_ids, test_ids = splitter.split(frame)
        >>> train, test = splitter.split_frame(frame)
    """

    def __init__(
        self,
        test_size: float,
        stratify_by: Sequence[tuple[str, int]],
        random_state: int | None = None,
    ):
        self.test_size = check_fraction(test_size, "test_size")
        if 0.5 < self.test_size < 1.0:
            warnings.warn(
                f"StratifiedShuffleSplit: test_size={self.test_size} gives divisor "
                f"{self.divisor}, so every row goes to test",
                RuntimeWarning,
                stacklevel=2,
            )
        pairs = list(stratify_by)
        if not pairs:
            raise ParameterError(
                "stratify_by: at least one (column, bins) pair is required",
                parameter="stratify_by", value=stratify_by,
            )
        self.stratify_by: tuple[tuple[str, int], ...] = tuple(
            (column, check_positive_int(bins, f"stratify_by[{column!r}]"))
            for column, bins in pairs
        )
        if random_state is not None and (
            isinstance(random_state, bool) or not isinstance(random_state, numbers.Integral)
        ):
            raise ParameterError(
                f"random_state: expected an integer seed or None, got {type(random_state).__name__}",
                parameter="random_state", value=random_state,
            )
        self.random_state = random_state

    @property
    def divisor(self) -> int:
        """Every divisor-th row of a stratum is assigned to test."""
        return int(1.0 / self.test_size)

    def strata(self, frame: Frame) -> dict[tuple[int, ...], list[int]]:
        """
        Row identifiers grouped by stratum key.

        The key of a row is the sorted tuple of its bin indices over all
        stratify columns. Keys are returned in ascending order and
        identifiers within a stratum in ascending order.
        """
        keys: list[list[int]] = [[] for _ in range(frame.n_rows)]
        for column, bins in self.stratify_by:
            for assignment in frame.quantile_bins(column, bins):
                keys[assignment.id].append(assignment.bin)

        groups: dict[tuple[int, ...], list[int]] = {}
        for row, bin_indices in enumerate(keys):
            groups.setdefault(tuple(sorted(bin_indices)), []).append(row)
        return {key: groups[key] for key in sorted(groups)}

    def split(self, frame: Frame) -> Split:
        """
        Partition the frame's row identifiers into train and test.

        The partition is a disjoint cover of all identifiers and depends
        only on the frame, the parameters and random_state.
        """
        rng = np.random.default_rng(self.random_state) if self.random_state is not None else None
        divisor = self.divisor
        train: list[int] = []
        test: list[int] = []
        for key, ids in self.strata(frame).items():
            if rng is not None:
                ids = [ids[i] for i in rng.permutation(len(ids))]
            for position, row in enumerate(ids):
                (test if position % divisor == 0 else train).append(row)
            logger.debug("stratum %s: %d rows", key, len(ids))
        train.sort()
        test.sort()
        logger.debug("split %d rows into %d train / %d test", frame.n_rows, len(train), len(test))
        return Split(train=train, test=test)

    def split_frame(self, frame: Frame) -> tuple[Frame, Frame]:
        """Train and test subsets as new frames (identifiers renumbered)."""
        train, test = self.split(frame)
        return frame.project_rows(train), frame.project_rows(test)

    def __repr__(self) -> str:
        return (
            f"StratifiedShuffleSplit(test_size={self.test_size}, "
            f"stratify_by={list(self.stratify_by)!r}, random_state={self.random_state!r})"
        )
