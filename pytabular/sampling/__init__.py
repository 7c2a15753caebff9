"""
Row sampling.

Usage:
    from pytabular.sampling import StratifiedShuffleSplit

    splitter = StratifiedShuffleSplit(0.2, [("median_income", 5)])
    train, test = splitter.split_frame(frame)
"""

from pytabular.sampling.stratified import Split, StratifiedShuffleSplit

__all__ = [
    "Split",
    "StratifiedShuffleSplit",
]
