"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pytabular.frame import Frame, frame_from_lines


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def housing_lines():
    """Small housing-style CSV: two numeric columns with gaps, one categorical."""
    return [
        "median_income,total_rooms,ocean_proximity,median_house_value",
        "8.3,880,NEAR BAY,452600",
        "8.3,7099,NEAR BAY,358500",
        "7.2,,INLAND,352100",
        "5.6,1274,INLAND,341300",
        "3.8,1627,<1H OCEAN,342200",
        "4.0,919,<1H OCEAN,269700",
        "3.7,,NEAR BAY,299200",
        "3.1,3104,INLAND,241400",
        "2.0,2555,,226700",
        "3.7,3549,INLAND,261100",
    ]


@pytest.fixture
def housing(housing_lines):
    """Frame parsed from housing_lines."""
    return frame_from_lines(housing_lines)


@pytest.fixture
def mixed_frame():
    """Four rows: a FLOAT column and a TEXT column with categories x, x, y, z."""
    return Frame.from_dict({
        "a": [1.0, 2.0, 3.0, 4.0],
        "cat": ["x", "x", "y", "z"],
    })


@pytest.fixture
def linear_data(rng):
    """Noise-free y = 3*x1 - 2*x2 + 5."""
    X = rng.standard_normal((50, 2))
    y = X @ np.array([3.0, -2.0]) + 5.0
    return X, y


@pytest.fixture
def stratified_frame(rng):
    """100 rows with two numeric stratification columns."""
    return Frame.from_dict({
        "income": rng.uniform(0.5, 15.0, 100).tolist(),
        "age": rng.integers(1, 52, 100).astype(float).tolist(),
    })
