"""
Shared compute infrastructure for pytabular.

IMPORTANT: This is NOT where model-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Numeric defaults and tolerance tiers
    linalg: Vector/matrix kernel with Gauss-Jordan inversion
"""

from pytabular.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
