"""
Numeric constants and tolerance tiers.

Holds every numeric default that affects behaviour: the cell equality
epsilon, the Gauss-Newton stopping rule, and the comparison tolerances
used by the test suite.
"""

from dataclasses import dataclass


# Two numeric cells are equal when they differ by at most this much.
VALUE_EPSILON = 1e-4

# Gauss-Newton stops once every parameter moves less than this.
CONVERGENCE_TOL = 1e-9

# Hard cap on Gauss-Newton iterations.
MAX_ITERATIONS = 100

# Gauss-Jordan accepts any pivot whose magnitude exceeds this.
PIVOT_TOL = 0.0


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance settings for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Direct solves on well-conditioned systems
EXACT_SOLVE = ToleranceTier(
    rtol=1e-8,
    atol=1e-9,
    name='exact_solve',
    description='normal-equation solve on well-conditioned data',
)

# Direct solves where X'X is badly conditioned (polynomial features, ...)
ILL_CONDITIONED_SOLVE = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='ill_conditioned_solve',
    description='normal-equation solve, cond(X\'X) > 1e8',
)

# Iterative fits stopped by CONVERGENCE_TOL
ITERATIVE_FIT = ToleranceTier(
    rtol=1e-6,
    atol=1e-7,
    name='iterative_fit',
    description='Gauss-Newton fit run to convergence',
)


def select_tolerance(
    backend_name: str,
    is_ill_conditioned: bool = False,
) -> ToleranceTier:
    """Select appropriate tolerance tier for a given backend."""
    if 'gauss_newton' in backend_name:
        return ITERATIVE_FIT
    if is_ill_conditioned:
        return ILL_CONDITIONED_SOLVE
    return EXACT_SOLVE
