"""Capital allocation solvers.

Provides the single-budget selection strategies (exact DP, integer
program, greedy baseline) behind the ``KnapsackStrategy`` protocol, and
the stock/bond allocators for one period and for a multi-period horizon.

Canonical units: the risk cap is an absolute amount and the bond yield a
per-period fraction. ``risk_cap_from_fraction`` and
``bond_yield_from_percent`` convert other notations.
"""

from capital_allocation.solver._common import (
    SolveCancelled,
    bond_yield_from_percent,
    empty_knapsack_result,
    risk_cap_from_fraction,
)
from capital_allocation.solver._types import AllocationResult, KnapsackResult, KnapsackStrategy
from capital_allocation.solver.greedy import GreedySolver, solve_greedy
from capital_allocation.solver.horizon import HorizonAllocator, solve_horizon_allocation
from capital_allocation.solver.integer_program import IntegerProgramSolver
from capital_allocation.solver.knapsack import KnapsackSolver, solve_knapsack
from capital_allocation.solver.risk import RiskAllocator, solve_risk_allocation

__all__ = [
    "AllocationResult",
    "GreedySolver",
    "HorizonAllocator",
    "IntegerProgramSolver",
    "KnapsackResult",
    "KnapsackSolver",
    "KnapsackStrategy",
    "RiskAllocator",
    "SolveCancelled",
    "bond_yield_from_percent",
    "empty_knapsack_result",
    "risk_cap_from_fraction",
    "solve_greedy",
    "solve_horizon_allocation",
    "solve_knapsack",
    "solve_risk_allocation",
]
