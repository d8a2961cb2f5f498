"""Knapsack-style capital allocation across stocks and bonds."""

from capital_allocation.adapter import AllocateComponent
from capital_allocation.compare import compare_strategies, profit_curve
from capital_allocation.models import AllocateResult, Item, as_item_set
from capital_allocation.solver import (
    GreedySolver,
    HorizonAllocator,
    IntegerProgramSolver,
    KnapsackSolver,
    RiskAllocator,
    solve_greedy,
    solve_horizon_allocation,
    solve_knapsack,
    solve_risk_allocation,
)

__all__ = [
    "AllocateComponent",
    "AllocateResult",
    "GreedySolver",
    "HorizonAllocator",
    "IntegerProgramSolver",
    "Item",
    "KnapsackSolver",
    "RiskAllocator",
    "as_item_set",
    "compare_strategies",
    "profit_curve",
    "solve_greedy",
    "solve_horizon_allocation",
    "solve_knapsack",
    "solve_risk_allocation",
]
