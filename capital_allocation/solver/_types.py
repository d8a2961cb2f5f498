"""Type definitions for the solver protocols and result contracts."""

from collections.abc import Sequence
from typing import Any, Protocol, TypedDict

from capital_allocation.models import Item


class KnapsackResult(TypedDict):
    """Common output contract of all single-budget strategies.

    Parameters
    ----------
    status : str
        Termination status (``"Optimal"``, ``"Heuristic"``, ``"Trivial"``
        or ``"Error"``).
    total_profit : float
        Sum of profits of the selected items.
    selected_items : list[int]
        Indices of the selected items, ascending.
    total_cost : int
        Sum of costs of the selected items.
    budget : float
        Budget the strategy was asked to respect.
    rule : str
        Identifier for the strategy (e.g. ``"dynamic_programming"``).
    detail : dict[str, Any]
        Strategy-specific diagnostics.
    """

    status: str
    total_profit: float
    selected_items: list[int]
    total_cost: int
    budget: float
    rule: str
    detail: dict[str, Any]


class AllocationResult(TypedDict):
    """Output contract of the stock/bond allocators.

    Parameters
    ----------
    status : str
        Termination status.
    total_profit : float
        Stock profit plus bond profit over the horizon.
    stock_allocation : float
        Budget placed in the stock knapsack, never above the risk cap.
    bond_allocation : float
        ``total_budget - stock_allocation``.
    stock_profit : float
        Profit of the stock positions over the horizon.
    bond_profit : float
        Bond profit over the horizon.
    selected_items : list[int]
        Indices of the stocks held, ascending.
    periods : int
        Number of periods the allocation is held for.
    rule : str
        Identifier for the allocator.
    detail : dict[str, Any]
        Allocator-specific diagnostics.
    """

    status: str
    total_profit: float
    stock_allocation: float
    bond_allocation: float
    stock_profit: float
    bond_profit: float
    selected_items: list[int]
    periods: int
    rule: str
    detail: dict[str, Any]


class KnapsackStrategy(Protocol):
    """Protocol for single-budget selection strategies.

    Implementations receive a normalized item list and a budget and return
    a :class:`KnapsackResult`, so callers can swap the exact DP, the
    integer program and the greedy baseline freely.
    """

    def __call__(self, items: Sequence[Item], budget: float) -> KnapsackResult: ...
