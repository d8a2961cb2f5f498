"""Shared utilities for capital allocation solvers.

Contains input validation, unit conversion into the canonical units
(absolute risk cap, fractional bond yield), the knapsack table shared by
the exact solvers, and empty-result builders.
"""

import logging
import math
from collections.abc import Sequence
from numbers import Real

from capital_allocation.models import Item
from capital_allocation.solver._types import KnapsackResult

logger = logging.getLogger(__name__)


class SolveCancelled(RuntimeError):
    """Raised when a caller-supplied cancellation hook stops a solve."""


def require_real(name: str, value: float) -> float:
    """Return ``value`` as a float, rejecting non-numeric and non-finite input.

    Raises
    ------
    TypeError
        If ``value`` is not a real number.
    ValueError
        If ``value`` is NaN or infinite.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{name} must be a number, got {value!r}.")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value!r}.")
    return float(value)


def require_non_negative(name: str, value: float) -> float:
    """Return ``value`` as a float, rejecting negative input."""
    value = require_real(name, value)
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value!r}.")
    return value


def capacity_of(budget: float) -> int:
    """Truncate a budget to an integer knapsack capacity.

    Negative budgets map to ``-1``, which callers treat as "nothing fits".
    """
    budget = require_real("budget", budget)
    if budget < 0:
        return -1
    return math.floor(budget)


def risk_cap_from_fraction(total_budget: float, fraction: float) -> float:
    """Convert a risk limit given as a share of the budget to an absolute cap.

    Parameters
    ----------
    total_budget : float
        Total budget to split between stocks and bonds.
    fraction : float
        Maximum share of the budget in stocks, between 0 and 1.

    Returns
    -------
    float
        ``total_budget * fraction``.

    Raises
    ------
    ValueError
        If fraction is outside [0, 1] or the budget is negative.
    """
    total_budget = require_non_negative("total_budget", total_budget)
    fraction = require_real("risk fraction", fraction)
    if not (0 <= fraction <= 1):
        raise ValueError("Risk fraction must be between 0 and 1.")
    return total_budget * fraction


def bond_yield_from_percent(percent: float) -> float:
    """Convert a yield in percent (``5``) to the canonical fraction (``0.05``)."""
    return require_real("bond yield percent", percent) / 100.0


def check_bond_yield(bond_yield: float) -> float:
    """Validate a fractional bond yield, warning when it looks like a percent.

    Raises
    ------
    ValueError
        If the yield is negative or not finite.
    """
    bond_yield = require_non_negative("bond_yield", bond_yield)
    if bond_yield > 1:
        logger.warning(
            "Bond yield %.4g is above 1; yields are fractions (0.05 = 5%%), "
            "use bond_yield_from_percent for percent inputs",
            bond_yield,
        )
    return bond_yield


def build_knapsack_table(items: Sequence[Item], capacity: int) -> list[list[float]]:
    """Fill the 0/1 knapsack table for capacities ``0..capacity``.

    ``table[i][j]`` is the best profit achievable with the first ``i`` items
    at total cost at most ``j``. Every row is its own list.

    Parameters
    ----------
    items : Sequence[Item]
        Candidate items.
    capacity : int
        Largest capacity to tabulate, ``>= 0``.

    Returns
    -------
    list[list[float]]
        ``len(items) + 1`` rows of ``capacity + 1`` entries.
    """
    width = capacity + 1
    table = [[0.0] * width for _ in range(len(items) + 1)]
    for i, item in enumerate(items, start=1):
        previous, current = table[i - 1], table[i]
        cost, profit = item.cost, item.profit
        current[:] = previous
        if cost > capacity:
            continue
        for j in range(cost, width):
            candidate = previous[j - cost] + profit
            if candidate > current[j]:
                current[j] = candidate
    return table


def reconstruct_selection(table: list[list[float]], items: Sequence[Item], capacity: int) -> list[int]:
    """Walk a knapsack table back from ``capacity`` and return chosen indices, ascending."""
    selected: list[int] = []
    j = capacity
    for i in range(len(items), 0, -1):
        if table[i][j] != table[i - 1][j]:
            selected.append(i - 1)
            j -= items[i - 1].cost
    selected.reverse()
    return selected


def selection_totals(items: Sequence[Item], selected: Sequence[int]) -> tuple[int, float]:
    """Return ``(total_cost, total_profit)`` of the selected indices."""
    total_cost = sum(items[i].cost for i in selected)
    total_profit = math.fsum(items[i].profit for i in selected)
    return total_cost, total_profit


def empty_knapsack_result(status: str, rule: str, budget: float) -> KnapsackResult:
    """Build a ``KnapsackResult`` with no selection.

    Parameters
    ----------
    status : str
        Descriptive status string.
    rule : str
        Strategy identifier.
    budget : float
        Budget the strategy was asked to respect.

    Returns
    -------
    KnapsackResult
    """
    return {
        "status": status,
        "total_profit": 0.0,
        "selected_items": [],
        "total_cost": 0,
        "budget": budget,
        "rule": rule,
        "detail": {},
    }
