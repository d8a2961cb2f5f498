"""Stock/bond budget split under a risk cap.

Every candidate stock allocation ``s`` in ``0..floor(min(risk_cap,
total_budget))`` is priced as the best knapsack profit at capacity ``s``
plus the bond yield on the remainder ``total_budget - s``; the best ``s``
wins. One knapsack table serves all candidates.
"""

import logging
from collections.abc import Iterable
from typing import Any

from capital_allocation.models import as_item_set
from capital_allocation.solver._common import (
    build_knapsack_table,
    check_bond_yield,
    reconstruct_selection,
    require_non_negative,
)
from capital_allocation.solver._types import AllocationResult

logger = logging.getLogger(__name__)

RULE = "risk_allocation"


def stock_capacity(total_budget: float, risk_cap: float) -> int:
    """Largest integer stock allocation allowed by the budget and the risk cap."""
    return int(min(risk_cap, total_budget))


def best_split(
    stock_profits: list[float],
    total_budget: float,
    bond_rate: float,
) -> tuple[int, float]:
    """Pick the stock allocation maximizing stock plus bond profit.

    Parameters
    ----------
    stock_profits : list[float]
        Best stock profit at each capacity ``0..len - 1``.
    total_budget : float
        Budget to split.
    bond_rate : float
        Bond profit per unit left in bonds (yield times periods).

    Returns
    -------
    tuple[int, float]
        ``(stock_allocation, total_profit)``. Ties keep the smaller
        allocation, so an all-zero problem reports ``0``.
    """
    best_s = 0
    best_total = stock_profits[0] + total_budget * bond_rate
    for s in range(1, len(stock_profits)):
        total = stock_profits[s] + (total_budget - s) * bond_rate
        if total > best_total:
            best_s, best_total = s, total
    return best_s, best_total


class RiskAllocator:
    """Split a budget between a stock knapsack and bonds.

    ``risk_cap`` is an absolute amount; use
    :func:`~capital_allocation.solver.risk_cap_from_fraction` to convert a
    share of the budget.
    """

    def __call__(
        self,
        items: Iterable[Any],
        bond_yield: float,
        total_budget: float,
        risk_cap: float,
    ) -> AllocationResult:
        """Find the most profitable stock/bond split.

        Parameters
        ----------
        items : Iterable[Any]
            Stocks as items or ``(cost, profit)`` pairs.
        bond_yield : float
            Bond yield as a fraction (``0.05`` = 5%).
        total_budget : float
            Budget to split, non-negative.
        risk_cap : float
            Maximum amount in stocks, non-negative.

        Returns
        -------
        AllocationResult

        Raises
        ------
        ValueError
            If the budget or risk cap is negative or not finite.
        """
        items = as_item_set(items)
        bond_yield = check_bond_yield(bond_yield)
        total_budget = require_non_negative("total_budget", total_budget)
        risk_cap = require_non_negative("risk_cap", risk_cap)

        capacity = stock_capacity(total_budget, risk_cap)
        candidates = [i for i, item in enumerate(items) if item.cost <= capacity]
        stocks = [items[i] for i in candidates]

        logger.info(
            "Solving risk allocation: %d stocks, budget %.2f, stock capacity %d",
            len(stocks),
            total_budget,
            capacity,
        )
        table = build_knapsack_table(stocks, capacity)
        stock_allocation, total_profit = best_split(table[-1], total_budget, bond_yield)

        selected = [candidates[k] for k in reconstruct_selection(table, stocks, stock_allocation)]
        bond_allocation = total_budget - stock_allocation
        stock_profit = table[-1][stock_allocation]
        logger.info(
            "Allocated %d to stocks and %.2f to bonds, profit %.2f",
            stock_allocation,
            bond_allocation,
            total_profit,
        )

        return {
            "status": "Optimal",
            "total_profit": total_profit,
            "stock_allocation": stock_allocation,
            "bond_allocation": bond_allocation,
            "stock_profit": stock_profit,
            "bond_profit": bond_allocation * bond_yield,
            "selected_items": selected,
            "periods": 1,
            "rule": RULE,
            "detail": {
                "stock_capacity": capacity,
                "risk_cap": risk_cap,
                "stock_cost": sum(items[i].cost for i in selected),
            },
        }


def solve_risk_allocation(
    items: Iterable[Any],
    bond_yield: float,
    total_budget: float,
    risk_cap: float,
) -> AllocationResult:
    """Run :class:`RiskAllocator` in one call."""
    return RiskAllocator()(items, bond_yield, total_budget, risk_cap)
