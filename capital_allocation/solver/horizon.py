"""Stock/bond split held over a multi-period horizon.

Each stock pays ``profit / periods`` per period (flat amortization, no
compounding) and bonds pay ``bond_yield`` per period on the amount left
out of stocks. The positions are chosen once and held for the whole
horizon.

The table is indexed ``[period][capacity][item]``. Period 1 is the 0/1
knapsack over amortized profits; every later period carries the same
positions forward and adds one more period of their profit.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from capital_allocation.models import Item, as_item_set
from capital_allocation.solver._common import SolveCancelled, check_bond_yield, require_non_negative
from capital_allocation.solver._types import AllocationResult
from capital_allocation.solver.risk import best_split, stock_capacity

logger = logging.getLogger(__name__)

RULE = "horizon_allocation"


def _amortized_layer(items: Sequence[Item], amortized: list[float], capacity: int) -> list[list[float]]:
    """Fill the first-period layer, ``layer[j][i]`` for capacity ``j`` and item prefix ``i``."""
    n = len(items)
    layer = [[0.0] * (n + 1) for _ in range(capacity + 1)]
    for j in range(capacity + 1):
        row = layer[j]
        for i in range(1, n + 1):
            row[i] = row[i - 1]
            cost = items[i - 1].cost
            if cost <= j:
                candidate = layer[j - cost][i - 1] + amortized[i - 1]
                if candidate > row[i]:
                    row[i] = candidate
    return layer


def _held_positions(items: Sequence[Item], layer: list[list[float]], capacity: int) -> list[int]:
    """Walk the first-period layer back from ``capacity`` and return held indices, ascending."""
    selected: list[int] = []
    j = capacity
    for i in range(len(items), 0, -1):
        if layer[j][i] != layer[j][i - 1]:
            selected.append(i - 1)
            j -= items[i - 1].cost
    selected.reverse()
    return selected


class HorizonAllocator:
    """Split a budget between stocks and bonds over several periods.

    With ``periods == 1`` the result matches :class:`RiskAllocator`.
    Memory and time grow with ``periods * capacity * items``.
    """

    def __call__(
        self,
        items: Iterable[Any],
        bond_yield: float,
        total_budget: float,
        risk_cap: float,
        periods: int,
        should_cancel: Callable[[], bool] | None = None,
    ) -> AllocationResult:
        """Find the most profitable split held for ``periods`` periods.

        Parameters
        ----------
        items : Iterable[Any]
            Stocks as items or ``(cost, profit)`` pairs; ``profit`` is the
            total over the horizon.
        bond_yield : float
            Per-period bond yield as a fraction.
        total_budget : float
            Budget to split, non-negative.
        risk_cap : float
            Maximum amount in stocks, non-negative.
        periods : int
            Number of periods, at least 1.
        should_cancel : Callable[[], bool], optional
            Polled before each period; returning ``True`` aborts the solve.

        Returns
        -------
        AllocationResult

        Raises
        ------
        ValueError
            If ``periods`` is not a positive integer, or the budget or risk
            cap is invalid.
        SolveCancelled
            If ``should_cancel`` returns ``True``.
        """
        if isinstance(periods, bool) or not isinstance(periods, int) or periods < 1:
            raise ValueError(f"periods must be an integer >= 1, got {periods!r}.")
        items = as_item_set(items)
        bond_yield = check_bond_yield(bond_yield)
        total_budget = require_non_negative("total_budget", total_budget)
        risk_cap = require_non_negative("risk_cap", risk_cap)

        capacity = stock_capacity(total_budget, risk_cap)
        candidates = [i for i, item in enumerate(items) if item.cost <= capacity]
        stocks = [items[i] for i in candidates]
        amortized = [item.profit / periods for item in stocks]
        n = len(stocks)

        logger.info(
            "Solving horizon allocation: %d stocks, budget %.2f, stock capacity %d, %d periods",
            n,
            total_budget,
            capacity,
            periods,
        )
        logger.debug("Horizon table size: %d cells", periods * (capacity + 1) * (n + 1))

        dp: list[list[list[float]]] = []
        for period in range(1, periods + 1):
            if should_cancel is not None and should_cancel():
                logger.info("Horizon allocation cancelled at period %d of %d", period, periods)
                raise SolveCancelled(f"Horizon allocation cancelled at period {period}.")
            if period == 1:
                dp.append(_amortized_layer(stocks, amortized, capacity))
                continue
            first, previous = dp[0], dp[-1]
            dp.append([[previous[j][i] + first[j][i] for i in range(n + 1)] for j in range(capacity + 1)])

        stock_profits = [dp[-1][j][n] for j in range(capacity + 1)]
        stock_allocation, total_profit = best_split(stock_profits, total_budget, bond_yield * periods)

        selected = [candidates[k] for k in _held_positions(stocks, dp[0], stock_allocation)]
        bond_allocation = total_budget - stock_allocation
        logger.info(
            "Allocated %d to stocks and %.2f to bonds over %d periods, profit %.2f",
            stock_allocation,
            bond_allocation,
            periods,
            total_profit,
        )

        return {
            "status": "Optimal",
            "total_profit": total_profit,
            "stock_allocation": stock_allocation,
            "bond_allocation": bond_allocation,
            "stock_profit": stock_profits[stock_allocation],
            "bond_profit": bond_allocation * bond_yield * periods,
            "selected_items": selected,
            "periods": periods,
            "rule": RULE,
            "detail": {
                "stock_capacity": capacity,
                "risk_cap": risk_cap,
                "stock_cost": sum(items[i].cost for i in selected),
                "cumulative_stock_profit": [dp[p][stock_allocation][n] for p in range(periods)],
            },
        }


def solve_horizon_allocation(
    items: Iterable[Any],
    bond_yield: float,
    total_budget: float,
    risk_cap: float,
    periods: int,
    should_cancel: Callable[[], bool] | None = None,
) -> AllocationResult:
    """Run :class:`HorizonAllocator` in one call."""
    return HorizonAllocator()(items, bond_yield, total_budget, risk_cap, periods, should_cancel)
