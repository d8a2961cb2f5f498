"""Greedy profit-to-cost ratio baseline.

Not optimal; it exists to measure the optimality gap of the exact solvers.
"""

import logging
from collections.abc import Iterable
from typing import Any

from capital_allocation.models import as_item_set
from capital_allocation.solver._common import capacity_of, empty_knapsack_result, selection_totals
from capital_allocation.solver._types import KnapsackResult

logger = logging.getLogger(__name__)

RULE = "greedy"


class GreedySolver:
    """Take items in descending profit/cost order while they fit.

    Zero-cost items have an infinite ratio and are always taken first.
    Equal ratios keep their original order. Items that do not fit are
    skipped and the scan continues with the rest of the list.
    """

    def __call__(self, items: Iterable[Any], budget: float) -> KnapsackResult:
        """Run the ratio heuristic.

        Parameters
        ----------
        items : Iterable[Any]
            Items or ``(cost, profit)`` pairs. The caller's ordering is not touched.
        budget : float
            Spending limit, truncated to an integer capacity.

        Returns
        -------
        KnapsackResult
            ``detail["selection_order"]`` lists indices in the order taken.
        """
        items = as_item_set(items)
        capacity = capacity_of(budget)
        if capacity < 0:
            return empty_knapsack_result("Trivial", RULE, budget)

        # sorted() is stable, so equal ratios stay in index order
        order = sorted(range(len(items)), key=lambda i: -items[i].ratio)

        remaining = capacity
        picked: list[int] = []
        for i in order:
            if items[i].cost <= remaining:
                picked.append(i)
                remaining -= items[i].cost

        selected = sorted(picked)
        total_cost, total_profit = selection_totals(items, selected)
        logger.info("Greedy selected %d of %d items, profit %.2f", len(selected), len(items), total_profit)

        return {
            "status": "Heuristic",
            "total_profit": total_profit,
            "selected_items": selected,
            "total_cost": total_cost,
            "budget": budget,
            "rule": RULE,
            "detail": {
                "capacity": capacity,
                "selection_order": picked,
            },
        }


def solve_greedy(items: Iterable[Any], budget: float) -> KnapsackResult:
    """Run :class:`GreedySolver` in one call."""
    return GreedySolver()(items, budget)
