"""Exact 0/1 knapsack by dynamic programming.

Maximizes total profit over subsets of items whose total cost fits an
integer capacity (the budget truncated toward zero). Each item is taken at
most once and the empty selection is always feasible.
"""

import logging
from collections.abc import Iterable
from typing import Any

from capital_allocation.models import as_item_set
from capital_allocation.solver._common import (
    build_knapsack_table,
    capacity_of,
    empty_knapsack_result,
    reconstruct_selection,
    selection_totals,
)
from capital_allocation.solver._types import KnapsackResult

logger = logging.getLogger(__name__)

RULE = "dynamic_programming"


class KnapsackSolver:
    """Exact single-budget stock selection.

    Builds the full ``(items + 1) x (capacity + 1)`` table so the chosen
    subset can be reconstructed. For a fixed item order the selection is
    deterministic: an item only displaces the incumbent on a strict profit
    improvement.
    """

    def __call__(self, items: Iterable[Any], budget: float) -> KnapsackResult:
        """Select the most profitable affordable subset.

        Parameters
        ----------
        items : Iterable[Any]
            Items or ``(cost, profit)`` pairs; positions are the reported indices.
        budget : float
            Spending limit. Fractions are truncated; a negative budget yields
            an empty selection.

        Returns
        -------
        KnapsackResult
        """
        items = as_item_set(items)
        capacity = capacity_of(budget)
        if capacity < 0:
            logger.info("Negative budget %s, nothing to select", budget)
            return empty_knapsack_result("Trivial", RULE, budget)
        if not items:
            return empty_knapsack_result("Optimal", RULE, budget)

        affordable = [i for i, item in enumerate(items) if item.cost <= capacity]
        excluded = len(items) - len(affordable)
        if excluded:
            logger.debug("Excluding %d items costing more than capacity %d", excluded, capacity)
        candidates = [items[i] for i in affordable]

        logger.info("Solving knapsack: %d items, capacity %d", len(candidates), capacity)
        table = build_knapsack_table(candidates, capacity)
        selected = [affordable[k] for k in reconstruct_selection(table, candidates, capacity)]
        total_cost, total_profit = selection_totals(items, selected)

        return {
            "status": "Optimal",
            "total_profit": total_profit,
            "selected_items": selected,
            "total_cost": total_cost,
            "budget": budget,
            "rule": RULE,
            "detail": {"capacity": capacity, "excluded_items": excluded},
        }


def solve_knapsack(items: Iterable[Any], budget: float) -> KnapsackResult:
    """Solve the 0/1 knapsack in one call.

    Convenience wrapper around :class:`KnapsackSolver`.
    """
    return KnapsackSolver()(items, budget)
