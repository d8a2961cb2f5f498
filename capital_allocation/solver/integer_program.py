"""Exact 0/1 knapsack as a binary integer program.

Formulates the single-budget selection with PuLP and solves it with CBC.
Shares the :class:`KnapsackResult` contract with the DP and greedy
strategies, so it can stand in for either or cross-check the DP.
"""

import logging
from collections.abc import Iterable
from typing import Any

import pulp as lp

from capital_allocation.models import as_item_set
from capital_allocation.solver._common import capacity_of, empty_knapsack_result, selection_totals
from capital_allocation.solver._types import KnapsackResult

logger = logging.getLogger(__name__)

RULE = "integer_program"


class IntegerProgramSolver:
    """Binary integer program for stock selection.

    Parameters
    ----------
    time_limit : float, optional
        Wall-clock limit in seconds passed to CBC. ``None`` means no limit.
    """

    def __init__(self, time_limit: float | None = None) -> None:
        if time_limit is not None and time_limit <= 0:
            raise ValueError("time_limit must be positive.")
        self.time_limit = time_limit

    def __call__(self, items: Iterable[Any], budget: float) -> KnapsackResult:
        """Solve ``max sum(x_i * profit_i)`` s.t. ``sum(x_i * cost_i) <= capacity``.

        Parameters
        ----------
        items : Iterable[Any]
            Items or ``(cost, profit)`` pairs.
        budget : float
            Spending limit, truncated to an integer capacity.

        Returns
        -------
        KnapsackResult
        """
        items = as_item_set(items)
        capacity = capacity_of(budget)
        if capacity < 0:
            return empty_knapsack_result("Trivial", RULE, budget)
        if not items:
            return empty_knapsack_result("Optimal", RULE, budget)

        logger.info("Formulating knapsack integer program: %d items, capacity %d", len(items), capacity)
        prob = lp.LpProblem("Stock_Selection", lp.LpMaximize)
        x = lp.LpVariable.dicts("Select", range(len(items)), 0, 1, lp.LpBinary)
        prob += lp.lpSum(x[i] * item.profit for i, item in enumerate(items))
        prob += lp.lpSum(x[i] * item.cost for i, item in enumerate(items)) <= capacity

        try:
            prob.solve(lp.PULP_CBC_CMD(msg=False, timeLimit=self.time_limit))
        except Exception:
            logger.exception("Error solving knapsack integer program")
            return empty_knapsack_result("Error", RULE, budget)

        status = lp.LpStatus[prob.status]
        if prob.status != lp.LpStatusOptimal:
            logger.warning("Knapsack integer program ended with status %s", status)
            result = empty_knapsack_result(status, RULE, budget)
            result["detail"] = {"capacity": capacity}
            return result

        # CBC stopped by the time limit still reports Optimal with an unproven incumbent
        if prob.sol_status != lp.LpSolutionOptimal:
            status = "Feasible"
            logger.warning("Knapsack integer program stopped before proving optimality")

        selected = [i for i in range(len(items)) if (x[i].varValue or 0.0) > 0.5]
        total_cost, total_profit = selection_totals(items, selected)
        return {
            "status": status,
            "total_profit": total_profit,
            "selected_items": selected,
            "total_cost": total_cost,
            "budget": budget,
            "rule": RULE,
            "detail": {"capacity": capacity, "objective_value": lp.value(prob.objective)},
        }
