"""Side-by-side runs of selection strategies on one instance."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from capital_allocation.models import as_item_set
from capital_allocation.solver import GreedySolver, KnapsackSolver
from capital_allocation.solver._common import require_non_negative
from capital_allocation.solver._types import KnapsackStrategy

logger = logging.getLogger(__name__)


def default_strategies() -> dict[str, KnapsackStrategy]:
    """The exact DP and the greedy baseline."""
    return {"dp": KnapsackSolver(), "greedy": GreedySolver()}


def compare_strategies(
    items: Iterable[Any],
    budget: float,
    strategies: Mapping[str, KnapsackStrategy] | None = None,
    reference: str = "dp",
    baseline: str = "greedy",
) -> dict[str, Any]:
    """Run several strategies on the same items and budget.

    Parameters
    ----------
    items : Iterable[Any]
        Items or ``(cost, profit)`` pairs.
    budget : float
        Spending limit.
    strategies : Mapping[str, KnapsackStrategy], optional
        Named strategies to run. Defaults to :func:`default_strategies`.
    reference : str
        Name of the strategy expected to be best.
    baseline : str
        Name of the strategy measured against ``reference``.

    Returns
    -------
    dict[str, Any]
        ``results`` keyed by strategy name, ``gap`` (reference minus
        baseline profit) and ``gap_pct`` (gap relative to the baseline in
        percent, ``None`` when the baseline profit is zero).

    Raises
    ------
    ValueError
        If ``reference`` or ``baseline`` is not among the strategies.
    """
    if strategies is None:
        strategies = default_strategies()
    for name in (reference, baseline):
        if name not in strategies:
            raise ValueError(f"Unknown strategy {name!r}; available: {sorted(strategies)}.")

    items = as_item_set(items)
    results = {name: strategy(items, budget) for name, strategy in strategies.items()}

    reference_profit = results[reference]["total_profit"]
    baseline_profit = results[baseline]["total_profit"]
    gap = reference_profit - baseline_profit
    gap_pct = gap / baseline_profit * 100 if baseline_profit else None

    if gap < 0:
        logger.warning("Strategy %r beat %r by %.4g", baseline, reference, -gap)
    logger.info("Compared %d strategies: %s - %s = %.2f", len(results), reference, baseline, gap)

    return {
        "results": results,
        "reference": reference,
        "baseline": baseline,
        "gap": gap,
        "gap_pct": gap_pct,
    }


def profit_curve(
    items: Iterable[Any],
    max_budget: float,
    steps: int = 20,
    strategy: KnapsackStrategy | None = None,
) -> list[tuple[float, float]]:
    """Best profit at evenly spaced budgets up to ``max_budget``.

    Parameters
    ----------
    items : Iterable[Any]
        Items or ``(cost, profit)`` pairs.
    max_budget : float
        Largest budget in the series.
    steps : int
        Number of points; budget ``k`` is ``max_budget / steps * k``.
    strategy : KnapsackStrategy, optional
        Strategy to evaluate. Defaults to :class:`KnapsackSolver`.

    Returns
    -------
    list[tuple[float, float]]
        ``(budget, total_profit)`` pairs in increasing budget order.
    """
    max_budget = require_non_negative("max_budget", max_budget)
    if isinstance(steps, bool) or not isinstance(steps, int) or steps < 1:
        raise ValueError(f"steps must be an integer >= 1, got {steps!r}.")
    if strategy is None:
        strategy = KnapsackSolver()

    items = as_item_set(items)
    curve = []
    for k in range(1, steps + 1):
        budget = max_budget / steps * k
        curve.append((budget, strategy(items, budget)["total_profit"]))
    return curve
