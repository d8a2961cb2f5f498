"""ALLOCATE component: stock/bond capital allocation for a pipeline event."""

import logging
from dataclasses import asdict
from typing import Protocol

from capital_allocation.models import AllocateResult, as_item_set
from capital_allocation.solver import (
    HorizonAllocator,
    RiskAllocator,
    bond_yield_from_percent,
    risk_cap_from_fraction,
)

logger = logging.getLogger(__name__)


class PipelineComponent(Protocol):
    """Structural interface for pipeline stage components."""

    def execute(self, event: dict) -> dict:
        """Process event and return result."""
        ...


class AllocateComponent(PipelineComponent):
    """Split an event's budget between stocks and bonds.

    Converts the event's risk limit and bond yield into the canonical units
    (absolute risk cap, fractional yield), then runs :class:`RiskAllocator`
    for a single period or :class:`HorizonAllocator` for several.

    Parameters
    ----------
    periods : int
        Default horizon when the event does not carry ``periods``.
    risk_limit_is_fraction : bool
        Read ``risk_limit`` as a share of the budget (``0.5``) rather than
        an absolute amount.
    bond_yield_is_percent : bool
        Read ``bond_yield`` as a percent (``5``) rather than a fraction.
    """

    def __init__(
        self,
        periods: int = 1,
        risk_limit_is_fraction: bool = True,
        bond_yield_is_percent: bool = False,
    ) -> None:
        if isinstance(periods, bool) or not isinstance(periods, int) or periods < 1:
            raise ValueError(f"periods must be an integer >= 1, got {periods!r}.")
        self.periods = periods
        self.risk_limit_is_fraction = risk_limit_is_fraction
        self.bond_yield_is_percent = bond_yield_is_percent

    def execute(self, event: dict) -> dict:
        """Run the allocation and return an ``AllocateResult`` dict.

        Parameters
        ----------
        event : dict
            Must contain ``stocks`` (``(cost, profit)`` pairs or dicts),
            ``budget``, ``bond_yield`` and ``risk_limit``. May contain
            ``periods``.

        Returns
        -------
        dict
            Serialized ``AllocateResult`` with ``stock_allocation``,
            ``bond_allocation``, ``total_profit``, ``selected_stocks`` and
            ``solver_detail``.
        """
        stocks = as_item_set(event["stocks"])
        budget = event["budget"]
        periods = event.get("periods", self.periods)

        risk_cap = event["risk_limit"]
        if self.risk_limit_is_fraction:
            risk_cap = risk_cap_from_fraction(budget, risk_cap)
        bond_yield = event["bond_yield"]
        if self.bond_yield_is_percent:
            bond_yield = bond_yield_from_percent(bond_yield)

        if periods == 1:
            solver_result = RiskAllocator()(stocks, bond_yield, budget, risk_cap)
        else:
            solver_result = HorizonAllocator()(stocks, bond_yield, budget, risk_cap, periods)

        logger.info(
            "Allocation complete: rule=%s, stocks=%s, bonds=%s, selected=%d stocks",
            solver_result["rule"],
            solver_result["stock_allocation"],
            solver_result["bond_allocation"],
            len(solver_result["selected_items"]),
        )

        result = AllocateResult(
            stock_allocation=solver_result["stock_allocation"],
            bond_allocation=solver_result["bond_allocation"],
            total_profit=solver_result["total_profit"],
            selected_stocks=list(solver_result["selected_items"]),
            solver_detail=dict(solver_result),
        )
        return asdict(result)
