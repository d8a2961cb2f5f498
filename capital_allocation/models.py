"""Data models for investable items and allocation results."""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from numbers import Real
from typing import Any


@dataclass(frozen=True)
class Item:
    """A discrete investment opportunity.

    Parameters
    ----------
    cost : int
        Non-negative integral purchase cost. Integral floats (``100.0``) are
        accepted and stored as ``int``.
    profit : float
        Non-negative expected profit over the whole horizon.

    Raises
    ------
    TypeError
        If cost or profit is not a real number.
    ValueError
        If cost is negative or fractional, or profit is negative or not finite.
    """

    cost: int
    profit: float

    def __post_init__(self) -> None:
        """Validate and normalize cost and profit."""
        if isinstance(self.cost, bool) or not isinstance(self.cost, Real):
            raise TypeError(f"Item cost must be a number, got {self.cost!r}.")
        if isinstance(self.profit, bool) or not isinstance(self.profit, Real):
            raise TypeError(f"Item profit must be a number, got {self.profit!r}.")
        if not math.isfinite(self.cost) or self.cost != int(self.cost):
            raise ValueError(f"Item cost must be an integer amount, got {self.cost!r}.")
        if self.cost < 0:
            raise ValueError(f"Item cost must be non-negative, got {self.cost!r}.")
        if not math.isfinite(self.profit) or self.profit < 0:
            raise ValueError(f"Item profit must be a finite non-negative number, got {self.profit!r}.")
        # frozen dataclass: bypass __setattr__ to store normalized values
        object.__setattr__(self, "cost", int(self.cost))
        object.__setattr__(self, "profit", float(self.profit))

    @property
    def ratio(self) -> float:
        """Profit per unit of cost; zero-cost items rank first."""
        if self.cost == 0:
            return math.inf
        return self.profit / self.cost


def as_item(value: Any) -> Item:
    """Coerce a single ``Item``, ``(cost, profit)`` pair, or mapping to an ``Item``."""
    if isinstance(value, Item):
        return value
    if isinstance(value, Mapping):
        try:
            return Item(cost=value["cost"], profit=value["profit"])
        except KeyError as exc:
            raise ValueError(f"Item mapping is missing key {exc.args[0]!r}.") from None
    try:
        cost, profit = value
    except (TypeError, ValueError):
        raise ValueError(f"Cannot interpret {value!r} as a (cost, profit) pair.") from None
    return Item(cost=cost, profit=profit)


def as_item_set(items: Iterable[Any]) -> list[Item]:
    """Normalize an iterable of item-like values into a new list of ``Item``.

    The position of each entry is its index in every solver result. The
    input is never mutated.

    Parameters
    ----------
    items : Iterable[Any]
        ``Item`` instances, ``(cost, profit)`` pairs, or mappings with
        ``cost`` and ``profit`` keys.

    Returns
    -------
    list[Item]
    """
    if items is None:
        raise ValueError("Items must be an iterable, got None.")
    return [as_item(value) for value in items]


@dataclass
class AllocateResult:
    """Stock/bond split produced by the allocation component.

    Parameters
    ----------
    stock_allocation : float
        Budget placed in the stock knapsack.
    bond_allocation : float
        Budget placed in bonds.
    total_profit : float
        Combined stock and bond profit over the horizon.
    selected_stocks : list[int]
        Indices of the stocks bought with ``stock_allocation``.
    solver_detail : dict[str, Any]
        Full allocator result for diagnostics.
    """

    stock_allocation: float
    bond_allocation: float
    total_profit: float
    selected_stocks: list[int]
    solver_detail: dict[str, Any]

    def __post_init__(self) -> None:
        """Validate the budget split."""
        if self.stock_allocation < 0 or self.bond_allocation < 0:
            raise ValueError("stock_allocation and bond_allocation must be non-negative")
        if len(set(self.selected_stocks)) != len(self.selected_stocks):
            raise ValueError("selected_stocks must not contain duplicates")
