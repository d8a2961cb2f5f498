"""Unit tests for items, item sets and unit conversion."""

import copy
import math

import pytest

from capital_allocation.models import AllocateResult, Item, as_item_set
from capital_allocation.solver import bond_yield_from_percent, risk_cap_from_fraction


class TestItem:
    def test_valid_item(self):
        item = Item(cost=100, profit=10)
        assert item.cost == 100
        assert item.profit == 10.0

    def test_integral_float_cost_normalized(self):
        item = Item(cost=100.0, profit=10)
        assert item.cost == 100
        assert isinstance(item.cost, int)

    def test_fractional_cost_raises(self):
        with pytest.raises(ValueError, match="integer amount"):
            Item(cost=10.5, profit=1)

    def test_negative_cost_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            Item(cost=-1, profit=1)

    def test_negative_profit_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            Item(cost=1, profit=-0.5)

    def test_nan_profit_raises(self):
        with pytest.raises(ValueError, match="finite"):
            Item(cost=1, profit=math.nan)

    def test_non_numeric_raises(self):
        with pytest.raises(TypeError, match="cost must be a number"):
            Item(cost="100", profit=1)

    def test_frozen(self):
        item = Item(cost=1, profit=1)
        with pytest.raises(AttributeError):
            item.cost = 2

    def test_ratio(self):
        assert Item(cost=200, profit=30).ratio == pytest.approx(0.15)

    def test_zero_cost_ratio_is_infinite(self):
        assert Item(cost=0, profit=5).ratio == math.inf


class TestAsItemSet:
    def test_pairs(self, example_stocks):
        items = as_item_set(example_stocks)
        assert items == [Item(100, 10), Item(200, 30), Item(150, 20)]

    def test_mappings(self):
        items = as_item_set([{"cost": 5, "profit": 2}])
        assert items == [Item(5, 2)]

    def test_mixed(self):
        items = as_item_set([Item(1, 1), (2, 2), {"cost": 3, "profit": 3}])
        assert [i.cost for i in items] == [1, 2, 3]

    def test_no_mutation(self, sample_stocks):
        original = copy.deepcopy(sample_stocks)
        as_item_set(sample_stocks)
        assert sample_stocks == original

    def test_empty(self):
        assert as_item_set([]) == []

    def test_missing_key_raises(self):
        with pytest.raises(ValueError, match="missing key 'profit'"):
            as_item_set([{"cost": 5}])

    def test_bad_shape_raises(self):
        with pytest.raises(ValueError, match="cost, profit"):
            as_item_set([(1, 2, 3)])

    def test_none_raises(self):
        with pytest.raises(ValueError, match="iterable"):
            as_item_set(None)


class TestUnitConversion:
    def test_risk_fraction(self):
        assert risk_cap_from_fraction(300, 0.5) == pytest.approx(150)

    def test_risk_fraction_bounds(self):
        assert risk_cap_from_fraction(300, 0) == 0
        assert risk_cap_from_fraction(300, 1) == pytest.approx(300)

    @pytest.mark.parametrize("fraction", [-0.1, 1.5])
    def test_risk_fraction_out_of_range_raises(self, fraction):
        with pytest.raises(ValueError, match="between 0 and 1"):
            risk_cap_from_fraction(300, fraction)

    def test_bond_percent(self):
        assert bond_yield_from_percent(5) == pytest.approx(0.05)


class TestAllocateResult:
    def test_negative_allocation_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            AllocateResult(
                stock_allocation=-1,
                bond_allocation=301,
                total_profit=0.0,
                selected_stocks=[],
                solver_detail={},
            )

    def test_duplicate_stocks_raise(self):
        with pytest.raises(ValueError, match="duplicates"):
            AllocateResult(
                stock_allocation=100,
                bond_allocation=200,
                total_profit=0.0,
                selected_stocks=[0, 0],
                solver_detail={},
            )
