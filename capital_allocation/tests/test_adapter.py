"""Integration tests for the AllocateComponent adapter."""

import logging

import pytest

from capital_allocation.adapter import AllocateComponent

ALLOCATE_RESULT_KEYS = {"stock_allocation", "bond_allocation", "total_profit", "selected_stocks", "solver_detail"}


class TestAdapterContract:
    def test_result_keys(self, sample_event):
        result = AllocateComponent().execute(sample_event)
        assert set(result.keys()) == ALLOCATE_RESULT_KEYS

    def test_fractional_risk_limit(self, sample_event):
        result = AllocateComponent().execute(sample_event)
        assert result["stock_allocation"] == 150
        assert result["bond_allocation"] == 150
        assert result["total_profit"] == pytest.approx(27.5)
        assert result["selected_stocks"] == [2]
        assert result["solver_detail"]["rule"] == "risk_allocation"

    def test_budget_split(self, sample_event):
        result = AllocateComponent().execute(sample_event)
        assert result["stock_allocation"] + result["bond_allocation"] == sample_event["budget"]

    def test_determinism(self, sample_event):
        adapter = AllocateComponent()
        assert adapter.execute(sample_event) == adapter.execute(sample_event)

    def test_logs_completion(self, sample_event, caplog):
        with caplog.at_level(logging.INFO, logger="capital_allocation.adapter"):
            AllocateComponent().execute(sample_event)
        assert "allocation complete" in caplog.text.lower()


class TestAdapterUnits:
    def test_absolute_risk_limit(self, sample_event):
        sample_event["risk_limit"] = 100
        result = AllocateComponent(risk_limit_is_fraction=False).execute(sample_event)
        assert result["stock_allocation"] == 100
        assert result["selected_stocks"] == [0]

    def test_percent_bond_yield(self, sample_event):
        sample_event["bond_yield"] = 5
        result = AllocateComponent(bond_yield_is_percent=True).execute(sample_event)
        assert result["total_profit"] == pytest.approx(27.5)

    def test_invalid_fraction_raises(self, sample_event):
        sample_event["risk_limit"] = 50
        with pytest.raises(ValueError, match="between 0 and 1"):
            AllocateComponent().execute(sample_event)


class TestAdapterHorizon:
    def test_periods_from_event(self, sample_event):
        sample_event["periods"] = 3
        result = AllocateComponent().execute(sample_event)
        assert result["solver_detail"]["rule"] == "horizon_allocation"
        assert result["stock_allocation"] == 0
        assert result["total_profit"] == pytest.approx(45)

    def test_periods_from_constructor(self, sample_event):
        result = AllocateComponent(periods=2).execute(sample_event)
        assert result["solver_detail"]["periods"] == 2

    def test_invalid_periods_raise(self):
        with pytest.raises(ValueError, match="periods"):
            AllocateComponent(periods=0)

    def test_stock_dicts_accepted(self, sample_event):
        sample_event["stocks"] = [{"cost": c, "profit": p} for c, p in sample_event["stocks"]]
        result = AllocateComponent().execute(sample_event)
        assert result["selected_stocks"] == [2]
