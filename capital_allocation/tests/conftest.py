"""Shared fixtures for capital allocation tests."""

import random

import pytest


@pytest.fixture()
def example_stocks():
    """Three stocks where the best 300-budget portfolio spends exactly 300."""
    return [(100, 10), (200, 30), (150, 20)]


@pytest.fixture()
def sample_stocks():
    """Five-stock universe as ``(cost, profit)`` pairs."""
    return [(100, 10), (200, 30), (150, 20), (80, 15), (120, 25)]


@pytest.fixture()
def greedy_trap():
    """Instance where the best ratio item blocks the optimal pair."""
    return [(60, 60), (50, 45), (50, 45)]


@pytest.fixture()
def sample_event(example_stocks):
    """Pipeline event with a fractional risk limit."""
    return {
        "stocks": [list(s) for s in example_stocks],
        "budget": 300,
        "bond_yield": 0.05,
        "risk_limit": 0.5,
    }


def random_instance(seed, n_items=8, max_cost=60, max_profit=40):
    """Reproducible random item list; costs and profits may be zero."""
    rng = random.Random(seed)
    return [(rng.randint(0, max_cost), rng.randint(0, max_profit)) for _ in range(n_items)]


@pytest.fixture()
def make_instance():
    """Factory fixture for :func:`random_instance`."""
    return random_instance
