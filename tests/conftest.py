"""Shared fixtures for hypercube transform tests."""

import pytest
from scipy import stats

from hypercube_transform import registry


class Triangle:
    """Triangular distribution on [0, 1] exposing neither ppf nor cdf."""

    def __init__(self, mode: float):
        self.mode = mode

    def __repr__(self) -> str:
        return f"Triangle({self.mode})"


def triangle_quantile(dist: Triangle, u: float) -> float:
    c = dist.mode
    if u < c:
        return (u * c) ** 0.5
    return 1.0 - ((1.0 - u) * (1.0 - c)) ** 0.5


def triangle_cdf(dist: Triangle, x: float) -> float:
    c = dist.mode
    if x < c:
        return x * x / c
    return 1.0 - (1.0 - x) ** 2 / (1.0 - c)


@pytest.fixture
def restore_registry():
    """Restore registered rules after a test mutates them."""
    saved = dict(registry._RULES)
    yield
    registry._RULES.clear()
    registry._RULES.update(saved)


@pytest.fixture
def three_params():
    """Normal, uniform and gamma priors in declaration order."""
    return [stats.norm(0, 1), stats.uniform(0, 1), stats.gamma(2.0)]


@pytest.fixture
def dirichlet3():
    """Dirichlet over three categories."""
    return stats.dirichlet([1.0, 2.0, 3.0])
