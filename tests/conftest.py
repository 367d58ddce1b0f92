"""
Test configuration and fixtures for pytest.

Fixtures shared by the statcell test modules.
"""
import numpy as np
import pytest

from statcell.styles import reset_styles


@pytest.fixture
def one_to_nine():
    """The integers 1..9; type-8 quartiles are 2.667, 5, 7.333."""
    return list(range(1, 10))


@pytest.fixture
def three_groups():
    """Outcome and group labels for a one-way layout (3 groups x 4)."""
    x = [4.1, 5.0, 5.5, 4.8, 6.2, 6.9, 7.1, 6.5, 5.1, 5.9, 6.0, 5.4]
    group = ["a"] * 4 + ["b"] * 4 + ["c"] * 4
    return x, group


@pytest.fixture
def random_sample():
    """Reproducible normal sample with a missing value."""
    rng = np.random.default_rng(42)
    values = list(rng.normal(10, 2, size=50))
    values[7] = float("nan")
    return values


@pytest.fixture
def clean_styles():
    """Restore the style registry after a test registers styles."""
    reset_styles()
    yield
    reset_styles()
