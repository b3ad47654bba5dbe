"""Shared parameter fixtures used across the test suite."""

import numpy as np
import pytest
from numpy.typing import NDArray

from irt_simulation.core.utils import get_rng


@pytest.fixture
def single_item_betas() -> NDArray[np.float64]:
    """One four-category item with boundaries -1, 0, 1."""
    return np.array([[-1.0, 0.0, 1.0]], dtype=np.float64)


@pytest.fixture
def single_item_alphas() -> NDArray[np.float64]:
    return np.array([1.0], dtype=np.float64)


@pytest.fixture
def example_betas() -> NDArray[np.float64]:
    """Five four-category items with ordered boundaries."""
    return np.array(
        [
            [-2.0, -1.0, 0.0],
            [-1.5, -0.5, 0.5],
            [-1.0, 0.0, 1.0],
            [-0.5, 0.5, 1.5],
            [0.0, 1.0, 2.0],
        ],
        dtype=np.float64,
    )


@pytest.fixture
def example_alphas() -> NDArray[np.float64]:
    return np.array([0.8, 1.0, 1.2, 1.5, 2.0], dtype=np.float64)


@pytest.fixture
def example_thetas() -> NDArray[np.float64]:
    """Standard normal abilities for 200 respondents."""
    return get_rng(2024).standard_normal(200)
