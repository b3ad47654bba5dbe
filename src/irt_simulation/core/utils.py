"""
Core utility functions shared across the simulation modules.
"""

from typing import Any

import numpy as np
from numpy.random import Generator
from numpy.typing import NDArray


def get_rng(seed: int | Generator | None = None) -> Generator:
    """
    Create a numpy random Generator with optional seed.

    Args:
        seed: Random seed for reproducibility, or an existing Generator
            which is returned unchanged. If None, uses entropy.

    Returns:
        A numpy random Generator instance.
    """
    if isinstance(seed, Generator):
        return seed
    return np.random.default_rng(seed)


def softmax(
    logits: NDArray[np.floating], axis: int = -1
) -> NDArray[np.float64]:
    """
    Compute softmax probabilities from logits.

    The maximum is subtracted before exponentiating, so very large logits
    (extreme abilities) neither overflow nor collapse to a uniform vector.

    Args:
        logits: Array of logits.
        axis: Axis along which to compute softmax.

    Returns:
        Array of probabilities that sum to 1 along the specified axis.
    """
    shifted = logits - np.max(logits, axis=axis, keepdims=True)
    exp_logits = np.exp(shifted)
    result: NDArray[np.float64] = exp_logits / np.sum(
        exp_logits, axis=axis, keepdims=True
    )
    return result


def label_dtype(n_categories: int, index_base: int = 1) -> np.dtype[Any]:
    """
    Smallest signed integer dtype that holds every category label.

    Labels run from ``index_base`` to ``index_base + n_categories - 1``;
    int8 covers the usual rating scales and wider items get a wider type.
    """
    top = index_base + n_categories - 1
    for dtype in (np.int8, np.int16, np.int32):
        if top <= np.iinfo(dtype).max:
            return np.dtype(dtype)
    return np.dtype(np.int64)
