"""
Generalized Partial Credit Model (GPCM) response simulation.

For respondent i and item j with discrimination a_j and boundary
parameters b_j = [0, β_j1, ..., β_j(m-1)] (a leading zero is prepended):

    u_k = exp( Σ_{c=1}^{k} a_j (θ_i - b_jc) ),    k = 1..m
    P(Y_ij = k | θ_i) = u_k / Σ_r u_r

Logits are accumulated in the log domain and normalized with a
max-shifted softmax. No clipping is applied, so the highest category
dominates as θ -> +inf and the lowest as θ -> -inf.
"""

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.random import Generator
from numpy.typing import ArrayLike, NDArray

from irt_simulation.core.errors import InvalidDimensions
from irt_simulation.core.utils import get_rng, label_dtype, softmax

logger = logging.getLogger(__name__)


def check_item_parameters(
    betas: ArrayLike,
    alphas: ArrayLike,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Convert item parameters to float arrays and check their shapes agree.

    Raises:
        InvalidDimensions: If alphas is not 1D, betas is not 2D, or
            len(alphas) != rows(betas).
    """
    beta_arr = np.asarray(betas, dtype=np.float64)
    alpha_arr = np.asarray(alphas, dtype=np.float64)

    if alpha_arr.ndim != 1:
        raise InvalidDimensions(
            f"alphas must be 1D, got shape {alpha_arr.shape}",
            alphas=alpha_arr.shape,
        )
    if beta_arr.ndim != 2:
        raise InvalidDimensions(
            f"betas must be a 2D (items x boundaries) table, "
            f"got shape {beta_arr.shape}",
            betas=beta_arr.shape,
        )
    if alpha_arr.shape[0] != beta_arr.shape[0]:
        raise InvalidDimensions(
            f"Number of alphas ({alpha_arr.shape[0]}) must equal number of "
            f"beta rows ({beta_arr.shape[0]})",
            alphas=alpha_arr.shape,
            betas=beta_arr.shape,
        )
    return beta_arr, alpha_arr


def _as_inputs(
    thetas: ArrayLike,
    betas: ArrayLike,
    alphas: ArrayLike,
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """Convert inputs to float arrays and check their shapes agree."""
    theta_arr = np.asarray(thetas, dtype=np.float64)
    if theta_arr.ndim != 1:
        raise InvalidDimensions(
            f"thetas must be 1D, got shape {theta_arr.shape}",
            thetas=theta_arr.shape,
        )
    beta_arr, alpha_arr = check_item_parameters(betas, alphas)
    return theta_arr, beta_arr, alpha_arr


def category_probabilities(
    thetas: ArrayLike,
    betas: ArrayLike,
    alphas: ArrayLike,
) -> NDArray[np.float64]:
    """
    Compute GPCM category probabilities for every respondent and item.

    Args:
        thetas: Latent trait values, shape (n_respondents,).
        betas: Boundary parameters, shape (n_items, n_categories - 1).
        alphas: Discrimination parameters, shape (n_items,).

    Returns:
        Probabilities, shape (n_respondents, n_items, n_categories).
        Each [i, j, :] vector sums to 1.

    Raises:
        InvalidDimensions: If len(alphas) != rows(betas) or an input has
            the wrong number of dimensions.
    """
    theta_arr, beta_arr, alpha_arr = _as_inputs(thetas, betas, alphas)

    n_items = beta_arr.shape[0]
    boundaries = np.concatenate(
        [np.zeros((n_items, 1), dtype=np.float64), beta_arr], axis=1
    )

    # Shape: (n_respondents, n_items, n_categories)
    steps = alpha_arr[np.newaxis, :, np.newaxis] * (
        theta_arr[:, np.newaxis, np.newaxis] - boundaries[np.newaxis, :, :]
    )
    logits = np.cumsum(steps, axis=2)

    return softmax(logits, axis=2)


def draw_categories(
    probabilities: NDArray[np.float64],
    rng: Generator,
) -> NDArray[np.int64]:
    """
    Draw one 0-based category per probability vector (last axis).

    One uniform variate is drawn per cell and compared against the
    cumulative probabilities, so the whole table is sampled in one pass.

    Args:
        probabilities: Array of shape (..., n_categories).
        rng: Random number generator.

    Returns:
        Array of shape probabilities.shape[:-1] with indices in
        [0, n_categories - 1].
    """
    n_categories = probabilities.shape[-1]
    cumprobs = np.cumsum(probabilities, axis=-1)
    u = rng.random(probabilities.shape[:-1])

    # Count the cumulative probabilities below u; guard against round-off
    sampled = (cumprobs < u[..., np.newaxis]).sum(axis=-1)
    result: NDArray[np.int64] = np.minimum(sampled, n_categories - 1).astype(
        np.int64
    )
    return result


def simulate(
    thetas: Sequence[float] | NDArray[np.float64],
    betas: Sequence[Sequence[float]] | NDArray[np.float64],
    alphas: Sequence[float] | NDArray[np.float64],
    rng: Generator | int | None = None,
    index_base: int = 1,
) -> NDArray[np.signedinteger[Any]]:
    """
    Simulate GPCM responses.

    Args:
        thetas: Latent trait values, one per respondent.
        betas: Boundary parameters, one row of (m - 1) values per item.
        alphas: Discrimination parameters, one per item.
        rng: Random number generator or seed. Fixing it makes the output
            reproducible.
        index_base: Label of the lowest category. 1 gives categories in
            [1, m]; 0 gives the shifted [0, m - 1] convention.

    Returns:
        Array of shape (n_respondents, n_items) of category labels. The
        dtype is int8 unless the top label needs a wider integer.

    Raises:
        InvalidDimensions: If len(alphas) != rows(betas) or an input has
            the wrong number of dimensions.
        ValueError: If index_base is not 0 or 1.
    """
    if index_base not in (0, 1):
        raise ValueError(f"index_base must be 0 or 1, got {index_base}")

    rng = get_rng(rng)
    probs = category_probabilities(thetas, betas, alphas)
    n_respondents, n_items, n_categories = probs.shape

    logger.debug(
        "Simulating %d respondents x %d items with %d categories",
        n_respondents,
        n_items,
        n_categories,
    )

    responses = draw_categories(probs, rng) + index_base
    return responses.astype(label_dtype(n_categories, index_base))
