"""
Diagnostic utilities for checking simulated responses.

Provides functions to compare empirical category frequencies against the
probabilities the responses were drawn from.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from irt_simulation.core.data_models import ResponseMatrix


@dataclass
class CategoryProbComparison:
    """Comparison of empirical vs model category probabilities.

    One row per (item, category); categories are 0-based offsets from
    the response matrix's index base.
    """

    item_id: NDArray[np.int64]
    category: NDArray[np.int64]
    empirical_prob: NDArray[np.float64]
    model_prob: NDArray[np.float64]
    difference: NDArray[np.float64]


@dataclass(frozen=True)
class GoodnessOfFit:
    """Pearson chi-squared test of observed against expected counts."""

    statistic: float
    p_value: float
    dof: int
    observed: NDArray[np.int64]
    expected: NDArray[np.float64]


def compare_category_proportions(
    data: ResponseMatrix,
    probabilities: NDArray[np.float64],
) -> CategoryProbComparison:
    """Compare empirical vs model category probabilities.

    Args:
        data: Simulated responses.
        probabilities: Per-cell probabilities the responses were drawn
            from, shape (n_respondents, n_items, n_categories).

    Returns:
        CategoryProbComparison with one entry per item and category.
    """
    if probabilities.shape[:2] != data.responses.shape:
        raise ValueError(
            f"probabilities shape {probabilities.shape} does not match "
            f"responses shape {data.responses.shape}"
        )

    n_categories = probabilities.shape[2]
    item_ids: list[int] = []
    categories: list[int] = []
    empirical_probs: list[float] = []
    model_probs: list[float] = []

    for item_idx in range(data.n_items):
        counts = data.category_counts(item_idx)
        model_mean = probabilities[:, item_idx, :].mean(axis=0)

        for cat in range(n_categories):
            item_ids.append(item_idx)
            categories.append(cat)
            empirical_probs.append(counts[cat] / data.n_respondents)
            model_probs.append(float(model_mean[cat]))

    empirical_arr = np.array(empirical_probs, dtype=np.float64)
    model_arr = np.array(model_probs, dtype=np.float64)

    return CategoryProbComparison(
        item_id=np.array(item_ids, dtype=np.int64),
        category=np.array(categories, dtype=np.int64),
        empirical_prob=empirical_arr,
        model_prob=model_arr,
        difference=empirical_arr - model_arr,
    )


def chi_square_goodness_of_fit(
    responses: NDArray[np.integer],
    probabilities: NDArray[np.float64],
    index_base: int = 1,
) -> GoodnessOfFit:
    """
    Test whether draws for one item follow their category probabilities.

    The expected count for category k is the sum over respondents of
    P_i(k), so respondents may have different latent trait values.

    Args:
        responses: Category labels for one item, shape (n_respondents,).
        probabilities: Probabilities, shape (n_respondents, n_categories).
        index_base: Label of the lowest category.

    Returns:
        GoodnessOfFit with the chi-squared statistic and p-value.
    """
    responses = np.asarray(responses)
    if probabilities.ndim != 2 or probabilities.shape[0] != len(responses):
        raise ValueError(
            f"probabilities must have shape ({len(responses)}, n_categories), "
            f"got {probabilities.shape}"
        )

    n_categories = probabilities.shape[1]
    observed = np.bincount(
        responses.astype(np.int64) - index_base, minlength=n_categories
    ).astype(np.int64)
    expected = probabilities.sum(axis=0)

    # chisquare requires matching totals; rescale away float round-off
    expected = expected * (observed.sum() / expected.sum())

    result = stats.chisquare(f_obs=observed, f_exp=expected)

    return GoodnessOfFit(
        statistic=float(result.statistic),
        p_value=float(result.pvalue),
        dof=n_categories - 1,
        observed=observed,
        expected=expected,
    )
