import numpy as np
import pytest

from irt_simulation.core.data_models import ResponseMatrix
from irt_simulation.irt.diagnostics import (
    chi_square_goodness_of_fit,
    compare_category_proportions,
)


class TestCompareCategoryProportions:
    def test_one_row_per_item_and_category(self) -> None:
        data = ResponseMatrix(
            responses=np.array(
                [[1, 3], [2, 3], [1, 1], [3, 2]], dtype=np.int8
            ),
            n_categories=3,
            index_base=1,
        )
        probs = np.full((4, 2, 3), 1.0 / 3.0)

        comparison = compare_category_proportions(data, probs)

        assert len(comparison.item_id) == 6
        np.testing.assert_array_equal(comparison.item_id, [0, 0, 0, 1, 1, 1])
        np.testing.assert_array_equal(comparison.category, [0, 1, 2, 0, 1, 2])
        np.testing.assert_allclose(
            comparison.empirical_prob, [0.5, 0.25, 0.25, 0.25, 0.25, 0.5]
        )
        np.testing.assert_allclose(comparison.model_prob, 1.0 / 3.0)
        np.testing.assert_allclose(
            comparison.difference,
            comparison.empirical_prob - comparison.model_prob,
        )

    def test_shape_mismatch_raises(self) -> None:
        data = ResponseMatrix(
            responses=np.zeros((4, 2), dtype=np.int8),
            n_categories=2,
            index_base=0,
        )

        with pytest.raises(ValueError, match="does not match"):
            compare_category_proportions(data, np.full((4, 3, 2), 0.5))


class TestChiSquareGoodnessOfFit:
    def test_exact_match_has_zero_statistic(self) -> None:
        responses = np.array([1, 1, 2, 2])
        probs = np.full((4, 2), 0.5)

        fit = chi_square_goodness_of_fit(responses, probs, index_base=1)

        assert fit.statistic == pytest.approx(0.0)
        assert fit.p_value == pytest.approx(1.0)
        assert fit.dof == 1
        np.testing.assert_array_equal(fit.observed, [2, 2])

    def test_expected_counts_sum_respondent_probabilities(self) -> None:
        responses = np.array([0, 1])
        probs = np.array([[0.9, 0.1], [0.3, 0.7]])

        fit = chi_square_goodness_of_fit(responses, probs, index_base=0)

        np.testing.assert_allclose(fit.expected, [1.2, 0.8])

    def test_poor_fit_is_detected(self) -> None:
        """All draws in the least likely category give a tiny p-value."""
        responses = np.zeros(500, dtype=np.int64)
        probs = np.tile([0.05, 0.45, 0.5], (500, 1))

        fit = chi_square_goodness_of_fit(responses, probs, index_base=0)

        assert fit.p_value < 1e-6

    def test_wrong_shape_raises(self) -> None:
        with pytest.raises(ValueError, match="shape"):
            chi_square_goodness_of_fit(np.array([1, 2]), np.full((3, 2), 0.5))
