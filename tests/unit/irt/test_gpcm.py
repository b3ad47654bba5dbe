"""
Tests for the GPCM category probabilities and response simulator.
"""

import numpy as np
import pytest
from numpy.typing import NDArray

from irt_simulation.core.errors import InvalidDimensions
from irt_simulation.core.utils import get_rng
from irt_simulation.irt import (
    category_probabilities,
    chi_square_goodness_of_fit,
    draw_categories,
    simulate,
)


class TestCategoryProbabilities:
    """Tests for category_probabilities."""

    def test_shape(
        self,
        example_thetas: NDArray[np.float64],
        example_betas: NDArray[np.float64],
        example_alphas: NDArray[np.float64],
    ) -> None:
        probs = category_probabilities(
            example_thetas, example_betas, example_alphas
        )

        assert probs.shape == (200, 5, 4)

    def test_probabilities_sum_to_one(
        self,
        example_thetas: NDArray[np.float64],
        example_betas: NDArray[np.float64],
        example_alphas: NDArray[np.float64],
    ) -> None:
        """Each cell sums to 1 with entries in [0, 1]."""
        probs = category_probabilities(
            example_thetas, example_betas, example_alphas
        )

        np.testing.assert_allclose(probs.sum(axis=2), 1.0, atol=1e-9)
        assert np.all(probs >= 0.0)
        assert np.all(probs <= 1.0)

    def test_matches_closed_form(
        self,
        single_item_betas: NDArray[np.float64],
        single_item_alphas: NDArray[np.float64],
    ) -> None:
        """At theta=0.6 the cumulative logits are 0.6, 2.2, 2.8, 2.4."""
        probs = category_probabilities(
            [0.6], single_item_betas, single_item_alphas
        )

        logits = np.array([0.6, 2.2, 2.8, 2.4])
        expected = np.exp(logits) / np.exp(logits).sum()
        np.testing.assert_allclose(probs[0, 0], expected, rtol=1e-12)

    def test_zero_discrimination_is_uniform(self) -> None:
        """alpha = 0 gives 1/m for every category regardless of theta."""
        probs = category_probabilities(
            [-3.0, 0.0, 0.6, 3.0], [[-1.0, 0.0, 1.0]], [0.0]
        )

        np.testing.assert_allclose(probs[:, 0, :], 0.25, rtol=1e-12)

    def test_high_theta_selects_top_category(
        self,
        single_item_betas: NDArray[np.float64],
        single_item_alphas: NDArray[np.float64],
    ) -> None:
        probs = category_probabilities(
            [50.0], single_item_betas, single_item_alphas
        )[0, 0]

        assert probs[3] == pytest.approx(1.0)
        np.testing.assert_allclose(probs[:3], 0.0, atol=1e-12)

    def test_low_theta_selects_bottom_category(
        self,
        single_item_betas: NDArray[np.float64],
        single_item_alphas: NDArray[np.float64],
    ) -> None:
        probs = category_probabilities(
            [-50.0], single_item_betas, single_item_alphas
        )[0, 0]

        assert probs[0] == pytest.approx(1.0)
        np.testing.assert_allclose(probs[1:], 0.0, atol=1e-12)

    def test_top_category_probability_increases_with_theta(
        self,
        single_item_betas: NDArray[np.float64],
        single_item_alphas: NDArray[np.float64],
    ) -> None:
        thetas = np.linspace(-4.0, 4.0, 41)
        probs = category_probabilities(
            thetas, single_item_betas, single_item_alphas
        )

        assert np.all(np.diff(probs[:, 0, 3]) > 0)
        assert np.all(np.diff(probs[:, 0, 0]) < 0)

    def test_extreme_inputs_stay_finite(self) -> None:
        probs = category_probabilities(
            [-500.0, 500.0], [[-3.0, 0.0, 3.0]], [10.0]
        )

        assert np.isfinite(probs).all()
        np.testing.assert_allclose(probs.sum(axis=2), 1.0)


class TestDimensionValidation:
    """Mismatched shapes raise InvalidDimensions and produce nothing."""

    def test_alpha_count_must_match_beta_rows(self) -> None:
        with pytest.raises(InvalidDimensions, match="must equal"):
            simulate(
                thetas=[0.0, 1.0],
                betas=[[-1.0, 0.0, 1.0]] * 3,
                alphas=[1.0, 1.0],
            )

    def test_error_reports_shapes(self) -> None:
        with pytest.raises(InvalidDimensions) as excinfo:
            category_probabilities([0.0], [[0.0], [1.0]], [1.0, 1.0, 1.0])

        assert excinfo.value.shapes == {"alphas": (3,), "betas": (2, 1)}

    def test_betas_must_be_2d(self) -> None:
        with pytest.raises(InvalidDimensions, match="2D"):
            simulate([0.0], [-1.0, 0.0, 1.0], [1.0])

    def test_thetas_must_be_1d(self) -> None:
        with pytest.raises(InvalidDimensions, match="thetas"):
            simulate([[0.0, 1.0]], [[0.0]], [1.0])

    def test_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            simulate([0.0], [[0.0, 1.0]], [1.0, 2.0])


class TestSimulate:
    """Tests for the response simulator."""

    def test_output_shape_and_dtype(
        self,
        example_thetas: NDArray[np.float64],
        example_betas: NDArray[np.float64],
        example_alphas: NDArray[np.float64],
    ) -> None:
        responses = simulate(
            example_thetas, example_betas, example_alphas, rng=get_rng(1)
        )

        assert responses.shape == (200, 5)
        assert responses.dtype == np.int8

    def test_categories_are_one_based_by_default(
        self,
        example_thetas: NDArray[np.float64],
        example_betas: NDArray[np.float64],
        example_alphas: NDArray[np.float64],
    ) -> None:
        responses = simulate(
            example_thetas, example_betas, example_alphas, rng=get_rng(2)
        )

        assert responses.min() >= 1
        assert responses.max() <= 4

    def test_zero_based_categories(
        self,
        example_thetas: NDArray[np.float64],
        example_betas: NDArray[np.float64],
        example_alphas: NDArray[np.float64],
    ) -> None:
        responses = simulate(
            example_thetas,
            example_betas,
            example_alphas,
            rng=get_rng(2),
            index_base=0,
        )

        assert responses.min() >= 0
        assert responses.max() <= 3

    def test_index_base_only_shifts_labels(
        self,
        example_thetas: NDArray[np.float64],
        example_betas: NDArray[np.float64],
        example_alphas: NDArray[np.float64],
    ) -> None:
        one_based = simulate(
            example_thetas, example_betas, example_alphas, rng=get_rng(5)
        )
        zero_based = simulate(
            example_thetas,
            example_betas,
            example_alphas,
            rng=get_rng(5),
            index_base=0,
        )

        np.testing.assert_array_equal(one_based - 1, zero_based)

    @pytest.mark.parametrize("index_base", [0, 1])
    def test_wide_items_keep_labels_in_range(self, index_base: int) -> None:
        """200 categories overflow int8; labels must not wrap around."""
        betas = [np.linspace(-3.0, 3.0, 199)]

        responses = simulate(
            np.full(2000, 5.0),
            betas,
            [1.0],
            rng=get_rng(0),
            index_base=index_base,
        )

        assert responses.dtype == np.int16
        assert responses.min() >= index_base
        assert responses.max() <= index_base + 199
        assert responses.max() > 127

    def test_invalid_index_base_raises(self) -> None:
        with pytest.raises(ValueError, match="index_base"):
            simulate([0.0], [[0.0]], [1.0], index_base=2)

    def test_reproducible_with_same_seed(
        self,
        example_thetas: NDArray[np.float64],
        example_betas: NDArray[np.float64],
        example_alphas: NDArray[np.float64],
    ) -> None:
        responses1 = simulate(
            example_thetas, example_betas, example_alphas, rng=get_rng(123)
        )
        responses2 = simulate(
            example_thetas, example_betas, example_alphas, rng=get_rng(123)
        )

        np.testing.assert_array_equal(responses1, responses2)

    def test_accepts_integer_seed(
        self,
        example_thetas: NDArray[np.float64],
        example_betas: NDArray[np.float64],
        example_alphas: NDArray[np.float64],
    ) -> None:
        responses1 = simulate(
            example_thetas, example_betas, example_alphas, rng=9
        )
        responses2 = simulate(
            example_thetas, example_betas, example_alphas, rng=9
        )

        np.testing.assert_array_equal(responses1, responses2)

    def test_accepts_plain_lists(self) -> None:
        responses = simulate(
            thetas=[-1.0, 0.0, 1.0],
            betas=[[-1.0, 0.0, 1.0], [0.0, 0.5, 1.0]],
            alphas=[1.0, 1.5],
            rng=get_rng(0),
        )

        assert responses.shape == (3, 2)

    def test_draws_follow_computed_distribution(
        self,
        single_item_betas: NDArray[np.float64],
        single_item_alphas: NDArray[np.float64],
    ) -> None:
        """Many draws at theta=0.6 pass a chi-squared goodness-of-fit test."""
        n_draws = 20000
        thetas = np.full(n_draws, 0.6)

        responses = simulate(
            thetas, single_item_betas, single_item_alphas, rng=get_rng(2718)
        )
        probs = category_probabilities(
            thetas, single_item_betas, single_item_alphas
        )
        fit = chi_square_goodness_of_fit(
            responses[:, 0], probs[:, 0, :], index_base=1
        )

        assert fit.dof == 3
        assert fit.p_value > 0.001


class TestDrawCategories:
    def test_point_mass_always_selected(self) -> None:
        probs = np.tile([0.0, 0.0, 1.0, 0.0], (100, 1))

        draws = draw_categories(probs, get_rng(0))

        np.testing.assert_array_equal(draws, 2)

    def test_preserves_leading_shape(self) -> None:
        probs = np.full((7, 3, 5), 0.2)

        draws = draw_categories(probs, get_rng(0))

        assert draws.shape == (7, 3)
        assert draws.min() >= 0
        assert draws.max() <= 4
