"""
Item parameter models for the parametric IRT families.

Each item knows how to turn latent trait values into a probability
distribution over its response categories:

    Rasch:  P(1 | θ) = 1 / (1 + exp(-(θ - b)))
    2PL:    P(1 | θ) = 1 / (1 + exp(-a(θ - b)))
    3PL:    P(1 | θ) = c + (1 - c) / (1 + exp(-a(θ - b)))
    PCM:    GPCM with a = 1
    GPCM:   P(k | θ) ∝ exp( Σ_{c<=k} a(θ - b_c) ),  b_1 = 0

Items of different families and category counts can be mixed in one
test; ``sample_item_responses`` draws each column independently.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.random import Generator
from numpy.typing import ArrayLike, NDArray
from pydantic import BaseModel, ConfigDict, Field, model_validator

from irt_simulation.core.utils import get_rng, label_dtype
from irt_simulation.irt.gpcm import (
    category_probabilities,
    check_item_parameters,
    draw_categories,
)

# Exponent clipping for the logistic curve; exp(30) is far past saturation
EXPONENT_CLIP_MIN = -30.0
EXPONENT_CLIP_MAX = 30.0


class ItemModel(BaseModel, ABC):
    """Abstract base class for one item's category probability law."""

    model_config = ConfigDict(frozen=True)

    item_id: int

    @property
    @abstractmethod
    def n_categories(self) -> int:
        """Number of response categories."""
        ...

    @abstractmethod
    def compute_probabilities(
        self, theta: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """
        Compute category probabilities at given theta values.

        Args:
            theta: Latent trait values, shape (n_theta,).

        Returns:
            Probabilities, shape (n_theta, n_categories), rows sum to 1.
        """
        ...


class TwoPLItem(ItemModel):
    """
    Two-parameter logistic item (dichotomous).

    Category 0 is an incorrect / not-endorsed response, category 1 correct.

    Attributes:
        discrimination: Slope a.
        difficulty: Location b, the theta where P(1) = 0.5.
    """

    discrimination: float
    difficulty: float

    @property
    def n_categories(self) -> int:
        return 2

    @property
    def lower_asymptote(self) -> float:
        return 0.0

    def probability_correct(
        self, theta: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """P(category 1 | theta), shape (n_theta,)."""
        theta = np.asarray(theta, dtype=np.float64)
        exponent = -self.discrimination * (theta - self.difficulty)
        exponent = np.clip(exponent, EXPONENT_CLIP_MIN, EXPONENT_CLIP_MAX)
        c = self.lower_asymptote
        result: NDArray[np.float64] = c + (1.0 - c) / (1.0 + np.exp(exponent))
        return result

    def compute_probabilities(
        self, theta: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        p_correct = self.probability_correct(theta)
        return np.column_stack([1.0 - p_correct, p_correct])


class RaschItem(TwoPLItem):
    """Rasch (1PL) item: a 2PL item whose discrimination is fixed at 1."""

    discrimination: float = 1.0

    @model_validator(mode="after")
    def _validate_unit_discrimination(self) -> "RaschItem":
        if self.discrimination != 1.0:
            raise ValueError(
                f"Rasch items have discrimination 1, got {self.discrimination}"
            )
        return self


class ThreePLItem(TwoPLItem):
    """
    Three-parameter logistic item with a guessing floor.

    Attributes:
        guessing: Lower asymptote c; the probability that a respondent of
            very low ability still answers correctly.
    """

    guessing: float = Field(..., ge=0.0, lt=1.0)

    @property
    def lower_asymptote(self) -> float:
        return self.guessing


class GPCMItem(ItemModel):
    """
    Generalized Partial Credit item.

    Attributes:
        discrimination: Slope a shared by all category steps.
        thresholds: The (m - 1) boundary parameters; a leading 0 is added
            internally so the item has m categories.
    """

    discrimination: float
    thresholds: tuple[float, ...]

    @model_validator(mode="after")
    def _validate_thresholds(self) -> "GPCMItem":
        if len(self.thresholds) < 1:
            raise ValueError(
                "Must have at least one threshold (two categories)"
            )
        return self

    @property
    def n_categories(self) -> int:
        return len(self.thresholds) + 1

    def compute_probabilities(
        self, theta: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        probs = category_probabilities(
            theta, [self.thresholds], [self.discrimination]
        )
        result: NDArray[np.float64] = probs[:, 0, :]
        return result


class PartialCreditItem(GPCMItem):
    """Partial Credit Model item: a GPCM item with discrimination 1."""

    discrimination: float = 1.0

    @model_validator(mode="after")
    def _validate_unit_discrimination(self) -> "PartialCreditItem":
        if self.discrimination != 1.0:
            raise ValueError(
                f"PCM items have discrimination 1, got {self.discrimination}"
            )
        return self


def items_from_matrix(
    betas: ArrayLike,
    alphas: ArrayLike,
) -> list[GPCMItem]:
    """
    Build GPCM items from the (items x boundaries) matrix representation.

    Raises:
        InvalidDimensions: If alphas is not 1D, betas is not 2D, or
            len(alphas) != rows(betas).
    """
    beta_arr, alpha_arr = check_item_parameters(betas, alphas)
    return [
        GPCMItem(
            item_id=j,
            discrimination=float(alpha_arr[j]),
            thresholds=tuple(float(b) for b in beta_arr[j]),
        )
        for j in range(beta_arr.shape[0])
    ]


def sample_item_responses(
    thetas: NDArray[np.float64],
    items: Sequence[ItemModel],
    rng: Generator | None = None,
    index_base: int = 0,
) -> NDArray[np.signedinteger[Any]]:
    """
    Sample responses for all respondents and items.

    Items may belong to different families and have different numbers
    of categories.

    Args:
        thetas: Array of shape (n_respondents,) with latent trait values.
        items: Item models, one per column.
        rng: Random number generator.
        index_base: Label of the lowest category (0 or 1).

    Returns:
        Array of shape (n_respondents, n_items) with category labels.
    """
    if index_base not in (0, 1):
        raise ValueError(f"index_base must be 0 or 1, got {index_base}")
    if rng is None:
        rng = get_rng()

    thetas = np.asarray(thetas, dtype=np.float64)
    n_categories = max((item.n_categories for item in items), default=2)
    responses = np.empty(
        (len(thetas), len(items)), dtype=label_dtype(n_categories, index_base)
    )

    for j, item in enumerate(items):
        probs = item.compute_probabilities(thetas)
        responses[:, j] = draw_categories(probs, rng) + index_base

    return responses
