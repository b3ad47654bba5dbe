"""
Data structures for simulated response data.

Only contracts live here; the generation logic is in generators.py.
"""

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, model_validator

from irt_simulation.core.data_models import ResponseMatrix
from irt_simulation.synthetic_data.config import GenerationConfig


class SampledParameters(BaseModel):
    """
    True item parameters in matrix form.

    Attributes:
        alphas: Discriminations, shape (n_items,).
        betas: Category boundaries, shape (n_items, n_categories - 1).
            For dichotomous items the single column is the difficulty.
        guessing: Lower asymptotes, shape (n_items,); zero except for 3PL.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    alphas: NDArray[np.float64]
    betas: NDArray[np.float64]
    guessing: NDArray[np.float64]

    @model_validator(mode="after")
    def _validate_shapes(self) -> "SampledParameters":
        if self.betas.ndim != 2:
            raise ValueError(f"betas must be 2D, got shape {self.betas.shape}")
        n_items = self.betas.shape[0]
        if self.alphas.shape != (n_items,):
            raise ValueError(
                f"alphas must have shape ({n_items},), got {self.alphas.shape}"
            )
        if self.guessing.shape != (n_items,):
            raise ValueError(
                f"guessing must have shape ({n_items},), "
                f"got {self.guessing.shape}"
            )
        return self

    @property
    def n_items(self) -> int:
        return self.betas.shape[0]

    @property
    def n_categories(self) -> int:
        return self.betas.shape[1] + 1


class SimulatedDataset(BaseModel):
    """
    Complete output from response generation.

    Contains the response table plus the true parameters it was drawn
    from, so a fitting library's estimates can be checked against them.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    thetas: NDArray[np.float64]
    parameters: SampledParameters
    responses: ResponseMatrix
    # Shape: (n_respondents, n_items, n_categories)
    probabilities: NDArray[np.float64]

    config: GenerationConfig

    @property
    def category_proportions(self) -> NDArray[np.float64]:
        """Observed category proportions, shape (n_items, n_categories)."""
        counts = np.stack(
            [
                self.responses.category_counts(j)
                for j in range(self.responses.n_items)
            ]
        )
        result: NDArray[np.float64] = counts / self.responses.n_respondents
        return result
