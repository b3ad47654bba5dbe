"""
Orchestration layer for simulated response data.

This module ties together abilities, item parameters and the response
models to generate complete response tables.
"""

import logging
from collections.abc import Sequence

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from irt_simulation.core.data_models import ResponseMatrix
from irt_simulation.core.utils import get_rng, label_dtype
from irt_simulation.irt.gpcm import category_probabilities, draw_categories
from irt_simulation.synthetic_data.config import GenerationConfig
from irt_simulation.synthetic_data.data_models import SimulatedDataset
from irt_simulation.synthetic_data.parameters import (
    build_items,
    sample_item_parameters,
)
from irt_simulation.synthetic_data.sampling import draw_sample

logger = logging.getLogger(__name__)


def generate_responses(config: GenerationConfig) -> SimulatedDataset:
    """
    Generate a simulated response dataset.

    This is the main entry point for the generation pipeline:
        1. Sample respondent abilities
        2. Sample item parameters
        3. Compute category probabilities under the configured model
        4. Draw one category per respondent and item

    Args:
        config: Complete generation configuration.

    Returns:
        SimulatedDataset with the responses and the true parameters.
    """
    rng = get_rng(config.random_seed)

    logger.info(
        "Generating %s responses: %d respondents x %d items, %d categories",
        config.model,
        config.n_respondents,
        config.n_items,
        config.n_categories,
    )

    # Step 1: Sample abilities
    thetas = draw_sample(
        n=config.n_respondents,
        distribution_name=config.ability.distribution,
        distribution_params=config.ability.params,
        rng=rng,
    )

    # Step 2: Sample item parameters
    parameters = sample_item_parameters(config, rng)

    # Step 3: Category probabilities, (n_respondents, n_items, n_categories)
    if config.is_dichotomous:
        items = build_items(parameters, config.model)
        probabilities = np.stack(
            [item.compute_probabilities(thetas) for item in items], axis=1
        )
    else:
        probabilities = category_probabilities(
            thetas, parameters.betas, parameters.alphas
        )

    # Step 4: Draw responses
    raw = draw_categories(probabilities, rng) + config.index_base
    responses = ResponseMatrix(
        responses=raw.astype(
            label_dtype(config.n_categories, config.index_base)
        ),
        n_categories=config.n_categories,
        index_base=config.index_base,
    )

    logger.debug("Ability mean %.3f, sd %.3f", thetas.mean(), thetas.std())

    return SimulatedDataset(
        thetas=thetas,
        parameters=parameters,
        responses=responses,
        probabilities=probabilities,
        config=config,
    )


def generate_from_parameters(
    thetas: Sequence[float] | NDArray[np.float64],
    betas: Sequence[Sequence[float]] | NDArray[np.float64],
    alphas: Sequence[float] | NDArray[np.float64],
    seed: int | None = None,
    index_base: int = 1,
) -> ResponseMatrix:
    """
    Generate GPCM responses given pre-specified parameters.

    Useful for controlled experiments where the abilities and item
    parameters are fixed rather than sampled.

    Args:
        thetas: Latent trait values, one per respondent.
        betas: Boundary parameters, shape (n_items, n_categories - 1).
        alphas: Discriminations, one per item.
        seed: Random seed.
        index_base: Label of the lowest category (0 or 1).

    Returns:
        ResponseMatrix with the simulated responses.

    Raises:
        InvalidDimensions: If len(alphas) != rows(betas).
    """
    rng = get_rng(seed)
    probabilities = category_probabilities(thetas, betas, alphas)
    raw = draw_categories(probabilities, rng) + index_base

    return ResponseMatrix(
        responses=raw.astype(
            label_dtype(probabilities.shape[2], index_base)
        ),
        n_categories=probabilities.shape[2],
        index_base=index_base,
    )


def to_dataframe(data: SimulatedDataset | ResponseMatrix) -> pd.DataFrame:
    """
    Convert simulated responses to a pandas DataFrame.

    Args:
        data: Simulated dataset or bare response matrix.

    Returns:
        DataFrame with one row per respondent and columns item_1..item_J.
    """
    matrix = data.responses if isinstance(data, SimulatedDataset) else data
    columns = [f"item_{j + 1}" for j in range(matrix.n_items)]
    df = pd.DataFrame(matrix.responses, columns=columns)
    df.index.name = "respondent"
    return df
