"""
Item parameter sampling and config loading.

This module provides:
- Sampling of discriminations, boundaries and guessing parameters from
  the configured marginal distributions
- Conversion of matrix-form parameters into item model objects
- Config loading from YAML files using OmegaConf, and validated overrides
"""

from dataclasses import replace
from pathlib import Path

import numpy as np
from numpy.random import Generator
from omegaconf import OmegaConf

from irt_simulation.irt.models import (
    GPCMItem,
    ItemModel,
    PartialCreditItem,
    RaschItem,
    ThreePLItem,
    TwoPLItem,
)
from irt_simulation.synthetic_data.config import GenerationConfig
from irt_simulation.synthetic_data.data_models import SampledParameters
from irt_simulation.synthetic_data.sampling import draw_sample

# Models whose discrimination is fixed at 1
UNIT_DISCRIMINATION_MODELS = ("rasch", "pcm")

DISTRIBUTION_KEYS = (
    "ability",
    "item_parameters.discrimination",
    "item_parameters.threshold",
    "item_parameters.guessing",
)


def sample_item_parameters(
    config: GenerationConfig,
    rng: Generator,
) -> SampledParameters:
    """Sample item parameters for every item in the test.

    Args:
        config: Generation configuration.
        rng: Random number generator.

    Returns:
        SampledParameters with alphas (n_items,), betas
        (n_items, n_categories - 1) and guessing (n_items,).
    """
    n_items = config.n_items
    n_boundaries = config.n_categories - 1
    item_config = config.item_parameters

    if config.model in UNIT_DISCRIMINATION_MODELS:
        alphas = np.ones(n_items, dtype=np.float64)
    else:
        alphas = draw_sample(
            n=n_items,
            distribution_name=item_config.discrimination.distribution,
            distribution_params=item_config.discrimination.params,
            rng=rng,
        )

    betas = draw_sample(
        n=n_items * n_boundaries,
        distribution_name=item_config.threshold.distribution,
        distribution_params=item_config.threshold.params,
        rng=rng,
    ).reshape((n_items, n_boundaries))
    if item_config.ordered_thresholds:
        betas = np.sort(betas, axis=1)

    if config.model == "3pl":
        guessing = draw_sample(
            n=n_items,
            distribution_name=item_config.guessing.distribution,
            distribution_params=item_config.guessing.params,
            rng=rng,
        )
    else:
        guessing = np.zeros(n_items, dtype=np.float64)

    return SampledParameters(alphas=alphas, betas=betas, guessing=guessing)


def build_items(parameters: SampledParameters, model: str) -> list[ItemModel]:
    """Turn matrix-form parameters into item model objects.

    Args:
        parameters: Sampled item parameters.
        model: One of "rasch", "2pl", "3pl", "pcm", "gpcm".

    Returns:
        One item object per row of ``parameters``.

    Raises:
        ValueError: If the model is unknown or a dichotomous model is given
            more than one boundary per item.
    """
    if model in ("rasch", "2pl", "3pl") and parameters.n_categories != 2:
        raise ValueError(
            f"{model} items need exactly one difficulty, "
            f"got {parameters.n_categories - 1} boundaries"
        )

    items: list[ItemModel] = []
    for j in range(parameters.n_items):
        alpha = float(parameters.alphas[j])
        thresholds = tuple(float(b) for b in parameters.betas[j])
        item: ItemModel
        if model == "rasch":
            item = RaschItem(item_id=j, difficulty=thresholds[0])
        elif model == "2pl":
            item = TwoPLItem(
                item_id=j, discrimination=alpha, difficulty=thresholds[0]
            )
        elif model == "3pl":
            item = ThreePLItem(
                item_id=j,
                discrimination=alpha,
                difficulty=thresholds[0],
                guessing=float(parameters.guessing[j]),
            )
        elif model == "pcm":
            item = PartialCreditItem(item_id=j, thresholds=thresholds)
        elif model == "gpcm":
            item = GPCMItem(
                item_id=j, discrimination=alpha, thresholds=thresholds
            )
        else:
            raise ValueError(f"Unknown model: {model}")
        items.append(item)

    return items


def load_config(yaml_path: Path) -> GenerationConfig:
    """Load and validate a generation config from YAML.

    Args:
        yaml_path: Path to YAML config file

    Returns:
        Validated GenerationConfig

    Raises:
        ValueError: If the config values are invalid
        FileNotFoundError: If yaml_path doesn't exist
    """
    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    schema = OmegaConf.structured(GenerationConfig)
    user_config = OmegaConf.load(yaml_path)
    config = OmegaConf.merge(schema, user_config)

    # Dict merges are unions; a distribution given in YAML replaces the
    # default one so parameters of different families don't mix
    for key in DISTRIBUTION_KEYS:
        node = OmegaConf.select(user_config, key)
        if node is not None:
            OmegaConf.update(config, key, node, merge=False)

    result = OmegaConf.to_object(config)
    assert isinstance(result, GenerationConfig)

    return result


def override_config(
    config: GenerationConfig,
    seed: int | None = None,
    n_respondents: int | None = None,
    index_base: int | None = None,
) -> GenerationConfig:
    """Return a copy of ``config`` with the given fields replaced.

    ``None`` keeps the existing value. The copy runs the config checks
    again, so e.g. ``n_respondents=0`` raises ValueError.
    """
    overrides: dict[str, int] = {}
    if seed is not None:
        overrides["random_seed"] = seed
    if n_respondents is not None:
        overrides["n_respondents"] = n_respondents
    if index_base is not None:
        overrides["index_base"] = index_base

    return replace(config, **overrides)
