from dataclasses import dataclass, field

from omegaconf import MISSING

SUPPORTED_MODELS = ("rasch", "2pl", "3pl", "pcm", "gpcm")
DICHOTOMOUS_MODELS = ("rasch", "2pl", "3pl")
MAX_CATEGORIES = 20


@dataclass
class DistributionConfig:
    """Configuration for a single parameter's marginal distribution.

    Attributes:
        distribution: Registered distribution name ("normal", "log_normal",
            "uniform", "truncated_normal", "bimodal").
        params: Keyword parameters for the distribution.
    """

    distribution: str = MISSING
    params: dict[str, float | None] = MISSING


def _default_ability() -> DistributionConfig:
    return DistributionConfig(
        distribution="normal", params={"mean": 0.0, "std": 1.0}
    )


def _default_discrimination() -> DistributionConfig:
    """Log-normal slopes, positive and centred near 1."""
    return DistributionConfig(
        distribution="log_normal",
        params={"meanlog": 0.0, "sdlog": 0.3},
    )


def _default_threshold() -> DistributionConfig:
    return DistributionConfig(
        distribution="normal",
        params={"mean": 0.0, "std": 1.0},
    )


def _default_guessing() -> DistributionConfig:
    return DistributionConfig(
        distribution="uniform",
        params={"low": 0.1, "high": 0.3},
    )


@dataclass
class ItemParametersConfig:
    """Distributions for item parameters.

    Attributes:
        discrimination: Distribution of slopes (ignored for Rasch and PCM).
        threshold: Distribution of category boundaries / difficulties.
        guessing: Distribution of lower asymptotes (3PL only).
        ordered_thresholds: Sort each item's boundaries ascending.
    """

    discrimination: DistributionConfig = field(
        default_factory=_default_discrimination
    )
    threshold: DistributionConfig = field(default_factory=_default_threshold)
    guessing: DistributionConfig = field(default_factory=_default_guessing)
    ordered_thresholds: bool = True


@dataclass
class GenerationConfig:
    """Complete configuration for generating a simulated dataset."""

    n_respondents: int
    n_items: int
    n_categories: int

    # One of SUPPORTED_MODELS
    model: str = "gpcm"

    # Reproducibility; None draws fresh entropy
    random_seed: int | None = None

    # Label of the lowest category in the output
    index_base: int = 1

    ability: DistributionConfig = field(default_factory=_default_ability)
    item_parameters: ItemParametersConfig = field(
        default_factory=ItemParametersConfig
    )

    def __post_init__(self) -> None:
        if self.n_respondents < 1:
            raise ValueError("Must have at least 1 respondent")
        if self.n_items < 1:
            raise ValueError("Must have at least 1 item")
        if not (2 <= self.n_categories <= MAX_CATEGORIES):
            raise ValueError(
                f"Must have between 2 and {MAX_CATEGORIES} categories per item"
            )
        if self.model not in SUPPORTED_MODELS:
            raise ValueError(
                f"Unknown model: {self.model}. "
                f"Supported models: {list(SUPPORTED_MODELS)}"
            )
        if self.model in DICHOTOMOUS_MODELS and self.n_categories != 2:
            raise ValueError(
                f"{self.model} items are dichotomous, "
                f"got n_categories={self.n_categories}"
            )
        if self.index_base not in (0, 1):
            raise ValueError(
                f"index_base must be 0 or 1, got {self.index_base}"
            )

    @property
    def is_dichotomous(self) -> bool:
        return self.model in DICHOTOMOUS_MODELS
