"""
Sampling latent traits and item parameters from named distributions.

Any scipy.stats frozen distribution can be wrapped, plus mixtures for
multimodal ability populations.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

import numpy as np
from numpy.random import Generator
from numpy.typing import NDArray
from scipy import stats

from irt_simulation.core.utils import get_rng


class FrozenRV(Protocol):
    def rvs(
        self, size: Any, random_state: Any
    ) -> NDArray[np.floating[Any]]: ...
    def mean(self) -> float: ...


class Distribution(ABC):
    """Abstract base class for a statistical distribution."""

    @abstractmethod
    def sample(self, n: int, rng: Generator) -> NDArray[np.float64]:
        """
        Sample n values.

        Args:
            n: Number of samples.
            rng: Random number generator.

        Returns:
            Array of shape (n,) with sampled values.
        """
        ...

    @abstractmethod
    def mean(self) -> float: ...


@dataclass
class ScipyDistribution(Distribution):
    """
    Wrapper for any scipy.stats distribution.

    Examples:
        >>> dist = ScipyDistribution(stats.norm(loc=0, scale=1))
        >>> dist = ScipyDistribution(stats.lognorm(s=0.3, scale=1.0))
    """

    dist: FrozenRV

    def sample(self, n: int, rng: Generator) -> NDArray[np.float64]:
        samples: NDArray[np.float64] = np.atleast_1d(
            self.dist.rvs(size=n, random_state=rng)
        ).astype(np.float64)
        return samples

    def mean(self) -> float:
        return float(self.dist.mean())


@dataclass
class MixtureDistribution(Distribution):
    """
    Mixture of distributions with specified weights.

    Examples:
        >>> # Two ability groups, 60% low and 40% high
        >>> dist = MixtureDistribution(
        ...     components=[
        ...         ScipyDistribution(stats.norm(loc=-1, scale=0.5)),
        ...         ScipyDistribution(stats.norm(loc=1.5, scale=0.5)),
        ...     ],
        ...     weights=[0.6, 0.4],
        ... )
    """

    components: list[Distribution]
    weights: list[float]

    def __post_init__(self) -> None:
        if len(self.components) != len(self.weights):
            raise ValueError(
                "Number of components must match number of weights"
            )
        if any(w < 0 for w in self.weights):
            raise ValueError("Weights must be non-negative")
        if abs(sum(self.weights) - 1.0) > 1e-6:
            raise ValueError(f"Weights must sum to 1, got {sum(self.weights)}")

    def sample(self, n: int, rng: Generator) -> NDArray[np.float64]:
        assignments = rng.choice(len(self.components), size=n, p=self.weights)

        values = np.empty(n, dtype=np.float64)
        for k, component in enumerate(self.components):
            mask = assignments == k
            count = int(mask.sum())
            if count > 0:
                values[mask] = component.sample(count, rng)

        return values

    def mean(self) -> float:
        return sum(
            w * comp.mean()
            for w, comp in zip(self.weights, self.components, strict=True)
        )


####################################################################
# Registry
####################################################################


DistributionGenerator = Callable[..., Distribution]


class SamplerRegistry:
    def __init__(self) -> None:
        self._samplers: dict[str, DistributionGenerator] = {}

    def register(
        self, name: str
    ) -> Callable[[DistributionGenerator], DistributionGenerator]:
        def decorator(
            func: DistributionGenerator,
        ) -> DistributionGenerator:
            self._samplers[name] = func
            return func

        return decorator

    @property
    def names(self) -> list[str]:
        return sorted(self._samplers)

    def get_sampler(
        self, name: str, params: dict[str, float | None]
    ) -> Distribution:
        if name not in self._samplers:
            raise ValueError(
                f"Sampler {name} not registered. Available: {self.names}"
            )
        return self._samplers[name](**params)


registry = SamplerRegistry()


@registry.register("normal")
def normal(*, mean: float = 0.0, std: float = 1.0) -> ScipyDistribution:
    """Normal distribution."""
    return ScipyDistribution(stats.norm(loc=mean, scale=std))


@registry.register("log_normal")
def log_normal(
    *, meanlog: float = 0.0, sdlog: float = 1.0
) -> ScipyDistribution:
    """
    Log-normal distribution parameterized on the log scale.

    Args:
        meanlog: Mean of the underlying normal.
        sdlog: Standard deviation of the underlying normal.
    """
    return ScipyDistribution(stats.lognorm(s=sdlog, scale=np.exp(meanlog)))


@registry.register("uniform")
def uniform(*, low: float = -1.0, high: float = 1.0) -> ScipyDistribution:
    """Uniform distribution on [low, high]."""
    return ScipyDistribution(stats.uniform(loc=low, scale=high - low))


@registry.register("truncated_normal")
def truncated_normal(
    *,
    mean: float = 0.0,
    std: float = 1.0,
    lower: float | None = None,
    upper: float | None = None,
) -> ScipyDistribution:
    """
    Truncated normal distribution.

    Args:
        mean: Mean of the underlying normal distribution.
        std: Standard deviation of the underlying normal distribution.
        lower: Lower bound (None = unbounded).
        upper: Upper bound (None = unbounded).
    """
    a_std = (lower - mean) / std if lower is not None else -np.inf
    b_std = (upper - mean) / std if upper is not None else np.inf
    return ScipyDistribution(
        stats.truncnorm(a_std, b_std, loc=mean, scale=std)
    )


@registry.register("bimodal")
def bimodal(
    *,
    loc1: float,
    scale1: float,
    loc2: float,
    scale2: float,
    weight1: float,
) -> Distribution:
    """Mixture of two normals; weight2 = 1 - weight1."""
    return MixtureDistribution(
        components=[
            ScipyDistribution(stats.norm(loc=loc1, scale=scale1)),
            ScipyDistribution(stats.norm(loc=loc2, scale=scale2)),
        ],
        weights=[weight1, 1.0 - weight1],
    )


def draw_sample(
    n: int,
    distribution_name: str = "normal",
    distribution_params: dict[str, float | None] | None = None,
    rng: Generator | None = None,
) -> NDArray[np.float64]:
    """
    Sample values from a registered distribution.

    Args:
        n: Number of values.
        distribution_name: Name of the distribution to sample from.
        distribution_params: Parameter values to pass to the distribution.
        rng: Random number generator.

    Returns:
        Array of shape (n,) with sampled values.
    """
    if rng is None:
        rng = get_rng()

    if distribution_params is None:
        distribution_params = {}

    distribution = registry.get_sampler(
        distribution_name, dict(distribution_params)
    )

    return distribution.sample(n, rng)
