"""
Core shared types and utilities for the IRT simulation package.

This module provides the pieces used by both the item response models
and the synthetic data generation layer: random number generators,
the numerically stable softmax, the response matrix container and the
simulator's error type.
"""

from irt_simulation.core.data_models import ResponseMatrix
from irt_simulation.core.errors import InvalidDimensions
from irt_simulation.core.utils import get_rng, label_dtype, softmax

__all__ = [
    "InvalidDimensions",
    "ResponseMatrix",
    "get_rng",
    "label_dtype",
    "softmax",
]
