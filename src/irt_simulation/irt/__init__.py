"""
IRT (Item Response Theory) module.

This module provides:
- The GPCM response simulator over (items x boundaries) parameter tables
- Item classes (Rasch, 2PL, 3PL, PCM, GPCM) with compute_probabilities
- Diagnostic utilities for checking simulated responses
"""

from irt_simulation.irt.diagnostics import (
    CategoryProbComparison,
    GoodnessOfFit,
    chi_square_goodness_of_fit,
    compare_category_proportions,
)
from irt_simulation.irt.gpcm import (
    category_probabilities,
    draw_categories,
    simulate,
)
from irt_simulation.irt.models import (
    GPCMItem,
    ItemModel,
    PartialCreditItem,
    RaschItem,
    ThreePLItem,
    TwoPLItem,
    items_from_matrix,
    sample_item_responses,
)

__all__ = [
    "CategoryProbComparison",
    "GPCMItem",
    "GoodnessOfFit",
    "ItemModel",
    "PartialCreditItem",
    "RaschItem",
    "ThreePLItem",
    "TwoPLItem",
    "category_probabilities",
    "chi_square_goodness_of_fit",
    "compare_category_proportions",
    "draw_categories",
    "items_from_matrix",
    "sample_item_responses",
    "simulate",
]
