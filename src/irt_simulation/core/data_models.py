"""
Response table handed to an external IRT fitting library.

Rows are respondents, columns are items, and each cell holds an integer
category label. Labels start at ``index_base``: 1 in the conventional
simulator output, 0 after the shift most fitting libraries expect.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from irt_simulation.core.utils import label_dtype


@dataclass(frozen=True)
class ResponseMatrix:
    """
    Simulated categorical responses.

    Attributes:
        responses: Array of shape (n_respondents, n_items) with category
            labels in [index_base, index_base + n_categories).
        n_categories: Largest number of categories across items.
        index_base: Label of the lowest category (0 or 1).
    """

    responses: NDArray[np.signedinteger[Any]]
    n_categories: int
    index_base: int = 1

    def __post_init__(self) -> None:
        if self.responses.ndim != 2:
            raise ValueError(
                f"responses must be 2D, got shape {self.responses.shape}"
            )
        if self.n_categories < 2:
            raise ValueError(
                f"n_categories must be >= 2, got {self.n_categories}"
            )
        if self.index_base not in (0, 1):
            raise ValueError(
                f"index_base must be 0 or 1, got {self.index_base}"
            )
        if self.responses.size > 0:
            low = int(self.responses.min())
            high = int(self.responses.max())
            if low < self.index_base:
                raise ValueError(
                    f"Response values must be >= {self.index_base}, "
                    f"got min {low}"
                )
            if high >= self.index_base + self.n_categories:
                raise ValueError(
                    f"Response values must be < "
                    f"{self.index_base + self.n_categories}, got max {high}"
                )

    @property
    def n_respondents(self) -> int:
        """Number of respondents (rows)."""
        return self.responses.shape[0]

    @property
    def n_items(self) -> int:
        """Number of items (columns)."""
        return self.responses.shape[1]

    def category_counts(self, item_idx: int) -> NDArray[np.int64]:
        """
        Count responses in each category of an item.

        Args:
            item_idx: Index of the item.

        Returns:
            Array of shape (n_categories,); element k counts the category
            labelled ``index_base + k``.
        """
        item_responses = self.responses[:, item_idx].astype(np.int64)
        counts = np.bincount(
            item_responses - self.index_base, minlength=self.n_categories
        )
        return counts.astype(np.int64)

    def shift(self, index_base: int) -> "ResponseMatrix":
        """Return a copy labelled from ``index_base`` instead."""
        offset = index_base - self.index_base
        dtype = label_dtype(self.n_categories, index_base)
        return ResponseMatrix(
            responses=self.responses.astype(dtype) + offset,
            n_categories=self.n_categories,
            index_base=index_base,
        )
