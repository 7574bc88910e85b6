"""Dense ranking of candidate signals.

Every rank produced here follows one convention: rank 1 is the worst value
in the candidate set, tied values share a rank and the next distinct value
takes the following integer (1, 1, 2, 3, ...). Ranks are therefore a gap-free
prefix of 1..k where k is the number of distinct values.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Sequence

import numpy as np


class Direction(str, Enum):
    """Which end of a signal's scale is the bad one."""

    HIGHER_IS_WORSE = "higher_is_worse"
    LOWER_IS_WORSE = "lower_is_worse"


class RankAggregator:
    """Rank-based aggregation for metrics with incompatible scales."""

    @staticmethod
    def dense_rank(values: Mapping[str, float], direction: Direction) -> dict[str, int]:
        """
        Dense-rank candidates by a single numeric value.

        Candidates are visited in (value, key) order so the result does not
        depend on the mapping's iteration order. The key never splits a tie.

        Args:
            values: Candidate identity -> raw value
            direction: Whether larger or smaller values are worse

        Returns:
            Candidate identity -> rank (1 = worst)

        Raises:
            ValueError: If any value is NaN
        """
        if not values:
            return {}

        keys = sorted(values, key=lambda k: (values[k], k))
        arr = np.asarray([values[k] for k in keys], dtype=float)
        if np.isnan(arr).any():
            raise ValueError("cannot rank NaN values")

        distinct, inverse = np.unique(arr, return_inverse=True)
        inverse = inverse.reshape(-1)
        if direction is Direction.HIGHER_IS_WORSE:
            ranks = len(distinct) - inverse
        else:
            ranks = inverse + 1

        return {key: int(rank) for key, rank in zip(keys, ranks)}

    @staticmethod
    def rank_sum(rank_maps: Sequence[Mapping[str, int]]) -> dict[str, int]:
        """
        Sum several rank assignments per candidate.

        Raises:
            ValueError: If the assignments do not cover the same candidates
        """
        if not rank_maps:
            return {}

        keys = set(rank_maps[0])
        for ranks in rank_maps[1:]:
            if set(ranks) != keys:
                raise ValueError("rank assignments cover different candidates")

        return {key: sum(ranks[key] for ranks in rank_maps) for key in keys}

    @classmethod
    def combine(cls, rank_maps: Sequence[Mapping[str, int]]) -> dict[str, int]:
        """Rank of ranks: dense rank of the per-candidate rank sum.

        Each component rank is 1 = worst, so the smallest sum is the worst
        composite.
        """
        return cls.dense_rank(cls.rank_sum(rank_maps), Direction.LOWER_IS_WORSE)
